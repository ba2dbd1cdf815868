"""
Slotargs command layer: command nodes, the application aggregate and the dispatcher.

What this module provides
- Command: one parsing scope (the main command or a named subcommand) bundling an
  option table and an ordered list of positionals (cardinals).
- Application: the root aggregate; owns the main command, the subcommands, the
  program metadata and the routing table from every command name/short to its node.
- invoke(application, prompt): host wrapper mapping outcomes to exit statuses.

Parse pipeline (Application.parse)
1. Tokenize the prompt (Unset -> sys.argv[1:], str -> shlex.split, iterable of str).
2. Split: the first token naming a known command splits the vector into the main
   segment (before it) and the subcommand segment (after it).
3. Create the Outcome; help texts are rendered now, before any slot is touched.
4. Intercept: literal -h/--help anywhere (scoped by the split), then literal
   -V/--version before the split.
5. Consume the main segment, then the subcommand segment (Command._consume).
6. Validate the main command, then the subcommand (Command._check).
7. Zero-args rule: with subcommands declared, none matched is an error; without any, an
   empty vector is. allow_zero_args on the resolved command lifts it.

Every fault leaving parse() carries 'scope' (None or the subcommand name) and 'outcome',
so fault.outcome.explain(fault) is always available.

Quick start
    from slotargs import Application, Command, Option, Cardinal, Switch, Scalar, Vector, invoke

    port, paths = Scalar("u16", 8080), Vector("path")
    app = (
        Application("serve", "0.1.0", descr="static file server")
        .opt(Option("port", port, "-p", "--port", descr="listening port"))
        .args(Cardinal("PATHS", paths, optional=True))
    )
    outcome = invoke(app, "-p 80 ./public")
"""
import difflib
import functools
import logging
import operator
import re
import shlex
import sys
from collections.abc import Iterable
from types import MappingProxyType

from rich.text import Text

from .arguments import Option, Cardinal
from .distribution import distribute
from .faults import *
from .outcomes import Outcome, ControlFlow, HelpRequested, VersionRequested
from .slots import Switch
from .utils import *

logger = logging.getLogger(__name__)


class CommandType(type):
    """
    Metaclass giving commands the same introspection surface as argument declarations.

    - __typename__ derived from the class name, used in construction errors.
    - Stable __repr__/__rich_repr__ over __displayable__ (or __introspectable__).
    - Read-only mirrored properties for every name in __introspectable__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class _Context:
    """
    Per-parse state threaded through the dispatcher.

    - outcome: the parse handle (for control-flow requests).
    - offset: 1-based position of the segment's first token in the whole vector.
    - signals: implicit option -> factory of the control-flow request it triggers.
    - commands: names of the subcommands (for "did you mean" on stray tokens).
    """
    __slots__ = ("outcome", "offset", "signals", "commands")

    def __init__(self, outcome, offset, signals, commands=()):
        self.outcome = outcome
        self.offset = offset
        self.signals = signals
        self.commands = tuple(commands)


def _sanitize_word(cls, field, word, /):
    if not isinstance(word, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif not (word := word.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    elif re.search(r"\s", word):
        raise ValueError(f"{cls.__typename__} {field!r} cannot contain whitespace")
    elif word.startswith("-"):
        raise ValueError(f"{cls.__typename__} {field!r} cannot start with a dash")
    return word


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr)


def _sanitize_pairs(cls, field, pairs, /):
    """Iterable of (str, str) pairs, stabilized to a tuple (authors, addresses)."""
    if not isinstance(pairs, Iterable) or isinstance(pairs, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of pairs of strings")
    result = []
    for pair in pairs:
        if not isinstance(pair, tuple | list) or len(pair) != 2 or not all(isinstance(item, str) for item in pair):
            raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of pairs of strings")
        result.append(tuple(item.strip() for item in pair))
    return tuple(result)


def _tokenize(prompt, /):
    if prompt is Unset:
        return tuple(sys.argv[1:])
    elif isinstance(prompt, str):
        return tuple(shlex.split(prompt))
    elif isinstance(prompt, Iterable):
        tokens = tuple(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


def _hint(word, candidates, fallback, /):
    if suggestions := difflib.get_close_matches(word, candidates, 1):
        return "did you mean %r? %s" % (suggestions[0], fallback)
    return fallback


class Command(metaclass=CommandType):
    """
    One parsing scope: the main command (name None) or a named subcommand.

    Options are keyed by sort key; a second table maps every literal alias to its sort
    key. Cardinals keep declaration order, which is their distribution precedence.
    Every command carries the implicit -h/--help option.
    """

    __introspectable__ = (
        "name",
        "short",
        "descr",
        "sort_key",
        "allow_zero_args",
        "options",
        "cardinals",
    )
    __displayable__ = (
        "name",
        "short",
        "descr",
        "allow_zero_args",
        "cardinals",
    )

    def __init__(self, name=Unset, /, short=Unset, *, descr=Unset, sort_key=Unset, allow_zero_args=False):
        cls = type(self)
        self._name = _sanitize_word(cls, "name", name) if name is not Unset else None
        if short is not Unset and self._name is None:
            raise TypeError(f"{cls.__typename__} 'short' needs a command name")
        self._short = _sanitize_word(cls, "short", short) if short is not Unset else None
        if self._short is not None and self._short == self._name:
            raise ValueError(f"{cls.__typename__} 'short' cannot repeat the name")
        self._descr = _sanitize_descr(cls, descr)
        if not isinstance(sort_key, str | Unset):
            raise TypeError(f"{cls.__typename__} 'sort_key' must be a string")
        self._sort_key = coalesce(sort_key, self._name or "")
        self._allow_zero_args = bool(allow_zero_args)

        self._options = {}
        self._aliases = {}
        self._cardinals = []
        self._help = Option(
            "help", Switch(), "-h", "--help",
            optional=True, descr="Prints help information", sort_key="__help__",
        )
        self.opt(self._help)

    @property
    def aliases(self):
        """Read-only alias table: literal alias -> option."""
        return MappingProxyType({alias: self._options[key] for alias, key in self._aliases.items()})

    def opt(self, option, /):
        """Add an option to this scope; duplicate sort keys or aliases raise ValueError."""
        if not isinstance(option, Option):
            raise TypeError(f"{type(self).__typename__} opt() argument must be an option")
        if option.sort_key in self._options:
            raise ValueError(f"{type(self).__typename__} option {option.sort_key!r} is already in use")
        for alias in option.aliases:
            if alias in self._aliases:
                raise ValueError(f"{type(self).__typename__} alias {alias!r} is already in use")
        self._options[option.sort_key] = option
        self._aliases.update(dict.fromkeys(option.aliases, option.sort_key))
        return self

    def args(self, cardinal, /):
        """Append a positional; names are unique and at most one may be unbounded."""
        if not isinstance(cardinal, Cardinal):
            raise TypeError(f"{type(self).__typename__} args() argument must be a cardinal")
        if any(other.name == cardinal.name for other in self._cardinals):
            raise ValueError(f"{type(self).__typename__} cardinal {cardinal.name!r} is already in use")
        if cardinal.arity is None and any(other.arity is None for other in self._cardinals):
            raise ValueError(f"{type(self).__typename__} can only have one unbounded cardinal")
        self._cardinals.append(cardinal)
        return self

    def _lookup(self, alias, token, position, /):
        try:
            return self._options[self._aliases[alias]]
        except KeyError:
            where = "in %r " % token if alias != token else ""
            raise UnknownSwitchError(
                "unknown option %r %sat %s position" % (alias, where, ordinal(position)),
                title="unknown option",
                code=FaultCode.UNKNOWN_SWITCH,
                hint=_hint(alias, self._aliases.keys(), "run with --help to see all options"),
                name=alias,
                token=token,
                suggestions=difflib.get_close_matches(alias, self._aliases.keys(), 5),
            ) from None

    def _signal(self, option, context, /):
        if (signal := context.signals.get(option)) is not None:
            logger.debug("%r resolved to a control-flow request", option.name)
            raise signal()

    def _feed(self, option, alias, tokens, index, position, /):
        """Hand one resolved option its value; returns how many tokens were used after the switch."""
        if option.boolean:
            option.parse("")
            return 0
        if index + 1 >= len(tokens):
            raise MissingValueError(
                "option %r at %s position requires a value" % (alias, ordinal(position)),
                title="missing option value",
                code=FaultCode.OPTION_VALUE_REQUIRED,
                hint="pass a value after %r (for example: %s <%s>)" % (alias, alias, option.name),
                name=option.name,
                token=tokens[index],
            )
        option.parse(tokens[index + 1])
        return 1

    def _consume(self, tokens, context, /):
        """
        Walk one segment once, feeding options and collecting bare tokens.

        - "--name": long alias; "-x": short alias; "-abc": cluster of short aliases where
          every flag but the last must be boolean and the last may take the next token.
        - anything else (including "-" and "--") is buffered for the positionals.
        """
        buffer = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            position = context.offset + index

            if token.startswith("--") and token != "--" or token.startswith("-") and len(token) == 2 and token != "--":
                logger.debug("%r at %s position is an option", token, ordinal(position))
                option = self._lookup(token, token, position)
                self._signal(option, context)
                index += 1 + self._feed(option, token, tokens, index, position)
            elif token.startswith("-") and len(token) > 2:
                logger.debug("%r at %s position is a cluster of short options", token, ordinal(position))
                flags = ["-" + character for character in token[1:]]
                options = [self._lookup(flag, token, position) for flag in flags]
                for flag, option in zip(flags[:-1], options[:-1]):
                    if not option.boolean:
                        raise MissingValueError(
                            "option %r in %r at %s position requires a value, so it must come last" % (
                                flag, token, ordinal(position)
                            ),
                            title="missing option value",
                            code=FaultCode.OPTION_VALUE_REQUIRED,
                            hint="move %r to the end of the cluster or pass it separately" % flag,
                            name=option.name,
                            token=token,
                        )
                for option in options:
                    self._signal(option, context)
                for option in options[:-1]:
                    option.parse("")
                index += 1 + self._feed(options[-1], flags[-1], tokens, index, position)
            else:
                buffer.append((position, token))
                index += 1

        if buffer and self._name is None and not self._cardinals and context.commands:
            position, token = buffer[0]
            raise UndefinedTokenError(
                "undefined command or token %r at %s position" % (token, ordinal(position)),
                title="undefined token",
                code=FaultCode.UNDEFINED_TOKEN,
                hint=_hint(token, context.commands, "run with --help to see the available commands"),
                token=token,
                suggestions=difflib.get_close_matches(token, context.commands, 5),
            )

        logger.debug("distributing %s over %s", pluralize("bare token", len(buffer)), pluralize("cardinal", len(self._cardinals)))
        distribute(self._cardinals, (token for _, token in buffer))

    def _check(self):
        for option in self._options.values():
            option.check()
        for cardinal in self._cardinals:
            cardinal.check()


class Application(metaclass=CommandType):
    """
    Root aggregate: program metadata, the main command and its subcommands.

    Lifecycle
    - Build once (opt/args/cmd chain and return self), parse once. A second parse()
      raises RuntimeError: slots and occurrence counts were already consumed.
    - The main command carries -h/--help and -V/--version.

    Rendering
    - colorful applies the style palette; fancy wraps help and errors in a panel.
    - __styles__ and __codes__ in __main__ override palette entries and fault labels.
    """

    __introspectable__ = (
        "name",
        "version",
        "authors",
        "addresses",
        "colorful",
        "fancy",
    )

    def __init__(
            self,
            name,
            /,
            version=Unset,
            *,
            descr=Unset,
            authors=(),
            addresses=(),
            allow_zero_args=False,
            colorful=True,
            fancy=False,
    ):
        cls = type(self)
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
        self._name = name

        if not isinstance(version, str | Unset):
            raise TypeError(f"{cls.__typename__} 'version' must be a string")
        self._version = (version.strip() or None) if isinstance(version, str) else None
        self._authors = _sanitize_pairs(cls, "authors", authors)
        self._addresses = _sanitize_pairs(cls, "addresses", addresses)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        self._main = Command(descr=descr, allow_zero_args=allow_zero_args)
        self._version_option = Option(
            "version", Switch(), "-V", "--version",
            optional=True, descr="Prints version information", sort_key="__version__",
        )
        self._main.opt(self._version_option)
        self._commands = {None: self._main}
        self._routes = {}
        self._parsed = False

    @property
    def descr(self):
        return self._main.descr

    @property
    def main(self):
        return self._main

    @property
    def commands(self):
        """Read-only map of command name -> node; None is the main command."""
        return MappingProxyType(self._commands)

    def opt(self, option, /):
        self._main.opt(option)
        return self

    def args(self, cardinal, /):
        self._main.args(cardinal)
        return self

    def cmd(self, command, /):
        """Register a subcommand; its name and short must be unique across commands."""
        if not isinstance(command, Command):
            raise TypeError(f"{type(self).__typename__} cmd() argument must be a command")
        if command.name is None:
            raise ValueError(f"{type(self).__typename__} subcommands must be named")
        for word in (command.name, command.short):
            if word is not None and word in self._routes:
                raise ValueError(f"{type(self).__typename__} command {word!r} is already in use")
        self._commands[command.name] = command
        self._routes[command.name] = command.name
        if command.short is not None:
            self._routes[command.short] = command.name
        return self

    def _split(self, tokens, /):
        for index, token in enumerate(tokens):
            if (name := self._routes.get(token)) is not None:
                logger.debug("%r at %s position selects command %r", token, ordinal(index + 1), name)
                return index, name
        return None, None

    def _intercept(self, tokens, split, current, outcome, /):
        for index, token in enumerate(tokens):
            if token in ("-h", "--help"):
                scope = current if split is not None and index > split else None
                raise HelpRequested(outcome, scope)
        for index, token in enumerate(tokens):
            if token in ("-V", "--version") and (split is None or index < split):
                raise VersionRequested(outcome)

    def _zero(self, tokens, command, /):
        routed = len(self._commands) > 1
        if self._commands[command].allow_zero_args:
            return
        if not (routed and command is None or not routed and not tokens):
            return
        what = "option/command" if routed else "option"
        raise MissingInputError(
            "%s missing" % what,
            title="missing input",
            code=FaultCode.MISSING_INPUT,
            hint="run '%s --help' to see the usage" % " ".join(
                word for word in (self._name, command) if word is not None
            ),
        )

    def parse(self, tokens=Unset, /):
        """
        Parse tokens into the bound slots and return the Outcome.

        Raises HelpRequested/VersionRequested (ControlFlow) for help and version, and
        ParseError/ValidationError (CommandException) for user errors; see the module
        docstring for the pipeline.
        """
        if self._parsed:
            raise RuntimeError("an application parses once; build a new one for another run")
        tokens = _tokenize(tokens)
        self._parsed = True
        split, current = self._split(tokens)
        outcome = Outcome(self, current, tokens)
        main = tokens if split is None else tokens[:split]
        segment = () if split is None else tokens[split + 1:]
        logger.debug("main segment %r, %r segment %r", main, current, segment)

        self._intercept(tokens, split, current, outcome)

        commands = tuple(name for name in self._commands if name is not None)
        scope = None
        try:
            self._main._consume(main, _Context(outcome, 1, {
                self._main._help: lambda: HelpRequested(outcome, None),
                self._version_option: lambda: VersionRequested(outcome),
            }, commands))
            if current is not None:
                scope = current
                node = self._commands[current]
                node._consume(segment, _Context(outcome, split + 2, {
                    node._help: lambda: HelpRequested(outcome, current),
                }))

            scope = None
            self._main._check()
            if current is not None:
                scope = current
                self._commands[current]._check()

            scope = current
            self._zero(tokens, current)
        except CommandException as fault:
            raise fault.__replace__(scope=scope, outcome=outcome) from None
        return outcome


def invoke(application, prompt=Unset, /):
    """
    Host wrapper: parse and return the Outcome, or print and exit.

    - help/version: printed to stdout, exit status 0.
    - parse/validation faults: error plus contextual help on stderr, exit status 1.
    """
    if not isinstance(application, Application):
        raise TypeError("invoke() argument must be an application")
    try:
        return application.parse(prompt)
    except ControlFlow as flow:
        trigger(flow, colorful=application.colorful, fancy=application.fancy)
    except CommandException as fault:
        trigger(fault, prog=application.name, colorful=application.colorful, fancy=application.fancy)


__all__ = (
    "Command",
    "Application",
    "invoke",
)

del CommandType
