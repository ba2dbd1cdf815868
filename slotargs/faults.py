"""
Slotargs faults (parse and validation errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing error, grouped by domain.
- CommandException: base type carrying a message plus read-only options; knows how to
  render itself through rich and how to terminate a CLI host (exit status 1).
- ParseError / ValidationError: the two user-facing families.
  • ParseError: the tokens themselves are wrong (unknown option, missing value,
    malformed value, positional overflow, stray bare token).
  • ValidationError: the tokens were well-formed but required data is missing or an
    occurrence policy was violated.
- trigger(): central entry point to surface a fault (or a control-flow outcome).

UX goals
- Position-first messages where the token index is known ("at third position").
- Every message names the option/positional and quotes the raw token.
- Lowercased tone, one sentence, one hint; styling configurable via __styles__ in __main__.

Integration
- The engine raises; Application.parse re-issues every fault with 'scope' (the command
  whose segment failed) and 'outcome' (the parse handle, for contextual help).
- invoke() catches and calls trigger(fault, **rendering) which prints and exits.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (111xx)
      • UNDEFINED_TOKEN
    - switches (112xx)
      • UNKNOWN_SWITCH, OPTION_VALUE_REQUIRED, MALFORMED_VALUE
    - cardinals (113xx)
      • UNNEEDED_CARDINALS, MISSING_CARDINALS
    - occurrences (121xx)
      • DUPLICATED_SWITCH, EXCESS_OCCURRENCES, COUNT_MISMATCH
    - requirements (122xx)
      • MISSING_VALUE, MISSING_INPUT

    the 11xxx block is for parse errors, the 12xxx block for validation errors.
    """
    # --- routing (11xxx) ---
    UNDEFINED_TOKEN       = 11101

    # --- switches (11xxx) ---
    UNKNOWN_SWITCH        = 11201
    OPTION_VALUE_REQUIRED = 11202
    MALFORMED_VALUE       = 11203

    # --- cardinals (11xxx) ---
    UNNEEDED_CARDINALS    = 11301
    MISSING_CARDINALS     = 11302

    # --- occurrences (12xxx) ---
    DUPLICATED_SWITCH     = 12101
    EXCESS_OCCURRENCES    = 12102
    COUNT_MISMATCH        = 12103

    # --- requirements (12xxx) ---
    MISSING_VALUE         = 12201
    MISSING_INPUT         = 12202

    def normalize(self):
        """
        return a host-normalized label for this code.

        a __codes__ mapping in __main__ may override the numeric id; otherwise the
        numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base of every user-facing error.

    options (all optional, read-only)
    - title, code, hint: rendering header and footer.
    - name, token: the option/positional and the raw token involved.
    - scope: None for the main command, otherwise the subcommand name.
    - outcome: the parse handle (contextual help lives there).
    - prog, colorful, fancy: rendering flags merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    @property
    def name(self):
        return self.options.get("name")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def scope(self):
        return self.options.get("scope")

    @property
    def outcome(self):
        return self.options.get("outcome")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # pinky title

            # body
            "error-message": "#C8C8D0",  # soft gray message
            "hint-arrow": "#9CE19C dim",  # green arrow
            "hint": "italic #9CE19C",  # green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", self.options.get("prog") or getattr(self.outcome, "name", ""))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " - ",
            text(code.normalize() if code is not None else "?", "code"),
            " | ",
            text(self.options.get("title", type(self).__name__).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" -> ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        console.print(self)
        if self.outcome is not None:
            console.print()
            console.print(self.outcome.renderable(self.scope))
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replacement = type(self)(self.message, **{**self.options, **overrides})
        replacement.__traceback__ = self.__traceback__
        return replacement


class ParseError(CommandException): ...
class UnknownSwitchError(ParseError): ...
class MissingValueError(ParseError): ...
class MalformedValueError(ParseError): ...
class UnneededCardinalsError(ParseError): ...
class UndefinedTokenError(ParseError): ...


class ValidationError(CommandException): ...
class MissingError(ValidationError): ...
class MissingCardinalsError(ValidationError): ...
class DuplicatedSwitchError(ValidationError): ...
class ExcessOccurrenceError(ValidationError): ...
class CountMismatchError(ValidationError): ...
class MissingInputError(ValidationError): ...


def trigger(fault, /, **options):
    """
    surface a fault (or a control-flow outcome) with the given rendering options.

    contract
    - fault must provide __trigger__ and __replace__ (CommandException and ControlFlow do).
    - options are merged via __replace__(**options) before __trigger__() runs.
    - __trigger__ prints through rich and terminates the process (status 1 for faults,
      status 0 for help/version).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "ParseError",
    "UnknownSwitchError",
    "MissingValueError",
    "MalformedValueError",
    "UnneededCardinalsError",
    "UndefinedTokenError",
    "ValidationError",
    "MissingError",
    "MissingCardinalsError",
    "DuplicatedSwitchError",
    "ExcessOccurrenceError",
    "CountMismatchError",
    "MissingInputError",
    "FaultCode",
    "trigger",
)
