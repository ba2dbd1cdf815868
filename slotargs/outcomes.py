"""
Parse outcomes: the success handle and the control-flow requests.

- Outcome: returned by Application.parse on success and attached to every fault and
  control-flow request. It snapshots the process environment at parse time and holds the
  help renderables of every command, built before any slot was touched (so help shows the
  declared defaults).
- ControlFlow: expected terminations that are not errors.
  • HelpRequested(scope): -h/--help; scope is None (main) or a subcommand name.
  • VersionRequested: -V/--version (main scope only).
  Both print to stdout and exit with status 0 when triggered.
"""
import os
import sys
import tempfile
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from . import render

console = Console()


def _snapshot(reader):
    try:
        return reader() or None
    except OSError:
        return None


def _program():
    # the running program, not the interpreter
    return os.path.abspath(sys.argv[0]) if sys.argv and sys.argv[0] else None


def _home():
    home = os.path.expanduser("~")
    return home if home != "~" else None


class Outcome:
    """
    Handle over one finished (or interrupted) parse.

    Attributes
    - name, version ("name version"), descr, authors, addresses: application metadata.
    - command: the matched subcommand name, or None for the main command.
    - arguments: the raw tokens (len(outcome.arguments) is the argument count).
    - cwd, home, executable, temp: environment snapshots (None when unavailable).
    """

    def __init__(self, application, command, tokens, /):
        self._name = application.name
        self._version = render.versioner(application)
        self._descr = application.descr
        self._authors = application.authors
        self._addresses = application.addresses
        self._command = command
        self._arguments = tuple(tokens)
        self._cwd = _snapshot(os.getcwd)
        self._home = _home()
        self._executable = _program()
        self._temp = _snapshot(tempfile.gettempdir)
        self._renderables = MappingProxyType({
            name: render.helper(application, name) for name in application.commands
        })

    name = property(lambda self: self._name)
    version = property(lambda self: self._version)
    descr = property(lambda self: self._descr)
    authors = property(lambda self: self._authors)
    addresses = property(lambda self: self._addresses)
    command = property(lambda self: self._command)
    arguments = property(lambda self: self._arguments)
    cwd = property(lambda self: self._cwd)
    home = property(lambda self: self._home)
    executable = property(lambda self: self._executable)
    temp = property(lambda self: self._temp)

    def renderable(self, command=None, /):
        """Rich renderable of the help of command (KeyError when unknown)."""
        return self._renderables[command]

    def help(self, command=None, /):
        """Plain help text of command (None is the main command)."""
        return render.export(self._renderables[command])

    def error(self, fault, /):
        return f"error:\n  {fault}\n"

    def explain(self, fault, /):
        """Error text followed by the help of the command the fault belongs to."""
        return self.error(fault) + "\n" + self.help(getattr(fault, "scope", None))

    def __repr__(self):
        return f"outcome(name={self._name!r}, command={self._command!r}, arguments={list(self._arguments)!r})"


class ControlFlow(Exception):
    """Base of help/version requests; carries the outcome and rendering options."""

    def __init__(self, outcome, /, **options):
        super().__init__(outcome)
        self.outcome = outcome
        self.options = MappingProxyType(options)

    @property
    def text(self):
        raise NotImplementedError

    def __str__(self):
        return self.text

    def __trigger__(self):
        console.print(self)
        sys.exit(0)


class HelpRequested(ControlFlow):
    def __init__(self, outcome, scope=None, /, **options):
        super().__init__(outcome, **options)
        self.scope = scope

    @property
    def text(self):
        return self.outcome.help(self.scope)

    def __rich__(self):
        return self.outcome.renderable(self.scope)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.outcome, self.scope, **{**self.options, **overrides})


class VersionRequested(ControlFlow):
    @property
    def text(self):
        return self.outcome.version

    def __rich__(self):
        return Text(self.outcome.version)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.outcome, **{**self.options, **overrides})


__all__ = (
    "Outcome",
    "ControlFlow",
    "HelpRequested",
    "VersionRequested",
)
