"""
Slotargs utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the argument, slot and command layers so they agree on
  "not provided" semantics, read-only introspection and message wording.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided", distinct from None (None is a real
    value for optional slots and help texts).
  • Falsey, printable as "Unset", sealed against subclassing.

- coalesce(value, default=None)
  • Materialize Unset into a concrete default; None/0/""/[] are kept as given.

- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated accessors (clean tracebacks and reprs).

- mirror("attr")
  • Read-only property over self._attr; containers are handed out as fresh copies so
    callers cannot reach into an option table through its public view.

- pluralize(word, count)
  • Tiny English pluralizer for count-bearing messages ("1 value", "3 values").

- ordinal(number)
  • 1-based position labels ("first", "third", "12th") for position-first messages.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> pluralize("value", 2)
    '2 values'
    >>> ordinal(3)
    'third'
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for arguments that were not provided.

    Characteristics
    - bool(Unset) is False, yet Unset is neither None nor 0.
    - repr(Unset) == "Unset".
    - UnsetType() always returns the same instance and cannot be subclassed.
    """

    def __or__(self, other, /):
        # PEP 604 unions in isinstance checks, e.g. isinstance(x, str | Unset)
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Falsey values are preserved: coalesce(None, 1) is None, coalesce("", "x") == "".
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or build a decorator that does it.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name)           -> decorator

    Raises TypeError for wrong arity, non-callables, non-string names, and callables
    whose names cannot be updated (most builtins).
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _detach(object):
    # Fresh containers all the way down; scalars and slots pass through untouched.
    if isinstance(object, Sequence) and not isinstance(object, str | tuple):
        return list(map(_detach, object))
    elif isinstance(object, tuple):
        return tuple(map(_detach, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_detach, object.values())))
    elif isinstance(object, Set):
        return set(map(_detach, object))
    return object


def mirror(name, /):
    """
    Read-only property exposing the private field "_{name}".

    Container values are copied on every read (see _detach), so mutating the result
    never mutates the owner.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(word, count, /):
    """
    Prefix word with count and pluralize it when count != 1.

    Only the regular English rules needed by messages are covered
    (s/sh/ch/x/z -> +es, consonant+y -> -ies, everything else -> +s).
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    if count == 1 or not word:
        return f"{count} {word}"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        plural = word + "es"
    elif word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        plural = word[:-1] + "ies"
    else:
        plural = word + "s"
    return f"{count} {plural}"


@functools.cache
def ordinal(number, /):
    """
    Human-friendly ordinal for a 1-based position.

    1..10 are words ("first".."tenth"); larger numbers use numeric suffixes with the
    usual teens exception (11th, 12th, 13th, 111th...).
    """
    words = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")
    if 1 <= number <= len(words):
        return words[number - 1]
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Sentinel for "not provided". Compare by identity (value is Unset); never treat it as None.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
