r"""
Slotargs argument declarations.

Overview
- Declarations
  • Option: named switch with a short and/or long alias (e.g., -p/--port) bound to a
    value slot; boolean slots make it a flag that never consumes a value token.
  • Cardinal: positional argument bound to a value slot, with a fixed arity (exactly n
    tokens) or unbounded arity (None, claims what the other positionals leave).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields as read-only properties declared in __introspectable__/__displayable__.

Metadata (sanitized on construction)
- Shared
  • name: non-empty string without whitespace; identity of the argument.
  • slot: a ValueSlot (see slotargs.slots); caller-owned storage.
  • optional: bool; optional arguments never fail validation for being absent.
  • descr: Unset | str | Text (help line), non-empty when provided.
- Option only
  • short: "-x" (one character), long: "--name"; at least one is required.
  • policy: occurrence Policy; defaults to the slot's own default (overwrite for
    most slots, bounded for fixed arrays).
  • sort_key: key in the command's option table and help ordering (defaults to name).
- Cardinal only
  • arity: Unset (slot default) | None (unbounded) | int >= 1.

Validation highlights
- short must match r"-[^\s-]", long must match r"--[^\W_][\w-]*".
- A bounded capacity larger than a fixed slot is rejected.
- Cardinals cannot bind boolean slots; scalar slots take exactly one token; fixed slots
  cannot take more tokens than they hold.

Quick example:
    >>> from slotargs import Option, Cardinal, Switch, Scalar, Vector
    >>> keep = Option("keep-alive", Switch(), "-k", "--keep-alive")
    >>> port = Option("port", Scalar("u16", 8080), "-p", "--port", descr="listening port")
    >>> paths = Cardinal("PATHS", Vector("path", []))
"""
import functools
import operator
import re

from rich.text import Text

from .policies import Policy
from .slots import ValueSlot, Scalar
from .utils import *


class ArgumentType(type):
    """
    Metaclass that makes argument declarations introspectable.

    Responsibilities
    - __typename__ derived from the class name (camel-case split with hyphens), used in
      construction errors ("option 'short' must...").
    - Stable __repr__/__rich_repr__ for diagnostics and rich.pretty.
    - Read-only properties, via mirror(), for every name in __introspectable__.

    Conventions
    - __displayable__ (if set) narrows what __rich_repr__ shows; otherwise
      __introspectable__ is used.
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


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the fields shared by Option and Cardinal (mutates metadata).

    - name: non-empty after trimming, no inner whitespace.
    - slot: must be a ValueSlot instance.
    - descr: Unset or a non-empty string/Text; Unset becomes None.
    - optional: coerced to bool.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace")
    metadata["name"] = name

    if not isinstance(metadata["slot"], ValueSlot):
        raise TypeError(f"{cls.__typename__} 'slot' must be a value slot")

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    metadata["optional"] = bool(metadata["optional"])


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate aliases, policy and sort key of an Option (mutates metadata).

    - short: r"-[^\s-]" (a dash and one character), long: r"--[^\W_][\w-]*".
    - at least one alias; both Unset is a TypeError.
    - policy: Unset becomes slot.policy(); a bounded capacity cannot exceed slot.size.
    - sort_key: Unset becomes the name; otherwise a non-empty string.
    """
    short, long = metadata["short"], metadata["long"]
    if short is Unset and long is Unset:
        raise TypeError(f"{cls.__typename__} must specify at least one of 'short' or 'long'")

    if not isinstance(short, str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and not re.fullmatch(r"-[^\s-]", short):
        raise ValueError(f"{cls.__typename__} 'short' must be a dash followed by one character (e.g., '-p')")

    if not isinstance(long, str | Unset):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str) and not re.fullmatch(r"--[^\W_][\w-]*", long):
        raise ValueError(f"{cls.__typename__} 'long' must be two dashes followed by a name (e.g., '--port')")

    metadata["short"] = coalesce(short)
    metadata["long"] = coalesce(long)

    slot = metadata["slot"]
    if (policy := metadata["policy"]) is Unset:
        policy = slot.policy()
    elif not isinstance(policy, Policy):
        raise TypeError(f"{cls.__typename__} 'policy' must be a policy")
    if policy.accumulating and None not in (policy.capacity, slot.size) and policy.capacity > slot.size:
        raise ValueError(f"{cls.__typename__} capacity {policy.capacity} exceeds its slot size {slot.size}")
    metadata["policy"] = policy

    if not isinstance(sort_key := metadata["sort_key"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'sort_key' must be a string")
    elif isinstance(sort_key, str) and not sort_key:
        raise ValueError(f"{cls.__typename__} 'sort_key' cannot be empty")
    metadata["sort_key"] = coalesce(sort_key, metadata["name"])


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: validate the arity of a Cardinal against its slot (mutates metadata).
    """
    slot = metadata["slot"]
    if slot.boolean:
        raise TypeError(f"{cls.__typename__} cannot bind a boolean slot")

    if (arity := metadata["arity"]) is Unset:
        arity = slot.arity
    elif arity is not None:
        if not isinstance(arity, int) or isinstance(arity, bool):
            raise TypeError(f"{cls.__typename__} 'arity' must be an integer or None")
        if arity < 1:
            raise ValueError(f"{cls.__typename__} 'arity' must be a positive integer")

    if isinstance(slot, Scalar) and arity != 1:
        raise ValueError(f"{cls.__typename__} with a scalar slot takes exactly one token")
    if slot.size is not None and (arity is None or arity > slot.size):
        raise ValueError(f"{cls.__typename__} arity cannot exceed its slot size {slot.size}")
    metadata["arity"] = arity


class Option(metaclass=ArgumentType):
    """
    Named switch bound to a value slot.

    The option owns its running occurrence count; every parse() increments it and hands
    (name, token, count, policy) to the slot. A boolean slot never needs a token.
    """

    __introspectable__ = (
        "name",
        "slot",
        "short",
        "long",
        "optional",
        "descr",
        "policy",
        "sort_key",
        "count",
    )
    __displayable__ = (
        "name",
        "short",
        "long",
        "optional",
        "policy",
        "count",
        "slot",
    )

    def __init__(
            self,
            name,
            slot,
            /,
            short=Unset,
            long=Unset,
            *,
            optional=False,
            descr=Unset,
            policy=Unset,
            sort_key=Unset,
    ):
        metadata = {
            "name": name,
            "slot": slot,
            "short": short,
            "long": long,
            "optional": optional,
            "descr": descr,
            "policy": policy,
            "sort_key": sort_key,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)

        for key, object in metadata.items():
            setattr(self, "_" + key, object)
        self._count = 0

    @property
    def aliases(self):
        return tuple(alias for alias in (self._short, self._long) if alias is not None)

    @property
    def boolean(self):
        return self._slot.boolean

    def parse(self, token="", /):
        self._count += 1
        self._slot.parse(self._name, token, self._count, self._policy)

    def check(self):
        self._slot.check(self._name, self._optional, self._count, self._policy)

    def default(self):
        return self._slot.default()


class Cardinal(metaclass=ArgumentType):
    """
    Positional argument bound to a value slot.

    Every bound token is one occurrence under a bounded policy whose capacity is the
    arity, so a fixed-arity positional must receive exactly 'arity' tokens once it
    receives any.
    """

    __introspectable__ = (
        "name",
        "slot",
        "arity",
        "optional",
        "descr",
        "count",
    )

    def __init__(self, name, slot, /, arity=Unset, *, optional=False, descr=Unset):
        metadata = {
            "name": name,
            "slot": slot,
            "arity": arity,
            "optional": optional,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_positional_metadata(type(self), metadata)

        for key, object in metadata.items():
            setattr(self, "_" + key, object)
        self._policy = Policy.bounded(self._arity)
        self._count = 0

    @property
    def required(self):
        """Absent tokens are an error: not optional and no usable default."""
        return not self._optional and self._slot.default() is None

    @property
    def minimum(self):
        """Tokens this positional cannot do without (unbounded required ones need one)."""
        return (self._arity or 1) if self.required else 0

    def bind(self, tokens, /):
        for token in tokens:
            self._count += 1
            self._slot.parse(self._name, token, self._count, self._policy)

    def check(self):
        self._slot.check(self._name, self._optional, self._count, self._policy)

    def default(self):
        return self._slot.default()


__all__ = (
    "Option",
    "Cardinal",
)

del ArgumentType
