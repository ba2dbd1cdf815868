"""
Value slots: caller-owned storage that parsed tokens are bound into.

Overview
- ValueSlot is the capability interface every option and positional binds through:
  • parse(name, token, count, policy)    interpret one token (count is 1-based)
  • default()                            current value as help text, None when there
                                         is no usable default
  • check(name, optional, count, policy) post-parse completeness
- Built-in shapes
  • Switch   boolean flag; parse ignores the token and sets True.
  • Scalar   one value of a kind; requires an initial value.
  • Maybe    one value of a kind or None.
  • Vector   growable list of a kind.
  • Array    fixed-length list of a kind (None elements are unset).
- User-defined types subclass ValueSlot and implement parse() and default().

Storage
- The caller owns the storage. Collections mutate the list they were given in place;
  any slot may instead write to an attribute with into=(object, "attribute").
- slot.value always reads the live storage.

Collection tokens
- With a non-bounded policy an option token is a comma-separated list that replaces the
  contents ("80,8080," -> [80, 8080]; empty items are dropped).
- With a bounded policy (positionals, and options declared Policy.bounded()) every
  occurrence is one element.
"""
from abc import ABC, abstractmethod
from collections.abc import MutableSequence

from .faults import *
from .kinds import resolve
from .policies import Policy
from .utils import Unset


def _convert(kind, name, token):
    try:
        return kind(token)
    except (ValueError, TypeError, ArithmeticError) as error:
        raise MalformedValueError(
            "invalid %s value %r for %r (%s)" % (kind.name, token, name, error),
            title="malformed value",
            code=FaultCode.MALFORMED_VALUE,
            hint="pass a valid %s to %r" % (kind.name, name),
            name=name,
            token=token,
            target=kind.name,
        ) from None


def _split(kind, name, token):
    parts = token.split(",")
    return [_convert(kind, name, part) for part in parts if (part.strip() if kind.trim else part)]


class ValueSlot(ABC):
    """
    Capability interface binding parsed tokens into caller-owned storage.

    Subclass contract
    - parse(name, token, count, policy, /): convert token and store it as the policy
      allows (call policy.admit first); raise MalformedValueError on bad input.
    - default(): textual form of the current value or None.
    - Optional overrides: boolean (class attribute), arity, size, policy().
    """
    boolean = False

    def __init__(self, /, *, into=Unset):
        if into is not Unset and not (isinstance(into, tuple) and len(into) == 2 and isinstance(into[1], str)):
            raise TypeError("slot 'into' must be an (object, attribute) pair")
        self._into = into
        self._value = None

    @property
    def value(self):
        if self._into is Unset:
            return self._value
        return getattr(*self._into)

    @value.setter
    def value(self, value):
        if self._into is Unset:
            self._value = value
        else:
            setattr(*self._into, value)

    @property
    def arity(self):
        """Default number of tokens when bound to a positional (None is unbounded)."""
        return 1

    @property
    def size(self):
        """Fixed element count, used to initialize bounded capacities."""
        return None

    def policy(self):
        """Default occurrence policy when bound to an option."""
        return Policy.overwrite()

    @abstractmethod
    def parse(self, name, token, count, policy, /):
        raise NotImplementedError

    @abstractmethod
    def default(self):
        raise NotImplementedError

    def check(self, name, optional, count, policy, /):
        if not optional and not count and self.default() is None:
            raise MissingError(
                "%r is required but was not given" % name,
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value for %r" % name,
                name=name,
            )
        policy.verify(name, count)

    def __repr__(self):
        return f"{type(self).__name__.lower()}({self.value!r})"


class Switch(ValueSlot):
    """Presence flag: never takes a value token."""
    boolean = True

    def __init__(self, value=False, /, *, into=Unset):
        super().__init__(into=into)
        if into is Unset:
            self.value = bool(value)

    def parse(self, name, token, count, policy, /):
        if policy.admit(name, token, count):
            self.value = True

    def default(self):
        return "true" if self.value else "false"


class Scalar(ValueSlot):
    def __init__(self, kind, value=Unset, /, *, into=Unset):
        super().__init__(into=into)
        self._kind = resolve(kind)
        if value is Unset and into is Unset:
            raise TypeError("scalar slot requires an initial value (use maybe for none)")
        if value is not Unset:
            self.value = value

    @property
    def kind(self):
        return self._kind

    def parse(self, name, token, count, policy, /):
        keep = policy.admit(name, token, count)
        value = _convert(self._kind, name, token)
        if keep:
            self.value = value

    def default(self):
        if (value := self.value) is None:
            return None
        # empty strings and paths render empty: no usable default
        return self._kind.render(value) or None

    def __repr__(self):
        return f"{type(self).__name__.lower()}({self._kind.name!r}, {self.value!r})"


class Maybe(Scalar):
    def __init__(self, kind, value=Unset, /, *, into=Unset):
        super().__init__(kind, None if value is Unset and into is Unset else value, into=into)


class Vector(ValueSlot):
    def __init__(self, kind, values=Unset, /, *, into=Unset):
        super().__init__(into=into)
        self._kind = resolve(kind)
        if values is Unset and into is Unset:
            values = []
        if values is not Unset:
            if not isinstance(values, MutableSequence):
                raise TypeError("vector slot 'values' must be a mutable sequence")
            self.value = values

    @property
    def kind(self):
        return self._kind

    @property
    def arity(self):
        return None

    def parse(self, name, token, count, policy, /):
        keep = policy.admit(name, token, count)
        if policy.accumulating:
            items = [_convert(self._kind, name, token)]
        else:
            items = _split(self._kind, name, token)
        if not keep:
            return
        values = self.value
        if count == 1 or not policy.accumulating:
            values.clear()
        values.extend(items)

    def default(self):
        if not (values := self.value):
            return None
        return ",".join(map(self._kind.render, values))

    def __repr__(self):
        return f"vector({self._kind.name!r}, {self.value!r})"


class Array(ValueSlot):
    def __init__(self, kind, values=Unset, /, *, into=Unset):
        super().__init__(into=into)
        self._kind = resolve(kind)
        if values is not Unset:
            if not isinstance(values, MutableSequence):
                raise TypeError("array slot 'values' must be a mutable sequence")
            self.value = values
        elif into is Unset:
            raise TypeError("array slot requires its values (use [None] * n for unset elements)")
        if not len(self.value):
            raise ValueError("array slot cannot be empty")

    @property
    def kind(self):
        return self._kind

    @property
    def arity(self):
        return len(self.value)

    @property
    def size(self):
        return len(self.value)

    def policy(self):
        return Policy.bounded()

    def parse(self, name, token, count, policy, /):
        keep = policy.admit(name, token, count, size=self.size)
        values = self.value
        if policy.accumulating:
            item = _convert(self._kind, name, token)
            if keep:
                values[count - 1] = item
            return
        items = _split(self._kind, name, token)
        if len(items) != len(values):
            raise CountMismatchError(
                "%r needs exactly %d comma-separated values, but %r has %d" % (name, len(values), token, len(items)),
                title="count mismatch",
                code=FaultCode.COUNT_MISMATCH,
                hint="pass %d values to %r, like %s" % (len(values), name, ",".join(["..."] * len(values))),
                name=name,
                token=token,
                expected=len(values),
                actual=len(items),
            )
        if keep:
            values[:] = items

    def default(self):
        values = self.value
        if any(value is None for value in values):
            return None
        return ",".join(map(self._kind.render, values))

    def __repr__(self):
        return f"array({self._kind.name!r}, {self.value!r})"


__all__ = (
    "ValueSlot",
    "Switch",
    "Scalar",
    "Maybe",
    "Vector",
    "Array",
)
