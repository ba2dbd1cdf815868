"""
Occurrence policies: what happens when an option is given more than once.

States
- SINGLE     the second occurrence is an error (DuplicatedSwitchError).
- IGNORED    the first occurrence wins; later ones are still converted (so malformed
             values are reported) but discarded.
- OVERWRITE  every occurrence replaces the previous value (the default).
- BOUNDED    occurrences accumulate; with a capacity n the n-th occurrence is the last
             accepted one and the next raises ExcessOccurrenceError. A capacity left
             unset is initialized from the slot size (fixed collections) on first use.

A Policy instance is owned by exactly one Option or Cardinal, since BOUNDED may
initialize its capacity while parsing.
"""
import enum
import logging

from .faults import *
from .utils import ordinal, pluralize

logger = logging.getLogger(__name__)


class Occurrence(enum.Enum):
    SINGLE = "single"
    IGNORED = "ignored"
    OVERWRITE = "overwrite"
    BOUNDED = "bounded"


class Policy:
    """
    occurrence policy of one option or positional.

    construct with the classmethods: Policy.single(), Policy.ignored(),
    Policy.overwrite(), Policy.bounded(capacity=None).
    """
    __slots__ = ("_state", "_capacity")

    def __init__(self, state, capacity=None, /):
        if not isinstance(state, Occurrence):
            raise TypeError("policy 'state' must be an occurrence")
        if capacity is not None:
            if state is not Occurrence.BOUNDED:
                raise TypeError("only bounded policies accept a 'capacity'")
            if not isinstance(capacity, int) or isinstance(capacity, bool):
                raise TypeError("policy 'capacity' must be an integer")
            if capacity < 1:
                raise ValueError("policy 'capacity' must be a positive integer")
        self._state = state
        self._capacity = capacity

    @classmethod
    def single(cls):
        return cls(Occurrence.SINGLE)

    @classmethod
    def ignored(cls):
        return cls(Occurrence.IGNORED)

    @classmethod
    def overwrite(cls):
        return cls(Occurrence.OVERWRITE)

    @classmethod
    def bounded(cls, capacity=None, /):
        return cls(Occurrence.BOUNDED, capacity)

    @property
    def state(self):
        return self._state

    @property
    def capacity(self):
        return self._capacity

    @property
    def accumulating(self):
        return self._state is Occurrence.BOUNDED

    def admit(self, name, token, count, /, size=None):
        """
        Decide whether the count-th occurrence of name is stored.

        Returns False when the value must be converted but discarded (IGNORED after the
        first occurrence). Raises when the occurrence is not allowed at all.
        """
        match self._state:
            case Occurrence.SINGLE:
                if count > 1:
                    raise DuplicatedSwitchError(
                        "%r can only occur once, but got a %s occurrence %r" % (name, ordinal(count), token),
                        title="duplicated option",
                        code=FaultCode.DUPLICATED_SWITCH,
                        hint="give %r a single time" % name,
                        name=name,
                        token=token,
                    )
                return True
            case Occurrence.IGNORED:
                return count == 1
            case Occurrence.OVERWRITE:
                return True
            case Occurrence.BOUNDED:
                if self._capacity is None and size is not None:
                    logger.debug("capacity of %r initialized to %d", name, size)
                    self._capacity = size
                if self._capacity is not None and count > self._capacity:
                    raise ExcessOccurrenceError(
                        "%r accepts at most %s, but got a %s one %r" % (
                            name, pluralize("occurrence", self._capacity), ordinal(count), token
                        ),
                        title="too many occurrences",
                        code=FaultCode.EXCESS_OCCURRENCES,
                        hint="drop the extra %r values" % name,
                        name=name,
                        token=token,
                    )
                return True

    def verify(self, name, count, /):
        """Bounded policies with a capacity need exactly that many occurrences once any was given."""
        if self.accumulating and self._capacity is not None and count and count != self._capacity:
            raise CountMismatchError(
                "%r needs %s, but got %d" % (name, pluralize("value", self._capacity), count),
                title="count mismatch",
                code=FaultCode.COUNT_MISMATCH,
                hint="give %r exactly %d times" % (name, self._capacity),
                name=name,
                expected=self._capacity,
                actual=count,
            )

    def __eq__(self, other):
        if not isinstance(other, Policy):
            return NotImplemented
        return (self._state, self._capacity) == (other._state, other._capacity)

    def __repr__(self):
        if self._capacity is not None:
            return f"policy.{self._state.value}({self._capacity})"
        return f"policy.{self._state.value}()"


__all__ = (
    "Occurrence",
    "Policy",
)
