"""
Positional distribution: hand the bare tokens of one command segment to its cardinals.

Shapes handled
- N fixed cardinals                      [A(1), B(2)]        x | y z
- one unbounded cardinal                 [A(None)]           x y z
- fixed cardinals around one unbounded   [A(1), B(None), C(1)]  x | y z | w

Algorithm
1. Pre-pass: walk the cardinals accumulating their minimum token counts; the first one
   that cannot be covered by the available tokens fails with MissingCardinalsError.
2. Consumption, head first:
   • fixed arity n with >= n tokens left: bind the next n tokens, continue.
   • fixed arity n with fewer tokens left: a non-required head binds the remainder and
     distribution stops; a required head fails.
   • unbounded head with cardinals after it: flip direction, so the trailing fixed
     cardinals claim tokens from the end.
   • unbounded head that is the last cardinal left: binds every remaining token.
3. Base cases: nothing left to bind -> done; tokens without cardinals ->
   UnneededCardinalsError; cardinals without tokens -> each must be non-required.

Windows are index ranges over immutable tuples plus a direction flag; slices handed to
a cardinal are always in original token order.
"""
import logging

from .faults import *
from .utils import pluralize

logger = logging.getLogger(__name__)


class Window:
    """
    Read-only view over a tuple with a direction.

    head() is the next item in the current direction; take(n) returns the next n items
    in original order; drop(n) and flip() return new windows.
    """
    __slots__ = ("_items", "_start", "_stop", "_reverse")

    def __init__(self, items, /, start=0, stop=None, reverse=False):
        self._items = tuple(items)
        self._start = start
        self._stop = len(self._items) if stop is None else stop
        self._reverse = reverse

    def __len__(self):
        return self._stop - self._start

    def __bool__(self):
        return self._stop > self._start

    @property
    def reverse(self):
        return self._reverse

    def head(self):
        if not self:
            raise IndexError("head of an empty window")
        return self._items[self._stop - 1] if self._reverse else self._items[self._start]

    def take(self, count, /):
        count = min(count, len(self))
        if self._reverse:
            return self._items[self._stop - count:self._stop]
        return self._items[self._start:self._start + count]

    def drop(self, count, /):
        count = min(count, len(self))
        if self._reverse:
            return Window(self._items, self._start, self._stop - count, True)
        return Window(self._items, self._start + count, self._stop, False)

    def flip(self):
        return Window(self._items, self._start, self._stop, not self._reverse)

    def rest(self):
        return self._items[self._start:self._stop]

    def __repr__(self):
        return f"window({list(self.rest())!r}, reverse={self._reverse})"


def _missing(cardinal, tokens):
    if tokens:
        left = "only %s left (%s)" % (pluralize("token", len(tokens)), ", ".join(map(repr, tokens)))
    else:
        left = "no tokens left"
    return MissingCardinalsError(
        "positional %r is not provided: it needs %s, %s" % (
            cardinal.name, pluralize("token", cardinal.minimum or cardinal.arity or 1), left
        ),
        title="missing positional",
        code=FaultCode.MISSING_CARDINALS,
        hint="pass a value for %r" % cardinal.name,
        name=cardinal.name,
        token=tokens[0] if tokens else None,
    )


def _prepass(cardinals, tokens):
    needed = 0
    for cardinal in cardinals:
        needed += cardinal.minimum
        if needed > len(tokens):
            remainder = tokens[needed - cardinal.minimum:]
            raise _missing(cardinal, remainder)


def _consume(cardinals, tokens):
    if not cardinals:
        if tokens:
            leftover = tokens.rest()
            raise UnneededCardinalsError(
                "%s not needed: %s" % (pluralize("positional token", len(leftover)), ", ".join(map(repr, leftover))),
                title="unneeded positionals",
                code=FaultCode.UNNEEDED_CARDINALS,
                hint="remove %r" % leftover[0] if len(leftover) == 1 else "remove the extra positionals",
                token=leftover[0],
                tokens=leftover,
            )
        return

    if not tokens:
        for cardinal in cardinals.rest():
            if cardinal.required:
                raise _missing(cardinal, ())
        return

    head = cardinals.head()

    if head.arity is None:
        if len(cardinals) > 1:
            logger.debug("unbounded %r is not last, distributing %s", head.name, "forward" if cardinals.reverse else "backward")
            return _consume(cardinals.flip(), tokens.flip())
        logger.debug("%r claims %s", head.name, pluralize("token", len(tokens)))
        return head.bind(tokens.rest())

    if len(tokens) >= head.arity:
        logger.debug("%r takes %s", head.name, pluralize("token", head.arity))
        head.bind(tokens.take(head.arity))
        return _consume(cardinals.drop(1), tokens.drop(head.arity))

    if not head.required:
        logger.debug("%r takes the remaining %s and ends distribution", head.name, pluralize("token", len(tokens)))
        return head.bind(tokens.rest())

    raise _missing(head, tokens.rest())


def distribute(cardinals, tokens, /):
    """
    Bind tokens to cardinals (see module docstring); raises on the first problem.

    Cardinals hold at most one unbounded entry (enforced by Command.args).
    """
    cardinals = tuple(cardinals)
    tokens = tuple(tokens)
    _prepass(cardinals, tokens)
    _consume(Window(cardinals), Window(tokens))


__all__ = (
    "Window",
    "distribute",
)
