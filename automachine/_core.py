# -*- test-case-name: automachine._test.test_core -*-

"""
Shared vocabulary for both machine models: errors, halt codes, move
directions and tracer signatures.
"""
from __future__ import annotations

import logging
import sys
from enum import IntEnum
from operator import index
from typing import Callable, Optional

if sys.version_info >= (3, 10):
    from typing import TypeAlias
else:
    from typing_extensions import TypeAlias

log = logging.getLogger("automachine")


class MachineError(Exception):
    """
    Base class for everything this package raises on purpose.
    """


class ConstructionError(MachineError, ValueError):
    """
    A machine definition (or one of its tables) could not be built because
    the supplied data is inconsistent.  No partially built object escapes.
    """


class DuplicateSymbolError(ConstructionError):
    """
    The same letter appears twice in an alphabet.

    @ivar symbol: the repeated letter.
    """

    def __init__(self, symbol: object) -> None:
        self.symbol = symbol
        super().__init__("duplicated letter in alphabet: {!r}".format(symbol))


class DuplicateStateError(ConstructionError):
    """
    The same state appears twice in a state collection.

    @ivar state: the repeated state.
    """

    def __init__(self, state: object) -> None:
        self.state = state
        super().__init__("duplicated state in states: {!r}".format(state))


class OutOfRangeConstructionError(ConstructionError):
    """
    An id given at construction (initial state, blank, table entry) lies
    outside its declared range.
    """


class TableShapeError(ConstructionError):
    """
    A table does not have the dimensions the machine requires, or is ragged.
    """


class BlankInInputAlphabetError(ConstructionError):
    """
    The blank symbol of a Turing machine was declared part of its input
    alphabet.
    """


class TypeConsistencyError(ConstructionError, TypeError):
    """
    Id-only mode was requested for a registry whose declared value type is
    not C{int}, or a value does not match the declared type.
    """


class MachineLookupError(MachineError, LookupError):
    """
    A typed value or an id could not be translated.
    """


class UnknownSymbolError(MachineLookupError):
    """
    A letter (or letter id) is not part of the alphabet.

    @ivar symbol: the offending letter.
    """

    def __init__(self, symbol: object, message: str | None = None) -> None:
        self.symbol = symbol
        if message is None:
            message = "unknown letter: {!r}".format(symbol)
        super().__init__(message)


class InvalidLetterError(UnknownSymbolError):
    """
    A finite state machine was asked to read a letter outside its alphabet.
    """

    def __init__(self, symbol: object) -> None:
        super().__init__(symbol, "invalid letter: {!r}".format(symbol))


class UnknownStateError(MachineLookupError):
    """
    A state (or state id) is not part of the machine.

    @ivar state: the offending state.
    """

    def __init__(self, state: object) -> None:
        self.state = state
        super().__init__("unknown state: {!r}".format(state))


class SymbolNotInInputAlphabetError(MachineError, ValueError):
    """
    A Turing machine was given an input word containing a letter that belongs
    to its tape alphabet but not to its input alphabet.
    """

    def __init__(self, letterId: int) -> None:
        self.letterId = letterId
        super().__init__("letter {} is not in input alphabet".format(letterId))


class OutOfRangeError(MachineError, IndexError):
    """
    A frozen table was indexed outside of its dimensions.
    """


class InternalInvariantError(MachineError, RuntimeError):
    """
    Something validation should have made impossible happened anyway.  This
    is a bug, not a recoverable condition.
    """


class Halt(IntEnum):
    """
    Pseudo-states a Turing machine ends up in once it stops.
    """

    REJECT = -1
    ACCEPT = -2


class Move(IntEnum):
    """
    Head movements of a Turing machine.
    """

    LEFT = -1
    STAY = 0
    RIGHT = 1


# (oldStateId, letterId, newStateId); for Turing machines the new state may be
# a halt code.
Tracer: TypeAlias = "Callable[[int, int, int], None]"
OptionalTracer: TypeAlias = "Optional[Tracer]"


def checkedId(value: object, bound: int, what: str, low: int = 0) -> int:
    """
    Return C{value} as an C{int} if it lies in C{[low, bound)}.

    @raise OutOfRangeConstructionError: otherwise.
    """
    try:
        result = index(value)  # type:ignore[arg-type]
    except TypeError:
        raise OutOfRangeConstructionError(
            "{} {!r} is not an integer id".format(what, value)
        ) from None
    if not low <= result < bound:
        raise OutOfRangeConstructionError(
            "{} ({}) is out of range, it should be in [{}, {})".format(
                what, result, low, bound
            )
        )
    return result
