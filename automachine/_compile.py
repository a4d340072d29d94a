# -*- test-case-name: automachine._test.test_compile -*-

"""
Turn a finite state machine into a Turing machine recognizing the same
language.
"""
from __future__ import annotations

from typing import Any, List

from ._core import Halt, Move
from ._fsm import FiniteStateMachineDefinition
from ._turing import TuringMachineDefinition

_NO_BLANK: Any = object()


def compileToTuringMachine(
    fsm: FiniteStateMachineDefinition[Any, Any], blank: Any = _NO_BLANK
) -> TuringMachineDefinition[Any, Any]:
    """
    Build a Turing machine that scans its input once, left to right, moving
    through C{fsm}'s states as C{fsm} would, and halts on the first blank:
    accepting if the state reached is final, rejecting otherwise.  The tape
    is never modified.

    The tape alphabet is C{fsm}'s alphabet plus a new blank, whose id is
    C{fsm.alphabetSize}; the states are C{fsm}'s states.

    @param blank: the blank letter.  If omitted, the result identifies letters
        and states by ids only; otherwise it keeps C{fsm}'s letters and states
        and adds C{blank} to the tape alphabet.

    @raise DuplicateSymbolError: if C{blank} is already one of C{fsm}'s
        letters.
    """
    blankId = fsm.alphabetSize
    transitions: List[List[int]] = []
    for s in range(fsm.numberOfStates):
        row: List[int] = []
        for l in range(fsm.alphabetSize):
            row += [fsm.transitionById(s, l), l, Move.RIGHT]
        halt = Halt.ACCEPT if fsm.isFinalById(s) else Halt.REJECT
        row += [halt, blankId, Move.RIGHT]
        transitions.append([int(cell) for cell in row])

    if blank is _NO_BLANK:
        return TuringMachineDefinition.byIds(
            blankId, None, fsm.initialStateId, transitions
        )
    return TuringMachineDefinition(
        [*fsm.alphabet.values, blank],
        blankId,
        None,
        None if fsm.states.isIdentity else fsm.states.values,
        fsm.initialStateId,
        transitions,
    )
