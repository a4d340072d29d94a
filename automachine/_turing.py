# -*- test-case-name: automachine._test.test_turing -*-

"""
Turing machines.

Our formal definition of a Turing machine is a tuple M = (S{Gamma}, b,
S{Sigma}, Q, q0, S{delta}) where:

  - S{Gamma} is the finite tape alphabet, with at least one letter;
  - b in S{Gamma} is the blank symbol, the only one that may occur infinitely
    often on the tape;
  - S{Sigma}, a subset of S{Gamma} without b, is the input alphabet;
  - Q is the finite, non-empty set of states and q0 the initial state;
  - S{delta}: Q x S{Gamma} -> (Q + {-1, -2}) x S{Gamma} x {-1, 0, 1} is the
    transition function, mapping (state, read) to (new state, written letter,
    move).  New states -1 and -2 mean halt and reject, halt and accept.

The transition function is stored as a matrix with one row per state and
three columns per letter C{l}: C{3l} is the new state (or halt code),
C{3l+1} the letter written and C{3l+2} the move.
"""
from __future__ import annotations

from collections import deque
from operator import index
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Deque,
    Generic,
    Iterable,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from ._core import (
    BlankInInputAlphabetError,
    Halt,
    InternalInvariantError,
    Move,
    OptionalTracer,
    SymbolNotInInputAlphabetError,
    TableShapeError,
    checkedId,
    log,
)
from ._frozen import (
    FrozenVector,
    MatrixSource,
    VectorSource,
    freezeMatrix,
    freezeVector,
)
from ._registry import Registry

if TYPE_CHECKING:
    from graphviz import Digraph

Letter = TypeVar("Letter")
State = TypeVar("State")

Action = Tuple[int, int, int]


class TuringMachineDefinitionById:
    """
    A validated, immutable Turing machine over ids.
    """

    def __init__(
        self,
        tapeAlphabetSize: int,
        blankId: int,
        inputAlphabet: Optional[VectorSource],
        numberOfStates: int,
        initialStateId: int,
        transitions: MatrixSource,
    ) -> None:
        """
        @param inputAlphabet: one boolean per tape letter, telling whether
            the letter may appear in input words.  The blank must not.  When
            C{None}, every letter but the blank is an input letter.
        """
        transitions = freezeMatrix(transitions)
        if tapeAlphabetSize < 1:
            raise TableShapeError(
                "tape alphabet size should be >= 1, but it is {}".format(
                    tapeAlphabetSize
                )
            )
        self.tapeAlphabetSize = tapeAlphabetSize
        self.blankId = checkedId(blankId, tapeAlphabetSize, "blank symbol")

        if inputAlphabet is None:
            inputAlphabet = FrozenVector(
                letterId != self.blankId for letterId in range(tapeAlphabetSize)
            )
        else:
            inputAlphabet = freezeVector(inputAlphabet)
            if len(inputAlphabet) != tapeAlphabetSize:
                raise TableShapeError(
                    "input alphabet vector has length {} but the tape alphabet "
                    "has {} letters".format(len(inputAlphabet), tapeAlphabetSize)
                )
            if inputAlphabet[self.blankId]:
                raise BlankInInputAlphabetError(
                    "blank symbol must not be part of the input alphabet"
                )
        self.inputAlphabet = inputAlphabet

        if numberOfStates < 1:
            raise TableShapeError(
                "number of states should be >= 1, but it is {}".format(numberOfStates)
            )
        self.numberOfStates = numberOfStates
        self.initialStateId = checkedId(
            initialStateId, numberOfStates, "initial state"
        )

        if transitions.shape != (numberOfStates, 3 * tapeAlphabetSize):
            raise TableShapeError(
                "transition matrix is {} x {} but it should be {} x {} "
                "(states x 3 times the letters)".format(
                    *transitions.shape, numberOfStates, 3 * tapeAlphabetSize
                )
            )
        for s, row in enumerate(transitions):
            for l in range(tapeAlphabetSize):
                nextState, write, move = row[3 * l : 3 * l + 3]
                where = "in state {} reading {}".format(s, l)
                checkedId(nextState, numberOfStates, "new state " + where, low=-2)
                checkedId(write, tapeAlphabetSize, "letter written " + where)
                checkedId(move, 2, "move " + where, low=-1)
        self.transitions = transitions
        log.debug(
            "built Turing machine: %d states, %d tape letters",
            numberOfStates,
            tapeAlphabetSize,
        )

    def transitionMatrix(self, stateId: int, column: int) -> int:
        return self.transitions[stateId, column]

    def action(self, stateId: int, letterId: int) -> Action:
        """
        The C{(newState, writtenLetter, move)} triple for reading C{letterId}
        in C{stateId}.
        """
        nextState, write, move = self.transitions.row(stateId)[
            3 * letterId : 3 * letterId + 3
        ]
        return (nextState, write, move)

    def inInputAlphabet(self, letterId: int) -> bool:
        return bool(self.inputAlphabet[letterId])

    def newExecution(self, word: Iterable[int] = ()) -> TuringMachineExecutionById:
        """
        Start an execution with C{word} (letter ids) on the tape and the head
        on its first letter.

        @raise SymbolNotInInputAlphabetError: if a letter of C{word} is not
            in the input alphabet.
        """
        cells: Deque[int] = deque()
        for letterId in word:
            try:
                letterId = index(letterId)
            except TypeError:
                raise SymbolNotInInputAlphabetError(letterId) from None
            if not (
                0 <= letterId < self.tapeAlphabetSize
                and self.inputAlphabet[letterId]
            ):
                raise SymbolNotInInputAlphabetError(letterId)
            cells.append(letterId)
        return TuringMachineExecutionById(self, Tape(cells, self.blankId))


class Tape:
    """
    A two-way infinite tape, of which only the used part is materialized,
    together with the head position.

    Cells live in a deque so that growing at either end is O(1); the head is
    an index into it.  There is always at least one cell, and the head always
    points at an existing one.
    """

    def __init__(self, cells: Deque[int], blankId: int) -> None:
        if not cells:
            cells.append(blankId)
        self._cells = cells
        self._blankId = blankId
        self.cursor = 0

    def read(self) -> int:
        return self._cells[self.cursor]

    def write(self, letterId: int) -> None:
        self._cells[self.cursor] = letterId

    def moveRight(self) -> None:
        # A blank at the left end will never be read again unless we come
        # back, in which case it is recreated identically.
        if self.cursor == 0 and self._cells[0] == self._blankId:
            self._cells.popleft()
            self.cursor -= 1
        if self.cursor + 1 == len(self._cells):
            self._cells.append(self._blankId)
        self.cursor += 1

    def moveLeft(self) -> None:
        if (
            self.cursor == len(self._cells) - 1
            and self._cells[self.cursor] == self._blankId
        ):
            self._cells.pop()
        if self.cursor == 0:
            self._cells.appendleft(self._blankId)
            self.cursor += 1
        self.cursor -= 1

    @property
    def cells(self) -> Tuple[int, ...]:
        return tuple(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def copy(self) -> Tape:
        other = Tape(deque(self._cells), self._blankId)
        other.cursor = self.cursor
        return other

    def render(
        self, show: Callable[[int], str] = str, marker: Optional[str] = None
    ) -> str:
        """
        The tape as space separated letters, with C{marker} (if any) right
        before the letter under the head.
        """
        pieces = []
        for position, letterId in enumerate(self._cells):
            piece = show(letterId)
            if marker is not None and position == self.cursor:
                piece = marker + piece
            pieces.append(piece)
        return " ".join(pieces)


class TuringMachineExecutionById:
    """
    The combination of a L{TuringMachineDefinitionById}, a L{Tape} and a
    current state (or halt code).
    """

    def __init__(self, definition: TuringMachineDefinitionById, tape: Tape) -> None:
        self.definition = definition
        self.tape = tape
        self.stateId = definition.initialStateId
        self.steps = 0
        self._tracer: OptionalTracer = None

    def setTrace(self, tracer: OptionalTracer) -> None:
        """
        Call C{tracer(oldStateId, readLetterId, newStateId)} after each step;
        C{newStateId} is a L{Halt} code when the step halts the machine.
        """
        self._tracer = tracer

    @property
    def halted(self) -> bool:
        return self.stateId < 0

    @property
    def haltCode(self) -> Optional[Halt]:
        if self.halted:
            return Halt(self.stateId)
        return None

    @property
    def tapeIds(self) -> Tuple[int, ...]:
        return self.tape.cells

    @property
    def cursor(self) -> int:
        return self.tape.cursor

    def doOneStep(self) -> None:
        """
        Read, write, change state, move.  Does nothing once halted.
        """
        if self.halted:
            return
        oldStateId = self.stateId
        readId = self.tape.read()
        nextState, write, move = self.definition.action(oldStateId, readId)
        self.tape.write(write)
        self.stateId = nextState
        if move == Move.RIGHT:
            self.tape.moveRight()
        elif move == Move.LEFT:
            self.tape.moveLeft()
        elif move != Move.STAY:
            raise InternalInvariantError("internal error, move = {}".format(move))
        self.steps += 1
        if self._tracer is not None:
            self._tracer(oldStateId, readId, nextState)
        if nextState < 0:
            log.debug(
                "Turing machine halted (%s) after %d steps",
                Halt(nextState).name,
                self.steps,
            )

    def doManySteps(self, n: int) -> int:
        """
        Do up to C{n} steps, fewer if the machine halts.

        @return: the number of steps actually done.
        """
        done = 0
        while done < n and not self.halted:
            self.doOneStep()
            done += 1
        return done

    def runToHalt(self) -> Halt:
        """
        Step until the machine halts.  Some machines never do, in which case
        neither does this; use L{doManySteps} to bound the work.

        @return: L{Halt.ACCEPT} or L{Halt.REJECT}.
        """
        while not self.halted:
            self.doOneStep()
        return Halt(self.stateId)

    def clone(self) -> TuringMachineExecutionById:
        """
        An independent copy (tape included) sharing the same definition.  The
        tracer is not copied.
        """
        other = TuringMachineExecutionById(self.definition, self.tape.copy())
        other.stateId = self.stateId
        other.steps = self.steps
        return other

    def tapeIdsAsString(self) -> str:
        return self.tape.render()

    def fullStateIdsAsString(self) -> str:
        return self.tape.render(marker="[{}]>".format(self.stateId))


class TuringMachineDefinition(Generic[Letter, State]):
    """
    A Turing machine whose tape letters and states are arbitrary hashable
    values.

    As with L{FiniteStateMachineDefinition}, pass C{None} as C{tapeAlphabet}
    or C{states} to identify them by ids only; their number is then taken
    from the transition matrix.
    """

    def __init__(
        self,
        tapeAlphabet: Optional[Iterable[Letter]],
        blankId: int,
        inputAlphabet: Optional[VectorSource],
        states: Optional[Iterable[State]],
        initialStateId: int,
        transitions: MatrixSource,
        letterType: Optional[type] = None,
        stateType: Optional[type] = None,
    ) -> None:
        transitions = freezeMatrix(transitions)
        if tapeAlphabet is None:
            self._tapeAlphabet: Registry[Any] = Registry.identity(
                "letter", transitions.getLength(1) // 3, letterType or int
            )
        else:
            self._tapeAlphabet = Registry.fromValues(
                "letter", tapeAlphabet, letterType
            )
        if states is None:
            self._states: Registry[Any] = Registry.identity(
                "state", transitions.getLength(0), stateType or int
            )
        else:
            self._states = Registry.fromValues("state", states, stateType)
        self.definitionById = TuringMachineDefinitionById(
            len(self._tapeAlphabet),
            blankId,
            inputAlphabet,
            len(self._states),
            initialStateId,
            transitions,
        )

    @classmethod
    def byIds(
        cls,
        blankId: int,
        inputAlphabet: Optional[VectorSource],
        initialStateId: int,
        transitions: MatrixSource,
    ) -> TuringMachineDefinition[int, int]:
        """
        Build a machine whose letters and states are their own ids.
        """
        return cls(None, blankId, inputAlphabet, None, initialStateId, transitions)

    @property
    def tapeAlphabet(self) -> Registry[Letter]:
        return self._tapeAlphabet

    @property
    def tapeAlphabetSize(self) -> int:
        return self.definitionById.tapeAlphabetSize

    def letterOfLetterId(self, letterId: int) -> Letter:
        return self._tapeAlphabet.valueOf(letterId)

    def letterIdOfLetter(self, letter: Letter) -> int:
        return self._tapeAlphabet.idOf(letter)

    @property
    def blankId(self) -> int:
        return self.definitionById.blankId

    @property
    def blank(self) -> Letter:
        return self.letterOfLetterId(self.blankId)

    def inInputAlphabetById(self, letterId: int) -> bool:
        return self.definitionById.inInputAlphabet(letterId)

    def inInputAlphabet(self, letter: Letter) -> bool:
        return self.inInputAlphabetById(self.letterIdOfLetter(letter))

    @property
    def states(self) -> Registry[State]:
        return self._states

    @property
    def numberOfStates(self) -> int:
        return self.definitionById.numberOfStates

    def stateOfStateId(self, stateId: int) -> State:
        return self._states.valueOf(stateId)

    def stateIdOfState(self, state: State) -> int:
        return self._states.idOf(state)

    @property
    def initialStateId(self) -> int:
        return self.definitionById.initialStateId

    @property
    def initialState(self) -> State:
        return self.stateOfStateId(self.initialStateId)

    def transitionMatrixById(self, stateId: int, column: int) -> int:
        return self.definitionById.transitionMatrix(stateId, column)

    def newExecutionById(
        self, word: Iterable[int] = ()
    ) -> TuringMachineExecution[Letter, State]:
        """
        Start an execution with C{word}, given as letter ids, on the tape.
        """
        return TuringMachineExecution(self, self.definitionById.newExecution(word))

    def newExecution(
        self, word: Iterable[Letter] = ()
    ) -> TuringMachineExecution[Letter, State]:
        """
        Start an execution with C{word} on the tape.  An empty word gives a
        tape holding a single blank.

        @raise UnknownSymbolError: if a letter is not in the tape alphabet.
        @raise SymbolNotInInputAlphabetError: if a letter is not in the input
            alphabet.
        """
        return self.newExecutionById([self.letterIdOfLetter(l) for l in word])

    def accepts(self, word: Iterable[Letter]) -> bool:
        """
        Does the machine, started on C{word}, halt in the accepting state?
        """
        return self.newExecution(word).runToHalt() == Halt.ACCEPT

    def acceptsById(self, word: Iterable[int]) -> bool:
        return self.newExecutionById(word).runToHalt() == Halt.ACCEPT

    def asDigraph(self) -> Digraph:
        from ._visualize import turingMachineDigraph

        return turingMachineDigraph(self)


class TuringMachineExecution(Generic[Letter, State]):
    """
    A running Turing machine, seen through its definition's letters and
    states.
    """

    def __init__(
        self,
        definition: TuringMachineDefinition[Letter, State],
        executionById: TuringMachineExecutionById,
    ) -> None:
        self.definition = definition
        self._executionById = executionById

    @property
    def halted(self) -> bool:
        return self._executionById.halted

    @property
    def haltCode(self) -> Optional[Halt]:
        return self._executionById.haltCode

    @property
    def stateId(self) -> int:
        """
        The current state id, or the halt code once halted.
        """
        return self._executionById.stateId

    @property
    def state(self) -> Optional[State]:
        """
        The current state, or C{None} once halted; see L{haltCode}.
        """
        if self.halted:
            return None
        return self.definition.stateOfStateId(self.stateId)

    @property
    def steps(self) -> int:
        return self._executionById.steps

    @property
    def tapeIds(self) -> Tuple[int, ...]:
        return self._executionById.tapeIds

    @property
    def tape(self) -> Tuple[Letter, ...]:
        return tuple(self.definition.letterOfLetterId(l) for l in self.tapeIds)

    @property
    def cursor(self) -> int:
        return self._executionById.cursor

    def setTrace(
        self, tracer: Optional[Callable[[State, Letter, Union[State, Halt]], None]]
    ) -> None:
        """
        Call C{tracer(oldState, readLetter, newState)} after each step, with
        C{newState} a L{Halt} code when the step halts the machine.
        """
        if tracer is None:
            self._executionById.setTrace(None)
            return
        definition = self.definition

        def traceById(oldStateId: int, letterId: int, newStateId: int) -> None:
            tracer(
                definition.stateOfStateId(oldStateId),
                definition.letterOfLetterId(letterId),
                Halt(newStateId)
                if newStateId < 0
                else definition.stateOfStateId(newStateId),
            )

        self._executionById.setTrace(traceById)

    def doOneStep(self) -> None:
        self._executionById.doOneStep()

    def doManySteps(self, n: int) -> int:
        return self._executionById.doManySteps(n)

    def runToHalt(self) -> Halt:
        return self._executionById.runToHalt()

    def clone(self) -> TuringMachineExecution[Letter, State]:
        return TuringMachineExecution(self.definition, self._executionById.clone())

    def tapeIdsAsString(self) -> str:
        return self._executionById.tapeIdsAsString()

    def fullStateIdsAsString(self) -> str:
        return self._executionById.fullStateIdsAsString()

    def tapeAsString(self) -> str:
        return self._executionById.tape.render(self._show)

    def fullStateAsString(self) -> str:
        if self.halted:
            marker = "[{}]>".format(Halt(self.stateId).name.lower())
        else:
            marker = "[{}]>".format(self.state)
        return self._executionById.tape.render(self._show, marker)

    def _show(self, letterId: int) -> str:
        return str(self.definition.letterOfLetterId(letterId))

    def __repr__(self) -> str:
        return "<TuringMachineExecution {}>".format(self.fullStateAsString())
