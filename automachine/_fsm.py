# -*- test-case-name: automachine._test.test_fsm -*-

"""
Deterministic finite state machines.

A deterministic finite state machine is a quintuple (S{Sigma}, S, s0,
S{delta}, F) where S{Sigma} is the alphabet, S the set of states, s0 the
initial state, S{delta}: S x S{Sigma} -> S the transition function and F the
set of final states.

The engine itself (L{FiniteStateMachineDefinitionById} and
L{FiniteStateMachineExecutionById}) only ever sees integer ids.
L{FiniteStateMachineDefinition} and L{FiniteStateMachineExecution} decorate it
with L{Registry} objects so callers may use any hashable letters and states.
"""
from __future__ import annotations

from operator import index
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Iterable,
    Optional,
    TypeVar,
    Union,
)

from ._core import (
    InvalidLetterError,
    OptionalTracer,
    TableShapeError,
    UnknownStateError,
    checkedId,
    log,
)
from ._frozen import MatrixSource, VectorSource, freezeMatrix, freezeVector
from ._registry import Registry

if TYPE_CHECKING:
    from graphviz import Digraph

    from ._turing import TuringMachineDefinition

Letter = TypeVar("Letter")
State = TypeVar("State")
BlankLetter = TypeVar("BlankLetter")


class FiniteStateMachineDefinitionById:
    """
    A validated, immutable finite state machine over ids.

    @ivar transitions: C{transitions[s, l]} is the state reached from state
        C{s} by reading letter C{l}.

    @ivar finalStates: C{finalStates[s]} tells whether C{s} is final.
    """

    def __init__(
        self,
        alphabetSize: int,
        numberOfStates: int,
        initialStateId: int,
        transitions: MatrixSource,
        finalStates: VectorSource,
    ) -> None:
        transitions = freezeMatrix(transitions)
        finalStates = freezeVector(finalStates)
        if numberOfStates < 1:
            raise TableShapeError(
                "number of states should be >= 1, but it is {}".format(numberOfStates)
            )
        self.initialStateId = checkedId(
            initialStateId, numberOfStates, "initial state"
        )
        if transitions.shape != (numberOfStates, alphabetSize):
            raise TableShapeError(
                "transition matrix is {} x {} but it should be {} x {} "
                "(states x letters)".format(
                    *transitions.shape, numberOfStates, alphabetSize
                )
            )
        for s, row in enumerate(transitions):
            for l, target in enumerate(row):
                checkedId(
                    target,
                    numberOfStates,
                    "transition from state {} by letter {}".format(s, l),
                )
        if len(finalStates) != numberOfStates:
            raise TableShapeError(
                "final state vector has length {} but there are {} states".format(
                    len(finalStates), numberOfStates
                )
            )
        self.alphabetSize = alphabetSize
        self.numberOfStates = numberOfStates
        self.transitions = transitions
        self.finalStates = finalStates
        log.debug(
            "built finite state machine: %d states, %d letters",
            numberOfStates,
            alphabetSize,
        )

    def transition(self, stateId: int, letterId: int) -> int:
        return self.transitions[stateId, letterId]

    def isFinal(self, stateId: int) -> bool:
        return bool(self.finalStates[stateId])

    def newExecution(self) -> FiniteStateMachineExecutionById:
        return FiniteStateMachineExecutionById(self)


class FiniteStateMachineExecutionById:
    """
    The combination of a current state id and a
    L{FiniteStateMachineDefinitionById}.
    """

    def __init__(self, definition: FiniteStateMachineDefinitionById) -> None:
        self.definition = definition
        self._stateId = definition.initialStateId
        self._tracer: OptionalTracer = None

    @property
    def stateId(self) -> int:
        return self._stateId

    @stateId.setter
    def stateId(self, stateId: int) -> None:
        try:
            stateId = index(stateId)
        except TypeError:
            raise UnknownStateError(stateId) from None
        if not 0 <= stateId < self.definition.numberOfStates:
            raise UnknownStateError(stateId)
        self._stateId = stateId

    def setTrace(self, tracer: OptionalTracer) -> None:
        self._tracer = tracer

    def read(self, letterId: int) -> None:
        try:
            letterId = index(letterId)
        except TypeError:
            raise InvalidLetterError(letterId) from None
        if not 0 <= letterId < self.definition.alphabetSize:
            raise InvalidLetterError(letterId)
        oldStateId = self._stateId
        self._stateId = self.definition.transitions[oldStateId, letterId]
        if self._tracer is not None:
            self._tracer(oldStateId, letterId, self._stateId)

    def readWord(self, letterIds: Iterable[int]) -> None:
        for letterId in letterIds:
            self.read(letterId)

    @property
    def inFinalState(self) -> bool:
        return self.definition.isFinal(self._stateId)

    def clone(self) -> FiniteStateMachineExecutionById:
        """
        A new execution in the same state, sharing the same definition.  The
        tracer is not copied.
        """
        other = FiniteStateMachineExecutionById(self.definition)
        other._stateId = self._stateId
        return other


class FiniteStateMachineDefinition(Generic[Letter, State]):
    """
    A finite state machine whose letters and states are arbitrary hashable
    values.

    This is a definition, not a running machine; it is immutable, and any
    number of executions (see L{newExecution}) may share it.

    Pass C{None} as C{alphabet} or C{states} to identify letters or states by
    their ids only; their number is then taken from the transition matrix.
    Letters and states may be mixed, e.g. characters as letters but plain ids
    as states.
    """

    def __init__(
        self,
        alphabet: Optional[Iterable[Letter]],
        states: Optional[Iterable[State]],
        initialStateId: int,
        transitions: MatrixSource,
        finalStates: VectorSource,
        letterType: Optional[type] = None,
        stateType: Optional[type] = None,
    ) -> None:
        """
        @param alphabet: the letters, without duplicates, in id order.

        @param states: the states, without duplicates, in id order.

        @param initialStateId: id of the state new executions start in.

        @param transitions: a matrix with one row per state and one column per
            letter; C{transitions[s1][a] == s2} means that reading letter id
            C{a} in state id C{s1} leads to state id C{s2}.

        @param finalStates: one boolean per state.

        @param letterType: if given, the type every letter must have; must be
            C{int} when C{alphabet} is C{None}.

        @param stateType: as C{letterType}, for states.
        """
        transitions = freezeMatrix(transitions)
        if alphabet is None:
            self._alphabet: Registry[Any] = Registry.identity(
                "letter", transitions.getLength(1), letterType or int
            )
        else:
            self._alphabet = Registry.fromValues("letter", alphabet, letterType)
        if states is None:
            self._states: Registry[Any] = Registry.identity(
                "state", transitions.getLength(0), stateType or int
            )
        else:
            self._states = Registry.fromValues("state", states, stateType)
        self.definitionById = FiniteStateMachineDefinitionById(
            len(self._alphabet),
            len(self._states),
            initialStateId,
            transitions,
            finalStates,
        )

    @classmethod
    def byIds(
        cls,
        initialStateId: int,
        transitions: MatrixSource,
        finalStates: VectorSource,
    ) -> FiniteStateMachineDefinition[int, int]:
        """
        Build a machine whose letters and states are their own ids.
        """
        return cls(None, None, initialStateId, transitions, finalStates)

    # Alphabet.

    @property
    def alphabet(self) -> Registry[Letter]:
        return self._alphabet

    @property
    def alphabetSize(self) -> int:
        return self.definitionById.alphabetSize

    def letterOfLetterId(self, letterId: int) -> Letter:
        return self._alphabet.valueOf(letterId)

    def letterIdOfLetter(self, letter: Letter) -> int:
        return self._alphabet.idOf(letter)

    # States.

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

    # Transitions and final states.

    def transitionById(self, stateId: int, letterId: int) -> int:
        return self.definitionById.transition(stateId, letterId)

    def transition(self, state: State, letter: Letter) -> State:
        return self.stateOfStateId(
            self.transitionById(
                self.stateIdOfState(state), self.letterIdOfLetter(letter)
            )
        )

    def isFinalById(self, stateId: int) -> bool:
        return self.definitionById.isFinal(stateId)

    def isFinal(self, state: State) -> bool:
        return self.isFinalById(self.stateIdOfState(state))

    # Running.

    def newExecution(self) -> FiniteStateMachineExecution[Letter, State]:
        """
        Create an execution of this definition, in the initial state.
        """
        return FiniteStateMachineExecution(self)

    def readAndReturnStateId(self, word: Iterable[Letter]) -> int:
        execution = self.newExecution()
        execution.readWord(word)
        return execution.stateId

    def readAndReturnState(self, word: Iterable[Letter]) -> State:
        return self.stateOfStateId(self.readAndReturnStateId(word))

    def readByIdAndReturnStateId(self, word: Iterable[int]) -> int:
        execution = self.newExecution()
        execution.readWordById(word)
        return execution.stateId

    def readByIdAndReturnState(self, word: Iterable[int]) -> State:
        return self.stateOfStateId(self.readByIdAndReturnStateId(word))

    def accepts(self, word: Iterable[Letter]) -> bool:
        """
        Does reading C{word} from the initial state end in a final state?
        """
        return self.isFinalById(self.readAndReturnStateId(word))

    def acceptsById(self, word: Iterable[int]) -> bool:
        return self.isFinalById(self.readByIdAndReturnStateId(word))

    # Conversions.

    def toTuringMachineDefinitionById(self) -> TuringMachineDefinition[int, int]:
        """
        A Turing machine deciding the same language; see
        L{automachine._compile.compileToTuringMachine}.
        """
        from ._compile import compileToTuringMachine

        return compileToTuringMachine(self)

    def toTuringMachineDefinition(
        self, blank: BlankLetter
    ) -> TuringMachineDefinition[Union[Letter, BlankLetter], State]:
        """
        Like L{toTuringMachineDefinitionById}, but keeping this machine's
        letters and states, with C{blank} added to the tape alphabet.
        """
        from ._compile import compileToTuringMachine

        return compileToTuringMachine(self, blank)

    def asDigraph(self) -> Digraph:
        from ._visualize import finiteStateMachineDigraph

        return finiteStateMachineDigraph(self)


class FiniteStateMachineExecution(Generic[Letter, State]):
    """
    A running finite state machine: a reference to a definition plus a
    current state.  Executions sharing a definition never interfere.
    """

    def __init__(
        self,
        definition: FiniteStateMachineDefinition[Letter, State],
        executionById: Optional[FiniteStateMachineExecutionById] = None,
    ) -> None:
        self.definition = definition
        if executionById is None:
            executionById = definition.definitionById.newExecution()
        self._executionById = executionById

    # The current state may be overwritten while the machine runs.

    @property
    def stateId(self) -> int:
        return self._executionById.stateId

    @stateId.setter
    def stateId(self, stateId: int) -> None:
        self._executionById.stateId = stateId

    @property
    def state(self) -> State:
        return self.definition.stateOfStateId(self.stateId)

    @state.setter
    def state(self, state: State) -> None:
        self.stateId = self.definition.stateIdOfState(state)

    def setTrace(
        self, tracer: Optional[Callable[[State, Letter, State], None]]
    ) -> None:
        """
        Call C{tracer(oldState, letter, newState)} after every letter read.
        """
        if tracer is None:
            self._executionById.setTrace(None)
            return
        definition = self.definition

        def traceById(oldStateId: int, letterId: int, newStateId: int) -> None:
            tracer(
                definition.stateOfStateId(oldStateId),
                definition.letterOfLetterId(letterId),
                definition.stateOfStateId(newStateId),
            )

        self._executionById.setTrace(traceById)

    def read(self, letter: Letter) -> None:
        """
        Read one letter and change state accordingly.

        @raise InvalidLetterError: if C{letter} is not in the alphabet.
        """
        try:
            letterId = self.definition.letterIdOfLetter(letter)
        except LookupError:
            raise InvalidLetterError(letter) from None
        self._executionById.read(letterId)

    def readWord(self, word: Iterable[Letter]) -> None:
        for letter in word:
            self.read(letter)

    def readById(self, letterId: int) -> None:
        self._executionById.read(letterId)

    def readWordById(self, letterIds: Iterable[int]) -> None:
        self._executionById.readWord(letterIds)

    @property
    def inFinalState(self) -> bool:
        return self._executionById.inFinalState

    def clone(self) -> FiniteStateMachineExecution[Letter, State]:
        """
        Copy this execution: same definition, same current state, independent
        from now on.
        """
        return FiniteStateMachineExecution(
            self.definition, self._executionById.clone()
        )

    def __repr__(self) -> str:
        return "<FiniteStateMachineExecution state={!r}>".format(self.state)
