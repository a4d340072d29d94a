from itertools import product
from unittest import TestCase

from .._compile import compileToTuringMachine
from .._core import DuplicateSymbolError, Halt
from .._fsm import FiniteStateMachineDefinition
from .test_fsm import aStarBStar, binaryParity


def allWords(alphabetSize: int, maxLength: int):
    for length in range(maxLength + 1):
        yield from product(range(alphabetSize), repeat=length)


class CompileTests(TestCase):
    def test_sameLanguage(self) -> None:
        """
        The compiled Turing machine accepts exactly the words the finite
        state machine accepts, the empty word included.
        """
        for fsm in [binaryParity("odd"), binaryParity("even"), aStarBStar()]:
            tm = fsm.toTuringMachineDefinitionById()
            for word in allWords(fsm.alphabetSize, 5):
                self.assertEqual(
                    fsm.acceptsById(word), tm.acceptsById(word), (fsm, word)
                )

    def test_shape(self) -> None:
        fsm = aStarBStar()
        tm = compileToTuringMachine(fsm)
        self.assertEqual(tm.tapeAlphabetSize, fsm.alphabetSize + 1)
        self.assertEqual(tm.blankId, fsm.alphabetSize)
        self.assertEqual(tm.numberOfStates, fsm.numberOfStates)
        self.assertEqual(tm.initialStateId, fsm.initialStateId)
        self.assertEqual(
            [tm.inInputAlphabetById(l) for l in range(3)], [True, True, False]
        )
        self.assertEqual(tm.transitionMatrixById(2, 3 * 2), Halt.REJECT)
        self.assertEqual(tm.transitionMatrixById(1, 3 * 2), Halt.ACCEPT)

    def test_tapeUntouched(self) -> None:
        tm = binaryParity("odd").toTuringMachineDefinitionById()
        execution = tm.newExecutionById([1, 0, 1])
        self.assertEqual(execution.runToHalt(), Halt.ACCEPT)
        self.assertEqual(execution.steps, 4)
        self.assertEqual(execution.tapeIds[:3], (1, 0, 1))

    def test_typed(self) -> None:
        """
        Given a blank letter, the compiled machine keeps the letters and
        states of the finite state machine.
        """
        fsm = binaryParity("odd")
        tm = fsm.toTuringMachineDefinition(" ")
        self.assertEqual(list(tm.tapeAlphabet), ["0", "1", " "])
        self.assertEqual(tm.blank, " ")
        self.assertEqual(list(tm.states), ["even", "odd"])
        for word in ["", "0", "1", "0001001", "1000"]:
            self.assertEqual(tm.accepts(word), fsm.accepts(word), word)
        execution = tm.newExecution("01")
        execution.doOneStep()
        self.assertEqual(execution.state, "even")

    def test_typedIdStates(self) -> None:
        tm = aStarBStar().toTuringMachineDefinition("_")
        self.assertTrue(tm.states.isIdentity)
        self.assertTrue(tm.accepts("aabb"))
        self.assertFalse(tm.accepts("ba"))

    def test_blankClash(self) -> None:
        with self.assertRaises(DuplicateSymbolError):
            binaryParity("odd").toTuringMachineDefinition("1")

    def test_emptyAlphabet(self) -> None:
        fsm = FiniteStateMachineDefinition.byIds(0, [[]], [False])
        tm = compileToTuringMachine(fsm)
        self.assertEqual(tm.tapeAlphabetSize, 1)
        self.assertFalse(tm.acceptsById([]))
