from unittest import TestCase

from .._visualize import finiteStateMachineDigraph, turingMachineDigraph
from .test_fsm import binaryParity
from .test_turing import threeStateBusyBeaver, unaryIncrement


class FiniteStateMachineDigraphTests(TestCase):
    def test_nodesAndEdges(self) -> None:
        """
        Letters leading from one state to the same other state share an edge.
        """
        source = finiteStateMachineDigraph(binaryParity("odd")).source
        self.assertIn("s0 [label=even", source)
        self.assertIn("s1 [label=odd", source)
        self.assertIn("doublecircle", source)
        self.assertIn("bold", source)
        self.assertIn("s0 -> s1 [label=1]", source)
        self.assertIn("s1 -> s0 [label=0]", source)

    def test_asDigraph(self) -> None:
        self.assertEqual(
            binaryParity("even").asDigraph().source,
            finiteStateMachineDigraph(binaryParity("even")).source,
        )


class TuringMachineDigraphTests(TestCase):
    def test_haltNodes(self) -> None:
        source = turingMachineDigraph(threeStateBusyBeaver()).source
        self.assertIn("accept [shape=box]", source)
        self.assertIn("reject [shape=box]", source)
        self.assertIn("s2 -> accept", source)
        self.assertIn('s0 -> s1 [label="0→1,R"]', source)

    def test_typedLabels(self) -> None:
        source = unaryIncrement().asDigraph().source
        self.assertIn("s0 [label=scan", source)
        self.assertIn('s0 -> s0 [label="1→1,R"]', source)
        self.assertIn('s0 -> accept [label="_→1,S"]', source)
