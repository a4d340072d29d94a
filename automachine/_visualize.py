# -*- test-case-name: automachine._test.test_visualize -*-
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Tuple

import graphviz

from ._core import Halt, Move

if TYPE_CHECKING:
    from ._fsm import FiniteStateMachineDefinition
    from ._turing import TuringMachineDefinition

_MOVES = {Move.LEFT: "L", Move.STAY: "S", Move.RIGHT: "R"}


def _newDigraph() -> graphviz.Digraph:
    return graphviz.Digraph(
        graph_attr={"pack": "true", "dpi": "100"},
        node_attr={"fontname": "Menlo"},
        edge_attr={"fontname": "Menlo"},
    )


def _stateNode(stateId: int) -> str:
    return "s{}".format(stateId)


def finiteStateMachineDigraph(
    definition: FiniteStateMachineDefinition[Any, Any],
) -> graphviz.Digraph:
    """
    Produce a L{graphviz.Digraph} with one node per state and one edge per
    pair of connected states, labelled with the letters leading from one to
    the other.  The initial state is bold, final states are double circles.
    """
    digraph = _newDigraph()
    for stateId in range(definition.numberOfStates):
        digraph.node(
            _stateNode(stateId),
            label=str(definition.stateOfStateId(stateId)),
            shape="doublecircle" if definition.isFinalById(stateId) else "circle",
            style="bold" if stateId == definition.initialStateId else "",
            color="blue",
        )
    edges: Dict[Tuple[int, int], List[str]] = {}
    for stateId in range(definition.numberOfStates):
        for letterId in range(definition.alphabetSize):
            target = definition.transitionById(stateId, letterId)
            edges.setdefault((stateId, target), []).append(
                str(definition.letterOfLetterId(letterId))
            )
    for (stateId, target), letters in edges.items():
        digraph.edge(
            _stateNode(stateId), _stateNode(target), label=", ".join(letters)
        )
    return digraph


def turingMachineDigraph(
    definition: TuringMachineDefinition[Any, Any],
) -> graphviz.Digraph:
    """
    Produce a L{graphviz.Digraph} with one node per state, plus C{accept} and
    C{reject} nodes for the halt codes, and one edge per transition labelled
    C{read→written,move}.
    """
    digraph = _newDigraph()
    for stateId in range(definition.numberOfStates):
        digraph.node(
            _stateNode(stateId),
            label=str(definition.stateOfStateId(stateId)),
            shape="circle",
            style="bold" if stateId == definition.initialStateId else "",
            color="blue",
        )
    for halt in Halt:
        digraph.node(halt.name.lower(), shape="box")
    byId = definition.definitionById
    for stateId in range(definition.numberOfStates):
        for letterId in range(definition.tapeAlphabetSize):
            target, write, move = byId.action(stateId, letterId)
            head = Halt(target).name.lower() if target < 0 else _stateNode(target)
            digraph.edge(
                _stateNode(stateId),
                head,
                label="{}→{},{}".format(
                    definition.letterOfLetterId(letterId),
                    definition.letterOfLetterId(write),
                    _MOVES[Move(move)],
                ),
            )
    return digraph
