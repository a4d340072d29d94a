# -*- test-case-name: automachine -*-
from ._core import (
    BlankInInputAlphabetError,
    ConstructionError,
    DuplicateStateError,
    DuplicateSymbolError,
    Halt,
    InternalInvariantError,
    InvalidLetterError,
    MachineError,
    MachineLookupError,
    Move,
    OutOfRangeConstructionError,
    OutOfRangeError,
    SymbolNotInInputAlphabetError,
    TableShapeError,
    TypeConsistencyError,
    UnknownStateError,
    UnknownSymbolError,
)
from ._frozen import FrozenMatrix, FrozenVector
from ._registry import Registry
from ._fsm import (
    FiniteStateMachineDefinition,
    FiniteStateMachineDefinitionById,
    FiniteStateMachineExecution,
    FiniteStateMachineExecutionById,
)
from ._turing import (
    Tape,
    TuringMachineDefinition,
    TuringMachineDefinitionById,
    TuringMachineExecution,
    TuringMachineExecutionById,
)
from ._compile import compileToTuringMachine

__all__ = [
    "FrozenVector",
    "FrozenMatrix",
    "Registry",
    "FiniteStateMachineDefinition",
    "FiniteStateMachineDefinitionById",
    "FiniteStateMachineExecution",
    "FiniteStateMachineExecutionById",
    "TuringMachineDefinition",
    "TuringMachineDefinitionById",
    "TuringMachineExecution",
    "TuringMachineExecutionById",
    "Tape",
    "compileToTuringMachine",
    "Halt",
    "Move",
    "MachineError",
    "ConstructionError",
    "DuplicateSymbolError",
    "DuplicateStateError",
    "OutOfRangeConstructionError",
    "TableShapeError",
    "BlankInInputAlphabetError",
    "TypeConsistencyError",
    "MachineLookupError",
    "UnknownSymbolError",
    "InvalidLetterError",
    "UnknownStateError",
    "SymbolNotInInputAlphabetError",
    "OutOfRangeError",
    "InternalInvariantError",
]
