# -*- test-case-name: automachine._test.test_registry -*-

"""
Translation between user-chosen letters or states and the dense integer ids
the engines compute on.
"""
from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, Literal, Optional, Tuple, TypeVar

from ._core import (
    DuplicateStateError,
    DuplicateSymbolError,
    TypeConsistencyError,
    UnknownStateError,
    UnknownSymbolError,
)

V = TypeVar("V")
Kind = Literal["letter", "state"]


class Registry(Generic[V]):
    """
    A bidirectional mapping between ids C{0..len(self)-1} and values.

    Don't call the constructor directly; use L{Registry.fromValues} or
    L{Registry.identity}.
    """

    def __init__(
        self,
        kind: Kind,
        values: Optional[Tuple[V, ...]],
        ids: Optional[Dict[V, int]],
        count: int,
    ) -> None:
        self.kind = kind
        self._values = values
        self._ids = ids
        self._count = count

    @classmethod
    def fromValues(
        cls,
        kind: Kind,
        values: Iterable[V],
        valueType: Optional[type] = None,
    ) -> Registry[V]:
        """
        Assign ids to C{values} in iteration order.

        @param kind: C{"letter"} or C{"state"}; selects which duplicate and
            lookup errors are raised.

        @param valueType: if given, every value must be an instance of it.

        @raise DuplicateSymbolError: if a letter is repeated.
        @raise DuplicateStateError: if a state is repeated.
        @raise TypeConsistencyError: if a value is not a C{valueType}.
        """
        ordered = tuple(values)
        ids: Dict[V, int] = {}
        for i, value in enumerate(ordered):
            if valueType is not None and not isinstance(value, valueType):
                raise TypeConsistencyError(
                    "{} {!r} is not a {}".format(kind, value, valueType.__name__)
                )
            try:
                duplicate = value in ids
            except TypeError:
                raise TypeConsistencyError(
                    "{} {!r} is not hashable".format(kind, value)
                ) from None
            if duplicate:
                if kind == "letter":
                    raise DuplicateSymbolError(value)
                raise DuplicateStateError(value)
            ids[value] = i
        return cls(kind, ordered, ids, len(ordered))

    @classmethod
    def identity(
        cls, kind: Kind, count: int, valueType: type = int
    ) -> Registry[int]:
        """
        Id-only mode: every value is its own id.  C{count} comes from the
        dimensions of the table the registry belongs to.

        @raise TypeConsistencyError: if C{valueType} is not C{int}, since
            there would be no way to turn an arbitrary value into an id.
        """
        if valueType is not int:
            raise TypeConsistencyError(
                "no {kind}s were given, so {kind}s are identified by id, but "
                "the declared {kind} type is {name}, not int".format(
                    kind=kind, name=getattr(valueType, "__name__", valueType)
                )
            )
        return cls(kind, None, None, count)

    @property
    def isIdentity(self) -> bool:
        return self._ids is None

    @property
    def values(self) -> Tuple[V, ...]:
        """
        All values, in id order.
        """
        if self._values is None:
            return tuple(range(self._count))  # type:ignore[arg-type]
        return self._values

    def _unknown(self, value: object) -> Exception:
        if self.kind == "letter":
            return UnknownSymbolError(value)
        return UnknownStateError(value)

    def idOf(self, value: V) -> int:
        if self._ids is None:
            if (
                isinstance(value, int)
                and not isinstance(value, bool)
                and 0 <= value < self._count
            ):
                return value
            raise self._unknown(value)
        try:
            return self._ids[value]
        except (KeyError, TypeError):
            # TypeError: unhashable values can't be members either.
            raise self._unknown(value) from None

    def valueOf(self, id: int) -> V:
        if not 0 <= id < self._count:
            raise self._unknown(id)
        if self._values is None:
            return id  # type:ignore[return-value]
        return self._values[id]

    def __contains__(self, value: object) -> bool:
        try:
            self.idOf(value)  # type:ignore[arg-type]
        except (UnknownSymbolError, UnknownStateError):
            return False
        return True

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[V]:
        return iter(self.values)

    def __repr__(self) -> str:
        if self._values is None:
            return "<Registry {}s: ids 0..{}>".format(self.kind, self._count - 1)
        return "<Registry {}s: {!r}>".format(self.kind, list(self._values))
