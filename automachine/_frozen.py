# -*- test-case-name: automachine._test.test_frozen -*-

"""
Read-only tables that machine definitions can share without copying.

Both tables copy their source once, at construction, into tuples.  Nothing
afterwards can change their contents, so any number of definitions (and any
number of threads) may read the same table.
"""
from __future__ import annotations

from typing import Generic, Iterable, Iterator, Sequence, TypeVar, Union

from ._core import OutOfRangeError, TableShapeError

T = TypeVar("T")


class FrozenVector(Generic[T]):
    """
    An immutable one-dimensional table.
    """

    __slots__ = ("_items",)
    _items: tuple[T, ...]

    def __init__(self, source: Iterable[T]) -> None:
        if isinstance(source, FrozenVector):
            items = source._items
        else:
            items = tuple(source)
        object.__setattr__(self, "_items", items)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("{} is immutable".format(type(self).__name__))

    def __delattr__(self, name: str) -> None:
        raise AttributeError("{} is immutable".format(type(self).__name__))

    def __getitem__(self, i: int) -> T:
        if not 0 <= i < len(self._items):
            raise OutOfRangeError(
                "index {} out of range [0, {})".format(i, len(self._items))
            )
        return self._items[i]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrozenVector):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return "FrozenVector({!r})".format(list(self._items))

    @property
    def length(self) -> int:
        return len(self._items)


class FrozenMatrix(Generic[T]):
    """
    An immutable, rectangular two-dimensional table, indexed as
    C{matrix[row, column]}.

    @note: C{[]} is a 0 x 0 matrix while C{[[]]} is a 1 x 0 matrix; the latter
        is what a one-state machine with an empty alphabet uses.
    """

    __slots__ = ("_rows", "_columns")
    _rows: tuple[tuple[T, ...], ...]
    _columns: int

    def __init__(self, source: Union[FrozenMatrix[T], Iterable[Iterable[T]]]) -> None:
        if isinstance(source, FrozenMatrix):
            rows = source._rows
            columns = source._columns
        else:
            rows = tuple(tuple(row) for row in source)
            columns = len(rows[0]) if rows else 0
            for n, row in enumerate(rows):
                if len(row) != columns:
                    raise TableShapeError(
                        "matrix is not rectangular: row {} has {} columns, "
                        "row 0 has {}".format(n, len(row), columns)
                    )
        object.__setattr__(self, "_rows", rows)
        object.__setattr__(self, "_columns", columns)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("{} is immutable".format(type(self).__name__))

    def __delattr__(self, name: str) -> None:
        raise AttributeError("{} is immutable".format(type(self).__name__))

    def _checkRow(self, i: int) -> None:
        if not 0 <= i < len(self._rows):
            raise OutOfRangeError(
                "row {} out of range [0, {})".format(i, len(self._rows))
            )

    def __getitem__(self, index: tuple[int, int]) -> T:
        i, j = index
        self._checkRow(i)
        if not 0 <= j < self._columns:
            raise OutOfRangeError(
                "column {} out of range [0, {})".format(j, self._columns)
            )
        return self._rows[i][j]

    def row(self, i: int) -> Sequence[T]:
        """
        The C{i}th row, as a tuple.
        """
        self._checkRow(i)
        return self._rows[i]

    def __iter__(self) -> Iterator[tuple[T, ...]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrozenMatrix):
            return NotImplemented
        return (self._rows, self._columns) == (other._rows, other._columns)

    def __hash__(self) -> int:
        return hash((self._rows, self._columns))

    def __repr__(self) -> str:
        return "FrozenMatrix({!r})".format([list(row) for row in self._rows])

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self._rows), self._columns)

    def getLength(self, dimension: int) -> int:
        """
        Size of the matrix along C{dimension}: 0 for rows, 1 for columns.
        """
        if dimension == 0:
            return len(self._rows)
        if dimension == 1:
            return self._columns
        raise OutOfRangeError("dimension {} out of range [0, 2)".format(dimension))


VectorSource = Union[FrozenVector[bool], Iterable[bool]]
MatrixSource = Union[FrozenMatrix[int], Iterable[Iterable[int]]]


def freezeVector(source: Union[FrozenVector[T], Iterable[T]]) -> FrozenVector[T]:
    """
    Return C{source} itself when it is already frozen, a frozen copy otherwise.
    """
    if isinstance(source, FrozenVector):
        return source
    return FrozenVector(source)


def freezeMatrix(
    source: Union[FrozenMatrix[T], Iterable[Iterable[T]]]
) -> FrozenMatrix[T]:
    """
    Return C{source} itself when it is already frozen, a frozen copy otherwise.
    """
    if isinstance(source, FrozenMatrix):
        return source
    return FrozenMatrix(source)
