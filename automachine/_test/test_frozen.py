from unittest import TestCase

from .._core import OutOfRangeError, TableShapeError
from .._frozen import FrozenMatrix, FrozenVector, freezeMatrix, freezeVector


class FrozenVectorTests(TestCase):
    def test_copiesSource(self) -> None:
        """
        Changing the list a vector was built from doesn't change the vector.
        """
        source = [True, False, True]
        vector = FrozenVector(source)
        source[0] = False
        source.append(True)
        self.assertEqual(list(vector), [True, False, True])
        self.assertEqual(len(vector), 3)
        self.assertEqual(vector.length, 3)

    def test_outOfRange(self) -> None:
        vector = FrozenVector([1, 2])
        self.assertEqual(vector[1], 2)
        with self.assertRaises(OutOfRangeError):
            vector[2]
        # no wrap-around
        with self.assertRaises(OutOfRangeError):
            vector[-1]
        with self.assertRaises(IndexError):
            vector[5]

    def test_immutable(self) -> None:
        vector = FrozenVector([1])
        with self.assertRaises(AttributeError):
            vector._items = (2,)  # type:ignore[misc]
        with self.assertRaises(TypeError):
            vector[0] = 2  # type:ignore[index]

    def test_sharing(self) -> None:
        vector = FrozenVector([1, 2])
        self.assertIs(freezeVector(vector), vector)
        self.assertEqual(FrozenVector(vector), vector)
        self.assertEqual(hash(FrozenVector([1, 2])), hash(vector))
        self.assertNotEqual(FrozenVector([2, 1]), vector)


class FrozenMatrixTests(TestCase):
    def test_copiesSource(self) -> None:
        source = [[1, 2, 3], [4, 5, 6]]
        matrix = FrozenMatrix(source)
        source[0][0] = 100
        source[1] = [0, 0, 0]
        self.assertEqual(matrix[0, 0], 1)
        self.assertEqual(matrix.row(1), (4, 5, 6))
        self.assertEqual(matrix.shape, (2, 3))
        self.assertEqual(matrix.getLength(0), 2)
        self.assertEqual(matrix.getLength(1), 3)

    def test_emptyShapes(self) -> None:
        """
        C{[]} has no rows at all, C{[[]]} has one row of zero columns.
        """
        self.assertEqual(FrozenMatrix([]).shape, (0, 0))
        self.assertEqual(FrozenMatrix([[]]).shape, (1, 0))

    def test_ragged(self) -> None:
        with self.assertRaises(TableShapeError) as raised:
            FrozenMatrix([[1, 2], [3]])
        self.assertIn("row 1 has 1 columns", str(raised.exception))

    def test_outOfRange(self) -> None:
        matrix = FrozenMatrix([[1, 2], [3, 4]])
        for index in [(2, 0), (0, 2), (-1, 0), (0, -1)]:
            with self.assertRaises(OutOfRangeError):
                matrix[index]
        with self.assertRaises(OutOfRangeError):
            matrix.row(2)
        with self.assertRaises(OutOfRangeError):
            matrix.getLength(2)

    def test_immutable(self) -> None:
        matrix = FrozenMatrix([[1]])
        with self.assertRaises(AttributeError):
            matrix._rows = ((2,),)  # type:ignore[misc]
        with self.assertRaises(AttributeError):
            del matrix._columns

    def test_sharing(self) -> None:
        matrix = FrozenMatrix([[1, 2]])
        self.assertIs(freezeMatrix(matrix), matrix)
        self.assertEqual(FrozenMatrix(matrix), matrix)
        self.assertEqual(list(matrix), [(1, 2)])
