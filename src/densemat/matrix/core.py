"""The Matrix value type.

A Matrix owns its row-major storage outright. Operations that build
their result out of an operand's storage *consume* that operand: the
operand is invalidated and any later use raises ConsumedMatrixError.
Shape validation always happens first, so a call that raises
DimMismatch or InvalidAxisError leaves its operands usable.

Consuming: transpose, add, multiply, add_scalar, multiply_scalar,
matmul, exp, power, softmax, drain.
Borrowing: shape, at, set_at, dim_sum, copy, tolist, allclose, ==, str.

References:
    - NumPy broadcasting rules (the column-vector case is the only one
      supported here): https://numpy.org/doc/stable/user/basics.broadcasting.html
"""

from __future__ import annotations

import cmath
import copy
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar

from densemat import elements, kernels
from densemat.config import get_settings
from densemat.errors import ConsumedMatrixError, DimMismatch, RaggedRowsError

T = TypeVar("T")

Shape = tuple[int, int]


class Matrix(Generic[T]):
    """Dense 2-D matrix of arbitrary elements, stored row-major.

    Args:
        rows: Non-empty rectangular nested sequence. The rows are copied,
            so the new matrix never aliases the caller's lists.

    Raises:
        RaggedRowsError: If ``rows`` is empty, has an empty first row, or
            any row differs in length from the first.

    Examples:
        >>> m = Matrix([[1, 2, 3], [4, 5, 6]])
        >>> m.shape
        (2, 3)
        >>> print(m)
        [[1, 2, 3]
         [4, 5, 6]]

    """

    __slots__ = ("_rows", "_nrows", "_ncols")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: Iterable[Sequence[T]]):
        owned = [list(row) for row in rows]
        if not owned or not owned[0]:
            raise RaggedRowsError("a matrix needs at least one row and one column")
        ncols = len(owned[0])
        for j, row in enumerate(owned):
            if len(row) != ncols:
                raise RaggedRowsError(f"row {j} has {len(row)} columns, expected {ncols}")
        self._rows: list[list[T]] | None = owned
        self._nrows = len(owned)
        self._ncols = ncols

    @classmethod
    def _from_owned(cls, rows: list[list[T]]) -> Matrix[T]:
        # rows come from a kernel and are already rectangular and unshared
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._nrows = len(rows)
        matrix._ncols = len(rows[0])
        return matrix

    @classmethod
    def fill(cls, shape: Shape, value: T) -> Matrix[T]:
        """Matrix of ``shape`` with every cell a copy of ``value``.

        Examples:
            >>> Matrix.fill((2, 3), 0).tolist()
            [[0, 0, 0], [0, 0, 0]]

        """
        nrows, ncols = shape
        if nrows < 1 or ncols < 1:
            raise RaggedRowsError(f"cannot fill a matrix of shape {shape}")
        return cls._from_owned(
            [[copy.copy(value) for _ in range(ncols)] for _ in range(nrows)]
        )

    # ownership

    def _live(self, operation: str) -> list[list[T]]:
        if self._rows is None:
            raise ConsumedMatrixError(operation)
        return self._rows

    def _take(self, operation: str) -> list[list[T]]:
        rows = self._live(operation)
        self._rows = None
        return rows

    @property
    def consumed(self) -> bool:
        """True once a consuming operation has taken this matrix's storage."""
        return self._rows is None

    # introspection

    @property
    def shape(self) -> Shape:
        self._live("shape")
        return self._nrows, self._ncols

    @property
    def nrows(self) -> int:
        self._live("nrows")
        return self._nrows

    @property
    def ncols(self) -> int:
        self._live("ncols")
        return self._ncols

    def at(self, row: int, col: int) -> T | None:
        """Cell at (``row``, ``col``), or None if the position is out of range.

        Negative indices count as out of range. A cell that holds None
        reads the same as a missing one; compare against ``shape`` when
        the distinction matters.

        Examples:
            >>> m = Matrix([[1, 2], [3, 4]])
            >>> m.at(1, 0)
            3
            >>> m.at(2, 0) is None
            True

        """
        rows = self._live("at")
        if 0 <= row < self._nrows and 0 <= col < self._ncols:
            return rows[row][col]
        return None

    def set_at(self, row: int, col: int, value: T) -> bool:
        """Overwrite one cell. Returns False, changing nothing, if out of range."""
        rows = self._live("set_at")
        if 0 <= row < self._nrows and 0 <= col < self._ncols:
            rows[row][col] = value
            return True
        return False

    def copy(self) -> Matrix[T]:
        """Independent matrix with the same cells."""
        return Matrix._from_owned([list(row) for row in self._live("copy")])

    def tolist(self) -> list[list[T]]:
        return [list(row) for row in self._live("tolist")]

    # consuming transforms

    def transpose(self) -> Matrix[T]:
        """Swap rows and columns, consuming this matrix.

        Examples:
            >>> Matrix([[1, 2], [4, 5], [7, 8]]).transpose().tolist()
            [[1, 4, 7], [2, 5, 8]]

        """
        return Matrix._from_owned(kernels.transpose_rows(self._take("transpose")))

    def add(self, other: Matrix[T]) -> Matrix[T]:
        """Elementwise sum, consuming both operands.

        ``other`` may have the same shape as ``self``, or be a column
        vector with as many rows as ``self``, in which case it is
        repeated across every column.

        Raises:
            DimMismatch: For any other shape pairing.

        Examples:
            >>> a = Matrix([[1, 2], [3, 4]])
            >>> a.add(Matrix([[10], [20]])).tolist()
            [[11, 12], [23, 24]]

        """
        kernels.broadcast_mode(self.shape, other.shape)
        left, right = self._take_pair(other, "add")
        return Matrix._from_owned(kernels.add_rows(left, right))

    def multiply(self, other: Matrix[T]) -> Matrix[T]:
        """Elementwise (Hadamard) product, consuming both operands."""
        if self.shape != other.shape:
            raise DimMismatch(self.shape, other.shape)
        left, right = self._take_pair(other, "multiply")
        return Matrix._from_owned(kernels.multiply_rows(left, right))

    def add_scalar(self, value: T) -> Matrix[T]:
        """Add ``value`` to every cell, consuming this matrix."""
        return self.add(Matrix.fill(self.shape, value))

    def multiply_scalar(self, value: T) -> Matrix[T]:
        """Multiply every cell by ``value``, consuming this matrix."""
        return self.multiply(Matrix.fill(self.shape, value))

    def matmul(self, other: Matrix[T]) -> Matrix[T]:
        """Matrix product ``self @ other``; see :func:`matmul`."""
        if self.ncols != other.nrows:
            raise DimMismatch(self.shape, other.shape)
        if other is self:
            left = self._take("matmul")
            right = [list(row) for row in left]
        else:
            left, right = self._take_pair(other, "matmul")
        return Matrix._from_owned(kernels.matmul_rows(left, right))

    def exp(self) -> Matrix[T]:
        """Exponentiate every cell in row-major order, consuming this matrix.

        Examples:
            >>> Matrix([[0.0, 0.0]]).exp().tolist()
            [[1.0, 1.0]]

        """
        rows = self._take("exp")
        return Matrix._from_owned(kernels.apply_in_place(rows, elements.exp))

    def power(self, exponent: Any) -> Matrix[T]:
        """Raise every cell to ``exponent``, consuming this matrix.

        This is the ``pow`` capability applied cell by cell;
        ``m ** exponent`` is the operator form.

        Examples:
            >>> Matrix([[1, 2], [3, 4]]).power(2).tolist()
            [[1, 4], [9, 16]]

        """
        rows = self._take("power")
        return Matrix._from_owned(
            kernels.apply_in_place(rows, lambda value: elements.power(value, exponent))
        )

    def softmax(self, dim: int, *, stable: bool | None = None) -> Matrix[T]:
        """Normalize exponentials along ``dim``, consuming this matrix.

        ``dim=1`` makes every row sum to 1, ``dim=0`` every column.

        Args:
            dim: Axis to normalize over (0 or 1).
            stable: Subtract the per-line max first. Default from
                settings (off, which reproduces the plain formula).

        Raises:
            InvalidAxisError: If ``dim`` is not 0 or 1; the matrix is
                left intact.

        Examples:
            >>> m = Matrix([[1.0, 5.0], [4.0, 5.0]]).softmax(0)
            >>> [[round(v, 4) for v in row] for row in m.tolist()]
            [[0.0474, 0.5], [0.9526, 0.5]]

        """
        kernels.check_axis(dim)
        if stable is None:
            stable = get_settings().stable_softmax
        rows = self._take("softmax")
        return Matrix._from_owned(kernels.softmax_rows(rows, dim, stable=stable))

    def drain(self) -> Iterator[T]:
        """Consume the matrix as a flat row-major iterator of its cells.

        The matrix is invalidated immediately; the returned iterator
        yields each cell exactly once and cannot be restarted.

        Examples:
            >>> m = Matrix([[1, 2], [3, 4]])
            >>> list(m.drain())
            [1, 2, 3, 4]
            >>> m.consumed
            True

        """
        return kernels.drain_rows(self._take("drain"))

    def _take_pair(self, other: Matrix[T], operation: str) -> tuple[list[list[T]], list[list[T]]]:
        # taking the same matrix twice is fine: kernels read b[j][i] before writing a[j][i]
        if other is self:
            rows = self._take(operation)
            return rows, rows
        other._live(operation)
        return self._take(operation), other._take(operation)

    # borrowing queries

    def dim_sum(self, dim: int) -> Matrix[T]:
        """Sum along ``dim``: 0 gives per-column totals, 1 per-row totals.

        Raises:
            InvalidAxisError: If ``dim`` is not 0 or 1.

        Examples:
            >>> Matrix([[1, 2, 3], [4, 5, 6]]).dim_sum(0).tolist()
            [[5, 7, 9]]
            >>> Matrix([[1, 2, 3], [4, 5, 6]]).dim_sum(1).tolist()
            [[6], [15]]

        """
        return Matrix._from_owned(kernels.dim_sum_rows(self._live("dim_sum"), dim))

    def allclose(
        self,
        other: Matrix[T],
        *,
        rel_tol: float | None = None,
        abs_tol: float | None = None,
    ) -> bool:
        """True if shapes match and every cell pair is within tolerance.

        Args:
            other: Matrix to compare against.
            rel_tol: Relative tolerance. Default from settings.
            abs_tol: Absolute tolerance. Default from settings.

        Examples:
            >>> Matrix([[0.1 + 0.2]]).allclose(Matrix([[0.3]]))
            True

        """
        settings = get_settings()
        rel_tol = settings.rel_tol if rel_tol is None else rel_tol
        abs_tol = settings.abs_tol if abs_tol is None else abs_tol
        if self.shape != other.shape:
            return False
        return all(
            cmath.isclose(x, y, rel_tol=rel_tol, abs_tol=abs_tol)
            for row, other_row in zip(self._live("allclose"), other._live("allclose"))
            for x, y in zip(row, other_row)
        )

    # dunder protocol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._live("==") == other._live("==")

    def __str__(self) -> str:
        rows = self._live("str")
        lines = ("[" + ", ".join(str(value) for value in row) + "]" for row in rows)
        return "[" + "\n ".join(lines) + "]"

    def __repr__(self) -> str:
        if self._rows is None:
            return "Matrix(<consumed>)"
        return f"Matrix({self._rows!r})"

    def __add__(self, other: Matrix[T] | T) -> Matrix[T]:
        if isinstance(other, Matrix):
            return self.add(other)
        return self.add_scalar(other)

    def __radd__(self, other: T) -> Matrix[T]:
        return self.add_scalar(other)

    def __mul__(self, other: Matrix[T] | T) -> Matrix[T]:
        if isinstance(other, Matrix):
            return self.multiply(other)
        return self.multiply_scalar(other)

    def __rmul__(self, other: T) -> Matrix[T]:
        return self.multiply_scalar(other)

    def __matmul__(self, other: Matrix[T]) -> Matrix[T]:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __pow__(self, exponent: Any) -> Matrix[T]:
        return self.power(exponent)


def matmul(a: Matrix[T], b: Matrix[T]) -> Matrix[T]:
    """Matrix product of ``a`` (M, K) and ``b`` (K, N), consuming both.

    Cell ``[j][i]`` is ``a[j][0]*b[0][i] + ... + a[j][K-1]*b[K-1][i]``
    accumulated in ascending ``k`` order from the element zero.

    Args:
        a: Left matrix (M, K).
        b: Right matrix (K, N).

    Returns:
        Product matrix (M, N).

    Raises:
        DimMismatch: If ``a.ncols != b.nrows``; carries both shapes and
            leaves both operands usable.

    Examples:
        >>> a = Matrix([[1, 2, 3], [4, 5, 6]])
        >>> b = Matrix([[1, 2], [3, 4], [5, 6]])
        >>> matmul(a, b).tolist()
        [[22, 28], [49, 64]]

    """
    return a.matmul(b)
