"""Elementwise and broadcasting kernels over row-major row lists.

Kernels take ownership of the row lists they are given: the left
operand's rows are overwritten in place and returned as the result,
so no second result buffer is allocated.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Iterator
from typing import Any, Literal

from densemat.errors import DimMismatch

logger = logging.getLogger(__name__)

Rows = list[list[Any]]
BroadcastMode = Literal["same", "column"]


def rows_shape(rows: Rows) -> tuple[int, int]:
    return len(rows), len(rows[0])


def broadcast_mode(shape_a: tuple[int, int], shape_b: tuple[int, int]) -> BroadcastMode:
    """Decide how the right operand of an add lines up with the left.

    Args:
        shape_a: Shape of the left operand.
        shape_b: Shape of the right operand.

    Returns:
        "same" for identical shapes, "column" when ``b`` is a column
        vector with as many rows as ``a``.

    Raises:
        DimMismatch: For any other pair of shapes.

    Examples:
        >>> broadcast_mode((2, 3), (2, 3))
        'same'
        >>> broadcast_mode((2, 3), (2, 1))
        'column'

    """
    if shape_a == shape_b:
        return "same"
    if shape_b[1] == 1 and shape_b[0] == shape_a[0]:
        return "column"
    raise DimMismatch(shape_a, shape_b)


def elementwise(op: Callable[[Any, Any], Any], a: Rows, b: Rows) -> Rows:
    """Apply ``op`` cell by cell, writing the results into ``a``.

    Both operands must already have the same shape.
    """
    for row, other in zip(a, b):
        for i, value in enumerate(other):
            row[i] = op(row[i], value)
    return a


def broadcast_column(op: Callable[[Any, Any], Any], a: Rows, column: Rows) -> Rows:
    """Apply ``op`` between every cell of ``a`` and its row's entry in ``column``."""
    for row, (value,) in zip(a, column):
        for i in range(len(row)):
            row[i] = op(row[i], value)
    return a


def add_rows(a: Rows, b: Rows) -> Rows:
    """Elementwise ``a + b`` with column-vector broadcasting of ``b``.

    Examples:
        >>> add_rows([[1, 2], [3, 4]], [[10], [20]])
        [[11, 12], [23, 24]]

    """
    mode = broadcast_mode(rows_shape(a), rows_shape(b))
    if mode == "column":
        logger.debug("broadcasting column %s across %s", rows_shape(b), rows_shape(a))
        return broadcast_column(operator.add, a, b)
    return elementwise(operator.add, a, b)


def multiply_rows(a: Rows, b: Rows) -> Rows:
    """Elementwise (Hadamard) product; shapes must match exactly."""
    shape_a, shape_b = rows_shape(a), rows_shape(b)
    if shape_a != shape_b:
        raise DimMismatch(shape_a, shape_b)
    return elementwise(operator.mul, a, b)


def apply_in_place(rows: Rows, fn: Callable[[Any], Any]) -> Rows:
    """Replace every cell with ``fn(cell)`` in row-major order."""
    for row in rows:
        for i, value in enumerate(row):
            row[i] = fn(value)
    return rows


def drain_rows(rows: Rows) -> Iterator[Any]:
    """Yield cells row-major, releasing each row once it is exhausted.

    The generator owns ``rows``: when it finishes, ``rows`` is empty.

    Examples:
        >>> rows = [[1, 2], [3, 4]]
        >>> list(drain_rows(rows))
        [1, 2, 3, 4]
        >>> rows
        []

    """
    for j in range(len(rows)):
        row = rows[j]
        rows[j] = []
        yield from row
    rows.clear()
