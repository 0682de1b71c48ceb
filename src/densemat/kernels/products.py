"""Transpose and matrix product kernels.

References:
    - Golub & Van Loan, Matrix Computations, 4th ed., section 1.1
      (ijk loop orderings of gaxpy and dot-product matmul)
"""

from __future__ import annotations

import logging

from densemat.elements import zero
from densemat.errors import DimMismatch
from densemat.kernels.elementwise import Rows, rows_shape

logger = logging.getLogger(__name__)


def transpose_rows(rows: Rows) -> Rows:
    """Move the cells of ``rows`` into a new column-major row list.

    ``rows`` is emptied; the cell objects themselves are moved, not copied.

    Examples:
        >>> transpose_rows([[1, 2], [4, 5], [7, 8]])
        [[1, 4, 7], [2, 5, 8]]

    """
    result = [list(column) for column in zip(*rows)]
    rows.clear()
    return result


def matmul_rows(a: Rows, b: Rows) -> Rows:
    """Dot-product matrix multiplication.

    Cell ``[j][i]`` starts from the element zero and accumulates
    ``a[j][k] * b[k][i]`` with ``+=`` for ascending ``k``, so float
    results are reproducible bit for bit. Both row lists are consumed:
    ``b`` is turned into its columns up front, each row of ``a`` is
    released once its output row is complete, and the columns are
    released after the last row.

    Args:
        a: Left operand rows, shape (M, K).
        b: Right operand rows, shape (K, N).

    Returns:
        Product rows, shape (M, N).

    Raises:
        DimMismatch: If ``a`` has a column count different from
            ``b``'s row count. Neither operand is touched in that case.

    Examples:
        >>> matmul_rows([[1, 2, 3], [4, 5, 6]], [[1, 2], [3, 4], [5, 6]])
        [[22, 28], [49, 64]]

    """
    shape_a, shape_b = rows_shape(a), rows_shape(b)
    if shape_a[1] != shape_b[0]:
        raise DimMismatch(shape_a, shape_b)
    logger.debug("matmul %s @ %s", shape_a, shape_b)

    columns = transpose_rows(b)
    result = []
    for j in range(len(a)):
        row = a[j]
        a[j] = []
        out = []
        for column in columns:
            acc = zero(row[0])
            for x, y in zip(row, column):
                acc += x * y
            out.append(acc)
        result.append(out)
    a.clear()
    columns.clear()
    return result
