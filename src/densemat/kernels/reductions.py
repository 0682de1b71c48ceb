"""Dimension-wise sums and softmax over row lists."""

from __future__ import annotations

import logging
import operator

from densemat.elements import exp, zero
from densemat.errors import InvalidAxisError
from densemat.kernels.elementwise import Rows, apply_in_place, rows_shape

logger = logging.getLogger(__name__)


def check_axis(dim: object) -> int:
    """Return ``dim`` as an int if it names axis 0 or 1, else raise InvalidAxisError.

    Any integer type (including numpy integers) is accepted; bools are not.
    """
    if isinstance(dim, bool):
        raise InvalidAxisError(dim)
    try:
        axis = operator.index(dim)
    except TypeError:
        raise InvalidAxisError(dim) from None
    if axis not in (0, 1):
        raise InvalidAxisError(dim)
    return axis


def dim_sum_rows(rows: Rows, dim: int) -> Rows:
    """Sum along an axis without modifying ``rows``.

    Args:
        rows: Matrix rows.
        dim: 0 for per-column sums (one row out), 1 for per-row sums
            (one column out).

    Returns:
        A (1, N) row list for ``dim=0`` or an (M, 1) row list for ``dim=1``.

    Raises:
        InvalidAxisError: If ``dim`` is not 0 or 1.

    Examples:
        >>> dim_sum_rows([[1, 2, 3], [4, 5, 6]], 0)
        [[5, 7, 9]]
        >>> dim_sum_rows([[1, 2, 3], [4, 5, 6]], 1)
        [[6], [15]]

    """
    dim = check_axis(dim)
    if dim == 0:
        sums = [zero(value) for value in rows[0]]
        for row in rows:
            for i, value in enumerate(row):
                sums[i] += value
        return [sums]
    result = []
    for row in rows:
        acc = zero(row[0])
        for value in row:
            acc += value
        result.append([acc])
    return result


def _shift_by_max(rows: Rows, dim: int) -> None:
    if dim == 1:
        for row in rows:
            peak = max(row)
            for i, value in enumerate(row):
                row[i] = value - peak
        return
    peaks = [max(column) for column in zip(*rows)]
    for row in rows:
        for i, value in enumerate(row):
            row[i] = value - peaks[i]


def softmax_rows(rows: Rows, dim: int, stable: bool = False) -> Rows:
    """Exponentiate then normalize each line along ``dim`` to sum to 1.

    ``rows`` is overwritten with the result. With ``stable=False`` the
    cells are exponentiated as given, which overflows for large
    magnitudes; ``stable=True`` first subtracts the max of each line,
    which leaves the result unchanged mathematically.

    Args:
        rows: Matrix rows (consumed).
        dim: 1 normalizes each row, 0 normalizes each column.
        stable: Subtract the per-line max before exponentiating.

    Returns:
        The normalized rows.

    Raises:
        InvalidAxisError: If ``dim`` is not 0 or 1.

    Examples:
        >>> out = softmax_rows([[0.0, 0.0], [1.0, 1.0]], 1)
        >>> out
        [[0.5, 0.5], [0.5, 0.5]]

    """
    dim = check_axis(dim)
    logger.debug("softmax over dim=%d of %s (stable=%s)", dim, rows_shape(rows), stable)
    if stable:
        _shift_by_max(rows, dim)
    apply_in_place(rows, exp)
    sums = dim_sum_rows(rows, dim)
    if dim == 1:
        for row, (total,) in zip(rows, sums):
            for i, value in enumerate(row):
                row[i] = value / total
        return rows
    totals = sums[0]
    for row in rows:
        for i, value in enumerate(row):
            row[i] = value / totals[i]
    return rows
