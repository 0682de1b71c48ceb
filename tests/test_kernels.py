"""Tests for densemat.kernels module."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from densemat.errors import DimMismatch, InvalidAxisError
from densemat.kernels import (
    add_rows,
    apply_in_place,
    broadcast_mode,
    check_axis,
    dim_sum_rows,
    drain_rows,
    matmul_rows,
    multiply_rows,
    softmax_rows,
    transpose_rows,
)


@st.composite
def int_rows(draw, nrows=None, ncols=None):
    if nrows is None:
        nrows = draw(st.integers(min_value=1, max_value=6))
    if ncols is None:
        ncols = draw(st.integers(min_value=1, max_value=6))
    row = st.lists(st.integers(min_value=-50, max_value=50), min_size=ncols, max_size=ncols)
    return draw(st.lists(row, min_size=nrows, max_size=nrows))


class TestBroadcastMode:
    """Tests for broadcast_mode."""

    def test_same(self):
        assert broadcast_mode((3, 4), (3, 4)) == "same"

    def test_column(self):
        assert broadcast_mode((3, 4), (3, 1)) == "column"

    def test_row_vector_rejected(self):
        with pytest.raises(DimMismatch) as exc_info:
            broadcast_mode((3, 4), (1, 4))
        assert exc_info.value == DimMismatch((3, 4), (1, 4))

    def test_column_wrong_length_rejected(self):
        with pytest.raises(DimMismatch):
            broadcast_mode((3, 4), (2, 1))


class TestAddRows:
    """Tests for add_rows and multiply_rows."""

    def test_reuses_left_buffer(self):
        a = [[1, 2], [3, 4]]
        first_row = a[0]
        result = add_rows(a, [[10, 20], [30, 40]])
        assert result is a
        assert result[0] is first_row
        assert result == [[11, 22], [33, 44]]

    def test_column_broadcast(self):
        assert add_rows([[1, 2, 3], [4, 5, 6]], [[100], [200]]) == [
            [101, 102, 103],
            [204, 205, 206],
        ]

    def test_multiply(self):
        assert multiply_rows([[1, 2], [3, 4]], [[5, 6], [7, 8]]) == [[5, 12], [21, 32]]

    def test_multiply_mismatch(self):
        with pytest.raises(DimMismatch):
            multiply_rows([[1, 2]], [[1], [2]])


class TestTransposeRows:
    """Tests for transpose_rows."""

    def test_basic(self):
        assert transpose_rows([[1, 2], [4, 5], [7, 8]]) == [[1, 4, 7], [2, 5, 8]]

    def test_source_emptied(self):
        rows = [[1, 2, 3]]
        transpose_rows(rows)
        assert rows == []

    def test_moves_cells(self):
        cell = object()
        result = transpose_rows([[cell, None]])
        assert result[0][0] is cell


class TestMatmulRows:
    """Tests for matmul_rows."""

    def test_known_product(self):
        a = [[1, 2, 3], [4, 5, 6]]
        b = [[1, 2], [3, 4], [5, 6]]
        assert matmul_rows(a, b) == [[22, 28], [49, 64]]

    def test_operands_consumed(self):
        a = [[1, 2], [3, 4]]
        b = [[5, 6], [7, 8]]
        matmul_rows(a, b)
        assert a == []
        assert b == []

    def test_mismatch_leaves_operands(self):
        a = [[1, 2, 3], [4, 5, 6]]
        b = [[1, 2, 3], [4, 5, 6]]
        with pytest.raises(DimMismatch) as exc_info:
            matmul_rows(a, b)
        assert (exc_info.value.shape_a, exc_info.value.shape_b) == ((2, 3), (2, 3))
        assert a == [[1, 2, 3], [4, 5, 6]]
        assert b == [[1, 2, 3], [4, 5, 6]]

    def test_ascending_k_accumulation(self):
        a = [[0.1, 0.2, 0.3, 1e16, -1e16]]
        b = [[1.0], [1.0], [1.0], [1.0], [1.0]]
        expected = 0.0
        for value in a[0]:
            expected += value * 1.0
        assert matmul_rows([list(a[0])], b)[0][0] == expected

    @given(st.data())
    @settings(max_examples=25)
    def test_matches_numpy(self, data):
        """Property: integer products agree with numpy exactly."""
        m, k, n = (data.draw(st.integers(min_value=1, max_value=5)) for _ in range(3))
        a = data.draw(int_rows(m, k))
        b = data.draw(int_rows(k, n))
        expected = (np.array(a) @ np.array(b)).tolist()
        assert matmul_rows(a, b) == expected


class TestDimSumRows:
    """Tests for dim_sum_rows."""

    def test_axis_zero(self):
        assert dim_sum_rows([[1, 2, 3], [4, 5, 6]], 0) == [[5, 7, 9]]

    def test_axis_one(self):
        assert dim_sum_rows([[1, 2, 3], [4, 5, 6]], 1) == [[6], [15]]

    def test_source_untouched(self):
        rows = [[1, 2], [3, 4]]
        dim_sum_rows(rows, 0)
        assert rows == [[1, 2], [3, 4]]

    @pytest.mark.parametrize("dim", [2, -1, True, 0.0, "0", None])
    def test_invalid_axis(self, dim):
        with pytest.raises(InvalidAxisError):
            dim_sum_rows([[1]], dim)

    @given(int_rows())
    @settings(max_examples=20)
    def test_totals_agree(self, rows):
        """Property: both reductions have the same grand total."""
        by_column = sum(dim_sum_rows(rows, 0)[0])
        by_row = sum(row[0] for row in dim_sum_rows(rows, 1))
        assert by_column == by_row


class TestCheckAxis:
    """Tests for check_axis."""

    def test_valid(self):
        assert check_axis(0) == 0
        assert check_axis(1) == 1

    def test_message(self):
        with pytest.raises(InvalidAxisError, match="axis 0 or 1"):
            check_axis(3)

    def test_numpy_integer_axis(self):
        assert check_axis(np.int64(1)) == 1
        assert type(check_axis(np.int64(0))) is int

    def test_numpy_integer_out_of_range(self):
        with pytest.raises(InvalidAxisError):
            check_axis(np.int32(2))


class TestSoftmaxRows:
    """Tests for softmax_rows."""

    def test_uniform_rows(self):
        assert softmax_rows([[2.0, 2.0], [-3.0, -3.0]], 1) == [[0.5, 0.5], [0.5, 0.5]]

    def test_columns(self):
        out = softmax_rows([[1.0, 5.0], [4.0, 5.0]], 0)
        assert [round(v, 4) for v in (out[0][0], out[1][0])] == [0.0474, 0.9526]
        assert [round(v, 4) for v in (out[0][1], out[1][1])] == [0.5, 0.5]

    def test_naive_overflows(self):
        with pytest.raises(OverflowError):
            softmax_rows([[1000.0, 1000.0]], 1)

    def test_stable_handles_large_inputs(self):
        out = softmax_rows([[1000.0, 1000.0]], 1, stable=True)
        assert out == [[0.5, 0.5]]

    def test_invalid_axis(self):
        with pytest.raises(InvalidAxisError):
            softmax_rows([[1.0]], 2)


class TestDrainRows:
    """Tests for drain_rows and apply_in_place."""

    def test_row_major_order(self):
        assert list(drain_rows([[1, 2, 3], [4, 5, 6]])) == [1, 2, 3, 4, 5, 6]

    def test_not_restartable(self):
        it = drain_rows([[1, 2]])
        assert list(it) == [1, 2]
        assert list(it) == []

    def test_releases_rows_while_draining(self):
        rows = [[1, 2], [3, 4]]
        it = drain_rows(rows)
        assert next(it) == 1
        assert rows[0] == []
        assert rows[1] == [3, 4]

    def test_apply_in_place(self):
        rows = [[1, 2], [3, 4]]
        assert apply_in_place(rows, lambda v: v * 10) is rows
        assert rows == [[10, 20], [30, 40]]
