"""Tests for densemat.errors module."""

from __future__ import annotations

import copy
import pickle

import pytest

from densemat.errors import (
    CaseArchiveError,
    ConsumedMatrixError,
    DimMismatch,
    InvalidAxisError,
    MissingCapabilityError,
    RaggedRowsError,
)


class TestPickling:
    """Errors survive pickle and copy with their attributes intact."""

    def test_dim_mismatch(self):
        error = pickle.loads(pickle.dumps(DimMismatch((2, 3), (2, 3))))
        assert error == DimMismatch((2, 3), (2, 3))
        assert error.shape_a == (2, 3)
        assert str(error) == "dimension mismatch: (2, 3) vs (2, 3)"

    def test_invalid_axis(self):
        error = pickle.loads(pickle.dumps(InvalidAxisError(2)))
        assert error.dim == 2
        assert "got 2" in str(error)

    def test_consumed(self):
        error = pickle.loads(pickle.dumps(ConsumedMatrixError("matmul")))
        assert error.operation == "matmul"

    def test_missing_capability(self):
        error = copy.copy(MissingCapabilityError("exp", str))
        assert error.capability == "exp"
        assert error.value_type is str
        restored = pickle.loads(pickle.dumps(error))
        assert restored.value_type is str

    @pytest.mark.parametrize("cls", [RaggedRowsError, CaseArchiveError])
    def test_message_only(self, cls):
        error = pickle.loads(pickle.dumps(cls("bad input")))
        assert isinstance(error, cls)
        assert str(error) == "bad input"
