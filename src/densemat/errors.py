"""Exception hierarchy for densemat.

All exceptions inherit from MatrixError so callers can catch any
library error in one place. Each class also inherits the closest
built-in exception, so ``except ValueError`` keeps working.
Exceptions with constructor arguments define __reduce__ so they survive
pickling across process boundaries.
"""

from __future__ import annotations

Shape = tuple[int, int]


class MatrixError(Exception):
    """Base exception for all densemat errors."""


class DimMismatch(MatrixError, ValueError):
    """Operand shapes are incompatible for the requested operation.

    Attributes:
        shape_a: Shape of the left operand.
        shape_b: Shape of the right operand.
    """

    def __init__(self, shape_a: Shape, shape_b: Shape):
        super().__init__(f"dimension mismatch: {shape_a} vs {shape_b}")
        self.shape_a = shape_a
        self.shape_b = shape_b

    def __reduce__(self):
        return type(self), (self.shape_a, self.shape_b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimMismatch):
            return NotImplemented
        return (self.shape_a, self.shape_b) == (other.shape_a, other.shape_b)

    __hash__ = MatrixError.__hash__


class InvalidAxisError(MatrixError, ValueError):
    """Reduction axis is not 0 or 1."""

    def __init__(self, dim: object):
        super().__init__(
            f"only 2-D reduction along axis 0 or 1 is supported, got {dim!r}"
        )
        self.dim = dim

    def __reduce__(self):
        return type(self), (self.dim,)


class RaggedRowsError(MatrixError, ValueError):
    """Input rows are empty or not all the same length."""


class ConsumedMatrixError(MatrixError, RuntimeError):
    """A matrix was used after an operation took ownership of its storage."""

    def __init__(self, operation: str = "operation"):
        super().__init__(
            f"matrix was consumed by a previous call; cannot run {operation}"
        )
        self.operation = operation

    def __reduce__(self):
        return type(self), (self.operation,)


class MissingCapabilityError(MatrixError, TypeError):
    """The element type does not provide a capability an operation needs.

    Attributes:
        capability: Name of the missing capability (e.g. "exp").
        value_type: The offending element type.
    """

    def __init__(self, capability: str, value_type: type):
        super().__init__(
            f"element type {value_type.__name__} does not support {capability}"
        )
        self.capability = capability
        self.value_type = value_type

    def __reduce__(self):
        return type(self), (self.capability, self.value_type)


class CaseArchiveError(MatrixError, ValueError):
    """A product-case archive has a member that cannot be classified."""
