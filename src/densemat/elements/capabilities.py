"""Numeric capabilities that matrix element types must provide.

Each matrix operation asks only for the capabilities it uses:
transpose needs none, elementwise ops need ``+``/``*``, matmul and
dim_sum need a zero value and ``+=``, softmax needs exp and ``/``.
The functions here dispatch on the element's type, so new element
types can opt in with ``zero.register`` / ``exp.register``.

References:
    - functools.singledispatch: https://docs.python.org/3/library/functools.html
    - numbers ABCs: https://docs.python.org/3/library/numbers.html
"""

from __future__ import annotations

import cmath
import math
import numbers
from decimal import Decimal
from functools import singledispatch
from typing import Any

import numpy as np

from densemat.errors import MissingCapabilityError


@singledispatch
def zero(sample: Any) -> Any:
    """Additive identity for the type of ``sample``.

    Args:
        sample: Any value of the element type.

    Returns:
        The zero of that type.

    Raises:
        MissingCapabilityError: If the type has no known zero.

    Examples:
        >>> zero(3.5)
        0.0
        >>> zero(7)
        0
        >>> from fractions import Fraction
        >>> zero(Fraction(1, 3))
        Fraction(0, 1)

    """
    raise MissingCapabilityError("zero", type(sample))


@zero.register(numbers.Number)
@zero.register(Decimal)
def _zero_number(sample):
    return type(sample)(0)


@singledispatch
def exp(value: Any) -> Any:
    """Natural exponential of a single element.

    numpy scalars go through ``np.exp`` and keep their dtype. Objects
    outside the numeric tower may still opt in by exposing an ``exp()``
    method.

    Args:
        value: Element to exponentiate.

    Returns:
        ``e ** value`` in the element's own number system.

    Raises:
        MissingCapabilityError: If the element cannot be exponentiated.

    Examples:
        >>> exp(0.0)
        1.0
        >>> from decimal import Decimal
        >>> exp(Decimal(0))
        Decimal('1')

    """
    method = getattr(value, "exp", None)
    if callable(method):
        return method()
    raise MissingCapabilityError("exp", type(value))


@exp.register(numbers.Real)
def _exp_real(value):
    return math.exp(value)


@exp.register(numbers.Complex)
def _exp_complex(value):
    return cmath.exp(value)


@exp.register(Decimal)
def _exp_decimal(value):
    return value.exp()


@exp.register(np.generic)
@exp.register(np.integer)
@exp.register(np.floating)
@exp.register(np.complexfloating)
def _exp_numpy(value):
    # numbers.Real sits ahead of np.generic in a numpy float's dispatch order,
    # so the concrete numpy families are registered explicitly
    try:
        return np.exp(value)
    except TypeError as e:
        raise MissingCapabilityError("exp", type(value)) from e


def power(value: Any, exponent: Any) -> Any:
    """Raise a single element to ``exponent``.

    Examples:
        >>> power(3, 2)
        9
        >>> power(4.0, 0.5)
        2.0

    """
    try:
        return value**exponent
    except TypeError as e:
        raise MissingCapabilityError("pow", type(value)) from e
