"""Loading matrices from .npy/.npz files and checking products against them.

A product-case archive is an ``.npz`` file whose members are named
``a<N>``, ``b<N>`` and ``c<N>``: for each ``N``, ``c<N>`` holds the
expected value of ``a<N> @ b<N>``.

References:
    - NumPy .npy format: https://numpy.org/doc/stable/reference/generated/numpy.lib.format.html
"""

from __future__ import annotations

import logging
import os
import re
import time
from collections.abc import Sequence

import numpy as np

from densemat.errors import CaseArchiveError
from densemat.interop.arrays import from_array
from densemat.matrix import Matrix, matmul

logger = logging.getLogger(__name__)

_MEMBER = re.compile(r"^([abc])\D*(\d+)(?:\.npy)?$")


def load_npy(path: str | os.PathLike[str]) -> Matrix:
    """Read a 2-D ``.npy`` file as a Matrix of floats."""
    return from_array(np.load(path).astype(np.float64))


def load_cases(
    path: str | os.PathLike[str],
) -> tuple[list[Matrix], list[Matrix], list[Matrix]]:
    """Read a product-case archive.

    Args:
        path: ``.npz`` archive with ``a<N>``/``b<N>``/``c<N>`` members.

    Returns:
        ``(a, b, c)`` lists ordered by ``N``.

    Raises:
        CaseArchiveError: If a member name has an unknown prefix or no
            index, or the three groups do not have the same indices.

    """
    groups: dict[str, dict[int, Matrix]] = {"a": {}, "b": {}, "c": {}}
    with np.load(path) as archive:
        for name in archive.files:
            match = _MEMBER.match(name)
            if match is None:
                raise CaseArchiveError(f"cannot classify archive member {name!r}")
            prefix, index = match.group(1), int(match.group(2))
            groups[prefix][index] = from_array(archive[name].astype(np.float64))

    indices = sorted(groups["a"])
    if sorted(groups["b"]) != indices or sorted(groups["c"]) != indices:
        raise CaseArchiveError("archive members a/b/c do not share the same indices")
    logger.info("loaded %d product cases from %s", len(indices), path)
    a, b, c = ([groups[key][i] for i in indices] for key in "abc")
    return a, b, c


def verify_products(
    a: Sequence[Matrix],
    b: Sequence[Matrix],
    c: Sequence[Matrix],
    *,
    rel_tol: float | None = None,
    abs_tol: float | None = None,
) -> int:
    """Count how many ``a[n] @ b[n]`` products match ``c[n]``.

    Operands are copied before multiplying, so the inputs stay usable.

    Returns:
        Number of matching cases.

    """
    passed = 0
    for n, (left, right, expected) in enumerate(zip(a, b, c)):
        product = matmul(left.copy(), right.copy())
        if product.allclose(expected, rel_tol=rel_tol, abs_tol=abs_tol):
            passed += 1
        else:
            logger.warning("product case %d does not match the expected result", n)
    logger.info("multiplication cases passed: %d out of %d", passed, len(a))
    return passed


def time_products(
    a: Sequence[Matrix],
    b: Sequence[Matrix],
    repeat: int,
) -> tuple[int, float]:
    """Run every ``a[n] @ b[n]`` product ``repeat`` times.

    Returns:
        ``(operations, seconds)`` for the whole run.

    """
    pairs = list(zip(a, b))
    start = time.perf_counter()
    for _ in range(repeat):
        for left, right in pairs:
            matmul(left.copy(), right.copy())
    elapsed = time.perf_counter() - start
    operations = len(pairs) * repeat
    if elapsed > 0:
        logger.info(
            "%d multiply operations in %.2f s (%.2f ops/s)",
            operations,
            elapsed,
            operations / elapsed,
        )
    return operations, elapsed
