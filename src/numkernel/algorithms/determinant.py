"""Closed-form and permutation-based determinants over an element ring.

The matrix kernel dispatches on size: triangular matrices use the diagonal
product, 2×2 uses ad - bc, 3×3 the rule of Sarrus and anything larger the
Leibniz formula

    det(M) = Σ_σ sign(σ) · Π_i M[σ(i), i]

summed over all n! permutations σ of {1..n}, with sign(σ) = (-1)^inv(σ).
The Leibniz expansion is factorial in n and has no elimination fallback;
callers must bound the matrix size.

All functions take a 1-based ``element(row, column)`` accessor and a ring
supplying add/subtract/multiply/negate/zero/one, so they are shared by the
integer, decimal and complex matrix kernels.

References:
- Horn & Johnson: "Matrix Analysis" (2nd ed.), §0.3
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from itertools import permutations
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from numkernel.linear.rings import Ring

logger = logging.getLogger(__name__)

E = TypeVar("E")

LEIBNIZ_WARN_SIZE: int = 9
"""Sizes above this log a warning before a Leibniz expansion."""


def inversion_count(permutation: Sequence[int]) -> int:
    """Number of pairs i < j with permutation[i] > permutation[j]."""
    size = len(permutation)
    return sum(
        1
        for i in range(size)
        for j in range(i + 1, size)
        if permutation[i] > permutation[j]
    )


def permutation_sign(permutation: Sequence[int]) -> int:
    """Return +1 or -1 depending on permutation parity."""
    return -1 if inversion_count(permutation) & 1 else 1


def diagonal_product(element: Callable[[int, int], E], size: int, ring: Ring[E]) -> E:
    """Product of the main diagonal (determinant of a triangular matrix)."""
    return ring.product(element(i, i) for i in range(1, size + 1))


def two_by_two(element: Callable[[int, int], E], ring: Ring[E]) -> E:
    """ad - bc."""
    return ring.subtract(
        ring.multiply(element(1, 1), element(2, 2)),
        ring.multiply(element(1, 2), element(2, 1)),
    )


def rule_of_sarrus(element: Callable[[int, int], E], ring: Ring[E]) -> E:
    """3×3 determinant: forward diagonals minus backward diagonals."""
    m = ring.multiply

    forward = (
        m(m(element(1, 1), element(2, 2)), element(3, 3)),
        m(m(element(1, 2), element(2, 3)), element(3, 1)),
        m(m(element(1, 3), element(2, 1)), element(3, 2)),
    )
    backward = (
        m(m(element(3, 1), element(2, 2)), element(1, 3)),
        m(m(element(3, 2), element(2, 3)), element(1, 1)),
        m(m(element(3, 3), element(2, 1)), element(1, 2)),
    )
    return ring.subtract(ring.sum(forward), ring.sum(backward))


def leibniz_formula(element: Callable[[int, int], E], size: int, ring: Ring[E]) -> E:
    """Signed sum over all permutations of one entry per row and column.

    Factorial time in ``size``.
    """
    logger.debug("Leibniz expansion of %dx%d matrix: %d terms", size, size, math.factorial(size))
    if size > LEIBNIZ_WARN_SIZE:
        logger.warning(
            "Leibniz expansion of %dx%d matrix evaluates %d products",
            size,
            size,
            math.factorial(size),
        )

    result = ring.zero
    indexes = range(1, size + 1)
    for sigma in permutations(indexes):
        product = ring.product(element(sigma[i - 1], i) for i in indexes)
        if inversion_count(sigma) & 1:
            result = ring.subtract(result, product)
        else:
            result = ring.add(result, product)
    return result


def cofactor_expansion(element: Callable[[int, int], E], size: int, ring: Ring[E]) -> E:
    """Laplace expansion along the first row.

    Independent of the Leibniz code path; exponential time, intended as a
    reference for cross-checks on small matrices.
    """
    if size == 1:
        return element(1, 1)

    result = ring.zero
    for column in range(1, size + 1):

        def minor_element(r: int, c: int, _column: int = column) -> E:
            return element(r + 1, c if c < _column else c + 1)

        term = ring.multiply(element(1, column), cofactor_expansion(minor_element, size - 1, ring))
        if column % 2 == 0:
            result = ring.subtract(result, term)
        else:
            result = ring.add(result, term)
    return result


__all__ = [
    "LEIBNIZ_WARN_SIZE",
    "cofactor_expansion",
    "diagonal_product",
    "inversion_count",
    "leibniz_formula",
    "permutation_sign",
    "rule_of_sarrus",
    "two_by_two",
]
