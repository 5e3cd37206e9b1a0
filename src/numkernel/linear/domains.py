"""Concrete vector and matrix classes, one pair per element ring."""

from __future__ import annotations

from decimal import Decimal

from numkernel.linear.matrix import Matrix
from numkernel.linear.rings import (
    DECIMAL_COMPLEX_RING,
    DECIMAL_RING,
    INTEGER_COMPLEX_RING,
    INTEGER_RING,
)
from numkernel.linear.vector import Vector
from numkernel.number.decimal_complex import DecimalComplex
from numkernel.number.integer_complex import IntegerComplex


class IntegerVector(Vector[int]):
    __slots__ = ()
    ring = INTEGER_RING


class IntegerMatrix(Matrix[int]):
    """Exact integer matrix; ``invertible`` means unimodular (det = ±1)."""

    __slots__ = ()
    ring = INTEGER_RING
    vector_type = IntegerVector


class DecimalVector(Vector[Decimal]):
    __slots__ = ()
    ring = DECIMAL_RING


class DecimalMatrix(Matrix[Decimal]):
    __slots__ = ()
    ring = DECIMAL_RING
    vector_type = DecimalVector


class IntegerComplexVector(Vector[IntegerComplex]):
    __slots__ = ()
    ring = INTEGER_COMPLEX_RING


class IntegerComplexMatrix(Matrix[IntegerComplex]):
    """Gaussian-integer matrix; ``invertible`` means det ∈ {1, -1, i, -i}."""

    __slots__ = ()
    ring = INTEGER_COMPLEX_RING
    vector_type = IntegerComplexVector


class DecimalComplexVector(Vector[DecimalComplex]):
    __slots__ = ()
    ring = DECIMAL_COMPLEX_RING


class DecimalComplexMatrix(Matrix[DecimalComplex]):
    """Decimal complex matrix; ``invertible`` means det = ±1."""

    __slots__ = ()
    ring = DECIMAL_COMPLEX_RING
    vector_type = DecimalComplexVector


IntegerVector.matrix_type = IntegerMatrix
DecimalVector.matrix_type = DecimalMatrix
IntegerComplexVector.matrix_type = IntegerComplexMatrix
DecimalComplexVector.matrix_type = DecimalComplexMatrix


__all__ = [
    "DecimalComplexMatrix",
    "DecimalComplexVector",
    "DecimalMatrix",
    "DecimalVector",
    "IntegerComplexMatrix",
    "IntegerComplexVector",
    "IntegerMatrix",
    "IntegerVector",
]
