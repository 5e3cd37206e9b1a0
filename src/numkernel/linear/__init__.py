"""Generic matrix and vector algebra over integer, decimal and complex rings."""

from numkernel.linear.domains import (
    DecimalComplexMatrix,
    DecimalComplexVector,
    DecimalMatrix,
    DecimalVector,
    IntegerComplexMatrix,
    IntegerComplexVector,
    IntegerMatrix,
    IntegerVector,
)
from numkernel.linear.matrix import Matrix, MatrixBuilder
from numkernel.linear.rings import (
    DECIMAL_COMPLEX_RING,
    DECIMAL_RING,
    INTEGER_COMPLEX_RING,
    INTEGER_RING,
    Ring,
)
from numkernel.linear.vector import Vector, VectorBuilder

__all__ = [
    # Rings
    "Ring",
    "INTEGER_RING",
    "DECIMAL_RING",
    "INTEGER_COMPLEX_RING",
    "DECIMAL_COMPLEX_RING",
    # Generic bases
    "Matrix",
    "MatrixBuilder",
    "Vector",
    "VectorBuilder",
    # Concrete domains
    "IntegerVector",
    "IntegerMatrix",
    "DecimalVector",
    "DecimalMatrix",
    "IntegerComplexVector",
    "IntegerComplexMatrix",
    "DecimalComplexVector",
    "DecimalComplexMatrix",
]
