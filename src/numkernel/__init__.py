"""numkernel: arbitrary-precision square roots, complex numbers and ring-generic linear algebra."""

__version__ = "0.1.0"

from numkernel.algorithms.sqrt import SquareRootCalculator, sqrt
from numkernel.data.precision import (
    DEFAULT_CONTEXT,
    PrecisionContext,
    RoundingMode,
    get_context,
)
from numkernel.errors import (
    InvalidArgumentError,
    InvalidStateError,
    MatrixNotSquareError,
    NumericKernelError,
)
from numkernel.linear import (
    DecimalComplexMatrix,
    DecimalComplexVector,
    DecimalMatrix,
    DecimalVector,
    IntegerComplexMatrix,
    IntegerComplexVector,
    IntegerMatrix,
    IntegerVector,
)
from numkernel.number import DecimalComplex, IntegerComplex, PolarForm

__all__ = [
    "__version__",
    "DEFAULT_CONTEXT",
    "PrecisionContext",
    "RoundingMode",
    "get_context",
    "SquareRootCalculator",
    "sqrt",
    "DecimalComplex",
    "IntegerComplex",
    "PolarForm",
    "DecimalComplexMatrix",
    "DecimalComplexVector",
    "DecimalMatrix",
    "DecimalVector",
    "IntegerComplexMatrix",
    "IntegerComplexVector",
    "IntegerMatrix",
    "IntegerVector",
    "InvalidArgumentError",
    "InvalidStateError",
    "MatrixNotSquareError",
    "NumericKernelError",
]
