"""Complex numbers over exact and decimal parts, and their polar form."""

from numkernel.number.decimal_complex import DecimalComplex
from numkernel.number.integer_complex import IntegerComplex
from numkernel.number.polar import PolarForm

__all__ = [
    "DecimalComplex",
    "IntegerComplex",
    "PolarForm",
]
