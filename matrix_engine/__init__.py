"""
matrix_engine: dense float64 matrices with value semantics.

Element access, arithmetic, tolerance-based equality, transpose,
cofactors, determinant and inverse via Laplace expansion.
"""

from matrix_engine.core.math import (
    EPS_MATRIX_COMPARE,
    EPS_MATRIX_SINGULAR,
    DimensionMismatch,
    IndexOutOfRange,
    InvalidDimension,
    Matrix,
    MatrixError,
    NotSquare,
    SelfOperation,
    SingularMatrix,
)

__version__ = "1.0.0"

__all__ = [
    "EPS_MATRIX_COMPARE",
    "EPS_MATRIX_SINGULAR",
    "Matrix",
    "MatrixError",
    "InvalidDimension",
    "IndexOutOfRange",
    "DimensionMismatch",
    "NotSquare",
    "SingularMatrix",
    "SelfOperation",
]
