"""
Core math modules для matrix_engine

Плотная матрица float64 и политика численных допусков.
"""

# Numerical Safeguards
from matrix_engine.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_MATRIX_COMPARE,
    EPS_MATRIX_SINGULAR,
    # Float checks
    is_valid_float,
    is_zero,
    within_tolerance,
)

# Matrix
from matrix_engine.core.math.matrix import (
    DimensionMismatch,
    IndexOutOfRange,
    InvalidDimension,
    Matrix,
    MatrixError,
    NotSquare,
    SelfOperation,
    SingularMatrix,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_MATRIX_COMPARE",
    "EPS_MATRIX_SINGULAR",
    # Numerical Safeguards: Float checks
    "is_valid_float",
    "is_zero",
    "within_tolerance",
    # Matrix: Exceptions
    "MatrixError",
    "InvalidDimension",
    "IndexOutOfRange",
    "DimensionMismatch",
    "NotSquare",
    "SingularMatrix",
    "SelfOperation",
    # Matrix: Types
    "Matrix",
]
