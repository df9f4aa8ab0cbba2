"""
Contract Validation Module

Модуль для валидации JSON контрактов matrix_engine.
"""

from .validators import (
    ContractValidator,
    MatrixStateValidator,
    SchemaLoader,
    validate_matrix_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MatrixStateValidator",
    # Functions
    "validate_matrix_state",
]
