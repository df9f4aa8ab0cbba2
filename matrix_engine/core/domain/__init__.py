"""
Domain models and value objects.

Contains the immutable matrix snapshot used for JSON exchange.
"""

from matrix_engine.core.domain.matrix_state import MatrixState

__all__ = [
    "MatrixState",
]
