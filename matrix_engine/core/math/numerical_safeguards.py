"""
Numerical Safeguards: допуски для сравнения матриц

Модуль задаёт единую политику численных допусков движка матриц:
- Поэлементное сравнение матриц (строгое неравенство |a - b| < eps)
- Проверка вырожденности по определителю (|det| <= eps)
- Проверка конечности float значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение допуска 1e-7 фиксировано и воспроизводится точно
2. Сравнение ячеек строгое, проверка нуля нестрогая
3. Все операции детерминированы и не имеют побочных эффектов
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Допуск для поэлементного сравнения матриц (eq_matrix, ==)
# Ячейки равны, если abs(a - b) < EPS_MATRIX_COMPARE
EPS_MATRIX_COMPARE: Final[float] = 1e-7

# Порог вырожденности для обращения матрицы
# Матрица вырождена, если abs(det) <= EPS_MATRIX_SINGULAR
EPS_MATRIX_SINGULAR: Final[float] = 1e-7


# =============================================================================
# ПРОВЕРКИ FLOAT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def within_tolerance(a: float, b: float, tol: float = EPS_MATRIX_COMPARE) -> bool:
    """
    Сравнение двух ячеек матрицы с абсолютным допуском.

    Неравенство строгое: разница, равная tol, уже считается расхождением.

    Args:
        a: Первое значение
        b: Второе значение
        tol: Абсолютный допуск (default: EPS_MATRIX_COMPARE)

    Returns:
        True если abs(a - b) < tol

    Raises:
        ValueError: Если tol <= 0

    Examples:
        >>> within_tolerance(1.0, 1.0 + 1e-8)
        True
        >>> within_tolerance(1.0, 1.0 + 1e-6)
        False
    """
    if tol <= 0:
        raise ValueError(f"tol must be positive, got {tol}")

    return abs(a - b) < tol


def is_zero(value: float, tol: float = EPS_MATRIX_SINGULAR) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом допуска.

    Используется для детекции вырожденной матрицы по определителю.

    Args:
        value: Проверяемое значение
        tol: Абсолютный допуск (default: EPS_MATRIX_SINGULAR)

    Returns:
        True если abs(value) <= tol

    Raises:
        ValueError: Если tol <= 0

    Examples:
        >>> is_zero(1e-8)
        True
        >>> is_zero(-1e-7)
        True
        >>> is_zero(1e-6)
        False
    """
    if tol <= 0:
        raise ValueError(f"tol must be positive, got {tol}")

    return abs(value) <= tol
