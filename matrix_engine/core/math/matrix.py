"""
Matrix: плотная матрица float64 и алгебра через разложение Лапласа

Модуль реализует единственную сущность движка, Matrix:
- Хранение: плоский row-major буфер list[float] размера rows * cols
- Жизненный цикл: copy / move / assign / release с проверками идентичности
- Поэлементная арифметика: сумма, разность, умножение на число и на матрицу
- Миноры и матрица алгебраических дополнений
- Определитель (рекурсивное разложение по первой строке) и обратная матрица

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows == 0 или cols == 0 → буфера нет (пустое состояние (0, 0))
2. len(буфер) == rows * cols после любой успешной операции
3. Неудачная операция не меняет состояние получателя
4. Копия всегда глубокая, move переводит источник в пустое состояние

ФОРМУЛЫ:
    det(M) = M[0][0]                                          (n = 1)
    det(M) = Σ_j M[0][j] · (-1)^j · det(Minor(M, 0, j))       (n ≥ 2)
    C[i][j] = (-1)^(i+j) · det(Minor(M, i, j))
    M^-1 = C^T · (1 / det(M))

Разложение Лапласа экспоненциально по n и рассчитано на малые матрицы.
"""

import logging
from collections.abc import Sequence
from numbers import Real
from typing import Optional

from matrix_engine.core.math.numerical_safeguards import (
    EPS_MATRIX_COMPARE,
    EPS_MATRIX_SINGULAR,
    is_zero,
    within_tolerance,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MatrixError(Exception):
    """Базовое исключение движка матриц."""

    pass


class InvalidDimension(MatrixError, ValueError):
    """Число строк или столбцов меньше 1 (конструктор или resize)."""

    pass


class IndexOutOfRange(MatrixError, IndexError):
    """Доступ к ячейке с отрицательным индексом или индексом за границей."""

    pass


class DimensionMismatch(MatrixError, ValueError):
    """Размеры операндов несовместимы для суммы, разности или произведения."""

    pass


class NotSquare(MatrixError, ArithmeticError):
    """Определитель, дополнения или обратная матрица для неквадратной матрицы."""

    pass


class SingularMatrix(MatrixError, ArithmeticError):
    """Обращение матрицы с |det| <= EPS_MATRIX_SINGULAR."""

    pass


class SelfOperation(MatrixError, RuntimeError):
    """
    Инициализация матрицы копированием из самой себя.

    Повторный вызов __init__ с source=self не может быть глубокой копией
    и отклоняется. Присваивание из себя (assign, move_assign) при этом
    остаётся no-op.
    """

    pass


# =============================================================================
# HELPERS
# =============================================================================


def _validate_dimension(value: int, name: str) -> int:
    """Проверка размерности: целое число >= 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDimension(f"{name} must be an integer, got {value!r}")

    if value < 1:
        raise InvalidDimension(f"{name} can't be less than 1, got {value}")

    return value


def _alternating_sign(power: int) -> float:
    """(-1)^power без вызова pow."""
    return -1.0 if power % 2 else 1.0


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Плотная матрица float64 с семантикой значения.

    Хранит ячейки в плоском row-major списке: ячейка (i, j) лежит по
    смещению i * cols + j. Пустая матрица (0, 0) буфера не имеет.

    Мутирующие операции (sum_matrix, mul_matrix, ...) изменяют получателя.
    Бинарные операторы (+, -, *, @) возвращают новую матрицу и не трогают
    операнды. Составные операторы (+=, -=, *=, @=) мутируют получателя.

    Examples:
        >>> m = Matrix.from_rows([[1, 2], [3, 4]])
        >>> m.determinant()
        -2.0
        >>> (m * Matrix.identity(2)) == m
        True
    """

    __slots__ = ("_rows", "_cols", "_data")

    # Матрица изменяемая
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        *,
        source: Optional["Matrix"] = None,
    ) -> None:
        """
        Создание матрицы.

        Args:
            rows: Число строк (>= 1), None для пустой матрицы
            cols: Число столбцов (>= 1), None для пустой матрицы
            source: Матрица для глубокого копирования (взаимоисключающе с rows/cols)

        Raises:
            InvalidDimension: Если rows или cols < 1 (или задан только один из них)
            SelfOperation: Если source является самим инициализируемым объектом
        """
        if source is not None:
            if source is self:
                raise SelfOperation("Self-copying is not allowed")
            if rows is not None or cols is not None:
                raise TypeError("source can't be combined with rows/cols")

            self._rows = source._rows
            self._cols = source._cols
            self._data = None if source._data is None else list(source._data)
            return

        if rows is None and cols is None:
            self._reset()
            return

        _validate_dimension(rows, "rows")
        _validate_dimension(cols, "cols")

        self._rows = rows
        self._cols = cols
        self._data = [0.0] * (rows * cols)

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def from_rows(cls, values: Sequence[Sequence[float]]) -> "Matrix":
        """
        Создание матрицы из вложенной последовательности строк.

        Args:
            values: Строки матрицы одинаковой длины ([] → пустая матрица)

        Returns:
            Новая матрица len(values) x len(values[0])

        Raises:
            InvalidDimension: Если строки пустые
            DimensionMismatch: Если строки разной длины

        Examples:
            >>> Matrix.from_rows([[1, 2, 3]]).shape
            (1, 3)
            >>> Matrix.from_rows([]).is_empty
            True
        """
        if len(values) == 0:
            return cls()

        cols = len(values[0])
        result = cls(len(values), cols)

        for i, row in enumerate(values):
            if len(row) != cols:
                raise DimensionMismatch(
                    f"Row {i} has {len(row)} columns, expected {cols}"
                )
            result._data[i * cols : (i + 1) * cols] = [float(v) for v in row]

        return result

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """
        Единичная матрица size x size.

        Raises:
            InvalidDimension: Если size < 1
        """
        result = cls(size, size)
        for i in range(size):
            result._data[i * size + i] = 1.0
        return result

    @classmethod
    def moved_from(cls, other: "Matrix") -> "Matrix":
        """
        Move-конструирование: новая матрица забирает буфер other.

        other переходит в пустое состояние (0, 0). Буфер не копируется.
        """
        result = cls()
        result._take(other)
        return result

    # -------------------------------------------------------------------------
    # Жизненный цикл
    # -------------------------------------------------------------------------

    def _reset(self) -> None:
        self._rows = 0
        self._cols = 0
        self._data: Optional[list[float]] = None

    def _take(self, other: "Matrix") -> None:
        self._rows = other._rows
        self._cols = other._cols
        self._data = other._data
        other._reset()

    def copy(self) -> "Matrix":
        """Глубокая копия с независимым буфером."""
        return type(self)(source=self)

    def __copy__(self) -> "Matrix":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Matrix":
        return self.copy()

    def assign(self, other: "Matrix") -> "Matrix":
        """
        Копирующее присваивание: заменяет содержимое копией other.

        Присваивание из самого себя ничего не делает.

        Returns:
            self
        """
        if other is self:
            return self

        self._rows = other._rows
        self._cols = other._cols
        self._data = None if other._data is None else list(other._data)
        return self

    def move_assign(self, other: "Matrix") -> "Matrix":
        """
        Перемещающее присваивание: забирает буфер other, other становится пустым.

        Перемещение из самого себя ничего не делает.

        Returns:
            self
        """
        if other is self:
            return self

        self._take(other)
        return self

    def release(self) -> None:
        """Освобождение буфера; для пустой матрицы no-op."""
        self._reset()

    # -------------------------------------------------------------------------
    # Размерности
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        """Число строк."""
        return self._rows

    @rows.setter
    def rows(self, value: int) -> None:
        self.set_rows(value)

    @property
    def cols(self) -> int:
        """Число столбцов."""
        return self._cols

    @cols.setter
    def cols(self, value: int) -> None:
        self.set_cols(value)

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def is_empty(self) -> bool:
        return self._data is None

    @property
    def is_square(self) -> bool:
        return self._rows == self._cols

    def set_rows(self, rows: int) -> None:
        """
        Изменение числа строк.

        Первые min(rows, self.rows) строк сохраняются, новые строки
        заполняются нулями.

        Raises:
            InvalidDimension: Если rows < 1 или матрица пустая (cols == 0)
        """
        _validate_dimension(rows, "rows")
        _validate_dimension(self._cols, "cols")

        keep = min(rows, self._rows)
        data = self._data[: keep * self._cols]
        data.extend([0.0] * ((rows - keep) * self._cols))

        logger.debug("Resize rows %d -> %d (cols=%d)", self._rows, rows, self._cols)
        self._rows = rows
        self._data = data

    def set_cols(self, cols: int) -> None:
        """
        Изменение числа столбцов.

        Первые min(cols, self.cols) столбцов каждой строки сохраняются,
        новые столбцы заполняются нулями.

        Raises:
            InvalidDimension: Если cols < 1 или матрица пустая (rows == 0)
        """
        _validate_dimension(cols, "cols")
        _validate_dimension(self._rows, "rows")

        keep = min(cols, self._cols)
        padding = [0.0] * (cols - keep)
        data: list[float] = []
        for i in range(self._rows):
            start = i * self._cols
            data.extend(self._data[start : start + keep])
            data.extend(padding)

        logger.debug("Resize cols %d -> %d (rows=%d)", self._cols, cols, self._rows)
        self._cols = cols
        self._data = data

    # -------------------------------------------------------------------------
    # Доступ к ячейкам
    # -------------------------------------------------------------------------

    def _offset(self, row: int, col: int) -> int:
        # Отрицательные индексы не оборачиваются, в отличие от list
        if row < 0:
            raise IndexOutOfRange(f"Row can't be less than zero, got {row}")
        if col < 0:
            raise IndexOutOfRange(f"Column can't be less than zero, got {col}")
        if row >= self._rows:
            raise IndexOutOfRange(f"Row {row} doesn't exist (rows={self._rows})")
        if col >= self._cols:
            raise IndexOutOfRange(f"Column {col} doesn't exist (cols={self._cols})")

        return row * self._cols + col

    def get(self, row: int, col: int) -> float:
        """
        Чтение ячейки (row, col).

        Raises:
            IndexOutOfRange: Если индекс отрицательный или за границей
        """
        return self._data[self._offset(row, col)]

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.get(row, col)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self._data[self._offset(row, col)] = float(value)

    def to_rows(self) -> list[list[float]]:
        """Содержимое матрицы как список строк (копия)."""
        cols = self._cols
        return [self._data[i * cols : (i + 1) * cols] for i in range(self._rows)]

    # -------------------------------------------------------------------------
    # Поэлементная арифметика
    # -------------------------------------------------------------------------

    def _require_same_shape(self, other: "Matrix", action: str) -> None:
        if self._rows != other._rows or self._cols != other._cols:
            raise DimensionMismatch(
                f"Can't {action} matrices of different sizes: "
                f"{self._rows}x{self._cols} and {other._rows}x{other._cols}"
            )

    def eq_matrix(self, other: "Matrix") -> bool:
        """
        Сравнение матриц с допуском EPS_MATRIX_COMPARE.

        Returns:
            True если размеры совпадают и каждая пара ячеек отличается
            строго меньше чем на 1e-7. При разных размерах False.
        """
        if self._rows != other._rows or self._cols != other._cols:
            return False

        if self._data is None:
            return True

        return all(
            within_tolerance(a, b, EPS_MATRIX_COMPARE)
            for a, b in zip(self._data, other._data)
        )

    def sum_matrix(self, other: "Matrix") -> None:
        """
        Прибавление other к текущей матрице.

        Raises:
            DimensionMismatch: Если размеры не совпадают
        """
        self._require_same_shape(other, "add")

        if self._data is not None:
            self._data = [a + b for a, b in zip(self._data, other._data)]

    def sub_matrix(self, other: "Matrix") -> None:
        """
        Вычитание other из текущей матрицы.

        Raises:
            DimensionMismatch: Если размеры не совпадают
        """
        self._require_same_shape(other, "subtract")

        if self._data is not None:
            self._data = [a - b for a, b in zip(self._data, other._data)]

    def mul_number(self, num: float) -> None:
        """Умножение каждой ячейки на число."""
        num = float(num)
        if self._data is not None:
            self._data = [v * num for v in self._data]

    def mul_matrix(self, other: "Matrix") -> None:
        """
        Умножение текущей матрицы на other справа.

        Результат rows x other.cols строится в отдельном буфере и затем
        заменяет текущую матрицу, поэтому m.mul_matrix(m) корректен.

        Raises:
            DimensionMismatch: Если self.cols != other.rows
        """
        if self._cols != other._rows:
            raise DimensionMismatch(
                f"Invalid sizes of matrices for multiplying: "
                f"{self._rows}x{self._cols} and {other._rows}x{other._cols}"
            )

        self._take(self._product(other))

    def _product(self, other: "Matrix") -> "Matrix":
        n, m, p = self._rows, self._cols, other._cols
        if n == 0 or p == 0:
            return type(self)()

        result = type(self)(n, p)
        a, b, out = self._data, other._data, result._data

        for i in range(n):
            row = a[i * m : (i + 1) * m]
            for j in range(p):
                out[i * p + j] = sum(row[k] * b[k * p + j] for k in range(m))

        return result

    def transpose(self) -> "Matrix":
        """
        Транспонированная матрица cols x rows.

        Пустая матрица транспонируется в пустую.
        """
        if self._data is None:
            return type(self)()

        rows, cols = self._rows, self._cols
        result = type(self)(cols, rows)

        for i in range(rows):
            for j in range(cols):
                result._data[j * rows + i] = self._data[i * cols + j]

        return result

    # -------------------------------------------------------------------------
    # Миноры, дополнения, определитель, обратная матрица
    # -------------------------------------------------------------------------

    def _require_square(self, action: str) -> None:
        if self._rows != self._cols:
            raise NotSquare(
                f"The matrix is not square ({self._rows}x{self._cols}), "
                f"can't {action}"
            )

    def find_minor(self, minor: "Matrix", row: int, col: int) -> None:
        """
        Заполнение minor ячейками без строки row и столбца col.

        Порядок оставшихся ячеек сохраняется. Размер minor должен быть
        (rows - 1) x (cols - 1): он не проверяется.
        """
        pos = 0
        for i in range(self._rows):
            if i == row:
                continue
            start = i * self._cols
            for j in range(self._cols):
                if j != col:
                    minor._data[pos] = self._data[start + j]
                    pos += 1

    def minor(self, row: int, col: int) -> "Matrix":
        """
        Минор: новая матрица без строки row и столбца col.

        Raises:
            IndexOutOfRange: Если (row, col) вне матрицы
            InvalidDimension: Если у матрицы меньше двух строк или столбцов
        """
        self._offset(row, col)
        result = type(self)(self._rows - 1, self._cols - 1)
        self.find_minor(result, row, col)
        return result

    def calc_complements(self) -> "Matrix":
        """
        Матрица алгебраических дополнений.

        C[i][j] = (-1)^(i+j) · det(Minor(M, i, j)). Для матрицы 1x1
        возвращается её копия.

        Raises:
            NotSquare: Если матрица не квадратная
        """
        self._require_square("calculate complements")

        n = self._rows
        if n <= 1:
            return self.copy()

        result = type(self)(n, n)
        minor = type(self)(n - 1, n - 1)

        for i in range(n):
            for j in range(n):
                self.find_minor(minor, i, j)
                result._data[i * n + j] = _alternating_sign(i + j) * minor._laplace()

        return result

    def determinant(self) -> float:
        """
        Определитель разложением Лапласа по первой строке.

        Raises:
            NotSquare: Если матрица не квадратная

        Examples:
            >>> Matrix.from_rows([[1, 2, 2], [4, 5, 5], [7, 8, 9]]).determinant()
            -3.0
        """
        self._require_square("calculate determinant")
        return self._laplace()

    def _laplace(self) -> float:
        n = self._rows
        if n == 0:
            return 0.0
        if n == 1:
            return self._data[0]

        total = 0.0
        minor = type(self)(n - 1, n - 1)

        for j in range(n):
            self.find_minor(minor, 0, j)
            total += self._data[j] * _alternating_sign(j) * minor._laplace()

        return total

    def inverse_matrix(self) -> "Matrix":
        """
        Обратная матрица через присоединённую: C^T · (1 / det).

        Raises:
            NotSquare: Если матрица не квадратная
            SingularMatrix: Если |det| <= EPS_MATRIX_SINGULAR
        """
        determinant = self.determinant()

        if is_zero(determinant, EPS_MATRIX_SINGULAR):
            raise SingularMatrix(
                f"Matrix determinant can't be 0, got {determinant:.3e} "
                f"(threshold {EPS_MATRIX_SINGULAR:.0e})"
            )

        inverse = self.calc_complements().transpose()
        inverse.mul_number(1.0 / determinant)

        logger.debug(
            "Inverse computed for %dx%d matrix (det=%.6g)",
            self._rows,
            self._cols,
            determinant,
        )
        return inverse

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.eq_matrix(other)

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.sum_matrix(other)
        return result

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        result = self.copy()
        result.sub_matrix(other)
        return result

    def __mul__(self, other: "Matrix | float") -> "Matrix":
        if isinstance(other, Matrix):
            result = self.copy()
            result.mul_matrix(other)
            return result
        if isinstance(other, Real):
            result = self.copy()
            result.mul_number(other)
            return result
        return NotImplemented

    def __rmul__(self, other: float) -> "Matrix":
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self * other

    def __iadd__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self.sum_matrix(other)
        return self

    def __isub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self.sub_matrix(other)
        return self

    def __imul__(self, other: "Matrix | float") -> "Matrix":
        if isinstance(other, Matrix):
            self.mul_matrix(other)
            return self
        if isinstance(other, Real):
            self.mul_number(other)
            return self
        return NotImplemented

    def __imatmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self.mul_matrix(other)
        return self

    def __repr__(self) -> str:
        if self._data is None:
            return "Matrix()"
        return f"Matrix.from_rows({self.to_rows()!r})"
