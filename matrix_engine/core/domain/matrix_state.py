"""
MatrixState: снапшот матрицы для передачи через JSON

Immutable Pydantic модель, представляющая содержимое Matrix в виде
вложенного списка строк. Полная совместимость с JSON Schema
(matrix_engine/core/contracts/schema/matrix_state.json).
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from matrix_engine.core.math.matrix import Matrix
from matrix_engine.core.math.numerical_safeguards import is_valid_float


class MatrixState(BaseModel):
    """
    Снапшот матрицы.

    Immutable модель (frozen=True). Пустая матрица кодируется как
    rows=0, cols=0, values=[].
    """

    rows: int = Field(..., ge=0, description="Число строк")
    cols: int = Field(..., ge=0, description="Число столбцов")
    values: list[list[float]] = Field(..., description="Ячейки, строка за строкой")

    model_config = {"frozen": True}  # Immutable

    @field_validator("values")
    @classmethod
    def validate_finite(cls, v: list[list[float]]) -> list[list[float]]:
        """NaN/Inf не представимы в JSON контракте."""
        for i, row in enumerate(v):
            for j, value in enumerate(row):
                if not is_valid_float(value):
                    raise ValueError(f"values[{i}][{j}] must be finite, got {value}")
        return v

    @model_validator(mode="after")
    def validate_shape(self) -> "MatrixState":
        """
        Согласованность rows/cols с values.

        Пустое состояние только при rows == cols == 0.
        """
        if (self.rows == 0) != (self.cols == 0):
            raise ValueError(
                f"Empty matrix must have rows == cols == 0, got {self.rows}x{self.cols}"
            )

        if len(self.values) != self.rows:
            raise ValueError(f"Expected {self.rows} rows, got {len(self.values)}")

        for i, row in enumerate(self.values):
            if len(row) != self.cols:
                raise ValueError(
                    f"Row {i} has {len(row)} columns, expected {self.cols}"
                )

        return self

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> "MatrixState":
        """
        Снапшот текущего содержимого матрицы.

        Args:
            matrix: Исходная матрица (не изменяется)

        Returns:
            MatrixState с копией ячеек
        """
        return cls(rows=matrix.rows, cols=matrix.cols, values=matrix.to_rows())

    def to_matrix(self) -> Matrix:
        """Новая матрица с содержимым снапшота."""
        return Matrix.from_rows(self.values)
