"""
Тесты для Matrix: миноры, дополнения, определитель, обратная матрица

Проверяемые инварианты:
1. find_minor сохраняет порядок оставшихся ячеек
2. det(M) = Σ_j M[0][j] · (-1)^j · det(Minor(M, 0, j))
3. calc_complements 1x1 → копия матрицы
4. NotSquare для неквадратных матриц
5. SingularMatrix при |det| <= 1e-7
6. A · A^-1 == I в пределах допуска
"""

import logging

import pytest

from matrix_engine.core.math.matrix import (
    IndexOutOfRange,
    InvalidDimension,
    Matrix,
    NotSquare,
    SingularMatrix,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def singular3():
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


@pytest.fixture
def invertible3():
    return Matrix.from_rows([[2, 5, 7], [6, 3, 4], [5, -2, -3]])


@pytest.fixture
def dense4():
    return Matrix.from_rows(
        [
            [3, -1, 2, 0.5],
            [1, 4, -2, 1],
            [0, 2, 5, -3],
            [2, -1, 1, 6],
        ]
    )


# =============================================================================
# ТЕСТЫ: Миноры
# =============================================================================


class TestMinor:
    """Тесты find_minor / minor."""

    def test_find_minor_fills_destination(self, singular3):
        """find_minor пишет в заранее выделенную матрицу."""
        minor = Matrix(2, 2)
        singular3.find_minor(minor, 1, 1)
        assert minor.to_rows() == [[1, 3], [7, 9]]

    @pytest.mark.parametrize(
        "row,col,expected",
        [
            (0, 0, [[5, 6], [8, 9]]),
            (0, 2, [[4, 5], [7, 8]]),
            (2, 1, [[1, 3], [4, 6]]),
        ],
    )
    def test_minor(self, singular3, row, col, expected):
        """minor выделяет новую матрицу без строки и столбца."""
        assert singular3.minor(row, col).to_rows() == expected

    def test_minor_of_rectangular(self):
        """Минор прямоугольной матрицы."""
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        assert m.minor(0, 1).to_rows() == [[4, 6]]

    def test_minor_out_of_range(self, singular3):
        """Индекс вне матрицы."""
        with pytest.raises(IndexOutOfRange):
            singular3.minor(3, 0)

    def test_minor_of_single_element(self):
        """У матрицы 1x1 нет минора."""
        with pytest.raises(InvalidDimension):
            Matrix.from_rows([[1]]).minor(0, 0)


# =============================================================================
# ТЕСТЫ: Определитель
# =============================================================================


class TestDeterminant:
    """Тесты determinant."""

    def test_single_element(self):
        """det 1x1 равен значению ячейки."""
        assert Matrix.from_rows([[-4.5]]).determinant() == -4.5

    def test_two_by_two(self):
        """ad - bc."""
        assert Matrix.from_rows([[1, 2], [3, 4]]).determinant() == pytest.approx(-2.0)

    def test_singular(self, singular3):
        """Вырожденная матрица."""
        assert singular3.determinant() == pytest.approx(0.0, abs=1e-9)

    def test_specific_non_zero(self):
        """Известное значение -3."""
        m = Matrix.from_rows([[1, 2, 2], [4, 5, 5], [7, 8, 9]])
        assert m.determinant() == pytest.approx(-3.0)

    def test_identity(self):
        """det(I) = 1."""
        assert Matrix.identity(5).determinant() == pytest.approx(1.0)

    def test_laplace_expansion_law(self, dense4):
        """Определение через разложение по первой строке."""
        expected = sum(
            dense4[0, j] * (-1) ** j * dense4.minor(0, j).determinant()
            for j in range(4)
        )
        assert dense4.determinant() == pytest.approx(expected)

    def test_transpose_invariance(self, dense4):
        """det(A^T) = det(A)."""
        assert dense4.transpose().determinant() == pytest.approx(dense4.determinant())

    def test_non_square_raises(self):
        """Неквадратная матрица → NotSquare."""
        with pytest.raises(NotSquare, match="not square"):
            Matrix(2, 3).determinant()

    def test_empty_matrix(self):
        """Пустая сумма разложения равна нулю."""
        assert Matrix().determinant() == 0.0

    def test_source_unchanged(self, dense4):
        """determinant не меняет матрицу."""
        before = dense4.copy()
        dense4.determinant()
        assert dense4 == before


# =============================================================================
# ТЕСТЫ: Алгебраические дополнения
# =============================================================================


class TestCalcComplements:
    """Тесты calc_complements."""

    def test_square(self, singular3):
        """Известная матрица дополнений."""
        expected = Matrix.from_rows([[-3, 6, -3], [6, -12, 6], [-3, 6, -3]])
        assert singular3.calc_complements() == expected

    def test_two_by_two(self):
        """[[a, b], [c, d]] → [[d, -c], [-b, a]]."""
        m = Matrix.from_rows([[1, 2], [3, 4]])
        assert m.calc_complements().to_rows() == [[4, -3], [-2, 1]]

    def test_single_element_is_copy(self):
        """Для 1x1 возвращается копия самой матрицы."""
        m = Matrix.from_rows([[5]])
        complements = m.calc_complements()
        assert complements.to_rows() == [[5]]
        complements[0, 0] = 1.0
        assert m[0, 0] == 5.0

    def test_non_square_raises(self):
        """Неквадратная матрица → NotSquare."""
        with pytest.raises(NotSquare):
            Matrix(3, 2).calc_complements()


# =============================================================================
# ТЕСТЫ: Обратная матрица
# =============================================================================


class TestInverseMatrix:
    """Тесты inverse_matrix."""

    def test_known_inverse(self, invertible3):
        """Целочисленная обратная матрица (det = -1)."""
        expected = Matrix.from_rows([[1, -1, 1], [-38, 41, -34], [27, -29, 24]])
        assert invertible3.inverse_matrix() == expected

    def test_product_is_identity(self, dense4):
        """A · A^-1 == I."""
        assert dense4 * dense4.inverse_matrix() == Matrix.identity(4)
        assert dense4.inverse_matrix() * dense4 == Matrix.identity(4)

    def test_two_by_two(self):
        """Обратная 2x2."""
        m = Matrix.from_rows([[4, 7], [2, 6]])
        inverse = m.inverse_matrix()
        assert inverse == Matrix.from_rows([[0.6, -0.7], [-0.2, 0.4]])

    def test_single_element_follows_complements(self):
        """1x1: копия / det, т.е. [[1]]."""
        assert Matrix.from_rows([[4]]).inverse_matrix().to_rows() == [[1.0]]

    def test_singular_raises(self, singular3):
        """Вырожденная матрица → SingularMatrix."""
        with pytest.raises(SingularMatrix, match="determinant can't be 0"):
            singular3.inverse_matrix()

    def test_near_singular_threshold(self):
        """|det| <= 1e-7 считается вырожденным."""
        with pytest.raises(SingularMatrix):
            Matrix.from_rows([[1e-8]]).inverse_matrix()

    def test_non_square_raises(self):
        """Неквадратная матрица → NotSquare."""
        with pytest.raises(NotSquare):
            Matrix(2, 3).inverse_matrix()

    def test_empty_matrix_is_singular(self):
        """Пустая матрица необратима."""
        with pytest.raises(SingularMatrix):
            Matrix().inverse_matrix()

    def test_source_unchanged(self, invertible3):
        """inverse_matrix не меняет исходную матрицу."""
        before = invertible3.copy()
        invertible3.inverse_matrix()
        assert invertible3 == before

    def test_debug_log(self, invertible3, caplog):
        """Успешное обращение пишет DEBUG запись."""
        caplog.set_level(logging.DEBUG, logger="matrix_engine.core.math.matrix")
        invertible3.inverse_matrix()
        assert "Inverse computed for 3x3 matrix" in caplog.text
