"""Tests for determinant algorithms."""

import logging
from itertools import permutations

import numpy as np
import pytest

from numkernel.algorithms import determinant
from numkernel.algorithms.determinant import (
    cofactor_expansion,
    diagonal_product,
    inversion_count,
    leibniz_formula,
    permutation_sign,
    rule_of_sarrus,
    two_by_two,
)
from numkernel.linear.rings import INTEGER_COMPLEX_RING, INTEGER_RING
from numkernel.number import IntegerComplex

MATRIX_4 = [
    [1, 0, 2, -1],
    [3, 0, 0, 5],
    [2, 1, 4, -3],
    [1, 0, 5, 0],
]

MATRIX_5 = [
    [2, -1, 0, 3, 1],
    [1, 4, -2, 0, 2],
    [0, 5, 1, -1, -3],
    [3, 0, 2, 1, 4],
    [-2, 1, 1, 0, 1],
]


def accessor(rows):
    """1-based element accessor over nested lists."""
    return lambda r, c: rows[r - 1][c - 1]


class TestPermutations:
    """Tests for inversion counting and permutation sign."""

    @pytest.mark.parametrize(
        "permutation,expected",
        [
            ((1, 2, 3), 0),
            ((2, 1, 3), 1),
            ((3, 2, 1), 3),
            ((2, 3, 1), 2),
            ((4, 3, 2, 1), 6),
        ],
    )
    def test_inversion_count(self, permutation: tuple[int, ...], expected: int) -> None:
        assert inversion_count(permutation) == expected

    def test_sign(self) -> None:
        assert permutation_sign((1, 2, 3)) == 1
        assert permutation_sign((2, 1, 3)) == -1

    def test_signs_balance(self) -> None:
        """Even and odd permutations are equally many for n >= 2."""
        signs = [permutation_sign(p) for p in permutations(range(1, 6))]
        assert sum(signs) == 0


class TestClosedForms:
    """Tests for small-size determinant formulas."""

    def test_two_by_two(self) -> None:
        """det [[1, 2], [3, 4]] = -2."""
        assert two_by_two(accessor([[1, 2], [3, 4]]), INTEGER_RING) == -2

    def test_sarrus(self) -> None:
        rows = [[2, -3, 1], [2, 0, -1], [1, 4, 5]]
        assert rule_of_sarrus(accessor(rows), INTEGER_RING) == 49

    def test_sarrus_matches_cofactor(self) -> None:
        rows = [[6, 1, 1], [4, -2, 5], [2, 8, 7]]
        element = accessor(rows)
        assert rule_of_sarrus(element, INTEGER_RING) == cofactor_expansion(element, 3, INTEGER_RING)
        assert rule_of_sarrus(element, INTEGER_RING) == -306

    def test_diagonal_product(self) -> None:
        rows = [[2, 7, 1], [0, 3, 9], [0, 0, -4]]
        assert diagonal_product(accessor(rows), 3, INTEGER_RING) == -24


class TestLeibniz:
    """Tests for the Leibniz formula."""

    def test_known_four_by_four(self) -> None:
        assert leibniz_formula(accessor(MATRIX_4), 4, INTEGER_RING) == 30

    @pytest.mark.parametrize("rows,size", [(MATRIX_4, 4), (MATRIX_5, 5)])
    def test_matches_cofactor_expansion(self, rows: list[list[int]], size: int) -> None:
        element = accessor(rows)
        expected = cofactor_expansion(element, size, INTEGER_RING)
        assert leibniz_formula(element, size, INTEGER_RING) == expected

    @pytest.mark.parametrize("rows,size", [(MATRIX_4, 4), (MATRIX_5, 5)])
    def test_matches_numpy(self, rows: list[list[int]], size: int) -> None:
        result = leibniz_formula(accessor(rows), size, INTEGER_RING)
        assert result == round(np.linalg.det(np.array(rows, dtype=np.float64)))

    def test_agrees_with_sarrus_on_three_by_three(self) -> None:
        rows = [[2, -3, 1], [2, 0, -1], [1, 4, 5]]
        element = accessor(rows)
        assert leibniz_formula(element, 3, INTEGER_RING) == rule_of_sarrus(element, INTEGER_RING)

    def test_generic_over_gaussian_integers(self) -> None:
        """The same code path works for complex elements."""
        rows = [[IntegerComplex(a, b) for a, b in row] for row in [
            [(1, 1), (0, 2), (3, 0), (1, -1)],
            [(2, 0), (1, 0), (0, 1), (0, 0)],
            [(0, -1), (1, 1), (2, 2), (1, 0)],
            [(1, 0), (0, 0), (1, -2), (3, 1)],
        ]]
        element = accessor(rows)
        expected = cofactor_expansion(element, 4, INTEGER_COMPLEX_RING)
        assert leibniz_formula(element, 4, INTEGER_COMPLEX_RING) == expected

        reference = np.linalg.det(
            np.array([[complex(z.real, z.imaginary) for z in row] for row in rows])
        )
        assert complex(expected.real, expected.imaginary) == pytest.approx(reference)

    def test_logs_term_count(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="numkernel.algorithms.determinant"):
            leibniz_formula(accessor(MATRIX_4), 4, INTEGER_RING)
        assert "24 terms" in caplog.text

    def test_warns_above_size_limit(
        self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Sizes above LEIBNIZ_WARN_SIZE log a warning."""
        monkeypatch.setattr(determinant, "LEIBNIZ_WARN_SIZE", 3)
        with caplog.at_level(logging.WARNING, logger="numkernel.algorithms.determinant"):
            leibniz_formula(accessor(MATRIX_4), 4, INTEGER_RING)
        assert any(record.levelno == logging.WARNING for record in caplog.records)

    def test_no_warning_at_default_limit(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="numkernel.algorithms.determinant"):
            leibniz_formula(accessor(MATRIX_5), 5, INTEGER_RING)
        assert not caplog.records
