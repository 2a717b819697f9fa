"""
Tests for the balance / Hessenberg / QR eigenvalue engine.
"""

import numpy as np
import pytest
from scipy import linalg

from pyharalick.engine.core import eigenvalue_engine as engine
from pyharalick.utils.exceptions import CooccurrenceMatrixError, EigenvalueConvergenceError


def _as_sorted_complex(wr, wi):
    values = np.asarray(wr) + 1j * np.asarray(wi)
    return np.sort_complex(values)


def _reference(matrix):
    return np.sort_complex(linalg.eigvals(matrix).astype(np.complex128))


class TestEigenvalues:

    def test_diagonal_matrix_returns_diagonal(self):
        diag = np.array([3.0, -1.5, 0.25, 7.0, 2.0])
        wr, wi = engine.eigenvalues(np.diag(diag))

        np.testing.assert_allclose(np.sort(wr), np.sort(diag), rtol=0, atol=1e-12)
        np.testing.assert_array_equal(wi, np.zeros_like(diag))

    def test_symmetric_two_by_two(self):
        wr, wi = engine.eigenvalues(np.array([[2.0, 1.0], [1.0, 2.0]]))
        np.testing.assert_allclose(np.sort(wr), [1.0, 3.0])
        np.testing.assert_array_equal(wi, [0.0, 0.0])

    def test_rotation_gives_conjugate_pair(self):
        wr, wi = engine.eigenvalues(np.array([[0.0, -1.0], [1.0, 0.0]]))
        np.testing.assert_allclose(wr, [0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(np.sort(wi), [-1.0, 1.0])

    def test_companion_matrix_roots(self):
        # (x - 1)(x - 2)(x - 3)(x - 4) = x^4 - 10x^3 + 35x^2 - 50x + 24
        companion = np.array([
            [10.0, -35.0, 50.0, -24.0],
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
        ])
        wr, wi = engine.eigenvalues(companion)
        np.testing.assert_allclose(np.sort(wr), [1.0, 2.0, 3.0, 4.0], rtol=1e-8)
        np.testing.assert_allclose(wi, 0.0, atol=1e-8)

    @pytest.mark.parametrize("seed", range(6))
    def test_matches_scipy_on_random_matrices(self, seed):
        rng = np.random.default_rng(seed)
        matrix = rng.normal(size=(7, 7))

        wr, wi = engine.eigenvalues(matrix)
        np.testing.assert_allclose(_as_sorted_complex(wr, wi), _reference(matrix), rtol=1e-7, atol=1e-9)

    def test_badly_scaled_matrix(self):
        rng = np.random.default_rng(42)
        scale = np.diag(2.0 ** np.arange(-12, 12, 4))
        matrix = scale @ rng.normal(size=(6, 6)) @ np.linalg.inv(scale)

        wr, wi = engine.eigenvalues(matrix)
        np.testing.assert_allclose(_as_sorted_complex(wr, wi), _reference(matrix), rtol=1e-6, atol=1e-8)

    def test_single_element(self):
        wr, wi = engine.eigenvalues(np.array([[4.5]]))
        assert wr.tolist() == [4.5]
        assert wi.tolist() == [0.0]

    def test_empty_matrix(self):
        wr, wi = engine.eigenvalues(np.zeros((0, 0)))
        assert wr.size == 0 and wi.size == 0

    def test_input_is_not_modified(self):
        matrix = np.random.default_rng(3).normal(size=(5, 5))
        before = matrix.copy()
        engine.eigenvalues(matrix)
        np.testing.assert_array_equal(matrix, before)

    @pytest.mark.parametrize("bad", [np.zeros((2, 3)), np.zeros(4), np.array([[1.0, np.nan], [0.0, 1.0]])])
    def test_rejects_malformed_input(self, bad):
        with pytest.raises(CooccurrenceMatrixError):
            engine.eigenvalues(bad)


class TestStages:

    def test_balance_leaves_diagonal_unchanged(self):
        matrix = np.diag([1.0, 2.0, 3.0])
        balanced = engine.balance(matrix.copy())
        np.testing.assert_array_equal(balanced, matrix)

    def test_balance_equalises_norms_and_keeps_eigenvalues(self):
        matrix = np.array([
            [1.0, 1e4, 0.0],
            [1e-4, 2.0, 1e3],
            [0.0, 1e-3, 3.0],
        ])
        balanced = engine.balance(matrix.copy())

        off_diag = np.abs(balanced - np.diag(np.diag(balanced)))
        col_norms = off_diag.sum(axis=0)
        row_norms = off_diag.sum(axis=1)
        assert np.all(col_norms / row_norms < 4.0)
        assert np.all(row_norms / col_norms < 4.0)
        np.testing.assert_allclose(np.sort_complex(linalg.eigvals(balanced)), _reference(matrix), rtol=1e-9)

    def test_balance_with_dominant_diagonal(self):
        matrix = np.array([[1e20, 1e4], [1e-4, 1.0]])
        balanced = engine.balance(matrix.copy())

        np.testing.assert_array_equal(np.diag(balanced), np.diag(matrix))
        assert 0.25 < balanced[0, 1] / balanced[1, 0] < 4.0

    def test_balance_scales_by_powers_of_two(self):
        matrix = np.array([[1.0, 1024.0], [1.0, 1.0]])
        balanced = engine.balance(matrix.copy())
        ratio = balanced[0, 1] / matrix[0, 1]
        assert np.log2(ratio) == pytest.approx(round(np.log2(ratio)))

    def test_hessenberg_reduction_keeps_eigenvalues(self):
        matrix = np.random.default_rng(9).normal(size=(6, 6))
        reduced = engine.hessenberg_part(engine.reduce_to_hessenberg(matrix.copy()))

        assert np.all(np.tril(reduced, k=-2) == 0.0)
        np.testing.assert_allclose(np.sort_complex(linalg.eigvals(reduced)), _reference(matrix), rtol=1e-8, atol=1e-10)

    def test_hqr_on_triangular_matrix(self):
        upper = np.triu(np.arange(1.0, 17.0).reshape(4, 4))
        wr, wi = engine.hqr(upper.copy())
        np.testing.assert_allclose(np.sort(wr), np.sort(np.diag(upper)))
        np.testing.assert_array_equal(wi, np.zeros(4))

    def test_sorted_real_parts(self):
        np.testing.assert_array_equal(engine.sorted_real_parts([3.0, -1.0, 2.0]), [-1.0, 2.0, 3.0])


class TestConvergenceFailure:

    def test_raises_when_iteration_limit_is_hit(self, monkeypatch):
        monkeypatch.setattr(engine, "MAX_QR_ITERATIONS", 0)
        matrix = np.array([
            [4.0, 1.0, 2.0],
            [3.0, 5.0, 1.0],
            [1.0, 2.0, 6.0],
        ])

        with pytest.raises(EigenvalueConvergenceError) as excinfo:
            engine.eigenvalues(matrix)

        assert excinfo.value.block_order == 3
        assert excinfo.value.iterations == 0

    def test_convergence_error_is_arithmetic_error(self):
        assert issubclass(EigenvalueConvergenceError, ArithmeticError)


class _RecordingShiftSchedule:
    """Stands in for the exceptional shift iterations and records when one fires."""

    def __init__(self, iterations):
        self.iterations = tuple(iterations)
        self.fired = []

    def __contains__(self, its):
        hit = its in self.iterations
        if hit:
            self.fired.append(its)
        return hit


class TestExceptionalShifts:

    @pytest.mark.parametrize("n", range(3, 9))
    def test_cyclic_permutation(self, n, monkeypatch):
        # zero diagonal and orthogonal: the standard shift reproduces the matrix
        schedule = _RecordingShiftSchedule(engine.EXCEPTIONAL_SHIFT_ITERATIONS)
        monkeypatch.setattr(engine, "EXCEPTIONAL_SHIFT_ITERATIONS", schedule)
        matrix = np.roll(np.eye(n), 1, axis=1)

        wr, wi = engine.eigenvalues(matrix)

        assert 10 in schedule.fired
        np.testing.assert_allclose(_as_sorted_complex(wr, wi), _reference(matrix), atol=1e-10)
