"""
Tests for the Haralick statistics f1 .. f13.
"""

import math

import numpy as np
import pytest

from pyharalick.engine.core import glcm_statistics as stats
from pyharalick.utils.exceptions import CooccurrenceMatrixError
from tests.conftest import make_symmetric_glcm

EPS = 1e-9


def _log2(value):
    return math.log2(value + EPS)


class TestKnownMatrices:
    """Closed-form values on small hand-built matrices."""

    def test_identity_like_matrix(self, identity_glcm):
        n_tones = identity_glcm.shape[0]
        assert stats.angular_second_moment(identity_glcm) == pytest.approx(1.0 / n_tones)
        assert stats.contrast(identity_glcm) == 0.0
        assert stats.inverse_difference_moment(identity_glcm) == pytest.approx(1.0)
        assert stats.difference_variance(identity_glcm) == pytest.approx(0.0)

    def test_two_tone_diagonal(self, two_tone_glcm):
        assert stats.angular_second_moment(two_tone_glcm, 2) == pytest.approx(0.5)
        assert stats.contrast(two_tone_glcm, 2) == 0.0
        assert stats.entropy(two_tone_glcm, 2) == pytest.approx(1.0, abs=1e-6)
        # tones 0 and 1 with equal mass: mu = 0.5, sigma^2 = 0.25
        assert stats.correlation(two_tone_glcm, 2) == pytest.approx(1.0)
        assert stats.variance(two_tone_glcm, 2) == pytest.approx(0.25)
        assert stats.sum_average(two_tone_glcm, 2) == pytest.approx(1.0)

    def test_zero_variance_correlation_is_nan(self):
        single_cell = np.array([[0.0, 0.0], [0.0, 1.0]])
        assert math.isnan(stats.correlation(single_cell))

    def test_anti_diagonal_correlation(self):
        glcm = np.array([[0.0, 0.5], [0.5, 0.0]])
        assert stats.correlation(glcm) == pytest.approx(-1.0)
        assert stats.contrast(glcm) == pytest.approx(1.0)
        assert stats.inverse_difference_moment(glcm) == pytest.approx(0.5)


class TestAgainstDirectSums:
    """Each feature against a plain double loop over the definition."""

    @pytest.fixture
    def glcm(self):
        return make_symmetric_glcm(5, seed=11)

    def test_contrast(self, glcm):
        n = glcm.shape[0]
        expected = sum((i - j) ** 2 * glcm[i, j] for i in range(n) for j in range(n))
        assert stats.contrast(glcm) == pytest.approx(expected)

    def test_variance(self, glcm):
        n = glcm.shape[0]
        mean = sum(i * glcm[i, j] for i in range(n) for j in range(n))
        expected = sum((i - mean) ** 2 * glcm[i, j] for i in range(n) for j in range(n))
        assert stats.variance(glcm) == pytest.approx(expected)

    def test_sum_features(self, glcm):
        n = glcm.shape[0]
        p_sum = [0.0] * (2 * n - 1)
        for i in range(n):
            for j in range(n):
                p_sum[i + j] += glcm[i, j]

        expected_avg = sum(k * p for k, p in enumerate(p_sum))
        expected_entr = -sum(p * _log2(p) for p in p_sum)
        expected_var = sum((k - expected_entr) ** 2 * p for k, p in enumerate(p_sum))

        assert stats.sum_average(glcm) == pytest.approx(expected_avg)
        assert stats.sum_entropy(glcm) == pytest.approx(expected_entr)
        assert stats.sum_variance(glcm) == pytest.approx(expected_var)

    def test_sum_variance_accepts_precomputed_entropy(self, glcm):
        sum_entr = stats.sum_entropy(glcm)
        assert stats.sum_variance(glcm, sum_entropy_value=sum_entr) == stats.sum_variance(glcm)

    def test_difference_features(self, glcm):
        n = glcm.shape[0]
        p_diff = [0.0] * n
        for i in range(n):
            for j in range(n):
                p_diff[abs(i - j)] += glcm[i, j]

        first = sum(k * p for k, p in enumerate(p_diff))
        second = sum(k * k * p for k, p in enumerate(p_diff))
        assert stats.difference_variance(glcm) == pytest.approx(second - first * first)
        assert stats.difference_entropy(glcm) == pytest.approx(-sum(p * _log2(p) for p in p_diff))

    def test_information_measures(self, glcm):
        n = glcm.shape[0]
        px = glcm.sum(axis=1)
        py = glcm.sum(axis=0)

        hxy = hxy1 = hxy2 = 0.0
        for i in range(n):
            for j in range(n):
                hxy -= glcm[i, j] * _log2(glcm[i, j])
                hxy1 -= glcm[i, j] * _log2(px[i] * py[j])
                hxy2 -= px[i] * py[j] * _log2(px[i] * py[j])
        hx = -sum(p * _log2(p) for p in px)
        hy = -sum(p * _log2(p) for p in py)

        assert stats.info_measure_corr_1(glcm) == pytest.approx((hxy - hxy1) / max(hx, hy))
        assert stats.info_measure_corr_2(glcm) == pytest.approx(math.sqrt(abs(1 - math.exp(-2 * (hxy2 - hxy)))))


class TestProperties:

    @pytest.mark.parametrize("seed", range(5))
    def test_ranges_on_random_matrices(self, seed):
        glcm = make_symmetric_glcm(8, seed=seed)
        n_tones = glcm.shape[0]

        asm = stats.angular_second_moment(glcm)
        assert 1.0 / n_tones ** 2 - 1e-12 <= asm <= 1.0
        assert stats.entropy(glcm) >= 0.0
        assert -1.0 - 1e-12 <= stats.correlation(glcm) <= 1.0 + 1e-12
        assert stats.info_measure_corr_2(glcm) >= 0.0

    def test_entropy_of_single_cell_is_zero(self):
        glcm = np.zeros((3, 3))
        glcm[1, 1] = 1.0
        assert stats.entropy(glcm) == pytest.approx(0.0, abs=1e-8)
        assert stats.info_measure_corr_1(glcm) == 0.0

    def test_independent_marginals(self):
        px = np.array([0.2, 0.3, 0.5])
        glcm = np.outer(px, px)
        assert stats.info_measure_corr_1(glcm) == pytest.approx(0.0, abs=1e-6)
        assert stats.info_measure_corr_2(glcm) == pytest.approx(0.0, abs=1e-3)


class TestMalformedInput:

    @pytest.mark.parametrize("name", sorted(stats.STATISTICS_FUNCTIONS))
    def test_non_2d_input_raises(self, name):
        with pytest.raises(CooccurrenceMatrixError):
            stats.STATISTICS_FUNCTIONS[name](np.ones(4))

    def test_nested_lists_are_accepted(self):
        assert stats.angular_second_moment([[0.5, 0.0], [0.0, 0.5]]) == pytest.approx(0.5)


class TestDistributions:

    def test_sum_and_difference_lengths(self, symmetric_glcm):
        n = symmetric_glcm.shape[0]
        p_sum = stats.sum_distribution(symmetric_glcm)
        p_diff = stats.difference_distribution(symmetric_glcm)

        assert p_sum.shape == (2 * n - 1,)
        assert p_diff.shape == (n,)
        assert p_sum.sum() == pytest.approx(1.0)
        assert p_diff.sum() == pytest.approx(1.0)

    def test_scratch_is_fresh_per_call(self, symmetric_glcm):
        first = stats.sum_distribution(symmetric_glcm)
        first[:] = 99.0
        second = stats.sum_distribution(symmetric_glcm)
        assert second.sum() == pytest.approx(1.0)

    def test_marginals(self):
        glcm = np.array([[0.1, 0.2], [0.3, 0.4]])
        np.testing.assert_allclose(stats.marginal_x(glcm), [0.3, 0.7])
        np.testing.assert_allclose(stats.marginal_y(glcm), [0.4, 0.6])


class TestDegenerateInput:

    @pytest.mark.parametrize("name", sorted(stats.STATISTICS_FUNCTIONS))
    def test_all_zero_matrix(self, name):
        assert stats.STATISTICS_FUNCTIONS[name](np.zeros((4, 4))) == 0.0

    @pytest.mark.parametrize("name", sorted(stats.STATISTICS_FUNCTIONS))
    def test_no_gray_tones(self, name):
        assert stats.STATISTICS_FUNCTIONS[name](np.zeros((0, 0)), 0) == 0.0

    def test_leading_block_only(self, two_tone_glcm):
        padded = np.zeros((4, 4))
        padded[:2, :2] = two_tone_glcm
        padded[3, 3] = 123.0
        assert stats.angular_second_moment(padded, 2) == pytest.approx(0.5)

    def test_input_is_not_modified(self, symmetric_glcm):
        before = symmetric_glcm.copy()
        for func in stats.STATISTICS_FUNCTIONS.values():
            func(symmetric_glcm)
        np.testing.assert_array_equal(symmetric_glcm, before)
