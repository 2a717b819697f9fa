# -*- coding: utf-8 -*-
# core/glcm_statistics.py
"""
Haralick statistics f1 .. f13 of a gray-level co-occurrence probability matrix.

Every feature is a pure function ``f(glcm_prob, n_tones) -> float`` that reads
only ``glcm_prob[:n_tones, :n_tones]``. Gray tones are indexed from 0, and
every logarithm is ``log2(x + LOG_EPSILON)``. Sum and difference distributions
are allocated per call, so nothing is shared between features or callers.

Reference:
    Haralick, R.M., K. Shanmugam, and I. Dinstein. 1973. Textural features
    for image classification. IEEE Transactions on Systems, Man, and
    Cybernetics, SMC-3(6):610-621.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import NamedTuple, Optional, Tuple

import numpy as np

from pyharalick.config.settings import LOG_EPSILON
from pyharalick.utils.exceptions import CooccurrenceMatrixError

logger = logging.getLogger("Dev_logger")


@lru_cache(maxsize=64)
def _cached_ij_grids(n_tones: int) -> Tuple[np.ndarray, np.ndarray]:
    idx = np.arange(n_tones, dtype=np.float64)
    i_grid, j_grid = np.meshgrid(idx, idx, indexing="ij")
    i_grid.setflags(write=False)
    j_grid.setflags(write=False)
    return i_grid, j_grid


@lru_cache(maxsize=64)
def _cached_tone_indices(n_tones: int) -> np.ndarray:
    idx = np.arange(n_tones, dtype=np.float64)
    idx.setflags(write=False)
    return idx


@lru_cache(maxsize=64)
def _cached_sum_k_indices(n_tones: int) -> np.ndarray:
    # 0, 1, ..., 2 * n_tones - 2
    idx = np.arange(max(2 * n_tones - 1, 0), dtype=np.float64)
    idx.setflags(write=False)
    return idx


# ---------------- Input / helper distributions ----------------

def as_probability_matrix(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> np.ndarray:
    """
    Return the leading ``n_tones x n_tones`` block of ``glcm_prob`` as float64.

    The caller's array is never written to; a copy is made only when the dtype
    or layout requires one.

    Raises:
        CooccurrenceMatrixError: ``glcm_prob`` is not 2D.
    """
    matrix = np.asarray(glcm_prob, dtype=np.float64)
    if matrix.ndim != 2:
        raise CooccurrenceMatrixError(f"Co-occurrence matrix must be 2D, got {matrix.ndim}D")
    if n_tones is None:
        n_tones = matrix.shape[0]
    n_tones = max(int(n_tones), 0)
    return matrix[:n_tones, :n_tones]


def _is_degenerate(glcm_prob: np.ndarray) -> bool:
    return glcm_prob.size == 0 or not np.any(glcm_prob)


def log2_safe(values):
    """log2 with LOG_EPSILON added to the argument, so zero probabilities stay finite."""
    return np.log2(values + LOG_EPSILON)


def marginal_x(glcm_prob: np.ndarray) -> np.ndarray:
    return glcm_prob.sum(axis=1)


def marginal_y(glcm_prob: np.ndarray) -> np.ndarray:
    return glcm_prob.sum(axis=0)


def sum_distribution(glcm_prob: np.ndarray) -> np.ndarray:
    """
    p_{x+y}(k) = sum of P(i, j) with i + j = k, for k = 0 .. 2 * Ng - 2.

    A fresh zero-filled array is returned on every call.
    """
    n_tones = glcm_prob.shape[0]
    p_xplusy = np.zeros(max(2 * n_tones - 1, 0), dtype=np.float64)
    if n_tones == 0:
        return p_xplusy

    i_grid, j_grid = _cached_ij_grids(n_tones)
    k_indices = (i_grid + j_grid).astype(np.int64)
    np.add.at(p_xplusy, k_indices.ravel(), glcm_prob.ravel())
    return p_xplusy


def difference_distribution(glcm_prob: np.ndarray) -> np.ndarray:
    """
    p_{x-y}(k) = sum of P(i, j) with |i - j| = k, for k = 0 .. Ng - 1.
    """
    n_tones = glcm_prob.shape[0]
    if n_tones == 0:
        return np.zeros(0, dtype=np.float64)
    i_grid, j_grid = _cached_ij_grids(n_tones)
    diff = np.abs(i_grid - j_grid).astype(np.int64)
    return np.bincount(diff.ravel(), weights=glcm_prob.ravel(), minlength=n_tones).astype(np.float64)


def _entropy_of(prob: np.ndarray) -> float:
    return float(-(prob * log2_safe(prob)).sum())


class EntropyTerms(NamedTuple):
    hx: float
    hy: float
    hxy: float
    hxy1: float
    hxy2: float


def entropy_terms(glcm_prob: np.ndarray) -> EntropyTerms:
    """
    Entropies used by the information measures of correlation:
        HX, HY = entropies of the row and column marginals
        HXY    = joint entropy
        HXY1   = -sum P(i,j) * log2(px(i) * py(j))
        HXY2   = -sum px(i) * py(j) * log2(px(i) * py(j))
    """
    prob_x = marginal_x(glcm_prob)
    prob_y = marginal_y(glcm_prob)
    prob_indep = np.outer(prob_x, prob_y)
    log_indep = log2_safe(prob_indep)

    return EntropyTerms(
        hx=_entropy_of(prob_x),
        hy=_entropy_of(prob_y),
        hxy=_entropy_of(glcm_prob),
        hxy1=float(-(glcm_prob * log_indep).sum()),
        hxy2=float(-(prob_indep * log_indep).sum()),
    )


# -------------------------------------------------------------------------
# Feature calculation functions (f1 .. f13)
# Each function expects a normalized GLCM probability matrix P as input.
# -------------------------------------------------------------------------

# 1. Angular Second Moment
def angular_second_moment(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Angular Second Moment of a GLCM.

    ASM measures the homogeneity of the image. A homogeneous image has few
    dominant gray-tone transitions, so its P has few entries of large magnitude:
        ASM = sum_{i,j} P(i,j)^2

    Args:
        glcm_prob (np.ndarray): 2D normalized GLCM (Ng x Ng).
        n_tones (int): Number of gray tones Ng. Defaults to the matrix size.

    Returns:
        float: ASM value in [1/Ng^2, 1] for a valid P. Returns 0 if the GLCM is empty.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0
    return float(np.sum(prob ** 2))


# 2. Contrast
def contrast(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Contrast of a GLCM.

    Contrast is a difference moment of P, measuring local variation:
        Contrast = sum_n n^2 * sum_{|i-j|=n} P(i,j)

    Args:
        glcm_prob (np.ndarray): 2D normalized GLCM (Ng x Ng).
        n_tones (int): Number of gray tones Ng.

    Returns:
        float: Contrast value. Returns 0 if the GLCM is empty.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    p_diff = difference_distribution(prob)
    n_indices = _cached_tone_indices(prob.shape[0])
    return float(np.sum(n_indices ** 2 * p_diff))


# 3. Correlation
def correlation(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Correlation of a GLCM.

    Correlation measures gray-tone linear dependencies. The mean and variance
    come from the row marginal alone; P is assumed close to symmetric, so the
    column statistics are taken to be equal:
        Corr = (sum_{i,j} i * j * P(i,j) - mu^2) / sigma^2

    Args:
        glcm_prob (np.ndarray): 2D normalized GLCM (Ng x Ng).
        n_tones (int): Number of gray tones Ng.

    Returns:
        float: Correlation in [-1, 1] for symmetric P. NaN when sigma^2 is zero,
        0 if the GLCM is empty.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    px = marginal_x(prob)
    i_index = _cached_tone_indices(prob.shape[0])
    mean = float((i_index * px).sum())
    variance_x = float((i_index ** 2 * px).sum()) - mean * mean

    if not variance_x > 0.0:
        return float(np.nan)

    i_grid, j_grid = _cached_ij_grids(prob.shape[0])
    cross = float((i_grid * j_grid * prob).sum())
    return (cross - mean * mean) / variance_x


# 4. Variance (sum of squares)
def variance(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Sum of Squares: Variance of a GLCM.

        Variance = sum_{i,j} (i - mu)^2 * P(i,j),  mu = sum_{i,j} i * P(i,j)

    mu is the mean gray tone, not the mean of the matrix elements.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    i_grid, _ = _cached_ij_grids(prob.shape[0])
    mean = float((i_grid * prob).sum())
    return float((((i_grid - mean) ** 2) * prob).sum())


# 5. Inverse Difference Moment
def inverse_difference_moment(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Inverse Difference Moment of a GLCM.

        IDM = sum_{i,j} P(i,j) / (1 + (i - j)^2)
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    i_grid, j_grid = _cached_ij_grids(prob.shape[0])
    return float(np.sum(prob / (1.0 + (i_grid - j_grid) ** 2)))


# 6. Sum Average
def sum_average(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Sum Average of a GLCM.

        SumAvg = sum_k k * p_{x+y}(k),  k = 0 .. 2Ng - 2
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    p_sum = sum_distribution(prob)
    k_indices = _cached_sum_k_indices(prob.shape[0])
    return float(np.sum(k_indices * p_sum))


# 7. Sum Variance
def sum_variance(glcm_prob: np.ndarray, n_tones: Optional[int] = None,
                 sum_entropy_value: Optional[float] = None) -> float:
    """
    Compute the Sum Variance of a GLCM as Haralick defined it.

        SumVar = sum_k (k - f8)^2 * p_{x+y}(k)

    The centre f8 is the Sum Entropy, not the Sum Average. Pass
    ``sum_entropy_value`` when it has already been computed; otherwise it is
    computed here.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    if sum_entropy_value is None:
        sum_entropy_value = sum_entropy(prob)

    p_sum = sum_distribution(prob)
    k_indices = _cached_sum_k_indices(prob.shape[0])
    return float(np.sum(((k_indices - sum_entropy_value) ** 2) * p_sum))


# 8. Sum Entropy
def sum_entropy(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Sum Entropy of a GLCM in bits.

        SumEntr = -sum_k p_{x+y}(k) * log2(p_{x+y}(k) + eps)
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0
    return _entropy_of(sum_distribution(prob))


# 9. Entropy
def entropy(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the (joint) Entropy of a GLCM in bits.

        Entropy = -sum_{i,j} P(i,j) * log2(P(i,j) + eps)

    Returns:
        float: Entropy, >= 0 for a valid P up to the eps guard.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0
    return _entropy_of(prob)


# 10. Difference Variance
def difference_variance(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Difference Variance of a GLCM.

        DiffVar = sum_k k^2 * p_{x-y}(k) - (sum_k k * p_{x-y}(k))^2
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    p_diff = difference_distribution(prob)
    k_indices = _cached_tone_indices(prob.shape[0])
    first_moment = float(np.sum(k_indices * p_diff))
    second_moment = float(np.sum(k_indices ** 2 * p_diff))
    return second_moment - first_moment * first_moment


# 11. Difference Entropy
def difference_entropy(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Difference Entropy of a GLCM in bits.

        DiffEntr = -sum_k p_{x-y}(k) * log2(p_{x-y}(k) + eps)
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0
    return _entropy_of(difference_distribution(prob))


# 12. Information Measure of Correlation 1
def info_measure_corr_1(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute Information Measure of Correlation 1 (IMC1).

        IMC1 = (HXY - HXY1) / max(HX, HY)

    Returns 0 when both marginal entropies are zero (all mass in one cell).
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    terms = entropy_terms(prob)
    denom = max(terms.hx, terms.hy)
    if denom <= 0.0:
        return 0.0
    return (terms.hxy - terms.hxy1) / denom


# 13. Information Measure of Correlation 2
def info_measure_corr_2(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute Information Measure of Correlation 2 (IMC2).

        IMC2 = sqrt(|1 - exp(-2 * (HXY2 - HXY))|)
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if _is_degenerate(prob):
        return 0.0

    terms = entropy_terms(prob)
    return float(np.sqrt(abs(1.0 - np.exp(-2.0 * (terms.hxy2 - terms.hxy)))))


STATISTICS_FUNCTIONS = {
    'angular_second_moment': angular_second_moment,
    'contrast': contrast,
    'correlation': correlation,
    'variance': variance,
    'inverse_difference_moment': inverse_difference_moment,
    'sum_average': sum_average,
    'sum_variance': sum_variance,
    'sum_entropy': sum_entropy,
    'entropy': entropy,
    'difference_variance': difference_variance,
    'difference_entropy': difference_entropy,
    'info_measure_corr_1': info_measure_corr_1,
    'info_measure_corr_2': info_measure_corr_2,
}
