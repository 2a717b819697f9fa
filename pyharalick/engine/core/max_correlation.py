# -*- coding: utf-8 -*-
# core/max_correlation.py

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from pyharalick.engine.core.eigenvalue_engine import eigenvalues, sorted_real_parts
from pyharalick.engine.core.glcm_statistics import as_probability_matrix, marginal_x, marginal_y

logger = logging.getLogger("Dev_logger")


def _safe_reciprocal(values: np.ndarray) -> np.ndarray:
    """1 / values, with 0 where values is 0 so empty marginals contribute nothing."""
    out = np.zeros_like(values, dtype=np.float64)
    np.divide(1.0, values, out=out, where=values != 0.0)
    return out


def correlation_matrix(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> np.ndarray:
    """
    Build Q(i, j) = sum_k P(i, k) * P(j, k) / (px(i) * py(k)).

    Terms whose px(i) or py(k) is zero are dropped. A new array is returned.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    inv_px = _safe_reciprocal(marginal_x(prob))
    inv_py = _safe_reciprocal(marginal_y(prob))

    weighted = prob * inv_py[np.newaxis, :]
    return (weighted @ prob.T) * inv_px[:, np.newaxis]


def maximal_correlation_coefficient(glcm_prob: np.ndarray, n_tones: Optional[int] = None) -> float:
    """
    Compute the Maximal Correlation Coefficient of a GLCM.

        MCC = sqrt(second largest eigenvalue of Q)

    The largest eigenvalue of Q is 1; the second largest measures how strongly
    row and column tones depend on each other. Eigenvalue real parts are sorted
    before ranking. The result is clipped to [0, 1].

    Returns:
        float: MCC value, 0 for fewer than two gray tones or an empty GLCM.

    Raises:
        EigenvalueConvergenceError: The eigenvalue solver did not converge.
    """
    prob = as_probability_matrix(glcm_prob, n_tones)
    if prob.shape[0] < 2 or not np.any(prob):
        logger.debug("Max correlation coefficient is 0 for Ng=%d", prob.shape[0])
        return 0.0

    q_matrix = correlation_matrix(prob)
    wr, _wi = eigenvalues(q_matrix)
    ranked = sorted_real_parts(wr)

    second_largest = float(np.clip(ranked[-2], 0.0, 1.0))
    return float(np.sqrt(second_largest))
