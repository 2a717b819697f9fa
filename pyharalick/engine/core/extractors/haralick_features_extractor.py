# -*- coding: utf-8 -*-
# core/extractors/haralick_features_extractor.py

from __future__ import annotations

import logging
import math
import numpy as np
from typing import Any, Dict

from pyharalick.config.settings import FEATURE_DEPENDENCIES
from pyharalick.engine.core import glcm_statistics as stats
from pyharalick.engine.core.base_feature_extractor import BaseFeatureExtractor
from pyharalick.engine.core.max_correlation import maximal_correlation_coefficient
from pyharalick.utils.exceptions import EigenvalueConvergenceError

logger = logging.getLogger("Dev_logger")


class HaralickFeaturesExtractor(BaseFeatureExtractor):
    """
    The 14 Haralick features of one co-occurrence probability matrix.

    One getter per feature; the base class handles dependencies, caching and
    per-feature profiling. An instance holds state for a single extraction,
    so create a new one per call.
    """

    NAME: str = "HaralickExtractor"

    feature_dependencies: Dict[str, list] = FEATURE_DEPENDENCIES

    def _init_subclass(self, **kwargs: Any) -> None:
        self._prob_cache: Dict[int, np.ndarray] = {}

    def _prob(self, matrix_index: int) -> np.ndarray:
        if matrix_index not in self._prob_cache:
            self._prob_cache[matrix_index] = stats.as_probability_matrix(
                self.get_matrix(matrix_index), self.get_n_tones(matrix_index)
            )
        return self._prob_cache[matrix_index]

    # ---- f1 .. f13 ----
    def get_angular_second_moment(self, matrix_index: int) -> float:
        return stats.angular_second_moment(self._prob(matrix_index))

    def get_contrast(self, matrix_index: int) -> float:
        return stats.contrast(self._prob(matrix_index))

    def get_correlation(self, matrix_index: int) -> float:
        value = stats.correlation(self._prob(matrix_index))
        if math.isnan(value):
            logger.warning("Correlation undefined for matrix %d: marginal variance is zero", matrix_index)
        return value

    def get_variance(self, matrix_index: int) -> float:
        return stats.variance(self._prob(matrix_index))

    def get_inverse_difference_moment(self, matrix_index: int) -> float:
        return stats.inverse_difference_moment(self._prob(matrix_index))

    def get_sum_average(self, matrix_index: int) -> float:
        return stats.sum_average(self._prob(matrix_index))

    def get_sum_variance(self, matrix_index: int) -> float:
        # sum entropy is resolved first through feature_dependencies
        sum_entropy_value = self._get_or_compute_feature("sum_entropy", matrix_index)
        return stats.sum_variance(self._prob(matrix_index), sum_entropy_value=sum_entropy_value)

    def get_sum_entropy(self, matrix_index: int) -> float:
        return stats.sum_entropy(self._prob(matrix_index))

    def get_entropy(self, matrix_index: int) -> float:
        return stats.entropy(self._prob(matrix_index))

    def get_difference_variance(self, matrix_index: int) -> float:
        return stats.difference_variance(self._prob(matrix_index))

    def get_difference_entropy(self, matrix_index: int) -> float:
        return stats.difference_entropy(self._prob(matrix_index))

    def get_info_measure_corr_1(self, matrix_index: int) -> float:
        return stats.info_measure_corr_1(self._prob(matrix_index))

    def get_info_measure_corr_2(self, matrix_index: int) -> float:
        return stats.info_measure_corr_2(self._prob(matrix_index))

    # ---- f14 ----
    def get_max_correlation_coeff(self, matrix_index: int) -> float:
        try:
            return maximal_correlation_coefficient(self._prob(matrix_index))
        except EigenvalueConvergenceError as exc:
            logger.warning("Max correlation coefficient set to 0 for matrix %d: %s", matrix_index, exc)
            return 0.0
