# -*- coding: utf-8 -*-
# core/feature_aggregator.py

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from pyharalick.engine.core import extractors  # noqa: F401  (registers the extractors)
from pyharalick.engine.core.base_feature_extractor import BaseFeatureExtractor
from pyharalick.features.feature_names import get_feature_names
from pyharalick.features.feature_record import DirectionalSummary, FeatureRecord, FeatureSelection
from pyharalick.utils.exceptions import CooccurrenceMatrixError

logger = logging.getLogger("Dev_logger")

EXTRACTOR_NAME = "HaralickExtractor"


def validate_cooccurrence_matrix(glcm_prob: Any, n_tones: Optional[int] = None) -> Tuple[np.ndarray, int]:
    """
    Check the matrix and number of gray tones, and return the float64
    ``n_tones x n_tones`` block together with ``n_tones``.

    Raises:
        CooccurrenceMatrixError: Not 2D, not finite, or ``n_tones`` out of range.
    """
    try:
        matrix = np.asarray(glcm_prob, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise CooccurrenceMatrixError(f"Co-occurrence matrix is not numeric: {exc}") from exc

    if matrix.ndim != 2:
        raise CooccurrenceMatrixError(f"Co-occurrence matrix must be 2D, got {matrix.ndim}D")

    if n_tones is None:
        n_tones = matrix.shape[0]
    if isinstance(n_tones, bool) or not isinstance(n_tones, (int, np.integer)):
        raise CooccurrenceMatrixError(f"Number of gray tones must be an integer, got {n_tones!r}")
    n_tones = int(n_tones)

    if n_tones < 0:
        raise CooccurrenceMatrixError(f"Number of gray tones must be non-negative, got {n_tones}")
    if n_tones > min(matrix.shape):
        raise CooccurrenceMatrixError(
            f"Number of gray tones ({n_tones}) exceeds matrix shape {matrix.shape}"
        )

    block = matrix[:n_tones, :n_tones]
    if not np.all(np.isfinite(block)):
        raise CooccurrenceMatrixError("Co-occurrence matrix contains non-finite values")

    return block, n_tones


def compute_texture_features(
        glcm_prob: Any,
        n_tones: Optional[int] = None,
        selection: Optional[FeatureSelection] = None,
        return_profile: bool = False,
) -> Union[FeatureRecord, Tuple[FeatureRecord, Dict[str, Any]]]:
    """
    Compute the selected Haralick features of one co-occurrence matrix.

    Args:
        glcm_prob: Ng x Ng co-occurrence probability matrix (array-like).
        n_tones: Number of gray tones Ng. Defaults to the matrix size.
        selection: Which features to compute. Defaults to all 14.
        return_profile: Also return per-feature timing and memory figures.

    Returns:
        FeatureRecord with unselected features set to 0.0, or
        ``(record, profile)`` when ``return_profile`` is set.

    Raises:
        CooccurrenceMatrixError: Malformed matrix or gray tone count.
        MemoryError: Scratch storage could not be allocated.
    """
    block, n_tones = validate_cooccurrence_matrix(glcm_prob, n_tones)
    selection = FeatureSelection.all() if selection is None else selection
    selected = selection.selected_names()
    profile: Dict[str, Any] = {"extraction": {}, "features": {}}

    if n_tones == 0 or not np.any(block):
        logger.info("Empty co-occurrence matrix (Ng=%d); all features are 0", n_tones)
        record = FeatureRecord()
        return (record, profile) if return_profile else record

    extractor_cls = BaseFeatureExtractor.get_extractor(EXTRACTOR_NAME)
    extractor = extractor_cls()
    values = extractor.extract(
        selected_features=selected,
        matrix=block,
        n_tones=n_tones,
        matrix_index=0,
    ).get(0, {})

    record = FeatureRecord(**{name: float(values[name]) for name in selected})
    logger.debug("Computed %d of 14 Haralick features (Ng=%d)", len(selected), n_tones)

    if return_profile:
        profile = {
            "extraction": extractor.last_perf.get(0, {}),
            "features": extractor.last_feature_perf.get(0, {}),
        }
        return record, profile
    return record


def summarize_directions(records: Sequence[FeatureRecord]) -> DirectionalSummary:
    """
    Mean and range (max - min) of every feature over several co-occurrence
    matrices, usually one per neighbour direction.

    Raises:
        ValueError: ``records`` is empty.
    """
    if not records:
        raise ValueError("At least one feature record is required for a directional summary")

    values: Dict[str, Tuple[float, ...]] = {}
    mean: Dict[str, float] = {}
    value_range: Dict[str, float] = {}

    for name in get_feature_names():
        column = np.array([getattr(record, name) for record in records], dtype=np.float64)
        values[name] = tuple(float(v) for v in column)
        mean[name] = float(column.sum() / column.size)
        value_range[name] = float(column.max() - column.min())

    return DirectionalSummary(values=values, mean=mean, range=value_range)
