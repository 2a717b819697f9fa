"""
Batch computation of Haralick features over several co-occurrence matrices.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..config.settings import DEFAULT_BATCH_PARAMS
from ..engine.core.feature_aggregator import compute_texture_features, summarize_directions
from ..features.feature_names import get_feature_names
from ..features.feature_record import FeatureRecord, FeatureSelection
from ..utils.exceptions import HaralickError

logger = logging.getLogger("Dev_logger")

MatrixInput = Union[Mapping[str, Any], Sequence[Any], np.ndarray]


def _create_results_dataframe(rows: List[Tuple[str, FeatureRecord]], name_column: str) -> pd.DataFrame:
    """Create results DataFrame with the matrix name as the first column."""
    columns = [name_column] + get_feature_names()
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([{name_column: name, **record.as_dict()} for name, record in rows])
    return df.reindex(columns=columns)


class TextureProcessor:
    """Runs the feature aggregator over a batch of named co-occurrence matrices."""

    def __init__(
            self,
            selection: Optional[FeatureSelection] = None,
            memory_handler: Optional[Any] = None,
            report: Optional[str] = None,
            name_prefix: Optional[str] = None,
            batch_parameters: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.selection = selection if selection is not None else FeatureSelection.all()
        self.memory_handler = memory_handler

        # Initialize default parameters
        self.params: Dict[str, Any] = DEFAULT_BATCH_PARAMS.copy()

        if batch_parameters:
            for key, value in batch_parameters.items():
                if key in DEFAULT_BATCH_PARAMS:
                    self.params[key] = value

        # Explicit parameter overrides
        param_updates = {
            "report": report,
            "name_prefix": name_prefix,
        }
        for key, value in param_updates.items():
            if value is not None:
                self.params[key] = value

    def _named_matrices(self, matrices: MatrixInput) -> List[Tuple[str, Any]]:
        if isinstance(matrices, Mapping):
            return [(str(name), matrix) for name, matrix in matrices.items()]

        prefix = self.params["name_prefix"]
        if isinstance(matrices, np.ndarray) and matrices.ndim == 2:
            return [(f"{prefix}_0", matrices)]

        # a 3D stack is treated as one matrix per leading index
        return [(f"{prefix}_{index}", matrix) for index, matrix in enumerate(matrices)]

    def process_matrix(self, name: str, matrix: Any) -> Optional[FeatureRecord]:
        """Compute one record; log and return None when the matrix is rejected."""
        try:
            record = compute_texture_features(matrix, selection=self.selection)
        except HaralickError as e:
            logger.error("Matrix '%s' skipped: %s", name, e)
            return None

        logger.info("Matrix '%s' processed", name)
        return record

    def process_batch(self, matrices: MatrixInput) -> Dict[str, Any]:
        """
        Compute features for every matrix.

        Returns:
            dict with ``features`` (DataFrame, one row per accepted matrix),
            ``records`` (name -> FeatureRecord), ``summary`` (DirectionalSummary
            over accepted matrices or None), ``processed`` and ``failed``.
        """
        named = self._named_matrices(matrices)
        logger.info("Processing %d co-occurrence matrices", len(named))

        rows: List[Tuple[str, FeatureRecord]] = []
        failed: List[str] = []

        for name, matrix in named:
            record = self.process_matrix(name, matrix)
            if record is None:
                failed.append(name)
            else:
                rows.append((name, record))

        if failed:
            logger.warning("%d of %d matrices failed: %s", len(failed), len(named), ", ".join(failed))

        records = dict(rows)
        summary = summarize_directions([record for _, record in rows]) if rows else None

        return {
            "features": _create_results_dataframe(rows, self.params["name_column"]),
            "records": records,
            "summary": summary,
            "processed": len(rows),
            "failed": failed,
        }
