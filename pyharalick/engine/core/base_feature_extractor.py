# -*- coding: utf-8 -*-
# core/base_feature_extractor.py

from __future__ import annotations

import time
import psutil
import logging
import numpy as np
from datetime import datetime
from typing import Any, Dict, List, Optional, Type

from pyharalick.utils.exceptions import HaralickError

logger = logging.getLogger("Dev_logger")


class BaseFeatureExtractor:
    """Base class for feature extractors with registry + per-feature profiling."""

    EXTRACTOR_REGISTRY: Dict[str, Type["BaseFeatureExtractor"]] = {}

    feature_dependencies: Dict[str, list] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if cls is BaseFeatureExtractor:
            return

        BaseFeatureExtractor.EXTRACTOR_REGISTRY[cls.__name__] = cls
        alias = getattr(cls, "NAME", None)

        if isinstance(alias, str) and alias and alias not in BaseFeatureExtractor.EXTRACTOR_REGISTRY:
            BaseFeatureExtractor.EXTRACTOR_REGISTRY[alias] = cls

    @classmethod
    def get_extractor(cls, name: str) -> Type["BaseFeatureExtractor"]:
        """Look up a registered extractor by class name or NAME alias (case-insensitive)."""
        if name in cls.EXTRACTOR_REGISTRY:
            return cls.EXTRACTOR_REGISTRY[name]

        name_lower = name.lower()
        for reg_name, reg_cls in cls.EXTRACTOR_REGISTRY.items():
            if name_lower in (reg_name.lower(), getattr(reg_cls, "NAME", "").lower()):
                return reg_cls

        raise HaralickError(f"No feature extractor registered under '{name}'")

    def __init__(self, **kwargs: Any) -> None:
        self._feature_cache: Dict[int, Dict[str, Any]] = {}

        self.data: Dict[int, Dict[str, Any]] = {}
        self.last_feature_perf: Dict[int, Dict[str, Dict[str, Any]]] = {}
        self.last_perf: Dict[int, Dict[str, Any]] = {}
        self._init_subclass(**kwargs)

    def _init_subclass(self, **kwargs: Any) -> None:
        pass

    # -------- data --------

    def _prepare_inputs(
        self,
        *,
        matrix: Optional[np.ndarray] = None,
        n_tones: Optional[int] = None,
        matrix_index: int = 0,
        **_: Any,
    ) -> None:

        self.data = {
            int(matrix_index): {
                "matrix": matrix,
                "n_tones": n_tones,
            }
        }

    def get_matrix(self, matrix_index: int) -> Optional[np.ndarray]:
        return self.data.get(matrix_index, {}).get("matrix", None)

    def get_n_tones(self, matrix_index: int) -> int:
        n_tones = self.data.get(matrix_index, {}).get("n_tones", None)
        if n_tones is None:
            matrix = self.get_matrix(matrix_index)
            return 0 if matrix is None else int(matrix.shape[0])
        return int(n_tones)

    # -------- profiling --------

    @staticmethod
    def _profile_snapshot() -> Dict[str, Any]:
        rss_kb = psutil.Process().memory_info().rss / 1024.0
        return {"time": time.perf_counter(), "wall": datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f"), "rss_kb": rss_kb}

    @staticmethod
    def _profile_delta(start: Dict[str, Any]) -> Dict[str, Any]:
        end = BaseFeatureExtractor._profile_snapshot()

        return {
            "start_time": start["wall"],
            "end_time": end["wall"],
            "total_time_sec": round(end["time"] - start["time"], 6),
            "start_memory_KB": round(start["rss_kb"], 6),
            "end_memory_KB": round(end["rss_kb"], 6),
            "total_memory_KB": round(end["rss_kb"] - start["rss_kb"], 6),
        }

    def _store_feature_perf(self, matrix_index: int, feature_name: str, perf: Dict[str, Any]) -> None:
        self.last_feature_perf.setdefault(int(matrix_index), {})[feature_name] = perf

    def _compute_feature(self, feature_name: str, matrix_index: int) -> Any:
        for dep in self.feature_dependencies.get(feature_name, []):
            self._get_or_compute_feature(dep, matrix_index)

        getter = getattr(self, f"get_{feature_name}", None)
        prof = self._profile_snapshot()

        try:
            value = getter(matrix_index) if callable(getter) else np.nan

        except MemoryError:
            logger.error("Out of memory computing '%s' (matrix %d)", feature_name, matrix_index)
            raise

        except Exception as exc:
            logger.error("Error computing '%s' (matrix %d): %s", feature_name, matrix_index, exc)
            value = np.nan

        finally:
            self._store_feature_perf(matrix_index, feature_name, self._profile_delta(prof))

        return value

    def _get_or_compute_feature(self, feature_name: str, matrix_index: int) -> Any:
        cache = self._feature_cache.setdefault(matrix_index, {})

        if feature_name in cache:
            return cache[feature_name]

        val = self._compute_feature(feature_name, matrix_index)
        cache[feature_name] = val

        return val

    def _compute_all_features_for_matrix(self, matrix_index: int, selected_features: List[str]) -> Dict[str, Any]:
        return {n: self._get_or_compute_feature(n, matrix_index) for n in selected_features}

    # -------- entry --------

    def extract(self, *, selected_features: List[str], **kwargs: Any) -> Dict[int, Dict[str, Any]]:
        self._prepare_inputs(**kwargs)
        matrix_index = int(kwargs.get("matrix_index", 0))

        if not self.data or self.get_matrix(matrix_index) is None:
            self.last_perf[matrix_index] = self._profile_delta(self._profile_snapshot())
            return {matrix_index: {}}

        prof = self._profile_snapshot()
        out: Dict[int, Dict[str, Any]] = {}

        for index in sorted(self.data.keys()):
            out[index] = self._compute_all_features_for_matrix(index, selected_features)

        self.last_perf[matrix_index] = self._profile_delta(prof)

        return out
