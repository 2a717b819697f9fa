# -*- coding: utf-8 -*-
# features/feature_record.py

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Tuple

from .feature_names import get_feature_labels, get_feature_names, validate_feature_names


@dataclass(frozen=True)
class FeatureSelection:
    """One flag per Haralick feature; a feature is computed only when its flag is set."""

    angular_second_moment: bool = True
    contrast: bool = True
    correlation: bool = True
    variance: bool = True
    inverse_difference_moment: bool = True
    sum_average: bool = True
    sum_variance: bool = True
    sum_entropy: bool = True
    entropy: bool = True
    difference_variance: bool = True
    difference_entropy: bool = True
    info_measure_corr_1: bool = True
    info_measure_corr_2: bool = True
    max_correlation_coeff: bool = True

    @classmethod
    def all(cls) -> "FeatureSelection":
        return cls()

    @classmethod
    def none(cls) -> "FeatureSelection":
        return cls(**{name: False for name in get_feature_names()})

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "FeatureSelection":
        """Select exactly the named features. Unknown names raise FeatureSelectionError."""
        wanted = set(validate_feature_names(names))
        return cls(**{name: name in wanted for name in get_feature_names()})

    def is_selected(self, name: str) -> bool:
        return bool(getattr(self, name))

    def selected_names(self) -> List[str]:
        return [name for name in get_feature_names() if self.is_selected(name)]


@dataclass(frozen=True)
class FeatureRecord:
    """The 14 Haralick features of one co-occurrence matrix. Unselected features are 0.0."""

    angular_second_moment: float = 0.0
    contrast: float = 0.0
    correlation: float = 0.0
    variance: float = 0.0
    inverse_difference_moment: float = 0.0
    sum_average: float = 0.0
    sum_variance: float = 0.0
    sum_entropy: float = 0.0
    entropy: float = 0.0
    difference_variance: float = 0.0
    difference_entropy: float = 0.0
    info_measure_corr_1: float = 0.0
    info_measure_corr_2: float = 0.0
    max_correlation_coeff: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}

    def as_labelled_dict(self) -> Dict[str, float]:
        labels = get_feature_labels()
        return {labels[name]: value for name, value in self.as_dict().items()}

    @staticmethod
    def labels() -> Dict[str, str]:
        return get_feature_labels()


@dataclass(frozen=True)
class DirectionalSummary:
    """
    Per-feature statistics over several co-occurrence matrices of one image,
    typically the 0°, 45°, 90° and 135° neighbour offsets.
    """

    values: Dict[str, Tuple[float, ...]]
    mean: Dict[str, float]
    range: Dict[str, float]

    @property
    def directions(self) -> int:
        return len(next(iter(self.values.values()), ()))

    def as_dict(self) -> Dict[str, float]:
        """Flatten into '<name>_mean' / '<name>_range' columns."""
        flat: Dict[str, float] = {}
        for name in get_feature_names():
            flat[f"{name}_mean"] = self.mean[name]
            flat[f"{name}_range"] = self.range[name]
        return flat
