"""
Feature name definitions and management for Haralick texture analysis.
"""

from typing import Dict, Iterable, List
import logging

from ..config.settings import HARALICK_FEATURES
from ..utils.exceptions import FeatureSelectionError

logger = logging.getLogger("Dev_logger")


def get_feature_names() -> List[str]:
    """
    Get the 14 Haralick feature names in their canonical order (f1 .. f14).

    Returns:
        List of feature names
    """
    return list(HARALICK_FEATURES.keys())


def get_feature_labels() -> Dict[str, str]:
    """Return the feature name -> display label mapping."""
    return dict(HARALICK_FEATURES)


def get_feature_label(name: str) -> str:
    try:
        return HARALICK_FEATURES[name]
    except KeyError:
        raise FeatureSelectionError(f"Unknown Haralick feature: '{name}'") from None


def validate_feature_names(names: Iterable[str]) -> List[str]:
    """
    Check every name against the known feature set.

    Names are matched case-insensitively and may use spaces or dashes in place
    of underscores. Duplicates are dropped, order is preserved.

    Args:
        names: Feature names supplied by the caller

    Returns:
        The canonical names

    Raises:
        FeatureSelectionError: If any name is unknown
    """
    canonical: List[str] = []
    unknown: List[str] = []

    for name in names:
        key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
        if key not in HARALICK_FEATURES:
            unknown.append(str(name))
            continue
        if key not in canonical:
            canonical.append(key)

    if unknown:
        logger.error("Unknown Haralick feature name(s): %s", ", ".join(unknown))
        raise FeatureSelectionError(
            f"Unknown Haralick feature name(s): {', '.join(unknown)}. "
            f"Valid names: {', '.join(HARALICK_FEATURES)}"
        )

    return canonical
