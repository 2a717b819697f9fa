from .haralick_features_extractor import HaralickFeaturesExtractor

__all__ = ["HaralickFeaturesExtractor"]
