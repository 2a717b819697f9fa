"""
Configuration settings for the Haralick texture feature pipeline.
"""

# =============================================================================
# NUMERICAL PARAMETERS
# =============================================================================

# Added to every logarithm argument to keep log2(0) finite
LOG_EPSILON = 1e-9

# Balancing rescales by powers of this radix so no rounding error is introduced
BALANCE_RADIX = 2.0

# A row/column pair is rescaled only when it shrinks c + r below this fraction
BALANCE_TOLERANCE = 0.95

# QR iteration limits
MAX_QR_ITERATIONS = 30
EXCEPTIONAL_SHIFT_ITERATIONS = (10, 20)
EXCEPTIONAL_SHIFT_SCALE = 0.75
EXCEPTIONAL_SHIFT_PRODUCT = -0.4375

# =============================================================================
# FEATURE CONFIGURATION
# =============================================================================

# Feature name -> display label, in Haralick's order (f1 .. f14)
HARALICK_FEATURES = {
    'angular_second_moment': "Angular Second Moment",
    'contrast': "Contrast",
    'correlation': "Correlation",
    'variance': "Variance",
    'inverse_difference_moment': "Inverse Diff Moment",
    'sum_average': "Sum Average",
    'sum_variance': "Sum Variance",
    'sum_entropy': "Sum Entropy",
    'entropy': "Entropy",
    'difference_variance': "Difference Variance",
    'difference_entropy': "Difference Entropy",
    'info_measure_corr_1': "Meas of Correlation-1",
    'info_measure_corr_2': "Meas of Correlation-2",
    'max_correlation_coeff': "Max Correlation Coeff",
}

# Features that need another feature's value before they can be computed
FEATURE_DEPENDENCIES = {
    'sum_variance': ['sum_entropy'],
}

# =============================================================================
# BATCH PROCESSING
# =============================================================================

DEFAULT_BATCH_PARAMS = {
    'report': "all",
    'name_prefix': "matrix",
    'name_column': "Name",
}

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

REPORT_MODES = ["none", "error", "warning", "info", "all"]

# Map your mode to actual log levels
LOG_LEVEL_MAP = {
    "none": {'console_level': None, 'memory_level': None},  # No logs
    "error": {'console_level': 'ERROR', 'memory_level': 'ERROR'},  # Errors only
    "warning": {'console_level': 'WARNING', 'memory_level': 'WARNING'},  # Warnings and errors
    "info": {'console_level': 'INFO', 'memory_level': 'INFO'},  # Info only
    "all": {'console_level': 'INFO', 'memory_level': 'INFO'},  # All (INFO, WARNING, ERROR)
}

LOGGING_CONFIG = {
    'logger_name': 'Dev_logger',
    'console_format': '%(asctime)s - %(levelname)s - %(message)s',
    'memory_format': '%(asctime)s - %(levelname)s - %(message)s'
}
