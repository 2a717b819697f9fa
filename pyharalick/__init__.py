__version__ = "1.0.0"
__author__ = "pyharalick developers"
__email__ = ""

from typing import Any, Dict, Optional

from .config.settings import DEFAULT_BATCH_PARAMS, REPORT_MODES
from .engine.core.feature_aggregator import compute_texture_features, summarize_directions
from .engine.core.max_correlation import maximal_correlation_coefficient
from .features.feature_record import DirectionalSummary, FeatureRecord, FeatureSelection
from .processing.texture_processor import MatrixInput, TextureProcessor
from .utils.exceptions import (
    CooccurrenceMatrixError,
    EigenvalueConvergenceError,
    FeatureSelectionError,
    HaralickError,
)
from .utils.log_record import initialize_logging


def extract_batch(
        matrices: MatrixInput,
        selection: Optional[FeatureSelection] = None,
        report: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Compute Haralick features for a batch of co-occurrence matrices.

    Args:
        matrices: Mapping of name -> matrix, a single 2D array, or a sequence
            (or 3D stack) of matrices named ``matrix_0``, ``matrix_1``, ...
        selection: Which features to compute. Defaults to all 14.
        report: Logging mode, one of "none", "error", "warning", "info", "all".

    Returns:
        dict: ``success`` (no matrix failed), ``features`` (pandas DataFrame),
        ``records``, ``summary`` (DirectionalSummary or None), ``processed``,
        ``failed``, ``processing_time`` and the captured ``logs``.
    """
    import time

    start_time = time.time()
    report = report or DEFAULT_BATCH_PARAMS["report"]
    unknown_report = report not in REPORT_MODES
    if unknown_report:
        report = DEFAULT_BATCH_PARAMS["report"]

    # Set up logging for this run
    logger, memory_handler = initialize_logging(report)
    logger.info("Starting pyharalick texture feature extraction")
    if unknown_report:
        logger.warning(f"Unknown report mode, falling back to '{report}'. Valid modes: {', '.join(REPORT_MODES)}")

    try:
        processor = TextureProcessor(
            selection=selection,
            memory_handler=memory_handler,
            report=report,
        )

        result = processor.process_batch(matrices)
        processing_time = time.time() - start_time
        success = not result['failed']

        if success:
            logger.info(f"Processing completed successfully in {processing_time:.2f} seconds")
        else:
            logger.error("Processing finished with failed matrices")

        return {
            'success': success,
            'features': result['features'],
            'records': result['records'],
            'summary': result['summary'],
            'processed': result['processed'],
            'failed': result['failed'],
            'processing_time': processing_time,
            'logs': memory_handler.get_logs() if memory_handler else []
        }

    except MemoryError:
        raise

    except Exception as e:
        processing_time = time.time() - start_time
        logger.error(f"Processing failed with error: {e}")

        return {
            'success': False,
            'features': None,
            'records': {},
            'summary': None,
            'processed': 0,
            'failed': [],
            'processing_time': processing_time,
            'logs': memory_handler.get_logs() if memory_handler else [],
            'error': str(e)
        }


__all__ = [
    'compute_texture_features',
    'extract_batch',
    'summarize_directions',
    'maximal_correlation_coefficient',
    'FeatureSelection',
    'FeatureRecord',
    'DirectionalSummary',
    'TextureProcessor',
    'HaralickError',
    'CooccurrenceMatrixError',
    'FeatureSelectionError',
    'EigenvalueConvergenceError',
    '__version__',
    '__author__',
    '__email__'
]
