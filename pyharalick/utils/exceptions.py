# -*- coding: utf-8 -*-
"""
Error types raised by pyharalick.
"""


class HaralickError(Exception):
    """
    Base error type for everything raised on purpose by this package
    """


class CooccurrenceMatrixError(HaralickError, ValueError):
    """
    The co-occurrence matrix or its number of gray tones is malformed
    """

    def __init__(self, message):
        super(CooccurrenceMatrixError, self).__init__(message)


class FeatureSelectionError(HaralickError, ValueError):
    """
    A feature selection names a feature that does not exist
    """

    def __init__(self, message):
        super(FeatureSelectionError, self).__init__(message)


class EigenvalueConvergenceError(HaralickError, ArithmeticError):
    """
    The QR iteration did not deflate a block within the iteration limit
    """

    def __init__(self, message, block_order=None, iterations=None):
        super(EigenvalueConvergenceError, self).__init__(message)
        self.block_order = block_order
        self.iterations = iterations
