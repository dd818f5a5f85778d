"""Fitting engine for radial correlation profiles."""

from .fitter import (CurveFitEngine, find_peak_location, mirror_points, solve, is_valid_fit,
                     STATE_UNFIT, STATE_FIT, STATE_NO_FIT)
from .model_builder import build_parameters, flatten_parameters
from .statistics import (CorrelationStatistics, calculate_statistics, window_statistics,
                         area_under_curve, confidence_ratio, format_statistics)

__all__ = [
    'CurveFitEngine',
    'find_peak_location',
    'mirror_points',
    'solve',
    'is_valid_fit',
    'STATE_UNFIT',
    'STATE_FIT',
    'STATE_NO_FIT',
    'build_parameters',
    'flatten_parameters',
    'CorrelationStatistics',
    'calculate_statistics',
    'window_statistics',
    'area_under_curve',
    'confidence_ratio',
    'format_statistics',
]
