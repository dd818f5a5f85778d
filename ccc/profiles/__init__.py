"""
Gaussian profile functions and the multi-component mixture model.
"""

from .gaussian import gaussian, gaussian_gradient
from .mixture import GaussianMixture, GaussianTriplet, parse_gaussian_parameters

__all__ = [
    'gaussian',
    'gaussian_gradient',
    'GaussianMixture',
    'GaussianTriplet',
    'parse_gaussian_parameters',
]
