"""Colocalization by cross correlation: radial profiling and Gaussian fitting."""

from . import profiles
from . import fitting
from . import profile
from . import radial
from . import smoothing
from . import reporting
from . import batch

from .exceptions import ConfigurationError, DegenerateStatisticsError
from .profile import RadialProfile
from .profiles import GaussianMixture, GaussianTriplet
from .radial import RadialProfiler, gaussian_reweighted_image, radial_distances
from .smoothing import smooth_profile
from .fitting import CurveFitEngine

__version__ = '0.1.0'

__all__ = [
    'profiles',
    'fitting',
    'profile',
    'radial',
    'smoothing',
    'reporting',
    'batch',
    'ConfigurationError',
    'DegenerateStatisticsError',
    'RadialProfile',
    'GaussianMixture',
    'GaussianTriplet',
    'RadialProfiler',
    'gaussian_reweighted_image',
    'radial_distances',
    'smooth_profile',
    'CurveFitEngine',
]
