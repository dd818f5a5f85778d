"""
Gaussian profile function.
"""

import numpy as np


def gaussian(x, amplitude, mean, sigma):
    """
    Gaussian peak profile.

    Parameters
    ----------
    x : array_like
        Independent variable (distance)
    amplitude : float
        Peak amplitude (height)
    mean : float
        Peak center position (μ)
    sigma : float
        Peak width (standard deviation, σ)

    Returns
    -------
    array_like
        Gaussian peak values at x positions

    Notes
    -----
    Mathematical form: f(x) = A * exp(-((x - μ)² / (2σ²)))
    """
    return amplitude * np.exp(-((x - mean)**2) / (2 * sigma**2))


def gaussian_gradient(x, amplitude, mean, sigma):
    """
    Partial derivatives of a single Gaussian with respect to its parameters.

    Returns
    -------
    d_amplitude, d_mean, d_sigma : ndarray
        Derivatives at x positions
    """
    diff = np.asarray(x, dtype=float) - mean
    d_amplitude = np.exp(-(diff**2) / (2 * sigma**2))
    d_mean = amplitude * d_amplitude * diff / sigma**2
    d_sigma = d_mean * diff / sigma
    return d_amplitude, d_mean, d_sigma
