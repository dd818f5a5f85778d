"""
Profile smoothing utilities.
"""

import numpy as np
from scipy.ndimage import convolve1d

from .profile import RadialProfile


def moving_average(y, window_radius):
    """
    Centered moving average over ordinal positions.

    Each output value is the mean of the input values at positions
    [i - window_radius, i + window_radius], clamped to the array bounds, so
    the edges average fewer neighbors. There is no wraparound.

    Parameters
    ----------
    y : array_like
        Values to smooth
    window_radius : int
        Number of neighbors on each side

    Returns
    -------
    y_smooth : ndarray
        Smoothed values, same length as y
    """
    window_radius = int(window_radius)
    if window_radius < 0:
        raise ValueError(f"Window radius must be >= 0, got {window_radius}")

    y = np.asarray(y, dtype=float)
    if window_radius == 0 or len(y) == 0:
        return y.copy()

    size = 2 * window_radius + 1
    # Zero padding outside the bounds; dividing by the in-bounds counts gives
    # the mean over the clamped window. Every window is summed directly.
    weights = np.ones(size)
    sums = convolve1d(y, weights, mode='constant', cval=0.0)
    counts = convolve1d(np.ones_like(y), weights, mode='constant', cval=0.0)
    return sums / counts


def smooth_profile(profile, window_radius):
    """
    Smooth a radial profile with a clamped moving average.

    The window is defined over the ordinal position in the sorted profile,
    not over distance. ``window_radius=0`` returns an identical profile.

    Parameters
    ----------
    profile : RadialProfile
        Profile to smooth
    window_radius : int
        Number of neighbors on each side

    Returns
    -------
    RadialProfile
        Profile with the same keys and smoothed values
    """
    return RadialProfile(profile.distances, moving_average(profile.values, window_radius))
