"""
Starting values for the Gaussian components.

The solver needs a seed for every (amplitude, mean, sigma) triplet. Seeds
are read off the working point set around its detected peak.
"""

import numpy as np


FWHM_TO_SIGMA = 1.0 / (2.0 * np.sqrt(2.0 * np.log(2.0)))

# Relative peak-to-peak spread below which data counts as flat
FLAT_TOLERANCE = 1e-9


def estimate_fwhm(x, y, peak_index):
    """
    Estimate the full width at half maximum around a peak.

    Parameters
    ----------
    x : array_like
        Sorted x data
    y : array_like
        Y data
    peak_index : int
        Index of the peak in x/y

    Returns
    -------
    float
        Width spanned by the contiguous run of points at or above half the
        peak height, or the local sample spacing if only the peak qualifies
    """
    x = np.asarray(x)
    y = np.asarray(y)
    half = y[peak_index] / 2.0

    left = peak_index
    while left > 0 and y[left - 1] >= half:
        left -= 1
    right = peak_index
    while right < len(y) - 1 and y[right + 1] >= half:
        right += 1

    width = x[right] - x[left]
    if width <= 0:
        spacing = np.diff(x)
        spacing = spacing[spacing > 0]
        width = float(np.min(spacing)) if len(spacing) else 1.0
    return float(width)


def init_from_peak(x, y, n_components, peak_location):
    """
    Initialize components stacked on the detected peak.

    The first component takes the peak height and the half-maximum width.
    Further components share the peak location with the height split evenly
    and progressively wider sigmas, so that no two start out identical.

    Parameters
    ----------
    x : array_like
        X data (any order)
    y : array_like
        Y data
    n_components : int
        Number of components to initialize
    peak_location : float
        Location used as the starting mean

    Returns
    -------
    list of dict or None
        List of parameter dicts: [{'amplitude': a, 'mean': m, 'sigma': s}, ...]
        Returns None if the data has no positive peak to seed from
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if len(x) == 0:
        return None

    order = np.argsort(x, kind='stable')
    x = x[order]
    y = y[order]

    peak_index = int(np.argmax(y))
    height = y[peak_index]
    if height <= 0 or np.ptp(y) <= FLAT_TOLERANCE * abs(height):
        # Flat or non-positive data: nothing resembling a Gaussian peak
        return None

    sigma = estimate_fwhm(x, y, peak_index) * FWHM_TO_SIGMA

    params = []
    for i in range(n_components):
        params.append({
            'amplitude': float(height / n_components),
            'mean': float(peak_location),
            'sigma': float(sigma * (i + 1)),
        })
    return params
