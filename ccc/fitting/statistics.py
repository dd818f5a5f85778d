"""
Goodness-of-fit and confidence statistics.
"""

import numpy as np

from ..constants import WINDOW_SIGMAS
from ..exceptions import DegenerateStatisticsError


class CorrelationStatistics:
    """
    Statistics of one fitted frame.

    Attributes
    ----------
    r_squared : float
        R² of the mixture over the window of the first component, or the
        error value when the window is degenerate
    confidence : list of float or None
        Per-component confidence, None without an original profile
    degenerate : bool
        True if R² could not be computed (zero variance window)
    details : dict
        Additional window statistics from ``calculate_statistics``
    """

    def __init__(self, r_squared, confidence=None, degenerate=False, details=None):
        self.r_squared = r_squared
        self.confidence = confidence
        self.degenerate = degenerate
        self.details = details or {}

    def __repr__(self):
        return (f"CorrelationStatistics(r_squared={self.r_squared!r}, "
                f"confidence={self.confidence!r}, degenerate={self.degenerate!r})")


def calculate_statistics(y_data, y_fit, n_params):
    """
    Calculate goodness-of-fit statistics.

    Parameters
    ----------
    y_data : array_like
        Observed Y data
    y_fit : array_like
        Fitted Y data
    n_params : int
        Number of fitting parameters

    Returns
    -------
    stats : dict
        Dictionary containing various fit statistics:
        - 'r_squared': R² (coefficient of determination)
        - 'adj_r_squared': Adjusted R²
        - 'chi_squared': Chi-squared
        - 'reduced_chi_squared': Reduced chi-squared
        - 'rmse': Root mean square error
        - 'aic': Akaike Information Criterion
        - 'bic': Bayesian Information Criterion

    Raises
    ------
    DegenerateStatisticsError
        If there is no data or the data has zero variance
    """
    y_data = np.asarray(y_data, dtype=float)
    y_fit = np.asarray(y_fit, dtype=float)

    n = len(y_data)
    if n == 0:
        raise DegenerateStatisticsError("No data points in the statistics window")

    residuals = y_data - y_fit
    ss_res = np.sum(residuals**2)
    ss_tot = np.sum((y_data - np.mean(y_data))**2)
    if ss_tot == 0:
        raise DegenerateStatisticsError(
            f"Zero variance over {n} data points, R-squared is undefined")

    r_squared = 1 - (ss_res / ss_tot)

    if n > n_params + 1:
        adj_r_squared = 1 - (1 - r_squared) * (n - 1) / (n - n_params - 1)
    else:
        adj_r_squared = r_squared

    dof = n - n_params
    reduced_chi_squared = ss_res / dof if dof > 0 else np.inf

    if ss_res > 0:
        aic = n * np.log(ss_res / n) + 2 * n_params
        bic = n * np.log(ss_res / n) + n_params * np.log(n)
    else:
        aic = -np.inf
        bic = -np.inf

    return {
        'r_squared': float(r_squared),
        'adj_r_squared': float(adj_r_squared),
        'chi_squared': float(ss_res),
        'reduced_chi_squared': float(reduced_chi_squared),
        'rmse': float(np.sqrt(ss_res / n)),
        'aic': float(aic),
        'bic': float(bic),
        'n_data': n,
        'n_params': n_params,
        'dof': dof,
    }


def window_statistics(profile, mixture, mean, sigma, n_sigmas=WINDOW_SIGMAS):
    """
    Statistics of the mixture against a profile restricted to [mean - kσ, mean + kσ).

    Raises
    ------
    DegenerateStatisticsError
        If the window is empty or has zero variance
    """
    distances, values = profile.between(mean - n_sigmas * sigma, mean + n_sigmas * sigma)
    return calculate_statistics(values, mixture.value(distances), 3 * mixture.curve_count)


def area_under_curve(profile, mean, sigma, n_sigmas=WINDOW_SIGMAS):
    """
    Sum of profile values strictly inside (mean - kσ, mean + kσ).

    This is a sum over sample points, not an integral.
    """
    _, values = profile.between(mean - n_sigmas * sigma, mean + n_sigmas * sigma,
                                inclusive_lower=False, inclusive_upper=False)
    return float(np.sum(values))


def confidence_ratio(subtracted, original, mean, sigma, n_sigmas=WINDOW_SIGMAS):
    """
    Ratio of subtracted to original area under curve near a component.

    Returns
    -------
    float or None
        None if the original profile sums to zero over the window
    """
    denominator = area_under_curve(original, mean, sigma, n_sigmas)
    if denominator == 0:
        return None
    return area_under_curve(subtracted, mean, sigma, n_sigmas) / denominator


def format_statistics(stats):
    """
    Format statistics for display.

    Parameters
    ----------
    stats : CorrelationStatistics
        Statistics of a fitted frame

    Returns
    -------
    str
        Formatted statistics string
    """
    lines = []
    lines.append("=== Fit Statistics ===")
    if stats.degenerate:
        lines.append(f"R² = {stats.r_squared} (undefined: zero variance window)")
    else:
        lines.append(f"R² = {stats.r_squared:.6f}")
    if stats.confidence is not None:
        for i, value in enumerate(stats.confidence):
            lines.append(f"Confidence {i + 1} = {value:.6f}")
    details = stats.details
    if details:
        lines.append(f"Adj. R² = {details.get('adj_r_squared', 0):.6f}")
        lines.append(f"RMSE = {details.get('rmse', 0):.6e}")
        lines.append(f"χ² = {details.get('chi_squared', 0):.6e}")
        lines.append(f"Reduced χ² = {details.get('reduced_chi_squared', 0):.6f}")
        lines.append(f"AIC = {details.get('aic', 0):.2f}")
        lines.append(f"BIC = {details.get('bic', 0):.2f}")
        lines.append(f"N data = {details.get('n_data', 0)}")

    return '\n'.join(lines)
