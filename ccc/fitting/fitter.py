"""
Gaussian curve fitting of radial correlation profiles using lmfit.
"""

import numpy as np
from lmfit import minimize, fit_report

from ..constants import (MAX_ITERATIONS, RETRY_STEPS, SENTINEL_AMPLITUDE,
                         SENTINEL_MEAN, STAT_ERROR_VALUE)
from ..exceptions import ConfigurationError, DegenerateStatisticsError
from ..profiles import GaussianMixture, GaussianTriplet
from ..smoothing import smooth_profile
from ..utils.logger import log_debug, log_warning
from .initializers import init_from_peak
from .model_builder import build_parameters, flatten_parameters
from .statistics import (CorrelationStatistics, confidence_ratio, format_statistics,
                         window_statistics)


STATE_UNFIT = 'unfit'
STATE_FIT = 'fit'
STATE_NO_FIT = 'no_fit'


def find_peak_location(profile):
    """
    Distance of the profile maximum (first one on ties).

    A maximum at the smallest distance is reported as 0: the profile is
    zero-bounded, so the underlying distribution may be centered at or
    below zero.
    """
    index = int(np.argmax(profile.values))
    if index == 0:
        return 0.0
    return float(profile.distances[index])


def mirror_points(profile, peak_location):
    """
    Working point set with the tail mirrored across the peak.

    Every (d, v) pair is kept, and (2p - d, v) is added for each d > 2p.
    Fitting near-zero means against a distance axis truncated at zero is
    biased otherwise; mirroring across zero itself would create a double
    peak whenever the peak is near but not at zero.

    Returns
    -------
    x, y : ndarray
        Working points
    """
    distances = profile.distances
    values = profile.values
    mask = distances > 2 * peak_location
    x = np.concatenate([distances, 2 * peak_location - distances[mask]])
    y = np.concatenate([values, values[mask]])
    return x, y


def _residual(params, x, y, n_components):
    return GaussianMixture.evaluate(x, flatten_parameters(params, n_components)) - y


def _jacobian(params, x, y, n_components):
    return GaussianMixture.gradient(x, flatten_parameters(params, n_components))


def solve(x, y, n_components, peak_location, max_iterations=MAX_ITERATIONS):
    """
    Least-squares fit of ``n_components`` Gaussians to a point set.

    Uses Levenberg-Marquardt with the mixture's decoupled gradient as the
    Jacobian.

    Returns
    -------
    params : list of float or None
        Flat [a1, m1, s1, ...] values, None if the data cannot be seeded,
        the fit hits ``max_iterations`` or fails numerically
    result : lmfit.MinimizerResult or None
    """
    initial = init_from_peak(x, y, n_components, peak_location)
    if initial is None:
        log_debug("No peak to seed the Gaussian fit from")
        return None, None

    params = build_parameters(initial)
    try:
        result = minimize(_residual, params, method='leastsq',
                          args=(x, y, n_components), Dfun=_jacobian,
                          max_nfev=max_iterations)
    except ValueError as e:
        log_debug(f"Gaussian fit failed: {e}")
        return None, None

    if not result.success:
        log_debug(f"Gaussian fit did not converge: {result.message}")
        return None, result
    return flatten_parameters(result.params, n_components), result


def is_valid_fit(params, min_scale):
    """
    Check every fitted triplet against the resolution floor.

    A triplet is rejected if sigma <= min_scale (narrower than a pixel,
    i.e. fit to a noise spike), mean < -min_scale or amplitude < 0.
    Non-finite values are rejected as well.
    """
    if params is None or not np.all(np.isfinite(params)):
        return False
    for amplitude, mean, sigma in GaussianMixture.from_flat(params).components:
        if sigma <= min_scale or mean < -min_scale or amplitude < 0:
            return False
    return True


class CurveFitEngine:
    """
    Fits a multi-component Gaussian to a subtracted radial profile.

    One engine is used per analyzed frame. ``fit_curve`` may be called only
    once; afterwards the engine is read-only.

    Attributes
    ----------
    curve_count : int
        Number of Gaussian components
    max_iterations : int
        Evaluation cap of a single solver attempt
    retry_steps : int
        Number of smoothed retries after a rejected fit
    subtracted : RadialProfile or None
        Profile that was fit
    original : RadialProfile or None
        Unsubtracted profile used for confidence
    mixture : GaussianMixture or None
        Fitted model (sentinel components if no fit was found)
    statistics : CorrelationStatistics or None
        R² and confidence
    retry_count : int
        Number of smoothed attempts that were run
    min_scale : float or None
        Resolution floor (spacing of the first two profile distances)
    result : lmfit.MinimizerResult or None
        Result of the last solver attempt
    state : str
        'unfit', 'fit' or 'no_fit'
    """

    def __init__(self, curve_count=1, max_iterations=MAX_ITERATIONS, retry_steps=RETRY_STEPS):
        """
        Initialize CurveFitEngine.

        Raises
        ------
        ConfigurationError
            If curve_count is not a positive integer
        """
        if isinstance(curve_count, bool) or not isinstance(curve_count, (int, np.integer)) \
                or curve_count < 1:
            raise ConfigurationError(f"Curve count must be a positive integer, got {curve_count!r}")
        self.curve_count = int(curve_count)
        self.max_iterations = max_iterations
        self.retry_steps = retry_steps

        self.subtracted = None
        self.original = None
        self.mixture = None
        self.statistics = None
        self.retry_count = 0
        self.min_scale = None
        self.result = None
        self.state = STATE_UNFIT

    # ===================== Fitting =====================
    def _attempt(self, profile):
        peak_location = find_peak_location(profile)
        x, y = mirror_points(profile, peak_location)
        params, self.result = solve(x, y, self.curve_count, peak_location,
                                    self.max_iterations)
        return params

    def _fit_with_retries(self, profile):
        params = self._attempt(profile)
        for step in range(1, self.retry_steps + 1):
            if is_valid_fit(params, self.min_scale):
                break
            window = step * self.min_scale / 10
            log_debug(f"Rejected Gaussian fit, retrying with smoothing window "
                      f"{window:.4g} ({step} neighbors)")
            params = self._attempt(smooth_profile(profile, step))
            self.retry_count = step

        if is_valid_fit(params, self.min_scale):
            return params, True
        return params, False

    def _sentinel(self, profile):
        return GaussianTriplet(SENTINEL_AMPLITUDE, SENTINEL_MEAN, profile.last_key)

    def fit_curve(self, subtracted, original=None):
        """
        Fit the subtracted profile and compute statistics.

        If no valid fit is found, every component is set to the sentinel
        (0, -1, largest distance) and the frame is marked 'no_fit'. Profiles,
        model and statistics are populated in both cases.

        Parameters
        ----------
        subtracted : RadialProfile
            Background-subtracted profile to fit
        original : RadialProfile, optional
            Unsubtracted profile; enables confidence

        Returns
        -------
        bool
            True for a valid fit, False for the 'no fit' outcome

        Raises
        ------
        ConfigurationError
            If the profile has fewer than two distances
        RuntimeError
            If the engine has already been fit
        """
        if self.state != STATE_UNFIT:
            raise RuntimeError("Curve already fit; use a new engine for each frame")

        self.min_scale = subtracted.min_spacing
        self.subtracted = subtracted
        self.original = original

        params, valid = self._fit_with_retries(subtracted)
        if params is None:
            params = list(self._sentinel(subtracted)) * self.curve_count
        self.mixture = GaussianMixture.from_flat(params)
        if not valid:
            for i in range(self.curve_count):
                self.mixture.set_component(i, self._sentinel(subtracted))
            log_warning("Failed to fit a Gaussian curve to the cross correlation, "
                        "suggesting no correlation between the images. "
                        "Statistical measures are set to error values.")

        self.statistics = self._compute_statistics() if valid else self._error_statistics()

        no_fit = any(c.mean == SENTINEL_MEAN for c in self.mixture.components)
        self.state = STATE_NO_FIT if no_fit else STATE_FIT
        return not no_fit

    def _compute_statistics(self):
        first = self.mixture.get_component(0)
        try:
            details = window_statistics(self.subtracted, self.mixture, first.mean, first.sigma)
            r_squared = details['r_squared']
            degenerate = False
        except DegenerateStatisticsError as e:
            log_warning(f"R-squared undefined: {e}")
            details = {}
            r_squared = STAT_ERROR_VALUE
            degenerate = True

        confidence = None
        if self.original is not None:
            confidence = []
            for triplet in self.mixture.components:
                ratio = confidence_ratio(self.subtracted, self.original, triplet.mean, triplet.sigma)
                confidence.append(STAT_ERROR_VALUE if ratio is None else ratio)

        return CorrelationStatistics(r_squared, confidence, degenerate, details)

    def _error_statistics(self):
        # Sentinel components describe no curve; their window spans the whole profile
        confidence = None
        if self.original is not None:
            confidence = [STAT_ERROR_VALUE] * self.curve_count
        return CorrelationStatistics(STAT_ERROR_VALUE, confidence)

    # ===================== Results =====================
    def _require_fit(self):
        if self.state == STATE_UNFIT:
            raise ValueError("No fit result available. Run fit_curve() first.")

    @property
    def success(self):
        return self.state == STATE_FIT

    @property
    def no_fit(self):
        return self.state == STATE_NO_FIT

    @property
    def fit_parameters(self):
        """Fitted (amplitude, mean, sigma) triplets."""
        self._require_fit()
        return list(self.mixture.components)

    @property
    def has_confidence(self):
        return self.statistics is not None and self.statistics.confidence is not None

    def get_mean(self, index):
        self._require_fit()
        return self.mixture.get_component(index).mean

    def get_sigma(self, index):
        self._require_fit()
        return self.mixture.get_component(index).sigma

    def get_amplitude(self, index):
        self._require_fit()
        return self.mixture.get_component(index).amplitude

    def get_peak_height(self, index):
        """Height of the fitted curve at the mean of component ``index``."""
        self._require_fit()
        return float(self.mixture.value(self.get_mean(index)))

    def get_confidence(self, index):
        self._require_fit()
        if not self.has_confidence:
            return None
        return self.statistics.confidence[index]

    def get_r_squared(self):
        self._require_fit()
        return self.statistics.r_squared

    def get_fit_report(self):
        """
        Get detailed fit report.

        Returns
        -------
        str
            Fit report string
        """
        self._require_fit()
        report = "[[ COMPONENTS ]]\n"
        if self.no_fit:
            report += "No Gaussian curve could be fit (sentinel values).\n"
        report += f"Smoothing retries: {self.retry_count}\n"
        report += f"Minimum scale: {self.min_scale:.6g}\n\n"
        for i, (amplitude, mean, sigma) in enumerate(self.mixture.components):
            report += f"Comp {i + 1}:\n"
            report += f"  - Amplitude: {amplitude:.6g}\n"
            report += f"  - Mean:      {mean:.6g}\n"
            report += f"  - Sigma:     {sigma:.6g}\n"
            report += f"  - Height:    {self.get_peak_height(i):.6g}\n"
        report += "\n"
        report += format_statistics(self.statistics)

        if self.success and self.result is not None:
            report += "\n\n" + fit_report(self.result)
        return report
