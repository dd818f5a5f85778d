"""
Sum of independent one-dimensional Gaussians.
"""

from collections import namedtuple

import numpy as np

from ..exceptions import ConfigurationError
from .gaussian import gaussian, gaussian_gradient


GaussianTriplet = namedtuple('GaussianTriplet', ['amplitude', 'mean', 'sigma'])


def _split_triplets(params):
    params = [float(p) for p in params]
    if not params or len(params) % 3 != 0:
        raise ConfigurationError(
            f"Gaussian parameters must come in (amplitude, mean, sigma) triplets, "
            f"got {len(params)} values")
    return [GaussianTriplet(*params[i:i + 3]) for i in range(0, len(params), 3)]


def _check_sigmas(params):
    for sigma in params[2::3]:
        if sigma <= 0:
            raise ValueError(f"Sigma must be strictly positive, got {sigma}")


class GaussianMixture:
    """
    Evaluable sum of ``curve_count`` independent Gaussian components.

    Attributes
    ----------
    components : list of GaussianTriplet
        One (amplitude, mean, sigma) triplet per component
    """

    def __init__(self, components):
        components = [GaussianTriplet(*map(float, c)) for c in components]
        if not components:
            raise ConfigurationError("A Gaussian mixture needs at least one component")
        self.components = components

    @classmethod
    def from_flat(cls, params):
        """
        Build a mixture from a flat [a1, m1, s1, a2, m2, s2, ...] sequence.

        Raises
        ------
        ConfigurationError
            If the parameter count is not a multiple of 3
        """
        return cls(_split_triplets(params))

    @property
    def curve_count(self):
        return len(self.components)

    def __repr__(self):
        return f"GaussianMixture({self.components!r})"

    def to_flat(self):
        return [p for triplet in self.components for p in triplet]

    def get_component(self, index):
        return self.components[index]

    def set_component(self, index, triplet):
        """Replace one component; used to install sentinel failures."""
        self.components[index] = GaussianTriplet(*map(float, triplet))

    def component_value(self, index, x):
        """Evaluate a single component at x."""
        amplitude, mean, sigma = self.components[index]
        return gaussian(np.asarray(x, dtype=float), amplitude, mean, sigma)

    def value(self, x):
        """Evaluate the sum of all components at x."""
        x = np.asarray(x, dtype=float)
        total = np.zeros_like(x)
        for i in range(self.curve_count):
            total = total + self.component_value(i, x)
        return total

    def __call__(self, x):
        return self.value(x)

    @staticmethod
    def evaluate(x, params):
        """
        Parametric evaluation of the mixture described by a flat parameter list.

        Raises
        ------
        ValueError
            If a sigma is not strictly positive
        """
        _check_sigmas(params)
        x = np.asarray(x, dtype=float)
        total = np.zeros_like(x)
        for amplitude, mean, sigma in _split_triplets(params):
            total = total + gaussian(x, amplitude, mean, sigma)
        return total

    @staticmethod
    def gradient(x, params):
        """
        Approximate gradient of the mixture with respect to a flat parameter list.

        Each triplet's columns are computed as if that component alone
        explained the residual; cross-component terms are not considered.
        The solver relies on exactly this decoupled approximation, so it
        must not be swapped for a joint Jacobian.

        Parameters
        ----------
        x : array_like
            Distances
        params : sequence of float
            Flat [a1, m1, s1, a2, m2, s2, ...] parameters

        Returns
        -------
        ndarray
            Array of shape (len(x), len(params)), columns ordered like params
        """
        _check_sigmas(params)
        x = np.atleast_1d(np.asarray(x, dtype=float))
        columns = []
        for amplitude, mean, sigma in _split_triplets(params):
            columns.extend(gaussian_gradient(x, amplitude, mean, sigma))
        return np.column_stack(columns)


def parse_gaussian_parameters(text):
    """
    Parse a comma-separated "height, mean, sd, ..." string into a mixture.

    Parameters
    ----------
    text : str
        e.g. "3.205E7, 0.7433, 0.3369, 4.841E7, 2.046, 1.342"

    Returns
    -------
    GaussianMixture

    Raises
    ------
    ConfigurationError
        If a value is not numeric, the count is not a multiple of 3, or a
        standard deviation is not strictly positive
    """
    try:
        params = [float(part) for part in text.split(',') if part.strip()]
    except ValueError as e:
        raise ConfigurationError(f"Could not parse Gaussian parameters: {e}")

    mixture = GaussianMixture.from_flat(params)
    for triplet in mixture.components:
        if triplet.sigma <= 0:
            raise ConfigurationError("All standard deviation values must be > 0.")
    return mixture
