"""
Radial profile container.
"""

import numpy as np

from .exceptions import ConfigurationError


class RadialProfile:
    """
    Sorted, read-only mapping of scaled distance to mean intensity.

    Attributes
    ----------
    distances : ndarray
        Strictly ascending distances (keys)
    values : ndarray
        Mean intensity at each distance
    """

    def __init__(self, distances, values):
        """
        Build a profile from paired distance/value arrays.

        Parameters
        ----------
        distances : array_like
            Distances, in any order; must be unique
        values : array_like
            Value at each distance

        Raises
        ------
        ConfigurationError
            If the arrays differ in length or a distance is repeated
        """
        distances = np.asarray(distances, dtype=float).ravel()
        values = np.asarray(values, dtype=float).ravel()
        if distances.shape != values.shape:
            raise ConfigurationError(
                f"Got {len(distances)} distances but {len(values)} values")

        order = np.argsort(distances, kind='stable')
        distances = distances[order]
        values = values[order]
        if len(distances) > 1 and np.any(np.diff(distances) == 0):
            raise ConfigurationError("Profile distances must be unique")

        distances.flags.writeable = False
        values.flags.writeable = False
        self.distances = distances
        self.values = values

    @classmethod
    def from_mapping(cls, mapping):
        """Build a profile from a ``{distance: value}`` dict."""
        keys = list(mapping.keys())
        return cls(keys, [mapping[k] for k in keys])

    def __len__(self):
        return len(self.distances)

    def __iter__(self):
        return zip(self.distances.tolist(), self.values.tolist())

    def __contains__(self, distance):
        return self._index(distance) is not None

    def __repr__(self):
        return f"RadialProfile(n={len(self)})"

    def _index(self, distance):
        i = np.searchsorted(self.distances, distance)
        if i < len(self.distances) and self.distances[i] == distance:
            return int(i)
        return None

    def get(self, distance, default=None):
        """Value at exactly ``distance``, or ``default``."""
        i = self._index(distance)
        return default if i is None else float(self.values[i])

    @property
    def first_key(self):
        return float(self.distances[0])

    @property
    def last_key(self):
        return float(self.distances[-1])

    @property
    def min_spacing(self):
        """Distance between the first and second keys (sampling resolution)."""
        if len(self) < 2:
            raise ConfigurationError("Profile needs at least two distances")
        return float(self.distances[1] - self.distances[0])

    def between(self, lower, upper, inclusive_lower=True, inclusive_upper=False):
        """
        Restrict the profile to a distance window.

        Parameters
        ----------
        lower, upper : float
            Window bounds
        inclusive_lower, inclusive_upper : bool, optional
            Whether each bound is part of the window. The default half-open
            window [lower, upper) matches sorted-map sub-ranges.

        Returns
        -------
        distances : ndarray
        values : ndarray
        """
        lower_ok = self.distances >= lower if inclusive_lower else self.distances > lower
        upper_ok = self.distances <= upper if inclusive_upper else self.distances < upper
        mask = lower_ok & upper_ok
        return self.distances[mask], self.values[mask]

    def with_values(self, values):
        """New profile with the same keys and replaced values."""
        return RadialProfile(self.distances, values)

    def as_dict(self):
        return dict(zip(self.distances.tolist(), self.values.tolist()))
