"""
Radial reduction of N-dimensional correlation images.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .exceptions import ConfigurationError
from .profile import RadialProfile
from .utils.logger import log_debug


def _validate_scale(shape, scale):
    scale = np.asarray(scale, dtype=float).ravel()
    if len(scale) != len(shape):
        raise ConfigurationError(
            "Input image number of dimensions do not match scale number of dimensions "
            f"({len(shape)} != {len(scale)})")
    if np.any(scale <= 0):
        raise ConfigurationError(f"All scale values must be > 0, got {scale.tolist()}")
    return scale


def _slab_distances(shape, scale, start, stop):
    """Scaled distance from the image center for rows [start, stop) of axis 0."""
    center = (np.asarray(shape, dtype=float) - 1.0) / 2
    squared = np.zeros((stop - start,) + tuple(shape[1:]))
    for axis in range(len(shape)):
        positions = np.arange(shape[axis], dtype=float)
        if axis == 0:
            positions = positions[start:stop]
        view = [1] * len(shape)
        view[axis] = -1
        offset = ((positions - center[axis]) * scale[axis]).reshape(view)
        squared = squared + offset**2
    return np.sqrt(squared)


def radial_distances(shape, scale):
    """
    Scaled distance of every pixel from the image center.

    Parameters
    ----------
    shape : tuple of int
        Image shape
    scale : array_like
        Physical size of a pixel along each axis

    Returns
    -------
    ndarray
        Array of the image shape holding sqrt(sum(((p_i - c_i) * s_i)**2))
        with c_i = (extent_i - 1) / 2
    """
    shape = tuple(int(n) for n in shape)
    scale = _validate_scale(shape, scale)
    return _slab_distances(shape, scale, 0, shape[0])


def gaussian_reweighted_image(image, scale, mixture):
    """
    Scale each pixel by the mixture evaluated at its radial distance.

    Parameters
    ----------
    image : ndarray
        Correlation image
    scale : array_like
        Physical size of a pixel along each axis
    mixture : GaussianMixture
        Fitted model

    Returns
    -------
    ndarray
        Reweighted image, same shape as ``image``
    """
    image = np.asarray(image, dtype=float)
    return image * mixture.value(radial_distances(image.shape, scale))


class RadialProfiler:
    """
    Reduce correlation images to mean intensity versus distance from the center.

    Pixels are grouped by their exact scaled distance; distances that differ
    only by floating-point rounding stay separate keys.

    Attributes
    ----------
    shape : tuple of int
        Shape of the images this profiler accepts
    scale : ndarray
        Physical pixel size along each axis
    n_workers : int
        Size of the worker pool used for binning
    original_profile : RadialProfile or None
        Profile of the original correlation image
    subtracted_profile : RadialProfile or None
        Profile of the background-subtracted correlation image
    """

    def __init__(self, shape, scale, n_workers=None):
        """
        Initialize RadialProfiler.

        Parameters
        ----------
        shape : tuple of int or ndarray
            Image shape, or an image whose shape is used
        scale : array_like
            Physical pixel size along each axis, all > 0
        n_workers : int, optional
            Worker pool size, defaults to the number of CPUs

        Raises
        ------
        ConfigurationError
            If the scale length does not match the image dimensionality
        """
        if hasattr(shape, 'shape'):
            shape = shape.shape
        self.shape = tuple(int(n) for n in shape)
        if not self.shape:
            raise ConfigurationError("Image must have at least one dimension")
        self.scale = _validate_scale(self.shape, scale)
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)

        self.original_profile = None
        self.subtracted_profile = None

    def _partitions(self):
        n_tasks = min(self.n_workers, self.shape[0])
        bounds = np.linspace(0, self.shape[0], n_tasks + 1).astype(int)
        return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]

    def compute_profile(self, image):
        """
        Compute the radial profile of one image.

        Parameters
        ----------
        image : ndarray
            Real-valued image of the profiler's shape

        Returns
        -------
        RadialProfile
            Mean intensity at every distinct scaled distance
        """
        image = np.asarray(image, dtype=float)
        if image.shape != self.shape:
            raise ConfigurationError(
                f"Image shape {image.shape} does not match profiler shape {self.shape}")

        table = {}
        lock = threading.Lock()

        def bin_slab(bounds):
            start, stop = bounds
            distances = _slab_distances(self.shape, self.scale, start, stop).ravel()
            keys, inverse = np.unique(distances, return_inverse=True)
            sums = np.bincount(inverse.ravel(), weights=image[start:stop].ravel(),
                               minlength=len(keys))
            counts = np.bincount(inverse.ravel(), minlength=len(keys))
            with lock:
                for key, s, c in zip(keys.tolist(), sums.tolist(), counts.tolist()):
                    entry = table.get(key)
                    if entry is None:
                        table[key] = [s, c]
                    else:
                        entry[0] += s
                        entry[1] += c

        partitions = self._partitions()
        log_debug(f"Binning image of shape {self.shape} in {len(partitions)} partitions")
        with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
            # list() re-raises any worker exception here
            list(executor.map(bin_slab, partitions))

        keys = list(table.keys())
        return RadialProfile(keys, [table[k][0] / table[k][1] for k in keys])

    def compute_original(self, image):
        self.original_profile = self.compute_profile(image)
        return self.original_profile

    def compute_subtracted(self, image):
        self.subtracted_profile = self.compute_profile(image)
        return self.subtracted_profile

    def compute_both(self, original, subtracted):
        """
        Compute the original and subtracted profiles in one call.

        Returns
        -------
        original_profile, subtracted_profile : RadialProfile
        """
        return self.compute_original(original), self.compute_subtracted(subtracted)
