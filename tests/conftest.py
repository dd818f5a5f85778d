import numpy as np
import pytest

from ccc.profile import RadialProfile
from ccc.radial import radial_distances


def gaussian_values(x, amplitude, mean, sigma):
    return amplitude * np.exp(-((x - mean)**2) / (2 * sigma**2))


@pytest.fixture
def clean_profile():
    distances = np.linspace(0.0, 20.0, 201)
    return RadialProfile(distances, gaussian_values(distances, 1000.0, 5.0, 1.0))


@pytest.fixture
def flat_profile():
    distances = np.linspace(0.0, 20.0, 201)
    return RadialProfile(distances, np.full(len(distances), 5.0))


@pytest.fixture
def spike_profile():
    # Broad signal plus a single-sample noise spike that dominates the fit
    distances = np.arange(41) * 0.5
    values = gaussian_values(distances, 100.0, 8.0, 3.0)
    values[30] += 10000.0
    return RadialProfile(distances, values)


@pytest.fixture
def correlation_image():
    shape = (41, 41)
    scale = [0.25, 0.25]
    distances = radial_distances(shape, scale)
    return gaussian_values(distances, 1000.0, 2.0, 0.5), scale
