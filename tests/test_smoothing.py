import numpy as np
import pytest

from ccc.profile import RadialProfile
from ccc.smoothing import moving_average, smooth_profile


def test_zero_radius_is_identity(clean_profile):
    smoothed = smooth_profile(clean_profile, 0)
    assert np.array_equal(smoothed.distances, clean_profile.distances)
    assert np.array_equal(smoothed.values, clean_profile.values)


def test_edges_average_fewer_neighbors():
    y = [1.0, 2.0, 3.0, 4.0, 10.0]
    smoothed = moving_average(y, 1)
    np.testing.assert_allclose(smoothed, [1.5, 2.0, 3.0, 17.0 / 3, 7.0])


def test_window_larger_than_profile():
    y = [1.0, 2.0, 6.0]
    np.testing.assert_allclose(moving_average(y, 5), [3.0, 3.0, 3.0])


def test_window_is_ordinal_not_metric():
    # Uneven spacing does not change which neighbors are averaged
    profile = RadialProfile([0.0, 0.1, 5.0, 100.0], [0.0, 3.0, 6.0, 9.0])
    smoothed = smooth_profile(profile, 1)
    assert np.array_equal(smoothed.distances, profile.distances)
    np.testing.assert_allclose(smoothed.values, [1.5, 3.0, 6.0, 7.5])


def test_negative_radius_rejected():
    with pytest.raises(ValueError):
        moving_average([1.0, 2.0], -1)


def test_large_head_does_not_disturb_the_tail():
    rng = np.random.default_rng(7)
    y = np.concatenate([[1e12], rng.uniform(0.0, 1.0, 2000)])
    radius = 2
    expected = [np.mean(y[max(0, i - radius):i + radius + 1]) for i in range(len(y))]
    np.testing.assert_allclose(moving_average(y, radius), expected, rtol=1e-12)
