import itertools
import math

import numpy as np
import pytest

from ccc.exceptions import ConfigurationError
from ccc.profiles import GaussianMixture
from ccc.radial import RadialProfiler, gaussian_reweighted_image, radial_distances


def brute_force_profile(image, scale):
    center = [(n - 1.0) / 2 for n in image.shape]
    table = {}
    for index in itertools.product(*[range(n) for n in image.shape]):
        squared = 0.0
        for axis, p in enumerate(index):
            offset = (p - center[axis]) * scale[axis]
            squared = squared + offset * offset
        distance = math.sqrt(squared)
        total, count = table.get(distance, (0.0, 0))
        table[distance] = (total + float(image[index]), count + 1)
    return {d: total / count for d, (total, count) in table.items()}


def test_scale_dimension_mismatch():
    with pytest.raises(ConfigurationError):
        RadialProfiler((5, 5), [1.0])
    with pytest.raises(ConfigurationError):
        RadialProfiler(np.zeros((3, 4, 5)), [1.0, 1.0])


def test_scale_must_be_positive():
    with pytest.raises(ConfigurationError):
        RadialProfiler((5, 5), [1.0, 0.0])


def test_image_shape_must_match():
    profiler = RadialProfiler((5, 5), [1.0, 1.0])
    with pytest.raises(ConfigurationError):
        profiler.compute_profile(np.zeros((5, 6)))


@pytest.mark.parametrize("shape,scale", [
    ((9,), [0.3]),
    ((6, 7), [0.5, 1.0]),
    ((4, 5, 3), [0.2, 0.2, 0.7]),
])
def test_profile_holds_exact_means(shape, scale):
    rng = np.random.default_rng(0)
    image = rng.normal(size=shape)

    profile = RadialProfiler(shape, scale).compute_profile(image)
    expected = brute_force_profile(image, scale)

    assert len(profile) <= image.size
    assert sorted(expected) == profile.distances.tolist()
    for distance, value in profile:
        assert value == pytest.approx(expected[distance], rel=1e-12, abs=1e-12)


def test_profile_independent_of_partitioning():
    rng = np.random.default_rng(1)
    image = rng.uniform(size=(23, 17))
    scale = [0.13, 0.29]

    profiles = [RadialProfiler(image.shape, scale, n_workers=n).compute_profile(image)
                for n in (1, 3, 8, 64)]
    for profile in profiles[1:]:
        assert np.array_equal(profile.distances, profiles[0].distances)
        np.testing.assert_allclose(profile.values, profiles[0].values, rtol=1e-12)


def test_square_image_merges_symmetric_pixels():
    image = np.arange(9.0).reshape(3, 3)
    profile = RadialProfiler(image.shape, [1.0, 1.0]).compute_profile(image)
    assert profile.distances.tolist() == [0.0, 1.0, math.sqrt(2.0)]
    assert profile.values.tolist() == [4.0, 4.0, 4.0]


def test_compute_both_keeps_independent_profiles():
    original = np.ones((5, 5))
    subtracted = np.full((5, 5), 2.0)
    profiler = RadialProfiler(original, [1.0, 1.0])
    o, s = profiler.compute_both(original, subtracted)
    assert profiler.original_profile is o
    assert profiler.subtracted_profile is s
    assert np.all(o.values == 1.0)
    assert np.all(s.values == 2.0)


def test_radial_distances_center_is_zero():
    distances = radial_distances((5, 3), [2.0, 1.0])
    assert distances[2, 1] == 0.0
    assert distances[0, 0] == pytest.approx(math.sqrt(16.0 + 1.0))


def test_gaussian_reweighted_image():
    mixture = GaussianMixture.from_flat([2.0, 1.0, 0.5])
    image = np.full((5, 5), 3.0)
    scale = [0.5, 0.5]
    reweighted = gaussian_reweighted_image(image, scale, mixture)
    assert reweighted.shape == image.shape
    np.testing.assert_allclose(reweighted, 3.0 * mixture.value(radial_distances((5, 5), scale)))
    assert reweighted[2, 2] == pytest.approx(3.0 * mixture.value(0.0))
