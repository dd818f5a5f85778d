import numpy as np
import pytest

from ccc.exceptions import ConfigurationError
from ccc.profiles import GaussianMixture, GaussianTriplet, gaussian, parse_gaussian_parameters


def test_value_is_sum_of_components():
    mixture = GaussianMixture.from_flat([10.0, 1.0, 0.5, 4.0, 3.0, 2.0])
    x = np.linspace(-2, 8, 21)
    expected = gaussian(x, 10.0, 1.0, 0.5) + gaussian(x, 4.0, 3.0, 2.0)
    np.testing.assert_allclose(mixture.value(x), expected)
    np.testing.assert_allclose(mixture.component_value(1, x), gaussian(x, 4.0, 3.0, 2.0))
    assert mixture.value(1.0) == pytest.approx(10.0 + gaussian(1.0, 4.0, 3.0, 2.0))
    assert mixture.curve_count == 2


def test_flat_parameters_must_be_triplets():
    with pytest.raises(ConfigurationError):
        GaussianMixture.from_flat([1.0, 2.0, 3.0, 4.0])
    with pytest.raises(ConfigurationError):
        GaussianMixture.from_flat([])


def test_set_component_replaces_single_triplet():
    mixture = GaussianMixture.from_flat([10.0, 1.0, 0.5, 4.0, 3.0, 2.0])
    mixture.set_component(0, (0.0, -1.0, 20.0))
    assert mixture.get_component(0) == GaussianTriplet(0.0, -1.0, 20.0)
    assert mixture.get_component(1) == GaussianTriplet(4.0, 3.0, 2.0)
    assert mixture.to_flat() == [0.0, -1.0, 20.0, 4.0, 3.0, 2.0]


def test_gradient_matches_per_component_finite_differences():
    params = [10.0, 1.0, 0.5, 4.0, 3.0, 2.0]
    x = np.linspace(-1, 6, 15)
    grad = GaussianMixture.gradient(x, params)
    assert grad.shape == (len(x), len(params))

    step = 1e-6
    for j in range(len(params)):
        comp = j // 3
        triplet = list(params[3 * comp:3 * comp + 3])
        up = list(triplet)
        down = list(triplet)
        up[j % 3] += step
        down[j % 3] -= step
        numeric = (gaussian(x, *up) - gaussian(x, *down)) / (2 * step)
        np.testing.assert_allclose(grad[:, j], numeric, rtol=1e-5, atol=1e-6)


def test_gradient_columns_depend_only_on_own_triplet():
    x = np.linspace(0, 5, 11)
    single = GaussianMixture.gradient(x, [10.0, 1.0, 0.5])
    pair = GaussianMixture.gradient(x, [10.0, 1.0, 0.5, 4.0, 3.0, 2.0])
    np.testing.assert_allclose(pair[:, :3], single)


def test_parametric_evaluation_requires_positive_sigma():
    with pytest.raises(ValueError):
        GaussianMixture.evaluate([0.0, 1.0], [1.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        GaussianMixture.gradient([0.0, 1.0], [1.0, 0.0, -1.0])


def test_parse_gaussian_parameters():
    mixture = parse_gaussian_parameters("3.205E7, 0.7433, 0.3369, 4.841E7, 2.046, 1.342")
    assert mixture.curve_count == 2
    assert mixture.get_component(1) == GaussianTriplet(4.841e7, 2.046, 1.342)


@pytest.mark.parametrize("text", ["1, 2", "1, 2, 0", "1, two, 3"])
def test_parse_gaussian_parameters_rejects_bad_input(text):
    with pytest.raises(ConfigurationError):
        parse_gaussian_parameters(text)
