"""
lmfit parameter builder for the Gaussian mixture.
"""

from lmfit import Parameters


PARAMETER_NAMES = ('amplitude', 'mean', 'sigma')


def component_prefix(index):
    """Parameter prefix of component ``index`` (0-based): 'g1_', 'g2_', ..."""
    return f"g{index + 1}_"


def build_parameters(initial):
    """
    Build lmfit parameters from a list of component seeds.

    Parameters are added per component in (amplitude, mean, sigma) order so
    the order of ``Parameters`` matches the columns of
    ``GaussianMixture.gradient``. They are left unbounded; validity of the
    fitted values is checked after the fit.

    Parameters
    ----------
    initial : list of dict
        One {'amplitude', 'mean', 'sigma'} dict per component

    Returns
    -------
    params : lmfit.Parameters
        Initial parameters
    """
    if not initial:
        raise ValueError("Must provide at least one component")

    params = Parameters()
    for i, comp in enumerate(initial):
        prefix = component_prefix(i)
        for name in PARAMETER_NAMES:
            params.add(f"{prefix}{name}", value=comp[name])
    return params


def flatten_parameters(params, n_components):
    """
    Flat [a1, m1, s1, a2, ...] list of values from lmfit parameters.
    """
    values = []
    for i in range(n_components):
        prefix = component_prefix(i)
        values.extend(params[f"{prefix}{name}"].value for name in PARAMETER_NAMES)
    return values
