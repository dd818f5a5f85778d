"""
Exceptions raised by the analysis core.
"""


class ConfigurationError(ValueError):
    """
    Invalid analysis setup, e.g. a scale vector that does not match the
    image dimensionality or a parameter list that is not made of triplets.

    Raised before any work is done; it aborts only the frame being analyzed.
    """


class DegenerateStatisticsError(ArithmeticError):
    """Goodness-of-fit window with zero variance (R-squared undefined)."""
