"""
Default values for the cross-correlation analysis.

Every value here can be overridden through the keyword arguments of the
class or function that uses it.
"""

# Solver
MAX_ITERATIONS = 100
RETRY_STEPS = 5

# Width of the statistics window, in sigmas on either side of a mean
WINDOW_SIGMAS = 3

# Sentinel written into every component when no valid fit survives
SENTINEL_AMPLITUDE = 0.0
SENTINEL_MEAN = -1.0

# Reported in place of R-squared or confidence when they cannot be computed
STAT_ERROR_VALUE = -1.0

# Presentation only
SIG_DIGITS = 4
LOW_CONFIDENCE = 0.1
LOW_R_SQUARED = 0.05
DEFAULT_UNIT = 'px'
