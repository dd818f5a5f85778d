"""
Frame-by-frame analysis of correlation image series.

Usage:
    frames = [(original_cc_0, subtracted_cc_0), (original_cc_1, subtracted_cc_1)]
    batch = analyze_frames(frames, scale=[0.1, 0.1], curve_count=2, unit='um')
    print(batch.best)

A frame with an invalid setup is logged and skipped; the remaining frames
are still analyzed.
"""

from .constants import DEFAULT_UNIT, MAX_ITERATIONS, RETRY_STEPS
from .exceptions import ConfigurationError
from .fitting import CurveFitEngine
from .radial import RadialProfiler
from .reporting import best_frame, frame_results
from .utils.logger import log_error, log_info, log_warning


class BatchResult:
    """
    Results of a frame series.

    Attributes
    ----------
    results : list of dict
        ``frame_results`` row of every analyzed frame
    engines : dict
        Frame index -> fitted CurveFitEngine
    profilers : dict
        Frame index -> RadialProfiler holding the frame's profiles
    skipped : list of int
        Frames aborted by a configuration error
    no_fit : list of int
        Frames where no Gaussian could be fit
    """

    def __init__(self):
        self.results = []
        self.engines = {}
        self.profilers = {}
        self.skipped = []
        self.no_fit = []

    @property
    def best(self):
        """Row of the most representative frame (see ``reporting.best_frame``)."""
        return best_frame(self.results)


def analyze_frame(original, subtracted, scale, curve_count=1, max_iterations=MAX_ITERATIONS,
                  retry_steps=RETRY_STEPS, n_workers=None):
    """
    Profile and fit one frame.

    Parameters
    ----------
    original : ndarray or None
        Original correlation image; without it no confidence is computed
    subtracted : ndarray
        Background-subtracted correlation image
    scale : array_like
        Physical pixel size along each axis
    curve_count : int, optional
        Number of Gaussian components

    Returns
    -------
    profiler : RadialProfiler
    engine : CurveFitEngine

    Raises
    ------
    ConfigurationError
        If the scale does not match the images or the setup is invalid
    """
    profiler = RadialProfiler(subtracted, scale, n_workers=n_workers)
    engine = CurveFitEngine(curve_count, max_iterations=max_iterations, retry_steps=retry_steps)

    if original is not None:
        profiler.compute_both(original, subtracted)
    else:
        profiler.compute_subtracted(subtracted)

    engine.fit_curve(profiler.subtracted_profile, profiler.original_profile)
    return profiler, engine


def analyze_frames(frames, scale, curve_count=1, unit=DEFAULT_UNIT, frame_times=None,
                   frame_label='Frame', **kwargs):
    """
    Analyze a series of (original, subtracted) correlation image pairs.

    Parameters
    ----------
    frames : iterable of tuple
        (original, subtracted) pairs; original may be None
    scale : array_like
        Physical pixel size along each spatial axis
    curve_count : int, optional
        Number of Gaussian components
    unit : str, optional
        Distance unit for the result rows
    frame_times : sequence of float, optional
        Calibrated time of each frame, frame indices are used otherwise
    frame_label : str, optional
        Header of the frame column
    **kwargs
        Passed to ``analyze_frame``

    Returns
    -------
    BatchResult
    """
    batch = BatchResult()
    for index, (original, subtracted) in enumerate(frames):
        try:
            profiler, engine = analyze_frame(original, subtracted, scale, curve_count, **kwargs)
        except ConfigurationError as e:
            log_error(f"Skipping frame {index}", e)
            batch.skipped.append(index)
            continue

        if engine.no_fit:
            log_warning(f"Frame {index}: no Gaussian fit, statistics are error values")
            batch.no_fit.append(index)

        frame = frame_times[index] if frame_times is not None else index
        batch.results.append(frame_results(engine, unit, frame=frame, frame_label=frame_label))
        batch.engines[index] = engine
        batch.profilers[index] = profiler
        log_info(f"Processed frame {index}")

    return batch
