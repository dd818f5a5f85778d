"""
Result tables and summaries for fitted frames.

All rounding happens here; the fitting code always works at full precision.
"""

import math

from .constants import DEFAULT_UNIT, LOW_CONFIDENCE, LOW_R_SQUARED, SIG_DIGITS


def get_sig_digits(value, digits=SIG_DIGITS):
    """
    Round a value to a number of significant digits.

    None, NaN and infinite values are returned unchanged.
    """
    if value is None:
        return None
    value = float(value)
    if value == 0 or not math.isfinite(value):
        return value
    return float(f"{value:.{digits}g}")


def correlation_table(original=None, subtracted=None, engine=None, unit=DEFAULT_UNIT,
                      digits=SIG_DIGITS):
    """
    Correlogram rows for tabular display or export.

    Parameters
    ----------
    original : RadialProfile, optional
        Original correlation profile; provides the row keys when present
    subtracted : RadialProfile, optional
        Subtracted correlation profile
    engine : CurveFitEngine, optional
        Fitted engine; adds one column per Gaussian component
    unit : str, optional
        Distance unit shown in the header
    digits : int, optional
        Significant digits of every value

    Returns
    -------
    list of dict
        One row per distance: 'Distance (unit)', 'Original CC',
        'Subtracted CC', 'Gaussian fit-1', ...
    """
    key_profile = original if original is not None else subtracted
    if key_profile is None:
        raise ValueError("At least one profile is required")

    mixture = engine.mixture if engine is not None else None
    rows = []
    for distance, _ in key_profile:
        row = {f"Distance ({unit})": get_sig_digits(distance, digits)}
        if original is not None:
            row["Original CC"] = get_sig_digits(original.get(distance), digits)
        if subtracted is not None:
            row["Subtracted CC"] = get_sig_digits(subtracted.get(distance), digits)
        if mixture is not None:
            for i in range(mixture.curve_count):
                row[f"Gaussian fit-{i + 1}"] = get_sig_digits(
                    float(mixture.component_value(i, distance)), digits)
        rows.append(row)
    return rows


def frame_results(engine, unit=DEFAULT_UNIT, frame=None, frame_label='Frame',
                  digits=SIG_DIGITS):
    """
    Per-component results of one fitted frame.

    Parameters
    ----------
    engine : CurveFitEngine
        Fitted engine
    unit : str, optional
        Distance unit
    frame : float, optional
        Frame index or calibrated time, added first when given
    frame_label : str, optional
        Header of the frame column, e.g. 'Time (s)'
    digits : int, optional
        Significant digits of every value

    Returns
    -------
    dict
        'Mean-i (unit)', 'SD-i (unit)', 'Gaussian height-i', 'Confidence-i'
        (only with an original profile) and 'R-squared'
    """
    results = {}
    if frame is not None:
        results[frame_label] = get_sig_digits(frame, digits)
    for i in range(engine.curve_count):
        n = i + 1
        results[f"Mean-{n} ({unit})"] = get_sig_digits(engine.get_mean(i), digits)
        results[f"SD-{n} ({unit})"] = get_sig_digits(engine.get_sigma(i), digits)
        results[f"Gaussian height-{n}"] = get_sig_digits(engine.get_peak_height(i), digits)
        if engine.has_confidence:
            results[f"Confidence-{n}"] = get_sig_digits(engine.get_confidence(i), digits)
    results["R-squared"] = get_sig_digits(engine.get_r_squared(), digits)
    return results


def _max_of(results, prefix):
    return max([0.0] + [v for k, v in results.items() if k.startswith(prefix)])


def best_frame(all_results):
    """
    Pick the most representative frame of a time series.

    Frames are ranked by their highest confidence when confidences exist,
    otherwise by their widest component, narrowest first.

    Parameters
    ----------
    all_results : list of dict
        Rows from ``frame_results``

    Returns
    -------
    dict or None
        The best row, None for an empty list
    """
    if not all_results:
        return None
    if any(k.startswith("Confidence-") for k in all_results[0]):
        return max(all_results, key=lambda r: _max_of(r, "Confidence-"))
    return min(all_results, key=lambda r: _max_of(r, "SD-"))


def summary_text(results, name1, name2, mask_name=None, time_series=False):
    """
    Human readable summary of a frame's results.

    Parameters
    ----------
    results : dict
        Row from ``frame_results`` (the best frame for time series)
    name1, name2 : str
        Names of the correlated images
    mask_name : str, optional
        Name of the mask, if one was used
    time_series : bool, optional
        Add a note that only the best frame is shown

    Returns
    -------
    str
    """
    lines = [
        "Fit a gaussian curve to the cross-correlation of:",
        f'"{name1}"',
        "with",
        f'"{name2}"',
        "using the mask",
        f'"{mask_name if mask_name else "No mask selected"}":',
        "",
    ]
    for key, value in results.items():
        lines.append(f"{key}: {value}")

    if time_series:
        lines.append("")
        lines.append("For time-lapse data, only the frame with the highest confidence is "
                     "shown here. See the correlation over time table for complete results.")

    lines.append("")
    lines.append(f"Confidence values below {LOW_CONFIDENCE} are considered low.")
    lines.append("This can indicate a lack of significant spatial correlation, or simply "
                 "that additional pre-processing steps are required.")
    lines.append("")
    lines.append("Any negative confidence and R-squared values are an error result that "
                 "indicate that a Gaussian curve could not be fit to the data.")

    r_squared = results.get("R-squared")
    if r_squared is not None and 0 <= r_squared < LOW_R_SQUARED:
        lines.append("")
        lines.append("The R-squared value for the gaussian regression is very low.")
        lines.append("This can indicate a low signal to noise ratio, or that no spatial "
                     "correlation exists and the curve was fit to image noise.")

    return '\n'.join(lines)
