import logging
import os

import numpy as np
import pytest

from ccc.batch import analyze_frame, analyze_frames
from ccc.utils.logger import setup_logger


def test_analyze_frame_fits_correlation_image(correlation_image):
    image, scale = correlation_image
    profiler, engine = analyze_frame(image, image, scale, curve_count=1)

    assert profiler.original_profile is not None
    assert engine.success
    assert engine.get_mean(0) == pytest.approx(2.0, rel=0.02)
    assert engine.get_sigma(0) == pytest.approx(0.5, rel=0.02)
    assert engine.get_confidence(0) == pytest.approx(1.0)


def test_analyze_frame_without_original(correlation_image):
    image, scale = correlation_image
    profiler, engine = analyze_frame(None, image, scale)
    assert profiler.original_profile is None
    assert not engine.has_confidence


def test_configuration_error_skips_only_that_frame(correlation_image):
    image, scale = correlation_image
    bad = np.zeros((5, 5, 5))
    frames = [(image, image), (bad, bad), (image, 0.5 * image)]

    batch = analyze_frames(frames, scale, curve_count=1, frame_times=[0.0, 1.5, 3.0],
                           frame_label='Time (s)')
    assert batch.skipped == [1]
    assert sorted(batch.engines) == [0, 2]
    assert [r['Time (s)'] for r in batch.results] == [0.0, 3.0]
    assert batch.results[1]['Confidence-1'] == pytest.approx(0.5)
    assert batch.best['Time (s)'] == 0.0


def test_flat_frame_is_reported_as_no_fit(correlation_image):
    image, scale = correlation_image
    flat = np.ones_like(image)
    batch = analyze_frames([(image, image), (flat, flat)], scale)
    assert batch.no_fit == [1]
    assert batch.results[1]['R-squared'] == -1.0
    assert batch.results[1]['Confidence-1'] == -1.0
    assert batch.best['Frame'] == 0


def test_setup_logger_writes_file(tmp_path):
    logger = setup_logger(log_dir=str(tmp_path), log_level=logging.DEBUG)
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
    files = os.listdir(tmp_path)
    assert len(files) == 1
    assert files[0].startswith('cross_correlation_')
    setup_logger()
