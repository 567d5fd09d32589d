"""
Profile Model Validation Script

Checks the profile model end to end on synthetic video:
- Tracking a moving bar with live training stays within 1 pixel
- A static frame never makes the tracked point drift
- best_position latency < 5ms for a 3-band, 15-sample model
- Zero-sum profiles are rejected without corrupting the model
"""

import sys
import logging
import time
from pathlib import Path
from typing import Tuple

# Add repository root to path so the script runs without installing
SCRIPT_DIR = Path(__file__).parent
sys.path.insert(0, str(SCRIPT_DIR.parent))

import cv2
import numpy as np

from pixelprofile.config.settings import ProfileConfig, SamplingConfig, SearchConfig
from pixelprofile.geometry import Line2D
from pixelprofile.sampling import create_sampler
from pixelprofile.search import ProfileSearch
from pixelprofile.statistics import DegenerateProfileError, StatisticalProfileModel

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

NSAMPLES = 15
SEARCH_SAMPLES = 29  # (29 - 15) // 2 == 15 // 2, so offsets map to footprint centers


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def make_bar_frame(
    rng: np.random.Generator, bar_x: float, height: int = 120, width: int = 200
) -> np.ndarray:
    """
    Build a noisy BGR frame with a soft vertical bar centered at column bar_x.

    Args:
        rng: Random generator for sensor noise
        bar_x: Bar center column (may be fractional)
        height: Frame height in pixels
        width: Frame width in pixels

    Returns:
        (height, width, 3) uint8 image
    """
    cols = np.arange(width, dtype=np.float32)
    bar = np.clip(4.0 - np.abs(cols - bar_x), 0.0, 1.0)  # 7px plateau with 1px ramps

    frame = np.empty((height, width, 3), dtype=np.float32)
    for band, (low, high) in enumerate([(40, 30), (40, 90), (40, 220)]):
        frame[:, :, band] = low + (high - low) * bar

    frame = cv2.GaussianBlur(frame, (5, 5), 1.0)
    frame += rng.normal(0.0, 2.0, frame.shape).astype(np.float32)

    return np.clip(frame, 0, 255).astype(np.uint8)


def make_model() -> StatisticalProfileModel:
    sampler = create_sampler(SamplingConfig(strategy="interpolated", unit_step=True))
    return StatisticalProfileModel.from_config(ProfileConfig(nsamples=NSAMPLES), sampler)


# =============================================================================
# CHECKS
# =============================================================================


def check_tracking(rng: np.random.Generator) -> Tuple[bool, float]:
    """
    Check 1: Follow a bar moving 1.5 px/frame, retraining at every new position.

    Returns:
        (pass, max_error_px)
    """
    model = make_model()
    search = ProfileSearch(model, SearchConfig(search_samples=SEARCH_SAMPLES))

    bar_x = 60.0
    line = Line2D.from_coords(bar_x - 7.0, 60.0, bar_x + 7.0, 60.0)
    model.update(make_bar_frame(rng, bar_x), line)

    errors = []
    for _ in range(40):
        bar_x += 1.5
        frame = make_bar_frame(rng, bar_x)

        result = search.refine(frame, line)
        line = result.line
        errors.append(abs(result.point.x - bar_x))

        model.update(frame, line)

    max_error = max(errors)
    return max_error <= 1.0, max_error


def check_static_no_drift(rng: np.random.Generator) -> Tuple[bool, float]:
    """
    Check 2: Refining repeatedly on a static noise-free frame keeps the point fixed.

    Returns:
        (pass, total_drift_px)
    """
    model = make_model()
    search = ProfileSearch(model, SearchConfig(search_samples=SEARCH_SAMPLES))

    frame = make_bar_frame(np.random.default_rng(0), 100.0)
    start = Line2D.from_coords(93.0, 60.0, 107.0, 60.0)
    for _ in range(3):
        model.update(frame, start)

    line = start
    for _ in range(20):
        line = search.refine(frame, line).line

    drift = line.center_of_gravity.distance_to(start.center_of_gravity)
    return drift == 0.0, drift


def check_latency(rng: np.random.Generator) -> Tuple[bool, float]:
    """
    Check 3: Mean best_position latency over 100 calls < 5ms.

    Returns:
        (pass, latency_ms)
    """
    model = make_model()
    line = Line2D.from_coords(93.0, 60.0, 107.0, 60.0)
    for _ in range(60):
        model.update(make_bar_frame(rng, 100.0 + rng.uniform(-0.5, 0.5)), line)

    frame = make_bar_frame(rng, 102.0)
    model.best_position(frame, line, SEARCH_SAMPLES)  # warm the cache

    start_time = time.perf_counter()
    for _ in range(100):
        model.best_position(frame, line, SEARCH_SAMPLES)
    latency_ms = (time.perf_counter() - start_time) * 1000 / 100

    return latency_ms < 5.0, latency_ms


def check_zero_sum_rejected() -> Tuple[bool, str]:
    """
    Check 4: An all-black frame raises DegenerateProfileError and leaves the model unchanged.

    Returns:
        (pass, message)
    """
    model = make_model()
    line = Line2D.from_coords(93.0, 60.0, 107.0, 60.0)
    model.update(make_bar_frame(np.random.default_rng(1), 100.0), line)

    try:
        model.update(np.zeros((120, 200, 3), dtype=np.uint8), line)
    except DegenerateProfileError as e:
        return model.count == 1, f"rejected ({e})"

    return False, "accepted zero-sum profile"


# =============================================================================
# MAIN VALIDATION
# =============================================================================


def main():
    """Run all validation checks and report results."""
    logger.info("")
    logger.info("=" * 60)
    logger.info("Profile Model Validation")
    logger.info("=" * 60)
    logger.info("")

    rng = np.random.default_rng(42)
    results = []

    passed, max_error = check_tracking(rng)
    results.append(passed)
    status = "PASS" if passed else "FAIL"
    logger.info("[%s] Moving bar tracking: max error %.2fpx (threshold: <=1px)", status, max_error)

    passed, drift = check_static_no_drift(rng)
    results.append(passed)
    status = "PASS" if passed else "FAIL"
    logger.info("[%s] Static frame drift: %.2fpx (threshold: 0px)", status, drift)

    passed, latency = check_latency(rng)
    results.append(passed)
    status = "PASS" if passed else "FAIL"
    logger.info("[%s] best_position latency: %.2fms (threshold: <5ms)", status, latency)

    passed, message = check_zero_sum_rejected()
    results.append(passed)
    status = "PASS" if passed else "FAIL"
    logger.info("[%s] Zero-sum profile: %s", status, message)

    passed_count = sum(results)
    total_count = len(results)

    logger.info("")
    logger.info("Results: %d/%d passed", passed_count, total_count)
    logger.info("=" * 60)
    logger.info("")

    if passed_count == total_count:
        sys.exit(0)
    else:
        sys.exit(1)


if __name__ == "__main__":
    main()
