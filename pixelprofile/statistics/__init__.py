"""
Profile Statistics Module

Statistical models of image profiles sampled along lines.

Components:
- exceptions: ProfileModelError hierarchy
- accumulator: MultivariateStatistics (incremental mean / covariance)
- extraction: Band-major, L1-normalized profile extraction
- base: PixelProfileModel capability interface
- profile_model: StatisticalProfileModel (Mahalanobis scoring + windowed search)

Usage:
    from pixelprofile.statistics import StatisticalProfileModel

    model = StatisticalProfileModel(11, sampler)
    model.update(frame, line)

    new_point = model.best_position(next_frame, line, 21)
"""

from pixelprofile.statistics.exceptions import (
    ProfileModelError,
    DimensionMismatchError,
    DegenerateProfileError,
    ModelNotTrainedError,
)
from pixelprofile.statistics.accumulator import MultivariateStatistics
from pixelprofile.statistics.extraction import (
    num_bands,
    get_band,
    iter_bands,
    normalize_samples,
    extract_bands,
    extract_normalized,
)
from pixelprofile.statistics.base import PixelProfileModel
from pixelprofile.statistics.profile_model import (
    ModelState,
    StatisticalProfileModel,
    invert_or_identity,
)

__all__ = [
    # Errors
    "ProfileModelError",
    "DimensionMismatchError",
    "DegenerateProfileError",
    "ModelNotTrainedError",
    # Statistics
    "MultivariateStatistics",
    # Extraction
    "num_bands",
    "get_band",
    "iter_bands",
    "normalize_samples",
    "extract_bands",
    "extract_normalized",
    # Models
    "PixelProfileModel",
    "ModelState",
    "StatisticalProfileModel",
    "invert_or_identity",
]
