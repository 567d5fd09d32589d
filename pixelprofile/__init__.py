"""
Statistical pixel profile models for line-based feature tracking.

Stages:
- sampling: Sample a single-band raster along a line
- statistics: Learn the profile along a line and score / search new images
- search: Iteratively refine a line's position against its model
"""

from pixelprofile.geometry import Line2D, Point2D
from pixelprofile.sampling import LineSampler, create_sampler
from pixelprofile.statistics import (
    DegenerateProfileError,
    DimensionMismatchError,
    ModelNotTrainedError,
    StatisticalProfileModel,
)
from pixelprofile.search import ProfileSearch, SearchResult

__all__ = [
    "Line2D",
    "Point2D",
    "LineSampler",
    "create_sampler",
    "StatisticalProfileModel",
    "DegenerateProfileError",
    "DimensionMismatchError",
    "ModelNotTrainedError",
    "ProfileSearch",
    "SearchResult",
]
