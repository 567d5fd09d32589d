"""
Line Samplers

Turn a line segment and a single-band raster into a fixed number of scalar
samples along the segment.

Every sampler is deterministic: the same (line, band, count) always yields the
same samples. Samplers also report the geometric line they actually sampled
along, which may differ from the caller's line (see UnitStepSampler); the
profile model uses it to map sample offsets back to image coordinates.

Coordinates follow the OpenCV convention: x is the column, y is the row.
"""

import logging
from abc import ABC, abstractmethod

import cv2
import numpy as np

from pixelprofile.geometry.models import Line2D, Point2D

logger = logging.getLogger(__name__)


def _check_band(band: np.ndarray) -> None:
    if band.ndim != 2:
        raise ValueError(f"band must be a 2D single-band raster, got shape {band.shape}")


def _remap_bilinear(band: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Bilinear lookup of `points` ((n, 2) x/y array) with replicated borders."""
    map_x = points[:, 0].astype(np.float32).reshape(1, -1)
    map_y = points[:, 1].astype(np.float32).reshape(1, -1)

    values = cv2.remap(
        np.asarray(band, dtype=np.float32),
        map_x,
        map_y,
        interpolation=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_REPLICATE,
    )
    return values.ravel().astype(np.float64)


class LineSampler(ABC):
    """Base class for all line sampling strategies."""

    @abstractmethod
    def extract_samples(self, line: Line2D, band: np.ndarray, count: int) -> np.ndarray:
        """
        Sample a single-band raster along a line.

        Args:
            line: Line to sample along, from begin to end
            band: Single-band raster (H, W)
            count: Number of samples (>= 1)

        Returns:
            (count,) float64 array of samples
        """

    def get_sample_line(self, line: Line2D, band: np.ndarray, count: int) -> Line2D:
        """
        Line whose endpoints are the first and last sample positions used
        when sampling `count` points along `line`.
        """
        return line


class NearestNeighbourSampler(LineSampler):
    """Evenly spaced samples rounded to the nearest pixel, clamped to the raster."""

    def extract_samples(self, line: Line2D, band: np.ndarray, count: int) -> np.ndarray:
        _check_band(band)
        points = line.points(count)
        height, width = band.shape

        cols = np.clip(np.rint(points[:, 0]).astype(np.intp), 0, width - 1)
        rows = np.clip(np.rint(points[:, 1]).astype(np.intp), 0, height - 1)

        return band[rows, cols].astype(np.float64)


class InterpolatedSampler(LineSampler):
    """Evenly spaced samples with bilinear interpolation (cv2.remap)."""

    def extract_samples(self, line: Line2D, band: np.ndarray, count: int) -> np.ndarray:
        _check_band(band)
        return _remap_bilinear(band, line.points(count))


class InterpolatedDerivativeSampler(LineSampler):
    """
    Gradient magnitude along the line.

    Takes count + 1 interpolated samples and returns the absolute difference
    of each consecutive pair, so edges crossing the line dominate the profile.
    """

    def extract_samples(self, line: Line2D, band: np.ndarray, count: int) -> np.ndarray:
        _check_band(band)
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")

        values = _remap_bilinear(band, line.points(count + 1))
        return np.abs(np.diff(values))

    def get_sample_line(self, line: Line2D, band: np.ndarray, count: int) -> Line2D:
        """Each difference sits halfway between its two samples, so trim half a step off each end."""
        begin = line.begin.as_array()
        half_step = (line.end.as_array() - begin) / (2.0 * count)

        return Line2D(
            begin=Point2D.from_array(begin + half_step),
            end=Point2D.from_array(line.end.as_array() - half_step),
        )


class UnitStepSampler(LineSampler):
    """
    Re-parameterizes the line so consecutive samples are one pixel apart.

    The sampled line keeps the direction and center of gravity of the given
    line but has length count - 1, so models trained and searched with
    different sample counts share the same sampling rate. Sampling itself is
    delegated to the wrapped sampler.
    """

    def __init__(self, inner: LineSampler):
        self.inner = inner

    def _resample_line(self, line: Line2D, count: int) -> Line2D:
        cog = line.center_of_gravity.as_array()
        half = line.direction * (count - 1) / 2.0

        return Line2D(
            begin=Point2D.from_array(cog - half),
            end=Point2D.from_array(cog + half),
        )

    def extract_samples(self, line: Line2D, band: np.ndarray, count: int) -> np.ndarray:
        return self.inner.extract_samples(self._resample_line(line, count), band, count)

    def get_sample_line(self, line: Line2D, band: np.ndarray, count: int) -> Line2D:
        return self.inner.get_sample_line(self._resample_line(line, count), band, count)

    def __repr__(self) -> str:
        return f"UnitStepSampler({type(self.inner).__name__})"
