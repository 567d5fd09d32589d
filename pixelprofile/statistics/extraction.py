"""
Profile Extraction

Builds profile vectors from multi-band images.

A profile stacks the samples of every band along a line, band-major
(b0 b0 b0 ... b1 b1 b1 ... b2 ...), and is L1-normalized (divided by its sum)
so that models are insensitive to global brightness and contrast changes.

Images are numpy arrays: (H, W) for a single band, (H, W, C) for C bands.
"""

from typing import Iterator

import numpy as np

from pixelprofile.geometry.models import Line2D
from pixelprofile.sampling.line_sampler import LineSampler
from pixelprofile.statistics.exceptions import DegenerateProfileError


def num_bands(image: np.ndarray) -> int:
    if image.ndim == 2:
        return 1
    if image.ndim == 3:
        return image.shape[2]
    raise ValueError(f"image must be (H, W) or (H, W, C), got shape {image.shape}")


def get_band(image: np.ndarray, index: int) -> np.ndarray:
    if image.ndim == 2:
        if index != 0:
            raise IndexError(f"band index {index} out of range for single-band image")
        return image
    return image[:, :, index]


def iter_bands(image: np.ndarray) -> Iterator[np.ndarray]:
    for index in range(num_bands(image)):
        yield get_band(image, index)


def normalize_samples(samples: np.ndarray) -> np.ndarray:
    """
    L1-normalize a sample vector (divide by its sum).

    Args:
        samples: 1D sample vector

    Returns:
        New float64 vector summing to 1

    Raises:
        DegenerateProfileError: Sum is zero or not finite
    """
    samples = np.asarray(samples, dtype=np.float64)
    total = samples.sum()

    if total == 0.0 or not np.isfinite(total):
        raise DegenerateProfileError(
            f"Cannot normalize profile with sum {total} (length {len(samples)})"
        )

    return samples / total


def extract_bands(
    image: np.ndarray, line: Line2D, count: int, sampler: LineSampler
) -> np.ndarray:
    """
    Sample every band of an image along a line.

    Returns:
        (num_bands, count) array of raw (unnormalized) samples
    """
    return np.stack([sampler.extract_samples(line, band, count) for band in iter_bands(image)])


def extract_normalized(
    image: np.ndarray, line: Line2D, count: int, sampler: LineSampler
) -> np.ndarray:
    """
    Extract the stacked, L1-normalized profile of an image along a line.

    Args:
        image: (H, W) or (H, W, C) image
        line: Line to sample along
        count: Samples per band
        sampler: Line sampling strategy

    Returns:
        (count * num_bands,) band-major profile vector summing to 1
    """
    return normalize_samples(extract_bands(image, line, count, sampler).ravel())
