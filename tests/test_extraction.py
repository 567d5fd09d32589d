from __future__ import annotations

import numpy as np
import pytest

from pixelprofile.geometry import Line2D
from pixelprofile.sampling import NearestNeighbourSampler
from pixelprofile.statistics import (
    DegenerateProfileError,
    extract_bands,
    extract_normalized,
    get_band,
    num_bands,
    normalize_samples,
)


def test_normalized_sums_to_one() -> None:
    rng = np.random.default_rng(3)
    for _ in range(10):
        samples = rng.uniform(0.01, 255.0, size=17)
        assert normalize_samples(samples).sum() == pytest.approx(1.0)


def test_normalize_does_not_modify_input() -> None:
    samples = np.array([1.0, 3.0])
    normalize_samples(samples)
    np.testing.assert_array_equal(samples, [1.0, 3.0])


def test_zero_sum_raises() -> None:
    with pytest.raises(DegenerateProfileError):
        normalize_samples(np.zeros(5))
    with pytest.raises(DegenerateProfileError):
        normalize_samples(np.array([1.0, -1.0]))


def test_band_helpers() -> None:
    gray = np.zeros((4, 5))
    color = np.zeros((4, 5, 3))
    assert num_bands(gray) == 1
    assert num_bands(color) == 3
    assert get_band(gray, 0) is gray
    assert get_band(color, 2).shape == (4, 5)

    with pytest.raises(ValueError):
        num_bands(np.zeros(5))


def test_stacked_profile_is_band_major() -> None:
    image = np.zeros((10, 10, 3), dtype=np.float32)
    image[..., 0] = 1.0
    image[..., 1] = 2.0
    image[..., 2] = 5.0
    line = Line2D.from_coords(2.0, 5.0, 6.0, 5.0)
    sampler = NearestNeighbourSampler()

    bands = extract_bands(image, line, 4, sampler)
    assert bands.shape == (3, 4)

    profile = extract_normalized(image, line, 4, sampler)
    assert profile.shape == (12,)
    assert profile.sum() == pytest.approx(1.0)
    np.testing.assert_allclose(profile[:4], 1.0 / 32.0)
    np.testing.assert_allclose(profile[4:8], 2.0 / 32.0)
    np.testing.assert_allclose(profile[8:], 5.0 / 32.0)
