from __future__ import annotations

from typing import Optional

import numpy as np
import pytest

from pixelprofile.geometry import Line2D
from pixelprofile.sampling import LineSampler


class StubSampler(LineSampler):
    """Returns preset samples regardless of the image, for exact control over responses."""

    def __init__(self, samples: np.ndarray, sample_line: Optional[Line2D] = None) -> None:
        self.samples = np.asarray(samples, dtype=np.float64)
        self.sample_line = sample_line
        self.calls: list[tuple[Line2D, int]] = []

    def extract_samples(self, line: Line2D, band: np.ndarray, count: int) -> np.ndarray:
        self.calls.append((line, count))
        return self.samples[:count].copy()

    def get_sample_line(self, line: Line2D, band: np.ndarray, count: int) -> Line2D:
        return self.sample_line if self.sample_line is not None else line


@pytest.fixture
def horizontal_line() -> Line2D:
    return Line2D.from_coords(45.0, 50.0, 55.0, 50.0)


@pytest.fixture
def edge_image():
    """Builds a 100x100 single-band image with a vertical step edge at column `edge_x`."""

    def _make(edge_x: int, low: float = 10.0, high: float = 200.0) -> np.ndarray:
        image = np.full((100, 100), low, dtype=np.float32)
        image[:, edge_x:] = high
        return image

    return _make
