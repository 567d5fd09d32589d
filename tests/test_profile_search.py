from __future__ import annotations

import cv2
import numpy as np
import pytest

from pixelprofile.config import SamplingConfig, SearchConfig
from pixelprofile.geometry import Line2D, Point2D
from pixelprofile.sampling import create_sampler
from pixelprofile.search import ProfileSearch
from pixelprofile.statistics import StatisticalProfileModel


def _unit_step_model(nsamples: int = 11) -> StatisticalProfileModel:
    sampler = create_sampler(SamplingConfig(strategy="interpolated", unit_step=True))
    return StatisticalProfileModel(nsamples, sampler)


def test_refine_follows_shifted_edge(edge_image, horizontal_line) -> None:
    model = _unit_step_model()
    model.update(edge_image(50), horizontal_line)

    search = ProfileSearch(model, SearchConfig(search_samples=21, convergence_threshold=0.1))
    result = search.refine(edge_image(53), horizontal_line)

    assert result.converged
    assert result.iterations == 2
    assert result.point.x == pytest.approx(53.0)
    assert result.point.y == pytest.approx(50.0)
    assert result.line.center_of_gravity == result.point
    assert result.movement == 0.0


def test_refine_keeps_position_when_already_aligned(edge_image, horizontal_line) -> None:
    model = _unit_step_model()
    model.update(edge_image(50), horizontal_line)

    result = ProfileSearch(model, SearchConfig()).refine(edge_image(50), horizontal_line)

    assert result.converged
    assert result.iterations == 1
    assert result.point == horizontal_line.center_of_gravity


def test_refine_stops_at_iteration_cap(edge_image, horizontal_line) -> None:
    model = _unit_step_model()
    model.update(edge_image(50), horizontal_line)

    config = SearchConfig(search_samples=21, convergence_threshold=0.1, max_iterations=1)
    result = ProfileSearch(model, config).refine(edge_image(53), horizontal_line)

    assert not result.converged
    assert result.iterations == 1
    assert result.movement == pytest.approx(0.3)
    assert result.point == Point2D(53.0, 50.0)


def test_rejects_non_positive_iteration_cap() -> None:
    with pytest.raises(ValueError):
        ProfileSearch(_unit_step_model(), SearchConfig(max_iterations=0))


def test_color_blob_tracking_across_frames() -> None:
    """Train on a colored bar and relocate it after it moves."""

    def make_frame(x: int) -> np.ndarray:
        frame = np.full((120, 160, 3), (40, 40, 40), dtype=np.uint8)
        cv2.rectangle(frame, (x, 0), (x + 6, 119), (30, 90, 220), -1)
        return frame

    model = _unit_step_model(nsamples=15)
    line = Line2D.from_coords(73.0, 60.0, 87.0, 60.0)
    for _ in range(3):
        model.update(make_frame(77), line)

    assert model.mean().shape == (45,)

    result = ProfileSearch(model, SearchConfig(search_samples=29)).refine(make_frame(82), line)
    assert result.converged
    assert result.point.x == pytest.approx(85.0)
    assert result.point.y == pytest.approx(60.0)
