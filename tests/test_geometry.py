from __future__ import annotations

import numpy as np
import pytest

from pixelprofile.geometry import Line2D, Point2D, distance


def test_center_of_gravity_and_length() -> None:
    line = Line2D.from_coords(0.0, 0.0, 6.0, 8.0)
    assert line.center_of_gravity == Point2D(3.0, 4.0)
    assert line.length == pytest.approx(10.0)


def test_distance() -> None:
    assert distance(Point2D(1.0, 1.0), Point2D(4.0, 5.0)) == pytest.approx(5.0)


def test_points_span_endpoints() -> None:
    line = Line2D.from_coords(2.0, 10.0, 12.0, 10.0)
    pts = line.points(11)
    assert pts.shape == (11, 2)
    np.testing.assert_allclose(pts[:, 0], np.arange(2.0, 13.0))
    np.testing.assert_allclose(pts[:, 1], 10.0)


def test_single_point_is_center() -> None:
    line = Line2D.from_coords(0.0, 0.0, 4.0, 2.0)
    np.testing.assert_allclose(line.points(1), [[2.0, 1.0]])


def test_points_rejects_zero_count() -> None:
    with pytest.raises(ValueError):
        Line2D.from_coords(0.0, 0.0, 1.0, 1.0).points(0)


def test_centered_at_keeps_shape() -> None:
    line = Line2D.from_coords(45.0, 50.0, 55.0, 50.0)
    moved = line.centered_at(Point2D(53.0, 48.0))
    assert moved.center_of_gravity == Point2D(53.0, 48.0)
    assert moved.length == pytest.approx(line.length)


def test_direction_of_degenerate_line_is_zero() -> None:
    line = Line2D.from_coords(3.0, 3.0, 3.0, 3.0)
    np.testing.assert_array_equal(line.direction, [0.0, 0.0])
