"""
Geometry Data Models

Defines the 2D value types that profile lines are expressed in.

Key Types:
- Point2D: Point in floating-point image coordinates (x = column, y = row)
- Line2D: Directed line segment between two points
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def distance_to(self, other: "Point2D") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, coords: np.ndarray) -> "Point2D":
        return cls(x=float(coords[0]), y=float(coords[1]))


def distance(p1: Point2D, p2: Point2D) -> float:
    """Euclidean distance between two points."""
    return p1.distance_to(p2)


@dataclass(frozen=True)
class Line2D:
    """
    Directed line segment in image coordinates.

    A profile is sampled from `begin` towards `end`, so the direction of the
    segment matters for the order of the samples.

    Attributes:
        begin: First endpoint (first sample position)
        end: Second endpoint (last sample position)
    """

    begin: Point2D
    end: Point2D

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Line2D":
        return cls(begin=Point2D(x1, y1), end=Point2D(x2, y2))

    @property
    def center_of_gravity(self) -> Point2D:
        return Point2D(
            (self.begin.x + self.end.x) / 2.0, (self.begin.y + self.end.y) / 2.0
        )

    @property
    def length(self) -> float:
        return self.begin.distance_to(self.end)

    @property
    def direction(self) -> np.ndarray:
        """Unit vector from begin to end, or zeros for a degenerate line."""
        delta = self.end.as_array() - self.begin.as_array()
        norm = np.linalg.norm(delta)
        if norm < 1e-12:
            return np.zeros(2, dtype=np.float64)
        return delta / norm

    def translated(self, dx: float, dy: float) -> "Line2D":
        return Line2D(
            begin=Point2D(self.begin.x + dx, self.begin.y + dy),
            end=Point2D(self.end.x + dx, self.end.y + dy),
        )

    def centered_at(self, point: Point2D) -> "Line2D":
        """Same segment moved so its center of gravity lies on `point`."""
        cog = self.center_of_gravity
        return self.translated(point.x - cog.x, point.y - cog.y)

    def points(self, count: int) -> np.ndarray:
        """
        Evenly spaced positions along the segment.

        Args:
            count: Number of positions (>= 1). A single position is the
                center of gravity.

        Returns:
            (count, 2) array of (x, y) coordinates, first row at `begin`
            and last row at `end`
        """
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")

        if count == 1:
            return self.center_of_gravity.as_array()[np.newaxis, :]

        t = np.linspace(0.0, 1.0, count)[:, np.newaxis]
        begin = self.begin.as_array()
        return begin + t * (self.end.as_array() - begin)
