from abc import ABC, abstractmethod

import numpy as np

from pixelprofile.geometry.models import Line2D, Point2D


class PixelProfileModel(ABC):
    """
    Capabilities a profile model offers to a higher-level fitting framework.

    A fitting framework trains one model per landmark line, then on each new
    image asks every model for a better position of its line and uses the
    movement distance to decide when the fit has converged.
    """

    @abstractmethod
    def update(self, image: np.ndarray, line: Line2D) -> None:
        """Add the profile of `image` along `line` to the model."""

    @abstractmethod
    def cost(self, image: np.ndarray, line: Line2D) -> float:
        """Dissimilarity between the model and the profile along `line` (lower is better)."""

    @abstractmethod
    def best_position(self, image: np.ndarray, line: Line2D, num_samples: int) -> Point2D:
        """Best-matching position for the model within a `num_samples` window along `line`."""

    @abstractmethod
    def movement_distance(
        self, image: np.ndarray, line: Line2D, num_samples: int, point: Point2D
    ) -> float:
        """Distance of `point` from the window center, relative to half the window span."""
