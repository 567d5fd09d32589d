"""
Profile Search

Iteratively moves a line to where its profile model matches best.

Each step asks the model for the best position within a `search_samples`
window along the current line, re-centers the line on it, and stops once the
movement distance (relative to half the window span) falls below the
convergence threshold.
"""

import logging

import numpy as np

from pixelprofile.config.settings import SearchConfig
from pixelprofile.geometry.models import Line2D
from pixelprofile.search.models import SearchResult
from pixelprofile.statistics.base import PixelProfileModel

logger = logging.getLogger(__name__)


class ProfileSearch:
    """Refines line positions against a trained profile model."""

    def __init__(self, model: PixelProfileModel, config: SearchConfig):
        """
        Args:
            model: Trained profile model
            config: SearchConfig with window size and stopping criteria
        """
        if config.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {config.max_iterations}")

        self.model = model
        self.config = config

    def refine(self, image: np.ndarray, line: Line2D) -> SearchResult:
        """
        Refine the position of a line in an image.

        Args:
            image: Image to search in
            line: Initial line, centered on the current estimate

        Returns:
            SearchResult with the final point and line
        """
        num_samples = self.config.search_samples
        current = line
        movement = float("inf")

        for iteration in range(1, self.config.max_iterations + 1):
            point = self.model.best_position(image, current, num_samples)
            movement = self.model.movement_distance(image, current, num_samples, point)
            current = current.centered_at(point)

            logger.debug(
                "Search step %d: point=(%.2f, %.2f), movement=%.3f",
                iteration,
                point.x,
                point.y,
                movement,
            )

            if movement < self.config.convergence_threshold:
                return SearchResult(
                    point=point,
                    line=current,
                    iterations=iteration,
                    movement=movement,
                    converged=True,
                )

        logger.debug(
            "Search did not converge after %d iterations (movement=%.3f)",
            self.config.max_iterations,
            movement,
        )

        return SearchResult(
            point=current.center_of_gravity,
            line=current,
            iterations=self.config.max_iterations,
            movement=movement,
            converged=False,
        )
