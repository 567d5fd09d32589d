"""
Statistical Pixel Profile Model

Models the profile of a multi-band image sampled along a line as a
multivariate Gaussian (running mean and covariance) and scores new profiles by
their squared Mahalanobis distance to it.

The model is updateable but never keeps the profiles it has seen: only the
sufficient statistics held by MultivariateStatistics are retained.

Whenever the covariance is singular or badly conditioned the identity matrix
stands in for the inverse covariance and the distance degrades to a squared
Euclidean distance from the mean. That happens while the model has seen no
more profiles than the profile has dimensions, and always for models trained
only on L1-normalized profiles: their components sum to 1, so the covariance
is rank-deficient however many profiles are added.
"""

import logging
from enum import Enum

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from pixelprofile.config.settings import ProfileConfig
from pixelprofile.geometry.models import Line2D, Point2D, distance
from pixelprofile.sampling.line_sampler import LineSampler
from pixelprofile.statistics.accumulator import MultivariateStatistics
from pixelprofile.statistics.base import PixelProfileModel
from pixelprofile.statistics.exceptions import DimensionMismatchError
from pixelprofile.statistics.extraction import (
    extract_bands,
    extract_normalized,
    get_band,
    normalize_samples,
)

logger = logging.getLogger(__name__)


class ModelState(Enum):
    UNTRAINED = "untrained"
    TRAINED = "trained"


def invert_or_identity(
    matrix: np.ndarray, max_condition_number: float
) -> tuple[np.ndarray, bool]:
    """
    Invert a square matrix, falling back to the identity.

    The fallback is used when the matrix has non-finite entries or its
    condition number exceeds `max_condition_number` (singular or close to it).

    Args:
        matrix: (D, D) matrix
        max_condition_number: Largest condition number accepted as invertible

    Returns:
        Tuple of (inverse, inverted)
        - inverse: (D, D) inverse, or the (D, D) identity on fallback
        - inverted: False when the identity was substituted
    """
    identity = np.eye(matrix.shape[0], dtype=np.float64)

    if not np.all(np.isfinite(matrix)):
        return identity, False

    # cond() reports inf for exactly singular matrices
    if not np.linalg.cond(matrix) <= max_condition_number:
        return identity, False

    try:
        return np.linalg.inv(matrix), True
    except np.linalg.LinAlgError:
        return identity, False


class StatisticalProfileModel(PixelProfileModel):
    """
    Gaussian model of the profile along one tracked line.

    Profiles are `nsamples` samples per band, stacked band-major and
    L1-normalized (see extraction.py), so a model of an image with C bands has
    dimension D = nsamples * C. D is fixed by the first update.

    Mean and inverse covariance are cached and only re-derived from the
    statistics on the first query after an update.

    Not thread-safe: a model must not be updated concurrently with itself or
    with a query. Separate models share nothing and can be used from
    separate threads.
    """

    def __init__(
        self,
        nsamples: int,
        sampler: LineSampler,
        max_condition_number: float = ProfileConfig.max_condition_number,
    ):
        """
        Args:
            nsamples: Samples per band along the model's footprint (>= 1)
            sampler: Line sampling strategy (shared, never modified)
            max_condition_number: Covariance matrices with a larger condition
                number are treated as singular
        """
        if nsamples < 1:
            raise ValueError(f"nsamples must be >= 1, got {nsamples}")

        self._nsamples = nsamples
        self._sampler = sampler
        self.max_condition_number = max_condition_number
        self._statistics = MultivariateStatistics()

        self._stale = True
        self._mean = None
        self._covariance = None
        self._inv_covariance = None

        logger.debug(
            "StatisticalProfileModel created: nsamples=%d, sampler=%r", nsamples, sampler
        )

    @classmethod
    def from_config(
        cls, config: ProfileConfig, sampler: LineSampler
    ) -> "StatisticalProfileModel":
        return cls(config.nsamples, sampler, max_condition_number=config.max_condition_number)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def number_of_samples(self) -> int:
        return self._nsamples

    @property
    def sampler(self) -> LineSampler:
        return self._sampler

    @property
    def count(self) -> int:
        """Number of profiles the model has been trained with."""
        return self._statistics.count

    @property
    def state(self) -> ModelState:
        return ModelState.TRAINED if self._statistics.count > 0 else ModelState.UNTRAINED

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def update(self, image: np.ndarray, line: Line2D) -> None:
        """
        Add the profile of `image` along `line` to the model.

        Raises:
            DegenerateProfileError: The sampled profile sums to zero
            DimensionMismatchError: The image has a different band count
                than the images the model was trained with
        """
        self.update_vector(extract_normalized(image, line, self._nsamples, self._sampler))

    def update_vector(self, vector: np.ndarray) -> None:
        """Add an already extracted, normalized profile vector to the model."""
        self._statistics.update(vector)
        self._stale = True

        logger.debug("Profile model updated: count=%d", self._statistics.count)

    # ------------------------------------------------------------------
    # Derived statistics
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        if not self._stale:
            return

        self._mean = self._statistics.mean()
        self._covariance = self._statistics.covariance()
        self._inv_covariance, inverted = invert_or_identity(
            self._covariance, self.max_condition_number
        )

        if not inverted:
            logger.debug(
                "Covariance not invertible (count=%d, dimension=%d), using identity",
                self._statistics.count,
                len(self._mean),
            )

        self._stale = False

    def mean(self) -> np.ndarray:
        self._refresh()
        return self._mean.copy()

    def covariance(self) -> np.ndarray:
        self._refresh()
        return self._covariance.copy()

    def inverse_covariance(self) -> np.ndarray:
        self._refresh()
        return self._inv_covariance.copy()

    # ------------------------------------------------------------------
    # Distances
    # ------------------------------------------------------------------

    def mahalanobis(self, vector: np.ndarray) -> float:
        """
        Squared Mahalanobis distance of a profile vector to the model.

        Args:
            vector: Normalized profile of length D

        Returns:
            (v - mean)^T @ inv_covariance @ (v - mean), no square root taken

        Raises:
            DimensionMismatchError: len(vector) != D
            ModelNotTrainedError: The model has no observations yet
        """
        self._refresh()

        v = np.asarray(vector, dtype=np.float64).ravel()
        if len(v) != len(self._mean):
            raise DimensionMismatchError(len(self._mean), len(v))

        centered = v - self._mean
        return float(centered @ self._inv_covariance @ centered)

    def mahalanobis_image(self, image: np.ndarray, line: Line2D) -> float:
        """Squared Mahalanobis distance of the profile along `line` in `image`."""
        return self.mahalanobis(extract_normalized(image, line, self._nsamples, self._sampler))

    def cost(self, image: np.ndarray, line: Line2D) -> float:
        return self.mahalanobis_image(image, line)

    # ------------------------------------------------------------------
    # Windowed search
    # ------------------------------------------------------------------

    def mahalanobis_windowed(self, per_band_window: np.ndarray) -> np.ndarray:
        """
        Score the model at every offset of a wider sampling window.

        Each offset takes `nsamples` consecutive samples from every band,
        stacks them band-major and normalizes them on their own (the
        normalization of the full window is irrelevant).

        The caller is responsible for the window having the same sampling
        rate as the profiles the model was trained on.

        Offsets whose samples sum to zero (flat regions under a derivative
        sampler, for example) cannot be normalized and score np.inf, so they
        never win the search.

        Args:
            per_band_window: (num_bands, L) samples with L >= nsamples

        Returns:
            (L - nsamples + 1,) distances, index i for the window starting
            at sample i
        """
        window = np.asarray(per_band_window, dtype=np.float64)
        if window.ndim != 2:
            raise ValueError(f"per_band_window must be (num_bands, L), got shape {window.shape}")

        length = window.shape[1]
        if length < self._nsamples:
            raise ValueError(
                f"Window of {length} samples is shorter than the model footprint ({self._nsamples})"
            )

        # (num_bands, num_offsets, nsamples) view, no copy
        windows = sliding_window_view(window, self._nsamples, axis=1)
        num_offsets = windows.shape[1]

        responses = np.empty(num_offsets, dtype=np.float64)
        for i in range(num_offsets):
            samples = windows[:, i, :].ravel()
            total = samples.sum()
            if total == 0.0 or not np.isfinite(total):
                responses[i] = np.inf
                continue
            responses[i] = self.mahalanobis(normalize_samples(samples))

        return responses

    def mahalanobis_windowed_image(
        self, image: np.ndarray, line: Line2D, num_samples: int
    ) -> np.ndarray:
        """Sample `num_samples` points per band along `line` and score every offset."""
        return self.mahalanobis_windowed(extract_bands(image, line, num_samples, self._sampler))

    def best_position(self, image: np.ndarray, line: Line2D, num_samples: int) -> Point2D:
        """
        Best-matching position of the model footprint within a wider window.

        If the centered offset scores exactly as well as the best offset the
        line's center of gravity is returned unchanged, so a flat response
        never makes the position drift.

        Args:
            image: Image to search in
            line: Search line, centered on the current position
            num_samples: Samples per band along the search window
                (>= nsamples)

        Returns:
            Center of the best-matching footprint in image coordinates
        """
        responses = self.mahalanobis_windowed_image(image, line, num_samples)

        min_idx = int(np.argmin(responses))
        offset = (num_samples - self._nsamples) // 2

        if responses[offset] == responses[min_idx]:
            return line.center_of_gravity

        # The sampler may have re-parameterized the line, so measure along the line it used
        sample_line = self._sampler.get_sample_line(line, get_band(image, 0), num_samples)

        dx_step = (sample_line.end.x - sample_line.begin.x) / (num_samples - 1)
        dy_step = (sample_line.end.y - sample_line.begin.y) / (num_samples - 1)

        return Point2D(
            sample_line.begin.x + (min_idx + offset) * dx_step,
            sample_line.begin.y + (min_idx + offset) * dy_step,
        )

    def movement_distance(
        self, image: np.ndarray, line: Line2D, num_samples: int, point: Point2D
    ) -> float:
        """
        How far `point` lies from the center of the search window.

        Returns:
            2 * |cog(sample_line) - point| / length(sample_line), which is
            in [0, 1] for points inside the window
        """
        sample_line = self._sampler.get_sample_line(line, get_band(image, 0), num_samples)
        offset = distance(sample_line.center_of_gravity, point)

        if sample_line.length == 0.0:
            return 0.0 if offset == 0.0 else float("inf")

        return 2.0 * offset / sample_line.length

    def __repr__(self) -> str:
        if self._statistics.count == 0:
            return f"StatisticalProfileModel(nsamples={self._nsamples}, count=0)"

        return (
            f"StatisticalProfileModel(\n"
            f"  nsamples={self._nsamples},\n"
            f"  count={self._statistics.count},\n"
            f"  mean={np.array2string(self.mean(), precision=4)},\n"
            f"  covariance={np.array2string(self.covariance(), precision=4)}\n"
            f")"
        )
