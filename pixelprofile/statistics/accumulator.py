"""
Incremental Mean / Covariance Accumulator

Keeps the sufficient statistics of a stream of vectors (count, running mean
and co-moment matrix) using Welford's single-pass update, so memory stays
O(D^2) no matter how many vectors are added and no vector is ever re-read.

For the k-th vector x:
    delta = x - mean_(k-1)
    mean_k = mean_(k-1) + delta / k
    M_k = M_(k-1) + outer(delta, x - mean_k)
    covariance = M_k / (k - 1)
"""

from typing import Optional

import numpy as np

from pixelprofile.statistics.exceptions import DimensionMismatchError, ModelNotTrainedError


class MultivariateStatistics:
    """Running multivariate mean and unbiased covariance estimate."""

    def __init__(self):
        self._count = 0
        self._mean: Optional[np.ndarray] = None
        self._comoment: Optional[np.ndarray] = None

    @property
    def count(self) -> int:
        return self._count

    @property
    def dimension(self) -> Optional[int]:
        """Vector length fixed by the first update, or None before that."""
        return None if self._mean is None else len(self._mean)

    def update(self, vector: np.ndarray) -> None:
        """
        Fold one observation into the statistics.

        Args:
            vector: 1D observation. Its length fixes the dimension on the
                first call and must match it on every later call.

        Raises:
            DimensionMismatchError: Length differs from the fixed dimension
        """
        x = np.asarray(vector, dtype=np.float64).ravel()

        if self._mean is None:
            self._mean = np.zeros(len(x), dtype=np.float64)
            self._comoment = np.zeros((len(x), len(x)), dtype=np.float64)
        elif len(x) != len(self._mean):
            raise DimensionMismatchError(len(self._mean), len(x))

        self._count += 1
        delta = x - self._mean
        self._mean += delta / self._count
        self._comoment += np.outer(delta, x - self._mean)

    def mean(self) -> np.ndarray:
        if self._count == 0:
            raise ModelNotTrainedError("No observations have been added")
        return self._mean.copy()

    def covariance(self) -> np.ndarray:
        """
        Unbiased covariance (divisor N - 1).

        With a single observation the estimate is undefined and every entry
        is NaN; callers that invert it must handle that case.
        """
        if self._count == 0:
            raise ModelNotTrainedError("No observations have been added")

        if self._count == 1:
            return np.full_like(self._comoment, np.nan)

        # M accumulates outer(delta, x - mean) which is only symmetric up to rounding
        covariance = self._comoment / (self._count - 1)
        return (covariance + covariance.T) / 2.0

    def __repr__(self) -> str:
        return f"MultivariateStatistics(count={self._count}, dimension={self.dimension})"
