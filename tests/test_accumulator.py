from __future__ import annotations

import itertools

import numpy as np
import pytest

from pixelprofile.statistics import (
    DimensionMismatchError,
    ModelNotTrainedError,
    MultivariateStatistics,
)


def test_repeated_vector_has_zero_covariance() -> None:
    stats = MultivariateStatistics()
    vector = np.array([0.1, 0.4, 0.3, 0.2])
    for _ in range(5):
        stats.update(vector)

    assert stats.count == 5
    np.testing.assert_allclose(stats.mean(), vector)
    np.testing.assert_allclose(stats.covariance(), np.zeros((4, 4)), atol=1e-15)


def test_matches_batch_estimate() -> None:
    rng = np.random.default_rng(7)
    data = rng.normal(size=(40, 3))

    stats = MultivariateStatistics()
    for row in data:
        stats.update(row)

    np.testing.assert_allclose(stats.mean(), data.mean(axis=0))
    np.testing.assert_allclose(stats.covariance(), np.cov(data, rowvar=False))


def test_covariance_is_symmetric() -> None:
    rng = np.random.default_rng(1)
    stats = MultivariateStatistics()
    for row in rng.uniform(size=(10, 5)):
        stats.update(row)

    cov = stats.covariance()
    np.testing.assert_array_equal(cov, cov.T)


def test_order_independence() -> None:
    vectors = [
        np.array([0.2, 0.3, 0.5]),
        np.array([0.1, 0.6, 0.3]),
        np.array([0.4, 0.4, 0.2]),
        np.array([0.3, 0.1, 0.6]),
    ]

    results = []
    for perm in itertools.permutations(vectors):
        stats = MultivariateStatistics()
        for v in perm:
            stats.update(v)
        results.append((stats.mean(), stats.covariance()))

    ref_mean, ref_cov = results[0]
    for mean, cov in results[1:]:
        np.testing.assert_allclose(mean, ref_mean, atol=1e-12)
        np.testing.assert_allclose(cov, ref_cov, atol=1e-12)


def test_dimension_fixed_by_first_update() -> None:
    stats = MultivariateStatistics()
    assert stats.dimension is None

    stats.update([1.0, 2.0, 3.0])
    assert stats.dimension == 3

    with pytest.raises(DimensionMismatchError) as excinfo:
        stats.update([1.0, 2.0])

    assert excinfo.value.expected == 3
    assert excinfo.value.actual == 2
    # failed update leaves the statistics untouched
    assert stats.count == 1
    np.testing.assert_array_equal(stats.mean(), [1.0, 2.0, 3.0])


def test_single_observation_covariance_is_nan() -> None:
    stats = MultivariateStatistics()
    stats.update([0.5, 0.5])
    assert np.all(np.isnan(stats.covariance()))


def test_empty_statistics_raise() -> None:
    stats = MultivariateStatistics()
    with pytest.raises(ModelNotTrainedError):
        stats.mean()
    with pytest.raises(ModelNotTrainedError):
        stats.covariance()
