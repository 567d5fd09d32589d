"""
Line Sampling Module

Strategies for sampling a single-band raster along a line segment.

Components:
- line_sampler: LineSampler base class and concrete strategies
- factory: SamplingStrategy enum and create_sampler()

Usage:
    from pixelprofile.sampling import create_sampler

    sampler = create_sampler(settings.sampling)
    samples = sampler.extract_samples(line, image[..., 0], 11)
"""

from pixelprofile.sampling.line_sampler import (
    LineSampler,
    NearestNeighbourSampler,
    InterpolatedSampler,
    InterpolatedDerivativeSampler,
    UnitStepSampler,
)
from pixelprofile.sampling.factory import SamplingStrategy, create_sampler

__all__ = [
    "LineSampler",
    "NearestNeighbourSampler",
    "InterpolatedSampler",
    "InterpolatedDerivativeSampler",
    "UnitStepSampler",
    "SamplingStrategy",
    "create_sampler",
]
