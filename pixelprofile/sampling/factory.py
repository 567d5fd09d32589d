import logging
from enum import Enum

from pixelprofile.config.settings import SamplingConfig
from pixelprofile.sampling.line_sampler import (
    InterpolatedDerivativeSampler,
    InterpolatedSampler,
    LineSampler,
    NearestNeighbourSampler,
    UnitStepSampler,
)

logger = logging.getLogger(__name__)


class SamplingStrategy(str, Enum):
    NEAREST_NEIGHBOUR = "nearest_neighbour"
    INTERPOLATED = "interpolated"
    INTERPOLATED_DERIVATIVE = "interpolated_derivative"


_SAMPLERS = {
    SamplingStrategy.NEAREST_NEIGHBOUR: NearestNeighbourSampler,
    SamplingStrategy.INTERPOLATED: InterpolatedSampler,
    SamplingStrategy.INTERPOLATED_DERIVATIVE: InterpolatedDerivativeSampler,
}


def create_sampler(config: SamplingConfig) -> LineSampler:
    """
    Build the line sampler described by a SamplingConfig.

    Args:
        config: SamplingConfig with strategy name and unit_step flag

    Returns:
        Sampler instance, wrapped in UnitStepSampler when unit_step is set

    Raises:
        ValueError: Unknown strategy name
    """
    try:
        strategy = SamplingStrategy(config.strategy)
    except ValueError:
        valid = ", ".join(s.value for s in SamplingStrategy)
        raise ValueError(
            f"Unknown sampling strategy: {config.strategy!r} (expected one of: {valid})"
        ) from None

    sampler = _SAMPLERS[strategy]()
    if config.unit_step:
        sampler = UnitStepSampler(sampler)

    logger.info("Created line sampler: strategy=%s, unit_step=%s", strategy.value, config.unit_step)

    return sampler
