from dataclasses import dataclass


@dataclass
class SamplingConfig:
    """Line sampling configuration."""

    strategy: str = "interpolated"  # "nearest_neighbour", "interpolated", "interpolated_derivative"
    unit_step: bool = False  # Re-parameterize lines so consecutive samples are 1 pixel apart


@dataclass
class ProfileConfig:
    """Statistical profile model configuration."""

    nsamples: int = 11  # Samples per band along the model's own footprint
    max_condition_number: float = 1e12  # Above this, covariance is treated as singular


@dataclass
class SearchConfig:
    """Windowed search / refinement loop configuration."""

    search_samples: int = 21  # Samples per band along the wider search window
    convergence_threshold: float = 0.1  # Stop when movement distance drops below this
    max_iterations: int = 10  # Hard cap on refinement iterations per line


class Settings:
    """
    Root settings container with Singleton Pattern.

    Sub-configurations:
    - sampling: Line sampler strategy
    - profile: Profile model footprint and inversion tolerance
    - search: Windowed search and refinement loop
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration only once.
        Subsequent calls to __init__ are ignored due to _initialized flag.
        """
        if Settings._initialized:
            return

        self.sampling = SamplingConfig()
        self.profile = ProfileConfig()
        self.search = SearchConfig()

        Settings._initialized = True


# Singleton instance - all modules import this same object
settings = Settings()


if __name__ == "__main__":
    """Print configuration: python -m pixelprofile.config.settings"""
    import logging

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s | %(levelname)-7s | %(message)s"
    )
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("Profile Model Configuration")
    logger.info("=" * 60)
    logger.info("Sampling:")
    logger.info("  Strategy: %s", settings.sampling.strategy)
    logger.info("  Unit step: %s", settings.sampling.unit_step)
    logger.info("")
    logger.info("Profile:")
    logger.info("  Samples per band: %d", settings.profile.nsamples)
    logger.info("  Max condition number: %.1e", settings.profile.max_condition_number)
    logger.info("")
    logger.info("Search:")
    logger.info("  Search samples: %d", settings.search.search_samples)
    logger.info("  Convergence threshold: %.3f", settings.search.convergence_threshold)
    logger.info("  Max iterations: %d", settings.search.max_iterations)
    logger.info("=" * 60)
