class ProfileModelError(Exception):
    """Base class for profile model errors."""


class DimensionMismatchError(ProfileModelError, ValueError):
    """Vector length differs from the dimension fixed by the first update."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Dimension mismatch: expected length {expected}, got {actual}")


class DegenerateProfileError(ProfileModelError, ValueError):
    """Profile cannot be L1-normalized (zero or non-finite sum)."""


class ModelNotTrainedError(ProfileModelError, RuntimeError):
    """Statistics were requested before any observation was added."""
