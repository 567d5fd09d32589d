"""
Configuration Module

Centralizes all configurable parameters.
"""

from pixelprofile.config.settings import (
    settings,
    Settings,
    SamplingConfig,
    ProfileConfig,
    SearchConfig,
)

__all__ = [
    "settings",
    "Settings",
    "SamplingConfig",
    "ProfileConfig",
    "SearchConfig",
]
