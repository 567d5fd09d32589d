from __future__ import annotations

from pixelprofile.config import Settings, settings


def test_settings_is_singleton() -> None:
    assert Settings() is settings
    assert Settings() is Settings()


def test_default_search_window_is_wider_than_footprint() -> None:
    assert settings.search.search_samples > settings.profile.nsamples
    assert settings.sampling.strategy == "interpolated"
