"""Shared fixtures for the maskdecoder tests."""

import pytest

from maskdecoder.config import (
    CompositorSettings,
    DecoderSettings,
    NetworkSettings,
    OutputMode,
    PaletteSettings,
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Keep MASKDECODER_* variables and stray .env files out of the settings."""
    import os

    for key in list(os.environ):
        if key.startswith("MASKDECODER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def decoder_settings() -> DecoderSettings:
    return DecoderSettings(confidence_threshold=0.5)


@pytest.fixture
def label_settings() -> CompositorSettings:
    return CompositorSettings(mask_threshold=0.3, output_mode=OutputMode.LABEL)


@pytest.fixture
def instance_settings() -> CompositorSettings:
    return CompositorSettings(mask_threshold=0.3, output_mode=OutputMode.INSTANCE)


@pytest.fixture
def palette_settings() -> PaletteSettings:
    return PaletteSettings(seed=0)


@pytest.fixture
def network_settings() -> NetworkSettings:
    return NetworkSettings()
