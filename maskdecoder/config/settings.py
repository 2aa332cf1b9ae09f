"""Pydantic settings classes for maskdecoder configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from maskdecoder.config.constants import MergeRule, OutputMode, PaletteGrowth


def _check_unit_interval(value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Threshold must lie in [0, 1], got {value}")
    return value


class DecoderSettings(BaseSettings):
    """Configuration for decoding the detection tensor."""

    model_config = SettingsConfigDict(
        env_prefix="MASKDECODER_DECODER_",
        env_file=".env",
        extra="ignore",
    )

    confidence_threshold: float = 0.5

    @field_validator("confidence_threshold")
    @classmethod
    def _validate_threshold(cls, value: float) -> float:
        """Reject thresholds outside [0, 1]."""
        return _check_unit_interval(value)


class CompositorSettings(BaseSettings):
    """Configuration for mask binarization and compositing."""

    model_config = SettingsConfigDict(
        env_prefix="MASKDECODER_COMPOSITOR_",
        env_file=".env",
        extra="ignore",
    )

    mask_threshold: float = 0.3
    output_mode: OutputMode = OutputMode.LABEL
    merge_rule: MergeRule = MergeRule.HIGHEST_CONFIDENCE

    @field_validator("mask_threshold")
    @classmethod
    def _validate_threshold(cls, value: float) -> float:
        """Reject thresholds outside [0, 1]."""
        return _check_unit_interval(value)


class PaletteSettings(BaseSettings):
    """Configuration for class color generation."""

    model_config = SettingsConfigDict(
        env_prefix="MASKDECODER_PALETTE_",
        env_file=".env",
        extra="ignore",
    )

    seed: int = 0
    growth: PaletteGrowth = PaletteGrowth.LAZY


class NetworkSettings(BaseSettings):
    """
    Configuration of the network input size reported to the host.

    Some inference backends cache state per input shape and fail when
    consecutive calls reuse it; ``alternate_input_size`` makes successive
    frames alternate between ``input_size + step`` and ``input_size - step``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASKDECODER_NETWORK_",
        env_file=".env",
        extra="ignore",
    )

    input_size: int = 800
    alternate_input_size: bool = False
    input_size_step: int = 32

    @field_validator("input_size", "input_size_step")
    @classmethod
    def _validate_positive(cls, value: int) -> int:
        """Sizes must be positive."""
        if value <= 0:
            raise ValueError(f"Size must be positive, got {value}")
        return value


@lru_cache
def get_decoder_settings() -> DecoderSettings:
    """Get cached decoder settings instance."""
    return DecoderSettings()


@lru_cache
def get_compositor_settings() -> CompositorSettings:
    """Get cached compositor settings instance."""
    return CompositorSettings()


@lru_cache
def get_palette_settings() -> PaletteSettings:
    """Get cached palette settings instance."""
    return PaletteSettings()


@lru_cache
def get_network_settings() -> NetworkSettings:
    """Get cached network settings instance."""
    return NetworkSettings()
