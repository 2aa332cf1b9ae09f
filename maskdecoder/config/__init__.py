"""Configuration module for maskdecoder."""

from maskdecoder.config.settings import (
    DecoderSettings,
    CompositorSettings,
    PaletteSettings,
    NetworkSettings,
    get_decoder_settings,
    get_compositor_settings,
    get_palette_settings,
    get_network_settings,
)
from maskdecoder.config.constants import (
    OutputMode,
    MergeRule,
    PaletteGrowth,
    ExportFormat,
    DetectionField,
)
from maskdecoder.config.models import (
    BoundingBox,
    Detection,
    DetectedObject,
    InstanceRecord,
    CompositionResult,
    SegmentationOutput,
)

__all__ = [
    "DecoderSettings",
    "CompositorSettings",
    "PaletteSettings",
    "NetworkSettings",
    "get_decoder_settings",
    "get_compositor_settings",
    "get_palette_settings",
    "get_network_settings",
    "OutputMode",
    "MergeRule",
    "PaletteGrowth",
    "ExportFormat",
    "DetectionField",
    "BoundingBox",
    "Detection",
    "DetectedObject",
    "InstanceRecord",
    "CompositionResult",
    "SegmentationOutput",
]
