"""Decode instance-segmentation network outputs into labeled objects."""

from maskdecoder.config import (
    BoundingBox,
    CompositorSettings,
    DecoderSettings,
    DetectedObject,
    Detection,
    InstanceRecord,
    MergeRule,
    NetworkSettings,
    OutputMode,
    PaletteGrowth,
    PaletteSettings,
    SegmentationOutput,
)
from maskdecoder.decoding import ClassNames, DetectionDecoder
from maskdecoder.palette import Palette
from maskdecoder.pipeline import InstanceSegmentationPipeline

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "CompositorSettings",
    "DecoderSettings",
    "DetectedObject",
    "Detection",
    "InstanceRecord",
    "MergeRule",
    "NetworkSettings",
    "OutputMode",
    "PaletteGrowth",
    "PaletteSettings",
    "SegmentationOutput",
    "ClassNames",
    "DetectionDecoder",
    "Palette",
    "InstanceSegmentationPipeline",
]
