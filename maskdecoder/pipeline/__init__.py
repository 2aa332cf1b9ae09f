"""Per-image decoding pipeline."""

from maskdecoder.pipeline.input_size import InputSizeSchedule
from maskdecoder.pipeline.segmentation_pipeline import InstanceSegmentationPipeline

__all__ = ["InputSizeSchedule", "InstanceSegmentationPipeline"]
