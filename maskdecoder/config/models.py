"""Pydantic data models for maskdecoder."""

from typing import List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator

from maskdecoder.config.constants import OutputMode


class NumpyArrayModel(BaseModel):
    """Base model that allows numpy arrays as fields."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class BoundingBox(BaseModel):
    """Represents a bounding box in pixel coordinates."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.left + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.top + self.height

    @property
    def area(self) -> int:
        """Calculate box area in pixels."""
        return max(self.width, 0) * max(self.height, 0)

    @property
    def is_degenerate(self) -> bool:
        """True when the box has no positive extent."""
        return self.width <= 0 or self.height <= 0

    def to_xywh(self) -> tuple[int, int, int, int]:
        """Return as (left, top, width, height) tuple."""
        return (self.left, self.top, self.width, self.height)

    def to_xyxy(self) -> tuple[int, int, int, int]:
        """Return as (left, top, right, bottom) tuple."""
        return (self.left, self.top, self.right, self.bottom)


class Detection(BaseModel):
    """One accepted row of the detection tensor."""

    index: int
    class_id: int
    confidence: float
    box: BoundingBox


class DetectedObject(BaseModel):
    """Per-object metadata exposed to rendering and measurement consumers."""

    object_id: int
    class_id: int
    class_name: str
    confidence: float
    box: BoundingBox


class InstanceRecord(NumpyArrayModel):
    """A detected object with its own full-frame binary mask."""

    object_id: int
    class_id: int
    class_name: str
    confidence: float
    box: BoundingBox
    mask: np.ndarray

    @field_validator("mask", mode="before")
    @classmethod
    def _validate_mask(cls, value: np.ndarray) -> np.ndarray:
        """Validate that the mask is a 2D numpy array."""
        if not isinstance(value, np.ndarray):
            raise ValueError("Mask must be a numpy array")
        if value.ndim != 2:
            raise ValueError("Mask must be 2D")
        return value

    @property
    def pixel_count(self) -> int:
        """Number of foreground pixels."""
        return int(np.count_nonzero(self.mask))

    def to_object(self) -> DetectedObject:
        """Drop the mask and keep the metadata."""
        return DetectedObject(
            object_id=self.object_id,
            class_id=self.class_id,
            class_name=self.class_name,
            confidence=self.confidence,
            box=self.box,
        )


class CompositionResult(NumpyArrayModel):
    """What a compositor hands back after the last detection of a frame."""

    objects: List[DetectedObject]
    label_image: Optional[np.ndarray] = None
    instances: List[InstanceRecord] = []


class SegmentationOutput(NumpyArrayModel):
    """Result of decoding the network outputs of a single image."""

    output_mode: OutputMode
    image_shape: Tuple[int, int]
    objects: List[DetectedObject]
    label_image: Optional[np.ndarray] = None
    instances: List[InstanceRecord] = []
    palette: List[Tuple[int, int, int]]
    processing_time_ms: float = 0.0
    network_input_size: Optional[int] = None

    @property
    def object_count(self) -> int:
        """Get the number of decoded objects."""
        return len(self.objects)

    def get_combined_mask(self) -> np.ndarray:
        """
        Flatten the output into a single image of object indices.

        In label mode the label image is returned unchanged. In instance
        mode each instance is painted with ``position + 1`` in detection
        order, later instances overwriting earlier ones.
        """
        if self.label_image is not None:
            return self.label_image
        combined = np.zeros(self.image_shape, dtype=np.uint16)
        for i, instance in enumerate(self.instances):
            combined[instance.mask > 0] = i + 1
        return combined
