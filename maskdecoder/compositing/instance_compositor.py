"""Compositor keeping one independent full-frame mask per object."""

from typing import List

import numpy as np

from maskdecoder.compositing.base_compositor import BaseMaskCompositor
from maskdecoder.compositing.object_mask import clip_to_frame
from maskdecoder.config.models import CompositionResult, DetectedObject, InstanceRecord


class InstanceCompositor(BaseMaskCompositor):
    """
    Emits each object as its own full-frame binary mask.

    The box-local mask is assigned into a zeroed frame at the box offset.
    Objects never interact, so overlapping boxes keep their full masks.
    """

    def __init__(self) -> None:
        """Initialize the instance compositor."""
        super().__init__()
        self._instances: List[InstanceRecord] = []

    def _reset(self) -> None:
        """Forget the instances of the previous frame."""
        self._instances = []

    def _place(self, detected: DetectedObject, object_mask: np.ndarray) -> None:
        """Paste the object mask into its own frame-sized canvas."""
        full_mask = np.zeros(self._image_shape, dtype=np.uint8)

        slices = clip_to_frame(detected.box, self._image_shape)
        if slices is not None:
            frame_slices, local_slices = slices
            full_mask[frame_slices] = object_mask[local_slices]

        self._instances.append(
            InstanceRecord(
                object_id=detected.object_id,
                class_id=detected.class_id,
                class_name=detected.class_name,
                confidence=detected.confidence,
                box=detected.box,
                mask=full_mask,
            )
        )

    def _build_result(self, objects: List[DetectedObject]) -> CompositionResult:
        """Return the collected instances."""
        return CompositionResult(objects=objects, instances=list(self._instances))

    def get_name(self) -> str:
        """Get the compositor name."""
        return "Instance Compositor"
