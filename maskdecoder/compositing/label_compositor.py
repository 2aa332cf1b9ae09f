"""Compositor flattening all object masks into one label image."""

from typing import List, Optional

import numpy as np

from maskdecoder.compositing.base_compositor import BaseMaskCompositor
from maskdecoder.compositing.object_mask import clip_to_frame
from maskdecoder.config.constants import MergeRule
from maskdecoder.config.models import CompositionResult, DetectedObject
from maskdecoder.utils import get_logger

_logger = get_logger("compositing.label")

LABEL_DTYPE = np.uint16


class LabelCompositor(BaseMaskCompositor):
    """
    Merges every object into a single-channel label image.

    Foreground pixels of an object are labeled ``class_id + 1`` so that 0
    stays background. Where objects overlap, the merge rule decides:

    - ``bitwise_or``: labels are OR-ed together. Overlapping objects of
      different classes can produce values that are not valid labels.
    - ``last_writer``: the later detection in tensor order wins.
    - ``highest_confidence``: the more confident detection wins; ties keep
      the earlier one.
    """

    def __init__(self, merge_rule: MergeRule = MergeRule.HIGHEST_CONFIDENCE) -> None:
        """
        Initialize the label compositor.

        Args:
            merge_rule: Policy for pixels claimed by more than one object.
        """
        super().__init__()
        self._merge_rule = MergeRule(merge_rule)
        self._label_image: Optional[np.ndarray] = None
        self._confidence_map: Optional[np.ndarray] = None

    @property
    def merge_rule(self) -> MergeRule:
        """Active merge rule."""
        return self._merge_rule

    def _reset(self) -> None:
        """Release the label image of the previous frame."""
        self._label_image = None
        self._confidence_map = None

    def _ensure_label_image(self) -> np.ndarray:
        """Allocate the background-initialized label image on first use."""
        if self._label_image is None:
            self._label_image = np.zeros(self._image_shape, dtype=LABEL_DTYPE)
            if self._merge_rule == MergeRule.HIGHEST_CONFIDENCE:
                self._confidence_map = np.full(self._image_shape, -np.inf, dtype=np.float32)
        return self._label_image

    def _place(self, detected: DetectedObject, object_mask: np.ndarray) -> None:
        """Merge the object's class label into the label image."""
        label_image = self._ensure_label_image()

        slices = clip_to_frame(detected.box, self._image_shape)
        if slices is None:
            _logger.debug(f"Object {detected.object_id} lies outside the frame, nothing placed")
            return
        frame_slices, local_slices = slices

        foreground = object_mask[local_slices] > 0
        label = detected.class_id + 1
        region = label_image[frame_slices]

        if self._merge_rule == MergeRule.BITWISE_OR:
            patch = np.where(foreground, label, 0).astype(LABEL_DTYPE)
            np.bitwise_or(region, patch, out=region)
        elif self._merge_rule == MergeRule.LAST_WRITER:
            region[foreground] = label
        else:
            confidence_region = self._confidence_map[frame_slices]
            wins = foreground & (detected.confidence > confidence_region)
            region[wins] = label
            confidence_region[wins] = detected.confidence

    def _build_result(self, objects: List[DetectedObject]) -> CompositionResult:
        """Return the label image, allocating an empty one if nothing was placed."""
        label_image = self._ensure_label_image()
        return CompositionResult(objects=objects, label_image=label_image)

    def get_name(self) -> str:
        """Get the compositor name."""
        return "Label Compositor"
