"""Conversion of a per-class soft mask into a box-sized binary mask."""

from typing import Optional

import cv2
import numpy as np

from maskdecoder.config.models import BoundingBox, Detection
from maskdecoder.decoding.tensor_views import MaskTensorView


def build_object_mask(
    mask_view: MaskTensorView,
    detection: Detection,
    mask_threshold: float,
) -> Optional[np.ndarray]:
    """
    Resize a detection's soft mask to its box and binarize it.

    The soft mask predicted for the detection's own class is resized with
    bilinear interpolation to exactly ``(box.width, box.height)``; a pixel
    is foreground iff the resized value is strictly above the threshold.

    Args:
        mask_view: Validated view of the mask tensor.
        detection: Detection whose mask is wanted.
        mask_threshold: Binarization threshold.

    Returns:
        uint8 array of shape ``(box.height, box.width)`` with values 0/1, or
        None when the box has no positive extent.

    Raises:
        ValueError: If the mask tensor has no slice for the detection.
    """
    box = detection.box
    if box.is_degenerate:
        return None

    soft_mask = mask_view.soft_mask(detection.index, detection.class_id)
    resized = cv2.resize(
        soft_mask,
        (box.width, box.height),
        interpolation=cv2.INTER_LINEAR,
    )

    return (resized > mask_threshold).astype(np.uint8)


def clip_to_frame(
    box: BoundingBox,
    image_shape: tuple[int, int],
) -> Optional[tuple[tuple[slice, slice], tuple[slice, slice]]]:
    """
    Compute the part of a box that lies inside the image.

    Args:
        box: Box in pixel coordinates, possibly extending past the frame.
        image_shape: (height, width) of the frame.

    Returns:
        ``(frame_slices, local_slices)`` pairs of (row, col) slices into the
        frame and into the box-local mask, or None if nothing overlaps.
    """
    height, width = image_shape
    x0 = max(box.left, 0)
    y0 = max(box.top, 0)
    x1 = min(box.right, width)
    y1 = min(box.bottom, height)

    if x1 <= x0 or y1 <= y0:
        return None

    frame_slices = (slice(y0, y1), slice(x0, x1))
    local_slices = (
        slice(y0 - box.top, y1 - box.top),
        slice(x0 - box.left, x1 - box.left),
    )
    return frame_slices, local_slices
