"""Rendering helpers for decoded objects."""

from typing import Iterable, List, Optional

import cv2
import numpy as np

from maskdecoder.config.models import DetectedObject, InstanceRecord, SegmentationOutput
from maskdecoder.palette import Palette

_FONT = cv2.FONT_HERSHEY_SIMPLEX
_FONT_SCALE = 0.4
_TEXT_OFFSET = 5


def format_object_label(obj: DetectedObject) -> str:
    """Caption shown next to an object, e.g. ``"person : 0.912345"``."""
    return f"{obj.class_name} : {obj.confidence:.6f}"


def colorize_label_image(label_image: np.ndarray, palette: Palette) -> np.ndarray:
    """
    Map a label image to RGB using the palette.

    Labels with no palette entry (possible with the bitwise-or merge rule)
    are rendered black.
    """
    lut = palette.as_array()
    colored = np.zeros((*label_image.shape, 3), dtype=np.uint8)
    valid = label_image < len(lut)
    colored[valid] = lut[label_image[valid]]
    return colored


def draw_objects(
    image: np.ndarray,
    objects: Iterable[DetectedObject],
    palette: Palette,
    instances: Optional[List[InstanceRecord]] = None,
    alpha: float = 0.5,
) -> np.ndarray:
    """
    Draw boxes, captions and optional instance masks onto a copy of an image.

    Args:
        image: RGB image the objects were decoded from.
        objects: Objects to draw.
        palette: Palette giving each class its color.
        instances: Optional instance masks blended over the image.
        alpha: Opacity of the mask overlay.

    Returns:
        Annotated RGB image.
    """
    overlay = image.copy()
    if overlay.ndim == 2:
        overlay = cv2.cvtColor(overlay, cv2.COLOR_GRAY2RGB)

    for instance in instances or []:
        color = np.array(palette.color_for(instance.class_id))
        mask_bool = instance.mask > 0
        overlay[mask_bool] = (
            (1 - alpha) * overlay[mask_bool] + alpha * color
        ).astype(np.uint8)

    for obj in objects:
        color = palette.color_for(obj.class_id)
        left, top, right, bottom = obj.box.to_xyxy()
        cv2.rectangle(overlay, (left, top), (right - 1, bottom - 1), color, 1)
        cv2.putText(
            overlay,
            format_object_label(obj),
            (left + _TEXT_OFFSET, top + _TEXT_OFFSET),
            _FONT,
            _FONT_SCALE,
            color,
            1,
            cv2.LINE_AA,
        )

    return overlay


def render_output(image: np.ndarray, output: SegmentationOutput, palette: Palette) -> np.ndarray:
    """Render a segmentation output over its source image."""
    if output.label_image is not None:
        colored = colorize_label_image(output.label_image, palette)
        labeled = output.label_image > 0
        blended = image.copy()
        if blended.ndim == 2:
            blended = cv2.cvtColor(blended, cv2.COLOR_GRAY2RGB)
        blended[labeled] = (0.5 * blended[labeled] + 0.5 * colored[labeled]).astype(np.uint8)
        return draw_objects(blended, output.objects, palette)

    return draw_objects(image, output.objects, palette, instances=output.instances)
