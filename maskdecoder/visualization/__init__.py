"""Visualization of decoded objects."""

from maskdecoder.visualization.overlay import (
    colorize_label_image,
    draw_objects,
    format_object_label,
    render_output,
)

__all__ = [
    "colorize_label_image",
    "draw_objects",
    "format_object_label",
    "render_output",
]
