"""Compositing of binarized object masks into output representations."""

from maskdecoder.compositing.object_mask import build_object_mask, clip_to_frame
from maskdecoder.compositing.base_compositor import BaseMaskCompositor
from maskdecoder.compositing.label_compositor import LabelCompositor
from maskdecoder.compositing.instance_compositor import InstanceCompositor
from maskdecoder.compositing.compositor_factory import MaskCompositorFactory

__all__ = [
    "build_object_mask",
    "clip_to_frame",
    "BaseMaskCompositor",
    "LabelCompositor",
    "InstanceCompositor",
    "MaskCompositorFactory",
]
