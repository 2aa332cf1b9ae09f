"""Decoding of raw detection and mask tensors."""

from maskdecoder.decoding.tensor_views import DetectionRow, DetectionTensorView, MaskTensorView
from maskdecoder.decoding.class_names import ClassNames
from maskdecoder.decoding.detection_decoder import DetectionDecoder

__all__ = [
    "DetectionRow",
    "DetectionTensorView",
    "MaskTensorView",
    "ClassNames",
    "DetectionDecoder",
]
