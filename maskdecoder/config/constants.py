"""Enum constants and type definitions for maskdecoder."""

from enum import Enum, IntEnum


class OutputMode(str, Enum):
    """Output representations produced by the mask compositor."""

    LABEL = "label"
    INSTANCE = "instance"


class MergeRule(str, Enum):
    """How overlapping detections are merged into a label image."""

    BITWISE_OR = "bitwise_or"
    LAST_WRITER = "last_writer"
    HIGHEST_CONFIDENCE = "highest_confidence"


class PaletteGrowth(str, Enum):
    """When the class color palette is extended."""

    EAGER = "eager"
    LAZY = "lazy"


class ExportFormat(str, Enum):
    """Supported export formats for results."""

    PNG = "png"
    NPY = "npy"
    JSON = "json"
    CSV = "csv"


class DetectionField(IntEnum):
    """Column index of each value in a detection tensor row."""

    CLASS_ID = 1
    CONFIDENCE = 2
    LEFT = 3
    TOP = 4
    RIGHT = 5
    BOTTOM = 6


BACKGROUND_COLOR = (0, 0, 0)
