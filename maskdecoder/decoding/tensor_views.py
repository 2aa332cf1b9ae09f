"""Validated views over the raw network output tensors."""

from typing import Iterator, NamedTuple

import numpy as np

from maskdecoder.config.constants import DetectionField

_MIN_DETECTION_FIELDS = max(DetectionField) + 1


class DetectionRow(NamedTuple):
    """Raw values of one detection tensor row, box still normalized."""

    index: int
    class_id: float
    confidence: float
    left: float
    top: float
    right: float
    bottom: float


class DetectionTensorView:
    """
    Named-field accessor over a ``[1, 1, N, F]`` detection tensor.

    The layout is checked once on construction; afterwards rows are read by
    field name rather than by raw integer offsets.
    """

    def __init__(self, tensor: np.ndarray) -> None:
        """
        Wrap a detection tensor.

        Args:
            tensor: Float array shaped ``(1, 1, num_detections, fields)``.

        Raises:
            ValueError: If the tensor is missing or its layout is malformed.
        """
        if tensor is None:
            raise ValueError("Detection tensor is missing")

        array = np.asarray(tensor, dtype=np.float32)
        if array.ndim != 4:
            raise ValueError(
                f"Detection tensor must have 4 dimensions [1, 1, N, F], got shape {array.shape}"
            )
        if array.shape[0] != 1 or array.shape[1] != 1:
            raise ValueError(
                f"Detection tensor must have batch and group size 1, got shape {array.shape}"
            )
        if array.shape[3] < _MIN_DETECTION_FIELDS:
            raise ValueError(
                f"Detection tensor rows need at least {_MIN_DETECTION_FIELDS} fields, "
                f"got {array.shape[3]}"
            )

        self._rows = array[0, 0]

    @property
    def num_detections(self) -> int:
        """Number of rows in the tensor."""
        return self._rows.shape[0]

    def value(self, index: int, field: DetectionField) -> float:
        """Read a single field of a row."""
        return float(self._rows[index, field])

    def row(self, index: int) -> DetectionRow:
        """Read all named fields of a row."""
        values = self._rows[index]
        return DetectionRow(
            index=index,
            class_id=float(values[DetectionField.CLASS_ID]),
            confidence=float(values[DetectionField.CONFIDENCE]),
            left=float(values[DetectionField.LEFT]),
            top=float(values[DetectionField.TOP]),
            right=float(values[DetectionField.RIGHT]),
            bottom=float(values[DetectionField.BOTTOM]),
        )

    def rows(self) -> Iterator[DetectionRow]:
        """Iterate rows in ascending index order."""
        for index in range(self.num_detections):
            yield self.row(index)


class MaskTensorView:
    """Accessor over a ``[N, C, H, W]`` tensor of per-class soft masks."""

    def __init__(self, tensor: np.ndarray) -> None:
        """
        Wrap a mask tensor.

        Raises:
            ValueError: If the tensor is missing or not 4-dimensional.
        """
        if tensor is None:
            raise ValueError("Mask tensor is missing")

        array = np.asarray(tensor, dtype=np.float32)
        if array.ndim != 4:
            raise ValueError(
                f"Mask tensor must have 4 dimensions [N, C, H, W], got shape {array.shape}"
            )
        if array.shape[2] <= 0 or array.shape[3] <= 0:
            raise ValueError(f"Mask tensor has an empty spatial extent: {array.shape}")

        self._masks = array

    @property
    def num_detections(self) -> int:
        """Number of detections the tensor holds masks for."""
        return self._masks.shape[0]

    @property
    def num_classes(self) -> int:
        """Number of class channels per detection."""
        return self._masks.shape[1]

    @property
    def mask_shape(self) -> tuple[int, int]:
        """(rows, cols) of a single soft mask."""
        return (self._masks.shape[2], self._masks.shape[3])

    def soft_mask(self, index: int, class_id: int) -> np.ndarray:
        """
        Get the soft mask predicted for one detection and class.

        Raises:
            ValueError: If the detection index or class id is out of range.
        """
        if not 0 <= index < self.num_detections:
            raise ValueError(
                f"Mask tensor holds {self.num_detections} detections, index {index} requested"
            )
        if not 0 <= class_id < self.num_classes:
            raise ValueError(
                f"Mask tensor holds {self.num_classes} classes, class {class_id} requested"
            )
        return np.ascontiguousarray(self._masks[index, class_id])
