"""Decoder turning detection tensor rows into pixel-space detections."""

from typing import Iterator, Sequence

import numpy as np

from maskdecoder.config.models import BoundingBox, Detection
from maskdecoder.config.settings import DecoderSettings, get_decoder_settings
from maskdecoder.decoding.tensor_views import DetectionRow, DetectionTensorView
from maskdecoder.utils import get_logger

_logger = get_logger("decoding")


class DetectionDecoder:
    """
    Walks a detection tensor and yields the rows above the confidence threshold.

    Rows are visited in ascending index order, which is also the order in
    which objects are composited and reported downstream. Boxes are scaled
    from normalized coordinates to pixels but not clamped to the image.
    """

    def __init__(self, settings: DecoderSettings | None = None) -> None:
        """
        Initialize the decoder.

        Args:
            settings: Decoder settings. If None, loads from environment.
        """
        self._settings = settings or get_decoder_settings()

    @property
    def confidence_threshold(self) -> float:
        """Minimum confidence (exclusive) for a row to be kept."""
        return self._settings.confidence_threshold

    def decode(
        self,
        detection_tensor: np.ndarray,
        image_shape: Sequence[int],
    ) -> Iterator[Detection]:
        """
        Decode the detection tensor of one image.

        The tensor layout is validated before the iterator is returned, so a
        malformed tensor fails the whole image before any detection is seen.

        Args:
            detection_tensor: Array shaped ``(1, 1, N, F)``.
            image_shape: (height, width) of the source image.

        Returns:
            Lazy iterator of accepted detections.

        Raises:
            ValueError: If the tensor layout or image shape is invalid.
        """
        view = DetectionTensorView(detection_tensor)
        height, width = int(image_shape[0]), int(image_shape[1])
        if height <= 0 or width <= 0:
            raise ValueError(f"Image dimensions must be positive, got {height}x{width}")

        _logger.debug(f"Decoding {view.num_detections} candidate detections")
        return self._iter_detections(view, height, width)

    def _iter_detections(
        self,
        view: DetectionTensorView,
        height: int,
        width: int,
    ) -> Iterator[Detection]:
        """Yield accepted rows in index order."""
        threshold = self._settings.confidence_threshold

        for row in view.rows():
            if not row.confidence > threshold:
                continue
            yield self._to_detection(row, height, width)

    @staticmethod
    def _to_detection(row: DetectionRow, height: int, width: int) -> Detection:
        """
        Convert a raw row to a pixel-space detection.

        Raises:
            ValueError: If the row carries a negative class id.
        """
        if row.class_id < 0:
            raise ValueError(f"Detection {row.index} has negative class id {row.class_id}")

        left = row.left * width
        top = row.top * height
        right = row.right * width
        bottom = row.bottom * height

        box = BoundingBox(
            left=int(round(left)),
            top=int(round(top)),
            width=int(round(right - left)) + 1,
            height=int(round(bottom - top)) + 1,
        )

        return Detection(
            index=row.index,
            class_id=int(row.class_id),
            confidence=row.confidence,
            box=box,
        )
