"""Abstract base class for mask compositors."""

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from maskdecoder.config.models import CompositionResult, DetectedObject, Detection


class BaseMaskCompositor(ABC):
    """
    Abstract base class for output sinks of binarized object masks.

    A compositor collects the masks of one frame in detection order and
    turns them into a single output representation. Every accepted
    detection is recorded as a DetectedObject regardless of the
    representation, so rendering and measurement consumers see the same
    metadata in both modes.

    Usage per frame: ``begin`` once, ``add`` for each detection, ``finish``.
    """

    def __init__(self) -> None:
        """Initialize the compositor with no frame in progress."""
        self._image_shape: Optional[tuple[int, int]] = None
        self._objects: List[DetectedObject] = []

    def begin(self, image_shape: tuple[int, int]) -> None:
        """
        Start a new frame, discarding any previous state.

        Args:
            image_shape: (height, width) of the source image.

        Raises:
            ValueError: If either dimension is not positive.
        """
        height, width = int(image_shape[0]), int(image_shape[1])
        if height <= 0 or width <= 0:
            raise ValueError(f"Image dimensions must be positive, got {height}x{width}")
        self._image_shape = (height, width)
        self._objects = []
        self._reset()

    def add(
        self,
        detection: Detection,
        class_name: str,
        object_mask: np.ndarray,
    ) -> DetectedObject:
        """
        Place one detection's box-local binary mask.

        Args:
            detection: The accepted detection.
            class_name: Resolved name of the detection's class.
            object_mask: Box-sized 0/1 mask from ``build_object_mask``.

        Returns:
            The recorded object metadata.

        Raises:
            RuntimeError: If ``begin`` has not been called.
            ValueError: If the mask does not match the detection's box.
        """
        self._ensure_started()

        expected = (detection.box.height, detection.box.width)
        if object_mask.shape != expected:
            raise ValueError(
                f"Object mask shape {object_mask.shape} does not match box extent {expected}"
            )

        detected = DetectedObject(
            object_id=detection.index,
            class_id=detection.class_id,
            class_name=class_name,
            confidence=detection.confidence,
            box=detection.box,
        )
        self._place(detected, object_mask)
        self._objects.append(detected)
        return detected

    def finish(self) -> CompositionResult:
        """
        Close the current frame.

        Returns:
            CompositionResult with the objects and the composited output.
        """
        self._ensure_started()
        return self._build_result(list(self._objects))

    @property
    def image_shape(self) -> Optional[tuple[int, int]]:
        """(height, width) of the frame in progress."""
        return self._image_shape

    @abstractmethod
    def _reset(self) -> None:
        """Drop any per-frame buffers."""
        pass

    @abstractmethod
    def _place(self, detected: DetectedObject, object_mask: np.ndarray) -> None:
        """
        Write a box-local mask into the output representation.

        Args:
            detected: Metadata of the object being placed.
            object_mask: Box-sized 0/1 mask.
        """
        pass

    @abstractmethod
    def _build_result(self, objects: List[DetectedObject]) -> CompositionResult:
        """Assemble the output of the frame."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get the name of this compositor.

        Returns:
            Human-readable name for the compositor.
        """
        pass

    def _ensure_started(self) -> None:
        """
        Ensure a frame is in progress.

        Raises:
            RuntimeError: If begin() was never called.
        """
        if self._image_shape is None:
            raise RuntimeError(f"{self.get_name()} has no frame in progress. Call begin() first.")
