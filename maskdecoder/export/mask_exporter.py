"""Mask exporter for saving label images and instance masks."""

from pathlib import Path
from typing import List

import cv2
import numpy as np

from maskdecoder.config.constants import ExportFormat
from maskdecoder.config.models import SegmentationOutput
from maskdecoder.export.base_exporter import BaseExporter


class MaskExporter(BaseExporter):
    """
    Exports segmentation outputs to image or numpy formats.

    Supports:
    - PNG: The label image (or flattened instances) as a 16-bit grayscale image
    - NPY: Numpy archive with masks, class ids, confidences and boxes
    """

    def export(
        self,
        data: SegmentationOutput,
        output_path: Path,
        format: ExportFormat = ExportFormat.PNG,
    ) -> Path:
        """
        Export the masks of a single segmentation output.

        Args:
            data: Segmentation output to export.
            output_path: Base path for output (extension replaced).
            format: Export format (PNG or NPY).

        Returns:
            Path to the exported file.

        Raises:
            ValueError: If the format is not supported.
        """
        output_path = self._prepare_path(output_path, format)

        if format == ExportFormat.PNG:
            return self._export_as_png(data, output_path)
        return self._export_as_npy(data, output_path)

    def _export_as_png(
        self,
        output: SegmentationOutput,
        base_path: Path,
    ) -> Path:
        """
        Export the combined mask as a PNG image.

        Args:
            output: Segmentation output.
            base_path: Base path (extension added).

        Returns:
            Path to the PNG file.

        Raises:
            RuntimeError: If OpenCV fails to write the file.
        """
        output_path = base_path.with_suffix(".png")

        combined = output.get_combined_mask().astype(np.uint16)
        if not cv2.imwrite(str(output_path), combined):
            raise RuntimeError(f"Failed to write mask image: {output_path}")

        return output_path

    def _export_as_npy(
        self,
        output: SegmentationOutput,
        base_path: Path,
    ) -> Path:
        """
        Export masks and object metadata as a numpy archive.

        Args:
            output: Segmentation output.
            base_path: Base path (extension added).

        Returns:
            Path to the NPZ file.
        """
        output_path = base_path.with_suffix(".npz")
        height, width = output.image_shape

        if output.instances:
            masks = np.stack([instance.mask for instance in output.instances])
        else:
            masks = np.zeros((0, height, width), dtype=np.uint8)

        np.savez(
            output_path,
            masks=masks,
            label_image=output.get_combined_mask(),
            class_ids=np.array([obj.class_id for obj in output.objects], dtype=np.int64),
            confidences=np.array([obj.confidence for obj in output.objects], dtype=np.float32),
            boxes=np.array([obj.box.to_xywh() for obj in output.objects], dtype=np.int64).reshape(-1, 4),
            processing_time_ms=output.processing_time_ms,
        )

        return output_path

    def get_supported_formats(self) -> List[str]:
        """Get supported formats."""
        return [ExportFormat.PNG.value, ExportFormat.NPY.value]
