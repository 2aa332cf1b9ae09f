"""Measurement table exporter for decoded objects."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from maskdecoder.config.constants import ExportFormat
from maskdecoder.config.models import DetectedObject, SegmentationOutput
from maskdecoder.export.base_exporter import BaseExporter

MEASUREMENT_COLUMNS = [
    "object_id",
    "class_id",
    "class_name",
    "confidence",
    "left",
    "top",
    "width",
    "height",
]


class MeasurementExporter(BaseExporter):
    """
    Exports one measurement row per object to JSON and CSV formats.

    Each row records the object's confidence and bounding box, keyed by
    the object id and class name.
    """

    def export(
        self,
        data: SegmentationOutput,
        output_path: Path,
        format: ExportFormat = ExportFormat.CSV,
    ) -> Path:
        """
        Export the measurements of a single segmentation output.

        Args:
            data: SegmentationOutput to export.
            output_path: Output file path (suffix replaced by the format).
            format: Export format (JSON or CSV).

        Returns:
            Path to the exported file.

        Raises:
            ValueError: If the format is not supported.
        """
        output_path = self._prepare_path(output_path, format)

        if format == ExportFormat.JSON:
            return self._export_as_json(data, output_path)
        return self._export_as_csv(data, output_path)

    def to_dataframe(self, objects: Sequence[DetectedObject]) -> pd.DataFrame:
        """
        Build the measurement table.

        Args:
            objects: Decoded objects in detection order.

        Returns:
            DataFrame with one row per object and MEASUREMENT_COLUMNS columns.
        """
        rows = [self._object_to_dict(obj) for obj in objects]
        return pd.DataFrame(rows, columns=MEASUREMENT_COLUMNS)

    def _export_as_json(self, output: SegmentationOutput, path: Path) -> Path:
        """Export measurements as JSON."""
        output_path = path.with_suffix(".json")

        data = {
            "generated_at": datetime.now().isoformat(),
            "output_mode": output.output_mode.value,
            "image_height": output.image_shape[0],
            "image_width": output.image_shape[1],
            "processing_time_ms": output.processing_time_ms,
            "objects": [self._object_to_dict(obj) for obj in output.objects],
        }

        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

        return output_path

    def _export_as_csv(self, output: SegmentationOutput, path: Path) -> Path:
        """Export measurements as CSV."""
        output_path = path.with_suffix(".csv")

        df = self.to_dataframe(output.objects)
        df.to_csv(output_path, index=False)

        return output_path

    def _object_to_dict(self, obj: DetectedObject) -> Dict[str, Any]:
        """Flatten an object into a measurement row."""
        return {
            "object_id": obj.object_id,
            "class_id": obj.class_id,
            "class_name": obj.class_name,
            "confidence": obj.confidence,
            "left": obj.box.left,
            "top": obj.box.top,
            "width": obj.box.width,
            "height": obj.box.height,
        }

    def get_supported_formats(self) -> List[str]:
        """Get supported formats."""
        return [ExportFormat.JSON.value, ExportFormat.CSV.value]
