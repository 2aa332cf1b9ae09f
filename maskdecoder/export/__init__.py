"""Export module for measurements and masks."""

from maskdecoder.export.base_exporter import BaseExporter
from maskdecoder.export.mask_exporter import MaskExporter
from maskdecoder.export.measurement_exporter import MeasurementExporter

__all__ = ["BaseExporter", "MaskExporter", "MeasurementExporter"]
