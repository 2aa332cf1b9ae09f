"""Abstract base class for exporters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List

from maskdecoder.config.constants import ExportFormat


class BaseExporter(ABC):
    """
    Abstract base class for segmentation output exporters.

    Each exporter supports a fixed set of formats and writes one file per
    call, choosing the extension from the format.
    """

    @abstractmethod
    def export(self, data: Any, output_path: Path, format: ExportFormat) -> Path:
        """
        Export data to a file.

        Args:
            data: Data to export.
            output_path: Base path for the output file.
            format: Export format.

        Returns:
            Path to the exported file.
        """
        pass

    @abstractmethod
    def get_supported_formats(self) -> List[str]:
        """List the format values accepted by export()."""
        pass

    def _prepare_path(self, output_path: Path | str, format: ExportFormat) -> Path:
        """
        Check the format and create the output directory.

        Raises:
            ValueError: If the exporter does not support the format.
        """
        if ExportFormat(format).value not in self.get_supported_formats():
            raise ValueError(f"Unsupported format: {format}")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        return output_path
