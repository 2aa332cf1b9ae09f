"""End-to-end decoding of instance-segmentation network outputs."""

from typing import Iterable, Optional, Sequence

import numpy as np

from maskdecoder.compositing import MaskCompositorFactory, build_object_mask
from maskdecoder.config.constants import MergeRule, OutputMode, PaletteGrowth
from maskdecoder.config.models import SegmentationOutput
from maskdecoder.config.settings import (
    CompositorSettings,
    DecoderSettings,
    NetworkSettings,
    PaletteSettings,
    get_compositor_settings,
    get_decoder_settings,
    get_palette_settings,
)
from maskdecoder.decoding import ClassNames, DetectionDecoder, MaskTensorView
from maskdecoder.palette import Palette
from maskdecoder.pipeline.input_size import InputSizeSchedule
from maskdecoder.utils import LogContext, get_logger

_logger = get_logger("pipeline")


class InstanceSegmentationPipeline:
    """
    Turns the detection and mask tensors of one image into objects.

    Orchestrates the complete workflow:
    1. Validate the image extent and the mask tensor
    2. Grow the palette (lazy policy)
    3. Decode detections above the confidence threshold
    4. Resize and binarize each detection's soft mask
    5. Composite into a label image or an instance list

    Each image is processed as one unit: a malformed input raises and no
    partial output is returned. The palette is the only state carried from
    one image to the next.
    """

    def __init__(
        self,
        class_names: Iterable[str] = (),
        decoder_settings: DecoderSettings | None = None,
        compositor_settings: CompositorSettings | None = None,
        palette_settings: PaletteSettings | None = None,
        network_settings: NetworkSettings | None = None,
        palette: Palette | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            class_names: Class-name table indexed by class id.
            decoder_settings: Decoder settings. If None, loads from environment.
            compositor_settings: Compositor settings. If None, loads from environment.
            palette_settings: Palette settings. If None, loads from environment.
            network_settings: Network input settings. If None, loads from environment.
            palette: Palette to share with other pipelines. If None, a new one
                     is created from palette_settings.
        """
        self._decoder_settings = decoder_settings or get_decoder_settings()
        self._compositor_settings = compositor_settings or get_compositor_settings()
        self._palette_settings = palette_settings or get_palette_settings()

        self._decoder = DetectionDecoder(self._decoder_settings)
        self._palette = palette or Palette(settings=self._palette_settings)
        self._input_sizes = InputSizeSchedule(network_settings)
        self._network_input_size: Optional[int] = None

        self._class_names = ClassNames()
        self.set_class_names(class_names)

    @property
    def palette(self) -> Palette:
        """Palette shared across processed images."""
        return self._palette

    @property
    def class_names(self) -> ClassNames:
        """Current class-name table."""
        return self._class_names

    @property
    def output_mode(self) -> OutputMode:
        """Configured output representation."""
        return self._compositor_settings.output_mode

    def set_class_names(self, class_names: Iterable[str]) -> None:
        """
        Replace the class-name table.

        Under the eager palette policy one color per class is generated
        immediately.
        """
        self._class_names = ClassNames(class_names)
        if self._palette_settings.growth == PaletteGrowth.EAGER:
            added = self._palette.extend_for_class_names(self._class_names.as_list())
            _logger.debug(f"Eager palette growth added {added} colors")

    def next_network_input_size(self) -> int:
        """
        Input size the host should feed the network for the next image.

        The value is also reported in the next SegmentationOutput.
        """
        self._network_input_size = self._input_sizes.next_size()
        return self._network_input_size

    def process(
        self,
        detection_tensor: np.ndarray,
        mask_tensor: np.ndarray,
        image_shape: Sequence[int],
    ) -> SegmentationOutput:
        """
        Decode the network outputs of one image.

        Args:
            detection_tensor: Array shaped ``(1, 1, N, F)``.
            mask_tensor: Array shaped ``(N, C, mask_h, mask_w)``.
            image_shape: Shape of the source image; only the first two
                         entries (height, width) are used.

        Returns:
            SegmentationOutput for the image.

        Raises:
            ValueError: If the image extent or either tensor is malformed.
        """
        height, width = self._resolve_image_shape(image_shape)
        mode = self._compositor_settings.output_mode

        with LogContext(_logger, f"decoding {width}x{height} image ({mode.value} mode)") as context:
            mask_view = MaskTensorView(mask_tensor)

            if self._palette_settings.growth == PaletteGrowth.LAZY:
                self._palette.extend_for_mask_tensor(mask_view)

            compositor = MaskCompositorFactory.create(mode, self._compositor_settings)
            compositor.begin((height, width))

            skipped = 0
            for detection in self._decoder.decode(detection_tensor, (height, width)):
                object_mask = build_object_mask(
                    mask_view,
                    detection,
                    self._compositor_settings.mask_threshold,
                )
                if object_mask is None:
                    _logger.debug(
                        f"Skipping detection {detection.index}: degenerate box {detection.box.to_xywh()}"
                    )
                    skipped += 1
                    continue

                class_name = self._class_names.resolve(detection.class_id)
                compositor.add(detection, class_name, object_mask)

            result = compositor.finish()
            _logger.debug(f"Kept {len(result.objects)} objects, skipped {skipped} degenerate boxes")

        network_input_size = self._network_input_size
        self._network_input_size = None

        return SegmentationOutput(
            output_mode=mode,
            image_shape=(height, width),
            objects=result.objects,
            label_image=result.label_image,
            instances=result.instances,
            palette=self._palette.colors,
            processing_time_ms=context.elapsed_ms,
            network_input_size=network_input_size,
        )

    def process_image(
        self,
        detection_tensor: np.ndarray,
        mask_tensor: np.ndarray,
        image: np.ndarray,
    ) -> SegmentationOutput:
        """
        Decode network outputs against the source image they came from.

        Raises:
            ValueError: If the image is missing or empty.
        """
        if image is None:
            raise ValueError("Source image is not available")
        if not isinstance(image, np.ndarray):
            raise ValueError("Image must be a numpy array")
        return self.process(detection_tensor, mask_tensor, image.shape)

    @staticmethod
    def _resolve_image_shape(image_shape: Sequence[int]) -> tuple[int, int]:
        """
        Validate an image shape and reduce it to (height, width).

        Raises:
            ValueError: If the shape is not 2D/3D or has an empty extent.
        """
        if image_shape is None or len(image_shape) not in (2, 3):
            raise ValueError(f"Image must be 2D (grayscale) or 3D (color), got shape {image_shape}")
        height, width = int(image_shape[0]), int(image_shape[1])
        if height <= 0 or width <= 0:
            raise ValueError(f"Image is empty: {height}x{width}")
        return height, width

    def set_output_mode(self, output_mode: OutputMode) -> None:
        """Switch between label-image and instance output."""
        self._update_compositor_settings(output_mode=OutputMode(output_mode))

    def set_merge_rule(self, merge_rule: MergeRule) -> None:
        """Change how overlapping objects are merged in label mode."""
        self._update_compositor_settings(merge_rule=MergeRule(merge_rule))

    def update_thresholds(
        self,
        confidence_threshold: Optional[float] = None,
        mask_threshold: Optional[float] = None,
    ) -> None:
        """
        Update decoding thresholds at runtime.

        Args:
            confidence_threshold: New confidence threshold (None to keep current).
            mask_threshold: New mask threshold (None to keep current).

        Raises:
            pydantic.ValidationError: If a threshold lies outside [0, 1].
        """
        if confidence_threshold is not None:
            self._decoder_settings = DecoderSettings(
                **{**self._decoder_settings.model_dump(), "confidence_threshold": confidence_threshold}
            )
            self._decoder = DetectionDecoder(self._decoder_settings)
        if mask_threshold is not None:
            self._update_compositor_settings(mask_threshold=mask_threshold)

    def _update_compositor_settings(self, **changes) -> None:
        """Rebuild compositor settings with validation."""
        self._compositor_settings = CompositorSettings(
            **{**self._compositor_settings.model_dump(), **changes}
        )
