"""Factory for creating mask compositors."""

from maskdecoder.compositing.base_compositor import BaseMaskCompositor
from maskdecoder.compositing.instance_compositor import InstanceCompositor
from maskdecoder.compositing.label_compositor import LabelCompositor
from maskdecoder.config.constants import OutputMode
from maskdecoder.config.settings import CompositorSettings, get_compositor_settings


class MaskCompositorFactory:
    """
    Factory class for creating compositor instances.

    Encapsulates the choice between label-image and per-instance output
    based on the configured output mode.
    """

    @staticmethod
    def create(
        output_mode: OutputMode,
        settings: CompositorSettings | None = None,
    ) -> BaseMaskCompositor:
        """
        Create a compositor for the requested output mode.

        Args:
            output_mode: Output representation to produce.
            settings: Compositor settings. If None, loads from environment.

        Returns:
            Configured compositor instance.

        Raises:
            ValueError: If output_mode is not recognized.
        """
        settings = settings or get_compositor_settings()

        if output_mode == OutputMode.LABEL:
            return LabelCompositor(merge_rule=settings.merge_rule)
        elif output_mode == OutputMode.INSTANCE:
            return InstanceCompositor()
        else:
            raise ValueError(f"Unknown output mode: {output_mode}")

    @staticmethod
    def create_from_settings(settings: CompositorSettings | None = None) -> BaseMaskCompositor:
        """
        Create the compositor named by the settings' output mode.

        Args:
            settings: Compositor settings. If None, loads from environment.

        Returns:
            Configured compositor instance.
        """
        settings = settings or get_compositor_settings()
        return MaskCompositorFactory.create(settings.output_mode, settings)

    @staticmethod
    def get_available_modes() -> list[OutputMode]:
        """
        Get list of supported output modes.

        Returns:
            List of OutputMode values.
        """
        return [OutputMode.LABEL, OutputMode.INSTANCE]
