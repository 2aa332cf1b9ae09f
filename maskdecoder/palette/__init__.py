"""Class color palette management."""

from maskdecoder.palette.palette_manager import Color, Palette

__all__ = ["Color", "Palette"]
