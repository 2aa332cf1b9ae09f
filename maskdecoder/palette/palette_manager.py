"""Class color palette shared across frames."""

import threading
from typing import List, Sequence, Tuple

import numpy as np

from maskdecoder.config.constants import BACKGROUND_COLOR
from maskdecoder.config.settings import PaletteSettings, get_palette_settings
from maskdecoder.decoding.tensor_views import MaskTensorView
from maskdecoder.utils import get_logger

_logger = get_logger("palette")

Color = Tuple[int, int, int]


class Palette:
    """
    Growable table of RGB colors indexed by ``class_id + 1``.

    Index 0 is reserved for background and is always black. Colors are
    drawn uniformly over 0-255 per channel from a seeded generator, so two
    palettes created with the same seed and grown to the same size hold
    identical colors regardless of how the growth was split into calls.
    Entries are never reassigned or removed.

    Growth is serialized by an internal lock, which makes a single palette
    safe to share between hosts processing images on several threads.
    """

    def __init__(self, seed: int | None = None, settings: PaletteSettings | None = None) -> None:
        """
        Initialize the palette with only the background color.

        Args:
            seed: Seed for color generation. Overrides the settings value.
            settings: Palette settings. If None, loads from environment.
        """
        self._settings = settings or get_palette_settings()
        self._seed = self._settings.seed if seed is None else seed
        self._rng = np.random.default_rng(self._seed)
        self._colors: List[Color] = [BACKGROUND_COLOR]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._colors)

    @property
    def seed(self) -> int:
        """Seed the color generator was created with."""
        return self._seed

    @property
    def colors(self) -> List[Color]:
        """Snapshot of the current colors."""
        with self._lock:
            return list(self._colors)

    def ensure_size(self, num_classes: int) -> int:
        """
        Make room for ``num_classes`` classes plus background.

        Args:
            num_classes: Number of class ids (0 .. num_classes - 1) to cover.

        Returns:
            Number of colors added.
        """
        required = num_classes + 1
        with self._lock:
            missing = required - len(self._colors)
            if missing <= 0:
                return 0
            for _ in range(missing):
                channels = self._rng.integers(0, 256, size=3)
                self._colors.append((int(channels[0]), int(channels[1]), int(channels[2])))

        _logger.debug(f"Palette grown by {missing} to {required} colors")
        return missing

    def extend_for_class_names(self, class_names: Sequence[str]) -> int:
        """Eagerly add one color per known class name."""
        return self.ensure_size(len(class_names))

    def extend_for_mask_tensor(self, mask_view: MaskTensorView) -> int:
        """Lazily add colors for every class channel of a mask tensor."""
        return self.ensure_size(mask_view.num_classes)

    def color_for(self, class_id: int) -> Color:
        """
        Get the color of a class, growing the palette if needed.

        Raises:
            ValueError: If class_id is negative.
        """
        if class_id < 0:
            raise ValueError(f"class_id must be non-negative, got {class_id}")
        self.ensure_size(class_id + 1)
        with self._lock:
            return self._colors[class_id + 1]

    def as_array(self) -> np.ndarray:
        """Return the palette as a ``(N, 3)`` uint8 array."""
        with self._lock:
            return np.array(self._colors, dtype=np.uint8).reshape(-1, 3)
