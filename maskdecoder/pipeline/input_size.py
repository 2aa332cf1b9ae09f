"""Network input size schedule."""

from maskdecoder.config.settings import NetworkSettings, get_network_settings


class InputSizeSchedule:
    """
    Supplies the square input size to feed the network for each frame.

    With ``alternate_input_size`` off, the base size is always returned.
    With it on, successive frames alternate between ``base + step`` and
    ``base - step`` so an inference backend never sees two consecutive
    calls with the same input shape.
    """

    def __init__(self, settings: NetworkSettings | None = None) -> None:
        """
        Initialize the schedule.

        Args:
            settings: Network settings. If None, loads from environment.
        """
        self._settings = settings or get_network_settings()
        self._sign = 1

    def peek(self) -> int:
        """Input size the next frame will use, without advancing."""
        if not self._settings.alternate_input_size:
            return self._settings.input_size
        return self._settings.input_size + self._sign * self._settings.input_size_step

    def next_size(self) -> int:
        """Input size for the next frame; flips the offset when alternating."""
        size = self.peek()
        if self._settings.alternate_input_size:
            self._sign *= -1
        return size
