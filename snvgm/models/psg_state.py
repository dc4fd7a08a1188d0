"""PSGState model - complete SN76489 state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ..psg.utils import PRESCALER, attenuation_to_amplitude, period_to_frequency
from .psg_channel import NoiseChannel, SoundChannel, SquareChannel

logger = logging.getLogger(__name__)

NOISE_CHANNEL = 3


def _default_channels() -> List[SoundChannel]:
    tones = [SquareChannel(), SquareChannel(), SquareChannel()]
    # Noise mode 3 follows tone channel 2
    return [*tones, NoiseChannel(tone_source=tones[2])]


@dataclass
class PSGState:
    """Complete SN76489 state - the four channels plus the write latch.

    The chip has a single write port. A byte with bit 7 set latches a channel
    and register kind and carries four data bits; a byte with bit 7 clear
    carries six more data bits for whatever was latched last.
    """

    channels: List[SoundChannel] = field(default_factory=_default_channels)
    latched_channel: int = 0
    latched_volume_write: bool = False
    divider: int = PRESCALER

    @property
    def tones(self) -> List[SquareChannel]:
        return self.channels[:NOISE_CHANNEL]  # type: ignore[return-value]

    @property
    def noise(self) -> NoiseChannel:
        return self.channels[NOISE_CHANNEL]  # type: ignore[return-value]

    def write_register(self, data: int) -> None:
        """Write one byte to the PSG port.

        Latch byte: 1 cc t dddd
            - cc = channel (0-3)
            - t = 1 for attenuation, 0 for period/noise control
            - dddd = low 4 data bits
        Data byte: 0 x dddddd
            - dddddd = high 6 bits of a tone period, or the full value otherwise
        """
        data &= 0xFF
        if data & 0x80:
            self.latched_channel = (data >> 5) & 0x03
            self.latched_volume_write = bool(data & 0x10)
            wide = False
            value = data & 0x0F
        else:
            wide = True
            value = data & 0x3F

        channel = self.channels[self.latched_channel]
        channel.write_data(self.latched_volume_write, wide, value)

        if logger.isEnabledFor(logging.DEBUG):
            self._log_write(data, channel)

    def advance(self, cycles: int) -> None:
        """Run the chip for a number of input clock cycles.

        Channels only see every 16th cycle; the divider carries over between
        calls so uneven cycle counts still add up. Equivalent to decrementing
        the divider once per cycle and reloading it at zero.
        """
        if cycles < self.divider:
            self.divider -= cycles
            return

        remaining = cycles - self.divider
        ticks = 1 + remaining // PRESCALER
        self.divider = PRESCALER - remaining % PRESCALER

        channels = self.channels
        for _ in range(ticks):
            for channel in channels:
                channel.clock()

    def sample(self) -> int:
        """Mix all four channels into one unnormalized PCM value."""
        return sum(attenuation_to_amplitude(channel.output_level()) for channel in self.channels)

    def _log_write(self, data: int, channel: SoundChannel) -> None:
        index = self.latched_channel
        if self.latched_volume_write:
            logger.debug(f"write 0x{data:02X}: channel {index} attenuation {channel.volume}")
        elif isinstance(channel, NoiseChannel):
            kind = "white" if channel.white_noise else "periodic"
            logger.debug(f"write 0x{data:02X}: noise {kind}, mode {channel.mode}")
        elif isinstance(channel, SquareChannel):
            freq = period_to_frequency(channel.period_reload)
            logger.debug(
                f"write 0x{data:02X}: channel {index} period 0x{channel.period_reload:03X} ({freq:.1f} Hz)"
            )


__all__ = ["PSGState"]
