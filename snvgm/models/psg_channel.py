"""SN76489 channel models - one square tone generator, one noise generator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..psg.utils import MAX_PERIOD, MAX_VOLUME, NOISE_PERIODS, NOISE_SEED


class SoundChannel(ABC):
    """Contract shared by the tone and noise channels."""

    volume: int

    @abstractmethod
    def clock(self) -> None:
        """Advance the channel by one prescaled clock tick."""

    @abstractmethod
    def output_level(self) -> int:
        """Current attenuation index into the volume table (0 loudest, 15 silent)."""

    @abstractmethod
    def write_data(self, volume_write: bool, wide: bool, data: int) -> None:
        """Apply a register write.

        Args:
            volume_write: True for an attenuation write, False for period/control
            wide: True for a 6-bit data byte, False for the 4 bits of a latch byte
            data: Data bits from the written byte
        """


@dataclass
class SquareChannel(SoundChannel):
    """One SN76489 tone generator.

    The period register is only loaded into the counter when the counter
    expires, so a new pitch never cuts the current half-wave short.
    """

    volume: int = MAX_VOLUME
    period_reload: int = 0
    period_counter: int = 0
    output_high: bool = False

    def clock(self) -> None:
        self.period_counter -= 1
        if self.period_counter <= 0:
            self.output_high = not self.output_high
            self.period_counter = self.period_reload

    def output_level(self) -> int:
        if not self.output_high:
            return MAX_VOLUME
        return self.volume

    def write_data(self, volume_write: bool, wide: bool, data: int) -> None:
        if volume_write:
            self.volume = data & 0x0F
        elif wide:
            # Data byte: bits 4-9 of the period
            self.period_reload = (self.period_reload & 0x00F) | ((data & 0x3F) << 4)
        else:
            # Latch byte: bits 0-3 of the period
            self.period_reload = (self.period_reload & 0x3F0) | (data & 0x0F)
        self.period_reload &= MAX_PERIOD


@dataclass
class NoiseChannel(SoundChannel):
    """SN76489 noise generator driven by a 16-bit LFSR.

    Mode 3 shifts at tone channel 2's rate. The period is re-read from that
    channel on every reload, so retuning it retunes the noise as well.
    """

    tone_source: SquareChannel = field(repr=False, compare=False)
    volume: int = MAX_VOLUME
    mode: int = 0
    white_noise: bool = False
    shift_register: int = NOISE_SEED
    period_counter: int = NOISE_PERIODS[0]
    output_toggle: bool = False
    output_high: bool = False

    def clock(self) -> None:
        self.period_counter -= 1
        if self.period_counter > 0:
            return

        self.output_toggle = not self.output_toggle
        if self.output_toggle:
            self.output_high = bool(self.shift_register & 0x1)
            self.shift()

        self.period_counter = self.next_period()

    def shift(self) -> None:
        """Rotate the LFSR one step right, feeding back into bit 15."""
        if self.white_noise:
            feedback = (self.shift_register ^ (self.shift_register >> 3)) & 0x1
        else:
            feedback = self.shift_register & 0x1
        self.shift_register = (self.shift_register >> 1) | (feedback << 15)

    def next_period(self) -> int:
        if self.mode == 3:
            return self.tone_source.period_reload
        return NOISE_PERIODS[self.mode]

    def output_level(self) -> int:
        if not self.output_high:
            return MAX_VOLUME
        return self.volume

    def write_data(self, volume_write: bool, wide: bool, data: int) -> None:
        if volume_write:
            self.volume = data & 0x0F
        else:
            self.mode = data & 0x03
            self.white_noise = bool(data & 0x04)


__all__ = ["SoundChannel", "SquareChannel", "NoiseChannel"]
