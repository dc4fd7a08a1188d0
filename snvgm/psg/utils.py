"""SN76489 hardware constants and small conversions.

Based on the SMS Power! SN76489 documentation:
https://www.smspower.org/Development/SN76489

The PSG divides its input clock by 16 before feeding the channel counters,
and each tone channel toggles its output every Period counter expiries, so a
full square wave lasts 32 x Period input clocks.
"""

from __future__ import annotations

# NTSC Master System / Genesis clock
CLOCK_HZ = 3_579_545

# VGM files are always sampled at 44.1 kHz
SAMPLE_RATE = 44_100

PRESCALER = 16

MAX_PERIOD = 0x3FF  # 10-bit period register
MAX_VOLUME = 0xF  # 4-bit attenuation, 0xF = silent

# Noise shift rates for mode 0-2; mode 3 borrows tone channel 2's period
NOISE_PERIODS = (0x10, 0x20, 0x40)
NOISE_SEED = 0x8000

# 2 dB per step, index 0 is loudest
VOLUME_TABLE = (
    0x1FFF, 0x196A, 0x1430, 0x1009,
    0x0CBC, 0x0A1E, 0x0809, 0x0662,
    0x0512, 0x0407, 0x0333, 0x028A,
    0x0204, 0x019A, 0x0146, 0x0000,
)


def attenuation_to_amplitude(level: int) -> int:
    """Look up the linear amplitude for a 4-bit attenuation level."""
    return VOLUME_TABLE[level & MAX_VOLUME]


def period_to_frequency(period: int, clock: int = CLOCK_HZ) -> float:
    """Convert a tone period register value to frequency in Hz.

    Formula: F = clock / (32 x Period)
    """
    if period <= 0:
        return 0.0
    return clock / (32.0 * period)


def cycles_per_sample(clock: int, sample_rate: int = SAMPLE_RATE) -> int:
    """Whole PSG input clocks per output sample.

    The remainder is dropped, so long logs drift slightly against the
    declared sample count.
    """
    return clock // sample_rate
