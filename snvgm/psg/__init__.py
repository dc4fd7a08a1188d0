"""SN76489 hardware constants."""

from .utils import (
    CLOCK_HZ,
    NOISE_PERIODS,
    NOISE_SEED,
    PRESCALER,
    SAMPLE_RATE,
    VOLUME_TABLE,
    attenuation_to_amplitude,
    cycles_per_sample,
    period_to_frequency,
)

__all__ = [
    "CLOCK_HZ",
    "NOISE_PERIODS",
    "NOISE_SEED",
    "PRESCALER",
    "SAMPLE_RATE",
    "VOLUME_TABLE",
    "attenuation_to_amplitude",
    "cycles_per_sample",
    "period_to_frequency",
]
