"""Tests for the square and noise channel models."""

import pytest

from snvgm.models import NoiseChannel, SquareChannel
from snvgm.psg.utils import NOISE_PERIODS, NOISE_SEED


def _toggle_ticks(channel: SquareChannel, ticks: int) -> list[int]:
    """Clock `ticks` times, returning the tick numbers where the phase flipped."""
    flips = []
    phase = channel.output_high
    for tick in range(1, ticks + 1):
        channel.clock()
        if channel.output_high != phase:
            flips.append(tick)
            phase = channel.output_high
    return flips


def test_square_channel_defaults_silent():
    channel = SquareChannel()
    assert channel.volume == 0xF
    assert channel.period_reload == 0
    assert channel.output_high is False
    assert channel.output_level() == 0xF


def test_square_toggle_interval_for_every_period():
    """Phase flips every max(reload, 1) ticks once the reload is loaded."""
    budget = 2048
    for reload in range(1024):
        channel = SquareChannel(period_reload=reload)
        flips = _toggle_ticks(channel, budget)

        interval = max(reload, 1)
        # Counter starts at 0, so the first tick always flips
        assert flips[0] == 1, reload
        assert len(flips) == 1 + (budget - 1) // interval, reload
        assert all(b - a == interval for a, b in zip(flips, flips[1:])), reload


def test_square_period_zero_toggles_every_tick():
    channel = SquareChannel(period_reload=0)
    phases = []
    for _ in range(6):
        channel.clock()
        phases.append(channel.output_high)
    assert phases == [True, False, True, False, True, False]


def test_square_output_level_follows_phase():
    channel = SquareChannel(volume=4)
    assert channel.output_level() == 0xF
    channel.clock()
    assert channel.output_high is True
    assert channel.output_level() == 4


@pytest.mark.parametrize("first, second", [((False, 0x3), (True, 0x2A)), ((True, 0x2A), (False, 0x3))])
def test_square_split_period_write_order_independent(first, second):
    channel = SquareChannel()
    channel.write_data(False, *first)
    channel.write_data(False, *second)
    assert channel.period_reload == 0x2A3


def test_square_narrow_write_keeps_high_bits():
    channel = SquareChannel(period_reload=0x3FF)
    channel.write_data(False, False, 0x0)
    assert channel.period_reload == 0x3F0

    channel.write_data(False, True, 0x00)
    assert channel.period_reload == 0x000


def test_square_period_write_is_lazy():
    """A new period only reaches the counter at the next expiry."""
    channel = SquareChannel(period_reload=10)
    channel.clock()  # expire, load 10
    assert channel.period_counter == 10

    channel.write_data(False, False, 0x3)
    channel.write_data(False, True, 0x00)
    assert channel.period_reload == 3
    assert channel.period_counter == 10

    flips = _toggle_ticks(channel, 13)
    assert flips == [10, 13]


def test_square_volume_write_uses_low_nibble():
    channel = SquareChannel()
    channel.write_data(True, True, 0x35)
    assert channel.volume == 0x5
    assert channel.period_reload == 0


def test_noise_write_sets_mode_and_feedback():
    noise = NoiseChannel(tone_source=SquareChannel())
    noise.write_data(False, False, 0x6)
    assert noise.mode == 2
    assert noise.white_noise is True

    noise.write_data(False, False, 0x3)
    assert noise.mode == 3
    assert noise.white_noise is False

    noise.write_data(True, False, 0x7)
    assert noise.volume == 7
    assert noise.mode == 3


def test_periodic_lfsr_repeats_after_16_shifts():
    noise = NoiseChannel(tone_source=SquareChannel())
    assert noise.shift_register == NOISE_SEED

    seen = [noise.shift_register]
    while True:
        noise.shift()
        if noise.shift_register == NOISE_SEED:
            break
        seen.append(noise.shift_register)

    assert len(seen) == 16
    assert len(set(seen)) == 16
    assert all(0 <= state <= 0xFFFF for state in seen)


def test_white_lfsr_taps_bits_0_and_3():
    noise = NoiseChannel(tone_source=SquareChannel(), white_noise=True)
    for _ in range(12):
        noise.shift()
    # Single bit walked down to bit 3 with zero feedback
    assert noise.shift_register == 0x0008

    noise.shift()
    assert noise.shift_register == 0x8004


def test_noise_shifts_on_every_other_expiry():
    noise = NoiseChannel(tone_source=SquareChannel())
    period = NOISE_PERIODS[0]

    for _ in range(period - 1):
        noise.clock()
    assert noise.shift_register == NOISE_SEED

    noise.clock()  # first expiry shifts
    assert noise.output_toggle is True
    assert noise.shift_register == NOISE_SEED >> 1
    assert noise.output_high is False

    for _ in range(period):
        noise.clock()  # second expiry only toggles
    assert noise.output_toggle is False
    assert noise.shift_register == NOISE_SEED >> 1

    # 16 shifts take 32 expiries and bring the periodic register home
    for _ in range(30 * period):
        noise.clock()
    assert noise.shift_register == NOISE_SEED


def test_noise_output_samples_bit_zero_before_shift():
    noise = NoiseChannel(tone_source=SquareChannel(), shift_register=0x0001, period_counter=1)
    noise.volume = 2
    noise.clock()
    assert noise.output_high is True
    assert noise.output_level() == 2
    assert noise.shift_register == 0x8000


@pytest.mark.parametrize("mode", [0, 1, 2])
def test_noise_fixed_periods(mode):
    noise = NoiseChannel(tone_source=SquareChannel(), mode=mode, period_counter=1)
    noise.clock()
    assert noise.period_counter == NOISE_PERIODS[mode]


def test_noise_mode_3_tracks_tone_channel_period():
    tone = SquareChannel(period_reload=5)
    noise = NoiseChannel(tone_source=tone, mode=3)

    for _ in range(NOISE_PERIODS[0]):
        noise.clock()
    assert noise.period_counter == 5

    # Retune the tone channel only
    tone.write_data(False, False, 0x9)
    tone.write_data(False, True, 0x00)

    for _ in range(5):
        noise.clock()
    assert noise.period_counter == 9
    assert tone.period_reload == 9
