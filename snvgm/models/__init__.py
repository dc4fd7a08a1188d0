"""SN76489 chip models - pure Python, no I/O."""

from __future__ import annotations

from .psg_channel import NoiseChannel, SoundChannel, SquareChannel
from .psg_state import PSGState

__all__ = [
    "SoundChannel",
    "SquareChannel",
    "NoiseChannel",
    "PSGState",
]
