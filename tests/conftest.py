import struct

import pytest

NTSC_CLOCK = 3_579_545


def build_vgm(
    commands: bytes,
    clock: int = NTSC_CLOCK,
    total_samples: int = 0,
    version: int = 0x150,
    data_offset: int = 0x0C,
) -> bytes:
    """Assemble a minimal VGM image: 0x40-byte header followed by commands."""
    header = bytearray(0x40)
    header[0:4] = b"Vgm "
    struct.pack_into("<I", header, 0x04, 0x40 + len(commands) - 4)
    struct.pack_into("<I", header, 0x08, version)
    struct.pack_into("<I", header, 0x0C, clock)
    struct.pack_into("<I", header, 0x18, total_samples)
    struct.pack_into("<I", header, 0x34, data_offset)
    return bytes(header) + commands


@pytest.fixture
def make_vgm():
    return build_vgm
