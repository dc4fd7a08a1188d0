"""Lightweight data structures describing the VGM log format."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Dict

from ..errors import InvalidVGMError, MissingPSGClockError
from ..psg.utils import SAMPLE_RATE

VGM_MAGIC = b"Vgm "
HEADER_SIZE = 0x40

EOF_OFFSET = 0x04
VERSION = 0x08
SN76489_CLOCK = 0x0C
TOTAL_SAMPLES = 0x18
LOOP_OFFSET = 0x1C
LOOP_SAMPLES = 0x20
DATA_OFFSET = 0x34


def _read_u32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<I", data, offset)[0]


def _relative(data: bytes, offset: int) -> int:
    """Resolve a header field that stores an offset relative to itself."""
    value = _read_u32(data, offset)
    return offset + value if value else 0


@dataclass(frozen=True)
class VGMHeader:
    version: int
    eof_offset: int
    psg_clock: int
    total_samples: int
    loop_offset: int = 0
    loop_samples: int = 0
    data_offset: int = HEADER_SIZE

    @property
    def version_string(self) -> str:
        # BCD, e.g. 0x150 -> "1.50"
        return f"{self.version >> 8:x}.{self.version & 0xFF:02x}"

    @property
    def duration_seconds(self) -> float:
        return self.total_samples / SAMPLE_RATE

    def require_psg_clock(self) -> int:
        if self.psg_clock == 0:
            raise MissingPSGClockError()
        return self.psg_clock

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version_string,
            "psg_clock": self.psg_clock,
            "total_samples": self.total_samples,
            "duration_seconds": round(self.duration_seconds, 3),
            "loop_offset": self.loop_offset,
            "loop_samples": self.loop_samples,
            "data_offset": self.data_offset,
        }

    @classmethod
    def from_bytes(cls, data: bytes) -> "VGMHeader":
        if data[:4] != VGM_MAGIC:
            raise InvalidVGMError("Data does not appear to be a valid VGM file (bad magic)")
        if len(data) < HEADER_SIZE:
            raise InvalidVGMError(f"VGM header truncated: {len(data)} bytes, expected {HEADER_SIZE}")

        # A zero data offset means the commands start right after the header
        data_offset = _relative(data, DATA_OFFSET) or HEADER_SIZE

        return cls(
            version=_read_u32(data, VERSION),
            eof_offset=_relative(data, EOF_OFFSET),
            psg_clock=_read_u32(data, SN76489_CLOCK),
            total_samples=_read_u32(data, TOTAL_SAMPLES),
            loop_offset=_relative(data, LOOP_OFFSET),
            loop_samples=_read_u32(data, LOOP_SAMPLES),
            data_offset=data_offset,
        )


@dataclass(frozen=True)
class VGMFile:
    """A decompressed VGM log: parsed header plus the raw bytes it describes."""

    header: VGMHeader
    data: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "VGMFile":
        return cls(header=VGMHeader.from_bytes(data), data=bytes(data))


__all__ = ["VGM_MAGIC", "HEADER_SIZE", "VGMHeader", "VGMFile"]
