"""VGM command stream playback into PCM samples."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidVGMError, TruncatedStreamError, UnsupportedCommandError
from ..models import PSGState
from ..psg.utils import SAMPLE_RATE, cycles_per_sample
from ..storage.vgm_model import VGMFile

logger = logging.getLogger(__name__)

# Supported VGM commands
CMD_PSG_WRITE = 0x50  # 0x50 dd: write dd to the SN76489
CMD_WAIT = 0x61  # 0x61 nn nn: wait n samples
CMD_WAIT_NTSC = 0x62  # one 60 Hz frame
CMD_WAIT_PAL = 0x63  # one 50 Hz frame
CMD_END = 0x66
CMD_WAIT_SHORT_FIRST = 0x70  # 0x7n: wait n+1 samples
CMD_WAIT_SHORT_LAST = 0x79

NTSC_FRAME_SAMPLES = 735
PAL_FRAME_SAMPLES = 882

# Longest wait per command byte: 0x61 ff ff
MAX_SAMPLES_PER_BYTE = 0xFFFF // 3


@dataclass
class RenderSettings:
    """Output options for one conversion run."""

    sample_rate: int = SAMPLE_RATE
    output_format: str = "wav"


class VGMSynthesizer:
    """Replays a VGM command stream through an emulated SN76489.

    Each output sample runs the chip for a whole number of input clocks and
    then takes the mixed output as-is (nearest neighbour, no filtering).
    After a render, `position` and `sample_position` describe how far the
    stream got, including when rendering stopped on an error.
    """

    def __init__(self, settings: RenderSettings | None = None) -> None:
        self.settings = settings or RenderSettings()
        self.psg = PSGState()
        self.buffer = np.zeros(0, dtype=np.int32)
        self.sample_position = 0
        self.position = 0
        self.cycles_per_sample = 0

    @property
    def samples(self) -> np.ndarray:
        """Samples rendered so far."""
        return self.buffer[: self.sample_position]

    def render(self, vgm: VGMFile) -> np.ndarray:
        """Render the whole command stream.

        Args:
            vgm: Parsed VGM log

        Returns:
            int32 array, one value per output sample. Shorter than the declared
            sample count if the end-of-data command comes first.

        Raises:
            MissingPSGClockError: header has no SN76489 clock
            UnsupportedCommandError: unknown opcode in the stream
            TruncatedStreamError: stream ends mid-command
            InvalidVGMError: declared sample count is more than the stream can hold
        """
        header = vgm.header
        clock = header.require_psg_clock()
        self._check_total_samples(vgm)

        self.psg = PSGState()
        self.cycles_per_sample = cycles_per_sample(clock, self.settings.sample_rate)
        self.buffer = np.zeros(header.total_samples, dtype=np.int32)
        self.sample_position = 0
        self.position = header.data_offset

        logger.info(
            f"Rendering {header.total_samples} samples at {clock} Hz "
            f"({self.cycles_per_sample} cycles per sample)"
        )

        data = vgm.data
        total = header.total_samples
        while self.sample_position < total:
            opcode = self._read(data, 1)[0]

            if opcode == CMD_PSG_WRITE:
                value = self._read(data, 2)[1]
                self.psg.write_register(value)
                self.position += 2
            elif opcode == CMD_WAIT:
                args = self._read(data, 3)
                self._fill(args[1] | (args[2] << 8))
                self.position += 3
            elif opcode == CMD_WAIT_NTSC:
                self._fill(NTSC_FRAME_SAMPLES)
                self.position += 1
            elif opcode == CMD_WAIT_PAL:
                self._fill(PAL_FRAME_SAMPLES)
                self.position += 1
            elif opcode == CMD_END:
                logger.info(
                    f"End of sound data at 0x{self.position:X} "
                    f"after {self.sample_position} of {total} samples"
                )
                break
            elif CMD_WAIT_SHORT_FIRST <= opcode <= CMD_WAIT_SHORT_LAST:
                self._fill((opcode & 0x0F) + 1)
                self.position += 1
            else:
                raise UnsupportedCommandError(opcode, self.position)

        return self.samples

    @staticmethod
    def _check_total_samples(vgm: VGMFile) -> None:
        header = vgm.header
        stream_bytes = max(0, len(vgm.data) - header.data_offset)
        limit = stream_bytes * MAX_SAMPLES_PER_BYTE
        if header.total_samples > limit:
            raise InvalidVGMError(
                f"Header declares {header.total_samples} samples but {stream_bytes} "
                f"command byte(s) can hold at most {limit}"
            )

    def _read(self, data: bytes, length: int) -> bytes:
        chunk = data[self.position : self.position + length]
        if len(chunk) < length:
            raise TruncatedStreamError(self.position, length, len(chunk))
        return chunk

    def _fill(self, count: int) -> None:
        """Render `count` samples, stopping at the declared total."""
        count = min(count, len(self.buffer) - self.sample_position)
        psg = self.psg
        cycles = self.cycles_per_sample
        buffer = self.buffer
        start = self.sample_position
        for i in range(start, start + count):
            psg.advance(cycles)
            buffer[i] = psg.sample()
        self.sample_position = start + count


__all__ = ["RenderSettings", "VGMSynthesizer"]
