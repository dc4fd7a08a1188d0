"""Exceptions raised while converting VGM logs.

Every fatal error carries the process exit status the command line reports
for it.
"""

from __future__ import annotations


class SNVGMError(Exception):
    """Base class for snvgm errors."""

    exit_code = 1


class InvalidVGMError(SNVGMError, ValueError):
    """The input is not a readable VGM (or gzip-compressed VGM) file."""

    exit_code = 3


class TruncatedStreamError(InvalidVGMError):
    """The command stream ended in the middle of a command."""

    def __init__(self, position: int, needed: int, available: int) -> None:
        self.position = position
        super().__init__(
            f"Command stream truncated at 0x{position:X}: "
            f"needed {needed} byte(s), {available} available"
        )


class MissingPSGClockError(SNVGMError):
    """The header declares no SN76489 clock, so there is nothing to render."""

    exit_code = 4

    def __init__(self) -> None:
        super().__init__("PSG clock not defined (header field 0x0C is zero)")


class UnsupportedCommandError(SNVGMError):
    """An opcode outside the supported SN76489 command set was found."""

    exit_code = 5

    def __init__(self, opcode: int, position: int) -> None:
        self.opcode = opcode
        self.position = position
        super().__init__(f"Unimplemented VGM command 0x{opcode:02X} at offset 0x{position:X}")


class OutputError(SNVGMError):
    """The rendered samples could not be written."""

    exit_code = 6


__all__ = [
    "SNVGMError",
    "InvalidVGMError",
    "TruncatedStreamError",
    "MissingPSGClockError",
    "UnsupportedCommandError",
    "OutputError",
]
