"""Reading VGM/VGZ logs and writing rendered PCM."""

from __future__ import annotations

import gzip
import logging
import wave
import zlib
from pathlib import Path
from typing import Union

import numpy as np

from ..errors import InvalidVGMError, OutputError
from ..psg.utils import SAMPLE_RATE
from .vgm_model import VGMFile

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
GZIP_MAGIC = b"\x1f\x8b"
OUTPUT_EXTENSIONS = {"wav": ".wav", "raw": ".bin"}


def decompress_vgz(data: bytes) -> bytes:
    """Decompress VGZ (gzip-compressed VGM) data; plain VGM passes through."""
    if data[:2] != GZIP_MAGIC:
        return data
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise InvalidVGMError(f"Corrupt gzip data: {exc}") from exc


def load_vgm(path: PathLike) -> VGMFile:
    vgm_path = Path(path)
    try:
        raw = vgm_path.read_bytes()
    except OSError as exc:
        raise InvalidVGMError(f"Cannot read {vgm_path}: {exc.strerror or exc}") from exc

    data = decompress_vgz(raw)
    if data is not raw:
        logger.info(f"Decompressed {vgm_path.name}: {len(raw)} -> {len(data)} bytes")

    return VGMFile.from_bytes(data)


def output_path_for(input_path: PathLike, output_format: str = "wav") -> Path:
    return Path(input_path).with_suffix(OUTPUT_EXTENSIONS[output_format])


def _to_pcm16(samples: np.ndarray) -> bytes:
    # Keep the low 16 bits of each value, little-endian
    return np.asarray(samples).astype("<i2").tobytes()


def save_wav(samples: np.ndarray, path: PathLike, sample_rate: int = SAMPLE_RATE) -> Path:
    """Write mono 16-bit PCM WAV."""
    wav_path = Path(path)
    wav_path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(wav_path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(sample_rate)
        handle.writeframes(_to_pcm16(samples))
    return wav_path


def save_raw(samples: np.ndarray, path: PathLike) -> Path:
    """Write headerless 16-bit little-endian PCM."""
    raw_path = Path(path)
    raw_path.parent.mkdir(parents=True, exist_ok=True)
    raw_path.write_bytes(_to_pcm16(samples))
    return raw_path


def save_samples(
    samples: np.ndarray,
    path: PathLike,
    output_format: str = "wav",
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    try:
        if output_format == "raw":
            saved = save_raw(samples, path)
        else:
            saved = save_wav(samples, path, sample_rate)
    except OSError as exc:
        raise OutputError(f"Cannot write {path}: {exc.strerror or exc}") from exc
    logger.info(f"Saved {len(samples)} samples as {saved}")
    return saved
