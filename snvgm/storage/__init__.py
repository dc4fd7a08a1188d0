"""VGM loading and PCM output helpers."""

from .vgm_model import HEADER_SIZE, VGM_MAGIC, VGMFile, VGMHeader
from .io import decompress_vgz, load_vgm, output_path_for, save_raw, save_samples, save_wav

__all__ = [
    "HEADER_SIZE",
    "VGM_MAGIC",
    "VGMFile",
    "VGMHeader",
    "decompress_vgz",
    "load_vgm",
    "output_path_for",
    "save_raw",
    "save_samples",
    "save_wav",
]
