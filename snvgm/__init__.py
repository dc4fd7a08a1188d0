"""snvgm package: offline SN76489 rendering of VGM logs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("snvgm")
except PackageNotFoundError:  # pragma: no cover - during local dev without install
    __version__ = "0.0.0"

__all__ = ["__version__"]
