"""Audio rendering for snvgm."""

from .synthesizer import RenderSettings, VGMSynthesizer

__all__ = [
    "RenderSettings",
    "VGMSynthesizer",
]
