"""Breath-recording silence trimmer for the Wing sensor pipeline."""

from .services.trimmer import WaveTrimmer, trim

__version__ = "1.0.0"

__all__ = ["WaveTrimmer", "trim", "__version__"]
