"""
WavSpectrum - Block-wise spectral analysis of PCM WAV files

Decodes 16-bit PCM samples, splits them into power-of-two analysis blocks
and computes a radix-2 FFT of each block in place.
"""
from wavspectrum.version import __version__
from wavspectrum.types import (
    WavHeader,
    WavAudio,
    Block,
    AnalysisConfig,
    BlockSpectrum,
    BlockPeak,
)
from wavspectrum.errors import (
    WavSpectrumError,
    WavDecodeError,
    TruncatedHeaderError,
    TruncatedDataError,
    InvalidHeaderError,
    InvalidLengthError,
)

__all__ = [
    "__version__",
    "WavHeader",
    "WavAudio",
    "Block",
    "AnalysisConfig",
    "BlockSpectrum",
    "BlockPeak",
    "WavSpectrumError",
    "WavDecodeError",
    "TruncatedHeaderError",
    "TruncatedDataError",
    "InvalidHeaderError",
    "InvalidLengthError",
]
