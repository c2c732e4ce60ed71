"""Error kinds raised by the decoder and the FFT engine."""
from __future__ import annotations


class WavSpectrumError(Exception):
    """Base class for all wavspectrum failures."""


class WavDecodeError(WavSpectrumError, ValueError):
    """The input file is not a decodable canonical PCM WAV."""


class TruncatedHeaderError(WavDecodeError):
    """Fewer than 44 header bytes were available."""


class TruncatedDataError(WavDecodeError):
    """The declared data chunk is longer than the bytes present."""


class InvalidHeaderError(WavDecodeError):
    """A header tag or numeric field failed validation."""


class InvalidLengthError(WavSpectrumError, ValueError):
    """A transform length is not a power of two or does not fit the scratch buffer."""
