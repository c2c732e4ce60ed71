"""DSP modules for WavSpectrum."""

from wavspectrum.dsp.fft import ScratchBuffer, bit_reverse_indices, transform
from wavspectrum.dsp.segment import is_power_of_two, largest_power_of_4, segment

__all__ = [
    "ScratchBuffer",
    "bit_reverse_indices",
    "transform",
    "is_power_of_two",
    "largest_power_of_4",
    "segment",
]
