"""Text rendering of complex spectrum buffers."""
from __future__ import annotations
import sys
from typing import Iterator, TextIO
import numpy as np


def format_value(x: float) -> str:
    """Shortest positional decimal that round-trips a float32 (no exponent)."""
    return np.format_float_positional(np.float32(x), trim="-")


def format_spectrum_line(re: float, im: float) -> str:
    """Render one bin as ``<real> <+|-> <abs(imag)> i``."""
    sign = "+" if im >= 0 else "-"
    return f"{format_value(re)} {sign} {format_value(abs(im))} i"


def render_spectrum(real: np.ndarray, imag: np.ndarray) -> Iterator[str]:
    """Yield one line per index of the two buffers, in index order."""
    if real.shape != imag.shape:
        raise ValueError("real and imag buffers must have the same shape.")
    for re, im in zip(real.tolist(), imag.tolist()):
        yield format_spectrum_line(re, im)


def emit_spectrum(real: np.ndarray, imag: np.ndarray, stream: TextIO | None = None) -> int:
    """Write every spectrum line to stream (stdout by default); return the line count."""
    out = stream if stream is not None else sys.stdout
    count = 0
    for line in render_spectrum(real, imag):
        out.write(line + "\n")
        count += 1
    return count
