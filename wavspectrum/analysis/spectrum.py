"""Block-wise spectrum computation over a decoded sample buffer."""
from __future__ import annotations
import logging
from typing import Iterable
import numpy as np
from wavspectrum.dsp.fft import ScratchBuffer, transform
from wavspectrum.dsp.segment import segment
from wavspectrum.io.wav import load_wav
from wavspectrum.types import (
    AnalysisConfig,
    Block,
    BlockPeak,
    BlockSpectrum,
    WavAudio,
)

LOGGER = logging.getLogger(__name__)

INTERACTIVE_WINDOW_LIMIT = 1024


def transform_blocks(
    real: np.ndarray,
    imag: np.ndarray,
    blocks: Iterable[Block],
    scratch: ScratchBuffer
) -> None:
    """Transform each block in place, one after another, on its own sub-views."""
    for block in blocks:
        transform(real[block.slice], imag[block.slice], block.length, scratch)


def compute_block_spectrum(samples: np.ndarray, window_size: int) -> BlockSpectrum:
    """
    Compute the per-block FFT of a real sample sequence.

    The samples are copied into a float32 real buffer paired with a zeroed
    imaginary buffer; samples outside every block keep their time-domain
    value.

    Args:
        samples: Real-valued 1D samples
        window_size: Nominal block length (power of two)

    Returns:
        BlockSpectrum holding both buffers and the blocks that were transformed
    """
    real = np.array(samples, dtype=np.float32).reshape(-1)
    imag = np.zeros_like(real)

    blocks = segment(real.size, window_size)
    scratch = ScratchBuffer.for_window(window_size)
    transform_blocks(real, imag, blocks, scratch)

    spectrum = BlockSpectrum(real=real, imag=imag, blocks=blocks)
    LOGGER.info(
        "transformed %d block(s) covering %d of %d samples",
        len(blocks), spectrum.transformed_count, real.size,
    )
    if spectrum.untransformed_count:
        LOGGER.debug("%d trailing sample(s) left in the time domain", spectrum.untransformed_count)
    return spectrum


def analyze_wav(path: str, config: AnalysisConfig | None = None) -> tuple[WavAudio, BlockSpectrum]:
    """Decode a WAV file and compute its block spectrum."""
    cfg = config or AnalysisConfig()
    if cfg.window_size > INTERACTIVE_WINDOW_LIMIT:
        LOGGER.warning(
            "window_size=%d exceeds %d; processing may be slow",
            cfg.window_size, INTERACTIVE_WINDOW_LIMIT,
        )
    audio = load_wav(path)
    return audio, compute_block_spectrum(audio.samples, cfg.window_size)


def block_peaks(
    spectrum: BlockSpectrum,
    sample_rate: float,
    channel_count: int = 1
) -> list[BlockPeak]:
    """
    Find the strongest non-DC bin of every block of length >= 4.

    Only bins strictly between DC and Nyquist (1 .. length/2 - 1) are
    searched. Channel scalars are interleaved, so the effective rate of the
    sequence is sample_rate * channel_count.
    """
    fs_eff = float(sample_rate) * max(1, int(channel_count))
    peaks: list[BlockPeak] = []
    for block in spectrum.blocks:
        n = block.length
        if n < 4:
            continue
        half = n // 2
        re = spectrum.real[block.start + 1:block.start + half].astype(np.float64)
        im = spectrum.imag[block.start + 1:block.start + half].astype(np.float64)
        mag = np.hypot(re, im)
        k = int(np.argmax(mag)) + 1
        peaks.append(BlockPeak(
            block=block,
            bin=k,
            magnitude=float(mag[k - 1]),
            freq_hz=k * fs_eff / n,
        ))
    return peaks
