from __future__ import annotations
from dataclasses import dataclass
import numpy as np

DEFAULT_WINDOW_SIZE = 1024


@dataclass(frozen=True)
class WavHeader:
    riff_tag: str
    overall_size: int
    wave_tag: str
    fmt_marker: str
    fmt_length: int
    format_type: int
    channel_count: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_marker: str
    data_size: int

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @property
    def frame_size(self) -> int:
        return self.channel_count * self.bytes_per_sample

    @property
    def frame_count(self) -> int:
        return self.data_size // self.frame_size

    @property
    def duration(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return self.frame_count / float(self.sample_rate)


@dataclass(frozen=True)
class WavAudio:
    header: WavHeader
    samples: np.ndarray
    sample_count: int


@dataclass(frozen=True)
class Block:
    start: int
    stop: int

    @property
    def length(self) -> int:
        return self.stop - self.start

    @property
    def slice(self) -> slice:
        return slice(self.start, self.stop)


@dataclass(frozen=True)
class AnalysisConfig:
    window_size: int = DEFAULT_WINDOW_SIZE


@dataclass(frozen=True)
class BlockSpectrum:
    real: np.ndarray
    imag: np.ndarray
    blocks: list[Block]

    @property
    def transformed_count(self) -> int:
        return sum(b.length for b in self.blocks)

    @property
    def untransformed_count(self) -> int:
        return self.real.size - self.transformed_count


@dataclass(frozen=True)
class BlockPeak:
    block: Block
    bin: int
    magnitude: float
    freq_hz: float
