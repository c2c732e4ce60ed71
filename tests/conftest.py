from __future__ import annotations

import struct
import sys
import wave
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def build_wav_bytes(
    pcm: np.ndarray,
    *,
    channels: int = 1,
    fs: int = 44100,
    bits_per_sample: int = 16,
    format_type: int = 1,
    data_size: int | None = None,
    riff: bytes = b"RIFF",
    wave_tag: bytes = b"WAVE",
    data_tag: bytes = b"data",
) -> bytes:
    """Build a canonical 44-byte-header WAV file around interleaved int16 samples."""
    payload = np.asarray(pcm, dtype="<i2").tobytes()
    size = len(payload) if data_size is None else data_size
    block_align = channels * (bits_per_sample // 8)
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        riff, 36 + size, wave_tag, b"fmt ", 16, format_type, channels,
        fs, fs * block_align, block_align, bits_per_sample, data_tag, size,
    )
    return header + payload


def write_wav_bytes(tmp_path: Path, name: str, data: bytes) -> Path:
    path = tmp_path / name
    path.write_bytes(data)
    return path


def write_pcm16_wav(tmp_path: Path, name: str, samples: np.ndarray, fs: int = 44100) -> Path:
    """Write float samples in [-1, 1] (1D mono or frames x channels) with the wave module."""
    samples = np.asarray(samples, dtype=np.float64)
    channels = 1 if samples.ndim == 1 else samples.shape[1]
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")
    path = tmp_path / name
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(2)
        wf.setframerate(fs)
        wf.writeframes(pcm.tobytes())
    return path
