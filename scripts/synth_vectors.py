#!/usr/bin/env python
"""
Synthesize test vectors for WavSpectrum.

Generates 16-bit PCM WAV files with known spectral content, including the
1 kHz / 44.1 kHz sine used for quick console checks.
"""
from __future__ import annotations
import wave
import numpy as np
from pathlib import Path


def write_wav_pcm16(path: str, samples: np.ndarray, fs: int = 44100) -> None:
    """Write mono (1D) or interleaved multi-channel (2D, frames x channels) samples."""
    samples = np.asarray(samples, dtype=np.float64)
    samples = np.clip(samples, -1.0, 1.0)
    channels = 1 if samples.ndim == 1 else samples.shape[1]
    samples_int = (samples * 32767).astype("<i2")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(2)
        wf.setframerate(fs)
        wf.writeframes(samples_int.tobytes())


def gen_sine(freq_hz: float, duration_s: float, fs: int, amp: float = 1.0) -> np.ndarray:
    """Generate a sine wave."""
    t = np.arange(int(duration_s * fs)) / fs
    return amp * np.sin(2.0 * np.pi * freq_hz * t)


def gen_bin_sine(k: int, n: int, amp: float = 1.0) -> np.ndarray:
    """Generate n samples of a sine that falls exactly on bin k of an n-point FFT."""
    t = np.arange(n)
    return amp * np.sin(2.0 * np.pi * k * t / n)


def gen_multitone(freqs_hz: list[float], duration_s: float, fs: int, amp: float = 1.0) -> np.ndarray:
    """Generate sum of sine waves at specified frequencies."""
    t = np.arange(int(duration_s * fs)) / fs
    signal = np.zeros_like(t)
    for f in freqs_hz:
        signal += np.sin(2.0 * np.pi * f * t)
    signal = signal / (np.max(np.abs(signal)) + 1e-10)
    return amp * signal


def main():
    """Generate all test vectors."""
    base_dir = Path(__file__).parent.parent / "validation" / "vectors"
    fs = 44100

    print("Generating test vectors...")

    write_wav_pcm16(str(base_dir / "1khz_Sine_44_1khz.wav"), gen_sine(1000.0, 1.0, fs, amp=0.5), fs)
    print("  1khz_Sine_44_1khz.wav")

    write_wav_pcm16(str(base_dir / "bin23_sine_1024.wav"), gen_bin_sine(23, 1024 * 8, amp=0.5), fs)
    print("  bin23_sine_1024.wav")

    write_wav_pcm16(
        str(base_dir / "multitone_44_1khz.wav"),
        gen_multitone([440.0, 1000.0, 5000.0], 1.0, fs, amp=0.5),
        fs,
    )
    print("  multitone_44_1khz.wav")

    left = gen_sine(1000.0, 0.5, fs, amp=0.5)
    right = gen_sine(2000.0, 0.5, fs, amp=0.25)
    write_wav_pcm16(str(base_dir / "stereo_1k_2k.wav"), np.stack([left, right], axis=1), fs)
    print("  stereo_1k_2k.wav")

    print(f"\nVectors written to {base_dir}")


if __name__ == "__main__":
    main()
