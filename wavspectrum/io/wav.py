"""Canonical PCM WAV decoding."""
from __future__ import annotations
import logging
import struct
import numpy as np
from wavspectrum.errors import (
    InvalidHeaderError,
    TruncatedDataError,
    TruncatedHeaderError,
)
from wavspectrum.types import WavAudio, WavHeader

LOGGER = logging.getLogger(__name__)

HEADER_SIZE = 44
PCM_FORMAT = 1
SUPPORTED_BITS_PER_SAMPLE = 16

# riff, overall_size, wave, fmt, fmt_length, format_type, channels,
# sample_rate, byte_rate, block_align, bits_per_sample, data, data_size
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


def _tag(raw: bytes) -> str:
    return raw.decode("latin-1")


def parse_wav_header(raw: bytes) -> WavHeader:
    """
    Parse and validate a 44-byte canonical WAV header.

    Args:
        raw: At least the first 44 bytes of the file

    Returns:
        WavHeader with every field decoded as little-endian

    Raises:
        TruncatedHeaderError: fewer than 44 bytes were given
        InvalidHeaderError: a magic tag or numeric field is invalid
    """
    if len(raw) < HEADER_SIZE:
        raise TruncatedHeaderError(
            f"WAV header needs {HEADER_SIZE} bytes, got {len(raw)}."
        )
    fields = _HEADER_STRUCT.unpack_from(raw, 0)
    header = WavHeader(
        riff_tag=_tag(fields[0]),
        overall_size=fields[1],
        wave_tag=_tag(fields[2]),
        fmt_marker=_tag(fields[3]),
        fmt_length=fields[4],
        format_type=fields[5],
        channel_count=fields[6],
        sample_rate=fields[7],
        byte_rate=fields[8],
        block_align=fields[9],
        bits_per_sample=fields[10],
        data_marker=_tag(fields[11]),
        data_size=fields[12],
    )
    _validate_header(header)
    return header


def _validate_header(header: WavHeader) -> None:
    errors: list[str] = []
    if header.riff_tag != "RIFF":
        errors.append(f"expected RIFF tag, found {header.riff_tag!r}")
    if header.wave_tag != "WAVE":
        errors.append(f"expected WAVE tag, found {header.wave_tag!r}")
    if header.fmt_marker != "fmt ":
        errors.append(f"expected 'fmt ' chunk, found {header.fmt_marker!r}")
    if header.data_marker != "data":
        errors.append(f"expected data chunk, found {header.data_marker!r}")
    if header.channel_count <= 0:
        errors.append("channel_count must be positive")
    if header.bits_per_sample <= 0 or header.bits_per_sample % 8 != 0:
        errors.append(
            f"bits_per_sample must be a positive multiple of 8, got {header.bits_per_sample}"
        )
    if errors:
        raise InvalidHeaderError("Invalid WAV header: " + "; ".join(errors) + ".")

    if header.format_type != PCM_FORMAT:
        raise InvalidHeaderError(
            f"Unsupported WAV format type {header.format_type} (only PCM is supported)."
        )
    if header.bits_per_sample != SUPPORTED_BITS_PER_SAMPLE:
        raise InvalidHeaderError(
            f"Unsupported sample depth {header.bits_per_sample} bits (only 16-bit PCM is supported)."
        )
    if header.block_align != header.frame_size:
        LOGGER.warning(
            "block_align=%d does not match channels*bytes_per_sample=%d; using the latter",
            header.block_align,
            header.frame_size,
        )


def load_wav(path: str) -> WavAudio:
    """
    Decode a canonical 16-bit PCM WAV file.

    Samples of all channels are kept interleaved in file order, each widened
    to float32; nothing is averaged or split per channel.
    """
    try:
        f = open(path, "rb")
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise FileNotFoundError(exc.errno, f"Cannot open {path}: {exc.strerror}", path) from exc
    with f:
        header = parse_wav_header(f.read(HEADER_SIZE))
        payload = f.read(header.data_size)

    if len(payload) < header.data_size:
        raise TruncatedDataError(
            f"WAV data chunk declares {header.data_size} bytes but only {len(payload)} are present."
        )

    frames = header.frame_count
    used = frames * header.frame_size
    if used != header.data_size:
        LOGGER.debug(
            "ignoring %d trailing bytes that do not form a whole frame",
            header.data_size - used,
        )
    LOGGER.debug(
        "%s: %d channel(s) @ %d Hz, %d frames",
        path, header.channel_count, header.sample_rate, frames,
    )

    pcm = np.frombuffer(payload[:used], dtype="<i2")
    samples = pcm.astype(np.float32)
    return WavAudio(header=header, samples=samples, sample_count=frames)


def read_wav(path: str) -> tuple[int, np.ndarray]:
    """Return (sample_count, samples) for a WAV file."""
    audio = load_wav(path)
    return audio.sample_count, audio.samples
