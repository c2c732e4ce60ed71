from __future__ import annotations

import numpy as np
import pytest
import soundfile as sf

from wavspectrum.errors import (
    InvalidHeaderError,
    TruncatedDataError,
    TruncatedHeaderError,
    WavDecodeError,
)
from wavspectrum.io.wav import load_wav, parse_wav_header, read_wav

from tests.conftest import build_wav_bytes, write_pcm16_wav, write_wav_bytes


def test_parse_wav_header_fields():
    raw = build_wav_bytes(np.zeros(10, dtype=np.int16), channels=1, fs=8000)
    h = parse_wav_header(raw)
    assert h.riff_tag == "RIFF"
    assert h.wave_tag == "WAVE"
    assert h.fmt_marker == "fmt "
    assert h.data_marker == "data"
    assert h.fmt_length == 16
    assert h.format_type == 1
    assert h.channel_count == 1
    assert h.sample_rate == 8000
    assert h.byte_rate == 16000
    assert h.block_align == 2
    assert h.bits_per_sample == 16
    assert h.data_size == 20
    assert h.overall_size == 56
    assert h.frame_count == 10


def test_read_wav_mono_values(tmp_path):
    pcm = np.array([0, 1, -1, 32767, -32768, 1234], dtype=np.int16)
    path = write_wav_bytes(tmp_path, "mono.wav", build_wav_bytes(pcm))
    count, samples = read_wav(str(path))
    assert count == 6
    assert samples.dtype == np.float32
    assert samples.tolist() == [0.0, 1.0, -1.0, 32767.0, -32768.0, 1234.0]


def test_stereo_samples_stay_interleaved(tmp_path):
    frames = 5
    pcm = np.arange(2 * frames, dtype=np.int16)
    path = write_wav_bytes(tmp_path, "stereo.wav", build_wav_bytes(pcm, channels=2))
    audio = load_wav(str(path))
    assert audio.sample_count == frames
    assert audio.samples.size == 2 * frames
    assert audio.samples.tolist() == [float(v) for v in range(2 * frames)]


def test_empty_data_chunk(tmp_path):
    path = write_wav_bytes(tmp_path, "empty.wav", build_wav_bytes(np.zeros(0, dtype=np.int16)))
    count, samples = read_wav(str(path))
    assert count == 0
    assert samples.size == 0


def test_matches_soundfile_reference(tmp_path):
    fs = 22050
    t = np.arange(1000) / fs
    left = 0.5 * np.sin(2.0 * np.pi * 440.0 * t)
    right = 0.25 * np.cos(2.0 * np.pi * 880.0 * t)
    path = write_pcm16_wav(tmp_path, "ref.wav", np.stack([left, right], axis=1), fs=fs)

    audio = load_wav(str(path))
    ref, ref_fs = sf.read(str(path), dtype="int16", always_2d=True)
    assert ref_fs == fs
    assert audio.header.sample_rate == fs
    assert audio.sample_count == ref.shape[0]
    assert np.array_equal(audio.samples, ref.reshape(-1).astype(np.float32))


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_wav(str(tmp_path / "nope.wav"))


def test_truncated_header(tmp_path):
    raw = build_wav_bytes(np.zeros(4, dtype=np.int16))[:30]
    path = write_wav_bytes(tmp_path, "short.wav", raw)
    with pytest.raises(TruncatedHeaderError):
        read_wav(str(path))


def test_truncated_data(tmp_path):
    raw = build_wav_bytes(np.zeros(4, dtype=np.int16), data_size=100)
    path = write_wav_bytes(tmp_path, "trunc.wav", raw)
    with pytest.raises(TruncatedDataError, match="100 bytes"):
        read_wav(str(path))


def test_trailing_partial_frame_is_ignored(tmp_path):
    pcm = np.array([1, 2, 3, 4, 5], dtype=np.int16)
    raw = build_wav_bytes(pcm, channels=2, data_size=10)
    path = write_wav_bytes(tmp_path, "odd.wav", raw)
    audio = load_wav(str(path))
    assert audio.sample_count == 2
    assert audio.samples.tolist() == [1.0, 2.0, 3.0, 4.0]


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"riff": b"RIFX"}, "RIFF"),
        ({"wave_tag": b"AVI "}, "WAVE"),
        ({"data_tag": b"LIST"}, "data"),
        ({"channels": 0}, "channel_count"),
        ({"bits_per_sample": 12}, "multiple of 8"),
        ({"bits_per_sample": 24}, "16-bit"),
        ({"format_type": 3}, "format type"),
    ],
)
def test_invalid_header_fields(tmp_path, kwargs, match):
    raw = build_wav_bytes(np.zeros(8, dtype=np.int16), **kwargs)
    path = write_wav_bytes(tmp_path, "bad.wav", raw)
    with pytest.raises(InvalidHeaderError, match=match):
        load_wav(str(path))


def test_decode_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_wav_header(b"RIFF")
    assert issubclass(TruncatedDataError, WavDecodeError)


def test_unopenable_path_raises_file_not_found(tmp_path):
    folder = tmp_path / "d"
    folder.mkdir()
    with pytest.raises(FileNotFoundError, match="Cannot open"):
        read_wav(str(folder))
