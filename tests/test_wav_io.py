"""
Tests for notesynth/core/io: byte-exact WAV header, clamping/truncation, atomic writes.
Run from project root: python -m pytest tests/test_wav_io.py -v
"""
import sys
import os
import struct

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
import pytest
import torch
from notesynth.core.errors import BufferUnderrun, FileOpenFailure, WriteFailure
from notesynth.core.io import AudioIO, HEADER_SIZE

SR = 44100


def _header_fields(wav: bytes):
    return struct.unpack("<4sI4s4sIHHIIHH4sI", wav[:HEADER_SIZE])


def _pcm(wav: bytes) -> np.ndarray:
    return np.frombuffer(wav[HEADER_SIZE:], dtype="<i2")


# -----------------------------------------------------------------------------
# Header
# -----------------------------------------------------------------------------

def test_silent_buffer_round_trip():
    n = 1000
    wav = AudioIO.encode_wav(torch.zeros(n, dtype=torch.float64), n, SR)
    assert len(wav) == HEADER_SIZE + 2 * n
    assert wav[HEADER_SIZE:] == b"\x00" * (2 * n)
    assert _header_fields(wav) == (
        b"RIFF", 2 * n + 36, b"WAVE", b"fmt ", 16, 1, 1, SR, SR * 2, 2, 16, b"data", 2 * n,
    )


def test_header_literal_bytes():
    wav = AudioIO.encode_wav(np.zeros(44100), 44100, SR)
    assert wav[:HEADER_SIZE] == (
        b"RIFF" + (88236).to_bytes(4, "little") + b"WAVEfmt "
        + b"\x10\x00\x00\x00" + b"\x01\x00" + b"\x01\x00"
        + (44100).to_bytes(4, "little") + (88200).to_bytes(4, "little")
        + b"\x02\x00" + b"\x10\x00"
        + b"data" + (88200).to_bytes(4, "little")
    )


# -----------------------------------------------------------------------------
# Quantization
# -----------------------------------------------------------------------------

def test_clamp_and_truncate():
    samples = np.array([1.5, -2.0, 1.0, -1.0, 0.5, -0.5, 0.99999, 1e-6, -1e-6])
    pcm = _pcm(AudioIO.encode_wav(samples, len(samples), SR))
    assert pcm.tolist() == [32767, -32767, 32767, -32767, 16383, -16383, 32766, 0, 0]


def test_only_declared_samples_encoded():
    samples = torch.full((10,), 0.25, dtype=torch.float64)
    wav = AudioIO.encode_wav(samples, 4, SR)
    assert len(wav) == HEADER_SIZE + 8
    assert _pcm(wav).tolist() == [8191] * 4


def test_short_buffer_is_underrun():
    with pytest.raises(BufferUnderrun):
        AudioIO.encode_wav(np.zeros(10), 11, SR)


# -----------------------------------------------------------------------------
# File writing
# -----------------------------------------------------------------------------

def test_save_and_load(tmp_path):
    path = tmp_path / "out.wav"
    samples = np.linspace(-1.0, 1.0, 441)
    written = AudioIO.save_wav(samples, path, 441, SR)
    assert written == HEADER_SIZE + 882
    assert path.stat().st_size == written

    data, sr = AudioIO.load_wav(path)
    assert sr == SR
    assert data.dtype == np.int16
    np.testing.assert_array_equal(data, AudioIO.quantize(samples))
    assert list(tmp_path.iterdir()) == [path]


def test_save_into_missing_directory(tmp_path):
    with pytest.raises(FileOpenFailure):
        AudioIO.save_wav(np.zeros(10), tmp_path / "nope" / "out.wav", 10, SR)


def test_underrun_leaves_no_file(tmp_path):
    path = tmp_path / "out.wav"
    with pytest.raises(BufferUnderrun):
        AudioIO.save_wav(np.zeros(5), path, 10, SR)
    assert not path.exists()
    assert list(tmp_path.iterdir()) == []


def test_failed_write_cleans_up(tmp_path, monkeypatch):
    path = tmp_path / "out.wav"

    def _fail(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", _fail)
    with pytest.raises(WriteFailure):
        AudioIO.save_wav(np.zeros(10), path, 10, SR)
    assert list(tmp_path.iterdir()) == []


def test_load_missing_wav(tmp_path):
    with pytest.raises(FileOpenFailure):
        AudioIO.load_wav(tmp_path / "missing.wav")
