import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Tuple, Union

import numpy as np
import soundfile as sf
import torch

from notesynth.core.errors import BufferUnderrun, FileOpenFailure, WriteFailure
from notesynth.core.types import SAMPLE_RATE

logger = logging.getLogger(__name__)

PCM_SCALE = 32767
HEADER_SIZE = 44  # canonical RIFF/WAVE PCM header written by soundfile


def _to_numpy(waveform) -> np.ndarray:
    if isinstance(waveform, torch.Tensor):
        return waveform.detach().cpu().numpy()
    return np.asarray(waveform, dtype=np.float64)


class AudioIO:
    @staticmethod
    def quantize(waveform) -> np.ndarray:
        """Clamp to [-1, 1], scale by 32767, truncate toward zero."""
        data = np.clip(_to_numpy(waveform), -1.0, 1.0)
        return (data * PCM_SCALE).astype(np.int16)

    @staticmethod
    def encode_wav(waveform, num_samples: int, sample_rate: int = SAMPLE_RATE) -> bytes:
        """Returns a complete WAV file holding the first num_samples samples of waveform."""
        data = _to_numpy(waveform)
        if data.shape[-1] < num_samples:
            raise BufferUnderrun(
                f"Buffer holds {data.shape[-1]} samples, {num_samples} expected"
            )
        pcm = AudioIO.quantize(data[:num_samples])
        buffer = io.BytesIO()
        sf.write(buffer, pcm, sample_rate, format="WAV", subtype="PCM_16")
        return buffer.getvalue()

    @staticmethod
    def save_wav(
        waveform,
        path: Union[str, Path],
        num_samples: int,
        sample_rate: int = SAMPLE_RATE,
    ) -> int:
        """
        Encodes and writes a WAV file, returning the number of bytes written.
        Writes go to a temp file in the target directory which is renamed over
        path on success, so a failed write never leaves a partial WAV behind.
        """
        wav_bytes = AudioIO.encode_wav(waveform, num_samples, sample_rate)
        path = Path(path)
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
        except OSError as e:
            raise FileOpenFailure(f'Unable to open output file "{path}" ({e})') from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(wav_bytes)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise WriteFailure(f'Unable to write data to output file "{path}" ({e})') from e

        logger.info("Wrote %s (%d bytes)", path, len(wav_bytes))
        return len(wav_bytes)

    @staticmethod
    def load_wav(path: Union[str, Path]) -> Tuple[np.ndarray, int]:
        """Reads a mono 16-bit WAV file as (int16 samples, sample_rate)."""
        try:
            data, sample_rate = sf.read(str(path), dtype="int16", always_2d=False)
        except (RuntimeError, OSError) as e:
            raise FileOpenFailure(f"Unable to open WAV file: {path} ({e})") from e
        return data, sample_rate
