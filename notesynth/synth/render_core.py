"""
Score -> WAV pipeline shared by the CLI and the HTTP app.
"""
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import torch

from notesynth.core.io import AudioIO
from notesynth.core.params import get_param
from notesynth.core.types import Score, SAMPLE_RATE
from notesynth.params.resolve import resolve_config
from notesynth.qc.qc import analyze
from notesynth.synth.timeline import TimelineSynthesizer

logger = logging.getLogger(__name__)


def synthesizer_from_config(config: Dict) -> TimelineSynthesizer:
    return TimelineSynthesizer(amplitude=get_param(config, "note_amplitude"))


def render_score(score: Score, config: Optional[Dict] = None) -> Tuple[torch.Tensor, int]:
    """Synthesize a score. Returns (buffer, num_samples to encode)."""
    config = config or resolve_config()
    synth = synthesizer_from_config(config)
    buffer = synth.synthesize(score)
    return buffer, score.num_samples(synth.sample_rate)


def render_to_bytes(score: Score, config: Optional[Dict] = None, qc: bool = False) -> Tuple[bytes, Dict]:
    """Render a score to in-memory WAV bytes plus render info."""
    config = config or resolve_config()
    buffer, num_samples = render_score(score, config)
    wav_bytes = AudioIO.encode_wav(buffer, num_samples)
    info = {"notes": len(score.notes), "num_samples": num_samples, "bytes": len(wav_bytes)}
    if qc:
        info["qc"] = analyze(buffer[:num_samples], SAMPLE_RATE)
    return wav_bytes, info


def render_to_file(
    score: Score,
    output_path: Union[str, Path],
    config: Optional[Dict] = None,
) -> Dict:
    """Render a score and write it as a WAV file. Returns render info."""
    config = config or resolve_config()
    buffer, num_samples = render_score(score, config)
    bytes_written = AudioIO.save_wav(buffer, output_path, num_samples)
    info = {
        "notes": len(score.notes),
        "num_samples": num_samples,
        "bytes": bytes_written,
        "wav_path": str(output_path),
    }
    return info
