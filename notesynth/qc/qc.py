"""
Quality Control analysis for rendered songs.
Reports level, clipping and a content fingerprint; the encoder clamps to [-1, 1],
so clipped samples here are samples that will be flattened in the WAV.
"""
import hashlib
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import torch

from notesynth.core.io import AudioIO, PCM_SCALE
from notesynth.qc.thresholds import QC_THRESHOLDS


def _dbfs(x: float) -> float:
    """Convert linear amplitude to dBFS (full scale)."""
    if x <= 0:
        return float("-inf")
    return float(20.0 * np.log10(abs(x)))


def analyze(samples, sample_rate: int, thresholds: Optional[Dict] = None) -> Dict:
    """
    Analyze a sample buffer.

    Returns:
        {"status": "pass" | "warn", "peak", "peak_dbfs", "rms",
         "clipped_samples", "duration_s", "sha256", "warnings"}
    """
    thresholds = thresholds or QC_THRESHOLDS
    if isinstance(samples, torch.Tensor):
        data = samples.detach().cpu().numpy()
    else:
        data = np.asarray(samples, dtype=np.float64)
    data = data.reshape(-1)

    if data.size:
        peak = float(np.max(np.abs(data)))
        rms = float(np.sqrt(np.mean(data ** 2)))
    else:
        peak = rms = 0.0
    peak_dbfs = _dbfs(peak)
    clipped = int(np.count_nonzero(np.abs(data) > 1.0))

    warnings = []
    if clipped:
        warnings.append(f"{clipped} samples exceed full scale and will be clamped")
    elif peak_dbfs > thresholds["peak_dbfs_max"]:
        warnings.append(f"Peak {peak_dbfs:.2f} dBFS > {thresholds['peak_dbfs_max']:.2f} dBFS")
    if rms <= thresholds["silence_rms_max"]:
        warnings.append("Render is silent")

    return {
        "status": "warn" if warnings else "pass",
        "peak": peak,
        "peak_dbfs": peak_dbfs,
        "rms": rms,
        "clipped_samples": clipped,
        "duration_s": data.size / sample_rate,
        "sha256": hashlib.sha256(data.astype(np.float64).tobytes()).hexdigest(),
        "warnings": warnings,
    }


def analyze_wav(path: Union[str, Path], thresholds: Optional[Dict] = None) -> Dict:
    """Analyze a written 16-bit WAV file (samples rescaled by 1/32767)."""
    pcm, sample_rate = AudioIO.load_wav(path)
    return analyze(pcm.astype(np.float64) / PCM_SCALE, sample_rate, thresholds)
