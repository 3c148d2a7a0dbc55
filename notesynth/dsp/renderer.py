"""
Note renderer: additive mix of a note's harmonics into a shared sample buffer.
Pure accumulation; nothing is clipped or normalized here (the WAV encoder clamps).
"""
import logging
from typing import Sequence

import torch

from notesynth.core.types import HarmonicComponent, SAMPLE_RATE
from notesynth.dsp.harmonics import PIANO_HARMONICS
from notesynth.dsp.oscillators import Oscillator

logger = logging.getLogger(__name__)


class NoteRenderer:
    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        harmonics: Sequence[HarmonicComponent] = PIANO_HARMONICS,
    ):
        self.sample_rate = sample_rate
        self.harmonics = tuple(harmonics)

    def render(
        self,
        buffer: torch.Tensor,
        frequency: float,
        duration_seconds: float,
        start_seconds: float,
        amplitude: float,
    ) -> int:
        """
        Add the note into buffer[start_sample : start_sample + num_samples].

        Samples that would land past the end of the buffer are dropped.
        Returns the number of samples written per harmonic.
        """
        num_samples = int(duration_seconds * self.sample_rate)
        start_sample = int(start_seconds * self.sample_rate)
        if start_sample < 0:
            raise ValueError(f"start_seconds must be >= 0, got {start_seconds}")

        # Truncate at the buffer end
        n = max(0, min(num_samples, buffer.shape[-1] - start_sample))
        if n < num_samples:
            logger.debug(
                "Note at %.3fs truncated: %d of %d samples fit", start_seconds, n, num_samples
            )
        if n == 0:
            return 0

        region = buffer[start_sample:start_sample + n]
        for harmonic in self.harmonics:
            partial = Oscillator.sine(frequency * harmonic.frequency_multiplier, n, self.sample_rate)
            region += amplitude * harmonic.relative_amplitude * partial
        return n
