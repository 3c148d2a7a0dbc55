"""
Timeline synthesizer: allocates the song buffer and renders every note of a score into it.
"""
import logging
from typing import Optional

import torch

from notesynth.core.types import Score, SAMPLE_RATE
from notesynth.dsp.pitch import PitchResolver
from notesynth.dsp.renderer import NoteRenderer

logger = logging.getLogger(__name__)

NOTE_AMPLITUDE = 0.1


class TimelineSynthesizer:
    """
    Renders notes in score order into a zeroed float64 buffer of
    floor(total_beats * 60 / tempo * sample_rate) samples.
    Rendering is purely additive, so the result does not depend on note order
    beyond float summation order.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        amplitude: float = NOTE_AMPLITUDE,
        resolver: Optional[PitchResolver] = None,
        renderer: Optional[NoteRenderer] = None,
    ):
        self.sample_rate = sample_rate
        self.amplitude = amplitude
        self.resolver = resolver or PitchResolver()
        self.renderer = renderer or NoteRenderer(sample_rate)

    def allocate(self, score: Score) -> torch.Tensor:
        return torch.zeros(score.num_samples(self.sample_rate), dtype=torch.float64)

    def synthesize(self, score: Score) -> torch.Tensor:
        buffer = self.allocate(score)
        logger.debug(
            "Allocated %d samples (%.2f beats @ %.2f bpm, %d Hz)",
            buffer.shape[-1], score.total_beats, score.tempo_bpm, self.sample_rate,
        )

        # Resolve every pitch first so a bad note aborts before any rendering
        frequencies = [self.resolver.frequency(note.pitch) for note in score.notes]

        for note, freq in zip(score.notes, frequencies):
            start_s, duration_s = score.span_seconds(note)
            logger.debug("%s %.2fHz start=%.4fs dur=%.4fs", note.pitch.label, freq, start_s, duration_s)
            self.renderer.render(buffer, freq, duration_s, start_s, self.amplitude)

        logger.info("Generated %d notes", len(score.notes))
        return buffer
