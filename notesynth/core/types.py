from dataclasses import dataclass, field
from typing import List, Tuple

SAMPLE_RATE = 44100


@dataclass(frozen=True)
class Pitch:
    code: str    # 2-char note code, e.g. "C#", "Bb", "E0"
    octave: int

    @property
    def letter(self) -> str:
        return self.code[0]

    @property
    def accidental(self) -> str:
        """'sharp', 'flat' or 'natural'."""
        return {"#": "sharp", "b": "flat"}.get(self.code[1], "natural")

    @property
    def label(self) -> str:
        return f"{self.code}{self.octave}"


@dataclass(frozen=True)
class Note:
    start_beat: float
    pitch: Pitch
    duration_beats: float


@dataclass(frozen=True)
class HarmonicComponent:
    relative_amplitude: float
    frequency_multiplier: int


@dataclass
class Score:
    tempo_bpm: float
    total_beats: float
    notes: List[Note] = field(default_factory=list)

    def num_samples(self, sample_rate: int = SAMPLE_RATE) -> int:
        """Buffer length: floor(total_beats * 60 / tempo * sample_rate)."""
        return int(self.total_beats * 60.0 / self.tempo_bpm * sample_rate)

    def span_seconds(self, note: Note) -> Tuple[float, float]:
        """(start_seconds, duration_seconds) for a note at this tempo."""
        return (
            note.start_beat * 60.0 / self.tempo_bpm,
            note.duration_beats * 60.0 / self.tempo_bpm,
        )
