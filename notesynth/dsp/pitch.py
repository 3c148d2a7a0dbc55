"""
Pitch label -> frequency resolution.

A label is a 2-character note code (letter + accidental sign, where '#' is
sharp, 'b' is flat and '0' is natural) followed by an integer octave, e.g.
"C#4", "Bb3", "E05". Frequencies are equal-tempered, octave 5 is the
reference octave of the table below.
"""
import re
from types import MappingProxyType
from typing import Mapping

from notesynth.core.errors import InvalidOctave, InvalidPitch
from notesynth.core.types import Pitch

REFERENCE_OCTAVE = 5
CODE_LENGTH = 2

_OCTAVE_RE = re.compile(r"-?[0-9]+")


def create_base_frequencies() -> Mapping[str, float]:
    """Base frequency (Hz) of every note spelling at the reference octave."""
    return MappingProxyType({
        "Cb": 493.88, "C0": 523.25, "C#": 554.37,
        "Db": 554.37, "D0": 587.33, "D#": 622.25,
        "Eb": 622.25, "E0": 659.25, "E#": 698.46,
        "Fb": 659.25, "F0": 698.46, "F#": 739.99,
        "Gb": 739.99, "G0": 783.99, "G#": 830.61,
        "Ab": 830.61, "A0": 880.00, "A#": 932.33,
        "Bb": 932.33, "B0": 987.77, "B#": 1046.50,
    })


BASE_FREQUENCIES = create_base_frequencies()


def parse_pitch(label: str, table: Mapping[str, float] = BASE_FREQUENCIES) -> Pitch:
    """
    Split a pitch label into note code and octave.
    Raises InvalidPitch for an unknown code, InvalidOctave for a non-integer octave.
    """
    code, octave_str = label[:CODE_LENGTH], label[CODE_LENGTH:]
    if code not in table:
        raise InvalidPitch(f"Invalid note: {label!r}")
    if not _OCTAVE_RE.fullmatch(octave_str):
        raise InvalidOctave(f"Invalid octave: {octave_str!r} in {label!r}")
    return Pitch(code=code, octave=int(octave_str))


class PitchResolver:
    """Maps pitch labels to frequencies using an immutable base-frequency table."""

    def __init__(self, table: Mapping[str, float] = BASE_FREQUENCIES):
        self.table = table

    def frequency(self, pitch: Pitch) -> float:
        try:
            base = self.table[pitch.code]
        except KeyError:
            raise InvalidPitch(f"Invalid note: {pitch.label!r}") from None
        return base * 2.0 ** (pitch.octave - REFERENCE_OCTAVE)

    def resolve(self, label: str) -> float:
        return self.frequency(parse_pitch(label, self.table))


_default_resolver = PitchResolver()


def resolve_frequency(label: str) -> float:
    """Resolve a pitch label with the default table."""
    return _default_resolver.resolve(label)
