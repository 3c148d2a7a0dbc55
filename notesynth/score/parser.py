"""
Score text parser.

Format:
    line 1: tempo (beats per minute)
    line 2: song length (beats)
    rest:   <start_beat> <pitch_label> <duration_beats> [ignored...]
"""
import logging
import math
from pathlib import Path
from typing import List, Union

from notesynth.core.errors import FileOpenFailure, MalformedScore
from notesynth.core.types import Note, Score, SAMPLE_RATE
from notesynth.dsp.pitch import parse_pitch

logger = logging.getLogger(__name__)

# RIFF size fields are 32-bit: 2 * num_samples + 36 must fit
MAX_SAMPLES = (2 ** 32 - 1 - 36) // 2


def _parse_header_value(lines: List[str], index: int, name: str) -> float:
    if index >= len(lines):
        raise MalformedScore(f"Missing {name} on line {index + 1}")
    raw = lines[index].strip()
    try:
        value = float(raw)
    except ValueError:
        raise MalformedScore(f"Invalid {name} on line {index + 1}: {raw!r}") from None
    if not (math.isfinite(value) and value > 0):
        raise MalformedScore(f"{name} must be positive, got {raw!r}")
    return value


def _check_song_length(tempo: float, total_beats: float) -> None:
    num_samples = total_beats * 60.0 / tempo * SAMPLE_RATE
    if not math.isfinite(num_samples) or num_samples >= MAX_SAMPLES + 1:
        raise MalformedScore(
            f"Song of {total_beats} beats at {tempo} bpm does not fit in a WAV file"
        )


def parse_note_line(line: str, line_no: int) -> Note:
    fields = line.split()
    if len(fields) < 3:
        raise MalformedScore(f"Line {line_no}: expected '<start_beat> <pitch> <duration>', got {line.strip()!r}")
    start_raw, label, duration_raw = fields[:3]
    try:
        start_beat = float(start_raw)
        duration_beats = float(duration_raw)
    except ValueError:
        raise MalformedScore(f"Line {line_no}: non-numeric beat value in {line.strip()!r}") from None
    if not (math.isfinite(start_beat) and start_beat >= 0):
        raise MalformedScore(f"Line {line_no}: start beat must be >= 0, got {start_raw}")
    if not (math.isfinite(duration_beats) and duration_beats > 0):
        raise MalformedScore(f"Line {line_no}: duration must be > 0, got {duration_raw}")
    return Note(start_beat=start_beat, pitch=parse_pitch(label), duration_beats=duration_beats)


def parse_score(text: str) -> Score:
    lines = text.splitlines()
    tempo = _parse_header_value(lines, 0, "tempo")
    total_beats = _parse_header_value(lines, 1, "total beats")
    _check_song_length(tempo, total_beats)

    notes = []
    for line_no, line in enumerate(lines[2:], start=3):
        if not line.strip():
            continue
        note = parse_note_line(line, line_no)
        for beats in (note.start_beat, note.duration_beats):
            if not math.isfinite(beats * 60.0 / tempo * SAMPLE_RATE):
                raise MalformedScore(f"Line {line_no}: beat value {beats} out of range at {tempo} bpm")
        notes.append(note)

    logger.debug("Parsed score: tempo=%s total_beats=%s notes=%d", tempo, total_beats, len(notes))
    return Score(tempo_bpm=tempo, total_beats=total_beats, notes=notes)


def load_score(path: Union[str, Path]) -> Score:
    """Read and parse a score file."""
    try:
        with open(path, "r") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileOpenFailure(f"Unable to open input file: {path} ({e})") from e
    return parse_score(text)
