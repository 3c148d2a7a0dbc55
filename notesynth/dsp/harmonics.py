"""
Static additive timbre: (relative amplitude, frequency multiplier) partials.
"""
from typing import Tuple

from notesynth.core.types import HarmonicComponent

# Piano-like spectrum, octave-spaced partials.
PIANO_HARMONICS: Tuple[HarmonicComponent, ...] = (
    HarmonicComponent(1.00, 1),
    HarmonicComponent(0.75, 2),
    HarmonicComponent(0.50, 4),
    HarmonicComponent(0.14, 8),
    HarmonicComponent(0.05, 16),
)
