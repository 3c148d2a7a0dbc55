"""
notesynth: render note-sequence scores to mono 16-bit WAV via additive synthesis.
"""
__version__ = "1.0.0"
