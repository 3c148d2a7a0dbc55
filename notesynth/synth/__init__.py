"""
Song-level synthesis: timeline rendering and the score -> WAV pipeline.
"""
from notesynth.synth.timeline import TimelineSynthesizer, NOTE_AMPLITUDE

__all__ = ["TimelineSynthesizer", "NOTE_AMPLITUDE"]
