"""
Quality Control module for evaluating rendered songs.
"""
from notesynth.qc.qc import analyze, analyze_wav
from notesynth.qc.thresholds import QC_THRESHOLDS

__all__ = ["analyze", "analyze_wav", "QC_THRESHOLDS"]
