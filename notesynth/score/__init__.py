"""
Score text format parsing.
"""
from notesynth.score.parser import parse_score, load_score

__all__ = ["parse_score", "load_score"]
