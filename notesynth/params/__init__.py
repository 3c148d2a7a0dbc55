"""
Synthesis configuration: canonical defaults and override resolution.
"""
from notesynth.params.defaults import SYNTH_DEFAULTS
from notesynth.params.resolve import resolve_config, load_config

__all__ = ["SYNTH_DEFAULTS", "resolve_config", "load_config"]
