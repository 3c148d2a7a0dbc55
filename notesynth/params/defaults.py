"""
Canonical synthesis defaults: single source for render and CLI configuration.
"""
from typing import Any, Dict

from notesynth.synth.timeline import NOTE_AMPLITUDE

SYNTH_DEFAULTS: Dict[str, Any] = {
    "note_amplitude": NOTE_AMPLITUDE,
    "source_extension": ".txt",
    "output_extension": ".wav",
}
