"""
Config resolution: deep-merge SYNTH_DEFAULTS with incoming overrides, then validate.
"""
import json
import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

from notesynth.core.errors import FileOpenFailure, InvalidArguments
from notesynth.params.defaults import SYNTH_DEFAULTS


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dicts. override values take precedence.
    Returns a new dict (does not mutate inputs).
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _validate(config: Dict[str, Any]) -> None:
    try:
        amplitude = float(config["note_amplitude"])
    except (TypeError, ValueError):
        raise InvalidArguments(f"note_amplitude must be a number, got {config['note_amplitude']!r}") from None
    if not math.isfinite(amplitude):
        raise InvalidArguments(f"note_amplitude must be finite, got {amplitude}")
    config["note_amplitude"] = amplitude

    for key in ("source_extension", "output_extension"):
        ext = config[key]
        if not isinstance(ext, str) or not ext.startswith(".") or len(ext) < 2:
            raise InvalidArguments(f"{key} must look like '.ext', got {ext!r}")


def resolve_config(overrides: Optional[dict] = None) -> Dict[str, Any]:
    """
    Resolve config by merging overrides onto SYNTH_DEFAULTS.
    Unknown keys are rejected so typos do not silently fall back to defaults.
    """
    overrides = overrides or {}
    if not isinstance(overrides, dict):
        raise InvalidArguments(f"Config overrides must be a mapping, got {type(overrides).__name__}")
    unknown = sorted(set(overrides) - set(SYNTH_DEFAULTS))
    if unknown:
        raise InvalidArguments(f"Unknown config keys: {', '.join(unknown)}")

    resolved = _deep_merge(SYNTH_DEFAULTS, overrides)
    _validate(resolved)
    return resolved


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a JSON object of overrides and resolve it."""
    try:
        with open(path, "r") as f:
            overrides = json.load(f)
    except OSError as e:
        raise FileOpenFailure(f"Unable to open config file: {path} ({e})") from e
    except json.JSONDecodeError as e:
        raise InvalidArguments(f"Config file {path} is not valid JSON ({e})") from e
    if not isinstance(overrides, dict):
        raise InvalidArguments(f"Config file {path} must hold a JSON object")
    return resolve_config(overrides)
