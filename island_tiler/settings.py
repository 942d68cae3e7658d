# island_tiler/settings.py

"""
================================================================================
ISLAND GENERATION SETTINGS
================================================================================
This module defines the immutable configuration object passed into every
generation call, and the helpers that build it from user dictionaries or
JSON files.

Data Contract:
---------------
- Inputs:
    - A plain dictionary (or JSON file) of user overrides. Missing keys fall
      back to the constants in `config.py`.
- Outputs:
    - A validated, frozen `IslandConfig`.
- Side Effects: `load_config` reads a file from disk.
- Invariants: A constructed IslandConfig has passed `validate_config`.
================================================================================
"""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from . import config as DEFAULTS
from .errors import ConfigurationError


@dataclass(frozen=True)
class IslandConfig:
    width: int = DEFAULTS.DEFAULT_GRID_WIDTH
    height: int = DEFAULTS.DEFAULT_GRID_HEIGHT
    seed: float = DEFAULTS.DEFAULT_SEED
    scale: float = DEFAULTS.DEFAULT_SCALE
    magnitude: float = DEFAULTS.DEFAULT_MAGNITUDE
    cutoff: float = DEFAULTS.DEFAULT_CUTOFF
    border_fade_offset: float = DEFAULTS.DEFAULT_BORDER_FADE_OFFSET
    border_fade_y_range_from_height: bool = DEFAULTS.BORDER_FADE_Y_RANGE_FROM_HEIGHT
    noise_octaves: int = DEFAULTS.NOISE_OCTAVES
    noise_persistence: float = DEFAULTS.NOISE_PERSISTENCE
    noise_lacunarity: float = DEFAULTS.NOISE_LACUNARITY

    def __post_init__(self):
        validate_config(self)

    @classmethod
    def from_dict(cls, user_config: Dict[str, Any]) -> "IslandConfig":
        """
        Consolidates user overrides with the internal defaults.
        Unknown keys and values of the wrong type raise ConfigurationError;
        nothing is coerced.
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(user_config) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        parsed = {key: _FIELD_PARSERS[key](key, value) for key, value in user_config.items()}
        return cls(**parsed)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_changes(self, **changes) -> "IslandConfig":
        """Returns a copy with the given fields replaced (and re-validated)."""
        return replace(self, **changes)


def _parse_int(key: str, value: Any) -> int:
    """Accepts ints and integral floats (16.0), never bools."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}.")
    if isinstance(value, float) and not value.is_integer():
        raise ConfigurationError(f"{key} must be an integer, got {value!r}.")
    return int(value)


def _parse_float(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f"{key} must be a finite number, got {value!r}.")
    return float(value)


def _parse_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}.")
    return value


_FIELD_PARSERS = {
    'width': _parse_int,
    'height': _parse_int,
    'seed': _parse_float,
    'scale': _parse_float,
    'magnitude': _parse_float,
    'cutoff': _parse_float,
    'border_fade_offset': _parse_float,
    'border_fade_y_range_from_height': _parse_bool,
    'noise_octaves': _parse_int,
    'noise_persistence': _parse_float,
    'noise_lacunarity': _parse_float,
}


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigurationError(msg)


def _in_range(value: float, bounds: tuple) -> bool:
    low, high = bounds
    return low <= value <= high


def validate_dimensions(width: int, height: int) -> None:
    """Grid dimensions must be positive and even."""
    _require(width > 0 and height > 0, f"Grid dimensions must be positive, got {width}x{height}.")
    _require(
        width % 2 == 0 and height % 2 == 0,
        f"Grid dimensions must both be even, got {width}x{height}.",
    )


def validate_config(cfg: IslandConfig) -> None:
    """Raises ConfigurationError on the first failing check."""
    validate_dimensions(cfg.width, cfg.height)
    _require(cfg.scale > 0.0, f"scale must be > 0, got {cfg.scale}.")
    _require(
        _in_range(cfg.scale, DEFAULTS.SCALE_RANGE),
        f"scale must be within {DEFAULTS.SCALE_RANGE}, got {cfg.scale}.",
    )
    _require(
        _in_range(cfg.magnitude, DEFAULTS.MAGNITUDE_RANGE),
        f"magnitude must be within {DEFAULTS.MAGNITUDE_RANGE}, got {cfg.magnitude}.",
    )
    _require(
        _in_range(cfg.cutoff, DEFAULTS.CUTOFF_RANGE),
        f"cutoff must be within {DEFAULTS.CUTOFF_RANGE}, got {cfg.cutoff}.",
    )
    _require(
        _in_range(cfg.border_fade_offset, DEFAULTS.BORDER_FADE_OFFSET_RANGE),
        f"border_fade_offset must be within {DEFAULTS.BORDER_FADE_OFFSET_RANGE}, "
        f"got {cfg.border_fade_offset}.",
    )
    _require(cfg.noise_octaves >= 1, f"noise_octaves must be >= 1, got {cfg.noise_octaves}.")
    _require(cfg.noise_persistence > 0.0, "noise_persistence must be > 0.")
    _require(cfg.noise_lacunarity > 0.0, "noise_lacunarity must be > 0.")


def load_config(config_path: str) -> IslandConfig:
    """
    Loads an IslandConfig from a JSON file. The generation parameters live
    under the 'island_generation_parameters' key; a missing key yields defaults.
    """
    with open(config_path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path}: top level must be a JSON object.")
    params = data.get('island_generation_parameters', {})
    if not isinstance(params, dict):
        raise ConfigurationError(f"{config_path}: 'island_generation_parameters' must be a JSON object.")
    return IslandConfig.from_dict(params)
