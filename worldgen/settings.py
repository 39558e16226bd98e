"""User settings for atmosphere generation.

Read from a JSON file in the platform config directory:
  Linux:   ~/.config/worldgen/atmosphere.json
  macOS:   ~/Library/Application Support/worldgen/atmosphere.json
  Windows: C:/Users/.../AppData/Local/worldgen/atmosphere.json

Every key is optional; a missing file means defaults.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .constants import APP_NAME, CHLORINE_CHANCE, DEFAULT_SURFACE_GRAVITY, SETTINGS_FILENAME

logger = logging.getLogger(__name__)

SETTINGS_DIR = Path(user_config_dir(APP_NAME))
SETTINGS_FILE = SETTINGS_DIR / SETTINGS_FILENAME


class SettingsError(ValueError):
    """The settings file exists but cannot be used."""


@dataclass(frozen=True)
class GenerationSettings:
    """Knobs for a generation run."""

    seed: int | None = None
    surface_gravity: float = DEFAULT_SURFACE_GRAVITY  # In G
    chlorine_chance: float = CHLORINE_CHANCE

    def __post_init__(self) -> None:
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise SettingsError(f"seed must be an integer, got {self.seed!r}")
        if isinstance(self.surface_gravity, bool) or not isinstance(self.surface_gravity, (int, float)):
            raise SettingsError(f"surface_gravity must be a number, got {self.surface_gravity!r}")
        if not math.isfinite(self.surface_gravity) or self.surface_gravity < 0:
            raise SettingsError(f"surface_gravity must be finite and >= 0, got {self.surface_gravity}")
        if isinstance(self.chlorine_chance, bool) or not isinstance(self.chlorine_chance, (int, float)):
            raise SettingsError(f"chlorine_chance must be a number, got {self.chlorine_chance!r}")
        if not 0.0 <= self.chlorine_chance <= 1.0:  # Also rejects NaN
            raise SettingsError(f"chlorine_chance must be within 0–1, got {self.chlorine_chance}")


def _settings_from_dict(d: dict) -> GenerationSettings:
    return GenerationSettings(
        seed=d.get("seed"),
        surface_gravity=d.get("surface_gravity", DEFAULT_SURFACE_GRAVITY),
        chlorine_chance=d.get("chlorine_chance", CHLORINE_CHANCE),
    )


def load_settings(path: Path | None = None) -> GenerationSettings:
    """Load settings from ``path`` (default: the user config file)."""
    path = path if path is not None else SETTINGS_FILE
    if not path.exists():
        logger.debug("No settings at %s, using defaults", path)
        return GenerationSettings()
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as exc:
        raise SettingsError(f"Could not read settings from {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings in {path} must be a JSON object")
    return _settings_from_dict(data)
