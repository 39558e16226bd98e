"""Tests for settings loading."""

import json

import pytest

from worldgen.models.atmosphere import generate_atmosphere
from worldgen.models.world_type import PlanetSize, PlanetType, WorldType
from worldgen.settings import GenerationSettings, SettingsError, load_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "nope.json")
    assert settings == GenerationSettings()
    assert settings.surface_gravity == 1.0
    assert settings.chlorine_chance == 1.0
    assert settings.seed is None


def test_loads_values_and_ignores_unknown_keys(tmp_path):
    path = tmp_path / "atmosphere.json"
    path.write_text(json.dumps({"seed": 99, "surface_gravity": 0.8, "colour": "blue"}))
    settings = load_settings(path)
    assert settings.seed == 99
    assert settings.surface_gravity == 0.8
    assert settings.chlorine_chance == 1.0


@pytest.mark.parametrize("content", [
    "{not json",
    "[1, 2, 3]",
    json.dumps({"seed": "abc"}),
    json.dumps({"surface_gravity": -1}),
    '{"surface_gravity": NaN}',
    '{"surface_gravity": Infinity}',
    '{"chlorine_chance": NaN}',
    json.dumps({"chlorine_chance": 1.5}),
])
def test_malformed_settings_raise(tmp_path, content):
    path = tmp_path / "atmosphere.json"
    path.write_text(content)
    with pytest.raises(SettingsError):
        load_settings(path)


def test_settings_seed_makes_generation_reproducible():
    settings = GenerationSettings(seed=2024)
    world = WorldType(PlanetSize.STANDARD, PlanetType.GARDEN)
    assert generate_atmosphere(world, settings=settings) == generate_atmosphere(world, settings=settings)
