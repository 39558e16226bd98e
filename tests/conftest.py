"""Shared fixtures for the worldgen test suite."""

from __future__ import annotations

import pytest


class ScriptedDice:
    """Replays fixed basic rolls and random floats, in order."""

    def __init__(self, rolls=(), randoms=()):
        self.rolls = list(rolls)
        self.randoms = list(randoms)

    def basic_roll(self) -> int:
        if not self.rolls:
            raise AssertionError("unexpected basic_roll()")
        return self.rolls.pop(0)

    def random(self) -> float:
        if not self.randoms:
            raise AssertionError("unexpected random()")
        return self.randoms.pop(0)

    @property
    def exhausted(self) -> bool:
        return not self.rolls and not self.randoms


@pytest.fixture
def scripted():
    """Factory: scripted(rolls=[...], randoms=[...])."""
    return ScriptedDice
