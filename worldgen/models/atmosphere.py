"""Atmosphere generation for classified worlds.

Follows the ruleset's atmosphere steps: a world's (size, type) pair decides
whether it keeps an atmosphere, how massive it is, what it is made of and
how hazardous it is. Garden worlds may additionally roll a marginal
atmosphere that adds trace compounds or shifts the pressure felt by life.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field

from ..constants import (
    CHLORINE_CHANCE,
    MARGINAL_ATMOSPHERE_GATE,
    MASS_JITTER,
    MASS_MODULUS,
    MASS_PRECISION,
    MAX_ROLL,
    MIN_ROLL,
    PRESSURE_CATEGORY_BOUNDS,
    PRESSURE_PRECISION,
    SMALL_ICE_TOXICITY_GATE,
    STANDARD_ICE_OCEAN_TOXICITY_GATE,
)
from ..settings import GenerationSettings
from .dice import Dice, DiceRoller
from .world_type import PlanetSize, PlanetType, WorldType

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class AtmosphereError(Exception):
    """Base class for atmosphere generation failures."""


class UnsupportedWorldConfiguration(AtmosphereError, ValueError):
    """The (size, type) pair has no atmosphere table entry."""

    def __init__(self, world_type: WorldType) -> None:
        self.world_type = world_type
        super().__init__(
            f"Combination of planet size {world_type.size.value} and type "
            f"{world_type.type.value} not found. Could not determine atmosphere."
        )


class GenerationDefect(AtmosphereError, RuntimeError):
    """A roll fell outside the range a table was written for."""

    def __init__(self, roll: int) -> None:
        self.roll = roll
        super().__init__(
            f"Couldn't generate marginal atmosphere: roll {roll} outside "
            f"{MIN_ROLL}–{MAX_ROLL}."
        )


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------


class PressureCategory(enum.Enum):
    """Pressure buckets, ordered thinnest to densest."""

    TRACE = "trace"
    VERY_THIN = "very_thin"
    THIN = "thin"
    STANDARD = "standard"
    DENSE = "dense"
    VERY_DENSE = "very_dense"
    SUPER_DENSE = "super_dense"

    @property
    def ordinal(self) -> int:
        return _PRESSURE_ORDER.index(self)

    def shifted(self, steps: int) -> PressureCategory:
        """Category ``steps`` buckets away, clamped to TRACE..SUPER_DENSE."""
        index = min(max(self.ordinal + steps, 0), len(_PRESSURE_ORDER) - 1)
        return _PRESSURE_ORDER[index]


_PRESSURE_ORDER = list(PressureCategory)


class AtmosphereCharacteristic(enum.Enum):
    """Hazards an atmosphere poses to unprotected humans."""

    SUFFOCATING = "suffocating"
    MILDLY_TOXIC = "mildly_toxic"
    HIGHLY_TOXIC = "highly_toxic"
    LETHALLY_TOXIC = "lethally_toxic"
    CORROSIVE = "corrosive"


class MarginalAtmosphere(enum.Enum):
    """Secondary traits of an otherwise breathable Garden atmosphere."""

    CHLORINE_OR_FLUORINE = "chlorine_or_fluorine"
    SULPHUR_COMPOUNDS = "sulphur_compounds"
    NITROGEN_COMPOUNDS = "nitrogen_compounds"
    ORGANIC_TOXINS = "organic_toxins"
    LOW_OXYGEN = "low_oxygen"
    POLLUTANTS = "pollutants"
    HIGH_CARBON_DIOXIDE = "high_carbon_dioxide"
    HIGH_OXYGEN = "high_oxygen"
    INERT_GASES = "inert_gases"


@dataclass(frozen=True)
class AtmosphereModel:
    """The atmosphere of one world. Built once, never mutated."""

    mass: float
    pressure: float | None  # Atmospheres; None for gas giants
    pressure_category: PressureCategory
    pressure_class_felt_by_life: PressureCategory
    marginal_atmosphere: MarginalAtmosphere | None = None
    composition: tuple[str, ...] = ()
    characteristics: tuple[AtmosphereCharacteristic, ...] = ()

    @property
    def is_breathable(self) -> bool:
        return not self.characteristics


# ---------------------------------------------------------------------------
# Eligibility & mass
# ---------------------------------------------------------------------------

_S, _T = PlanetSize, PlanetType

_ATMOSPHERE_ALLOWED: frozenset[tuple[PlanetSize, PlanetType]] = frozenset({
    (_S.SMALL, _T.ICE),
    (_S.STANDARD, _T.AMMONIA), (_S.LARGE, _T.AMMONIA),
    (_S.STANDARD, _T.ICE), (_S.STANDARD, _T.OCEAN),
    (_S.LARGE, _T.ICE), (_S.LARGE, _T.OCEAN),
    (_S.STANDARD, _T.GARDEN), (_S.LARGE, _T.GARDEN),
    (_S.STANDARD, _T.GREENHOUSE), (_S.LARGE, _T.GREENHOUSE),
    (_S.SPECIAL, _T.GAS_GIANT),
})


def can_have_atmosphere(world_type: WorldType) -> bool:
    """Whether worlds of this size and type retain an atmosphere."""
    return world_type.key in _ATMOSPHERE_ALLOWED


def _mass_disqualified(world_type: WorldType) -> bool:
    size, kind = world_type.key
    return (
        kind == _T.ASTEROID_BELT
        or size == _S.TINY
        or (size == _S.SMALL and kind in (_T.HADEAN, _T.ROCK))
        or (size == _S.STANDARD and kind in (_T.HADEAN, _T.CHTHONIAN))
        or (size == _S.LARGE and kind == _T.CHTHONIAN)
    )


def generate_atmospheric_mass(world_type: WorldType, dice: DiceRoller) -> float:
    """Roll atmospheric mass. Airless worlds get exactly 0 and consume no rolls."""
    if _mass_disqualified(world_type) or not can_have_atmosphere(world_type):
        return 0.0

    base_mass = dice.basic_roll() % MASS_MODULUS
    variation = (dice.random() * 2 - 1) * MASS_JITTER
    return max(round(base_mass + variation, MASS_PRECISION), 0.0)


# ---------------------------------------------------------------------------
# Base composition & characteristics
# ---------------------------------------------------------------------------

_C = AtmosphereCharacteristic


@dataclass(frozen=True)
class RollGate:
    """Pick ``at_or_below`` if a basic roll is <= ``threshold``, else ``above``."""

    threshold: int
    at_or_below: tuple[AtmosphereCharacteristic, ...]
    above: tuple[AtmosphereCharacteristic, ...]


@dataclass(frozen=True)
class BaseAtmosphere:
    """Table entry for one (size, type) pair."""

    composition: tuple[str, ...]
    characteristics: tuple[AtmosphereCharacteristic, ...] = ()
    gate: RollGate | None = None


_TOXIC_CORROSIVE = (_C.SUFFOCATING, _C.LETHALLY_TOXIC, _C.CORROSIVE)

_ICE_OCEAN_STANDARD = BaseAtmosphere(
    composition=("Nitrogen", "Carbon Dioxide"),
    gate=RollGate(
        threshold=STANDARD_ICE_OCEAN_TOXICITY_GATE,
        at_or_below=(_C.SUFFOCATING,),
        above=(_C.SUFFOCATING, _C.MILDLY_TOXIC),
    ),
)
_ICE_OCEAN_LARGE = BaseAtmosphere(
    composition=("Helium", "Nitrogen"),
    characteristics=(_C.SUFFOCATING, _C.HIGHLY_TOXIC),
)
_GREENHOUSE = BaseAtmosphere(
    composition=("Carbon Dioxide", "Nitrogen"),
    characteristics=_TOXIC_CORROSIVE,
)

BASE_ATMOSPHERES: dict[tuple[PlanetSize, PlanetType], BaseAtmosphere] = {
    (_S.SMALL, _T.ICE): BaseAtmosphere(
        composition=("Nitrogen", "Methane"),
        gate=RollGate(
            threshold=SMALL_ICE_TOXICITY_GATE,
            at_or_below=(_C.SUFFOCATING, _C.MILDLY_TOXIC),
            above=(_C.SUFFOCATING, _C.HIGHLY_TOXIC),
        ),
    ),
    (_S.STANDARD, _T.AMMONIA): BaseAtmosphere(
        composition=("Nitrogen", "Ammonia", "Methane"),
        characteristics=_TOXIC_CORROSIVE,
    ),
    (_S.LARGE, _T.AMMONIA): BaseAtmosphere(
        composition=("Helium", "Ammonia", "Methane"),
        characteristics=_TOXIC_CORROSIVE,
    ),
    (_S.STANDARD, _T.ICE): _ICE_OCEAN_STANDARD,
    (_S.STANDARD, _T.OCEAN): _ICE_OCEAN_STANDARD,
    (_S.LARGE, _T.ICE): _ICE_OCEAN_LARGE,
    (_S.LARGE, _T.OCEAN): _ICE_OCEAN_LARGE,
    (_S.STANDARD, _T.GARDEN): BaseAtmosphere(composition=("Nitrogen", "Oxygen")),
    (_S.LARGE, _T.GARDEN): BaseAtmosphere(composition=("Nitrogen", "Noble gases", "Oxygen")),
    (_S.STANDARD, _T.GREENHOUSE): _GREENHOUSE,
    (_S.LARGE, _T.GREENHOUSE): _GREENHOUSE,
    (_S.SPECIAL, _T.GAS_GIANT): BaseAtmosphere(
        composition=("Hydrogen", "Helium"),
        characteristics=(_C.SUFFOCATING, _C.LETHALLY_TOXIC),
    ),
}

# Multiplier from mass to surface pressure (at 1 G); gas giants have none.
PRESSURE_FACTORS: dict[tuple[PlanetSize, PlanetType], float] = {
    (_S.SMALL, _T.ICE): 10.0,
    (_S.STANDARD, _T.AMMONIA): 1.0,
    (_S.STANDARD, _T.ICE): 1.0,
    (_S.STANDARD, _T.OCEAN): 1.0,
    (_S.STANDARD, _T.GARDEN): 1.0,
    (_S.STANDARD, _T.GREENHOUSE): 100.0,
    (_S.LARGE, _T.AMMONIA): 5.0,
    (_S.LARGE, _T.ICE): 5.0,
    (_S.LARGE, _T.OCEAN): 5.0,
    (_S.LARGE, _T.GARDEN): 5.0,
    (_S.LARGE, _T.GREENHOUSE): 500.0,
}


def _base_entry(world_type: WorldType) -> BaseAtmosphere:
    try:
        return BASE_ATMOSPHERES[world_type.key]
    except KeyError:
        raise UnsupportedWorldConfiguration(world_type) from None


def resolve_base_atmosphere(
    world_type: WorldType, dice: DiceRoller,
) -> tuple[tuple[str, ...], tuple[AtmosphereCharacteristic, ...]]:
    """Base composition and characteristics, rolling only for gated pairs."""
    return _roll_base_atmosphere(_base_entry(world_type), dice)


def _roll_base_atmosphere(
    entry: BaseAtmosphere, dice: DiceRoller,
) -> tuple[tuple[str, ...], tuple[AtmosphereCharacteristic, ...]]:
    if entry.gate is None:
        return entry.composition, entry.characteristics

    roll = dice.basic_roll()
    if roll <= entry.gate.threshold:
        return entry.composition, entry.gate.at_or_below
    return entry.composition, entry.gate.above


# ---------------------------------------------------------------------------
# Marginal atmospheres
# ---------------------------------------------------------------------------

_M = MarginalAtmosphere

# Inclusive (low, high) roll ranges; together they cover MIN_ROLL..MAX_ROLL.
_MARGINAL_TABLE: list[tuple[int, int, MarginalAtmosphere]] = [
    (3, 4, _M.CHLORINE_OR_FLUORINE),
    (5, 6, _M.SULPHUR_COMPOUNDS),
    (7, 7, _M.NITROGEN_COMPOUNDS),
    (8, 9, _M.ORGANIC_TOXINS),
    (10, 11, _M.LOW_OXYGEN),
    (12, 13, _M.POLLUTANTS),
    (14, 14, _M.HIGH_CARBON_DIOXIDE),
    (15, 16, _M.HIGH_OXYGEN),
    (17, 18, _M.INERT_GASES),
]


@dataclass(frozen=True)
class MarginalEffect:
    """What a marginal atmosphere adds on top of the base atmosphere."""

    compounds: tuple[str, ...] = ()
    characteristics: tuple[AtmosphereCharacteristic, ...] = ()
    pressure_shift: int = 0


def select_marginal_atmosphere(roll: int) -> MarginalAtmosphere:
    """Look up a variant on the marginal atmosphere table."""
    for low, high, variant in _MARGINAL_TABLE:
        if low <= roll <= high:
            return variant
    logger.error("Marginal atmosphere roll %d outside %d–%d", roll, MIN_ROLL, MAX_ROLL)
    raise GenerationDefect(roll)


def roll_marginal_atmosphere(dice: DiceRoller) -> MarginalAtmosphere | None:
    """Gate roll, then table roll. None when the gate is missed."""
    if dice.basic_roll() < MARGINAL_ATMOSPHERE_GATE:
        return None
    return select_marginal_atmosphere(dice.basic_roll())


# Fixed effects; CHLORINE_OR_FLUORINE picks its compound at roll time.
_MARGINAL_EFFECTS: dict[MarginalAtmosphere, MarginalEffect] = {
    _M.SULPHUR_COMPOUNDS: MarginalEffect(
        ("Hydrogen Sulfide", "Sulfur Dioxide", "Sulfur Trioxide"), (_C.MILDLY_TOXIC,),
    ),
    _M.NITROGEN_COMPOUNDS: MarginalEffect(("Nitrogen Oxide",), (_C.MILDLY_TOXIC,)),
    _M.ORGANIC_TOXINS: MarginalEffect(("Spores",), (_C.MILDLY_TOXIC,)),
    _M.LOW_OXYGEN: MarginalEffect(pressure_shift=-1),
    _M.POLLUTANTS: MarginalEffect(characteristics=(_C.MILDLY_TOXIC,)),
    _M.HIGH_CARBON_DIOXIDE: MarginalEffect(("Carbon Dioxide",), (_C.MILDLY_TOXIC,)),
    _M.HIGH_OXYGEN: MarginalEffect(pressure_shift=1),
    _M.INERT_GASES: MarginalEffect(),
}


def marginal_effects(
    variant: MarginalAtmosphere,
    dice: DiceRoller,
    chlorine_chance: float = CHLORINE_CHANCE,
) -> MarginalEffect:
    """Additive effects of a marginal atmosphere."""
    if variant == _M.CHLORINE_OR_FLUORINE:
        compound = "Chlorine" if dice.random() < chlorine_chance else "Fluorine"
        return MarginalEffect((compound,), (_C.HIGHLY_TOXIC,))
    return _MARGINAL_EFFECTS[variant]


# ---------------------------------------------------------------------------
# Pressure
# ---------------------------------------------------------------------------


def classify_pressure(pressure: float) -> PressureCategory:
    """Bucket a surface pressure (in atmospheres)."""
    if pressure < PRESSURE_CATEGORY_BOUNDS[0][1]:
        return PressureCategory.TRACE
    for value, upper in PRESSURE_CATEGORY_BOUNDS[1:]:
        if pressure <= upper:
            return PressureCategory(value)
    return PressureCategory.SUPER_DENSE


def surface_pressure(world_type: WorldType, mass: float, surface_gravity: float) -> float | None:
    """Mass x pressure factor x gravity, or None where no factor applies."""
    factor = PRESSURE_FACTORS.get(world_type.key)
    if factor is None:
        return None
    return round(mass * factor * surface_gravity, PRESSURE_PRECISION)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@dataclass
class _Overlay:
    composition: list[str] = field(default_factory=list)
    characteristics: list[AtmosphereCharacteristic] = field(default_factory=list)

    def add(self, effect: MarginalEffect) -> None:
        self.composition.extend(effect.compounds)
        for characteristic in effect.characteristics:
            if characteristic not in self.characteristics:
                self.characteristics.append(characteristic)


def generate_atmosphere(
    world_type: WorldType,
    dice: DiceRoller | None = None,
    surface_gravity: float | None = None,
    settings: GenerationSettings | None = None,
) -> AtmosphereModel:
    """Generate the atmosphere of a world of the given size and type.

    Raises UnsupportedWorldConfiguration before consuming any rolls if the
    pair has no atmosphere; filter with ``can_have_atmosphere`` first.
    Raises ValueError for a negative or non-finite surface gravity.
    """
    if settings is None:
        settings = GenerationSettings()
    if dice is None:
        dice = Dice(settings.seed)
    if surface_gravity is None:
        surface_gravity = settings.surface_gravity
    if not math.isfinite(surface_gravity) or surface_gravity < 0:
        raise ValueError(f"surface_gravity must be finite and >= 0, got {surface_gravity}")

    entry = _base_entry(world_type)

    mass = generate_atmospheric_mass(world_type, dice)
    composition, characteristics = _roll_base_atmosphere(entry, dice)
    overlay = _Overlay(list(composition), list(characteristics))

    marginal: MarginalAtmosphere | None = None
    pressure_shift = 0
    if world_type.type == _T.GARDEN:
        marginal = roll_marginal_atmosphere(dice)
        if marginal is not None:
            effect = marginal_effects(marginal, dice, settings.chlorine_chance)
            overlay.add(effect)
            pressure_shift = effect.pressure_shift
            logger.debug("%s rolled marginal atmosphere %s", world_type, marginal.value)

    pressure = surface_pressure(world_type, mass, surface_gravity)
    category = PressureCategory.SUPER_DENSE if pressure is None else classify_pressure(pressure)

    logger.debug("%s atmosphere: mass=%.2f pressure=%s (%s)", world_type, mass, pressure, category.value)

    return AtmosphereModel(
        mass=mass,
        pressure=pressure,
        pressure_category=category,
        pressure_class_felt_by_life=category.shifted(pressure_shift),
        marginal_atmosphere=marginal,
        composition=tuple(overlay.composition),
        characteristics=tuple(overlay.characteristics),
    )
