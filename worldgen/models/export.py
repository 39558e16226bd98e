"""Plain-dict conversion of atmospheres for downstream pipeline stages."""

from __future__ import annotations

from .atmosphere import (
    AtmosphereCharacteristic,
    AtmosphereModel,
    MarginalAtmosphere,
    PressureCategory,
)


def atmosphere_to_dict(a: AtmosphereModel) -> dict:
    return {
        "mass": a.mass,
        "pressure": a.pressure,
        "pressure_category": a.pressure_category.value,
        "pressure_class_felt_by_life": a.pressure_class_felt_by_life.value,
        "marginal_atmosphere": a.marginal_atmosphere.value if a.marginal_atmosphere else None,
        "composition": list(a.composition),
        "characteristics": [c.value for c in a.characteristics],
    }


def atmosphere_from_dict(d: dict) -> AtmosphereModel:
    category = PressureCategory(d["pressure_category"])
    marginal = d.get("marginal_atmosphere")
    return AtmosphereModel(
        mass=d["mass"],
        pressure=d.get("pressure"),
        pressure_category=category,
        pressure_class_felt_by_life=PressureCategory(
            d.get("pressure_class_felt_by_life", category.value)
        ),
        marginal_atmosphere=MarginalAtmosphere(marginal) if marginal else None,
        composition=tuple(d.get("composition", [])),
        characteristics=tuple(AtmosphereCharacteristic(c) for c in d.get("characteristics", [])),
    )
