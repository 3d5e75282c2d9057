"""Stoichiometry and lumped heat balance."""

from __future__ import annotations

from reactor_calc.physics.energy_balance import (
    BedTemperatureProfile,
    ProfilePoint,
    TemperatureEnvelope,
    ThermalState,
    effective_heat_transfer,
    temperature_after,
    temperature_envelope,
)
from reactor_calc.physics.stoichiometry import (
    LimitingReactant,
    ReactionScheme,
    Stoichiometry,
    extents,
    final_amounts,
    limiting_reactant,
    reaction_extent,
)

__all__ = [
    "BedTemperatureProfile",
    "LimitingReactant",
    "ProfilePoint",
    "ReactionScheme",
    "Stoichiometry",
    "TemperatureEnvelope",
    "ThermalState",
    "effective_heat_transfer",
    "extents",
    "final_amounts",
    "limiting_reactant",
    "reaction_extent",
    "temperature_after",
    "temperature_envelope",
]
