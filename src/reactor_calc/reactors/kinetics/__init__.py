"""Reaction kinetics models."""

from __future__ import annotations

from reactor_calc.reactors.kinetics.arrhenius import ArrheniusKinetics
from reactor_calc.reactors.kinetics.base import AbstractKinetics
from reactor_calc.reactors.kinetics.power_law import PowerLawKinetics
from reactor_calc.reactors.kinetics.rate_laws import (
    arrhenius_rate_constant,
    conversion_after,
    reaction_rate,
    residence_for,
)

__all__ = [
    "AbstractKinetics",
    "ArrheniusKinetics",
    "PowerLawKinetics",
    "arrhenius_rate_constant",
    "conversion_after",
    "reaction_rate",
    "residence_for",
]
