"""Utility modules: constants, units, numerical guards, registry, logging."""

from __future__ import annotations

from reactor_calc.utils.constants import MINUTES_PER_HOUR, PROFILE_INTERVALS, R_GAS, RHO_REF
from reactor_calc.utils.logging import JSONFormatter, RequestTracer, setup_logging
from reactor_calc.utils.numerical import checked_power, require_finite
from reactor_calc.utils.registry import KINETICS_REGISTRY, REACTOR_REGISTRY, Registry
from reactor_calc.utils.units import UnitSpec, UnitSystem, convert, convert_parameters, resolve

__all__ = [
    "KINETICS_REGISTRY",
    "MINUTES_PER_HOUR",
    "PROFILE_INTERVALS",
    "REACTOR_REGISTRY",
    "RHO_REF",
    "R_GAS",
    "JSONFormatter",
    "Registry",
    "RequestTracer",
    "UnitSpec",
    "UnitSystem",
    "checked_power",
    "convert",
    "convert_parameters",
    "require_finite",
    "resolve",
    "setup_logging",
]
