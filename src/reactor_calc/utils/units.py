"""Unit-system registry for SI, CGS and Imperial representations.

Every physical quantity maps to a :class:`UnitSpec` ``(factor, symbol)``
pair per unit system. ``factor`` multiplies a value expressed in the SI
base unit to give the value in that system, so SI factors are exactly 1
and converting between two systems goes through SI::

    value_si = value_old / factor_old
    value_new = value_si * factor_new

The rate-constant entry is synthesized from the concentration and time
entries because its dimensions, ``concentration**(1 - n) / time``, depend
on the reaction order ``n``.

The tables are built once at import and exposed read-only.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from reactor_calc.exceptions import DomainError, UnknownQuantityError, ValidationError
from reactor_calc.utils.numerical import checked_power, require_finite

logger = logging.getLogger(__name__)


class UnitSystem(str, Enum):
    """Supported unit systems."""

    SI = "SI"
    CGS = "CGS"
    IMPERIAL = "Imperial"


@dataclass(frozen=True)
class UnitSpec:
    """Conversion factor from SI and display symbol of one quantity."""

    factor: float
    symbol: str


RATE_CONSTANT = "rate_constant"

_TABLE: dict[UnitSystem, dict[str, UnitSpec]] = {
    UnitSystem.SI: {
        "concentration": UnitSpec(1.0, "kmol/m³"),
        "time": UnitSpec(1.0, "s"),
        "temperature": UnitSpec(1.0, "K"),
        "volume": UnitSpec(1.0, "m³"),
        "pressure": UnitSpec(1.0, "Pa"),
        "activation_energy": UnitSpec(1.0, "J/mol"),
        "heat_of_reaction": UnitSpec(1.0, "J/mol"),
        "heat_capacity": UnitSpec(1.0, "J/(kg·K)"),
        "heat_transfer_coefficient": UnitSpec(1.0, "W/(m²·K)"),
        "reaction_rate": UnitSpec(1.0, "kmol/(m³·s)"),
        "length": UnitSpec(1.0, "m"),
        "velocity": UnitSpec(1.0, "m/s"),
        "flow_rate": UnitSpec(1.0, "m³/s"),
    },
    UnitSystem.CGS: {
        "concentration": UnitSpec(1e-3, "mol/cm³"),
        "time": UnitSpec(1.0, "s"),
        "temperature": UnitSpec(1.0, "K"),
        "volume": UnitSpec(1e6, "cm³"),
        "pressure": UnitSpec(10.0, "dyn/cm²"),
        "activation_energy": UnitSpec(1e7, "erg/mol"),
        "heat_of_reaction": UnitSpec(1e7, "erg/mol"),
        "heat_capacity": UnitSpec(1e4, "erg/(g·K)"),
        "heat_transfer_coefficient": UnitSpec(1e3, "erg/(cm²·s·K)"),
        "reaction_rate": UnitSpec(1e-3, "mol/(cm³·s)"),
        "length": UnitSpec(100.0, "cm"),
        "velocity": UnitSpec(100.0, "cm/s"),
        "flow_rate": UnitSpec(1e6, "cm³/s"),
    },
    UnitSystem.IMPERIAL: {
        "concentration": UnitSpec(0.0624280, "lbmol/ft³"),
        "time": UnitSpec(1.0, "s"),
        "temperature": UnitSpec(1.8, "°R"),
        "volume": UnitSpec(35.3147, "ft³"),
        "pressure": UnitSpec(1.450377e-4, "psi"),
        "activation_energy": UnitSpec(0.429923, "BTU/lbmol"),
        "heat_of_reaction": UnitSpec(0.429923, "BTU/lbmol"),
        "heat_capacity": UnitSpec(2.388459e-4, "BTU/(lb·°R)"),
        "heat_transfer_coefficient": UnitSpec(0.176110, "BTU/(ft²·h·°R)"),
        "reaction_rate": UnitSpec(0.0624280, "lbmol/(ft³·s)"),
        "length": UnitSpec(3.28084, "ft"),
        "velocity": UnitSpec(3.28084, "ft/s"),
        "flow_rate": UnitSpec(35.3147, "ft³/s"),
    },
}

UNIT_TABLE: Mapping[UnitSystem, Mapping[str, UnitSpec]] = MappingProxyType(
    {system: MappingProxyType(entries) for system, entries in _TABLE.items()}
)

QUANTITIES: tuple[str, ...] = (*_TABLE[UnitSystem.SI].keys(), RATE_CONSTANT)

# Flat parameter names and the quantity each one carries. Names absent from
# this map (order, porosity, conversion, coefficients) are dimensionless.
FIELD_QUANTITIES: Mapping[str, str] = MappingProxyType(
    {
        "initial_concentration": "concentration",
        "initial_concentration_a": "concentration",
        "initial_concentration_b": "concentration",
        "initial_concentration_c": "concentration",
        "initial_concentration_d": "concentration",
        "reaction_time": "time",
        "rate_constant": RATE_CONSTANT,
        "pre_exponential_factor": RATE_CONSTANT,
        "temperature": "temperature",
        "initial_temperature": "temperature",
        "cooling_temperature": "temperature",
        "volume": "volume",
        "pressure": "pressure",
        "activation_energy": "activation_energy",
        "heat_of_reaction": "heat_of_reaction",
        "heat_capacity": "heat_capacity",
        "heat_transfer_coefficient": "heat_transfer_coefficient",
        "reaction_rate": "reaction_rate",
        "length": "length",
        "particle_diameter": "length",
        "superficial_velocity": "velocity",
        "flow_rate": "flow_rate",
    }
)


def as_unit_system(system: UnitSystem | str) -> UnitSystem:
    """Coerce a unit-system identifier (case-insensitive) to :class:`UnitSystem`.

    Raises:
        ValidationError: If the identifier names no known system.
    """
    if isinstance(system, UnitSystem):
        return system
    for candidate in UnitSystem:
        if str(system).lower() == candidate.value.lower():
            return candidate
    available = ", ".join(s.value for s in UnitSystem)
    raise ValidationError(f"Unknown unit system '{system}'. Available: {available}")


def _format_exponent(value: float) -> str:
    return f"{value:g}"


def _rate_constant_spec(system: UnitSystem, order: float) -> UnitSpec:
    concentration = UNIT_TABLE[system]["concentration"]
    time = UNIT_TABLE[system]["time"]
    factor = checked_power(concentration.factor, 1.0 - order, "Rate-constant unit factor")
    factor = require_finite(factor / time.factor, "Rate-constant unit factor")
    if factor == 0:
        raise DomainError(f"Rate-constant unit factor underflows at order {order:g}")
    if order == 1:
        symbol = f"{time.symbol}⁻¹"
    else:
        symbol = f"({concentration.symbol})^{_format_exponent(1.0 - order)}·{time.symbol}⁻¹"
    return UnitSpec(factor, symbol)


def resolve(
    system: UnitSystem | str,
    quantity: str,
    order: float | None = None,
) -> UnitSpec:
    """Look up the conversion factor and symbol of ``quantity`` in ``system``.

    Args:
        system: Unit system identifier.
        quantity: Physical quantity name (see :data:`QUANTITIES`).
        order: Reaction order, required for ``rate_constant``.

    Returns:
        The :class:`UnitSpec` for this quantity.

    Raises:
        UnknownQuantityError: If the quantity is not registered.
        ValidationError: If the system is unknown, or ``order`` is missing
            for ``rate_constant``.
        DomainError: If the rate-constant factor overflows at ``order``.
    """
    unit_system = as_unit_system(system)
    if quantity == RATE_CONSTANT:
        if order is None:
            raise ValidationError("Reaction order is required to resolve rate_constant units")
        return _rate_constant_spec(unit_system, float(order))

    entries = UNIT_TABLE[unit_system]
    if quantity not in entries:
        raise UnknownQuantityError(
            f"Quantity '{quantity}' is not registered for unit system {unit_system.value}"
        )
    return entries[quantity]


def convert(
    value: float,
    quantity: str,
    source: UnitSystem | str,
    target: UnitSystem | str,
    order: float | None = None,
) -> float:
    """Convert ``value`` of ``quantity`` from ``source`` to ``target`` units."""
    old = resolve(source, quantity, order)
    new = resolve(target, quantity, order)
    if old.factor == new.factor:
        return value
    return require_finite(value / old.factor * new.factor, f"Converted {quantity}")


def convert_parameters(
    params: Mapping[str, Any],
    source: UnitSystem | str,
    target: UnitSystem | str,
    order: float | None = None,
    field_quantities: Mapping[str, str] = FIELD_QUANTITIES,
) -> dict[str, Any]:
    """Re-express every unit-bearing field of a flat parameter mapping.

    Fields whose name does not appear in ``field_quantities`` and fields
    holding ``None`` are copied unchanged. A new dict is returned.

    Args:
        params: Flat mapping of parameter name to value.
        source: Unit system the values are currently expressed in.
        target: Unit system to convert to.
        order: Reaction order used for rate-constant fields. Defaults to
            ``params["reaction_order"]`` when present.
        field_quantities: Mapping of field name to quantity.
    """
    if order is None and params.get("reaction_order") is not None:
        order = float(params["reaction_order"])

    converted: dict[str, Any] = {}
    for name, value in params.items():
        quantity = field_quantities.get(name)
        if quantity is None or value is None:
            converted[name] = value
            continue
        converted[name] = convert(float(value), quantity, source, target, order)

    logger.debug(
        f"Converted {len(params)} parameters from {as_unit_system(source).value} "
        f"to {as_unit_system(target).value}"
    )
    return converted


def list_quantities() -> list[str]:
    """Registered quantity names, sorted."""
    return sorted(QUANTITIES)


def unit_table(system: UnitSystem | str, order: float = 1.0) -> dict[str, UnitSpec]:
    """Every quantity of ``system`` resolved, rate constant at ``order``."""
    return {quantity: resolve(system, quantity, order) for quantity in list_quantities()}


__all__ = [
    "FIELD_QUANTITIES",
    "QUANTITIES",
    "RATE_CONSTANT",
    "UNIT_TABLE",
    "UnitSpec",
    "UnitSystem",
    "as_unit_system",
    "convert",
    "convert_parameters",
    "list_quantities",
    "resolve",
    "unit_table",
]
