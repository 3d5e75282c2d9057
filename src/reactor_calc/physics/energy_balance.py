"""Lumped energy balance for reactor temperature estimates.

Final temperature after a residence measure::

    T_f = T0 + dHr * xi / (Cp * rho_ref) - U * (T0 - Tc) * (tau / 60) / (Cp * rho_ref)

where ``xi`` is the extent of reaction, ``rho_ref = 1000`` a fixed
mass-basis normalization and ``tau / 60`` converts the residence measure
from minutes to hours. This is an approximation, not a rigorous energy
balance: there is no mass-flow term and ``dHr`` enters with the sign it is
given.

Packed beds use a bed-averaged transfer coefficient
``U_eff = U * (1 - eps) / dp`` and the axial profile::

    T(x) = Tc + dHr / (F * Cp) * (1 - exp(-U_eff * x / (F * Cp)))

sampled at equally spaced positions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from reactor_calc.exceptions import DomainError
from reactor_calc.utils.constants import MINUTES_PER_HOUR, PROFILE_INTERVALS, RHO_REF

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThermalState:
    """Thermal inputs of one calculation.

    ``initial_temperature`` is only needed by the lumped balance; the packed
    bed profile starts from the cooling temperature.
    """

    heat_of_reaction: float
    heat_capacity: float
    heat_transfer_coefficient: float
    cooling_temperature: float
    initial_temperature: float | None = None


def temperature_after(
    initial_temperature: float,
    heat_of_reaction: float,
    heat_capacity: float,
    heat_transfer_coefficient: float,
    cooling_temperature: float,
    extent: float,
    residence: float,
) -> float:
    """Final temperature from the lumped heat balance.

    Args:
        initial_temperature: T0.
        heat_of_reaction: dHr, negative for exothermic reactions.
        heat_capacity: Cp.
        heat_transfer_coefficient: U.
        cooling_temperature: Tc.
        extent: Extent of reaction (limiting ratio times conversion).
        residence: Residence measure, normalized from minutes to hours.

    Raises:
        DomainError: If ``Cp <= 0``, ``U < 0`` or ``residence < 0``.
    """
    if heat_capacity <= 0:
        raise DomainError(f"Heat capacity must be positive, got {heat_capacity}")
    if heat_transfer_coefficient < 0:
        raise DomainError(
            f"Heat transfer coefficient must be non-negative, got {heat_transfer_coefficient}"
        )
    if residence < 0:
        raise DomainError(f"Residence measure must be non-negative, got {residence}")

    thermal_mass = heat_capacity * RHO_REF
    reaction_heat = heat_of_reaction * extent
    cooling_heat = (
        heat_transfer_coefficient
        * (initial_temperature - cooling_temperature)
        * residence
        / MINUTES_PER_HOUR
    )
    return float(initial_temperature + reaction_heat / thermal_mass - cooling_heat / thermal_mass)


def effective_heat_transfer(
    heat_transfer_coefficient: float,
    porosity: float,
    particle_diameter: float,
) -> float:
    """Bed-averaged coefficient ``U * (1 - eps) / dp``.

    Raises:
        DomainError: If ``eps`` is outside ``[0, 1)`` or ``dp <= 0``.
    """
    if not 0.0 <= porosity < 1.0:
        raise DomainError(f"Bed porosity must lie in [0, 1), got {porosity}")
    if particle_diameter <= 0:
        raise DomainError(f"Particle diameter must be positive, got {particle_diameter}")
    return heat_transfer_coefficient * (1.0 - porosity) / particle_diameter


@dataclass(frozen=True)
class ProfilePoint:
    position: float
    temperature: float


@dataclass(frozen=True)
class BedTemperatureProfile:
    """Temperature sampled at equally spaced positions along a packed bed.

    Iterating yields ``intervals + 1`` :class:`ProfilePoint` values from the
    inlet to the outlet. Points are computed lazily and the profile can be
    iterated any number of times.
    """

    bed_length: float
    heat_of_reaction: float
    flow_rate: float
    heat_capacity: float
    effective_coefficient: float
    cooling_temperature: float
    intervals: int = PROFILE_INTERVALS

    def __post_init__(self) -> None:
        if self.bed_length <= 0:
            raise DomainError(f"Bed length must be positive, got {self.bed_length}")
        if self.flow_rate <= 0:
            raise DomainError(f"Flow rate must be positive, got {self.flow_rate}")
        if self.heat_capacity <= 0:
            raise DomainError(f"Heat capacity must be positive, got {self.heat_capacity}")
        if self.intervals < 1:
            raise DomainError(f"Profile needs at least one interval, got {self.intervals}")

    def temperature_at(self, position: float) -> float:
        heat_flow = self.flow_rate * self.heat_capacity
        approach = -np.expm1(-self.effective_coefficient * position / heat_flow)
        return float(self.cooling_temperature + self.heat_of_reaction / heat_flow * approach)

    def __iter__(self) -> Iterator[ProfilePoint]:
        step = self.bed_length / self.intervals
        for i in range(self.intervals + 1):
            position = i * step
            yield ProfilePoint(position, self.temperature_at(position))

    def __len__(self) -> int:
        return self.intervals + 1


@dataclass(frozen=True)
class TemperatureEnvelope:
    maximum: float
    minimum: float

    @property
    def spread(self) -> float:
        return self.maximum - self.minimum


def temperature_envelope(points: Iterable[ProfilePoint]) -> TemperatureEnvelope:
    """Max/min of a sampled profile.

    Raises:
        DomainError: If ``points`` is empty.
    """
    temperatures = np.array([p.temperature for p in points], dtype=float)
    if temperatures.size == 0:
        raise DomainError("Temperature profile has no points")
    return TemperatureEnvelope(float(temperatures.max()), float(temperatures.min()))


__all__ = [
    "ThermalState",
    "BedTemperatureProfile",
    "ProfilePoint",
    "TemperatureEnvelope",
    "effective_heat_transfer",
    "temperature_after",
    "temperature_envelope",
]
