"""Continuous Stirred-Tank Reactor (CSTR) implementation."""

from __future__ import annotations

import logging

import numpy as np

from reactor_calc.exceptions import DomainError
from reactor_calc.reactors.base import AbstractReactor, ReactorType
from reactor_calc.results import CalculationMode
from reactor_calc.utils.numerical import checked_power, require_finite
from reactor_calc.utils.registry import REACTOR_REGISTRY

logger = logging.getLogger(__name__)


def _damkohler(residence: float, k: float, order: float, c_ref: float) -> float:
    if not np.isfinite(k) or k <= 0:
        raise DomainError(f"Rate constant must be positive, got {k}")
    if not np.isfinite(c_ref) or c_ref <= 0:
        raise DomainError(f"Reference concentration must be positive, got {c_ref}")
    if order == 1:
        return require_finite(k * residence, "Damkohler number")
    scale = checked_power(c_ref, order - 1.0, "Reference concentration power")
    return require_finite(k * residence * scale, "Damkohler number")


def mixed_flow_conversion(residence: float, k: float, order: float, c_ref: float) -> float:
    """Mixed-flow balance ``X = Da / (1 + Da)`` with ``Da = k * tau * C_ref**(n - 1)``."""
    if not np.isfinite(residence) or residence < 0:
        raise DomainError(f"Residence time must be non-negative, got {residence}")
    damkohler = _damkohler(residence, k, order, c_ref)
    return damkohler / (1.0 + damkohler)


def mixed_flow_volume(
    conversion: float,
    k: float,
    order: float,
    c_ref: float,
    flow_rate: float,
) -> float:
    """Volume reaching ``conversion``: ``V = F * X / (k * C_ref**(n - 1) * (1 - X))``."""
    if not 0.0 <= conversion < 1.0:
        raise DomainError(f"Conversion must lie in [0, 1), got {conversion}")
    per_unit_time = _damkohler(1.0, k, order, c_ref)
    if per_unit_time == 0:
        raise DomainError("Rate per unit residence underflows to zero")
    return require_finite(
        flow_rate * conversion / (per_unit_time * (1.0 - conversion)), "Required volume"
    )


@REACTOR_REGISTRY.register("cstr")
class CSTRReactor(AbstractReactor):
    """Continuous Stirred-Tank Reactor (CSTR).

    Models a well-mixed reactor at steady state. The outlet composition
    equals the tank composition, so the conversion comes from the algebraic
    mixed-flow balance rather than the plug-flow integral::

        X = k * tau * C0**(n-1) / (1 + k * tau * C0**(n-1)),  tau = V / F

    Parameters:
        volume: Reactor volume V (m^3).
        flow_rate: Volumetric flow rate F (m^3/s).
    """

    reactor_type = ReactorType.CSTR
    size_parameter = "volume"
    size_quantity = "volume"
    required_params = {
        CalculationMode.CONVERSION: ("volume", "flow_rate"),
        CalculationMode.TEMPERATURE: ("volume", "flow_rate"),
        CalculationMode.SIZE: ("flow_rate",),
    }

    def residence_time(self) -> float:
        volume = self._param("volume")
        if not np.isfinite(volume) or volume < 0:
            raise DomainError(f"volume must be non-negative, got {volume}")
        return volume / self._positive_param("flow_rate")

    def conversion(self) -> float:
        return mixed_flow_conversion(
            self.residence_time(),
            self.kinetics.rate_constant(),
            self.kinetics.order,
            self.reference_concentration,
        )

    def required_size(self, target_conversion: float) -> tuple[float, float]:
        flow_rate = self._positive_param("flow_rate")
        volume = mixed_flow_volume(
            target_conversion,
            self.kinetics.rate_constant(),
            self.kinetics.order,
            self.reference_concentration,
            flow_rate,
        )
        return volume, volume / flow_rate


__all__ = ["CSTRReactor", "mixed_flow_conversion", "mixed_flow_volume"]
