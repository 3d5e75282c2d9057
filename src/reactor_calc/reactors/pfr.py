"""Plug flow reactor (PFR) implementation."""

from __future__ import annotations

import logging

from reactor_calc.reactors.base import AbstractReactor, ReactorType
from reactor_calc.results import CalculationMode
from reactor_calc.utils.registry import REACTOR_REGISTRY

logger = logging.getLogger(__name__)


@REACTOR_REGISTRY.register("pfr")
class PlugFlowReactor(AbstractReactor):
    """Plug flow reactor (PFR).

    A tubular reactor without axial mixing. A fluid element spends
    ``tau = L / u`` in the tube and reacts as it would in a batch reactor
    for the same time, so conversion uses the integrated design equation.
    The required length for a target conversion is ``u`` times the inverse
    of that equation.

    Parameters:
        length: Reactor length L (m).
        superficial_velocity: Superficial velocity u (m/s).
    """

    reactor_type = ReactorType.PFR
    size_parameter = "length"
    size_quantity = "length"
    required_params = {
        CalculationMode.CONVERSION: ("length", "superficial_velocity"),
        CalculationMode.TEMPERATURE: ("length", "superficial_velocity"),
        CalculationMode.SIZE: ("superficial_velocity",),
    }

    def residence_time(self) -> float:
        return self._positive_param("length") / self._positive_param("superficial_velocity")

    def required_size(self, target_conversion: float) -> tuple[float, float]:
        velocity = self._positive_param("superficial_velocity")
        residence = self.kinetics.residence_for(target_conversion, self.reference_concentration)
        return velocity * residence, residence


__all__ = ["PlugFlowReactor"]
