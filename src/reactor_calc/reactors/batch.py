"""Batch reactor implementation."""

from __future__ import annotations

import logging

from reactor_calc.reactors.base import AbstractReactor, ReactorType
from reactor_calc.results import CalculationMode
from reactor_calc.utils.registry import REACTOR_REGISTRY

logger = logging.getLogger(__name__)


@REACTOR_REGISTRY.register("batch")
class BatchReactor(AbstractReactor):
    """Constant-volume batch reactor.

    A closed system; the residence measure is the batch time ``t`` and the
    conversion follows the integrated design equation with the limiting
    reactant's initial concentration as reference. In size mode the
    "size" is the batch time needed for the target conversion.

    Parameters:
        reaction_time: Batch time t (s).
    """

    reactor_type = ReactorType.BATCH
    size_parameter = "reaction_time"
    size_quantity = "time"
    required_params = {
        CalculationMode.CONVERSION: ("reaction_time",),
        CalculationMode.TEMPERATURE: ("reaction_time",),
    }

    def residence_time(self) -> float:
        return self._param("reaction_time")

    def required_size(self, target_conversion: float) -> tuple[float, float]:
        time = self.kinetics.residence_for(target_conversion, self.reference_concentration)
        return time, time


__all__ = ["BatchReactor"]
