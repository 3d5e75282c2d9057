"""Power law kinetics with a fixed rate constant."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from reactor_calc.exceptions import DomainError
from reactor_calc.reactors.kinetics.base import AbstractKinetics
from reactor_calc.utils.registry import KINETICS_REGISTRY

logger = logging.getLogger(__name__)


@KINETICS_REGISTRY.register("power_law")
class PowerLawKinetics(AbstractKinetics):
    """Power law kinetics: r = k * C^n.

    The rate constant is independent of temperature; its dimensions are
    ``concentration**(1 - n) / time``.

    Parameters:
        k: Rate constant.
        order: Reaction order (fractional orders allowed).
    """

    def __init__(self, k: float, order: float, name: str = "power_law"):
        if not np.isfinite(k) or k <= 0:
            raise DomainError(f"Rate constant must be positive, got {k}")
        super().__init__(name, order, {"k": float(k)})
        self.k = float(k)

    def rate_constant(self, temperature: float | None = None) -> float:
        return self.k

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> PowerLawKinetics:
        return cls(
            k=config["params"]["k"],
            order=config["order"],
            name=config.get("name", "power_law"),
        )


__all__ = ["PowerLawKinetics"]
