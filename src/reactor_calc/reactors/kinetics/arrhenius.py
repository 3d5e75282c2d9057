"""Arrhenius kinetics implementation."""

from __future__ import annotations

import logging
from typing import Any

from reactor_calc.exceptions import ValidationError
from reactor_calc.reactors.kinetics import rate_laws
from reactor_calc.reactors.kinetics.base import AbstractKinetics
from reactor_calc.utils.registry import KINETICS_REGISTRY

logger = logging.getLogger(__name__)


@KINETICS_REGISTRY.register("arrhenius")
class ArrheniusKinetics(AbstractKinetics):
    """Arrhenius kinetics: r = A * exp(-Ea/(R*T)) * C^n.

    Parameters:
        pre_exponential_factor: Frequency factor ``A``.
        activation_energy: Activation energy ``Ea`` (J/mol).
        order: Reaction order.
        temperature: Default temperature (K) used when none is passed.
    """

    def __init__(
        self,
        pre_exponential_factor: float,
        activation_energy: float,
        order: float,
        temperature: float | None = None,
        name: str = "arrhenius",
    ):
        super().__init__(
            name,
            order,
            {
                "A": float(pre_exponential_factor),
                "Ea": float(activation_energy),
                "T": temperature,
            },
        )
        self.pre_exponential_factor = float(pre_exponential_factor)
        self.activation_energy = float(activation_energy)
        self.temperature = temperature

    def rate_constant(self, temperature: float | None = None) -> float:
        """k(T) = A * exp(-Ea / (R * T)).

        Raises:
            ValidationError: If no temperature is given here or at construction.
        """
        T = temperature if temperature is not None else self.temperature
        if T is None:
            raise ValidationError("Arrhenius kinetics requires a temperature")
        k_T = rate_laws.arrhenius_rate_constant(
            self.pre_exponential_factor, self.activation_energy, T
        )
        logger.debug(f"k({T:g} K) = {k_T:.6g}")
        return k_T

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ArrheniusKinetics:
        params = config["params"]
        return cls(
            pre_exponential_factor=params["A"],
            activation_energy=params["Ea"],
            order=config["order"],
            temperature=params.get("T"),
            name=config.get("name", "arrhenius"),
        )


__all__ = ["ArrheniusKinetics"]
