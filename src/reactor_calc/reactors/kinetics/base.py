"""Base abstract class for single-reaction kinetics models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from reactor_calc.exceptions import DomainError
from reactor_calc.reactors.kinetics import rate_laws

logger = logging.getLogger(__name__)


class AbstractKinetics(ABC):
    """Abstract base class for power-law kinetics of order ``n``.

    Subclasses decide how the rate constant is obtained (a fixed value, or
    an Arrhenius expression of temperature). Rate, conversion and residence
    calculations are shared and delegate to :mod:`rate_laws`.

    Attributes:
        name: Kinetics model name.
        order: Reaction order ``n >= 0``.
        params: Dictionary of kinetic parameters.
    """

    def __init__(self, name: str, order: float, params: dict[str, Any]):
        if not np.isfinite(order) or order < 0:
            raise DomainError(f"Reaction order must be a finite non-negative number, got {order}")
        self.name = name
        self.order = float(order)
        self.params = params
        logger.debug(f"Initialized {self.__class__.__name__}: name={name}, order={order}")

    @abstractmethod
    def rate_constant(self, temperature: float | None = None) -> float:
        """Rate constant ``k``, optionally at ``temperature`` (K)."""
        raise NotImplementedError("Subclasses must implement rate_constant()")

    def rate(self, concentration: float, temperature: float | None = None) -> float:
        """Instantaneous reaction rate at ``concentration``."""
        return rate_laws.reaction_rate(concentration, self.rate_constant(temperature), self.order)

    def conversion_after(
        self,
        residence: float,
        c_ref: float,
        temperature: float | None = None,
    ) -> float:
        """Conversion after ``residence`` (integrated design equation)."""
        return rate_laws.conversion_after(
            residence, self.rate_constant(temperature), self.order, c_ref
        )

    def residence_for(
        self,
        conversion: float,
        c_ref: float,
        temperature: float | None = None,
    ) -> float:
        """Residence measure needed to reach ``conversion``."""
        return rate_laws.residence_for(
            conversion, self.rate_constant(temperature), self.order, c_ref
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.__class__.__name__,
            "order": self.order,
            "params": self.params,
        }

    @classmethod
    @abstractmethod
    def from_dict(cls, config: dict[str, Any]) -> AbstractKinetics:
        """Deserialize kinetics from a :meth:`to_dict` configuration."""
        raise NotImplementedError("Subclasses must implement from_dict()")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', order={self.order:g})"


__all__ = ["AbstractKinetics"]
