"""Base abstract class for all reactor sizing models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar

import numpy as np

from reactor_calc.exceptions import ConversionOutOfRangeError, DomainError, ValidationError
from reactor_calc.physics.energy_balance import ThermalState, temperature_after
from reactor_calc.physics.stoichiometry import (
    Stoichiometry,
    final_amounts,
    limiting_reactant,
    reaction_extent,
)
from reactor_calc.reactors.kinetics.base import AbstractKinetics
from reactor_calc.results import (
    CalculationMode,
    ConversionResult,
    ReactionRateResult,
    RequiredSizeResult,
    TemperatureProfileResult,
)
from reactor_calc.utils.numerical import require_finite
from reactor_calc.utils.units import UnitSystem, as_unit_system, convert, resolve

logger = logging.getLogger(__name__)


class ReactorType(str, Enum):
    """Registry keys of the built-in reactor models."""

    BATCH = "batch"
    CSTR = "cstr"
    PFR = "pfr"
    PBR = "pbr"


class AbstractReactor(ABC):
    """Abstract base class for closed-form reactor models.

    A reactor combines a kinetics model and a reaction scheme with its own
    design equation. All inputs are expected in SI units; results are
    expressed in ``unit_system`` together with the matching unit symbols.

    Subclasses define the residence measure, the required size for a target
    conversion, and may override the conversion relation (the CSTR uses the
    mixed-flow balance instead of the integrated design equation).

    Attributes:
        name: Reactor identifier used in logs.
        stoichiometry: Reaction scheme, coefficients and initial amounts.
        kinetics: Kinetics model providing k and the order.
        params: Geometry parameters (SI).
        unit_system: System the results are expressed in.
        limiting: Limiting reactant of the scheme.
    """

    reactor_type: ClassVar[ReactorType]
    size_parameter: ClassVar[str]
    size_quantity: ClassVar[str]
    required_params: ClassVar[dict[CalculationMode, tuple[str, ...]]] = {}

    def __init__(
        self,
        name: str,
        stoichiometry: Stoichiometry,
        kinetics: AbstractKinetics,
        params: Mapping[str, Any] | None = None,
        unit_system: UnitSystem | str = UnitSystem.SI,
    ):
        self.name = name
        self.stoichiometry = stoichiometry
        self.kinetics = kinetics
        self.params = {key: value for key, value in (params or {}).items() if value is not None}
        self.unit_system = as_unit_system(unit_system)
        self.limiting = limiting_reactant(stoichiometry)
        logger.debug(
            f"Initialized {self.__class__.__name__}: name={name}, "
            f"scheme={stoichiometry.scheme.value}, limiting={self.limiting.species}"
        )

    # ------------------------------------------------------------------
    # Design equation hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def residence_time(self) -> float:
        """Residence measure of the reactor (SI, seconds)."""
        raise NotImplementedError("Subclasses must implement residence_time()")

    @abstractmethod
    def required_size(self, target_conversion: float) -> tuple[float, float]:
        """Size needed to reach ``target_conversion``.

        Returns:
            Tuple of (size in SI units of ``size_quantity``, residence time).
        """
        raise NotImplementedError("Subclasses must implement required_size()")

    def conversion(self) -> float:
        """Conversion from the integrated design equation, unchecked."""
        return self.kinetics.conversion_after(self.residence_time(), self.reference_concentration)

    @property
    def reference_concentration(self) -> float:
        """Initial amount of the limiting reactant."""
        return self.stoichiometry.initial[self.limiting.species]

    def checked_conversion(self) -> float:
        """:meth:`conversion`, rejected when complete or over-complete.

        Raises:
            ConversionOutOfRangeError: If the conversion is >= 1.
        """
        conversion = self.conversion()
        if conversion >= 1.0:
            raise ConversionOutOfRangeError(
                f"{self.reactor_type.value} inputs imply complete conversion "
                f"(X = {conversion:.6g} >= 1)"
            )
        if not conversion >= 0.0:
            raise DomainError(f"Conversion is not a valid fraction ({conversion:.6g})")
        return conversion

    # ------------------------------------------------------------------
    # Parameters and units
    # ------------------------------------------------------------------

    def _require(self, mode: CalculationMode) -> None:
        missing = [key for key in self.required_params.get(mode, ()) if key not in self.params]
        if missing:
            raise ValidationError(
                f"{self.reactor_type.value} {mode.value} calculation requires: {', '.join(missing)}"
            )

    def _param(self, key: str) -> float:
        try:
            return float(self.params[key])
        except KeyError as exc:
            raise ValidationError(f"Missing required parameter: {key}") from exc
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Parameter {key} must be numeric, got {self.params[key]!r}") from exc

    def _positive_param(self, key: str) -> float:
        value = self._param(key)
        if not np.isfinite(value) or value <= 0:
            raise DomainError(f"{key} must be positive, got {value}")
        return value

    def _express(self, value: float, quantity: str) -> float:
        value = require_finite(value, quantity.replace("_", " ").capitalize())
        return convert(value, quantity, UnitSystem.SI, self.unit_system, self.kinetics.order)

    def _symbols(self, **fields: str) -> dict[str, str]:
        return {
            field: resolve(self.unit_system, quantity, self.kinetics.order).symbol
            for field, quantity in fields.items()
        }

    # ------------------------------------------------------------------
    # Calculation modes
    # ------------------------------------------------------------------

    def compute(
        self,
        mode: CalculationMode | str,
        target_conversion: float | None = None,
        thermal: ThermalState | None = None,
    ) -> Any:
        """Run one calculation.

        Args:
            mode: 'conversion', 'rate', 'temperature' or 'size'.
            target_conversion: Required for 'size'.
            thermal: Required for 'temperature'.

        Returns:
            The mode-specific :data:`~reactor_calc.results.CalculationResult`.
        """
        mode = CalculationMode(mode)
        self._require(mode)
        logger.debug(f"{self.name}: computing {mode.value}")

        if mode is CalculationMode.CONVERSION:
            return self.compute_conversion()
        if mode is CalculationMode.RATE:
            return self.compute_rate()
        if mode is CalculationMode.TEMPERATURE:
            if thermal is None:
                raise ValidationError("Temperature calculation requires thermal parameters")
            return self.compute_temperature(thermal)
        if target_conversion is None:
            raise ValidationError("Size calculation requires a target conversion")
        return self.compute_size(target_conversion)

    def compute_conversion(self) -> ConversionResult:
        conversion = self.checked_conversion()
        finals = final_amounts(self.stoichiometry, conversion)
        return ConversionResult(
            reactor=self.reactor_type.value,
            conversion=conversion,
            conversion_percent=100.0 * conversion,
            residence_time=self._express(self.residence_time(), "time"),
            limiting_reactant=self.limiting.species,
            final_concentrations={
                species: self._express(amount, "concentration") for species, amount in finals.items()
            },
            units=self._symbols(residence_time="time", final_concentrations="concentration"),
        )

    def compute_rate(self) -> ReactionRateResult:
        c_ref = self.reference_concentration
        k = self.kinetics.rate_constant()
        rate = self.kinetics.rate(c_ref)
        return ReactionRateResult(
            reactor=self.reactor_type.value,
            reaction_rate=self._express(rate, "reaction_rate"),
            rate_constant=self._express(k, "rate_constant"),
            reference_concentration=self._express(c_ref, "concentration"),
            limiting_reactant=self.limiting.species,
            units=self._symbols(
                reaction_rate="reaction_rate",
                rate_constant="rate_constant",
                reference_concentration="concentration",
            ),
        )

    def compute_temperature(self, thermal: ThermalState) -> TemperatureProfileResult:
        """Lumped heat balance over the residence measure."""
        if thermal.initial_temperature is None:
            raise ValidationError("Temperature calculation requires an initial temperature")

        conversion = self.checked_conversion()
        extent = reaction_extent(self.stoichiometry, conversion)
        final = temperature_after(
            initial_temperature=thermal.initial_temperature,
            heat_of_reaction=thermal.heat_of_reaction,
            heat_capacity=thermal.heat_capacity,
            heat_transfer_coefficient=thermal.heat_transfer_coefficient,
            cooling_temperature=thermal.cooling_temperature,
            extent=extent,
            residence=self.residence_time(),
        )
        initial = thermal.initial_temperature
        return TemperatureProfileResult(
            reactor=self.reactor_type.value,
            initial_temperature=self._express(initial, "temperature"),
            final_temperature=self._express(final, "temperature"),
            temperature_change=self._express(final - initial, "temperature"),
            conversion=conversion,
            units=self._symbols(
                initial_temperature="temperature",
                final_temperature="temperature",
                temperature_change="temperature",
            ),
        )

    def compute_size(self, target_conversion: float) -> RequiredSizeResult:
        if not 0.0 <= target_conversion < 1.0:
            raise DomainError(f"Target conversion must lie in [0, 1), got {target_conversion}")
        size, residence = self.required_size(target_conversion)
        return RequiredSizeResult(
            reactor=self.reactor_type.value,
            size_parameter=self.size_parameter,
            required_size=self._express(size, self.size_quantity),
            residence_time=self._express(residence, "time"),
            target_conversion=target_conversion,
            units=self._symbols(required_size=self.size_quantity, residence_time="time"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.__class__.__name__,
            "reactor_type": self.reactor_type.value,
            "scheme": self.stoichiometry.scheme.value,
            "kinetics": self.kinetics.to_dict(),
            "params": dict(self.params),
            "unit_system": self.unit_system.value,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"scheme={self.stoichiometry.scheme.value}, "
            f"order={self.kinetics.order:g})"
        )


__all__ = ["AbstractReactor", "ReactorType"]
