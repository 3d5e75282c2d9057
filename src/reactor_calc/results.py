"""Calculation results, one model per calculation mode.

:data:`CalculationResult` is a union discriminated by the ``mode`` field,
so a serialized result can be validated back into the right model with
:func:`parse_result`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class CalculationMode(str, Enum):
    """What a calculation request asks for."""

    CONVERSION = "conversion"
    RATE = "rate"
    TEMPERATURE = "temperature"
    SIZE = "size"


class _ResultBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    reactor: str = Field(..., description="Reactor type key")
    units: dict[str, str] = Field(default_factory=dict, description="Unit symbol per field")

    def field_values(self) -> dict[str, Any]:
        """Mode-specific numeric fields."""
        return self.model_dump(exclude={"mode", "reactor", "units"})

    def to_response(self) -> dict[str, Any]:
        """Success envelope ``{"mode", "values", "units"}``."""
        return {
            "mode": self.mode,  # type: ignore[attr-defined]
            "reactor": self.reactor,
            "values": self.field_values(),
            "units": dict(self.units),
        }


class ConversionResult(_ResultBase):
    mode: Literal["conversion"] = "conversion"
    conversion: float = Field(..., description="Fraction of limiting reactant consumed")
    conversion_percent: float
    residence_time: float
    limiting_reactant: str
    final_concentrations: dict[str, float]


class ReactionRateResult(_ResultBase):
    mode: Literal["rate"] = "rate"
    reaction_rate: float
    rate_constant: float = Field(..., description="k used, temperature-corrected if Arrhenius")
    reference_concentration: float
    limiting_reactant: str


class ProfileSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: float
    temperature: float


class TemperatureProfileResult(_ResultBase):
    mode: Literal["temperature"] = "temperature"
    initial_temperature: float
    final_temperature: float
    temperature_change: float
    conversion: float | None = None
    max_temperature: float | None = None
    min_temperature: float | None = None
    temperature_range: float | None = None
    effective_heat_transfer: float | None = None
    profile: list[ProfileSample] | None = None


class RequiredSizeResult(_ResultBase):
    mode: Literal["size"] = "size"
    size_parameter: Literal["reaction_time", "volume", "length"]
    required_size: float
    residence_time: float
    target_conversion: float


CalculationResult = Annotated[
    Union[ConversionResult, ReactionRateResult, TemperatureProfileResult, RequiredSizeResult],
    Field(discriminator="mode"),
]

_RESULT_ADAPTER: TypeAdapter[Any] = TypeAdapter(CalculationResult)


def parse_result(data: dict[str, Any]) -> Any:
    """Validate a dumped result back into its mode-specific model."""
    return _RESULT_ADAPTER.validate_python(data)


__all__ = [
    "CalculationMode",
    "CalculationResult",
    "ConversionResult",
    "ProfileSample",
    "ReactionRateResult",
    "RequiredSizeResult",
    "TemperatureProfileResult",
    "parse_result",
]
