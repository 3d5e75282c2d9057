"""Configuration and request models for ReactorCalc.

A calculation request is a pydantic model tree. Requests can be built in
code, validated from a mapping (JSON body, form state) or loaded from a
YAML file that holds either a single request or a list under
``calculations`` plus an optional ``logging`` section.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, ClassVar, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from reactor_calc.exceptions import ConfigurationError, ValidationError
from reactor_calc.physics.energy_balance import ThermalState
from reactor_calc.physics.stoichiometry import ReactionScheme, Stoichiometry
from reactor_calc.reactors.base import ReactorType
from reactor_calc.reactors.kinetics import AbstractKinetics, ArrheniusKinetics, PowerLawKinetics
from reactor_calc.results import CalculationMode
from reactor_calc.utils.units import FIELD_QUANTITIES, UnitSystem, as_unit_system, convert_parameters

logger = logging.getLogger(__name__)


class _UnitBearing(BaseModel):
    """Section whose numeric fields carry physical units."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, allow_inf_nan=False)

    field_quantities: ClassVar[dict[str, str]] = {}

    @classmethod
    def _quantities(cls) -> dict[str, str]:
        if cls.field_quantities:
            return cls.field_quantities
        return {name: FIELD_QUANTITIES[name] for name in cls.model_fields if name in FIELD_QUANTITIES}

    def converted(
        self,
        source: UnitSystem | str,
        target: UnitSystem | str,
        order: float | None = None,
    ) -> Any:
        """Copy of this section re-expressed in ``target`` units."""
        values = convert_parameters(
            self.model_dump(), source, target, order=order, field_quantities=self._quantities()
        )
        return self.__class__.model_validate(values)


class StoichiometryConfig(BaseModel):
    """Stoichiometric coefficients; unused species are ignored."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    nu_a: float = Field(default=1.0, description="Coefficient of A")
    nu_b: float = Field(default=1.0, description="Coefficient of B")
    nu_c: float = Field(default=1.0, description="Coefficient of C")
    nu_d: float = Field(default=1.0, description="Coefficient of D")


class InitialAmounts(_UnitBearing):
    """Initial concentrations (or feed values) of each species."""

    field_quantities: ClassVar[dict[str, str]] = {
        "a": "concentration",
        "b": "concentration",
        "c": "concentration",
        "d": "concentration",
    }

    a: float = Field(..., alias="A", description="Initial amount of A")
    b: float = Field(default=0.0, alias="B", description="Initial amount of B")
    c: float = Field(default=0.0, alias="C", description="Initial amount of C")
    d: float = Field(default=0.0, alias="D", description="Initial amount of D")


class KineticsConfig(_UnitBearing):
    """Reaction order and rate constant, or Arrhenius parameters."""

    order: float = Field(..., description="Reaction order n (>= 0, fractional allowed)")
    rate_constant: float | None = Field(None, description="Rate constant k")
    activation_energy: float | None = Field(None, description="Activation energy Ea (J/mol)")
    pre_exponential_factor: float | None = Field(None, description="Pre-exponential factor A")
    temperature: float | None = Field(None, description="Absolute temperature T (K)")

    @property
    def uses_arrhenius(self) -> bool:
        return None not in (self.activation_energy, self.pre_exponential_factor, self.temperature)

    def build(self) -> AbstractKinetics:
        """Kinetics model: Arrhenius when Ea, A and T are all given, else power law.

        Raises:
            ValidationError: If neither a rate constant nor a complete
                Arrhenius parameter set is given.
        """
        if self.uses_arrhenius:
            return ArrheniusKinetics(
                pre_exponential_factor=cast(float, self.pre_exponential_factor),
                activation_energy=cast(float, self.activation_energy),
                order=self.order,
                temperature=self.temperature,
            )
        if self.rate_constant is None:
            raise ValidationError(
                "Kinetics require rate_constant, or activation_energy, "
                "pre_exponential_factor and temperature"
            )
        return PowerLawKinetics(k=self.rate_constant, order=self.order)


class GeometryConfig(_UnitBearing):
    """Reactor geometry; which fields are needed depends on reactor and mode."""

    reaction_time: float | None = Field(None, description="Batch time t (s)")
    volume: float | None = Field(None, description="CSTR volume V (m^3)")
    flow_rate: float | None = Field(None, description="Volumetric flow rate F (m^3/s)")
    length: float | None = Field(None, description="PFR length or PBR bed length L (m)")
    superficial_velocity: float | None = Field(None, description="Superficial velocity u (m/s)")
    bed_porosity: float | None = Field(None, description="PBR bed porosity eps")
    particle_diameter: float | None = Field(None, description="PBR particle diameter dp (m)")


class ThermalConfig(_UnitBearing):
    """Heat-balance inputs for temperature mode."""

    heat_of_reaction: float = Field(..., description="dHr (J/mol), negative = exothermic")
    heat_capacity: float = Field(..., description="Cp (J/(kg*K))")
    heat_transfer_coefficient: float = Field(..., description="U (W/(m^2*K))")
    cooling_temperature: float = Field(..., description="Tc (K)")
    initial_temperature: float | None = Field(None, description="T0 (K)")

    def to_state(self) -> ThermalState:
        return ThermalState(**self.model_dump())


class CalculationRequest(BaseModel):
    """One calculation: reactor, mode, unit system and all inputs."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    reactor_type: ReactorType = Field(..., description="batch, cstr, pfr or pbr")
    mode: CalculationMode = Field(..., description="conversion, rate, temperature or size")
    unit_system: UnitSystem = Field(default=UnitSystem.SI, description="Units of all inputs")
    reaction_scheme: ReactionScheme = Field(default=ReactionScheme.A_TO_B)
    stoichiometry: StoichiometryConfig = Field(default_factory=StoichiometryConfig)
    initial_amounts: InitialAmounts
    kinetics: KineticsConfig
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    thermal: ThermalConfig | None = Field(None, description="Required for temperature mode")
    target_conversion: float | None = Field(None, description="Fraction in [0, 1), size mode")

    @field_validator("unit_system", mode="before")
    @classmethod
    def _coerce_unit_system(cls, value: Any) -> UnitSystem:
        try:
            return as_unit_system(value)
        except ValidationError as exc:
            raise ValueError(str(exc)) from exc

    @model_validator(mode="after")
    def _check_mode_inputs(self) -> CalculationRequest:
        if self.mode is CalculationMode.TEMPERATURE and self.thermal is None:
            raise ValueError("temperature mode requires a 'thermal' section")
        if self.mode is CalculationMode.SIZE and self.target_conversion is None:
            raise ValueError("size mode requires 'target_conversion'")
        return self

    def convert_units(self, target: UnitSystem | str) -> CalculationRequest:
        """Copy of this request with every unit-bearing field in ``target`` units.

        Dimensionless fields (order, coefficients, porosity, conversion) are
        left untouched.
        """
        target = as_unit_system(target)
        source = self.unit_system
        order = self.kinetics.order
        return self.model_copy(
            update={
                "unit_system": target,
                "initial_amounts": self.initial_amounts.converted(source, target),
                "kinetics": self.kinetics.converted(source, target, order),
                "geometry": self.geometry.converted(source, target),
                "thermal": (
                    self.thermal.converted(source, target) if self.thermal is not None else None
                ),
            }
        )

    def to_si(self) -> CalculationRequest:
        """This request in SI units; a request already in SI is returned as is."""
        if self.unit_system is UnitSystem.SI:
            return self
        return self.convert_units(UnitSystem.SI)

    def to_stoichiometry(self) -> Stoichiometry:
        return Stoichiometry.from_values(
            self.reaction_scheme,
            initial_a=self.initial_amounts.a,
            initial_b=self.initial_amounts.b,
            initial_c=self.initial_amounts.c,
            initial_d=self.initial_amounts.d,
            nu_a=self.stoichiometry.nu_a,
            nu_b=self.stoichiometry.nu_b,
            nu_c=self.stoichiometry.nu_c,
            nu_d=self.stoichiometry.nu_d,
        )


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format ('text' or 'json')")
    log_file: str | None = Field(None, description="Log file path")
    module_levels: dict[str, str] = Field(
        default_factory=dict,
        description="Per-module log levels",
    )


class CalculationConfig(BaseModel):
    """Top-level YAML configuration: logging plus a batch of requests."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    calculations: list[CalculationRequest] = Field(default_factory=list)


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR:default} patterns with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(3)
        value = os.environ.get(var_name)
        if value is not None:
            return value
        if default is not None:
            return cast(str, default)
        return match.group(0)

    return re.sub(r"\$\{(\w+)(:([^}]*))?\}", _replace, text)


def load_config(path: str | Path) -> CalculationConfig:
    """Load a calculation configuration from YAML with env var interpolation.

    The file holds either a ``calculations`` list (with optional
    ``logging``) or a single request mapping.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw_text = path.read_text()
        interpolated = _interpolate_env_vars(raw_text)
        data = yaml.safe_load(interpolated)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")
    if "calculations" not in data and "reactor_type" in data:
        data = {"calculations": [data]}

    try:
        config = CalculationConfig(**data)
    except Exception as exc:
        raise ConfigurationError(f"Invalid config structure: {exc}") from exc

    logger.info(f"Loaded {len(config.calculations)} calculation(s) from {path}")
    return config


def save_config(config: CalculationConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        data = config.model_dump(mode="json", by_alias=True)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except Exception as exc:
        raise ConfigurationError(f"Failed to save config to {path}: {exc}") from exc

    logger.info(f"Saved config to {path}")


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    For nested dicts, recursively merges rather than replacing.
    For all other types, the override value wins.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "CalculationConfig",
    "CalculationRequest",
    "GeometryConfig",
    "InitialAmounts",
    "KineticsConfig",
    "LoggingConfig",
    "StoichiometryConfig",
    "ThermalConfig",
    "load_config",
    "merge_configs",
    "save_config",
]
