"""ReactorCalc: closed-form sizing and kinetics for Batch, CSTR, PFR and PBR reactors."""

from __future__ import annotations

# Version info
__version__ = "0.3.0"

from reactor_calc.engine import calculate, handle_request
from reactor_calc.exceptions import (
    ConfigurationError,
    ConversionOutOfRangeError,
    DomainError,
    InvalidStoichiometryError,
    ReactorCalcError,
    RegistryError,
    UnknownQuantityError,
    ValidationError,
)
from reactor_calc.physics import ReactionScheme, Stoichiometry, ThermalState
from reactor_calc.reactors import (
    AbstractReactor,
    BatchReactor,
    CSTRReactor,
    PackedBedReactor,
    PlugFlowReactor,
    ReactorType,
)
from reactor_calc.reactors.kinetics import AbstractKinetics, ArrheniusKinetics, PowerLawKinetics
from reactor_calc.results import CalculationMode
from reactor_calc.utils.config import CalculationRequest, load_config
from reactor_calc.utils.units import UnitSystem, convert, resolve

__all__ = [
    "__version__",
    # Engine
    "calculate",
    "handle_request",
    "CalculationRequest",
    "CalculationMode",
    "load_config",
    # Reactors
    "AbstractReactor",
    "BatchReactor",
    "CSTRReactor",
    "PlugFlowReactor",
    "PackedBedReactor",
    "ReactorType",
    # Kinetics
    "AbstractKinetics",
    "PowerLawKinetics",
    "ArrheniusKinetics",
    # Physics
    "ReactionScheme",
    "Stoichiometry",
    "ThermalState",
    # Units
    "UnitSystem",
    "convert",
    "resolve",
    # Exceptions
    "ReactorCalcError",
    "ValidationError",
    "DomainError",
    "ConversionOutOfRangeError",
    "InvalidStoichiometryError",
    "UnknownQuantityError",
    "ConfigurationError",
    "RegistryError",
]
