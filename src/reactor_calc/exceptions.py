"""ReactorCalc exception hierarchy.

All library-specific exceptions inherit from :class:`ReactorCalcError`,
enabling callers to catch the broad base class or narrow subtypes. Each
class carries a ``kind`` string that is reported in the error envelope
returned by :func:`reactor_calc.engine.handle_request`.
"""

from __future__ import annotations


class ReactorCalcError(Exception):
    """Base exception for all ReactorCalc errors."""

    kind = "ReactorCalcError"


class ValidationError(ReactorCalcError):
    """Missing or non-numeric input fields."""

    kind = "ValidationError"


class DomainError(ReactorCalcError):
    """Value outside the mathematically valid domain of a relation."""

    kind = "DomainError"


class ConversionOutOfRangeError(DomainError):
    """Computed conversion is complete or over-complete (X >= 1)."""

    kind = "ConversionOutOfRange"


class InvalidStoichiometryError(ReactorCalcError):
    """Non-positive coefficients, negative amounts, or conversion outside [0, 1)."""

    kind = "InvalidStoichiometry"


class UnknownQuantityError(ReactorCalcError, KeyError):
    """Unit-system lookup for an unregistered physical quantity."""

    kind = "UnknownQuantity"

    def __str__(self) -> str:
        # KeyError quotes its argument; keep plain messages.
        return str(self.args[0]) if self.args else ""


class RegistryError(ReactorCalcError):
    """Registry lookup or registration failures."""

    kind = "RegistryError"


class ConfigurationError(ReactorCalcError):
    """Configuration file errors (missing file, invalid YAML or structure)."""

    kind = "ConfigurationError"


__all__ = [
    "ReactorCalcError",
    "ValidationError",
    "DomainError",
    "ConversionOutOfRangeError",
    "InvalidStoichiometryError",
    "UnknownQuantityError",
    "RegistryError",
    "ConfigurationError",
]
