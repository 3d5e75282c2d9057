"""Stoichiometry of single-reaction schemes.

Supported schemes are ``A -> B``, ``A -> B + C``, ``A + B -> C`` and
``A + B -> C + D``. Conversion is always measured against the limiting
reactant, the reactant with the smallest ``C0 / nu`` ratio. The extent of
reaction for a conversion ``X`` is ``xi = X * C0_L / nu_L`` and every
species changes by ``nu_i * xi`` (negative for reactants).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from reactor_calc.exceptions import DomainError, InvalidStoichiometryError

logger = logging.getLogger(__name__)


class ReactionScheme(str, Enum):
    """Closed set of supported reaction schemes."""

    A_TO_B = "a_to_b"
    A_TO_B_PLUS_C = "a_to_b_plus_c"
    A_PLUS_B_TO_C = "a_plus_b_to_c"
    A_PLUS_B_TO_C_PLUS_D = "a_plus_b_to_c_plus_d"

    @property
    def reactants(self) -> tuple[str, ...]:
        return _SCHEME_SPECIES[self][0]

    @property
    def products(self) -> tuple[str, ...]:
        return _SCHEME_SPECIES[self][1]

    @property
    def species(self) -> tuple[str, ...]:
        return self.reactants + self.products

    @property
    def label(self) -> str:
        """Human-readable equation, e.g. ``A + B -> C``."""
        return f"{' + '.join(self.reactants)} -> {' + '.join(self.products)}"


_SCHEME_SPECIES: dict[ReactionScheme, tuple[tuple[str, ...], tuple[str, ...]]] = {
    ReactionScheme.A_TO_B: (("A",), ("B",)),
    ReactionScheme.A_TO_B_PLUS_C: (("A",), ("B", "C")),
    ReactionScheme.A_PLUS_B_TO_C: (("A", "B"), ("C",)),
    ReactionScheme.A_PLUS_B_TO_C_PLUS_D: (("A", "B"), ("C", "D")),
}


@dataclass(frozen=True)
class LimitingReactant:
    """Limiting species and its ``C0 / nu`` ratio."""

    species: str
    value: float


@dataclass(frozen=True)
class Stoichiometry:
    """A reaction scheme with its coefficients and initial amounts.

    Only the species used by the scheme are kept; coefficients and amounts
    given for other species are dropped. Initial amounts may be
    concentrations (batch) or molar flow rates (flow reactors).

    Attributes:
        scheme: Reaction scheme.
        coefficients: Stoichiometric coefficient per species, all positive.
        initial: Initial amount per species, all non-negative.
    """

    scheme: ReactionScheme
    coefficients: Mapping[str, float] = field(default_factory=dict)
    initial: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        scheme = ReactionScheme(self.scheme)
        species = scheme.species
        coefficients = {s: float(self.coefficients.get(s, 1.0)) for s in species}
        initial = {s: float(self.initial.get(s, 0.0)) for s in species}

        for name, nu in coefficients.items():
            if nu <= 0:
                raise InvalidStoichiometryError(
                    f"Stoichiometric coefficient of {name} must be positive, got {nu}"
                )
        for name, amount in initial.items():
            if amount < 0:
                raise InvalidStoichiometryError(
                    f"Initial amount of {name} must be non-negative, got {amount}"
                )

        object.__setattr__(self, "scheme", scheme)
        object.__setattr__(self, "coefficients", MappingProxyType(coefficients))
        object.__setattr__(self, "initial", MappingProxyType(initial))

    @classmethod
    def from_values(
        cls,
        scheme: ReactionScheme | str,
        initial_a: float,
        initial_b: float = 0.0,
        initial_c: float = 0.0,
        initial_d: float = 0.0,
        nu_a: float = 1.0,
        nu_b: float = 1.0,
        nu_c: float = 1.0,
        nu_d: float = 1.0,
    ) -> Stoichiometry:
        """Build from flat scalar values, the shape form inputs arrive in."""
        return cls(
            scheme=ReactionScheme(scheme),
            coefficients={"A": nu_a, "B": nu_b, "C": nu_c, "D": nu_d},
            initial={"A": initial_a, "B": initial_b, "C": initial_c, "D": initial_d},
        )

    @property
    def is_bimolecular(self) -> bool:
        return len(self.scheme.reactants) == 2


def limiting_reactant(stoich: Stoichiometry) -> LimitingReactant:
    """Select the reactant with the smaller ``C0 / nu`` ratio.

    Single-reactant schemes return ``A`` with its initial amount. On a tie
    ``A`` is selected.
    """
    ratio_a = stoich.initial["A"] / stoich.coefficients["A"]
    if not stoich.is_bimolecular:
        return LimitingReactant("A", stoich.initial["A"])

    ratio_b = stoich.initial["B"] / stoich.coefficients["B"]
    if ratio_b < ratio_a:
        return LimitingReactant("B", ratio_b)
    return LimitingReactant("A", ratio_a)


def _check_conversion(conversion: float) -> None:
    if not 0.0 <= conversion < 1.0:
        raise InvalidStoichiometryError(f"Conversion must lie in [0, 1), got {conversion}")


def reaction_extent(stoich: Stoichiometry, conversion: float) -> float:
    """Extent of reaction ``xi`` reached at ``conversion`` of the limiting reactant."""
    _check_conversion(conversion)
    return limiting_reactant(stoich).value * conversion


def extents(stoich: Stoichiometry, conversion: float) -> dict[str, float]:
    """Signed change of every species of the scheme at ``conversion``.

    Reactants carry negative changes and products positive ones. Species
    the scheme does not use are omitted.

    Raises:
        InvalidStoichiometryError: If ``conversion`` is not in ``[0, 1)``.
    """
    xi = reaction_extent(stoich, conversion)
    changes: dict[str, float] = {}
    for species in stoich.scheme.reactants:
        changes[species] = -stoich.coefficients[species] * xi
    for species in stoich.scheme.products:
        changes[species] = stoich.coefficients[species] * xi
    return changes


def final_amounts(stoich: Stoichiometry, conversion: float) -> dict[str, float]:
    """Initial amount plus change for every species of the scheme.

    Raises:
        InvalidStoichiometryError: If ``conversion`` is not in ``[0, 1)``.
        DomainError: If a species would end with a negative amount.
    """
    finals: dict[str, float] = {}
    for species, change in extents(stoich, conversion).items():
        amount = stoich.initial[species] + change
        if amount < 0:
            # Round-off on the limiting reactant near full conversion
            if amount > -1e-12 * max(stoich.initial[species], 1.0):
                amount = 0.0
            else:
                raise DomainError(f"Species {species} would reach a negative amount ({amount:.6g})")
        finals[species] = amount
    return finals


__all__ = [
    "LimitingReactant",
    "ReactionScheme",
    "Stoichiometry",
    "extents",
    "final_amounts",
    "limiting_reactant",
    "reaction_extent",
]
