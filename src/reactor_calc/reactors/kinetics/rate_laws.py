"""Closed-form power-law kinetics for a single reaction.

Rate law: ``r = k * C**n``.

Integrated design equation shared by batch reactors (residence = time) and
plug-flow / packed-bed reactors (residence = length / velocity)::

    n = 0:  X = k * tau / C_ref
    n = 1:  X = 1 - exp(-k * tau)
    else:   X = 1 - (1 + (n - 1) * k * tau * C_ref**(n - 1))**(1 / (1 - n))

:func:`residence_for` is the algebraic inverse of the same three branches.
These functions are reactor-agnostic; reactor models decide what the
residence measure and the reference concentration are.
"""

from __future__ import annotations

import logging

import numpy as np

from reactor_calc.exceptions import DomainError
from reactor_calc.utils.constants import R_GAS
from reactor_calc.utils.numerical import checked_power, require_finite

logger = logging.getLogger(__name__)


def _check_order(order: float) -> None:
    if not np.isfinite(order) or order < 0:
        raise DomainError(f"Reaction order must be a finite non-negative number, got {order}")


def _check_positive(name: str, value: float) -> None:
    if not np.isfinite(value) or value <= 0:
        raise DomainError(f"{name} must be positive, got {value}")


def reaction_rate(concentration: float, k: float, order: float) -> float:
    """Instantaneous rate ``k * C**n`` (``k`` for zero order).

    Raises:
        DomainError: If ``k <= 0``, ``C < 0`` or ``order < 0``.
    """
    _check_order(order)
    _check_positive("Rate constant", k)
    if concentration < 0:
        raise DomainError(f"Concentration must be non-negative, got {concentration}")
    if order == 0:
        return float(k)
    power = checked_power(concentration, order, "Concentration power")
    return require_finite(k * power, "Reaction rate")


def arrhenius_rate_constant(
    pre_exponential_factor: float,
    activation_energy: float,
    temperature: float,
) -> float:
    """Temperature-corrected rate constant ``A * exp(-Ea / (R * T))``.

    Args:
        pre_exponential_factor: Frequency factor ``A`` (same units as k).
        activation_energy: ``Ea`` in J/mol.
        temperature: Absolute temperature in K.
    """
    _check_positive("Pre-exponential factor", pre_exponential_factor)
    _check_positive("Temperature", temperature)
    if activation_energy < 0:
        raise DomainError(f"Activation energy must be non-negative, got {activation_energy}")
    return require_finite(
        pre_exponential_factor * np.exp(-activation_energy / (R_GAS * temperature)),
        "Arrhenius rate constant",
    )


def conversion_after(residence: float, k: float, order: float, c_ref: float) -> float:
    """Conversion reached after ``residence`` under the integrated design equation.

    The zero-order branch is not capped; values of one or more mean the
    reactant is exhausted before the end of the residence measure and are
    left for the caller to reject.

    Raises:
        DomainError: If ``k <= 0``, ``c_ref <= 0``, ``residence < 0``,
            ``order < 0``, the general-order base is negative, or a
            power overflows.
    """
    _check_order(order)
    _check_positive("Rate constant", k)
    _check_positive("Reference concentration", c_ref)
    if not np.isfinite(residence) or residence < 0:
        raise DomainError(f"Residence measure must be non-negative, got {residence}")

    if order == 0:
        return float(k * residence / c_ref)
    if order == 1:
        return float(-np.expm1(-k * residence))

    scale = checked_power(c_ref, order - 1.0, "Reference concentration power")
    base = require_finite(1.0 + (order - 1.0) * k * residence * scale, "Design-equation base")
    if base < 0:
        raise DomainError(
            f"Order {order} reaction is exhausted before residence {residence} "
            f"(base {base:.6g} < 0 under a fractional power)"
        )
    return 1.0 - checked_power(base, 1.0 / (1.0 - order), "Design-equation power")


def residence_for(conversion: float, k: float, order: float, c_ref: float) -> float:
    """Residence measure needed to reach ``conversion``; inverse of :func:`conversion_after`.

    Raises:
        DomainError: If ``conversion`` is outside ``[0, 1)``, ``k <= 0``,
            ``c_ref <= 0``, ``order < 0``, or a power overflows.
    """
    _check_order(order)
    _check_positive("Rate constant", k)
    _check_positive("Reference concentration", c_ref)
    if not np.isfinite(conversion) or conversion < 0:
        raise DomainError(f"Conversion must be non-negative, got {conversion}")
    if conversion >= 1:
        raise DomainError(f"Conversion {conversion} >= 1 requires an unbounded residence measure")

    if order == 0:
        return require_finite(conversion * c_ref / k, "Residence measure")
    if order == 1:
        return require_finite(-np.log1p(-conversion) / k, "Residence measure")

    numerator = checked_power(1.0 - conversion, 1.0 - order, "Unconverted fraction power") - 1.0
    scale = checked_power(c_ref, order - 1.0, "Reference concentration power")
    return require_finite(numerator / ((order - 1.0) * k * scale), "Residence measure")


__all__ = [
    "arrhenius_rate_constant",
    "conversion_after",
    "reaction_rate",
    "residence_for",
]
