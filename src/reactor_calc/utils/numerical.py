"""Numerical guards for the closed-form relations.

Python float ``**`` raises ``OverflowError`` (or ``ZeroDivisionError``)
rather than returning ``inf``; these helpers turn such failures and any
non-finite result into :class:`~reactor_calc.exceptions.DomainError`.
"""

from __future__ import annotations

import logging

import numpy as np

from reactor_calc.exceptions import DomainError

logger = logging.getLogger(__name__)


def require_finite(value: float, name: str = "Result") -> float:
    """Return ``value`` as float, rejecting NaN and infinities.

    Raises:
        DomainError: If ``value`` is not finite.
    """
    value = float(value)
    if not np.isfinite(value):
        raise DomainError(f"{name} is not a finite number ({value})")
    return value


def checked_power(base: float, exponent: float, name: str = "Power") -> float:
    """``base ** exponent`` for a non-negative base, finite or :class:`DomainError`."""
    if base < 0:
        raise DomainError(f"{name}: negative base {base:g} under exponent {exponent:g}")
    try:
        value = float(base) ** float(exponent)
    except (OverflowError, ZeroDivisionError) as exc:
        raise DomainError(f"{name} out of range: {base:g} ** {exponent:g}") from exc
    return require_finite(value, name)


__all__ = ["checked_power", "require_finite"]
