"""Request/response facade over the reactor models.

:func:`calculate` validates a request, converts every input to SI, builds
the stoichiometry, kinetics and reactor model, and returns the
mode-specific result expressed in the request's unit system. It raises
:class:`~reactor_calc.exceptions.ReactorCalcError` subclasses.

:func:`handle_request` wraps :func:`calculate` for callers that want a
plain dictionary: ``{"mode", "values", "units"}`` on success and
``{"error": {"kind", "message"}}`` on failure.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import pydantic

from reactor_calc.exceptions import ReactorCalcError, ValidationError
from reactor_calc.reactors import AbstractReactor
from reactor_calc.utils.config import CalculationRequest
from reactor_calc.utils.logging import RequestTracer
from reactor_calc.utils.registry import REACTOR_REGISTRY
from reactor_calc.utils.units import UnitSystem

logger = logging.getLogger(__name__)


def parse_request(payload: CalculationRequest | Mapping[str, Any]) -> CalculationRequest:
    """Validate a mapping into a :class:`CalculationRequest`.

    Raises:
        ValidationError: If fields are missing, non-numeric or inconsistent
            with the requested mode.
    """
    if isinstance(payload, CalculationRequest):
        return payload
    try:
        return CalculationRequest.model_validate(dict(payload))
    except pydantic.ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'request'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ValidationError(f"Invalid request: {problems}") from exc


def build_reactor(
    request: CalculationRequest,
    unit_system: UnitSystem | str | None = None,
) -> AbstractReactor:
    """Reactor model for ``request`` with inputs converted to SI.

    Results are expressed in ``unit_system``, by default the system the
    request was written in. Passing a request already in SI together with
    the caller's unit system avoids a second conversion.
    """
    si = request.to_si()
    return REACTOR_REGISTRY.create(
        si.reactor_type.value,
        name=f"{si.reactor_type.value}:{si.reaction_scheme.value}",
        stoichiometry=si.to_stoichiometry(),
        kinetics=si.kinetics.build(),
        params=si.geometry.model_dump(exclude_none=True),
        unit_system=unit_system or request.unit_system,
    )


def calculate(payload: CalculationRequest | Mapping[str, Any]) -> Any:
    """Run one calculation and return its :data:`~reactor_calc.results.CalculationResult`.

    Raises:
        ReactorCalcError: Any validation, domain or range failure.
    """
    request = parse_request(payload)
    with RequestTracer(
        reactor=request.reactor_type.value,
        mode=request.mode.value,
        unit_system=request.unit_system.value,
    ):
        si = request.to_si()
        reactor = build_reactor(si, unit_system=request.unit_system)
        thermal = si.thermal.to_state() if si.thermal is not None else None
        result = reactor.compute(
            request.mode,
            target_conversion=request.target_conversion,
            thermal=thermal,
        )
        logger.info(f"Computed {request.mode.value} for {reactor!r}")
    return result


def error_response(exc: ReactorCalcError) -> dict[str, Any]:
    return {"error": {"kind": exc.kind, "message": str(exc)}}


def handle_request(payload: CalculationRequest | Mapping[str, Any]) -> dict[str, Any]:
    """Run one calculation and return a response envelope instead of raising."""
    try:
        result = calculate(payload)
    except ReactorCalcError as exc:
        logger.warning(f"Calculation rejected ({exc.kind}): {exc}")
        return error_response(exc)
    return result.to_response()


__all__ = ["build_reactor", "calculate", "error_response", "handle_request", "parse_request"]
