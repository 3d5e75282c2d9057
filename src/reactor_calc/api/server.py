"""ReactorCalc FastAPI server.

Requires the [api] optional dependencies:
    pip install reactor-calc[api]
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

try:
    from fastapi import FastAPI, HTTPException, Query
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel
except ImportError as exc:
    raise ImportError(
        "FastAPI is required for the API server. Install with: pip install reactor-calc[api]"
    ) from exc

from reactor_calc import __version__
from reactor_calc.engine import error_response, handle_request
from reactor_calc.exceptions import ReactorCalcError
from reactor_calc.utils.registry import REACTOR_REGISTRY
from reactor_calc.utils.units import as_unit_system, unit_table

# ── Pydantic response models ─────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str
    version: str


class ReactorListResponse(BaseModel):
    reactors: list[str]


class UnitEntry(BaseModel):
    factor: float
    symbol: str


class UnitTableResponse(BaseModel):
    unit_system: str
    order: float
    units: dict[str, UnitEntry]


class ErrorDetail(BaseModel):
    kind: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail


# ── Application ──────────────────────────────────────────────────────

app = FastAPI(
    title="ReactorCalc API",
    description="Closed-form reactor sizing, kinetics and heat balance",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@app.get("/reactors", response_model=ReactorListResponse)
def list_reactors() -> ReactorListResponse:
    """List registered reactor models."""
    return ReactorListResponse(reactors=REACTOR_REGISTRY.list_keys())


@app.get(
    "/units/{system}",
    response_model=UnitTableResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def get_units(
    system: str,
    order: float = Query(
        default=1.0, ge=0.0, allow_inf_nan=False, description="Order for rate-constant units"
    ),
) -> Any:
    """Conversion factor and symbol of every quantity in one unit system."""
    try:
        unit_system = as_unit_system(system)
    except ReactorCalcError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    try:
        table = unit_table(unit_system, order)
    except ReactorCalcError as exc:
        return JSONResponse(status_code=422, content=error_response(exc))
    return UnitTableResponse(
        unit_system=unit_system.value,
        order=order,
        units={
            name: UnitEntry(factor=spec.factor, symbol=spec.symbol) for name, spec in table.items()
        },
    )


@app.post("/calculate", responses={422: {"model": ErrorResponse}})
def calculate_endpoint(payload: dict[str, Any]) -> Any:
    """Run one calculation.

    Returns the ``{"mode", "values", "units"}`` envelope, or the
    ``{"error": {"kind", "message"}}`` envelope with status 422.
    """
    response = handle_request(payload)
    if "error" in response:
        return JSONResponse(status_code=422, content=response)
    return response


__all__ = ["app"]
