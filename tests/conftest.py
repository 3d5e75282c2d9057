"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from reactor_calc.physics.stoichiometry import ReactionScheme, Stoichiometry
from reactor_calc.reactors.kinetics import PowerLawKinetics


@pytest.fixture
def first_order_kinetics() -> PowerLawKinetics:
    """k = 0.1 1/s, n = 1."""
    return PowerLawKinetics(k=0.1, order=1.0)


@pytest.fixture
def second_order_kinetics() -> PowerLawKinetics:
    """k = 0.5 m^3/(kmol*s), n = 2."""
    return PowerLawKinetics(k=0.5, order=2.0)


@pytest.fixture
def a_to_b() -> Stoichiometry:
    """A -> B with C_A0 = 1 kmol/m^3."""
    return Stoichiometry.from_values(ReactionScheme.A_TO_B, initial_a=1.0)


@pytest.fixture
def a_plus_b() -> Stoichiometry:
    """A + 2B -> C + D, B limiting (2.0 / 2 < 1.5 / 1)."""
    return Stoichiometry.from_values(
        ReactionScheme.A_PLUS_B_TO_C_PLUS_D,
        initial_a=1.5,
        initial_b=2.0,
        nu_b=2.0,
    )


@pytest.fixture
def batch_request() -> dict:
    """Scenario request: first-order batch, 10 s at k = 0.1 1/s."""
    return {
        "reactor_type": "batch",
        "mode": "conversion",
        "unit_system": "SI",
        "reaction_scheme": "a_to_b",
        "initial_amounts": {"A": 1.0},
        "kinetics": {"order": 1.0, "rate_constant": 0.1},
        "geometry": {"reaction_time": 10.0},
    }


@pytest.fixture
def cstr_request() -> dict:
    return {
        "reactor_type": "cstr",
        "mode": "conversion",
        "initial_amounts": {"A": 1.0},
        "kinetics": {"order": 1.0, "rate_constant": 0.1},
        "geometry": {"volume": 100.0, "flow_rate": 10.0},
    }


@pytest.fixture
def pbr_temperature_request() -> dict:
    return {
        "reactor_type": "pbr",
        "mode": "temperature",
        "initial_amounts": {"A": 1.0},
        "kinetics": {"order": 1.0, "rate_constant": 0.1},
        "geometry": {
            "length": 2.0,
            "flow_rate": 0.5,
            "bed_porosity": 0.4,
            "particle_diameter": 0.005,
        },
        "thermal": {
            "heat_of_reaction": -50000.0,
            "heat_capacity": 4000.0,
            "heat_transfer_coefficient": 100.0,
            "cooling_temperature": 300.0,
        },
    }
