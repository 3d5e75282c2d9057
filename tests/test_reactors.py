"""Tests for the Batch, CSTR, PFR and PBR sizing models."""

from __future__ import annotations

import math

import pytest

from reactor_calc.exceptions import ConversionOutOfRangeError, DomainError, ValidationError
from reactor_calc.physics.energy_balance import ThermalState
from reactor_calc.physics.stoichiometry import ReactionScheme, Stoichiometry
from reactor_calc.reactors import (
    BatchReactor,
    CSTRReactor,
    PackedBedReactor,
    PlugFlowReactor,
    ReactorType,
    mixed_flow_conversion,
    mixed_flow_volume,
)
from reactor_calc.reactors.kinetics import ArrheniusKinetics, PowerLawKinetics
from reactor_calc.results import CalculationMode
from reactor_calc.utils.registry import REACTOR_REGISTRY

FIRST_ORDER_X = 1.0 - math.exp(-1.0)


@pytest.fixture
def thermal() -> ThermalState:
    return ThermalState(
        heat_of_reaction=-50000.0,
        heat_capacity=4000.0,
        heat_transfer_coefficient=100.0,
        cooling_temperature=300.0,
        initial_temperature=350.0,
    )


# ===========================================================================
# Registry
# ===========================================================================


class TestRegistration:
    def test_all_reactors_registered(self):
        assert REACTOR_REGISTRY.list_keys() == ["batch", "cstr", "pbr", "pfr"]

    @pytest.mark.parametrize(
        ("key", "cls"),
        [("batch", BatchReactor), ("cstr", CSTRReactor), ("pfr", PlugFlowReactor),
         ("pbr", PackedBedReactor)],
    )
    def test_registry_lookup(self, key, cls):
        assert REACTOR_REGISTRY.get(key) is cls
        assert cls.reactor_type is ReactorType(key)


# ===========================================================================
# Batch
# ===========================================================================


class TestBatchReactor:
    def test_first_order_conversion(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics, {"reaction_time": 10.0})
        result = reactor.compute("conversion")
        assert result.conversion == pytest.approx(FIRST_ORDER_X)
        assert result.conversion_percent == pytest.approx(63.212, abs=1e-3)
        assert result.residence_time == pytest.approx(10.0)
        assert result.limiting_reactant == "A"
        assert result.final_concentrations["B"] == pytest.approx(FIRST_ORDER_X)

    def test_zero_time_zero_conversion(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics, {"reaction_time": 0.0})
        assert reactor.compute("conversion").conversion == 0.0

    def test_required_time(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics)
        result = reactor.compute("size", target_conversion=0.5)
        assert result.size_parameter == "reaction_time"
        assert result.required_size == pytest.approx(math.log(2.0) / 0.1)
        assert result.units["required_size"] == "s"

    def test_zero_order_overshoot_rejected(self, a_to_b):
        reactor = BatchReactor(
            "batch", a_to_b, PowerLawKinetics(k=0.2, order=0.0), {"reaction_time": 10.0}
        )
        with pytest.raises(ConversionOutOfRangeError):
            reactor.compute("conversion")

    def test_missing_time(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics)
        with pytest.raises(ValidationError, match="reaction_time"):
            reactor.compute("conversion")

    def test_negative_time(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics, {"reaction_time": -1.0})
        with pytest.raises(DomainError):
            reactor.compute("conversion")

    def test_limiting_species_sets_reference(self, a_plus_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_plus_b, first_order_kinetics, {"reaction_time": 10.0})
        result = reactor.compute("conversion")
        assert result.limiting_reactant == "B"
        assert reactor.reference_concentration == pytest.approx(2.0)
        assert result.final_concentrations["B"] == pytest.approx(2.0 * (1.0 - FIRST_ORDER_X))

    def test_lumped_temperature(self, a_to_b, first_order_kinetics, thermal):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics, {"reaction_time": 10.0})
        result = reactor.compute("temperature", thermal=thermal)
        expected = (
            350.0
            + (-50000.0 * FIRST_ORDER_X) / 4.0e6
            - 100.0 * 50.0 * (10.0 / 60.0) / 4.0e6
        )
        assert result.final_temperature == pytest.approx(expected)
        assert result.temperature_change == pytest.approx(expected - 350.0)
        assert result.conversion == pytest.approx(FIRST_ORDER_X)

    def test_temperature_needs_initial_temperature(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics, {"reaction_time": 10.0})
        state = ThermalState(-1.0, 1.0, 1.0, 300.0)
        with pytest.raises(ValidationError, match="initial temperature"):
            reactor.compute("temperature", thermal=state)


# ===========================================================================
# CSTR
# ===========================================================================


class TestCSTRReactor:
    def test_first_order_conversion(self, a_to_b, first_order_kinetics):
        reactor = CSTRReactor(
            "cstr", a_to_b, first_order_kinetics, {"volume": 100.0, "flow_rate": 10.0}
        )
        result = reactor.compute("conversion")
        assert result.conversion == pytest.approx(0.5)
        assert result.residence_time == pytest.approx(10.0)

    def test_required_volume(self, a_to_b, first_order_kinetics):
        reactor = CSTRReactor("cstr", a_to_b, first_order_kinetics, {"flow_rate": 10.0})
        result = reactor.compute(CalculationMode.SIZE, target_conversion=0.5)
        assert result.size_parameter == "volume"
        assert result.required_size == pytest.approx(100.0)
        assert result.residence_time == pytest.approx(10.0)

    def test_mixed_flow_below_plug_flow(self, a_to_b, first_order_kinetics):
        cstr = CSTRReactor(
            "cstr", a_to_b, first_order_kinetics, {"volume": 100.0, "flow_rate": 10.0}
        )
        pfr = PlugFlowReactor(
            "pfr", a_to_b, first_order_kinetics, {"length": 10.0, "superficial_velocity": 1.0}
        )
        assert cstr.conversion() < pfr.conversion()

    def test_second_order_mixed_flow(self):
        # Da = k * tau * C0 = 0.5 * 2 * 2 = 2
        assert mixed_flow_conversion(2.0, 0.5, 2.0, 2.0) == pytest.approx(2.0 / 3.0)

    @pytest.mark.parametrize("order", [0.5, 1.0, 2.0])
    def test_volume_inverts_conversion(self, order):
        volume = mixed_flow_volume(0.7, 0.3, order, 1.5, 2.0)
        assert mixed_flow_conversion(volume / 2.0, 0.3, order, 1.5) == pytest.approx(0.7)

    def test_volume_rejects_complete_conversion(self):
        with pytest.raises(DomainError):
            mixed_flow_volume(1.0, 0.1, 1.0, 1.0, 10.0)

    def test_zero_flow_rate(self, a_to_b, first_order_kinetics):
        reactor = CSTRReactor(
            "cstr", a_to_b, first_order_kinetics, {"volume": 100.0, "flow_rate": 0.0}
        )
        with pytest.raises(DomainError, match="flow_rate"):
            reactor.compute("conversion")

    def test_missing_inputs_listed(self, a_to_b, first_order_kinetics):
        reactor = CSTRReactor("cstr", a_to_b, first_order_kinetics)
        with pytest.raises(ValidationError, match="volume, flow_rate"):
            reactor.compute("conversion")


# ===========================================================================
# PFR
# ===========================================================================


class TestPlugFlowReactor:
    def test_first_order_conversion(self, a_to_b, first_order_kinetics):
        reactor = PlugFlowReactor(
            "pfr", a_to_b, first_order_kinetics, {"length": 10.0, "superficial_velocity": 1.0}
        )
        assert reactor.compute("conversion").conversion == pytest.approx(FIRST_ORDER_X)

    def test_matches_batch_at_equal_residence(self, a_plus_b, second_order_kinetics):
        pfr = PlugFlowReactor(
            "pfr", a_plus_b, second_order_kinetics, {"length": 6.0, "superficial_velocity": 2.0}
        )
        batch = BatchReactor("batch", a_plus_b, second_order_kinetics, {"reaction_time": 3.0})
        assert pfr.conversion() == pytest.approx(batch.conversion())

    def test_required_length(self, a_to_b, first_order_kinetics):
        reactor = PlugFlowReactor(
            "pfr", a_to_b, first_order_kinetics, {"superficial_velocity": 2.0}
        )
        result = reactor.compute("size", target_conversion=0.5)
        assert result.size_parameter == "length"
        assert result.required_size == pytest.approx(2.0 * math.log(2.0) / 0.1)

    def test_target_conversion_out_of_range(self, a_to_b, first_order_kinetics):
        reactor = PlugFlowReactor(
            "pfr", a_to_b, first_order_kinetics, {"superficial_velocity": 2.0}
        )
        with pytest.raises(DomainError):
            reactor.compute("size", target_conversion=1.0)

    def test_arrhenius_rate_mode(self, a_to_b):
        kinetics = ArrheniusKinetics(1e6, 50000.0, order=2.0, temperature=350.0)
        reactor = PlugFlowReactor("pfr", a_to_b, kinetics)
        result = reactor.compute("rate")
        k = kinetics.rate_constant()
        assert result.rate_constant == pytest.approx(k)
        assert result.reaction_rate == pytest.approx(k * 1.0**2)


# ===========================================================================
# PBR
# ===========================================================================


class TestPackedBedReactor:
    @pytest.fixture
    def reactor(self, a_to_b, first_order_kinetics) -> PackedBedReactor:
        return PackedBedReactor(
            "pbr",
            a_to_b,
            first_order_kinetics,
            {
                "length": 2.0,
                "superficial_velocity": 0.2,
                "flow_rate": 0.5,
                "bed_porosity": 0.4,
                "particle_diameter": 0.005,
            },
        )

    def test_conversion_follows_plug_flow(self, reactor):
        assert reactor.compute("conversion").conversion == pytest.approx(FIRST_ORDER_X)

    def test_temperature_profile(self, reactor, thermal):
        result = reactor.compute("temperature", thermal=thermal)
        assert len(result.profile) == 11
        assert result.profile[0].position == 0.0
        assert result.profile[-1].position == pytest.approx(2.0)
        assert result.initial_temperature == pytest.approx(300.0)
        assert result.effective_heat_transfer == pytest.approx(12000.0)
        temperatures = [p.temperature for p in result.profile]
        assert result.max_temperature == pytest.approx(max(temperatures))
        assert result.min_temperature == pytest.approx(min(temperatures))
        assert result.temperature_range == pytest.approx(max(temperatures) - min(temperatures))
        assert result.final_temperature == pytest.approx(temperatures[-1])

    def test_profile_units(self, a_to_b, first_order_kinetics, thermal):
        reactor = PackedBedReactor(
            "pbr",
            a_to_b,
            first_order_kinetics,
            {"length": 2.0, "flow_rate": 0.5, "bed_porosity": 0.4, "particle_diameter": 0.005},
            unit_system="CGS",
        )
        result = reactor.compute("temperature", thermal=thermal)
        assert result.units["position"] == "cm"
        assert result.profile[-1].position == pytest.approx(200.0)

    def test_temperature_needs_bed_inputs(self, a_to_b, first_order_kinetics, thermal):
        reactor = PackedBedReactor("pbr", a_to_b, first_order_kinetics, {"length": 2.0})
        with pytest.raises(ValidationError, match="bed_porosity"):
            reactor.compute("temperature", thermal=thermal)

    def test_invalid_porosity(self, a_to_b, first_order_kinetics, thermal):
        reactor = PackedBedReactor(
            "pbr",
            a_to_b,
            first_order_kinetics,
            {"length": 2.0, "flow_rate": 0.5, "bed_porosity": 1.0, "particle_diameter": 0.005},
        )
        with pytest.raises(DomainError, match="porosity"):
            reactor.compute("temperature", thermal=thermal)


class TestReactorRepr:
    def test_repr_and_dict(self, a_to_b, first_order_kinetics):
        reactor = BatchReactor("demo", a_to_b, first_order_kinetics, {"reaction_time": 1.0})
        assert "BatchReactor" in repr(reactor)
        data = reactor.to_dict()
        assert data["reactor_type"] == "batch"
        assert data["scheme"] == ReactionScheme.A_TO_B.value
        assert data["params"] == {"reaction_time": 1.0}

    def test_none_params_dropped(self, first_order_kinetics):
        stoich = Stoichiometry.from_values("a_to_b", initial_a=1.0)
        reactor = CSTRReactor("cstr", stoich, first_order_kinetics, {"volume": None})
        assert reactor.params == {}


# ===========================================================================
# Non-finite inputs and overflow
# ===========================================================================


class TestNonFiniteGuards:
    @pytest.mark.parametrize("k", [math.nan, math.inf])
    def test_mixed_flow_rejects_non_finite_k(self, k):
        with pytest.raises(DomainError, match="Rate constant"):
            mixed_flow_volume(0.5, k, 1.0, 1.0, 10.0)

    def test_mixed_flow_concentration_overflow(self):
        with pytest.raises(DomainError):
            mixed_flow_conversion(10.0, 0.1, 3.0, 1e200)

    def test_mixed_flow_volume_underflow(self):
        with pytest.raises(DomainError):
            mixed_flow_volume(0.5, 1e-300, 3.0, 1e-200, 10.0)

    def test_nan_residence(self):
        with pytest.raises(DomainError):
            mixed_flow_conversion(math.nan, 0.1, 1.0, 1.0)

    def test_nan_geometry(self, a_to_b, first_order_kinetics):
        reactor = CSTRReactor(
            "cstr", a_to_b, first_order_kinetics, {"volume": math.nan, "flow_rate": 10.0}
        )
        with pytest.raises(DomainError, match="volume"):
            reactor.compute("conversion")

    def test_nan_flow_rate(self, a_to_b, first_order_kinetics):
        reactor = PlugFlowReactor(
            "pfr", a_to_b, first_order_kinetics, {"length": 1.0, "superficial_velocity": math.nan}
        )
        with pytest.raises(DomainError, match="superficial_velocity"):
            reactor.compute("conversion")

    def test_non_finite_result_rejected(self, a_to_b, first_order_kinetics):
        state = ThermalState(
            heat_of_reaction=1e308,
            heat_capacity=1e-300,
            heat_transfer_coefficient=0.0,
            cooling_temperature=300.0,
            initial_temperature=300.0,
        )
        reactor = BatchReactor("batch", a_to_b, first_order_kinetics, {"reaction_time": 10.0})
        with pytest.raises(DomainError, match="Temperature"):
            reactor.compute("temperature", thermal=state)
