"""Tests for the unit-system registry."""

from __future__ import annotations

import numpy as np
import pytest

from reactor_calc.exceptions import DomainError, UnknownQuantityError, ValidationError
from reactor_calc.utils.units import (
    FIELD_QUANTITIES,
    QUANTITIES,
    UNIT_TABLE,
    UnitSystem,
    as_unit_system,
    convert,
    convert_parameters,
    list_quantities,
    resolve,
    unit_table,
)

SYSTEMS = list(UnitSystem)


class TestUnitSystem:
    def test_case_insensitive(self):
        assert as_unit_system("imperial") is UnitSystem.IMPERIAL
        assert as_unit_system("cgs") is UnitSystem.CGS
        assert as_unit_system(UnitSystem.SI) is UnitSystem.SI

    def test_unknown_system(self):
        with pytest.raises(ValidationError, match="Unknown unit system"):
            as_unit_system("furlongs")

    def test_table_read_only(self):
        with pytest.raises(TypeError):
            UNIT_TABLE[UnitSystem.SI]["time"] = None  # type: ignore[index]


class TestResolve:
    @pytest.mark.parametrize("quantity", list_quantities())
    def test_si_factors_are_one(self, quantity):
        assert resolve(UnitSystem.SI, quantity, order=1.7).factor == 1.0

    def test_every_system_has_every_quantity(self):
        for system in SYSTEMS:
            table = unit_table(system)
            assert set(table) == set(QUANTITIES)
            assert all(spec.symbol for spec in table.values())

    def test_known_entries(self):
        assert resolve("CGS", "concentration").symbol == "mol/cm³"
        assert resolve("CGS", "volume").factor == pytest.approx(1e6)
        assert resolve("Imperial", "length").factor == pytest.approx(3.28084)
        assert resolve("Imperial", "temperature").symbol == "°R"

    def test_unknown_quantity(self):
        with pytest.raises(UnknownQuantityError):
            resolve(UnitSystem.SI, "luminosity")

    def test_unknown_quantity_is_key_error(self):
        with pytest.raises(KeyError):
            resolve(UnitSystem.CGS, "luminosity")

    def test_rate_constant_needs_order(self):
        with pytest.raises(ValidationError, match="order"):
            resolve(UnitSystem.CGS, "rate_constant")

    def test_rate_constant_first_order_is_inverse_time(self):
        spec = resolve(UnitSystem.IMPERIAL, "rate_constant", order=1.0)
        assert spec.factor == pytest.approx(1.0)
        assert spec.symbol == "s⁻¹"

    def test_rate_constant_second_order(self):
        spec = resolve(UnitSystem.CGS, "rate_constant", order=2.0)
        # (mol/cm^3)^-1 / s: 1 m^3/(kmol*s) = 1e3 cm^3/(mol*s)
        assert spec.factor == pytest.approx(1e3)
        assert spec.symbol == "(mol/cm³)^-1·s⁻¹"

    def test_rate_constant_zero_order_matches_reaction_rate(self):
        k = resolve(UnitSystem.IMPERIAL, "rate_constant", order=0.0)
        r = resolve(UnitSystem.IMPERIAL, "reaction_rate")
        assert k.factor == pytest.approx(r.factor)


class TestConvert:
    @pytest.mark.parametrize("source", SYSTEMS)
    @pytest.mark.parametrize("target", SYSTEMS)
    def test_round_trip(self, source, target):
        for quantity in list_quantities():
            value = 3.7
            there = convert(value, quantity, source, target, order=1.5)
            back = convert(there, quantity, target, source, order=1.5)
            assert back == pytest.approx(value, rel=1e-9)

    def test_identity(self):
        assert convert(42.0, "volume", "CGS", "CGS") == 42.0

    def test_si_to_cgs_volume(self):
        assert convert(2.0, "volume", "SI", "CGS") == pytest.approx(2e6)

    def test_cgs_to_si_concentration(self):
        # 1e-3 mol/cm^3 = 1 kmol/m^3
        assert convert(1e-3, "concentration", "CGS", "SI") == pytest.approx(1.0)

    def test_temperature_to_rankine(self):
        assert convert(300.0, "temperature", "SI", "Imperial") == pytest.approx(540.0)

    def test_imperial_to_cgs_goes_through_si(self):
        feet = convert(1.0, "length", "SI", "Imperial")
        assert convert(feet, "length", "Imperial", "CGS") == pytest.approx(100.0)


class TestConvertParameters:
    def test_dimensionless_fields_untouched(self):
        params = {
            "reaction_order": 2.0,
            "bed_porosity": 0.4,
            "target_conversion": 0.5,
            "volume": 1.0,
        }
        out = convert_parameters(params, "SI", "CGS")
        assert out["reaction_order"] == 2.0
        assert out["bed_porosity"] == 0.4
        assert out["target_conversion"] == 0.5
        assert out["volume"] == pytest.approx(1e6)

    def test_order_taken_from_params(self):
        out = convert_parameters({"reaction_order": 2.0, "rate_constant": 1.0}, "SI", "CGS")
        assert out["rate_constant"] == pytest.approx(1e3)

    def test_none_values_copied(self):
        out = convert_parameters({"volume": None}, "SI", "Imperial")
        assert out == {"volume": None}

    def test_returns_new_dict(self):
        params = {"length": 1.0}
        out = convert_parameters(params, "SI", "CGS")
        assert params == {"length": 1.0}
        assert out is not params

    def test_round_trip_all_fields(self):
        params = {name: 2.5 for name in FIELD_QUANTITIES}
        there = convert_parameters(params, "Imperial", "CGS", order=0.5)
        back = convert_parameters(there, "CGS", "Imperial", order=0.5)
        np.testing.assert_allclose(
            [back[name] for name in params], [2.5] * len(params), rtol=1e-9
        )


class TestOverflow:
    def test_rate_constant_factor_overflow(self):
        with pytest.raises(DomainError, match="Rate-constant unit factor"):
            resolve(UnitSystem.CGS, "rate_constant", order=200.0)

    def test_rate_constant_factor_underflow(self):
        with pytest.raises(DomainError):
            resolve(UnitSystem.IMPERIAL, "rate_constant", order=-400.0)

    def test_conversion_overflow(self):
        with pytest.raises(DomainError):
            convert(1e306, "volume", "SI", "CGS")
