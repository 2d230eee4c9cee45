"""Tests for fuel beds and the standard fuel model catalog."""

import dataclasses

import pytest

from firecalc.exceptions import FuelModelError
from firecalc.models.fuel_models import (
    FuelComplex,
    FuelModelCatalog,
    FuelParticle,
    build_fuel_complex,
    calc_curing_level,
)
from firecalc.utilities.data_classes import FuelMoisture, MoistureClass
from firecalc.utilities.unit_conversions import LengthUnits, LoadingUnits, MoistureUnits, tons_acre_to_lb_ft2


class TestCatalog:
    """Tests for catalog lookups."""

    def test_standard_catalog_size(self, catalog):
        """Catalog holds the 13 Anderson, 40 Scott & Burgan and 5 non-burnable models."""
        assert len(catalog.fuel_model_numbers()) == 58

    def test_is_fuel_model_defined(self, catalog):
        """Defined and undefined numbers are told apart."""
        assert catalog.is_fuel_model_defined(1)
        assert catalog.is_fuel_model_defined(165)
        assert not catalog.is_fuel_model_defined(14)

    def test_is_all_fuel_load_zero(self, catalog):
        """Non-burnable and undefined models report no load."""
        assert catalog.is_all_fuel_load_zero(91)
        assert catalog.is_all_fuel_load_zero(14)
        assert not catalog.is_all_fuel_load_zero(2)

    def test_is_fuel_model_reserved(self, catalog):
        """Standard and non-burnable numbers are reserved; free numbers are not."""
        assert catalog.is_fuel_model_reserved(1)
        assert catalog.is_fuel_model_reserved(165)
        assert catalog.is_fuel_model_reserved(95)
        assert not catalog.is_fuel_model_reserved(14)
        assert not catalog.is_fuel_model_reserved(250)

    def test_custom_model_does_not_unreserve(self, catalog):
        """A custom record at a free number stays unreserved and a standard number stays reserved."""
        custom = dataclasses.replace(catalog.get_fuel_model(2), number=14, code="CUSTOM")
        extended = catalog.with_fuel_model(custom)
        assert not extended.is_fuel_model_reserved(14)
        assert extended.is_fuel_model_reserved(2)

    def test_is_moisture_class_input_needed(self, catalog):
        """A moisture is needed only for size classes that carry load."""
        assert catalog.is_moisture_class_input_needed(1, MoistureClass.ONE_HOUR)
        assert not catalog.is_moisture_class_input_needed(1, MoistureClass.TEN_HOUR)
        assert not catalog.is_moisture_class_input_needed(1, MoistureClass.LIVE_WOODY)
        assert catalog.is_moisture_class_input_needed(2, MoistureClass.LIVE_HERBACEOUS)
        assert not catalog.is_moisture_class_input_needed(2, MoistureClass.LIVE_WOODY)

    def test_moisture_class_not_needed_without_fuel(self, catalog):
        """Non-burnable and undefined models need no moisture input."""
        for moisture_class in MoistureClass:
            assert not catalog.is_moisture_class_input_needed(91, moisture_class)
            assert not catalog.is_moisture_class_input_needed(14, moisture_class)

    def test_undefined_lookup_raises(self, catalog):
        """Direct lookup of an undefined model raises FuelModelError."""
        with pytest.raises(FuelModelError) as exc_info:
            catalog.get_fuel_model(14)
        assert exc_info.value.fuel_model_id == 14

    def test_fm2_values(self, catalog):
        """Anderson Model 2 catalog values."""
        assert catalog.get_fuel_code(2) == "FM2"
        assert catalog.get_fuel_bed_depth(2) == pytest.approx(1.0)
        assert catalog.get_moisture_of_extinction_dead(2) == pytest.approx(0.15)
        assert catalog.get_moisture_of_extinction_dead(2, MoistureUnits.PERCENT) == pytest.approx(15.0)
        assert catalog.get_heat_of_combustion_dead(2) == 8000.0

    def test_fuel_load_units(self, catalog):
        """Fuel loads are stored in lb/ft^2 and can be read back in tons/acre."""
        assert catalog.get_fuel_load(2, MoistureClass.ONE_HOUR) == pytest.approx(tons_acre_to_lb_ft2(2.0))
        assert catalog.get_fuel_load(2, MoistureClass.ONE_HOUR, LoadingUnits.TONS_PER_ACRE) == pytest.approx(2.0)

    def test_depth_units(self, catalog):
        """Depth can be read in meters."""
        assert catalog.get_fuel_bed_depth(4, LengthUnits.METERS) == pytest.approx(6 * 0.3048)

    def test_timelag_savr(self, catalog):
        """Ten and hundred hour SAVR are fixed."""
        assert catalog.get_savr(2, MoistureClass.TEN_HOUR) == 109.0
        assert catalog.get_savr(2, MoistureClass.HUNDRED_HOUR) == 30.0
        assert catalog.get_savr(2, MoistureClass.ONE_HOUR) == 3000.0

    def test_with_fuel_model(self, catalog):
        """A custom record can be added without touching the standard catalog."""
        custom = dataclasses.replace(catalog.get_fuel_model(2), number=14, code="CUSTOM")
        extended = catalog.with_fuel_model(custom)
        assert extended.get_fuel_code(14) == "CUSTOM"
        assert not catalog.is_fuel_model_defined(14)

    def test_catalog_cache_shared(self):
        """The standard records are loaded once and shared."""
        assert FuelModelCatalog.load_fuel_models() is FuelModelCatalog.load_fuel_models()


class TestCuringLevel:
    """Tests for the dynamic herbaceous curing level."""

    def test_fully_cured(self):
        """Low herbaceous moisture fully cures the herb load."""
        assert calc_curing_level(0.25) == 1.0
        assert calc_curing_level(0.10) == 1.0

    def test_fully_green(self):
        """High herbaceous moisture leaves the herb load green."""
        assert calc_curing_level(1.20) == pytest.approx(0.0, abs=1e-12)
        assert calc_curing_level(2.0) == 0.0

    def test_midpoint(self):
        """Curing is linear in between."""
        assert calc_curing_level(0.75) == pytest.approx(0.5)
        assert calc_curing_level(0.48) == pytest.approx(0.8)

    def test_end_points(self):
        """The linear ramp reaches full curing at 30% and full green at 120%."""
        assert calc_curing_level(0.30) == pytest.approx(1.0)
        assert calc_curing_level(1.20) == pytest.approx(0.0, abs=1e-12)
        assert calc_curing_level(0.31) < 1.0


class TestBuildFuelComplex:
    """Tests for building fuel beds from catalog records."""

    def test_dynamic_transfer(self, catalog):
        """GR2 at 75% herbaceous moisture moves the cured herb load to dead."""
        record = catalog.get_fuel_model(102)
        fuel = build_fuel_complex(record, 0.75)
        cured = calc_curing_level(0.75)

        dead_herb = fuel.dead[3]
        live_herb = fuel.live[0]
        assert dead_herb.load == pytest.approx(record.fuel_load_live_herbaceous * cured)
        assert live_herb.load == pytest.approx(record.fuel_load_live_herbaceous * (1 - cured))
        assert dead_herb.savr == record.savr_live_herbaceous
        assert dead_herb.moisture_class == MoistureClass.ONE_HOUR

    def test_total_load_conserved(self, catalog):
        """The dynamic transfer keeps the total load."""
        record = catalog.get_fuel_model(102)
        fuel = build_fuel_complex(record, 0.5)
        expected = (record.fuel_load_one_hour + record.fuel_load_ten_hour + record.fuel_load_hundred_hour
                    + record.fuel_load_live_herbaceous + record.fuel_load_live_woody)
        assert fuel.total_load == pytest.approx(expected)

    def test_static_model_no_transfer(self, catalog):
        """Static models keep the herb load live."""
        fuel = build_fuel_complex(catalog.get_fuel_model(2), 0.3)
        assert fuel.dead[3].load == 0.0
        assert fuel.live[0].load == pytest.approx(tons_acre_to_lb_ft2(0.5))


class TestFuelComplex:
    """Tests for fuel bed properties."""

    def test_explicit_moisture(self):
        """An explicit particle moisture overrides the scenario."""
        p = FuelParticle(0.1, 1500.0, moisture=1.25)
        assert p.moisture_from(FuelMoisture()) == 1.25

    def test_class_moisture(self):
        """A particle without explicit moisture takes its class moisture."""
        p = FuelParticle(0.1, 1500.0, moisture_class=MoistureClass.LIVE_WOODY)
        assert p.moisture_from(FuelMoisture(live_woody=1.1)) == 1.1

    def test_empty_bed(self):
        """A bed with no load reports zero load and no live fuel."""
        fuel = FuelComplex(dead=(FuelParticle(0.0, 2000.0, moisture_class=MoistureClass.ONE_HOUR),),
                           live=(), depth=1.0, dead_moisture_of_extinction=0.25)
        assert fuel.is_all_load_zero
        assert not fuel.has_live_fuel
        assert fuel.packing_ratio == 0.0

    def test_zero_depth(self):
        """Zero depth gives zero bulk density."""
        fuel = FuelComplex(dead=(FuelParticle(0.1, 2000.0, moisture_class=MoistureClass.ONE_HOUR),),
                           live=(), depth=0.0, dead_moisture_of_extinction=0.25)
        assert fuel.bulk_density == 0.0
