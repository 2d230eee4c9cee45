"""Tests for crown fire behavior."""

import logging
from dataclasses import replace

import pytest

from firecalc.models.crown_model import (
    CROWN_SPREAD_RATE_MULTIPLIER,
    calc_active_ratio,
    calc_critical_crown_spread_rate,
    calc_critical_surface_fireline_intensity,
    calc_crown_fire,
    calc_crown_flame_length,
    calc_crown_fraction_burned,
    calc_crown_fuel_load,
    calc_crown_length_to_width_ratio,
    calc_fire_type,
    calc_power_of_wind,
    calc_standardized_surface_fire,
    calc_transition_ratio,
)
from firecalc.models.rothermel import calc_fuel_model_surface_fire
from firecalc.utilities.data_classes import CrownInputs, EnvironmentInputs, WindHeightInputMode
from firecalc.utilities.fire_util import FireType
from firecalc.utilities.unit_conversions import (
    ft_to_m,
    kW_m_to_btu_ft_s,
    lb_ft3_to_kg_m3,
    m_to_ft,
    mph_to_ft_min,
)


class TestCriticalSurfaceIntensity:
    """Tests for the crown initiation threshold."""

    def test_value(self):
        """6 ft base height and 100% foliar moisture."""
        expected = kW_m_to_btu_ft_s((0.010 * ft_to_m(6.0) * (450.0 + 25.9 * 100.0)) ** 1.5)
        assert calc_critical_surface_fireline_intensity(6.0, 1.0) == pytest.approx(expected)

    def test_floors(self):
        """Foliar moisture is floored at 30% and base height at 0.1 m."""
        floored = calc_critical_surface_fireline_intensity(0.0, 0.10)
        assert floored == pytest.approx(calc_critical_surface_fireline_intensity(m_to_ft(0.1), 0.30))
        assert floored > 0

    def test_increases_with_base_height(self):
        """Higher canopies need more intense surface fires."""
        assert calc_critical_surface_fireline_intensity(20.0, 1.0) > calc_critical_surface_fireline_intensity(5.0, 1.0)


class TestCriticalCrownSpreadRate:
    """Tests for the active crowning threshold."""

    def test_value(self):
        """3 / CBD in m/min, reported in ft/min."""
        expected = m_to_ft(3.0 / lb_ft3_to_kg_m3(0.01))
        assert calc_critical_crown_spread_rate(0.01) == pytest.approx(expected)

    def test_no_canopy(self):
        """No canopy fuel gives no threshold."""
        assert calc_critical_crown_spread_rate(0.0) == 0.0


class TestRatiosAndClassification:
    """Tests for transition/active ratios and the fire type."""

    def test_zero_thresholds(self):
        """Ratios are zero when their threshold is zero."""
        assert calc_transition_ratio(100.0, 0.0) == 0.0
        assert calc_active_ratio(50.0, 0.0) == 0.0

    @pytest.mark.parametrize("transition, active, expected", [
        (0.5, 0.5, FireType.SURFACE),
        (0.5, 1.5, FireType.CONDITIONAL_CROWN),
        (1.5, 0.5, FireType.TORCHING),
        (1.5, 1.5, FireType.CROWNING),
        (1.0, 1.0, FireType.CROWNING),
    ])
    def test_fire_type(self, transition, active, expected):
        """Fire type from the two ratios."""
        assert calc_fire_type(transition, active) == expected


class TestCrownQuantities:
    """Tests for crown fuel, flame length, power of the wind and shape."""

    def test_crown_fuel_load(self):
        """CBD times crown length."""
        assert calc_crown_fuel_load(0.01, 60.0, 6.0) == pytest.approx(0.54)

    def test_crown_fuel_load_clamped(self):
        """A base above the canopy top leaves no crown fuel."""
        assert calc_crown_fuel_load(0.01, 5.0, 6.0) == 0.0

    def test_flame_length(self):
        """Thomas (1963) flame length, zero without intensity."""
        assert calc_crown_flame_length(1000.0) == pytest.approx(0.2 * 100.0)
        assert calc_crown_flame_length(0.0) == 0.0

    def test_power_of_wind_needs_relative_wind(self):
        """The wind must outrun the fire to contribute power."""
        assert calc_power_of_wind(100.0, 200.0) == 0.0
        assert calc_power_of_wind(660.0, 60.0) == pytest.approx(0.00106 * 1000.0)

    def test_length_to_width(self):
        """1 + 0.125 per mph of 20-ft wind."""
        assert calc_crown_length_to_width_ratio(mph_to_ft_min(20)) == pytest.approx(3.5)
        assert calc_crown_length_to_width_ratio(-1.0) == 1.0


class TestCrownFractionBurned:
    """Tests for crown fraction burned."""

    def test_below_critical_surface_rate(self):
        """A fire below the critical intensity burns no crown."""
        assert calc_crown_fraction_burned(10.0, 50.0, 100.0, 60.0) == 0.0

    def test_ninety_percent_point(self):
        """Nine tenths of the way to the critical crown rate gives 0.9."""
        # R_0 = 100 * 14 / 280 = 5, R_ac = 15
        assert calc_crown_fraction_burned(14.0, 280.0, 100.0, 15.0) == pytest.approx(0.9)

    def test_degenerate_span(self):
        """Critical crown rate at or below the critical surface rate means full involvement."""
        assert calc_crown_fraction_burned(14.0, 280.0, 100.0, 4.0) == 1.0

    def test_no_fire(self):
        assert calc_crown_fraction_burned(0.0, 0.0, 100.0, 15.0) == 0.0


class TestCrownFire:
    """Tests for the full crown fire calculation."""

    def test_spread_rate_from_standardized_run(self, windy_env, conifer_canopy, catalog):
        """Crown ROS is 3.34 times fuel model 10 under the standardized scenario."""
        surface = calc_fuel_model_surface_fire(10, windy_env, catalog)
        crown = calc_crown_fire(windy_env, conifer_canopy, surface, catalog)

        standardized = calc_standardized_surface_fire(windy_env, mph_to_ft_min(10), catalog)
        assert crown.spread_rate == pytest.approx(CROWN_SPREAD_RATE_MULTIPLIER * standardized.spread_rate)
        assert crown.standardized_surface_fire.fuel_bed_depth == pytest.approx(1.0)

    def test_spread_rate_against_direct_midflame_run(self, windy_env, conifer_canopy, catalog):
        """Crown ROS is 3.34 times a flat fuel model 10 run at 0.4 of the 20-ft wind given as midflame wind."""
        surface = calc_fuel_model_surface_fire(10, windy_env, catalog)
        crown = calc_crown_fire(windy_env, conifer_canopy, surface, catalog)

        reference_env = EnvironmentInputs(
            moisture=windy_env.moisture,
            wind_speed=0.4 * mph_to_ft_min(10),
            wind_direction=0.0,
            wind_height_input_mode=WindHeightInputMode.DIRECT_MIDFLAME,
            slope=0.0,
        )
        reference = calc_fuel_model_surface_fire(10, reference_env, catalog)
        assert reference.spread_rate > 0
        assert crown.spread_rate == pytest.approx(3.34 * reference.spread_rate)

    def test_standardized_run_ignores_slope(self, windy_env, catalog):
        """The standardized run is flat with a 0.4 WAF."""
        steep = replace(windy_env, slope=40.0, wind_direction=120.0)
        flat = calc_standardized_surface_fire(windy_env, mph_to_ft_min(10), catalog)
        assert calc_standardized_surface_fire(steep, mph_to_ft_min(10), catalog).spread_rate == pytest.approx(
            flat.spread_rate)
        assert flat.midflame_wind_speed == pytest.approx(0.4 * mph_to_ft_min(10))

    def test_outputs_consistent(self, windy_env, conifer_canopy, catalog):
        """Ratios and classification follow from the surface and canopy inputs."""
        surface = calc_fuel_model_surface_fire(10, windy_env, catalog)
        crown = calc_crown_fire(windy_env, conifer_canopy, surface, catalog)

        assert crown.crown_fuel_load == pytest.approx(0.54)
        assert crown.crown_fire_heat_per_unit_area == pytest.approx(
            surface.heat_per_unit_area + crown.canopy_heat_per_unit_area)
        assert crown.transition_ratio == pytest.approx(
            surface.fireline_intensity / crown.critical_surface_fireline_intensity)
        assert crown.active_ratio == pytest.approx(crown.spread_rate / crown.critical_crown_spread_rate)
        assert crown.fire_type == calc_fire_type(crown.transition_ratio, crown.active_ratio)
        assert crown.is_crown_fire == (crown.fire_type in (FireType.TORCHING, FireType.CROWNING))
        assert 0.0 <= crown.crown_fraction_burned <= 1.0

    def test_no_canopy_fuel(self, windy_env, catalog):
        """Zero bulk density: no crown fuel, no active ratio."""
        surface = calc_fuel_model_surface_fire(10, windy_env, catalog)
        crown = calc_crown_fire(windy_env, CrownInputs(6.0, 0.0, 1.0, canopy_height=60.0), surface, catalog)

        assert crown.crown_fuel_load == 0.0
        assert crown.critical_crown_spread_rate == 0.0
        assert crown.active_ratio == 0.0
        assert crown.fire_type in (FireType.SURFACE, FireType.TORCHING)

    def test_canopy_height_from_environment(self, windy_env, catalog):
        """Canopy height falls back to the scenario's canopy height."""
        env = replace(windy_env, canopy_height=40.0)
        surface = calc_fuel_model_surface_fire(10, env, catalog)
        crown = calc_crown_fire(env, CrownInputs(10.0, 0.01), surface, catalog)
        assert crown.crown_fuel_load == pytest.approx(0.3)

    def test_midflame_wind_warns(self, cross_slope_env, conifer_canopy, catalog, caplog):
        """A midflame wind input cannot drive the crown model and is treated as calm."""
        surface = calc_fuel_model_surface_fire(10, cross_slope_env, catalog)
        with caplog.at_level(logging.WARNING, logger="firecalc.models.crown_model"):
            crown = calc_crown_fire(cross_slope_env, conifer_canopy, surface, catalog)

        assert "20-ft wind speed unavailable" in caplog.text
        assert crown.wind_speed_at_twenty_feet < 0
        assert crown.length_to_width_ratio == 1.0
        assert crown.power_of_wind == 0.0
        assert crown.power_ratio == 0.0
