"""Tests for the palmetto-gallberry fuel bed."""

import numpy as np
import pytest

from firecalc.exceptions import ValidationError
from firecalc.models.palmetto_gallberry import (
    HEAT_OF_COMBUSTION,
    MOISTURE_OF_EXTINCTION_DEAD,
    PalmettoGallberryFuel,
    build_palmetto_gallberry_fuel,
    calc_dead_one_hour_load,
    calc_dead_ten_hour_load,
    calc_litter_load,
    calc_palmetto_gallberry_loads,
    calc_palmetto_gallberry_surface_fire,
)


@pytest.fixture
def stand():
    """Five year rough, 3 ft understory, half palmetto cover, 40 ft^2/ac overstory."""
    return PalmettoGallberryFuel(age_of_rough=5.0, height_of_understory=3.0,
                                 palmetto_coverage=0.5, overstory_basal_area=40.0)


class TestLoads:
    """Tests for the load regressions."""

    def test_dead_one_hour(self):
        """Dead 1-h load for a 5 year rough with a 3 ft understory."""
        expected = -0.00121 + 0.00379 * np.log(5.0) + 0.00118 * 9.0
        assert calc_dead_one_hour_load(5.0, 3.0) == pytest.approx(expected)

    def test_negative_regression_floored(self):
        """Regressions that go negative for young roughs are floored at zero."""
        assert calc_dead_ten_hour_load(1.0, 0.0) == 0.0

    def test_litter_saturates_with_age(self):
        """Litter approaches its basal area ceiling as the rough ages."""
        assert calc_litter_load(30.0, 40.0) == pytest.approx(0.03632 + 0.0005336 * 40.0)
        assert calc_litter_load(1.0, 40.0) < calc_litter_load(5.0, 40.0)

    def test_coverage_in_percent(self, stand):
        """Coverage is passed to the regressions in percent."""
        loads = calc_palmetto_gallberry_loads(stand)
        assert loads.dead_ten_hour == pytest.approx(calc_dead_ten_hour_load(5.0, 50.0))

    def test_depth(self, stand):
        """Fuel bed depth is two thirds of the understory height."""
        assert calc_palmetto_gallberry_loads(stand).fuel_bed_depth == pytest.approx(2.0)


class TestFuelBed:
    """Tests for the palmetto-gallberry fuel bed."""

    def test_particles(self, stand):
        """Four dead and three live particles with the fuel type constants."""
        fuel = build_palmetto_gallberry_fuel(calc_palmetto_gallberry_loads(stand))
        assert len(fuel.dead) == 4
        assert len(fuel.live) == 3
        assert fuel.dead_moisture_of_extinction == MOISTURE_OF_EXTINCTION_DEAD
        assert all(p.heat_of_combustion == HEAT_OF_COMBUSTION for p in fuel.dead + fuel.live)
        assert all(p.density == 30.0 for p in fuel.dead)
        assert all(p.density == 46.0 for p in fuel.live)

    def test_surface_fire(self, stand, windy_env):
        """The stand carries a fire under a moderate wind."""
        result = calc_palmetto_gallberry_surface_fire(stand, windy_env)
        assert result.surface_fire.spread_rate > 0
        assert result.surface_fire.fuel_name == "palmetto-gallberry"
        assert result.fuel.depth == pytest.approx(2.0)


class TestValidation:
    """Tests for input validation."""

    def test_zero_age(self):
        """Age of rough must be positive."""
        with pytest.raises(ValidationError):
            PalmettoGallberryFuel(0.0, 3.0, 0.5, 40.0)

    def test_coverage_fraction(self):
        """Coverage is a fraction."""
        with pytest.raises(ValidationError) as exc_info:
            PalmettoGallberryFuel(5.0, 3.0, 50.0, 40.0)
        assert exc_info.value.field == "palmetto_coverage"
