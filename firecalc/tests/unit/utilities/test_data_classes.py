"""Tests for scenario input structures."""

import pytest

from firecalc.exceptions import ValidationError
from firecalc.utilities.data_classes import (
    CrownInputs,
    EnvironmentInputs,
    FuelMoisture,
    MoistureClass,
    WindAdjustmentFactorCalculationMethod,
)
from firecalc.utilities.fire_util import UtilFuncs


class TestFuelMoisture:
    """Tests for FuelMoisture."""

    def test_scenario(self):
        """D2L3 is 6/7/8% dead with 90/120% live."""
        m = FuelMoisture.from_scenario("d2l3")
        assert (m.one_hour, m.ten_hour, m.hundred_hour) == (0.06, 0.07, 0.08)
        assert (m.live_herbaceous, m.live_woody) == (0.90, 1.20)

    def test_unknown_scenario(self):
        with pytest.raises(ValidationError):
            FuelMoisture.from_scenario("D5L1")

    def test_aggregates(self):
        """Aggregate constructors fill every class of the aggregated group."""
        m = FuelMoisture.all_aggregate(0.05, 1.0)
        assert m.get(MoistureClass.HUNDRED_HOUR) == 0.05
        assert m.get(MoistureClass.LIVE_WOODY) == 1.0
        assert FuelMoisture.dead_aggregate(0.05, 0.6, 0.9).live_woody == 0.9
        assert FuelMoisture.live_aggregate(0.03, 0.04, 0.05, 0.7).live_herbaceous == 0.7

    def test_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            FuelMoisture(one_hour=-0.01)
        assert exc_info.value.field == "one_hour"


class TestEnvironmentInputs:
    """Tests for EnvironmentInputs validation and normalization."""

    def test_directions_normalized(self):
        env = EnvironmentInputs(wind_direction=-90.0, aspect=450.0)
        assert env.wind_direction == 270.0
        assert env.aspect == 90.0

    @pytest.mark.parametrize("kwargs", [
        {"wind_speed": -1.0},
        {"slope": 90.0},
        {"canopy_cover": 1.5},
        {"crown_ratio": -0.1},
        {"canopy_height": -1.0},
        {"air_temperature": 150.0},
        {"waf_method": WindAdjustmentFactorCalculationMethod.USER_INPUT},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            EnvironmentInputs(**kwargs)

    def test_crown_inputs(self):
        with pytest.raises(ValidationError):
            CrownInputs(canopy_bulk_density=-0.01)
        with pytest.raises(ValidationError):
            CrownInputs(canopy_height=-5.0)


class TestUtilFuncs:
    """Tests for direction helpers."""

    @pytest.mark.parametrize("direction, expected", [
        (0.0, 0.0), (360.0, 0.0), (-10.0, 350.0), (725.0, 5.0),
    ])
    def test_normalize_direction(self, direction, expected):
        assert UtilFuncs.normalize_direction(direction) == pytest.approx(expected)

    def test_angle_between(self):
        assert UtilFuncs.angle_between(350.0, 10.0) == pytest.approx(20.0)
        assert UtilFuncs.angle_between(0.0, 180.0) == pytest.approx(180.0)
