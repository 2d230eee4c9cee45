"""Tests for the fuel selection entry points."""

from unittest.mock import patch

import pytest

from firecalc import ConfigurationError, FuelSelectionMode, calc_fire_behavior, calc_surface_fire_for_selection
from firecalc.models.chaparral import ChaparralFuel, ChaparralFuelType
from firecalc.models.fuel_models import StandardFuel
from firecalc.models.palmetto_gallberry import PalmettoGallberryFuel
from firecalc.models.rothermel import calc_fuel_model_surface_fire
from firecalc.models.two_fuel_models import TwoFuelModels
from firecalc.models.western_aspen import WesternAspenFuel
from firecalc.surface import get_fuel_selection_mode


class TestSelectionMode:
    """Tests for selection dispatch."""

    @pytest.mark.parametrize("selection, mode", [
        (StandardFuel(2), FuelSelectionMode.STANDARD),
        (TwoFuelModels(1, 10, 0.5), FuelSelectionMode.TWO_FUEL_MODELS),
        (PalmettoGallberryFuel(5.0, 3.0, 0.5, 40.0), FuelSelectionMode.PALMETTO_GALLBERRY),
        (WesternAspenFuel(1, 0.5), FuelSelectionMode.WESTERN_ASPEN),
        (ChaparralFuel(ChaparralFuelType.CHAMISE, 5.0), FuelSelectionMode.CHAPARRAL),
    ])
    def test_mode(self, selection, mode):
        assert get_fuel_selection_mode(selection) == mode

    def test_unknown_selection(self, windy_env):
        """Anything that is not a fuel selection is rejected."""
        with pytest.raises(ConfigurationError):
            calc_surface_fire_for_selection("FM2", windy_env)


class TestSurfaceRun:
    """Tests for surface runs through the entry point."""

    def test_standard(self, windy_env, catalog):
        """A standard selection matches a direct catalog run."""
        run = calc_surface_fire_for_selection(StandardFuel(2), windy_env, catalog)
        direct = calc_fuel_model_surface_fire(2, windy_env, catalog)
        assert run.mode == FuelSelectionMode.STANDARD
        assert run.surface_fire.spread_rate == pytest.approx(direct.spread_rate)
        assert run.two_fuel_models is None

    def test_details_attached(self, windy_env, catalog):
        """Special fuel runs carry their own details."""
        run = calc_surface_fire_for_selection(TwoFuelModels(1, 10, 0.5), windy_env, catalog)
        assert run.two_fuel_models is not None
        assert run.surface_fire is run.two_fuel_models.surface_fire

        run = calc_surface_fire_for_selection(WesternAspenFuel(1, 0.5), windy_env)
        assert run.western_aspen is not None
        assert run.chaparral is None


class TestFireBehavior:
    """Tests for combined surface and crown runs."""

    def test_surface_only(self, windy_env, catalog):
        """Crown fire is skipped without canopy inputs."""
        with patch("firecalc.surface.calc_crown_fire") as mock_crown:
            result = calc_fire_behavior(StandardFuel(10), windy_env, catalog=catalog)

        mock_crown.assert_not_called()
        assert result.crown is None

    def test_with_crown(self, windy_env, conifer_canopy, catalog):
        """The crown run uses the selection's surface fire."""
        result = calc_fire_behavior(StandardFuel(10), windy_env, conifer_canopy, catalog)
        assert result.crown is not None
        assert result.crown.surface_fireline_intensity == pytest.approx(
            result.surface.surface_fire.fireline_intensity)
