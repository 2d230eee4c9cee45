"""Entry point that runs surface and crown fire behavior for a fuel selection.

A fuel selection is exactly one of :class:`StandardFuel`,
:class:`TwoFuelModels`, :class:`PalmettoGallberryFuel`,
:class:`WesternAspenFuel` or :class:`ChaparralFuel`. The selection decides
which fuel bed reaches the Rothermel model; the scenario inputs are shared.

Example:
    >>> from firecalc.surface import calc_fire_behavior
    >>> from firecalc.models.fuel_models import StandardFuel
    >>> from firecalc.utilities.data_classes import EnvironmentInputs, FuelMoisture, CrownInputs
    >>> env = EnvironmentInputs(moisture=FuelMoisture.from_scenario("D2L2"), wind_speed=440.0)
    >>> result = calc_fire_behavior(StandardFuel(10), env, CrownInputs(6.0, 0.01))
    >>> is_crown_fire = result.crown.is_crown_fire
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from firecalc.exceptions import ConfigurationError
from firecalc.models.chaparral import ChaparralFuel, ChaparralResult, calc_chaparral_surface_fire
from firecalc.models.crown_model import CrownFireResult, calc_crown_fire
from firecalc.models.fuel_models import FuelModelCatalog, StandardFuel
from firecalc.models.palmetto_gallberry import (
    PalmettoGallberryFuel,
    PalmettoGallberryResult,
    calc_palmetto_gallberry_surface_fire,
)
from firecalc.models.rothermel import SurfaceFireResult, calc_fuel_model_surface_fire
from firecalc.models.two_fuel_models import TwoFuelModels, TwoFuelModelsResult, calc_two_fuel_models
from firecalc.models.western_aspen import WesternAspenFuel, WesternAspenResult, calc_western_aspen_surface_fire
from firecalc.utilities.data_classes import CrownInputs, EnvironmentInputs

logger = logging.getLogger(__name__)

FuelSelection = Union[StandardFuel, TwoFuelModels, PalmettoGallberryFuel, WesternAspenFuel, ChaparralFuel]


class FuelSelectionMode(Enum):
    STANDARD = 0
    TWO_FUEL_MODELS = 1
    PALMETTO_GALLBERRY = 2
    WESTERN_ASPEN = 3
    CHAPARRAL = 4


_SELECTION_MODES = {
    StandardFuel: FuelSelectionMode.STANDARD,
    TwoFuelModels: FuelSelectionMode.TWO_FUEL_MODELS,
    PalmettoGallberryFuel: FuelSelectionMode.PALMETTO_GALLBERRY,
    WesternAspenFuel: FuelSelectionMode.WESTERN_ASPEN,
    ChaparralFuel: FuelSelectionMode.CHAPARRAL,
}


@dataclass(frozen=True)
class SurfaceRunResult:
    """Surface fire for a fuel selection plus the details of how its fuel bed was built."""
    mode: FuelSelectionMode
    surface_fire: SurfaceFireResult
    two_fuel_models: Optional[TwoFuelModelsResult] = None
    palmetto_gallberry: Optional[PalmettoGallberryResult] = None
    western_aspen: Optional[WesternAspenResult] = None
    chaparral: Optional[ChaparralResult] = None


@dataclass(frozen=True)
class FireBehaviorResult:
    surface: SurfaceRunResult
    crown: Optional[CrownFireResult] = None


def get_fuel_selection_mode(selection: FuelSelection) -> FuelSelectionMode:
    """Tag of a fuel selection.

    Raises:
        ConfigurationError: If `selection` is not a known fuel selection type.
    """
    mode = _SELECTION_MODES.get(type(selection))
    if mode is None:
        raise ConfigurationError(f"Unknown fuel selection type {type(selection).__name__}",
                                 parameter="selection")
    return mode

def calc_surface_fire_for_selection(selection: FuelSelection, env: EnvironmentInputs,
                                    catalog: Optional[FuelModelCatalog] = None,
                                    direction_of_interest: Optional[float] = None) -> SurfaceRunResult:
    """Run the surface fire model for a fuel selection.

    Args:
        selection (FuelSelection): Which fuel bed to burn.
        env (EnvironmentInputs): Scenario inputs.
        catalog (FuelModelCatalog, optional): Catalog for standard and two-fuel
            selections. Defaults to the standard catalog.
        direction_of_interest (float, optional): Azimuth to report spread rate for.

    Raises:
        ConfigurationError: If `selection` is not a known fuel selection type.

    Returns:
        SurfaceRunResult: Surface fire and selection-specific details.
    """
    mode = get_fuel_selection_mode(selection)
    logger.debug("Running surface fire for %s selection", mode.name)

    if mode == FuelSelectionMode.STANDARD:
        surface = calc_fuel_model_surface_fire(selection.fuel_model_number, env, catalog, direction_of_interest)
        return SurfaceRunResult(mode, surface)

    if mode == FuelSelectionMode.TWO_FUEL_MODELS:
        result = calc_two_fuel_models(selection, env, catalog, direction_of_interest)
        return SurfaceRunResult(mode, result.surface_fire, two_fuel_models=result)

    if mode == FuelSelectionMode.PALMETTO_GALLBERRY:
        result = calc_palmetto_gallberry_surface_fire(selection, env, direction_of_interest)
        return SurfaceRunResult(mode, result.surface_fire, palmetto_gallberry=result)

    if mode == FuelSelectionMode.WESTERN_ASPEN:
        result = calc_western_aspen_surface_fire(selection, env, direction_of_interest)
        return SurfaceRunResult(mode, result.surface_fire, western_aspen=result)

    result = calc_chaparral_surface_fire(selection, env, direction_of_interest)
    return SurfaceRunResult(mode, result.surface_fire, chaparral=result)

def calc_fire_behavior(selection: FuelSelection, env: EnvironmentInputs,
                       crown_inputs: Optional[CrownInputs] = None,
                       catalog: Optional[FuelModelCatalog] = None,
                       direction_of_interest: Optional[float] = None) -> FireBehaviorResult:
    """Run surface fire behavior and, when canopy inputs are given, crown fire behavior.

    Args:
        selection (FuelSelection): Which fuel bed to burn.
        env (EnvironmentInputs): Scenario inputs.
        crown_inputs (CrownInputs, optional): Canopy inputs. Crown fire is skipped when None.
        catalog (FuelModelCatalog, optional): Catalog for catalog fuel models.
        direction_of_interest (float, optional): Azimuth to report spread rate for.

    Returns:
        FireBehaviorResult: Surface results and, if requested, crown results.
    """
    if catalog is None:
        catalog = FuelModelCatalog()

    surface = calc_surface_fire_for_selection(selection, env, catalog, direction_of_interest)

    crown = None
    if crown_inputs is not None:
        crown = calc_crown_fire(env, crown_inputs, surface.surface_fire, catalog)

    return FireBehaviorResult(surface=surface, crown=crown)
