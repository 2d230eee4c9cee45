"""Wind speed reduction from a reference height to midflame height.

Functions:
    - calc_wind_speed_at_twenty_feet: Reference-height wind to 20-ft wind.
    - calc_wind_adjustment_factor: Sheltered or unsheltered WAF (Albini & Baughman 1979).
    - calc_midflame_wind_speed: Midflame wind for a scenario and fuel bed depth.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from firecalc.utilities.data_classes import (
    EnvironmentInputs,
    WindAdjustmentFactorCalculationMethod,
    WindHeightInputMode,
)
from firecalc.utilities.fire_util import SMIDGEN

logger = logging.getLogger(__name__)

# 10-m wind is on average 15% faster than the 20-ft wind
TEN_METER_TO_TWENTY_FOOT_RATIO = 1.15

# Returned when the reference height cannot be reduced to 20 ft
WIND_SPEED_ERROR = -1.0


class WindAdjustmentFactorShelterMethod(Enum):
    UNSHELTERED = 0
    SHELTERED = 1


@dataclass(frozen=True)
class WindResult:
    midflame_wind_speed: float  # ft/min
    wind_speed_at_twenty_feet: float  # ft/min, WIND_SPEED_ERROR for midflame input
    wind_adjustment_factor: float
    shelter_method: WindAdjustmentFactorShelterMethod


def calc_wind_speed_at_twenty_feet(wind_speed: float, wind_height_input_mode: WindHeightInputMode) -> float:
    """Convert a wind speed at its reference height to the 20-ft wind speed.

    Args:
        wind_speed (float): Wind speed at the reference height (any speed units).
        wind_height_input_mode (WindHeightInputMode): Reference height of `wind_speed`.

    Returns:
        float: Wind speed at 20 ft in the same units, or -1 when the mode has
            no defined reduction (a midflame input cannot be raised to 20 ft).
    """
    if wind_height_input_mode == WindHeightInputMode.TWENTY_FOOT:
        return wind_speed
    if wind_height_input_mode == WindHeightInputMode.TEN_METER:
        return wind_speed / TEN_METER_TO_TWENTY_FOOT_RATIO

    logger.warning("Cannot derive 20-ft wind speed from wind height mode %s", wind_height_input_mode)
    return WIND_SPEED_ERROR

def calc_wind_adjustment_factor(canopy_cover: float, canopy_height: float, crown_ratio: float,
                                fuel_bed_depth: float, use_crown_ratio: bool = True
                                ) -> Tuple[float, WindAdjustmentFactorShelterMethod]:
    """Compute the wind adjustment factor from canopy and fuel bed geometry.

    Fuel is sheltered when the canopy covers enough ground (crown fill
    fraction >= 0.05) and is at least 6 ft tall; otherwise the unsheltered
    factor for the fuel bed depth is used.

    Args:
        canopy_cover (float): Canopy cover (fraction).
        canopy_height (float): Canopy height (ft).
        crown_ratio (float): Crown ratio (fraction). Ignored when `use_crown_ratio` is False.
        fuel_bed_depth (float): Fuel bed depth (ft).
        use_crown_ratio (bool, optional): Whether crown ratio enters the crown
            fill fraction. When False the crown is assumed to fill the canopy
            layer. Defaults to True.

    Returns:
        Tuple[float, WindAdjustmentFactorShelterMethod]: WAF and the shelter method used.
    """
    if not use_crown_ratio:
        crown_ratio = 1.0

    crown_fill = crown_ratio * canopy_cover / 3.0

    if canopy_cover < SMIDGEN or crown_fill < 0.05 or canopy_height < 6.0:
        if fuel_bed_depth > SMIDGEN:
            waf = 1.83 / np.log((20.0 + 0.36 * fuel_bed_depth) / (0.13 * fuel_bed_depth))
        else:
            waf = 1.0

        return float(waf), WindAdjustmentFactorShelterMethod.UNSHELTERED

    waf = 0.555 / (np.sqrt(crown_fill * canopy_height)
                   * np.log((20.0 + 0.36 * canopy_height) / (0.13 * canopy_height)))

    return float(waf), WindAdjustmentFactorShelterMethod.SHELTERED

def calc_midflame_wind_speed(env: EnvironmentInputs, fuel_bed_depth: float) -> WindResult:
    """Compute the midflame wind speed for a scenario.

    Args:
        env (EnvironmentInputs): Scenario inputs.
        fuel_bed_depth (float): Fuel bed depth (ft), used by the unsheltered WAF.

    Returns:
        WindResult: Midflame and 20-ft wind speeds (ft/min), WAF and shelter method.
            The 20-ft wind is WIND_SPEED_ERROR when the input is already
            midflame, matching the crown fire 20-ft wind.
    """
    if env.waf_method == WindAdjustmentFactorCalculationMethod.USER_INPUT:
        waf = env.user_wind_adjustment_factor
        shelter = WindAdjustmentFactorShelterMethod.UNSHELTERED
    else:
        use_crown_ratio = env.waf_method == WindAdjustmentFactorCalculationMethod.USE_CROWN_RATIO
        waf, shelter = calc_wind_adjustment_factor(env.canopy_cover, env.canopy_height, env.crown_ratio,
                                                   fuel_bed_depth, use_crown_ratio)

    if env.wind_height_input_mode == WindHeightInputMode.DIRECT_MIDFLAME:
        midflame = env.wind_speed
        # Not derivable from a midflame input; same sentinel as the crown reducer
        twenty_ft = WIND_SPEED_ERROR
    else:
        twenty_ft = calc_wind_speed_at_twenty_feet(env.wind_speed, env.wind_height_input_mode)
        midflame = twenty_ft * waf

    return WindResult(midflame_wind_speed=midflame, wind_speed_at_twenty_feet=twenty_ft,
                      wind_adjustment_factor=waf, shelter_method=shelter)
