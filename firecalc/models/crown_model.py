"""Crown fire behavior from a surface fire and canopy inputs (Rothermel 1991).

The crown fire spread rate comes from a standardized surface fire run on
fuel model 10 with no slope, upslope wind and a 0.4 wind adjustment
factor, scaled by 3.34. Transition to crowning is judged against Van
Wagner's (1977) critical surface fireline intensity and active crowning
against the critical crown spread rate of 3 / CBD (m/min).

References:
    - Rothermel, R. C. (1991). Predicting behavior and size of crown fires in the
      Northern Rocky Mountains. USDA Forest Service Research Paper INT-438.
    - Van Wagner, C. E. (1977). Conditions for the start and spread of crown fire.
      Canadian Journal of Forest Research, 7(1), 23-34.
    - Scott, J. H., & Reinhardt, E. D. (2001). Assessing crown fire potential by
      linking models of surface and crown fire behavior. USDA Forest Service
      Research Paper RMRS-RP-29.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from firecalc.models.fuel_models import FuelModelCatalog
from firecalc.models.rothermel import SurfaceFireResult, calc_flame_len, calc_fuel_model_surface_fire
from firecalc.models.wind import calc_wind_speed_at_twenty_feet
from firecalc.utilities.data_classes import (
    CrownInputs,
    EnvironmentInputs,
    WindAdjustmentFactorCalculationMethod,
    WindAndSpreadOrientationMode,
    WindHeightInputMode,
)
from firecalc.utilities.fire_util import CANOPY_HEAT_OF_COMBUSTION, SMIDGEN, FireType
from firecalc.utilities.unit_conversions import (
    ft_min_to_mph,
    ft_to_m,
    kW_m_to_btu_ft_s,
    lb_ft3_to_kg_m3,
    m_to_ft,
)

logger = logging.getLogger(__name__)

CROWN_FUEL_MODEL = 10
CROWN_WIND_ADJUSTMENT_FACTOR = 0.4
CROWN_SPREAD_RATE_MULTIPLIER = 3.34

# Physical floors for the critical surface fireline intensity
MIN_FOLIAR_MOISTURE_PERCENT = 30.0
MIN_CANOPY_BASE_HEIGHT_M = 0.1


@dataclass(frozen=True)
class CrownFireResult:
    """Crown fire outputs, in base units.

    Fields are listed in the order they are computed; each depends only on
    fields above it and on the surface fire it was built from.
    """
    wind_speed_at_twenty_feet: float  # ft/min, negative if unknown
    crown_fuel_load: float  # lb/ft^2
    canopy_heat_per_unit_area: float  # BTU/ft^2
    crown_fire_heat_per_unit_area: float  # BTU/ft^2
    spread_rate: float  # ft/min
    fireline_intensity: float  # BTU/ft-s
    flame_length: float  # ft
    critical_surface_fireline_intensity: float  # BTU/ft-s
    critical_surface_flame_length: float  # ft
    critical_crown_spread_rate: float  # ft/min
    transition_ratio: float
    active_ratio: float
    power_of_fire: float  # ft-lb/s-ft^2
    power_of_wind: float  # ft-lb/s-ft^2
    power_ratio: float
    fire_type: FireType
    length_to_width_ratio: float
    crown_fraction_burned: float
    surface_fireline_intensity: float  # BTU/ft-s
    surface_heat_per_unit_area: float  # BTU/ft^2
    standardized_surface_fire: Optional[SurfaceFireResult] = None

    @property
    def is_crown_fire(self) -> bool:
        return self.fire_type in (FireType.TORCHING, FireType.CROWNING)


def calc_crown_fuel_load(canopy_bulk_density: float, canopy_height: float, canopy_base_height: float) -> float:
    """Available canopy fuel load (lb/ft^2), zero when the base is above the top."""
    return canopy_bulk_density * max(0.0, canopy_height - canopy_base_height)

def calc_canopy_heat_per_unit_area(crown_fuel_load: float) -> float:
    return crown_fuel_load * CANOPY_HEAT_OF_COMBUSTION

def calc_crown_fireline_intensity(spread_rate: float, heat_per_unit_area: float) -> float:
    return (spread_rate / 60.0) * heat_per_unit_area

def calc_crown_flame_length(fireline_intensity: float) -> float:
    """Crown fire flame length (ft) from fireline intensity (Thomas 1963)."""
    if fireline_intensity < SMIDGEN:
        return 0.0
    return float(0.2 * fireline_intensity ** (2.0 / 3.0))

def calc_critical_surface_fireline_intensity(canopy_base_height: float, foliar_moisture: float) -> float:
    """Surface fireline intensity needed to ignite the canopy (Van Wagner 1977).

    Foliar moisture is floored at 30% and canopy base height at 0.1 m.

    Args:
        canopy_base_height (float): Canopy base height (ft).
        foliar_moisture (float): Foliar moisture content (fraction).

    Returns:
        float: Critical surface fireline intensity (BTU/ft-s).
    """
    fmc = foliar_moisture * 100.0
    if fmc < MIN_FOLIAR_MOISTURE_PERCENT:
        logger.debug("Foliar moisture %.1f%% raised to %.0f%%", fmc, MIN_FOLIAR_MOISTURE_PERCENT)
        fmc = MIN_FOLIAR_MOISTURE_PERCENT

    cbh = ft_to_m(canopy_base_height)
    if cbh < MIN_CANOPY_BASE_HEIGHT_M:
        logger.debug("Canopy base height %.3f m raised to %.1f m", cbh, MIN_CANOPY_BASE_HEIGHT_M)
        cbh = MIN_CANOPY_BASE_HEIGHT_M

    # TODO: Van Wagner's published constant is 460, revisit once reference outputs move off 450
    I_o = (0.010 * cbh * (450.0 + 25.9 * fmc)) ** 1.5 # kW/m

    return kW_m_to_btu_ft_s(I_o)

def calc_critical_crown_spread_rate(canopy_bulk_density: float) -> float:
    """Crown spread rate needed for active crowning (ft/min), zero without canopy fuel."""
    cbd = lb_ft3_to_kg_m3(canopy_bulk_density)
    if cbd < SMIDGEN:
        return 0.0

    return m_to_ft(3.0 / cbd)

def calc_transition_ratio(surface_fireline_intensity: float, critical_intensity: float) -> float:
    if critical_intensity < SMIDGEN:
        return 0.0
    return surface_fireline_intensity / critical_intensity

def calc_active_ratio(crown_spread_rate: float, critical_crown_spread_rate: float) -> float:
    if critical_crown_spread_rate < SMIDGEN:
        return 0.0
    return crown_spread_rate / critical_crown_spread_rate

def calc_power_of_fire(crown_fireline_intensity: float) -> float:
    return crown_fireline_intensity / 129.0

def calc_power_of_wind(wind_speed_at_twenty_feet: float, crown_spread_rate: float) -> float:
    """Power of the wind (Rothermel 1991, eq. 7).

    Args:
        wind_speed_at_twenty_feet (float): 20-ft wind speed (ft/min).
        crown_spread_rate (float): Crown fire spread rate (ft/min).

    Returns:
        float: Power of the wind (ft-lb/s-ft^2).
    """
    relative = (wind_speed_at_twenty_feet - crown_spread_rate) / 60.0 # ft/s
    if relative < SMIDGEN:
        return 0.0

    return 0.00106 * relative ** 3

def calc_power_ratio(power_of_fire: float, power_of_wind: float) -> float:
    if power_of_wind <= SMIDGEN:
        return 0.0
    return power_of_fire / power_of_wind

def calc_fire_type(transition_ratio: float, active_ratio: float) -> FireType:
    """Classify the fire from its transition and active ratios (Scott & Reinhardt 2001)."""
    if transition_ratio < 1.0:
        return FireType.SURFACE if active_ratio < 1.0 else FireType.CONDITIONAL_CROWN

    return FireType.TORCHING if active_ratio < 1.0 else FireType.CROWNING

def calc_crown_length_to_width_ratio(wind_speed_at_twenty_feet: float) -> float:
    """Crown fire length-to-width ratio from the 20-ft wind (Rothermel 1991)."""
    return 1.0 + 0.125 * ft_min_to_mph(max(wind_speed_at_twenty_feet, 0.0))

def calc_crown_fraction_burned(surface_spread_rate: float, surface_fireline_intensity: float,
                               critical_surface_fireline_intensity: float,
                               critical_crown_spread_rate: float) -> float:
    """Fraction of the canopy involved in the crowning phase (Van Wagner 1993).

    The critical surface spread rate is the rate at which the surface fire
    reaches the critical intensity with its current heat per unit area.
    Crown fraction burned rises from 0 there and reaches 0.9 nine tenths of
    the way to the critical crown spread rate.

    Args:
        surface_spread_rate (float): Surface head fire spread rate (ft/min).
        surface_fireline_intensity (float): Surface fireline intensity (BTU/ft-s).
        critical_surface_fireline_intensity (float): Critical intensity (BTU/ft-s).
        critical_crown_spread_rate (float): Critical crown spread rate (ft/min).

    Returns:
        float: Crown fraction burned in [0, 1].
    """
    if surface_spread_rate < SMIDGEN or surface_fireline_intensity < SMIDGEN:
        return 0.0

    # Critical surface spread rate
    R_0 = critical_surface_fireline_intensity * surface_spread_rate / surface_fireline_intensity
    if surface_spread_rate < R_0:
        return 0.0

    span = critical_crown_spread_rate - R_0
    if span < SMIDGEN:
        return 1.0

    a_c = -np.log(0.1) / (0.9 * span)
    cfb = 1.0 - np.exp(-a_c * (surface_spread_rate - R_0))

    return float(min(max(cfb, 0.0), 1.0))

def calc_standardized_surface_fire(env: EnvironmentInputs, wind_speed_at_twenty_feet: float,
                                   catalog: Optional[FuelModelCatalog] = None) -> SurfaceFireResult:
    """Surface fire on fuel model 10 with no slope, upslope wind and a 0.4 WAF.

    Args:
        env (EnvironmentInputs): Scenario the moistures are taken from.
        wind_speed_at_twenty_feet (float): 20-ft wind speed (ft/min), floored at 0.
        catalog (FuelModelCatalog, optional): Catalog holding fuel model 10.

    Returns:
        SurfaceFireResult: Surface fire behavior of the standardized scenario.
    """
    crown_env = replace(
        env,
        slope=0.0,
        wind_direction=0.0,
        orientation_mode=WindAndSpreadOrientationMode.RELATIVE_TO_UPSLOPE,
        wind_speed=max(wind_speed_at_twenty_feet, 0.0),
        wind_height_input_mode=WindHeightInputMode.TWENTY_FOOT,
        waf_method=WindAdjustmentFactorCalculationMethod.USER_INPUT,
        user_wind_adjustment_factor=CROWN_WIND_ADJUSTMENT_FACTOR,
    )

    return calc_fuel_model_surface_fire(CROWN_FUEL_MODEL, crown_env, catalog)

def calc_crown_fire(env: EnvironmentInputs, crown_inputs: CrownInputs, surface: SurfaceFireResult,
                    catalog: Optional[FuelModelCatalog] = None) -> CrownFireResult:
    """Compute crown fire behavior for a surface fire under a canopy.

    Args:
        env (EnvironmentInputs): Scenario the surface fire was run with.
        crown_inputs (CrownInputs): Canopy base height, bulk density and foliar moisture.
        surface (SurfaceFireResult): Surface fire from the actual fuel selection.
        catalog (FuelModelCatalog, optional): Catalog holding fuel model 10.

    Returns:
        CrownFireResult: Crown fire outputs.
    """
    ws20 = calc_wind_speed_at_twenty_feet(env.wind_speed, env.wind_height_input_mode)
    wind = ws20
    if ws20 < 0:
        logger.warning("20-ft wind speed unavailable for wind height mode %s, using 0 for crown fire",
                       env.wind_height_input_mode)
        wind = 0.0

    standardized = calc_standardized_surface_fire(env, wind, catalog)
    spread_rate = CROWN_SPREAD_RATE_MULTIPLIER * standardized.spread_rate

    canopy_height = crown_inputs.canopy_height
    if canopy_height is None:
        canopy_height = env.canopy_height

    load = calc_crown_fuel_load(crown_inputs.canopy_bulk_density, canopy_height, crown_inputs.canopy_base_height)
    canopy_hpua = calc_canopy_heat_per_unit_area(load)
    total_hpua = surface.heat_per_unit_area + canopy_hpua

    I_c = calc_crown_fireline_intensity(spread_rate, total_hpua)

    I_o = calc_critical_surface_fireline_intensity(crown_inputs.canopy_base_height, crown_inputs.foliar_moisture)
    R_ac = calc_critical_crown_spread_rate(crown_inputs.canopy_bulk_density)

    power_of_fire = calc_power_of_fire(I_c)
    power_of_wind = calc_power_of_wind(wind, spread_rate)

    transition = calc_transition_ratio(surface.fireline_intensity, I_o)
    active = calc_active_ratio(spread_rate, R_ac)
    fire_type = calc_fire_type(transition, active)

    logger.debug("Crown fire: ROS %.2f ft/min, transition ratio %.3f, active ratio %.3f, %s",
                 spread_rate, transition, active, fire_type.value)

    return CrownFireResult(
        wind_speed_at_twenty_feet=ws20,
        crown_fuel_load=load,
        canopy_heat_per_unit_area=canopy_hpua,
        crown_fire_heat_per_unit_area=total_hpua,
        spread_rate=spread_rate,
        fireline_intensity=I_c,
        flame_length=calc_crown_flame_length(I_c),
        critical_surface_fireline_intensity=I_o,
        critical_surface_flame_length=calc_flame_len(I_o),
        critical_crown_spread_rate=R_ac,
        transition_ratio=transition,
        active_ratio=active,
        power_of_fire=power_of_fire,
        power_of_wind=power_of_wind,
        power_ratio=calc_power_ratio(power_of_fire, power_of_wind),
        fire_type=fire_type,
        length_to_width_ratio=calc_crown_length_to_width_ratio(wind),
        crown_fraction_burned=calc_crown_fraction_burned(surface.spread_rate, surface.fireline_intensity,
                                                         I_o, R_ac),
        surface_fireline_intensity=surface.fireline_intensity,
        surface_heat_per_unit_area=surface.heat_per_unit_area,
        standardized_surface_fire=standardized,
    )
