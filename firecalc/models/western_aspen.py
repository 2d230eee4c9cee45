"""Western aspen fuel models (Brown & Simmerman 1986).

Five aspen fuel types whose loads and SAVR vary with the curing level of
the herbaceous understory. Fire-caused aspen mortality is estimated from
fire severity, tree diameter and flame length.

Aspen fuel types:
    1. Aspen/shrub
    2. Aspen/tall forb
    3. Aspen/low forb
    4. Mixed/forb
    5. Mixed/shrub

References:
    - Brown, J. K., & Simmerman, D. G. (1986). Appraising fuels and flammability
      in western aspen: a prescribed fire guide. USDA Forest Service GTR INT-205.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from firecalc.exceptions import FuelModelError, ValidationError
from firecalc.models.fuel_models import FuelComplex, FuelParticle
from firecalc.models.rothermel import SurfaceFireResult, calc_surface_fire
from firecalc.utilities.data_classes import MoistureClass, EnvironmentInputs
from firecalc.utilities.fire_util import TEN_HOUR_SAVR
from firecalc.utilities.unit_conversions import tons_acre_to_lb_ft2

logger = logging.getLogger(__name__)

# Curing levels at which the tables below are tabulated
CURING_LEVELS = np.array([0.0, 0.3, 0.5, 0.7, 0.9, 1.0])

# Loads in tons/acre, one row per aspen fuel type
LOAD_DEAD_ONE_HOUR = np.array([
    [0.800, 0.893, 1.056, 1.218, 1.379, 1.4595],
    [0.738, 0.930, 1.056, 1.183, 1.309, 1.3720],
    [0.601, 0.645, 0.671, 0.699, 0.730, 0.7455],
    [0.880, 0.906, 0.925, 0.943, 0.958, 0.9670],
    [0.754, 0.797, 0.825, 0.854, 0.884, 0.8990],
])

LOAD_DEAD_TEN_HOUR = np.array([0.975, 0.475, 1.035, 1.340, 1.115])

LOAD_LIVE_HERBACEOUS = np.array([
    [0.335, 0.234, 0.167, 0.100, 0.033, 0.000],
    [0.665, 0.465, 0.332, 0.199, 0.067, 0.000],
    [0.150, 0.105, 0.075, 0.045, 0.015, 0.000],
    [0.100, 0.070, 0.050, 0.030, 0.010, 0.000],
    [0.150, 0.105, 0.075, 0.045, 0.015, 0.000],
])

LOAD_LIVE_WOODY = np.array([
    [0.403, 0.403, 0.333, 0.283, 0.277, 0.274],
    [0.000, 0.000, 0.000, 0.000, 0.000, 0.000],
    [0.000, 0.000, 0.000, 0.000, 0.000, 0.000],
    [0.455, 0.455, 0.364, 0.290, 0.261, 0.2465],
    [0.000, 0.000, 0.000, 0.000, 0.000, 0.000],
])

# SAVR in ft^2/ft^3
SAVR_DEAD_ONE_HOUR = np.array([
    [1440., 1620., 1910., 2090., 2220., 2285.],
    [1480., 1890., 2050., 2160., 2240., 2280.],
    [1400., 1540., 1620., 1690., 1750., 1780.],
    [1350., 1420., 1710., 1910., 2060., 2135.],
    [1420., 1540., 1610., 1670., 1720., 1745.],
])

SAVR_LIVE_WOODY = np.array([
    [2440., 2440., 2310., 2090., 1670., 1670.],
    [2440., 2440., 2440., 2440., 2440., 2440.],
    [2440., 2440., 2440., 2440., 2440., 2440.],
    [2530., 2530., 2410., 2210., 1800., 1800.],
    [2440., 2440., 2440., 2440., 2440., 2440.],
])

SAVR_LIVE_HERBACEOUS = 2800.0

FUEL_BED_DEPTH = np.array([0.65, 0.30, 0.18, 0.50, 0.18])  # ft
MOISTURE_OF_EXTINCTION_DEAD = np.array([0.25, 0.25, 0.25, 0.25, 0.25])
HEAT_OF_COMBUSTION = 8000.0  # BTU/lb

FUEL_TYPE_NAMES = {
    1: "Aspen/shrub",
    2: "Aspen/tall forb",
    3: "Aspen/low forb",
    4: "Mixed/forb",
    5: "Mixed/shrub",
}


class AspenFireSeverity(Enum):
    LOW = 0
    HIGH = 1


@dataclass(frozen=True)
class WesternAspenFuel:
    """Fuel selection for western aspen.

    Attributes:
        aspen_fuel_model_number (int): Aspen fuel type, 1-5.
        curing_level (float): Herbaceous curing level (fraction).
        fire_severity (AspenFireSeverity): Severity class used for mortality.
        dbh (float): Tree diameter at breast height (in).
    """
    aspen_fuel_model_number: int
    curing_level: float
    fire_severity: AspenFireSeverity = AspenFireSeverity.LOW
    dbh: float = 0.0

    def __post_init__(self):
        if self.aspen_fuel_model_number not in FUEL_TYPE_NAMES:
            raise FuelModelError("Aspen fuel type must be between 1 and 5",
                                 fuel_model_id=self.aspen_fuel_model_number)
        if self.dbh < 0:
            raise ValidationError("DBH must be non-negative", field="dbh", value=self.dbh)


@dataclass(frozen=True)
class WesternAspenParameters:
    """Curing-adjusted aspen fuel bed values (loads lb/ft^2, SAVR ft^2/ft^3)."""
    load_dead_one_hour: float
    load_dead_ten_hour: float
    load_live_herbaceous: float
    load_live_woody: float
    savr_dead_one_hour: float
    savr_live_woody: float
    fuel_bed_depth: float
    moisture_of_extinction_dead: float


@dataclass(frozen=True)
class WesternAspenResult:
    surface_fire: SurfaceFireResult
    parameters: WesternAspenParameters
    mortality: float
    fuel: FuelComplex


def aspen_interpolate(curing: float, values: np.ndarray) -> float:
    """Linearly interpolate a curing-level table, clamping curing to [0, 1]."""
    curing = min(max(curing, 0.0), 1.0)
    return float(np.interp(curing, CURING_LEVELS, values))

def calc_western_aspen_parameters(aspen_fuel_model_number: int, curing: float) -> WesternAspenParameters:
    """Look up the aspen fuel bed for a fuel type and curing level.

    Args:
        aspen_fuel_model_number (int): Aspen fuel type, 1-5.
        curing (float): Herbaceous curing level (fraction).

    Raises:
        FuelModelError: If the fuel type is not 1-5.

    Returns:
        WesternAspenParameters: Fuel bed values in base units.
    """
    if aspen_fuel_model_number not in FUEL_TYPE_NAMES:
        raise FuelModelError("Aspen fuel type must be between 1 and 5", fuel_model_id=aspen_fuel_model_number)

    i = aspen_fuel_model_number - 1

    return WesternAspenParameters(
        load_dead_one_hour=tons_acre_to_lb_ft2(aspen_interpolate(curing, LOAD_DEAD_ONE_HOUR[i])),
        load_dead_ten_hour=tons_acre_to_lb_ft2(float(LOAD_DEAD_TEN_HOUR[i])),
        load_live_herbaceous=tons_acre_to_lb_ft2(aspen_interpolate(curing, LOAD_LIVE_HERBACEOUS[i])),
        load_live_woody=tons_acre_to_lb_ft2(aspen_interpolate(curing, LOAD_LIVE_WOODY[i])),
        savr_dead_one_hour=aspen_interpolate(curing, SAVR_DEAD_ONE_HOUR[i]),
        savr_live_woody=aspen_interpolate(curing, SAVR_LIVE_WOODY[i]),
        fuel_bed_depth=float(FUEL_BED_DEPTH[i]),
        moisture_of_extinction_dead=float(MOISTURE_OF_EXTINCTION_DEAD[i]),
    )

def build_western_aspen_fuel(params: WesternAspenParameters, name: str = "western aspen") -> FuelComplex:
    h = HEAT_OF_COMBUSTION
    return FuelComplex(
        dead=(
            FuelParticle(params.load_dead_one_hour, params.savr_dead_one_hour, h, MoistureClass.ONE_HOUR),
            FuelParticle(params.load_dead_ten_hour, TEN_HOUR_SAVR, h, MoistureClass.TEN_HOUR),
        ),
        live=(
            FuelParticle(params.load_live_herbaceous, SAVR_LIVE_HERBACEOUS, h, MoistureClass.LIVE_HERBACEOUS),
            FuelParticle(params.load_live_woody, params.savr_live_woody, h, MoistureClass.LIVE_WOODY),
        ),
        depth=params.fuel_bed_depth,
        dead_moisture_of_extinction=params.moisture_of_extinction_dead,
        name=name,
    )

def calc_aspen_mortality(severity: AspenFireSeverity, flame_length: float, dbh: float) -> float:
    """Probability of aspen mortality.

    Args:
        severity (AspenFireSeverity): Fire severity class.
        flame_length (float): Flame length (ft).
        dbh (float): Diameter at breast height (in).

    Returns:
        float: Mortality probability in [0, 1].
    """
    char_height = flame_length / 1.8 # ft

    if severity == AspenFireSeverity.LOW:
        mortality = 1.0 / (1.0 + np.exp(-4.407 + 0.638 * dbh - 2.134 * char_height))
    else:
        mortality = 1.0 / (1.0 + np.exp(-2.157 + 0.218 * dbh - 3.600 * char_height))

    return float(min(max(mortality, 0.0), 1.0))

def calc_western_aspen_surface_fire(inputs: WesternAspenFuel, env: EnvironmentInputs,
                                    direction_of_interest: Optional[float] = None) -> WesternAspenResult:
    params = calc_western_aspen_parameters(inputs.aspen_fuel_model_number, inputs.curing_level)
    fuel = build_western_aspen_fuel(params, FUEL_TYPE_NAMES[inputs.aspen_fuel_model_number])

    surface = calc_surface_fire(fuel, env, direction_of_interest)
    mortality = calc_aspen_mortality(inputs.fire_severity, surface.flame_length, inputs.dbh)
    logger.debug("Aspen fuel type %d: flame length %.2f ft, mortality %.3f",
                 inputs.aspen_fuel_model_number, surface.flame_length, mortality)

    return WesternAspenResult(surface_fire=surface, parameters=params, mortality=mortality, fuel=fuel)
