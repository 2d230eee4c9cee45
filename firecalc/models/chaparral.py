"""Chaparral fuel bed from stand age or direct loading (Rothermel & Philpot 1973).

The chaparral fuel bed is described by its depth, its total load and the
fraction of that load that is dead. Depth and age are interchangeable
through a growth curve, so a stand can be described by either one. Live
fuel moisture and leaf heat content follow seasonal curves driven by the
number of days since May 1st, when new growth flushes. The day count can
be given directly or as a calendar month and day.

References:
    - Rothermel, R. C., & Philpot, C. W. (1973). Predicting changes in chaparral
      flammability. Journal of Forestry, 71(10), 640-643.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from firecalc.exceptions import ValidationError
from firecalc.models.fuel_models import FuelComplex, FuelParticle
from firecalc.models.rothermel import SurfaceFireResult, calc_live_mx, calc_surface_fire
from firecalc.utilities.data_classes import EnvironmentInputs, MoistureClass
from firecalc.utilities.fire_util import SMIDGEN
from firecalc.utilities.unit_conversions import tons_acre_to_lb_ft2

logger = logging.getLogger(__name__)

# ln(50); depth curves are anchored at the depth of a 50 year old stand
_LN_50 = np.log(50.0)

DEAD_SIZE_CLASS_FRACTIONS = (0.347, 0.364, 0.207, 0.082)
STEM_SAVR = (640.0, 127.0, 61.0, 27.0)  # ft^2/ft^3, 0-1/4, 1/4-1/2, 1/2-1, 1-3 in
DEAD_MOISTURE_CLASSES = (MoistureClass.ONE_HOUR, MoistureClass.ONE_HOUR,
                         MoistureClass.TEN_HOUR, MoistureClass.HUNDRED_HOUR)

STEM_DENSITY = 46.0  # lb/ft^3
LEAF_DENSITY = 32.0  # lb/ft^3
DEAD_HEAT_OF_COMBUSTION = 8000.0  # BTU/lb
STEM_HEAT_OF_COMBUSTION = 9000.0  # BTU/lb
TOTAL_SILICA = 0.015
EFFECTIVE_SILICA_STEM = 0.010
EFFECTIVE_SILICA_LEAF = 0.015

DEAD_MOISTURE_OF_EXTINCTION = 0.30


class ChaparralFuelType(Enum):
    CHAMISE = 1
    MIXED_BRUSH = 2

class ChaparralFuelLoadInputMode(Enum):
    DIRECT_FUEL_LOAD = 0
    FUEL_LOAD_FROM_DEPTH_AND_TYPE = 1


@dataclass(frozen=True)
class _ChaparralTypeConstants:
    depth_at_50_years: float  # ft
    load_a: float  # age / (a + b * age) gives tons/acre
    load_b: float
    dead_fraction_a: float  # a * exp(b * age)
    dead_fraction_b: float
    live_fractions: Tuple[float, float, float, float, float]  # leaves, then stems by size class
    leaf_savr: float  # ft^2/ft^3
    leaf_heat_of_combustion: Tuple[float, float, float]  # BTU/lb at flush, daily rise, summer maximum
    leaf_moisture: Tuple[float, float]  # 1 / (a + b * days)
    stem_moisture: Tuple[float, float]


_TYPE_CONSTANTS = {
    ChaparralFuelType.CHAMISE: _ChaparralTypeConstants(
        depth_at_50_years=7.5,
        load_a=1.4459, load_b=0.0315,
        dead_fraction_a=0.0694, dead_fraction_b=0.0402,
        live_fractions=(0.25, 0.30, 0.20, 0.15, 0.10),
        leaf_savr=2200.0,
        leaf_heat_of_combustion=(9613.0, 7.3, 10500.0),
        leaf_moisture=(0.726, 0.00314),
        stem_moisture=(1.55, 0.00358),
    ),
    ChaparralFuelType.MIXED_BRUSH: _ChaparralTypeConstants(
        depth_at_50_years=10.0,
        load_a=0.4849, load_b=0.0170,
        dead_fraction_a=0.0511, dead_fraction_b=0.0394,
        live_fractions=(0.35, 0.25, 0.20, 0.12, 0.08),
        leaf_savr=1650.0,
        leaf_heat_of_combustion=(8750.0, 5.0, 9500.0),
        leaf_moisture=(0.600, 0.00281),
        stem_moisture=(1.35, 0.00330),
    ),
}


@dataclass(frozen=True)
class ChaparralFuel:
    """Fuel selection for chaparral.

    The stand is given by exactly one of `fuel_bed_depth` or `age`; the
    other is derived from the growth curve. The season is given by
    `days_since_may_first` or by `month` and `day`, and defaults to May 1st.

    With FUEL_LOAD_FROM_DEPTH_AND_TYPE the total load and dead fraction are
    estimated from the stand age. With DIRECT_FUEL_LOAD `total_fuel_load`
    and `dead_fuel_fraction` are used as given.

    Attributes:
        fuel_type (ChaparralFuelType): Chamise or mixed brush.
        fuel_bed_depth (float, optional): Fuel bed depth (ft).
        load_input_mode (ChaparralFuelLoadInputMode): How the load is obtained.
        total_fuel_load (float): Total load (lb/ft^2), direct mode only.
        dead_fuel_fraction (float): Dead fraction of the total load, direct mode only.
        days_since_may_first (int, optional): Days since May 1st.
        age (float, optional): Stand age (years).
        month (int, optional): Calendar month, used with `day`.
        day (int, optional): Day of month, used with `month`.
    """
    fuel_type: ChaparralFuelType
    fuel_bed_depth: Optional[float] = None
    load_input_mode: ChaparralFuelLoadInputMode = ChaparralFuelLoadInputMode.FUEL_LOAD_FROM_DEPTH_AND_TYPE
    total_fuel_load: float = 0.0
    dead_fuel_fraction: float = 0.0
    days_since_may_first: Optional[int] = None
    age: Optional[float] = None
    month: Optional[int] = None
    day: Optional[int] = None

    def __post_init__(self):
        if (self.fuel_bed_depth is None) == (self.age is None):
            raise ValidationError("Give exactly one of chaparral fuel bed depth or stand age",
                                  field="fuel_bed_depth", value=self.fuel_bed_depth)
        if self.fuel_bed_depth is not None and self.fuel_bed_depth <= 0:
            raise ValidationError("Chaparral fuel bed depth must be positive", field="fuel_bed_depth",
                                  value=self.fuel_bed_depth)
        if self.age is not None and self.age <= 1:
            raise ValidationError("Chaparral stand age must be over one year", field="age", value=self.age)
        if self.total_fuel_load < 0:
            raise ValidationError("Total fuel load must be non-negative", field="total_fuel_load",
                                  value=self.total_fuel_load)
        if not 0 <= self.dead_fuel_fraction <= 1:
            raise ValidationError("Dead fuel fraction must be between 0 and 1", field="dead_fuel_fraction",
                                  value=self.dead_fuel_fraction)

        if (self.month is None) != (self.day is None):
            raise ValidationError("Month and day must be given together", field="month", value=self.month)
        if self.month is not None:
            if self.days_since_may_first is not None:
                raise ValidationError("Give either days since May 1st or a month and day",
                                      field="days_since_may_first", value=self.days_since_may_first)
            try:
                calc_days_since_may_first(self.month, self.day)
            except ValueError as e:
                raise ValidationError(f"Invalid calendar date: {e}", field="day", value=self.day) from e
        if self.days_since_may_first is not None and not 0 <= self.days_since_may_first < 366:
            raise ValidationError("Days since May 1st must be in [0, 365]", field="days_since_may_first",
                                  value=self.days_since_may_first)


@dataclass(frozen=True)
class ChaparralParameters:
    """Derived chaparral stand and fuel bed values."""
    age: float  # years
    fuel_bed_depth: float  # ft
    total_fuel_load: float  # lb/ft^2
    dead_fuel_fraction: float
    dead_fuel_load: float  # lb/ft^2
    live_fuel_load: float  # lb/ft^2
    moisture_of_extinction_dead: float
    live_leaf_moisture: float
    live_stem_moisture: float
    live_leaf_heat_of_combustion: float  # BTU/lb
    days_since_may_first: int


@dataclass(frozen=True)
class ChaparralResult:
    surface_fire: SurfaceFireResult
    parameters: ChaparralParameters
    fuel: FuelComplex
    moisture_of_extinction_live: float

    @property
    def age(self) -> float:
        return self.parameters.age

    @property
    def days_since_may_first(self) -> int:
        return self.parameters.days_since_may_first

    @property
    def moisture_of_extinction_dead(self) -> float:
        return self.parameters.moisture_of_extinction_dead


def calc_days_since_may_first(month: int, day: int) -> int:
    """Days from May 1st to the given date, wrapping through the winter.

    Args:
        month (int): Month, 1-12.
        day (int): Day of month.

    Returns:
        int: Days in [0, 364].

    Raises:
        ValueError: If month and day are not a date in a non-leap year.
    """
    # Non-leap reference year
    days = (date(2001, month, day) - date(2001, 5, 1)).days
    if days < 0:
        days += 365

    return days

def resolve_days_since_may_first(inputs: ChaparralFuel) -> int:
    if inputs.month is not None:
        return calc_days_since_may_first(inputs.month, inputs.day)
    if inputs.days_since_may_first is not None:
        return inputs.days_since_may_first

    return 0

def calc_age_from_depth(depth: float, fuel_type: ChaparralFuelType) -> float:
    """Stand age (years) for a fuel bed depth (ft)."""
    d_50 = _TYPE_CONSTANTS[fuel_type].depth_at_50_years
    return float(np.exp(_LN_50 * np.sqrt(max(depth, 0.0) / d_50)))

def calc_depth_from_age(age: float, fuel_type: ChaparralFuelType) -> float:
    """Fuel bed depth (ft) for a stand age (years); zero for stands under a year old."""
    if age <= 1.0:
        return 0.0

    d_50 = _TYPE_CONSTANTS[fuel_type].depth_at_50_years
    return float(d_50 * (np.log(age) / _LN_50) ** 2)

def calc_total_load_from_age(age: float, fuel_type: ChaparralFuelType) -> float:
    """Total fuel load (lb/ft^2) for a stand age (years)."""
    c = _TYPE_CONSTANTS[fuel_type]
    return tons_acre_to_lb_ft2(age / (c.load_a + c.load_b * age))

def calc_dead_fraction_from_age(age: float, fuel_type: ChaparralFuelType) -> float:
    c = _TYPE_CONSTANTS[fuel_type]
    fraction = c.dead_fraction_a * np.exp(c.dead_fraction_b * age)
    return float(min(max(fraction, 0.0), 1.0))

def calc_live_leaf_moisture(days_since_may_first: int, fuel_type: ChaparralFuelType) -> float:
    a, b = _TYPE_CONSTANTS[fuel_type].leaf_moisture
    return 1.0 / (a + b * days_since_may_first)

def calc_live_stem_moisture(days_since_may_first: int, fuel_type: ChaparralFuelType) -> float:
    a, b = _TYPE_CONSTANTS[fuel_type].stem_moisture
    return 1.0 / (a + b * days_since_may_first)

def calc_live_leaf_heat_of_combustion(days_since_may_first: int, fuel_type: ChaparralFuelType) -> float:
    """Live leaf heat of combustion (BTU/lb).

    Leaf heat content is lowest in the new flush and rises through the
    summer as extractives accumulate, levelling off at a summer maximum.
    """
    flush, rise, maximum = _TYPE_CONSTANTS[fuel_type].leaf_heat_of_combustion
    return float(min(flush + rise * days_since_may_first, maximum))

def calc_chaparral_parameters(inputs: ChaparralFuel) -> ChaparralParameters:
    """Derive stand age, loads, moistures and moisture of extinction.

    Args:
        inputs (ChaparralFuel): Chaparral selection.

    Returns:
        ChaparralParameters: Derived values in base units.
    """
    fuel_type = inputs.fuel_type
    if inputs.age is not None:
        age = inputs.age
        depth = calc_depth_from_age(age, fuel_type)
    else:
        depth = inputs.fuel_bed_depth
        age = calc_age_from_depth(depth, fuel_type)

    days = resolve_days_since_may_first(inputs)

    if inputs.load_input_mode == ChaparralFuelLoadInputMode.DIRECT_FUEL_LOAD:
        total = inputs.total_fuel_load
        dead_fraction = inputs.dead_fuel_fraction
    else:
        total = calc_total_load_from_age(age, fuel_type)
        dead_fraction = calc_dead_fraction_from_age(age, fuel_type)

    dead_load = total * dead_fraction

    return ChaparralParameters(
        age=age,
        fuel_bed_depth=depth,
        total_fuel_load=total,
        dead_fuel_fraction=dead_fraction,
        dead_fuel_load=dead_load,
        live_fuel_load=total - dead_load,
        moisture_of_extinction_dead=DEAD_MOISTURE_OF_EXTINCTION,
        live_leaf_moisture=calc_live_leaf_moisture(days, fuel_type),
        live_stem_moisture=calc_live_stem_moisture(days, fuel_type),
        live_leaf_heat_of_combustion=calc_live_leaf_heat_of_combustion(days, fuel_type),
        days_since_may_first=days,
    )

def build_chaparral_fuel(params: ChaparralParameters, fuel_type: ChaparralFuelType) -> FuelComplex:
    """Partition chaparral loads into size classes.

    Dead fuel is split into four stem size classes. Live fuel is split into
    leaves plus four stem size classes whose moistures come from the
    seasonal curves rather than the scenario.

    Args:
        params (ChaparralParameters): Derived chaparral values.
        fuel_type (ChaparralFuelType): Chamise or mixed brush.

    Returns:
        FuelComplex: Fuel bed for the surface fire model.
    """
    c = _TYPE_CONSTANTS[fuel_type]

    dead = tuple(
        FuelParticle(params.dead_fuel_load * fraction, savr, DEAD_HEAT_OF_COMBUSTION, moisture_class,
                     density=STEM_DENSITY, total_silica=TOTAL_SILICA, effective_silica=EFFECTIVE_SILICA_STEM)
        for fraction, savr, moisture_class in zip(DEAD_SIZE_CLASS_FRACTIONS, STEM_SAVR, DEAD_MOISTURE_CLASSES)
    )

    leaf_fraction, *stem_fractions = c.live_fractions
    leaves = FuelParticle(params.live_fuel_load * leaf_fraction, c.leaf_savr, params.live_leaf_heat_of_combustion,
                          moisture=params.live_leaf_moisture, density=LEAF_DENSITY,
                          total_silica=TOTAL_SILICA, effective_silica=EFFECTIVE_SILICA_LEAF)
    stems = tuple(
        FuelParticle(params.live_fuel_load * fraction, savr, STEM_HEAT_OF_COMBUSTION,
                     moisture=params.live_stem_moisture, density=STEM_DENSITY,
                     total_silica=TOTAL_SILICA, effective_silica=EFFECTIVE_SILICA_STEM)
        for fraction, savr in zip(stem_fractions, STEM_SAVR)
    )

    return FuelComplex(
        dead=dead,
        live=(leaves,) + stems,
        depth=params.fuel_bed_depth,
        dead_moisture_of_extinction=params.moisture_of_extinction_dead,
        name=f"chaparral ({fuel_type.name.lower()})",
    )

def calc_chaparral_surface_fire(inputs: ChaparralFuel, env: EnvironmentInputs,
                                direction_of_interest: Optional[float] = None) -> ChaparralResult:
    params = calc_chaparral_parameters(inputs)
    if params.total_fuel_load < SMIDGEN:
        logger.debug("Chaparral fuel bed has no load")

    fuel = build_chaparral_fuel(params, inputs.fuel_type)
    surface = calc_surface_fire(fuel, env, direction_of_interest)

    return ChaparralResult(surface_fire=surface, parameters=params, fuel=fuel,
                           moisture_of_extinction_live=calc_live_mx(fuel, env.moisture))
