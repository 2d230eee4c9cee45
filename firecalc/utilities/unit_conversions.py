"""This module contains functions for unit conversions.

All fire behavior calculations in firecalc are performed in a fixed set of
base units (English units, as used by Rothermel and BehavePlus). Values in
other units are converted at the boundary with :func:`to_base_units` and
:func:`from_base_units`, which dispatch on the unit enum passed in.

Base units:
    length: ft, speed: ft/min, slope: degrees, moisture/cover/curing: fraction,
    time: min, temperature: F, loading: lb/ft^2, density: lb/ft^3,
    heat of combustion: BTU/lb, heat per unit area: BTU/ft^2,
    reaction intensity: BTU/ft^2-min, fireline intensity: BTU/ft-s,
    SAVR: ft^2/ft^3, basal area: ft^2/ac, area: ft^2
"""

from enum import Enum

import numpy as np

from firecalc.exceptions import ConfigurationError


class LengthUnits(Enum):
    FEET = "ft"
    INCHES = "in"
    MILLIMETERS = "mm"
    CENTIMETERS = "cm"
    METERS = "m"
    CHAINS = "ch"
    MILES = "mi"
    KILOMETERS = "km"

class SpeedUnits(Enum):
    FEET_PER_MINUTE = "ft/min"
    CHAINS_PER_HOUR = "ch/h"
    METERS_PER_SECOND = "m/s"
    METERS_PER_MINUTE = "m/min"
    METERS_PER_HOUR = "m/h"
    MILES_PER_HOUR = "mi/h"
    KILOMETERS_PER_HOUR = "km/h"

class SlopeUnits(Enum):
    DEGREES = "deg"
    PERCENT = "%"

class MoistureUnits(Enum):
    FRACTION = "fraction"
    PERCENT = "%"

class CoverUnits(Enum):
    FRACTION = "fraction"
    PERCENT = "%"

class CuringLevelUnits(Enum):
    FRACTION = "fraction"
    PERCENT = "%"

class TimeUnits(Enum):
    MINUTES = "min"
    SECONDS = "s"
    HOURS = "h"
    DAYS = "d"

class TemperatureUnits(Enum):
    FAHRENHEIT = "F"
    CELSIUS = "C"
    KELVIN = "K"

class LoadingUnits(Enum):
    POUNDS_PER_SQUARE_FOOT = "lb/ft^2"
    TONS_PER_ACRE = "ton/ac"
    TONNES_PER_HECTARE = "t/ha"
    KILOGRAMS_PER_SQUARE_METER = "kg/m^2"

class DensityUnits(Enum):
    POUNDS_PER_CUBIC_FOOT = "lb/ft^3"
    KILOGRAMS_PER_CUBIC_METER = "kg/m^3"

class HeatOfCombustionUnits(Enum):
    BTUS_PER_POUND = "BTU/lb"
    KILOJOULES_PER_KILOGRAM = "kJ/kg"

class HeatPerUnitAreaUnits(Enum):
    BTUS_PER_SQUARE_FOOT = "BTU/ft^2"
    KILOJOULES_PER_SQUARE_METER = "kJ/m^2"
    KILOWATT_SECONDS_PER_SQUARE_METER = "kW-s/m^2"

class HeatSourceAndReactionIntensityUnits(Enum):
    BTUS_PER_SQUARE_FOOT_PER_MINUTE = "BTU/ft^2-min"
    BTUS_PER_SQUARE_FOOT_PER_SECOND = "BTU/ft^2-s"
    KILOJOULES_PER_SQUARE_METER_PER_SECOND = "kJ/m^2-s"
    KILOJOULES_PER_SQUARE_METER_PER_MINUTE = "kJ/m^2-min"
    KILOWATTS_PER_SQUARE_METER = "kW/m^2"

class FirelineIntensityUnits(Enum):
    BTUS_PER_FOOT_PER_SECOND = "BTU/ft-s"
    BTUS_PER_FOOT_PER_MINUTE = "BTU/ft-min"
    KILOJOULES_PER_METER_PER_SECOND = "kJ/m-s"
    KILOJOULES_PER_METER_PER_MINUTE = "kJ/m-min"
    KILOWATTS_PER_METER = "kW/m"

class SurfaceAreaToVolumeUnits(Enum):
    SQUARE_FEET_OVER_CUBIC_FEET = "ft^2/ft^3"
    SQUARE_METERS_OVER_CUBIC_METERS = "m^2/m^3"
    SQUARE_INCHES_OVER_CUBIC_INCHES = "in^2/in^3"
    SQUARE_CENTIMETERS_OVER_CUBIC_CENTIMETERS = "cm^2/cm^3"

class BasalAreaUnits(Enum):
    SQUARE_FEET_PER_ACRE = "ft^2/ac"
    SQUARE_METERS_PER_HECTARE = "m^2/ha"

class AreaUnits(Enum):
    SQUARE_FEET = "ft^2"
    SQUARE_METERS = "m^2"
    ACRES = "ac"
    HECTARES = "ha"
    SQUARE_MILES = "mi^2"
    SQUARE_KILOMETERS = "km^2"


# Multiply a value in the keyed unit by the factor to get base units
_TO_BASE = {
    LengthUnits.FEET: 1.0,
    LengthUnits.INCHES: 1 / 12,
    LengthUnits.MILLIMETERS: 0.00328084,
    LengthUnits.CENTIMETERS: 0.0328084,
    LengthUnits.METERS: 3.28084,
    LengthUnits.CHAINS: 66.0,
    LengthUnits.MILES: 5280.0,
    LengthUnits.KILOMETERS: 3280.84,

    SpeedUnits.FEET_PER_MINUTE: 1.0,
    SpeedUnits.CHAINS_PER_HOUR: 66 / 60,
    SpeedUnits.METERS_PER_SECOND: 196.8504,
    SpeedUnits.METERS_PER_MINUTE: 3.28084,
    SpeedUnits.METERS_PER_HOUR: 3.28084 / 60,
    SpeedUnits.MILES_PER_HOUR: 5280 / 60,
    SpeedUnits.KILOMETERS_PER_HOUR: 3280.84 / 60,

    MoistureUnits.FRACTION: 1.0,
    MoistureUnits.PERCENT: 0.01,
    CoverUnits.FRACTION: 1.0,
    CoverUnits.PERCENT: 0.01,
    CuringLevelUnits.FRACTION: 1.0,
    CuringLevelUnits.PERCENT: 0.01,

    TimeUnits.MINUTES: 1.0,
    TimeUnits.SECONDS: 1 / 60,
    TimeUnits.HOURS: 60.0,
    TimeUnits.DAYS: 1440.0,

    LoadingUnits.POUNDS_PER_SQUARE_FOOT: 1.0,
    LoadingUnits.TONS_PER_ACRE: 2000 / 43560,
    LoadingUnits.TONNES_PER_HECTARE: 0.02048161,
    LoadingUnits.KILOGRAMS_PER_SQUARE_METER: 0.2048161,

    DensityUnits.POUNDS_PER_CUBIC_FOOT: 1.0,
    DensityUnits.KILOGRAMS_PER_CUBIC_METER: 1 / 16.0185,

    HeatOfCombustionUnits.BTUS_PER_POUND: 1.0,
    HeatOfCombustionUnits.KILOJOULES_PER_KILOGRAM: 1 / 2.326,

    HeatPerUnitAreaUnits.BTUS_PER_SQUARE_FOOT: 1.0,
    HeatPerUnitAreaUnits.KILOJOULES_PER_SQUARE_METER: 0.08805508,
    HeatPerUnitAreaUnits.KILOWATT_SECONDS_PER_SQUARE_METER: 0.08805508,

    HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_MINUTE: 1.0,
    HeatSourceAndReactionIntensityUnits.BTUS_PER_SQUARE_FOOT_PER_SECOND: 60.0,
    HeatSourceAndReactionIntensityUnits.KILOJOULES_PER_SQUARE_METER_PER_SECOND: 5.2833048,
    HeatSourceAndReactionIntensityUnits.KILOJOULES_PER_SQUARE_METER_PER_MINUTE: 0.08805508,
    HeatSourceAndReactionIntensityUnits.KILOWATTS_PER_SQUARE_METER: 5.2833048,

    FirelineIntensityUnits.BTUS_PER_FOOT_PER_SECOND: 1.0,
    FirelineIntensityUnits.BTUS_PER_FOOT_PER_MINUTE: 1 / 60,
    FirelineIntensityUnits.KILOJOULES_PER_METER_PER_SECOND: 0.288672,
    FirelineIntensityUnits.KILOJOULES_PER_METER_PER_MINUTE: 0.288672 / 60,
    FirelineIntensityUnits.KILOWATTS_PER_METER: 0.288672,

    SurfaceAreaToVolumeUnits.SQUARE_FEET_OVER_CUBIC_FEET: 1.0,
    SurfaceAreaToVolumeUnits.SQUARE_METERS_OVER_CUBIC_METERS: 0.3048,
    SurfaceAreaToVolumeUnits.SQUARE_INCHES_OVER_CUBIC_INCHES: 12.0,
    SurfaceAreaToVolumeUnits.SQUARE_CENTIMETERS_OVER_CUBIC_CENTIMETERS: 30.48,

    BasalAreaUnits.SQUARE_FEET_PER_ACRE: 1.0,
    BasalAreaUnits.SQUARE_METERS_PER_HECTARE: 4.356,

    AreaUnits.SQUARE_FEET: 1.0,
    AreaUnits.SQUARE_METERS: 10.7639104,
    AreaUnits.ACRES: 43560.0,
    AreaUnits.HECTARES: 107639.104,
    AreaUnits.SQUARE_MILES: 27878400.0,
    AreaUnits.SQUARE_KILOMETERS: 10763910.4,
}


def to_base_units(value, units: Enum):
    """Converts a value expressed in `units` into firecalc base units.

    Works on scalars and numpy arrays. Slope and temperature are handled
    separately since their conversions are not a single scale factor.

    Args:
        value (float | np.ndarray): Value expressed in `units`.
        units (Enum): Member of one of the unit enums in this module.

    Raises:
        ConfigurationError: If `units` is not a supported unit.

    Returns:
        float | np.ndarray: Value in base units.
    """
    if isinstance(units, SlopeUnits):
        if units == SlopeUnits.PERCENT:
            return np.degrees(np.arctan(np.asarray(value) / 100.0))
        return value

    if isinstance(units, TemperatureUnits):
        if units == TemperatureUnits.CELSIUS:
            return value * 9 / 5 + 32
        if units == TemperatureUnits.KELVIN:
            return (value - 273.15) * 9 / 5 + 32
        return value

    return value * _factor(units)

def from_base_units(value, units: Enum):
    """Converts a value in firecalc base units into `units`.

    Args:
        value (float | np.ndarray): Value in base units.
        units (Enum): Member of one of the unit enums in this module.

    Raises:
        ConfigurationError: If `units` is not a supported unit.

    Returns:
        float | np.ndarray: Value expressed in `units`.
    """
    if isinstance(units, SlopeUnits):
        if units == SlopeUnits.PERCENT:
            return np.tan(np.radians(value)) * 100.0
        return value

    if isinstance(units, TemperatureUnits):
        if units == TemperatureUnits.CELSIUS:
            return (value - 32) * 5 / 9
        if units == TemperatureUnits.KELVIN:
            return (value - 32) * 5 / 9 + 273.15
        return value

    return value / _factor(units)

def _factor(units: Enum) -> float:
    try:
        return _TO_BASE[units]
    except KeyError:
        raise ConfigurationError(f"Unsupported unit {units!r}", parameter="units") from None


# Shorthands for the conversions the models use internally

def m_to_ft(f_m: float) -> float:
    return to_base_units(f_m, LengthUnits.METERS)

def ft_to_m(f_ft: float) -> float:
    return from_base_units(f_ft, LengthUnits.METERS)

def mph_to_ft_min(f_mph: float) -> float:
    """Converts from miles per hour to ft/min

    Args:
        f_mph (float): mi/hr

    Returns:
        float: ft/min
    """
    return to_base_units(f_mph, SpeedUnits.MILES_PER_HOUR)

def ft_min_to_mph(f_ft_min: float) -> float:
    return from_base_units(f_ft_min, SpeedUnits.MILES_PER_HOUR)

def lb_ft3_to_kg_m3(f_lb_ft3: float) -> float:
    return from_base_units(f_lb_ft3, DensityUnits.KILOGRAMS_PER_CUBIC_METER)

def kW_m_to_btu_ft_s(f_kw_m: float) -> float:
    """Converts a fireline intensity from kW/m to BTU/ft-s"""
    return to_base_units(f_kw_m, FirelineIntensityUnits.KILOWATTS_PER_METER)

def tons_acre_to_lb_ft2(f_tpa: float) -> float:
    """Converts a fuel loading from tons/acre to lb/ft^2

    Args:
        f_tpa (float): tons/acre

    Returns:
        float: lb/ft^2
    """
    return to_base_units(f_tpa, LoadingUnits.TONS_PER_ACRE)
