"""Scenario input structures shared by the surface and crown fire models.

All values are stored in firecalc base units (see
:mod:`firecalc.utilities.unit_conversions`). Use
:func:`~firecalc.utilities.unit_conversions.to_base_units` at the boundary
when inputs come in other units. The structures are frozen, so a derived
scenario is built with :func:`dataclasses.replace`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from firecalc.exceptions import ValidationError
from firecalc.utilities.fire_util import UtilFuncs


class WindHeightInputMode(Enum):
    DIRECT_MIDFLAME = 0
    TWENTY_FOOT = 1
    TEN_METER = 2

class WindAndSpreadOrientationMode(Enum):
    RELATIVE_TO_UPSLOPE = 0
    RELATIVE_TO_NORTH = 1

class SurfaceFireSpreadDirectionMode(Enum):
    FROM_IGNITION_POINT = 0
    FROM_PERIMETER = 1

class WindAdjustmentFactorCalculationMethod(Enum):
    USER_INPUT = 0
    USE_CROWN_RATIO = 1
    DONT_USE_CROWN_RATIO = 2

class MoistureClass(Enum):
    ONE_HOUR = "one_hour"
    TEN_HOUR = "ten_hour"
    HUNDRED_HOUR = "hundred_hour"
    LIVE_HERBACEOUS = "live_herbaceous"
    LIVE_WOODY = "live_woody"


# Scott & Burgan (2005) standard moisture scenarios, fractions
_DEAD_SCENARIOS = {
    "D1": (0.03, 0.04, 0.05),
    "D2": (0.06, 0.07, 0.08),
    "D3": (0.09, 0.10, 0.11),
    "D4": (0.12, 0.13, 0.14),
}

_LIVE_SCENARIOS = {
    "L1": (0.30, 0.60),
    "L2": (0.60, 0.90),
    "L3": (0.90, 1.20),
    "L4": (1.20, 1.50),
}


@dataclass(frozen=True)
class FuelMoisture:
    """Fuel moisture content by timelag and live class, as fractions of oven-dry weight."""
    one_hour: float = 0.06
    ten_hour: float = 0.07
    hundred_hour: float = 0.08
    live_herbaceous: float = 0.60
    live_woody: float = 0.90

    def __post_init__(self):
        for name in ("one_hour", "ten_hour", "hundred_hour", "live_herbaceous", "live_woody"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationError("Fuel moisture must be non-negative", field=name, value=value)

    def get(self, moisture_class: MoistureClass) -> float:
        return getattr(self, moisture_class.value)

    @classmethod
    def all_aggregate(cls, dead: float, live: float) -> "FuelMoisture":
        """Use a single dead and a single live moisture for every size class."""
        return cls(dead, dead, dead, live, live)

    @classmethod
    def dead_aggregate(cls, dead: float, live_herbaceous: float, live_woody: float) -> "FuelMoisture":
        return cls(dead, dead, dead, live_herbaceous, live_woody)

    @classmethod
    def live_aggregate(cls, one_hour: float, ten_hour: float, hundred_hour: float,
                       live: float) -> "FuelMoisture":
        return cls(one_hour, ten_hour, hundred_hour, live, live)

    @classmethod
    def from_scenario(cls, name: str) -> "FuelMoisture":
        """Build moistures from a standard scenario name such as ``"D2L3"``.

        Args:
            name (str): Dead scenario (D1-D4) followed by live scenario (L1-L4).

        Raises:
            ValidationError: If the name is not a known scenario.

        Returns:
            FuelMoisture: Moistures for the scenario.
        """
        key = name.strip().upper()
        dead = _DEAD_SCENARIOS.get(key[:2])
        live = _LIVE_SCENARIOS.get(key[2:])
        if dead is None or live is None:
            raise ValidationError("Unknown moisture scenario", field="name", value=name)

        return cls(*dead, *live)


@dataclass(frozen=True)
class EnvironmentInputs:
    """Site and weather inputs for a single fire behavior calculation.

    Directions are in degrees clockwise, from upslope by default or from
    north when `orientation_mode` is RELATIVE_TO_NORTH. Wind direction is
    the direction the wind pushes the fire. Aspect is the downslope
    direction, so upslope is aspect + 180.

    `spread_direction_mode` picks how the rate in the direction of interest
    is measured: along the ray from the ignition point, or normal to the
    fire perimeter.
    """
    moisture: FuelMoisture = field(default_factory=FuelMoisture)
    wind_speed: float = 0.0  # ft/min at the height given by wind_height_input_mode
    wind_direction: float = 0.0  # deg
    wind_height_input_mode: WindHeightInputMode = WindHeightInputMode.TWENTY_FOOT
    orientation_mode: WindAndSpreadOrientationMode = WindAndSpreadOrientationMode.RELATIVE_TO_UPSLOPE
    slope: float = 0.0  # deg
    aspect: float = 0.0  # deg
    canopy_cover: float = 0.0  # fraction
    canopy_height: float = 0.0  # ft
    crown_ratio: float = 0.0  # fraction
    waf_method: WindAdjustmentFactorCalculationMethod = WindAdjustmentFactorCalculationMethod.USE_CROWN_RATIO
    user_wind_adjustment_factor: float = -1.0
    air_temperature: float = 77.0  # F
    apply_wind_limit: bool = False
    spread_direction_mode: SurfaceFireSpreadDirectionMode = SurfaceFireSpreadDirectionMode.FROM_IGNITION_POINT

    def __post_init__(self):
        object.__setattr__(self, "wind_direction", UtilFuncs.normalize_direction(self.wind_direction))
        object.__setattr__(self, "aspect", UtilFuncs.normalize_direction(self.aspect))

        if self.wind_speed < 0:
            raise ValidationError("Wind speed must be non-negative", field="wind_speed", value=self.wind_speed)
        if not 0 <= self.slope < 90:
            raise ValidationError("Slope must be in [0, 90) degrees", field="slope", value=self.slope)
        for name in ("canopy_cover", "crown_ratio"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValidationError(f"{name} must be between 0 and 1", field=name, value=value)
        if self.canopy_height < 0:
            raise ValidationError("Canopy height must be non-negative", field="canopy_height",
                                  value=self.canopy_height)
        if self.air_temperature >= 140:
            raise ValidationError("Air temperature must be below 140 F", field="air_temperature",
                                  value=self.air_temperature)
        if (self.waf_method == WindAdjustmentFactorCalculationMethod.USER_INPUT
                and self.user_wind_adjustment_factor < 0):
            raise ValidationError("A user wind adjustment factor is required for USER_INPUT",
                                  field="user_wind_adjustment_factor",
                                  value=self.user_wind_adjustment_factor)


@dataclass(frozen=True)
class CrownInputs:
    """Canopy fuel inputs for the crown fire model."""
    canopy_base_height: float = 0.0  # ft
    canopy_bulk_density: float = 0.0  # lb/ft^3
    foliar_moisture: float = 1.0  # fraction
    canopy_height: Optional[float] = None  # ft, defaults to EnvironmentInputs.canopy_height

    def __post_init__(self):
        for name in ("canopy_base_height", "canopy_bulk_density", "foliar_moisture"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationError(f"{name} must be non-negative", field=name, value=value)
        if self.canopy_height is not None and self.canopy_height < 0:
            raise ValidationError("Canopy height must be non-negative", field="canopy_height",
                                  value=self.canopy_height)
