"""Palmetto-gallberry fuel bed from stand descriptors (Hough & Albini 1978).

Loads are estimated from age of rough, understory height, palmetto
coverage and overstory basal area, then run through the Rothermel model
in place of a catalog fuel model.

References:
    - Hough, W. A., & Albini, F. A. (1978). Predicting fire behavior in
      palmetto-gallberry fuel complexes. USDA Forest Service Research Paper SE-174.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from firecalc.exceptions import ValidationError
from firecalc.models.fuel_models import FuelComplex, FuelParticle
from firecalc.models.rothermel import SurfaceFireResult, calc_surface_fire
from firecalc.utilities.data_classes import EnvironmentInputs, MoistureClass

logger = logging.getLogger(__name__)

HEAT_OF_COMBUSTION = 8300.0  # BTU/lb
MOISTURE_OF_EXTINCTION_DEAD = 0.40
DEAD_PARTICLE_DENSITY = 30.0  # lb/ft^3
LIVE_PARTICLE_DENSITY = 46.0  # lb/ft^3
TOTAL_SILICA = 0.030
EFFECTIVE_SILICA_DEAD = 0.010
EFFECTIVE_SILICA_LIVE = 0.015


@dataclass(frozen=True)
class PalmettoGallberryFuel:
    """Fuel selection for the palmetto-gallberry fuel type.

    Attributes:
        age_of_rough (float): Years since last fire.
        height_of_understory (float): Understory height (ft).
        palmetto_coverage (float): Ground covered by palmetto (fraction).
        overstory_basal_area (float): Overstory basal area (ft^2/ac).
    """
    age_of_rough: float
    height_of_understory: float
    palmetto_coverage: float
    overstory_basal_area: float

    def __post_init__(self):
        if self.age_of_rough <= 0:
            raise ValidationError("Age of rough must be positive", field="age_of_rough",
                                  value=self.age_of_rough)
        if self.height_of_understory < 0:
            raise ValidationError("Understory height must be non-negative", field="height_of_understory",
                                  value=self.height_of_understory)
        if not 0 <= self.palmetto_coverage <= 1:
            raise ValidationError("Palmetto coverage must be between 0 and 1", field="palmetto_coverage",
                                  value=self.palmetto_coverage)
        if self.overstory_basal_area < 0:
            raise ValidationError("Basal area must be non-negative", field="overstory_basal_area",
                                  value=self.overstory_basal_area)


@dataclass(frozen=True)
class PalmettoGallberryLoads:
    """Estimated palmetto-gallberry loads (lb/ft^2) and bed properties."""
    dead_one_hour: float
    dead_ten_hour: float
    dead_foliage: float
    litter: float
    live_one_hour: float
    live_ten_hour: float
    live_foliage: float
    fuel_bed_depth: float  # ft
    moisture_of_extinction_dead: float = MOISTURE_OF_EXTINCTION_DEAD
    heat_of_combustion_dead: float = HEAT_OF_COMBUSTION
    heat_of_combustion_live: float = HEAT_OF_COMBUSTION


@dataclass(frozen=True)
class PalmettoGallberryResult:
    surface_fire: SurfaceFireResult
    loads: PalmettoGallberryLoads
    fuel: FuelComplex


# Regression equations take palmetto coverage in percent and return lb/ft^2.

def calc_dead_one_hour_load(age: float, height: float) -> float:
    load = -0.00121 + 0.00379 * np.log(age) + 0.00118 * height**2
    return float(max(load, 0.0))

def calc_dead_ten_hour_load(age: float, coverage_pct: float) -> float:
    load = -0.00775 + 0.00021 * coverage_pct + 0.00007 * age**2
    return float(max(load, 0.0))

def calc_dead_foliage_load(age: float, coverage_pct: float) -> float:
    return float(0.00221 * age**0.51263 * np.exp(0.02482 * coverage_pct))

def calc_litter_load(age: float, basal_area: float) -> float:
    return float((0.03632 + 0.0005336 * basal_area) * (1.0 - 0.25**age))

def calc_live_one_hour_load(age: float, height: float) -> float:
    return float(0.00546 + 0.00092 * age + 0.00212 * height**2)

def calc_live_ten_hour_load(age: float, height: float) -> float:
    load = -0.02128 + 0.00014 * age**2 + 0.00314 * height**2
    return float(max(load, 0.0))

def calc_live_foliage_load(age: float, coverage_pct: float, height: float) -> float:
    load = -0.0036 + 0.00253 * age + 0.00049 * coverage_pct + 0.00282 * height**2
    return float(max(load, 0.0))

def calc_fuel_bed_depth(height: float) -> float:
    return 2.0 * height / 3.0

def calc_palmetto_gallberry_loads(inputs: PalmettoGallberryFuel) -> PalmettoGallberryLoads:
    """Estimate palmetto-gallberry loads from stand descriptors.

    Args:
        inputs (PalmettoGallberryFuel): Stand descriptors.

    Returns:
        PalmettoGallberryLoads: Loads by component and fuel bed depth.
    """
    age = inputs.age_of_rough
    height = inputs.height_of_understory
    coverage_pct = inputs.palmetto_coverage * 100

    return PalmettoGallberryLoads(
        dead_one_hour=calc_dead_one_hour_load(age, height),
        dead_ten_hour=calc_dead_ten_hour_load(age, coverage_pct),
        dead_foliage=calc_dead_foliage_load(age, coverage_pct),
        litter=calc_litter_load(age, inputs.overstory_basal_area),
        live_one_hour=calc_live_one_hour_load(age, height),
        live_ten_hour=calc_live_ten_hour_load(age, height),
        live_foliage=calc_live_foliage_load(age, coverage_pct, height),
        fuel_bed_depth=calc_fuel_bed_depth(height),
    )

def build_palmetto_gallberry_fuel(loads: PalmettoGallberryLoads) -> FuelComplex:
    """Assemble the fuel bed from estimated loads.

    Dead foliage takes the one-hour moisture and litter the hundred-hour
    moisture. Live foliage takes the live herbaceous moisture and live
    stems take the live woody moisture.

    Args:
        loads (PalmettoGallberryLoads): Estimated loads.

    Returns:
        FuelComplex: Fuel bed for the surface fire model.
    """
    heat_dead = loads.heat_of_combustion_dead
    heat_live = loads.heat_of_combustion_live

    def dead(load, savr, moisture_class):
        return FuelParticle(load, savr, heat_dead, moisture_class, density=DEAD_PARTICLE_DENSITY,
                            total_silica=TOTAL_SILICA, effective_silica=EFFECTIVE_SILICA_DEAD)

    def live(load, savr, moisture_class):
        return FuelParticle(load, savr, heat_live, moisture_class, density=LIVE_PARTICLE_DENSITY,
                            total_silica=TOTAL_SILICA, effective_silica=EFFECTIVE_SILICA_LIVE)

    return FuelComplex(
        dead=(
            dead(loads.dead_one_hour, 350.0, MoistureClass.ONE_HOUR),
            dead(loads.dead_ten_hour, 140.0, MoistureClass.TEN_HOUR),
            dead(loads.dead_foliage, 2000.0, MoistureClass.ONE_HOUR),
            dead(loads.litter, 2000.0, MoistureClass.HUNDRED_HOUR),
        ),
        live=(
            live(loads.live_one_hour, 350.0, MoistureClass.LIVE_WOODY),
            live(loads.live_ten_hour, 140.0, MoistureClass.LIVE_WOODY),
            live(loads.live_foliage, 2000.0, MoistureClass.LIVE_HERBACEOUS),
        ),
        depth=loads.fuel_bed_depth,
        dead_moisture_of_extinction=loads.moisture_of_extinction_dead,
        name="palmetto-gallberry",
    )

def calc_palmetto_gallberry_surface_fire(inputs: PalmettoGallberryFuel, env: EnvironmentInputs,
                                         direction_of_interest: Optional[float] = None
                                         ) -> PalmettoGallberryResult:
    loads = calc_palmetto_gallberry_loads(inputs)
    fuel = build_palmetto_gallberry_fuel(loads)
    logger.debug("Palmetto-gallberry fuel bed: total load %.4f lb/ft^2, depth %.2f ft",
                 fuel.total_load, fuel.depth)

    surface = calc_surface_fire(fuel, env, direction_of_interest)
    return PalmettoGallberryResult(surface_fire=surface, loads=loads, fuel=fuel)
