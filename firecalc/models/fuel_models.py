"""Fuel model definitions for surface fire behavior calculations.

This module defines the fuel bed representation consumed by the Rothermel
model and the catalog of standard fire behavior fuel models. It includes
the Anderson 13 models, the Scott & Burgan 40 models, and the
non-burnable models.

Classes:
    - FuelParticle: A single fuel size class with its physical properties.
    - FuelComplex: Dead and live particles plus bed depth and moisture of extinction.
    - FuelModelRecord: A catalog entry as published (loads, SAVR, depth, etc.).
    - FuelModelCatalog: Lookup of fuel model records by number.
    - StandardFuel: Fuel selection that runs a single catalog fuel model.

References:
    - Anderson, H. E. (1982). Aids to Determining Fuel Models for Estimating Fire Behavior.
      USDA Forest Service General Technical Report INT-122.
    - Scott, J. H., & Burgan, R. E. (2005). Standard Fire Behavior Fuel Models.
      USDA Forest Service General Technical Report RMRS-GTR-153.

"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from firecalc.exceptions import FuelModelError
from firecalc.utilities.data_classes import FuelMoisture, MoistureClass
from firecalc.utilities.fire_util import (
    EFFECTIVE_SILICA_CONTENT,
    FUEL_PARTICLE_DENSITY,
    HUNDRED_HOUR_SAVR,
    SMIDGEN,
    TEN_HOUR_SAVR,
    TOTAL_SILICA_CONTENT,
)
from firecalc.utilities.unit_conversions import (
    LengthUnits,
    LoadingUnits,
    MoistureUnits,
    from_base_units,
    tons_acre_to_lb_ft2,
)

logger = logging.getLogger(__name__)

# Non-burnable models (NB1-NB9) are numbered 91-99
NON_BURNABLE_NUMBERS = (91, 99)


@dataclass(frozen=True)
class FuelParticle:
    """One fuel size class of a fuel bed.

    The particle takes its moisture either from the scenario moisture class
    it belongs to, or from an explicit `moisture` value when a generator
    computes it (chaparral live fuels).
    """
    load: float  # lb/ft^2
    savr: float  # ft^2/ft^3
    heat_of_combustion: float = 8000.0  # BTU/lb
    moisture_class: Optional[MoistureClass] = None
    moisture: Optional[float] = None  # fraction
    density: float = FUEL_PARTICLE_DENSITY  # lb/ft^3
    total_silica: float = TOTAL_SILICA_CONTENT
    effective_silica: float = EFFECTIVE_SILICA_CONTENT

    def moisture_from(self, fuel_moisture: FuelMoisture) -> float:
        if self.moisture is not None:
            return self.moisture
        return fuel_moisture.get(self.moisture_class)


@dataclass(frozen=True)
class FuelComplex:
    """Fuel bed handed to the surface fire model.

    Attributes:
        dead (Tuple[FuelParticle, ...]): Dead fuel particles, finest first.
        live (Tuple[FuelParticle, ...]): Live fuel particles.
        depth (float): Fuel bed depth (ft).
        dead_moisture_of_extinction (float): Dead fuel moisture of extinction (fraction).
        name (str): Label used in logs and results.
        number (int): Fuel model number, if the bed came from the catalog.
    """
    dead: Tuple[FuelParticle, ...]
    live: Tuple[FuelParticle, ...]
    depth: float
    dead_moisture_of_extinction: float
    name: str = "custom"
    number: Optional[int] = None

    @property
    def total_load(self) -> float:
        return sum(p.load for p in self.dead + self.live)

    @property
    def is_all_load_zero(self) -> bool:
        return self.total_load < SMIDGEN

    @property
    def has_live_fuel(self) -> bool:
        return any(p.load > SMIDGEN for p in self.live)

    @property
    def packing_ratio(self) -> float:
        """Ratio of fuel volume to fuel bed volume."""
        if self.depth < SMIDGEN:
            return 0.0
        return sum(p.load / p.density for p in self.dead + self.live) / self.depth

    @property
    def bulk_density(self) -> float:
        """Oven-dry fuel bed bulk density (lb/ft^3)."""
        if self.depth < SMIDGEN:
            return 0.0
        return self.total_load / self.depth


@dataclass(frozen=True)
class FuelModelRecord:
    """Catalog values for one fuel model, in base units (lb/ft^2, ft, fraction)."""
    number: int
    code: str
    name: str
    fuel_bed_depth: float
    moisture_of_extinction_dead: float
    heat_of_combustion_dead: float
    heat_of_combustion_live: float
    fuel_load_one_hour: float
    fuel_load_ten_hour: float
    fuel_load_hundred_hour: float
    fuel_load_live_herbaceous: float
    fuel_load_live_woody: float
    savr_one_hour: float
    savr_live_herbaceous: float
    savr_live_woody: float
    is_dynamic: bool = False

    @property
    def is_all_fuel_load_zero(self) -> bool:
        total = (self.fuel_load_one_hour + self.fuel_load_ten_hour + self.fuel_load_hundred_hour
                 + self.fuel_load_live_herbaceous + self.fuel_load_live_woody)
        return total < SMIDGEN


@dataclass(frozen=True)
class StandardFuel:
    """Fuel selection that runs a single catalog fuel model."""
    fuel_model_number: int


class FuelModelCatalog:
    """Lookup of fuel model records by fuel model number.

    The standard catalog is read once from the packaged JSON file and cached
    at class level. A catalog with extra or replacement records can be built
    by passing `records` explicitly.

    Args:
        records (Dict[int, FuelModelRecord], optional): Records to use instead
            of the standard catalog.
    """
    _standard_records = None # class-level cache

    def __init__(self, records: Optional[Dict[int, FuelModelRecord]] = None):
        if records is None:
            records = self.load_fuel_models()

        self._records = dict(records)

    @classmethod
    def load_fuel_models(cls) -> Dict[int, FuelModelRecord]:
        if cls._standard_records is None:
            json_path = os.path.join(os.path.dirname(__file__), "data", "fuel_models.json")
            with open(json_path, "r") as f:
                data = json.load(f)

            cls._standard_records = {
                int(model_id): cls._record_from_json(int(model_id), entry)
                for model_id, entry in data["fuel_models"].items()
            }
            logger.debug("Loaded %d fuel models from %s", len(cls._standard_records), json_path)

        return cls._standard_records

    @staticmethod
    def _record_from_json(number: int, entry: dict) -> FuelModelRecord:
        try:
            w_0 = [tons_acre_to_lb_ft2(w) for w in entry["w_0"]]
            s = entry["s"]

            return FuelModelRecord(
                number=number,
                code=entry["code"],
                name=entry["name"],
                fuel_bed_depth=float(entry["depth"]),
                moisture_of_extinction_dead=entry["mx_dead"] / 100,
                heat_of_combustion_dead=float(entry["heat"][0]),
                heat_of_combustion_live=float(entry["heat"][1]),
                fuel_load_one_hour=w_0[0],
                fuel_load_ten_hour=w_0[1],
                fuel_load_hundred_hour=w_0[2],
                fuel_load_live_herbaceous=w_0[3],
                fuel_load_live_woody=w_0[4],
                savr_one_hour=float(s[0]),
                savr_live_herbaceous=float(s[1]),
                savr_live_woody=float(s[2]),
                is_dynamic=bool(entry["dynamic"]),
            )
        except (KeyError, IndexError, TypeError) as e:
            raise FuelModelError(f"Malformed fuel model entry: {e}", fuel_model_id=number) from e

    def fuel_model_numbers(self) -> Tuple[int, ...]:
        return tuple(sorted(self._records))

    def is_fuel_model_defined(self, fuel_model_number: int) -> bool:
        return fuel_model_number in self._records

    def is_all_fuel_load_zero(self, fuel_model_number: int) -> bool:
        """True if the model has no fuel in any size class, or is not defined."""
        record = self._records.get(fuel_model_number)
        if record is None:
            return True
        return record.is_all_fuel_load_zero

    def is_fuel_model_reserved(self, fuel_model_number: int) -> bool:
        """True for numbers held by the standard and non-burnable models.

        Reserved numbers cannot be reused for custom models. This holds even
        when the catalog replaces the record at that number.
        """
        return (fuel_model_number in self.load_fuel_models()
                or NON_BURNABLE_NUMBERS[0] <= fuel_model_number <= NON_BURNABLE_NUMBERS[1])

    def is_moisture_class_input_needed(self, fuel_model_number: int, moisture_class: MoistureClass) -> bool:
        """True if the model carries load in `moisture_class`; False for undefined models."""
        record = self._records.get(fuel_model_number)
        if record is None:
            return False
        return getattr(record, f"fuel_load_{moisture_class.value}") > 0.0

    def get_fuel_model(self, fuel_model_number: int) -> FuelModelRecord:
        """Get the catalog record for a fuel model.

        Args:
            fuel_model_number (int): Fuel model number.

        Raises:
            FuelModelError: If the fuel model is not defined.

        Returns:
            FuelModelRecord: Catalog values in base units.
        """
        try:
            return self._records[fuel_model_number]
        except KeyError:
            raise FuelModelError("Fuel model is not defined", fuel_model_id=fuel_model_number) from None

    def with_fuel_model(self, record: FuelModelRecord) -> "FuelModelCatalog":
        """Return a new catalog with `record` added or replaced."""
        records = dict(self._records)
        records[record.number] = record
        return FuelModelCatalog(records)

    def get_fuel_code(self, fuel_model_number: int) -> str:
        return self.get_fuel_model(fuel_model_number).code

    def get_fuel_name(self, fuel_model_number: int) -> str:
        return self.get_fuel_model(fuel_model_number).name

    def get_fuel_bed_depth(self, fuel_model_number: int, units: LengthUnits = LengthUnits.FEET) -> float:
        return from_base_units(self.get_fuel_model(fuel_model_number).fuel_bed_depth, units)

    def get_moisture_of_extinction_dead(self, fuel_model_number: int,
                                        units: MoistureUnits = MoistureUnits.FRACTION) -> float:
        return from_base_units(self.get_fuel_model(fuel_model_number).moisture_of_extinction_dead, units)

    def get_heat_of_combustion_dead(self, fuel_model_number: int) -> float:
        return self.get_fuel_model(fuel_model_number).heat_of_combustion_dead

    def get_heat_of_combustion_live(self, fuel_model_number: int) -> float:
        return self.get_fuel_model(fuel_model_number).heat_of_combustion_live

    def get_fuel_load(self, fuel_model_number: int, moisture_class: MoistureClass,
                      units: LoadingUnits = LoadingUnits.POUNDS_PER_SQUARE_FOOT) -> float:
        """Get the catalog load of one size class.

        Args:
            fuel_model_number (int): Fuel model number.
            moisture_class (MoistureClass): Size class to return.
            units (LoadingUnits, optional): Output units. Defaults to lb/ft^2.

        Returns:
            float: Fuel load of the size class.
        """
        record = self.get_fuel_model(fuel_model_number)
        return from_base_units(getattr(record, f"fuel_load_{moisture_class.value}"), units)

    def get_savr(self, fuel_model_number: int, moisture_class: MoistureClass) -> float:
        """Get the SAVR (ft^2/ft^3) of one size class."""
        record = self.get_fuel_model(fuel_model_number)
        if moisture_class == MoistureClass.TEN_HOUR:
            return TEN_HOUR_SAVR
        if moisture_class == MoistureClass.HUNDRED_HOUR:
            return HUNDRED_HOUR_SAVR
        return getattr(record, f"savr_{moisture_class.value}")


def calc_curing_level(live_h_mf: float) -> float:
    """Fraction of the herbaceous load that is cured for dynamic fuel models.

    Fully cured at or below 30% herbaceous moisture and fully green at or
    above 120%, linear in between.

    Args:
        live_h_mf (float): Live herbaceous moisture (fraction).

    Returns:
        float: Cured fraction in [0, 1].
    """
    fraction_green = live_h_mf / 0.9 - 1.0 / 3.0
    T = 1.0 - fraction_green
    T = min(max(T, 0), 1)
    return T

def build_fuel_complex(record: FuelModelRecord, live_herbaceous_moisture: float) -> FuelComplex:
    """Build the fuel bed for a catalog fuel model.

    For dynamic models the cured part of the herbaceous load is moved to a
    dead herbaceous class that keeps the herbaceous SAVR and takes the
    one-hour moisture.

    Args:
        record (FuelModelRecord): Catalog entry.
        live_herbaceous_moisture (float): Live herbaceous moisture (fraction).

    Returns:
        FuelComplex: Fuel bed ready for the surface fire model.
    """
    heat_dead = record.heat_of_combustion_dead
    heat_live = record.heat_of_combustion_live

    herb_load = record.fuel_load_live_herbaceous
    dead_herb_load = 0.0
    if record.is_dynamic and herb_load > SMIDGEN:
        dead_herb_load = herb_load * calc_curing_level(live_herbaceous_moisture)
        herb_load -= dead_herb_load

    dead = (
        FuelParticle(record.fuel_load_one_hour, record.savr_one_hour, heat_dead, MoistureClass.ONE_HOUR),
        FuelParticle(record.fuel_load_ten_hour, TEN_HOUR_SAVR, heat_dead, MoistureClass.TEN_HOUR),
        FuelParticle(record.fuel_load_hundred_hour, HUNDRED_HOUR_SAVR, heat_dead, MoistureClass.HUNDRED_HOUR),
        FuelParticle(dead_herb_load, record.savr_live_herbaceous, heat_dead, MoistureClass.ONE_HOUR),
    )
    live = (
        FuelParticle(herb_load, record.savr_live_herbaceous, heat_live, MoistureClass.LIVE_HERBACEOUS),
        FuelParticle(record.fuel_load_live_woody, record.savr_live_woody, heat_live, MoistureClass.LIVE_WOODY),
    )

    return FuelComplex(dead=dead, live=live, depth=record.fuel_bed_depth,
                       dead_moisture_of_extinction=record.moisture_of_extinction_dead,
                       name=record.code, number=record.number)
