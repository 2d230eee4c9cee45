"""Spread rate through a patchwork of two fuel models.

Both fuel models are run independently with the same scenario and their
spread rates are combined by the coverage fraction of the first model.

Methods:
    - ARITHMETIC: coverage-weighted mean of the spread rates.
    - HARMONIC: coverage-weighted harmonic mean, i.e. the rate across a
      one-dimensional strip where the fire must burn through each fuel in turn.
    - TWO_DIMENSIONAL: expected spread rate across a random two-fuel landscape
      where the fire takes the fastest path (Finney 2003).

References:
    - Finney, M. A. (2003). Calculation of fire spread rates across random
      landscapes. International Journal of Wildland Fire, 12(2), 167-174.
"""
import itertools
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from firecalc.exceptions import ConfigurationError, ValidationError
from firecalc.models.fire_size import calc_fire_ellipse
from firecalc.models.fuel_models import FuelModelCatalog
from firecalc.models.rothermel import (
    SurfaceFireResult,
    calc_flame_len,
    calc_fuel_model_surface_fire,
)
from firecalc.utilities.data_classes import EnvironmentInputs
from firecalc.utilities.fire_util import SMIDGEN, UtilFuncs

logger = logging.getLogger(__name__)

# Largest landscape (cells) enumerated by the two-dimensional method
MAX_TWO_DIMENSIONAL_CELLS = 16


class TwoFuelModelsMethod(Enum):
    NO_METHOD = 0
    ARITHMETIC = 1
    HARMONIC = 2
    TWO_DIMENSIONAL = 3


@dataclass(frozen=True)
class TwoFuelModels:
    """Fuel selection that combines two catalog fuel models.

    Attributes:
        first_fuel_model (int): Fuel model number of the first fuel.
        second_fuel_model (int): Fuel model number of the second fuel.
        first_fuel_model_coverage (float): Fraction of the area covered by the first fuel.
        method (TwoFuelModelsMethod): How spread rates are combined.
        samples (int): Landscape rows for the two-dimensional method.
        depth (int): Landscape cells in the spread direction for the two-dimensional method.
        laterals (int): Rows a path may shift per cell for the two-dimensional method.
    """
    first_fuel_model: int
    second_fuel_model: int
    first_fuel_model_coverage: float
    method: TwoFuelModelsMethod = TwoFuelModelsMethod.ARITHMETIC
    samples: int = 2
    depth: int = 2
    laterals: int = 0

    def __post_init__(self):
        if not 0 <= self.first_fuel_model_coverage <= 1:
            raise ValidationError("First fuel model coverage must be between 0 and 1",
                                  field="first_fuel_model_coverage", value=self.first_fuel_model_coverage)
        if self.samples < 1 or self.depth < 1 or self.laterals < 0:
            raise ValidationError("Landscape must have at least one row and one cell",
                                  field="samples/depth/laterals",
                                  value=(self.samples, self.depth, self.laterals))


@dataclass(frozen=True)
class TwoFuelModelsResult:
    """Combined surface fire and the independent runs it was built from."""
    surface_fire: SurfaceFireResult
    first: SurfaceFireResult
    second: Optional[SurfaceFireResult]
    first_fuel_model_coverage: float
    method: TwoFuelModelsMethod


def calc_arithmetic_spread_rate(rates: Sequence[float], coverages: Sequence[float]) -> float:
    return float(np.dot(rates, coverages))

def calc_harmonic_spread_rate(rates: Sequence[float], coverages: Sequence[float]) -> float:
    """Coverage-weighted harmonic mean, zero if any fuel does not spread."""
    if any(r <= SMIDGEN for r in rates):
        return 0.0

    return float(1.0 / sum(c / r for r, c in zip(rates, coverages)))

def calc_lateral_rate_factor(eccentricity: float, offset: int) -> float:
    """Spread rate factor for a path that shifts `offset` rows per cell."""
    if offset == 0:
        return 1.0

    return float((1.0 - eccentricity) / (1.0 - eccentricity * np.cos(np.arctan(offset))))

def calc_minimum_travel_time(grid: np.ndarray, eccentricity: float, laterals: int) -> float:
    """Shortest time to cross a landscape of unit cells from the first column to the last.

    Args:
        grid (np.ndarray): Spread rate of each cell, shape (samples, depth) (ft/min).
        eccentricity (float): Fire ellipse eccentricity used to slow lateral paths.
        laterals (int): Largest row shift allowed between adjacent columns.

    Returns:
        float: Travel time in minutes per unit cell length, inf if no path spreads.
    """
    samples, depth = grid.shape

    burns = grid > SMIDGEN
    cell_time = np.where(burns, 1.0 / np.where(burns, grid, 1.0), np.inf)

    t = cell_time[:, 0].copy()
    for j in range(1, depth):
        t_next = np.full(samples, np.inf)
        for r in range(samples):
            for k in range(-laterals, laterals + 1):
                r_prev = r + k
                if not 0 <= r_prev < samples or np.isinf(t[r_prev]):
                    continue

                factor = calc_lateral_rate_factor(eccentricity, abs(k))
                step = np.sqrt(1.0 + k * k) * cell_time[r, j] / factor
                t_next[r] = min(t_next[r], t[r_prev] + step)
        t = t_next

    return float(np.min(t))

def calc_two_dimensional_spread_rate(rates: Sequence[float], first_coverage: float, eccentricity: float = 0.0,
                                     samples: int = 2, depth: int = 2, laterals: int = 0) -> float:
    """Expected spread rate across a random landscape of two fuels.

    Every cell independently holds the first fuel with probability
    `first_coverage`. All landscapes are enumerated; for each, the fire
    takes the fastest path across `depth` cells and its rate is
    depth / travel time. The result is the probability-weighted mean.

    Args:
        rates (Sequence[float]): Spread rates of the first and second fuel (ft/min).
        first_coverage (float): Probability of a cell holding the first fuel.
        eccentricity (float, optional): Eccentricity for lateral paths. Defaults to 0.
        samples (int, optional): Landscape rows. Defaults to 2.
        depth (int, optional): Cells in the spread direction. Defaults to 2.
        laterals (int, optional): Largest row shift between columns. Defaults to 0.

    Raises:
        ConfigurationError: If the landscape has too many cells to enumerate.

    Returns:
        float: Expected spread rate (ft/min).
    """
    n_cells = samples * depth
    if n_cells > MAX_TWO_DIMENSIONAL_CELLS:
        raise ConfigurationError(f"Two-dimensional landscape of {n_cells} cells exceeds "
                                 f"{MAX_TWO_DIMENSIONAL_CELLS}", parameter="samples/depth")

    rates = np.asarray(rates, dtype=float)
    p = (first_coverage, 1.0 - first_coverage)

    expected = 0.0
    for cells in itertools.product((0, 1), repeat=n_cells):
        prob = float(np.prod([p[c] for c in cells]))
        if prob <= 0.0:
            continue

        grid = rates[np.array(cells)].reshape(samples, depth)
        t_min = calc_minimum_travel_time(grid, eccentricity, laterals)
        if np.isfinite(t_min) and t_min > SMIDGEN:
            expected += prob * depth / t_min

    return float(expected)

def combine_spread_rates(method: TwoFuelModelsMethod, rates: Sequence[float], first_coverage: float,
                         eccentricity: float = 0.0, samples: int = 2, depth: int = 2,
                         laterals: int = 0) -> float:
    coverages = (first_coverage, 1.0 - first_coverage)

    if method == TwoFuelModelsMethod.ARITHMETIC:
        return calc_arithmetic_spread_rate(rates, coverages)
    if method == TwoFuelModelsMethod.HARMONIC:
        return calc_harmonic_spread_rate(rates, coverages)
    if method == TwoFuelModelsMethod.TWO_DIMENSIONAL:
        return calc_two_dimensional_spread_rate(rates, first_coverage, eccentricity, samples, depth, laterals)

    return float(rates[0])

def calc_two_fuel_models(selection: TwoFuelModels, env: EnvironmentInputs,
                         catalog: Optional[FuelModelCatalog] = None,
                         direction_of_interest: Optional[float] = None) -> TwoFuelModelsResult:
    """Run both fuel models and combine them into one surface fire.

    Coverage of 1 (or 0) returns the first (or second) model's result
    unchanged. NO_METHOD returns the first model's result and skips the
    second. Otherwise the combined result takes its direction and ellipse
    shape from the faster model and the larger of the two intensities.

    Args:
        selection (TwoFuelModels): Fuel models, coverage and method.
        env (EnvironmentInputs): Scenario inputs shared by both runs.
        catalog (FuelModelCatalog, optional): Catalog to look the models up in.
        direction_of_interest (float, optional): Azimuth to report spread rate for.

    Returns:
        TwoFuelModelsResult: Combined surface fire and both constituent runs.
    """
    if catalog is None:
        catalog = FuelModelCatalog()

    coverage = selection.first_fuel_model_coverage
    method = selection.method

    first = calc_fuel_model_surface_fire(selection.first_fuel_model, env, catalog, direction_of_interest)

    if method == TwoFuelModelsMethod.NO_METHOD:
        return TwoFuelModelsResult(first, first, None, coverage, method)

    second = calc_fuel_model_surface_fire(selection.second_fuel_model, env, catalog, direction_of_interest)

    if coverage >= 1.0:
        return TwoFuelModelsResult(first, first, second, coverage, method)
    if coverage <= 0.0:
        return TwoFuelModelsResult(second, first, second, coverage, method)

    fast = first if first.spread_rate >= second.spread_rate else second
    e = fast.eccentricity
    landscape = dict(samples=selection.samples, depth=selection.depth, laterals=selection.laterals)

    spread_rate = combine_spread_rates(method, (first.spread_rate, second.spread_rate), coverage, e, **landscape)
    logger.debug("Two fuel models %d/%d (%s, coverage %.2f): %.3f and %.3f ft/min -> %.3f ft/min",
                 selection.first_fuel_model, selection.second_fuel_model, method.name, coverage,
                 first.spread_rate, second.spread_rate, spread_rate)

    ellipse = calc_fire_ellipse(spread_rate, fast.effective_wind_speed, fast.direction_of_max_spread)

    combined = replace(
        fast,
        fuel_name=f"{first.fuel_name}/{second.fuel_name}",
        spread_rate=spread_rate,
        ellipse=ellipse,
        fireline_intensity=max(first.fireline_intensity, second.fireline_intensity),
        flame_length=max(first.flame_length, second.flame_length),
        reaction_intensity=max(first.reaction_intensity, second.reaction_intensity),
        heat_per_unit_area=max(first.heat_per_unit_area, second.heat_per_unit_area),
    )

    if direction_of_interest is not None:
        doi_rate = combine_spread_rates(
            method,
            (first.spread_rate_in_direction_of_interest, second.spread_rate_in_direction_of_interest),
            coverage, e, **landscape)
        doi_intensity = max(first.fireline_intensity_in_direction_of_interest,
                            second.fireline_intensity_in_direction_of_interest)
        combined = replace(
            combined,
            direction_of_interest=UtilFuncs.normalize_direction(direction_of_interest),
            spread_rate_in_direction_of_interest=doi_rate,
            fireline_intensity_in_direction_of_interest=doi_intensity,
            flame_length_in_direction_of_interest=calc_flame_len(doi_intensity),
        )

    return TwoFuelModelsResult(combined, first, second, coverage, method)
