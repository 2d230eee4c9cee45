"""Rothermel (1972) surface fire spread model.

The model runs as a chain of pure stages. Each stage takes the results of
earlier stages as arguments:

    fuel bed intermediates -> reaction intensity, heat sink, propagating flux
    -> no-wind no-slope spread rate -> wind and slope factors
    -> head fire spread rate and direction -> fire ellipse and intensities

:func:`calc_surface_fire` runs the full chain for one fuel bed and scenario
and returns an immutable :class:`SurfaceFireResult`.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire spread
      in wildland fuels. USDA Forest Service Research Paper INT-115.
    - Albini, F. A. (1976). Estimating wildfire behavior and effects.
      USDA Forest Service General Technical Report INT-30.
    - Andrews, P. L. (2018). The Rothermel surface fire spread model and
      associated developments. USDA Forest Service RMRS-GTR-371.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from firecalc.models.fire_size import FireEllipse, calc_fire_ellipse
from firecalc.models.fuel_models import FuelComplex, FuelModelCatalog, FuelParticle, build_fuel_complex
from firecalc.models.wind import WindResult, calc_midflame_wind_speed
from firecalc.utilities.data_classes import (
    EnvironmentInputs,
    FuelMoisture,
    SurfaceFireSpreadDirectionMode,
    WindAndSpreadOrientationMode,
)
from firecalc.utilities.fire_util import SMIDGEN, UtilFuncs
from firecalc.utilities.unit_conversions import ft_min_to_mph

logger = logging.getLogger(__name__)

# SAVR boundaries of the size classes used to weight net fuel loads
SIZE_CLASS_SAVR_BOUNDARIES = np.array([1200.0, 192.0, 96.0, 48.0, 16.0])


@dataclass(frozen=True)
class FuelbedIntermediates:
    """Fuel bed properties derived from a fuel complex and its moistures.

    Values indexed by life category are (dead, live) pairs.
    """
    sav_ratio: float  # ft^2/ft^3, characteristic
    sav_ratio_dead: float
    sav_ratio_live: float
    f_dead: float  # surface area fraction
    f_live: float
    bulk_density: float  # lb/ft^3
    packing_ratio: float
    optimum_packing_ratio: float
    relative_packing_ratio: float
    net_load_dead: float  # lb/ft^2
    net_load_live: float
    moisture_dead: float  # fraction, surface area weighted
    moisture_live: float
    heat_dead: float  # BTU/lb
    heat_live: float
    effective_silica_dead: float
    effective_silica_live: float
    moisture_of_extinction_dead: float
    moisture_of_extinction_live: float
    heat_sink: float  # BTU/ft^3
    has_live_fuel: bool


@dataclass(frozen=True)
class SurfaceFireResult:
    """Outputs of a surface fire calculation, in base units.

    Spread rates are ft/min, intensities BTU/ft-s, reaction intensity
    BTU/ft^2-min, heat per unit area BTU/ft^2, lengths ft and directions
    degrees in the scenario's reference frame.
    """
    fuel_name: str
    reaction_intensity: float
    reaction_intensity_dead: float
    reaction_intensity_live: float
    propagating_flux_ratio: float
    heat_sink: float
    no_wind_no_slope_spread_rate: float
    wind_factor: float
    slope_factor: float
    spread_rate: float
    direction_of_max_spread: float
    effective_wind_speed: float
    wind_speed_limit: float
    is_wind_limit_exceeded: bool
    fireline_intensity: float
    heat_per_unit_area: float
    flame_length: float
    residence_time: float
    scorch_height: float
    fuel_bed_depth: float
    wind: WindResult
    ellipse: FireEllipse
    fuelbed: Optional[FuelbedIntermediates] = None
    direction_of_interest: Optional[float] = None
    spread_rate_in_direction_of_interest: Optional[float] = None
    fireline_intensity_in_direction_of_interest: Optional[float] = None
    flame_length_in_direction_of_interest: Optional[float] = None

    @property
    def midflame_wind_speed(self) -> float:
        return self.wind.midflame_wind_speed

    @property
    def backing_spread_rate(self) -> float:
        return self.ellipse.backing_spread_rate

    @property
    def flanking_spread_rate(self) -> float:
        return self.ellipse.flanking_spread_rate

    @property
    def elliptical_a(self) -> float:
        return self.ellipse.elliptical_a

    @property
    def elliptical_b(self) -> float:
        return self.ellipse.elliptical_b

    @property
    def elliptical_c(self) -> float:
        return self.ellipse.elliptical_c

    @property
    def length_to_width_ratio(self) -> float:
        return self.ellipse.length_to_width_ratio

    @property
    def eccentricity(self) -> float:
        return self.ellipse.eccentricity

    @property
    def heading_to_backing_ratio(self) -> float:
        return self.ellipse.heading_to_backing_ratio

    @property
    def characteristic_sav_ratio(self) -> float:
        return self.fuelbed.sav_ratio if self.fuelbed is not None else 0.0

    @property
    def backing_fireline_intensity(self) -> float:
        return calc_fireline_intensity(self.backing_spread_rate, self.heat_per_unit_area)

    @property
    def flanking_fireline_intensity(self) -> float:
        return calc_fireline_intensity(self.flanking_spread_rate, self.heat_per_unit_area)

    @property
    def backing_flame_length(self) -> float:
        return calc_flame_len(self.backing_fireline_intensity)

    @property
    def flanking_flame_length(self) -> float:
        return calc_flame_len(self.flanking_fireline_intensity)


def calc_surface_fire(fuel: FuelComplex, env: EnvironmentInputs,
                      direction_of_interest: Optional[float] = None) -> SurfaceFireResult:
    """Run the Rothermel model for one fuel bed and scenario.

    An empty fuel bed (no load in any size class) returns the zero result
    without evaluating the spread equations.

    Args:
        fuel (FuelComplex): Fuel bed.
        env (EnvironmentInputs): Moisture, wind, slope and canopy inputs.
        direction_of_interest (float, optional): Azimuth (deg, same reference
            frame as the wind direction) to report spread rate and intensity for.

    Returns:
        SurfaceFireResult: Surface fire behavior outputs.
    """
    wind = calc_midflame_wind_speed(env, fuel.depth)

    if fuel.is_all_load_zero or fuel.depth < SMIDGEN:
        logger.debug("Fuel bed %s has no fuel, skipping spread calculation", fuel.name)
        return zero_surface_fire(env, fuel.name, fuel.depth, wind, direction_of_interest)

    fb = calc_fuelbed_intermediates(fuel, env.moisture)

    I_r, I_r_dead, I_r_live = calc_I_r(fb)
    xi = calc_flux_ratio(fb.sav_ratio, fb.packing_ratio)
    R_0 = calc_r_0_from_parts(I_r, xi, fb.heat_sink)

    phi_w = calc_wind_factor(fb.sav_ratio, fb.relative_packing_ratio, wind.midflame_wind_speed)
    phi_s = calc_slope_factor(fb.packing_ratio, env.slope)

    upslope = UtilFuncs.normalize_direction(env.aspect + 180.0)
    rel_wind_dir = env.wind_direction
    if env.orientation_mode == WindAndSpreadOrientationMode.RELATIVE_TO_NORTH:
        rel_wind_dir = env.wind_direction - upslope

    R_h, alpha = calc_wind_slope_vec(R_0, phi_w, phi_s, rel_wind_dir)

    phi_e = calc_effective_wind_factor(R_h, R_0)
    u_e = calc_effective_wind_speed(phi_e, fb.sav_ratio, fb.relative_packing_ratio)

    wind_limit = 0.9 * I_r # ft/min
    is_limit_exceeded = u_e > wind_limit
    if is_limit_exceeded and env.apply_wind_limit:
        logger.debug("Effective wind %.1f ft/min exceeds limit %.1f ft/min, capping", u_e, wind_limit)
        u_e = wind_limit
        phi_e = calc_wind_factor(fb.sav_ratio, fb.relative_packing_ratio, wind_limit)
        R_h = R_0 * (1 + phi_e)

    if env.orientation_mode == WindAndSpreadOrientationMode.RELATIVE_TO_NORTH:
        alpha = UtilFuncs.normalize_direction(alpha + upslope)

    t_r = calc_residence_time(fb.sav_ratio)
    H_a = I_r * t_r
    I_b = calc_fireline_intensity(R_h, H_a)

    ellipse = calc_fire_ellipse(R_h, u_e, alpha)

    result = SurfaceFireResult(
        fuel_name=fuel.name,
        reaction_intensity=I_r,
        reaction_intensity_dead=I_r_dead,
        reaction_intensity_live=I_r_live,
        propagating_flux_ratio=xi,
        heat_sink=fb.heat_sink,
        no_wind_no_slope_spread_rate=R_0,
        wind_factor=phi_w,
        slope_factor=phi_s,
        spread_rate=R_h,
        direction_of_max_spread=alpha,
        effective_wind_speed=u_e,
        wind_speed_limit=wind_limit,
        is_wind_limit_exceeded=is_limit_exceeded,
        fireline_intensity=I_b,
        heat_per_unit_area=H_a,
        flame_length=calc_flame_len(I_b),
        residence_time=t_r,
        scorch_height=calc_scorch_height(I_b, wind.midflame_wind_speed, env.air_temperature),
        fuel_bed_depth=fuel.depth,
        wind=wind,
        ellipse=ellipse,
        fuelbed=fb,
    )

    if direction_of_interest is not None:
        result = with_direction_of_interest(result, direction_of_interest, env.spread_direction_mode)

    return result

def calc_fuel_model_surface_fire(fuel_model_number: int, env: EnvironmentInputs,
                                 catalog: Optional[FuelModelCatalog] = None,
                                 direction_of_interest: Optional[float] = None) -> SurfaceFireResult:
    """Run the Rothermel model for a catalog fuel model.

    Undefined fuel models and models with no load in any size class return
    the zero result without building a fuel bed.

    Args:
        fuel_model_number (int): Fuel model number.
        env (EnvironmentInputs): Scenario inputs.
        catalog (FuelModelCatalog, optional): Catalog to look the model up in.
            Defaults to the standard catalog.
        direction_of_interest (float, optional): Azimuth to report spread rate for.

    Returns:
        SurfaceFireResult: Surface fire behavior outputs.
    """
    if catalog is None:
        catalog = FuelModelCatalog()

    if not catalog.is_fuel_model_defined(fuel_model_number):
        logger.debug("Fuel model %s is not defined, returning zero surface fire", fuel_model_number)
        return zero_surface_fire(env, direction_of_interest=direction_of_interest)

    record = catalog.get_fuel_model(fuel_model_number)
    if catalog.is_all_fuel_load_zero(fuel_model_number):
        logger.debug("Fuel model %s has no fuel load, returning zero surface fire", fuel_model_number)
        return zero_surface_fire(env, record.code, record.fuel_bed_depth,
                                 direction_of_interest=direction_of_interest)

    fuel = build_fuel_complex(record, env.moisture.live_herbaceous)
    return calc_surface_fire(fuel, env, direction_of_interest)

def zero_surface_fire(env: EnvironmentInputs, fuel_name: str = "", fuel_bed_depth: float = 0.0,
                      wind: Optional[WindResult] = None,
                      direction_of_interest: Optional[float] = None) -> SurfaceFireResult:
    """Result for a fuel bed that cannot burn; wind outputs are still reported."""
    if wind is None:
        wind = calc_midflame_wind_speed(env, fuel_bed_depth)

    ellipse = calc_fire_ellipse(0.0, 0.0, 0.0)

    return SurfaceFireResult(
        fuel_name=fuel_name,
        reaction_intensity=0.0,
        reaction_intensity_dead=0.0,
        reaction_intensity_live=0.0,
        propagating_flux_ratio=0.0,
        heat_sink=0.0,
        no_wind_no_slope_spread_rate=0.0,
        wind_factor=0.0,
        slope_factor=0.0,
        spread_rate=0.0,
        direction_of_max_spread=0.0,
        effective_wind_speed=0.0,
        wind_speed_limit=0.0,
        is_wind_limit_exceeded=False,
        fireline_intensity=0.0,
        heat_per_unit_area=0.0,
        flame_length=0.0,
        residence_time=0.0,
        scorch_height=0.0,
        fuel_bed_depth=fuel_bed_depth,
        wind=wind,
        ellipse=ellipse,
        fuelbed=None,
        direction_of_interest=direction_of_interest,
        spread_rate_in_direction_of_interest=None if direction_of_interest is None else 0.0,
        fireline_intensity_in_direction_of_interest=None if direction_of_interest is None else 0.0,
        flame_length_in_direction_of_interest=None if direction_of_interest is None else 0.0,
    )

def with_direction_of_interest(result: SurfaceFireResult, direction_of_interest: float,
                               spread_direction_mode: SurfaceFireSpreadDirectionMode
                               = SurfaceFireSpreadDirectionMode.FROM_IGNITION_POINT) -> SurfaceFireResult:
    """Copy of `result` with spread rate and intensity along `direction_of_interest`.

    FROM_IGNITION_POINT measures the rate along the ray from the ignition
    point. FROM_PERIMETER measures it normal to the perimeter where the
    outward normal points along `direction_of_interest`.
    """
    direction_of_interest = UtilFuncs.normalize_direction(direction_of_interest)
    if spread_direction_mode == SurfaceFireSpreadDirectionMode.FROM_PERIMETER:
        R_doi = result.ellipse.spread_rate_at_perimeter_normal(direction_of_interest)
    else:
        R_doi = result.ellipse.spread_rate_at_vector(direction_of_interest)
    I_doi = calc_fireline_intensity(R_doi, result.heat_per_unit_area)

    return replace(result,
                   direction_of_interest=direction_of_interest,
                   spread_rate_in_direction_of_interest=R_doi,
                   fireline_intensity_in_direction_of_interest=I_doi,
                   flame_length_in_direction_of_interest=calc_flame_len(I_doi))

def calc_r_0(fuel: FuelComplex, moisture: FuelMoisture) -> Tuple[float, float]:
    """Compute the no-wind no-slope spread rate and reaction intensity.

    Args:
        fuel (FuelComplex): Fuel bed, must carry some fuel load.
        moisture (FuelMoisture): Fuel moistures.

    Returns:
        Tuple[float, float]: R_0 (ft/min), I_r (BTU/ft^2-min)
    """
    fb = calc_fuelbed_intermediates(fuel, moisture)
    I_r, _, _ = calc_I_r(fb)
    xi = calc_flux_ratio(fb.sav_ratio, fb.packing_ratio)

    return calc_r_0_from_parts(I_r, xi, fb.heat_sink), I_r

def calc_r_0_from_parts(I_r: float, xi: float, heat_sink: float) -> float:
    if heat_sink <= SMIDGEN:
        return 0.0

    return I_r * xi / heat_sink # ft/min

def _life_arrays(particles: Tuple[FuelParticle, ...], moisture: FuelMoisture) -> dict:
    return {
        "load": np.array([p.load for p in particles], dtype=float),
        "savr": np.array([p.savr for p in particles], dtype=float),
        "density": np.array([p.density for p in particles], dtype=float),
        "heat": np.array([p.heat_of_combustion for p in particles], dtype=float),
        "s_T": np.array([p.total_silica for p in particles], dtype=float),
        "s_e": np.array([p.effective_silica for p in particles], dtype=float),
        "m_f": np.array([p.moisture_from(moisture) for p in particles], dtype=float),
    }

def _safe_divide(num: np.ndarray, den) -> np.ndarray:
    den = np.broadcast_to(np.asarray(den, dtype=float), np.shape(num))
    out = np.zeros_like(num, dtype=float)
    np.divide(num, den, out=out, where=den > SMIDGEN)
    return out

def calc_size_class_weights(savr: np.ndarray, f_ij: np.ndarray) -> np.ndarray:
    """Weights for net fuel loads, by SAVR size class.

    Particles falling in the same size class share the summed surface area
    fraction of that class.

    Args:
        savr (np.ndarray): Particle SAVR values (ft^2/ft^3).
        f_ij (np.ndarray): Particle surface area fractions within the life category.

    Returns:
        np.ndarray: Weight for each particle.
    """
    if savr.size == 0:
        return np.zeros(0)

    size_class = np.sum(savr[:, None] < SIZE_CLASS_SAVR_BOUNDARIES[None, :], axis=1)
    summed = np.bincount(size_class, weights=f_ij, minlength=len(SIZE_CLASS_SAVR_BOUNDARIES) + 1)

    return summed[size_class]

def calc_fuelbed_intermediates(fuel: FuelComplex, moisture: FuelMoisture) -> FuelbedIntermediates:
    """Compute the characteristic fuel bed properties used by the spread equations.

    Args:
        fuel (FuelComplex): Fuel bed with some fuel load and positive depth.
        moisture (FuelMoisture): Fuel moistures.

    Returns:
        FuelbedIntermediates: Weighted properties per life category and for the bed.
    """
    dead = _life_arrays(fuel.dead, moisture)
    live = _life_arrays(fuel.live, moisture)

    # Mean surface area per unit fuel bed area
    a_dead = _safe_divide(dead["load"] * dead["savr"], dead["density"])
    a_live = _safe_divide(live["load"] * live["savr"], live["density"])
    A_dead = np.sum(a_dead)
    A_live = np.sum(a_live)
    A_T = A_dead + A_live

    f_ij_dead = _safe_divide(a_dead, A_dead)
    f_ij_live = _safe_divide(a_live, A_live)
    f_dead = A_dead / A_T if A_T > SMIDGEN else 0.0
    f_live = A_live / A_T if A_T > SMIDGEN else 0.0

    g_ij_dead = calc_size_class_weights(dead["savr"], f_ij_dead)
    g_ij_live = calc_size_class_weights(live["savr"], f_ij_live)

    w_n_dead = float(np.sum(g_ij_dead * dead["load"] * (1 - dead["s_T"])))
    w_n_live = float(np.sum(g_ij_live * live["load"] * (1 - live["s_T"])))

    sav_dead = float(np.dot(f_ij_dead, dead["savr"]))
    sav_live = float(np.dot(f_ij_live, live["savr"]))
    sav_ratio = f_dead * sav_dead + f_live * sav_live

    rho_b = fuel.bulk_density
    beta = fuel.packing_ratio
    beta_op = calc_optimum_packing_ratio(sav_ratio)
    rat = beta / beta_op if beta_op > SMIDGEN else 0.0

    dead_mx = fuel.dead_moisture_of_extinction
    has_live = fuel.has_live_fuel
    live_mx = calc_live_mx(fuel, moisture) if has_live else dead_mx

    heat_sink = calc_heat_sink(rho_b, (f_dead, f_live), (f_ij_dead, f_ij_live),
                               (dead["savr"], live["savr"]), (dead["m_f"], live["m_f"]))

    return FuelbedIntermediates(
        sav_ratio=sav_ratio,
        sav_ratio_dead=sav_dead,
        sav_ratio_live=sav_live,
        f_dead=f_dead,
        f_live=f_live,
        bulk_density=rho_b,
        packing_ratio=beta,
        optimum_packing_ratio=beta_op,
        relative_packing_ratio=rat,
        net_load_dead=w_n_dead,
        net_load_live=w_n_live,
        moisture_dead=float(np.dot(f_ij_dead, dead["m_f"])),
        moisture_live=float(np.dot(f_ij_live, live["m_f"])),
        heat_dead=float(np.dot(f_ij_dead, dead["heat"])),
        heat_live=float(np.dot(f_ij_live, live["heat"])),
        effective_silica_dead=float(np.dot(f_ij_dead, dead["s_e"])),
        effective_silica_live=float(np.dot(f_ij_live, live["s_e"])),
        moisture_of_extinction_dead=dead_mx,
        moisture_of_extinction_live=live_mx,
        heat_sink=heat_sink,
        has_live_fuel=has_live,
    )

def calc_optimum_packing_ratio(sav_ratio: float) -> float:
    if sav_ratio <= SMIDGEN:
        return 0.0
    return 3.348 * sav_ratio ** -0.8189

def calc_live_mx(fuel: FuelComplex, moisture: FuelMoisture) -> float:
    """Live fuel moisture of extinction (Albini 1976).

    Based on the ratio of fine dead to fine live fuel load and the
    weighted fine dead fuel moisture. Never lower than the dead fuel
    moisture of extinction.

    Args:
        fuel (FuelComplex): Fuel bed.
        moisture (FuelMoisture): Fuel moistures.

    Returns:
        float: Live fuel moisture of extinction (fraction).
    """
    dead_mx = fuel.dead_moisture_of_extinction

    fine_dead = 0.0
    fine_dead_moisture = 0.0
    for p in fuel.dead:
        if p.savr > SMIDGEN:
            w = p.load * np.exp(-138 / p.savr)
            fine_dead += w
            fine_dead_moisture += w * p.moisture_from(moisture)

    fine_live = 0.0
    for p in fuel.live:
        if p.savr > SMIDGEN:
            fine_live += p.load * np.exp(-500 / p.savr)

    W = fine_dead / fine_live if fine_live > SMIDGEN else 0.0
    m_f_dead = fine_dead_moisture / fine_dead if fine_dead > SMIDGEN else 0.0

    if dead_mx <= SMIDGEN:
        return dead_mx

    live_mx = 2.9 * W * (1 - m_f_dead / dead_mx) - 0.226

    return float(max(live_mx, dead_mx))

def calc_heat_sink(rho_b: float, f_i: Tuple[float, float], f_ij: Tuple[np.ndarray, np.ndarray],
                   savr: Tuple[np.ndarray, np.ndarray], m_f: Tuple[np.ndarray, np.ndarray]) -> float:
    """Heat required to bring a unit volume of the fuel bed to ignition.

    Args:
        rho_b (float): Bulk density (lb/ft^3).
        f_i (Tuple[float, float]): Dead and live surface area fractions.
        f_ij (Tuple[np.ndarray, np.ndarray]): Particle surface area fractions per life category.
        savr (Tuple[np.ndarray, np.ndarray]): Particle SAVR per life category.
        m_f (Tuple[np.ndarray, np.ndarray]): Particle moistures per life category.

    Returns:
        float: Heat sink (BTU/ft^3)
    """
    total = 0.0
    for i in range(2):
        s = savr[i]
        eps = np.zeros_like(s)
        np.exp(-138 / np.where(s > SMIDGEN, s, 1.0), out=eps, where=s > SMIDGEN)
        q_ig = 250 + 1116 * m_f[i] # BTU/lb
        total += f_i[i] * np.sum(f_ij[i] * eps * q_ig)

    return float(rho_b * total)

def calc_I_r(fb: FuelbedIntermediates) -> Tuple[float, float, float]:
    """Compute reaction intensity.

    Args:
        fb (FuelbedIntermediates): Fuel bed properties.

    Returns:
        Tuple[float, float, float]: Total, dead and live reaction intensity (BTU/ft^2-min)
    """
    sigma = fb.sav_ratio
    if sigma <= SMIDGEN:
        return 0.0, 0.0, 0.0

    A = 133 * sigma ** -0.7913
    sigma_15 = sigma ** 1.5
    gamma_max = sigma_15 / (495 + 0.0594 * sigma_15)
    rat = fb.relative_packing_ratio
    gamma = gamma_max * (rat ** A) * np.exp(A * (1 - rat)) # 1/min

    eta_m_dead = calc_moisture_damping(fb.moisture_dead, fb.moisture_of_extinction_dead)
    eta_s_dead = calc_mineral_damping(fb.effective_silica_dead)
    I_r_dead = gamma * fb.net_load_dead * fb.heat_dead * eta_m_dead * eta_s_dead

    I_r_live = 0.0
    if fb.has_live_fuel:
        eta_m_live = calc_moisture_damping(fb.moisture_live, fb.moisture_of_extinction_live)
        eta_s_live = calc_mineral_damping(fb.effective_silica_live)
        I_r_live = gamma * fb.net_load_live * fb.heat_live * eta_m_live * eta_s_live

    return float(I_r_dead + I_r_live), float(I_r_dead), float(I_r_live)

def calc_moisture_damping(m_f: float, m_x: float) -> float:
    if m_x <= SMIDGEN:
        return 0.0

    r_m = m_f / m_x
    if r_m >= 1:
        return 0.0

    eta_m = 1 - 2.59 * r_m + 5.11 * r_m**2 - 3.52 * r_m**3
    return float(min(max(0, eta_m), 1))

def calc_mineral_damping(s_e: float = 0.010) -> float:
    if s_e <= SMIDGEN:
        return 1.0

    eta_s = 0.174 * s_e ** -0.19
    return float(min(eta_s, 1.0))

def calc_flux_ratio(sav_ratio: float, packing_ratio: float) -> float:
    """Propagating flux ratio, the fraction of reaction intensity that heats adjacent fuel."""
    return float(np.exp((0.792 + 0.681 * np.sqrt(sav_ratio)) * (packing_ratio + 0.1))
                 / (192 + 0.2595 * sav_ratio))

def calc_residence_time(sav_ratio: float) -> float:
    if sav_ratio <= SMIDGEN:
        return 0.0
    return 384 / sav_ratio # min

def calc_wind_coefficients(sav_ratio: float) -> Tuple[float, float, float]:
    """Wind factor coefficients C, B and E for a characteristic SAVR."""
    C = 7.47 * np.exp(-0.133 * sav_ratio ** 0.55)
    B = 0.02526 * sav_ratio ** 0.54
    E = 0.715 * np.exp(-3.59e-4 * sav_ratio)
    return float(C), float(B), float(E)

def calc_wind_factor(sav_ratio: float, rel_packing_ratio: float, wind_speed: float) -> float:
    """Compute the wind factor phi_w.

    Args:
        sav_ratio (float): Characteristic SAVR (ft^2/ft^3).
        rel_packing_ratio (float): Packing ratio relative to optimum.
        wind_speed (float): Midflame wind speed (ft/min).

    Returns:
        float: Dimensionless wind factor.
    """
    if wind_speed <= SMIDGEN or rel_packing_ratio <= SMIDGEN:
        return 0.0

    C, B, E = calc_wind_coefficients(sav_ratio)
    return float(C * wind_speed ** B * rel_packing_ratio ** -E)

def calc_slope_factor(packing_ratio: float, slope_deg: float) -> float:
    """Compute the slope factor phi_s.

    Args:
        packing_ratio (float): Fuel bed packing ratio.
        slope_deg (float): Slope steepness (degrees).

    Returns:
        float: Dimensionless slope factor.
    """
    if packing_ratio <= SMIDGEN:
        return 0.0

    tan_phi = np.tan(np.deg2rad(slope_deg))
    return float(5.275 * packing_ratio ** -0.3 * tan_phi ** 2)

def calc_wind_slope_vec(R_0: float, phi_w: float, phi_s: float, angle: float) -> Tuple[float, float]:
    """Combine wind and slope as vectors into the head fire spread rate.

    Args:
        R_0 (float): No-wind no-slope spread rate (ft/min).
        phi_w (float): Wind factor.
        phi_s (float): Slope factor.
        angle (float): Wind direction clockwise from upslope (deg).

    Returns:
        Tuple[float, float]: Head fire spread rate (ft/min) and direction of max
            spread clockwise from upslope (deg).
    """
    d_s = R_0 * phi_s # slope rate
    d_w = R_0 * phi_w # wind rate

    angle_rad = np.deg2rad(angle)
    x = d_s + d_w * np.cos(angle_rad)
    y = d_w * np.sin(angle_rad)
    D_v = np.sqrt(x**2 + y**2)

    R_h = R_0 + D_v

    alpha = np.rad2deg(np.arctan2(y, x))
    if alpha < -1e-20:
        alpha += 360

    if abs(alpha) < 0.5:
        alpha = 0.0

    return float(R_h), float(alpha)

def calc_effective_wind_factor(R_h: float, R_0: float) -> float:
    if R_0 <= SMIDGEN:
        return 0.0
    return R_h / R_0 - 1

def calc_effective_wind_speed(phi_e: float, sav_ratio: float, rel_packing_ratio: float) -> float:
    """Wind speed that alone would produce the combined wind-slope factor.

    Args:
        phi_e (float): Effective wind factor.
        sav_ratio (float): Characteristic SAVR (ft^2/ft^3).
        rel_packing_ratio (float): Packing ratio relative to optimum.

    Returns:
        float: Effective wind speed (ft/min)
    """
    if phi_e <= SMIDGEN or rel_packing_ratio <= SMIDGEN:
        return 0.0

    C, B, E = calc_wind_coefficients(sav_ratio)
    return float((phi_e * rel_packing_ratio ** E / C) ** (1 / B))

def calc_fireline_intensity(spread_rate: float, heat_per_unit_area: float) -> float:
    return spread_rate * heat_per_unit_area / 60 # BTU/ft-s

def calc_flame_len(I_b: float) -> float:
    """Flame length from fireline intensity (Byram 1959).

    Args:
        I_b (float): Fireline intensity (BTU/ft-s).

    Returns:
        float: Flame length (ft), zero below 1e-7 BTU/ft-s.
    """
    if I_b < SMIDGEN:
        return 0.0

    return float(0.45 * I_b ** 0.46)

def calc_scorch_height(I_b: float, midflame_wind_speed: float, air_temperature: float) -> float:
    """Crown scorch height (Van Wagner 1973).

    Args:
        I_b (float): Fireline intensity (BTU/ft-s).
        midflame_wind_speed (float): Midflame wind speed (ft/min).
        air_temperature (float): Air temperature (F).

    Returns:
        float: Scorch height (ft)
    """
    if I_b < SMIDGEN:
        return 0.0

    u_mph = ft_min_to_mph(midflame_wind_speed)
    return float((63.0 / (140.0 - air_temperature)) * I_b ** (7 / 6) / np.sqrt(I_b + u_mph ** 3))
