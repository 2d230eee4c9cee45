"""Elliptical fire shape for a point-source surface fire.

The fire is modeled as an ellipse with the ignition point at the rear
focus (Anderson 1983; Alexander 1985). The length-to-width ratio comes from
the effective wind speed, and every other dimension follows from the
forward spread rate and the eccentricity.

All rates are in ft/min; dimensions are rates multiplied by an elapsed
time in minutes.
"""
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from shapely.geometry import Polygon

from firecalc.utilities.fire_util import SMIDGEN, UtilFuncs
from firecalc.utilities.unit_conversions import ft_min_to_mph

MAX_LENGTH_TO_WIDTH_RATIO = 8.0


def calc_length_to_width_ratio(effective_wind_speed: float) -> float:
    """Fire length-to-width ratio from the effective wind speed.

    Args:
        effective_wind_speed (float): Effective wind speed (ft/min).

    Returns:
        float: Length-to-width ratio in [1, 8].
    """
    u_mph = ft_min_to_mph(effective_wind_speed)

    if effective_wind_speed <= SMIDGEN:
        return 1.0

    lwr = 0.936 * np.exp(0.1147 * u_mph) + 0.461 * np.exp(-0.0692 * u_mph) - 0.397
    return float(min(max(lwr, 1.0), MAX_LENGTH_TO_WIDTH_RATIO))

def calc_eccentricity(length_to_width_ratio: float) -> float:
    x = length_to_width_ratio ** 2 - 1.0
    if x <= 0:
        return 0.0

    return float(np.sqrt(x) / length_to_width_ratio)

def calc_spread_rate_at_vector(forward_spread_rate: float, eccentricity: float,
                               direction_of_max_spread: float, direction_of_interest: float) -> float:
    """Spread rate along an azimuth measured from the ignition point.

    Args:
        forward_spread_rate (float): Spread rate in the direction of max spread (ft/min).
        eccentricity (float): Fire ellipse eccentricity.
        direction_of_max_spread (float): Azimuth of max spread (deg).
        direction_of_interest (float): Azimuth to evaluate, in the same reference frame (deg).

    Returns:
        float: Spread rate along `direction_of_interest` (ft/min).
    """
    if forward_spread_rate <= SMIDGEN:
        return 0.0

    beta = UtilFuncs.angle_between(direction_of_max_spread, direction_of_interest)

    # Within a tenth of a degree of the head
    if beta <= 0.1:
        return forward_spread_rate

    cos_beta = np.cos(np.deg2rad(beta))
    return float(forward_spread_rate * (1.0 - eccentricity) / (1.0 - eccentricity * cos_beta))


def calc_spread_rate_normal_to_perimeter(elliptical_a: float, elliptical_b: float, elliptical_c: float,
                                         direction_of_max_spread: float,
                                         direction_of_interest: float) -> float:
    """Spread rate normal to the fire perimeter for an azimuth.

    The perimeter point is the one whose outward normal points along
    `direction_of_interest`. Its parametric angle follows from the normal
    and the ellipse axes, and the rate is the projection of that point's
    displacement onto the normal (Catchpole et al. 1982).

    Args:
        elliptical_a (float): Semi-minor axis rate (ft/min).
        elliptical_b (float): Semi-major axis rate (ft/min).
        elliptical_c (float): Ignition point to center rate (ft/min).
        direction_of_max_spread (float): Azimuth of max spread (deg).
        direction_of_interest (float): Azimuth of the perimeter normal, in the same reference frame (deg).

    Returns:
        float: Spread rate normal to the perimeter (ft/min).
    """
    if elliptical_b <= SMIDGEN:
        return 0.0

    psi = np.deg2rad(UtilFuncs.angle_between(direction_of_max_spread, direction_of_interest))
    theta = np.arctan2(elliptical_a * np.sin(psi), elliptical_b * np.cos(psi))

    cos_t, sin_t = np.cos(theta), np.sin(theta)
    denom = np.sqrt((cos_t / elliptical_b) ** 2 + (sin_t / max(elliptical_a, SMIDGEN)) ** 2)

    return float((elliptical_c * cos_t / elliptical_b + 1.0) / denom)


@dataclass(frozen=True)
class FireEllipse:
    """Spread rates and shape of the fire ellipse.

    `elliptical_b` is the semi-major axis rate, `elliptical_a` the
    semi-minor axis rate and `elliptical_c` the rate of the distance from
    the ignition point to the ellipse center.
    """
    forward_spread_rate: float
    backing_spread_rate: float
    flanking_spread_rate: float
    length_to_width_ratio: float
    eccentricity: float
    elliptical_a: float
    elliptical_b: float
    elliptical_c: float
    direction_of_max_spread: float

    @property
    def heading_to_backing_ratio(self) -> float:
        if self.backing_spread_rate <= SMIDGEN:
            return 0.0
        return self.forward_spread_rate / self.backing_spread_rate

    def spread_rate_at_vector(self, direction_of_interest: float) -> float:
        return calc_spread_rate_at_vector(self.forward_spread_rate, self.eccentricity,
                                          self.direction_of_max_spread, direction_of_interest)

    def spread_rate_at_perimeter_normal(self, direction_of_interest: float) -> float:
        return calc_spread_rate_normal_to_perimeter(self.elliptical_a, self.elliptical_b, self.elliptical_c,
                                                    self.direction_of_max_spread, direction_of_interest)

    def fire_length(self, elapsed_time: float) -> float:
        return (self.forward_spread_rate + self.backing_spread_rate) * elapsed_time

    def max_fire_width(self, elapsed_time: float) -> float:
        return 2.0 * self.elliptical_a * elapsed_time

    def area(self, elapsed_time: float) -> float:
        """Fire area (ft^2) after `elapsed_time` minutes."""
        return np.pi * self.elliptical_a * self.elliptical_b * elapsed_time ** 2

    def perimeter(self, elapsed_time: float) -> float:
        """Fire perimeter (ft) after `elapsed_time` minutes (Ramanujan's approximation)."""
        a = self.elliptical_a * elapsed_time
        b = self.elliptical_b * elapsed_time
        if a + b <= SMIDGEN:
            return 0.0

        h = ((a - b) / (a + b)) ** 2
        return float(np.pi * (a + b) * (1.0 + 3.0 * h / (10.0 + np.sqrt(4.0 - 3.0 * h))))

    def to_polygon(self, elapsed_time: float, origin: Tuple[float, float] = (0.0, 0.0),
                   num_points: int = 72) -> Polygon:
        """Fire perimeter as a polygon with the ignition point at `origin`.

        The y axis points along the zero azimuth of the reference frame the
        spread direction is given in (upslope or north), and azimuths turn
        clockwise toward +x.

        Args:
            elapsed_time (float): Minutes since ignition.
            origin (Tuple[float, float], optional): Ignition point (ft). Defaults to (0, 0).
            num_points (int, optional): Number of vertices. Defaults to 72.

        Returns:
            Polygon: Fire perimeter in ft.
        """
        a = self.elliptical_a * elapsed_time
        b = self.elliptical_b * elapsed_time
        c = self.elliptical_c * elapsed_time

        t = np.linspace(0, 2 * np.pi, num_points, endpoint=False)
        u = c + b * np.cos(t) # along the heading
        v = a * np.sin(t) # across the heading

        theta = np.deg2rad(self.direction_of_max_spread)
        x = origin[0] + u * np.sin(theta) + v * np.cos(theta)
        y = origin[1] + u * np.cos(theta) - v * np.sin(theta)

        return Polygon(np.column_stack((x, y)))


def calc_fire_ellipse(forward_spread_rate: float, effective_wind_speed: float,
                      direction_of_max_spread: float) -> FireEllipse:
    """Build the fire ellipse for a forward spread rate and effective wind speed.

    Args:
        forward_spread_rate (float): Head fire spread rate (ft/min).
        effective_wind_speed (float): Effective wind speed (ft/min).
        direction_of_max_spread (float): Azimuth of max spread (deg).

    Returns:
        FireEllipse: Rates and shape parameters of the fire.
    """
    lwr = calc_length_to_width_ratio(effective_wind_speed)
    e = calc_eccentricity(lwr)

    backing = forward_spread_rate * (1.0 - e) / (1.0 + e)
    b = (forward_spread_rate + backing) / 2.0
    a = b / lwr
    c = b - backing

    return FireEllipse(
        forward_spread_rate=forward_spread_rate,
        backing_spread_rate=backing,
        flanking_spread_rate=a,
        length_to_width_ratio=lwr,
        eccentricity=e,
        elliptical_a=a,
        elliptical_b=b,
        elliptical_c=c,
        direction_of_max_spread=direction_of_max_spread,
    )
