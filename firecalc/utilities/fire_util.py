"""Constants and helper functions used throughout firecalc.

.. autoclass:: FireType
    :members:

.. autoclass:: UtilFuncs
    :members:

"""

from enum import Enum

import numpy as np

# Values at or below this are treated as zero
SMIDGEN = 1.0e-7

# Standard fuel particle properties (Rothermel 1972)
FUEL_PARTICLE_DENSITY = 32.0  # lb/ft^3
TOTAL_SILICA_CONTENT = 0.0555  # fraction
EFFECTIVE_SILICA_CONTENT = 0.010  # fraction

# Fixed SAVR of the standard timelag classes
TEN_HOUR_SAVR = 109.0  # ft^2/ft^3
HUNDRED_HOUR_SAVR = 30.0  # ft^2/ft^3

# Low heat of combustion assumed for canopy fuel
CANOPY_HEAT_OF_COMBUSTION = 8000.0  # BTU/lb


class FireType(str, Enum):
    """Fire type classification from the crown fire transition and active ratios
    (Scott & Reinhardt 2001).
    """
    SURFACE = "surface"
    TORCHING = "torching"
    CONDITIONAL_CROWN = "conditional_crown"
    CROWNING = "crowning"


class UtilFuncs:
    """Various utility functions that are useful across multiple modules."""

    @staticmethod
    def normalize_direction(direction_deg: float) -> float:
        """Wrap an azimuth into [0, 360).

        Args:
            direction_deg (float): Azimuth in degrees, any range.

        Returns:
            float: Equivalent azimuth in [0, 360).
        """
        direction_deg = float(np.fmod(direction_deg, 360.0))
        if direction_deg < 0:
            direction_deg += 360.0

        # fmod of a tiny negative value can round up to exactly 360
        if direction_deg >= 360.0:
            direction_deg = 0.0

        return direction_deg

    @staticmethod
    def angle_between(direction_a: float, direction_b: float) -> float:
        """Smallest angle between two azimuths, in degrees in [0, 180]."""
        beta = abs(direction_a - direction_b) % 360.0
        if beta > 180.0:
            beta = 360.0 - beta

        return beta
