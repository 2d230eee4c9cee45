"""firecalc - Rothermel surface and crown fire behavior calculations."""

from firecalc.exceptions import (
    FireCalcError,
    ConfigurationError,
    FuelModelError,
    ValidationError,
)
from firecalc.surface import (
    FireBehaviorResult,
    FuelSelectionMode,
    SurfaceRunResult,
    calc_fire_behavior,
    calc_surface_fire_for_selection,
)

__version__ = "0.1.0"

__all__ = [
    "FireBehaviorResult",
    "FuelSelectionMode",
    "SurfaceRunResult",
    "calc_fire_behavior",
    "calc_surface_fire_for_selection",
    "FireCalcError",
    "ConfigurationError",
    "FuelModelError",
    "ValidationError",
]
