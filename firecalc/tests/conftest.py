"""Shared pytest fixtures for the firecalc test suite.

This module provides reusable scenario inputs, fuel beds and the standard
fuel model catalog.
"""

import pytest

from firecalc.models.fuel_models import FuelModelCatalog, build_fuel_complex
from firecalc.utilities.data_classes import (
    CrownInputs,
    EnvironmentInputs,
    FuelMoisture,
)
from firecalc.utilities.unit_conversions import mph_to_ft_min


# ============================================================================
# Catalog Fixtures
# ============================================================================

@pytest.fixture
def catalog():
    """Provide the standard fuel model catalog.

    Returns:
        FuelModelCatalog: Anderson 13, Scott & Burgan 40 and non-burnable models.
    """
    return FuelModelCatalog()


@pytest.fixture
def fm2_fuel(catalog):
    """Provide the fuel bed of Anderson fuel model 2 (timber grass and understory).

    Returns:
        FuelComplex: Static fuel bed with a small live herbaceous load.
    """
    return build_fuel_complex(catalog.get_fuel_model(2), 0.60)


# ============================================================================
# Moisture Fixtures
# ============================================================================

@pytest.fixture
def d2l2_moisture():
    """Provide the D2L2 standard moisture scenario.

    Returns:
        FuelMoisture: 6/7/8% dead, 60% herbaceous, 90% woody.
    """
    return FuelMoisture.from_scenario("D2L2")


@pytest.fixture
def dry_moisture():
    """Provide very dry fuel moistures.

    Returns:
        FuelMoisture: 3/4/5% dead, 30% herbaceous, 60% woody.
    """
    return FuelMoisture.from_scenario("D1L1")


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def calm_flat_env(d2l2_moisture):
    """Provide a scenario with no wind and no slope.

    Returns:
        EnvironmentInputs: Calm, flat, open scenario.
    """
    return EnvironmentInputs(moisture=d2l2_moisture)


@pytest.fixture
def windy_env(d2l2_moisture):
    """Provide a scenario with a 10 mph upslope 20-ft wind on a gentle slope.

    Returns:
        EnvironmentInputs: Windy scenario with a 0.4 wind adjustment factor.
    """
    from firecalc.utilities.data_classes import WindAdjustmentFactorCalculationMethod
    return EnvironmentInputs(
        moisture=d2l2_moisture,
        wind_speed=mph_to_ft_min(10),
        wind_direction=0.0,
        slope=10.0,
        waf_method=WindAdjustmentFactorCalculationMethod.USER_INPUT,
        user_wind_adjustment_factor=0.4,
    )


@pytest.fixture
def cross_slope_env(d2l2_moisture):
    """Provide a scenario with wind blowing across a steep slope.

    Returns:
        EnvironmentInputs: 8 mph midflame wind at 90 deg from upslope on a 20 deg slope.
    """
    from firecalc.utilities.data_classes import WindHeightInputMode
    return EnvironmentInputs(
        moisture=d2l2_moisture,
        wind_speed=mph_to_ft_min(8),
        wind_direction=90.0,
        wind_height_input_mode=WindHeightInputMode.DIRECT_MIDFLAME,
        slope=20.0,
    )


# ============================================================================
# Canopy Fixtures
# ============================================================================

@pytest.fixture
def conifer_canopy():
    """Provide a dense conifer canopy.

    Returns:
        CrownInputs: CBH 6 ft, CBD 0.01 lb/ft^3 (~0.16 kg/m^3), 100% foliar moisture, 60 ft tall.
    """
    return CrownInputs(canopy_base_height=6.0, canopy_bulk_density=0.01,
                       foliar_moisture=1.0, canopy_height=60.0)
