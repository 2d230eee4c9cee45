"""Fire behavior models for firecalc.

Modules:
    - fuel_models: Fuel particles, fuel beds and the standard fuel model catalog.
    - wind: Wind reduction from a reference height to midflame.
    - rothermel: Rothermel (1972) surface fire spread model.
    - fire_size: Elliptical fire shape, directional spread, area and perimeter.
    - two_fuel_models: Spread through a mix of two fuel models.
    - palmetto_gallberry: Palmetto-gallberry fuel bed from stand descriptors.
    - western_aspen: Western aspen fuel beds and aspen mortality.
    - chaparral: Chaparral fuel bed from stand age or direct loading.
    - crown_model: Crown fire behavior (Rothermel 1991, Van Wagner 1977).
"""
