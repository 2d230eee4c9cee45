"""Shared utilities for firecalc.

Modules:
    - fire_util: Model constants, fire type classification and direction helpers.
    - unit_conversions: Unit families and conversion to and from base units.
    - data_classes: Scenario input dataclasses.
    - logging_config: Console logging setup.
"""
