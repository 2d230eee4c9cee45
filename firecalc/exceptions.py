"""Custom exceptions for the firecalc fire behavior library.

This module defines the exceptions raised when the library is used
incorrectly. Fire behavior conditions themselves (an empty fuel bed, a
near-zero denominator, an input below a physical floor) never raise; they
resolve to zero or clamped values inside the models.

Exception Hierarchy:
    FireCalcError (base)
    ├── ConfigurationError - Inconsistent scenario or method configuration
    ├── ValidationError - Input validation failures
    └── FuelModelError - Unknown or malformed fuel models

Example:
    >>> from firecalc.exceptions import ValidationError
    >>> raise ValidationError("Moisture must be non-negative", field="one_hour", value=-0.1)
"""

from typing import Optional


class FireCalcError(Exception):
    """Base exception for all firecalc errors.

    All custom exceptions in firecalc inherit from this class, allowing
    users to catch every library error with a single except clause.

    Example:
        >>> try:
        ...     calc_fire_behavior(selection, env)
        ... except FireCalcError as e:
        ...     print(f"firecalc error occurred: {e}")
    """

    pass


class ConfigurationError(FireCalcError):
    """Raised when a calculation is configured with incompatible options.

    This exception is raised when:
    - A weighting or calculation method is not recognized
    - A fuel selection variant is not recognized by the facade
    - A unit enum does not belong to a known unit family

    Attributes:
        message (str): Explanation of the configuration error.
        parameter (str): Name of the problematic parameter, if applicable.

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown two fuel models method",
        ...     parameter="method"
        ... )
    """

    def __init__(self, message: str, parameter: Optional[str] = None):
        self.parameter = parameter

        if parameter:
            full_message = f"{message} (parameter '{parameter}')"
        else:
            full_message = message

        super().__init__(full_message)


class ValidationError(FireCalcError):
    """Raised when an input value fails validation.

    This exception is raised when:
    - Fuel moistures are negative
    - Cover, crown ratio or coverage fractions fall outside [0, 1]
    - Canopy or fuel bed dimensions are negative

    Attributes:
        message (str): Explanation of the validation failure.
        field (str): Name of the field that failed validation.
        value: The invalid value that was provided.

    Example:
        >>> raise ValidationError(
        ...     "Canopy cover must be between 0 and 1",
        ...     field="canopy_cover",
        ...     value=1.5
        ... )
    """

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value

        parts = []
        if field:
            parts.append(f"field '{field}'")
        if value is not None:
            parts.append(f"value={value!r}")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class FuelModelError(FireCalcError):
    """Raised when a fuel model lookup fails.

    This exception is raised when:
    - A fuel model number is not in the catalog
    - An aspen fuel type number is outside 1-5
    - The fuel model catalog file is malformed

    Attributes:
        message (str): Explanation of the fuel model error.
        fuel_model_id (int): The fuel model number involved.

    Example:
        >>> raise FuelModelError(
        ...     "Fuel model is not defined",
        ...     fuel_model_id=14
        ... )
    """

    def __init__(self, message: str, fuel_model_id: Optional[int] = None):
        self.fuel_model_id = fuel_model_id

        if fuel_model_id is not None:
            full_message = f"{message} (fuel model: {fuel_model_id})"
        else:
            full_message = message

        super().__init__(full_message)
