"""Parameter checks shared by the strategy constructors."""

from __future__ import annotations

from stochopt.foundation.exceptions import ConfigurationError


def require_range(owner: str, name: str, value: float, minimum: float | None = None, maximum: float | None = None) -> float:
    """Return ``value`` as a float, raising ConfigurationError when out of range."""
    value = float(value)
    if (minimum is not None and not value >= minimum) or (maximum is not None and not value <= maximum):
        low = "-inf" if minimum is None else minimum
        high = "inf" if maximum is None else maximum
        raise ConfigurationError(
            f"{owner}: '{name}' must lie within [{low}, {high}], got {value!r}.",
            f"Pass a {name} between {low} and {high}",
            {name: value},
        )
    return value
