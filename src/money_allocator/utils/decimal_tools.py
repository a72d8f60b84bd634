from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias


# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        TypeError: If $value is a bool or not a supported scalar type.
        decimal.InvalidOperation: If a string cannot be parsed as a number.
    """
    if isinstance(value, Decimal):
        return value

    # bool is an int subclass, but True/False are never amounts
    if isinstance(value, bool) or not isinstance(value, (int, str, float)):
        raise TypeError(f"$value must be Decimal, int, str or float, but provided value is: {value!r}")

    return Decimal(str(value))


def fractional_digits(value: Decimal) -> int:
    """Count significant fractional digits of a finite Decimal.

    Trailing zeros are not significant, so `Decimal("1.50")` has 1 digit
    and `Decimal("100")` has 0.

    Examples:
        >>> fractional_digits(Decimal("33.333"))
        3
        >>> fractional_digits(Decimal("12.10"))
        1
    """
    # Read the digits directly; `normalize()` would round to the context precision
    _, digits, exponent = value.as_tuple()
    if exponent >= 0 or not any(digits):
        return 0

    count = -exponent
    for digit in reversed(digits):
        if count == 0 or digit != 0:
            break
        count -= 1
    return count


def scaled_integer(value: Decimal, places: int) -> int:
    """Return $value * 10**$places as an exact int, without any context rounding.

    Examples:
        >>> scaled_integer(Decimal("100.25"), 2)
        10025
        >>> scaled_integer(Decimal("-1.5"), 3)
        -1500

    Raises:
        ValueError: If $value has more than $places significant decimals.
    """
    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits))) if digits else 0
    shift = exponent + places
    if shift >= 0:
        result = coefficient * 10**shift
    else:
        result, rest = divmod(coefficient, 10**-shift)
        if rest:
            raise ValueError(f"$value ({value}) has more than {places} decimal places")
    return -result if sign else result


def quantum(precision: int) -> Decimal:
    """Return the quantum for $precision decimal places (2 -> Decimal("0.01"))."""
    return Decimal((0, (1,), -precision))
