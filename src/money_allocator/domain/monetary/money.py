from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN, ROUND_HALF_UP, localcontext
from typing import TYPE_CHECKING

from money_allocator.domain.monetary.currency import Currency
from money_allocator.domain.monetary.errors import (
    CurrencyMismatchError,
    DivideByZeroError,
    InvalidAmountError,
    PrecisionExceededError,
)
from money_allocator.utils.decimal_tools import DecimalLike, as_decimal, fractional_digits, quantum, scaled_integer

if TYPE_CHECKING:
    from money_allocator.result import Result

# Precision for intermediate results; amounts themselves never carry more than 8 decimals
DECIMAL_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)


def _is_scalar(value) -> bool:
    return isinstance(value, (Decimal, int, float)) and not isinstance(value, bool)


class Money:
    """Represents an immutable monetary amount with currency.

    Uses Python's Decimal for precision arithmetic. The amount is always rounded
    to the minor-unit count of its currency (2 decimals for USD, 0 for JPY), using
    round-half-away-from-zero. Every operation returns a new instance.

    Two ways to build an instance:

    - `Money.create(amount, currency)` is the validating factory for external input.
      It rejects input that carries more decimals than the currency allows.
    - `Money(value, currency)` rounds silently; arithmetic uses it for its results.

    Supports values between -999_999_999_999_999.99999999 and +999_999_999_999_999.99999999
    """

    # Value limits
    MAX_VALUE = Decimal("999_999_999_999_999.99999999")
    MIN_VALUE = Decimal("-999_999_999_999_999.99999999")

    __slots__ = ("_value", "_currency")

    def __init__(self, value: DecimalLike, currency: Currency | str):
        """Initialize Money with value and currency, rounding $value to the currency precision.

        Args:
            value: Numeric value (Decimal-like scalar).
            currency: Currency object or 3-letter currency code.

        Raises:
            InvalidAmountError: If value is not a finite number or out of range.
            InvalidCurrencyError: If currency code is not exactly 3 letters.
        """
        decimal_value = self._to_finite_decimal(value, "$value")
        currency = Currency.resolve(currency)

        # Round to currency precision (ROUND_HALF_UP rounds half away from zero)
        try:
            rounded = decimal_value.quantize(quantum(currency.precision), rounding=ROUND_HALF_UP, context=DECIMAL_CONTEXT)
        except InvalidOperation as e:
            raise InvalidAmountError(f"$value exceeds maximum allowed value {self.MAX_VALUE}, but provided value is: {decimal_value}") from e

        # Raise: rounded value must be within allowed range
        if rounded > self.MAX_VALUE:
            raise InvalidAmountError(f"$value exceeds maximum allowed value {self.MAX_VALUE}, but provided value is: {decimal_value}")
        if rounded < self.MIN_VALUE:
            raise InvalidAmountError(f"$value is below minimum allowed value {self.MIN_VALUE}, but provided value is: {decimal_value}")

        self._value = rounded
        self._currency = currency

    # region Factories

    @classmethod
    def create(cls, amount: DecimalLike, currency: Currency | str) -> Money:
        """Validate external input and create Money.

        Args:
            amount: Numeric amount. Floats are read through `str()`, so `0.1` means `Decimal("0.1")`.
            currency: Currency object or 3-letter code (case-insensitive).

        Returns:
            Money: New instance.

        Raises:
            InvalidAmountError: If $amount is NaN, infinite or not a number.
            InvalidCurrencyError: If $currency is not exactly 3 letters.
            PrecisionExceededError: If $amount has more decimals than the currency allows.
        """
        decimal_amount = cls._to_finite_decimal(amount, "$amount")
        currency = Currency.resolve(currency)

        digits = fractional_digits(decimal_amount)
        if digits > currency.precision:
            raise PrecisionExceededError(
                f"$amount ({amount}) has {digits} decimal places, but {currency.code} allows at most {currency.precision}",
            )

        return cls(decimal_amount, currency)

    @classmethod
    def try_create(cls, amount: DecimalLike, currency: Currency | str) -> Result[Money]:
        """Same as `create`, but report validation failures as `Err` instead of raising."""
        from money_allocator.result import attempt

        return attempt(cls.create, amount, currency)

    @classmethod
    def zero(cls, currency: Currency | str) -> Money:
        """Zero amount for $currency."""
        return cls(0, currency)

    @classmethod
    def from_minor_units(cls, minor_units: int, currency: Currency | str) -> Money:
        """Create Money from an integer count of minor units (cents for USD, yen for JPY)."""
        currency = Currency.resolve(currency)
        return cls(Decimal(minor_units).scaleb(-currency.precision, DECIMAL_CONTEXT), currency)

    @classmethod
    def from_str(cls, value_str: str) -> Money:
        """Parse Money from string like '1000.50 USD'.

        Args:
            value_str (str): String representation.

        Returns:
            Money: Money object.

        Raises:
            ValueError: If string format is invalid (validation errors of `create` included).
        """
        value_str = value_str.strip()
        if not value_str:
            raise ValueError("Value string with $value_str = '' cannot be empty")

        # Split by whitespace
        parts = value_str.split()
        if len(parts) != 2:
            raise ValueError(f"Value string with $value_str = '{value_str}' must be in format 'value currency_code'")

        value_part, currency_part = parts
        return cls.create(value_part, currency_part)

    # endregion

    # region Properties

    @property
    def amount(self) -> Decimal:
        """Get the decimal amount (never more decimals than the currency precision)."""
        return self._value

    @property
    def currency(self) -> Currency:
        """Get the currency."""
        return self._currency

    @property
    def minor_units(self) -> int:
        """Get the amount as an integer count of minor units (e.g. 100.25 USD -> 10025)."""
        return scaled_integer(self._value, self._currency.precision)

    def is_zero(self) -> bool:
        return self._value == 0

    def is_positive(self) -> bool:
        return self._value > 0

    def is_negative(self) -> bool:
        return self._value < 0

    # endregion

    # region Arithmetic

    def add(self, other: Money) -> Money:
        """Return the sum of two amounts in the same currency.

        Raises:
            CurrencyMismatchError: If currencies differ.
        """
        self._check_same_currency(other, "add")
        with localcontext(DECIMAL_CONTEXT):
            total = self._value + other._value
        return Money(total, self._currency)

    def subtract(self, other: Money) -> Money:
        """Return $self minus $other (same currency required).

        Raises:
            CurrencyMismatchError: If currencies differ.
        """
        self._check_same_currency(other, "subtract")
        with localcontext(DECIMAL_CONTEXT):
            difference = self._value - other._value
        return Money(difference, self._currency)

    def multiply(self, factor: DecimalLike) -> Money:
        """Scale the amount by $factor; the result is rounded to the currency precision.

        Raises:
            InvalidAmountError: If $factor is not a finite number or the result is out of range.
        """
        decimal_factor = self._to_finite_decimal(factor, "$factor")
        with localcontext(DECIMAL_CONTEXT):
            product = self._value * decimal_factor
        return Money(product, self._currency)

    def divide(self, divisor: DecimalLike) -> Money:
        """Divide the amount by $divisor; the result is rounded to the currency precision.

        Example: `Money.create(100, "USD").divide(3)` is `33.33 USD`.

        Raises:
            DivideByZeroError: If $divisor is zero.
            InvalidAmountError: If $divisor is not a finite number.
        """
        decimal_divisor = self._to_finite_decimal(divisor, "$divisor")
        if decimal_divisor == 0:
            raise DivideByZeroError(f"Cannot divide {self} by zero")
        with localcontext(DECIMAL_CONTEXT):
            quotient = self._value / decimal_divisor
        return Money(quotient, self._currency)

    def __add__(self, other):
        """Add two Money objects (same currency)."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        """Right addition; accepts the integer 0 so that `sum()` works on a list of Money."""
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other):
        """Subtract two Money objects (same currency)."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        """Multiply Money by number (returns Money)."""
        if not _is_scalar(other):
            return NotImplemented  # Money * Money doesn't make sense
        return self.multiply(other)

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        return self.__mul__(other)

    def __truediv__(self, other):
        """Divide Money by number (returns Money) or Money by Money (returns Decimal)."""
        if isinstance(other, Money):
            self._check_same_currency(other, "divide")
            if other.is_zero():
                raise DivideByZeroError("Cannot divide by zero Money")
            with localcontext(DECIMAL_CONTEXT):
                return self._value / other._value
        if not _is_scalar(other):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> Money:
        return Money(self._value.copy_negate(), self._currency)

    def __pos__(self) -> Money:
        return self

    def __abs__(self) -> Money:
        return Money(self._value.copy_abs(), self._currency)

    # endregion

    # region Comparison

    def _check_same_currency(self, other: Money, operation: str) -> None:
        """Check if two Money objects have the same currency.

        Raises:
            TypeError: If $other is not Money.
            CurrencyMismatchError: If currencies don't match.
        """
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other).__name__}")
        if self._currency != other._currency:
            raise CurrencyMismatchError(f"Cannot {operation} different currencies: {self._currency} and {other._currency}")

    def __eq__(self, other) -> bool:
        """Structural equality by amount and currency."""
        if not isinstance(other, Money):
            return False
        return self._currency == other._currency and self._value == other._value

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "compare")
        return self._value < other._value

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "compare")
        return self._value <= other._value

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "compare")
        return self._value > other._value

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "compare")
        return self._value >= other._value

    def __hash__(self) -> int:
        """Hash based on value and currency code."""
        return hash((self._value, self._currency.code))

    # endregion

    # String representations
    def __str__(self) -> str:
        """Return string like '1000.50 USD'."""
        return f"{self._value} {self._currency.code}"

    def __repr__(self) -> str:
        """Return string like 'Money(1000.50, USD)'."""
        return f"{self.__class__.__name__}({self._value}, {self._currency.code})"

    @staticmethod
    def _to_finite_decimal(value: DecimalLike, name: str) -> Decimal:
        # Raise: value must be convertible to a finite Decimal
        try:
            decimal_value = as_decimal(value)
        except (ValueError, InvalidOperation) as e:
            raise InvalidAmountError(f"{name} ({value!r}) cannot be converted to Decimal") from e
        except TypeError as e:
            raise InvalidAmountError(f"{name} must be a number, but provided value is: {value!r}") from e

        if not decimal_value.is_finite():
            raise InvalidAmountError(f"{name} must be finite, but provided value is: {value!r}")
        return decimal_value
