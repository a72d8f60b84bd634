"""Errors raised by monetary amounts and the allocation engine.

All of them are deterministic validation failures: they are raised before any
result is produced and retrying the same call always fails the same way.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Stable identifiers of every failure the library can report."""

    # Construction
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_CURRENCY = "InvalidCurrency"
    PRECISION_EXCEEDED = "PrecisionExceeded"

    # Arithmetic
    CURRENCY_MISMATCH = "CurrencyMismatch"
    DIVIDE_BY_ZERO = "DivideByZero"

    # Allocation input
    EMPTY_RATIOS = "EmptyRatios"
    NEGATIVE_RATIO = "NegativeRatio"
    ZERO_TOTAL_RATIO = "ZeroTotalRatio"
    INVALID_PARTS_COUNT = "InvalidPartsCount"
    PERCENTAGE_OUT_OF_RANGE = "PercentageOutOfRange"
    PERCENTAGES_MUST_SUM_TO_100 = "PercentagesMustSumTo100"
    FIXED_AMOUNTS_EXCEED_TOTAL = "FixedAmountsExceedTotal"


class MonetaryError(ValueError):
    """Base class for all errors of this library."""

    kind: ErrorKind

    def __str__(self) -> str:
        return f"{self.kind.value}: {super().__str__()}"

    @property
    def message(self) -> str:
        """Error message without the $kind prefix."""
        return super().__str__()


# region Construction


class InvalidAmountError(MonetaryError):
    kind = ErrorKind.INVALID_AMOUNT


class InvalidCurrencyError(MonetaryError):
    kind = ErrorKind.INVALID_CURRENCY


class PrecisionExceededError(MonetaryError):
    kind = ErrorKind.PRECISION_EXCEEDED


# endregion

# region Arithmetic


class CurrencyMismatchError(MonetaryError):
    kind = ErrorKind.CURRENCY_MISMATCH


class DivideByZeroError(MonetaryError, ZeroDivisionError):
    kind = ErrorKind.DIVIDE_BY_ZERO


# endregion

# region Allocation


class AllocationError(MonetaryError):
    """Base class for invalid allocation requests."""


class EmptyRatiosError(AllocationError):
    kind = ErrorKind.EMPTY_RATIOS


class NegativeRatioError(AllocationError):
    kind = ErrorKind.NEGATIVE_RATIO


class ZeroTotalRatioError(AllocationError):
    kind = ErrorKind.ZERO_TOTAL_RATIO


class InvalidPartsCountError(AllocationError):
    kind = ErrorKind.INVALID_PARTS_COUNT


class PercentageOutOfRangeError(AllocationError):
    kind = ErrorKind.PERCENTAGE_OUT_OF_RANGE


class PercentagesMustSumTo100Error(AllocationError):
    kind = ErrorKind.PERCENTAGES_MUST_SUM_TO_100


class FixedAmountsExceedTotalError(AllocationError):
    kind = ErrorKind.FIXED_AMOUNTS_EXCEED_TOTAL


# endregion


_ERROR_CLASS_BY_KIND: dict[ErrorKind, type[MonetaryError]] = {
    cls.kind: cls
    for cls in (
        InvalidAmountError,
        InvalidCurrencyError,
        PrecisionExceededError,
        CurrencyMismatchError,
        DivideByZeroError,
        EmptyRatiosError,
        NegativeRatioError,
        ZeroTotalRatioError,
        InvalidPartsCountError,
        PercentageOutOfRangeError,
        PercentagesMustSumTo100Error,
        FixedAmountsExceedTotalError,
    )
}


def error_class_for(kind: ErrorKind) -> type[MonetaryError]:
    """Return the exception class that reports $kind."""
    return _ERROR_CLASS_BY_KIND[kind]
