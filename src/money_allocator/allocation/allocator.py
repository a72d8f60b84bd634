from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Iterable, Mapping, Sequence

from money_allocator.config import AllocationConfig, RemainderPolicy
from money_allocator.domain.monetary.errors import (
    CurrencyMismatchError,
    EmptyRatiosError,
    FixedAmountsExceedTotalError,
    InvalidAmountError,
    InvalidPartsCountError,
    NegativeRatioError,
    PercentageOutOfRangeError,
    PercentagesMustSumTo100Error,
    ZeroTotalRatioError,
)
from money_allocator.domain.monetary.money import DECIMAL_CONTEXT, Money
from money_allocator.utils.decimal_tools import DecimalLike, as_decimal, fractional_digits, scaled_integer

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)


@dataclass(frozen=True)
class PriorityEntry:
    """Ratio with a priority rank; lower $priority is processed first.

    Priorities only order the entries, they do not have to be unique.
    """

    ratio: DecimalLike
    priority: int

    def __post_init__(self):
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise TypeError(f"$priority must be an int, but provided value is: {self.priority!r}")

    @classmethod
    def coerce(cls, entry: PriorityEntry | tuple | Mapping) -> PriorityEntry:
        """Accept a PriorityEntry, a `(ratio, priority)` tuple or a mapping with both keys."""
        if isinstance(entry, PriorityEntry):
            return entry
        if isinstance(entry, Mapping):
            try:
                return cls(ratio=entry["ratio"], priority=entry["priority"])
            except KeyError as e:
                raise TypeError(f"Cannot convert $entry {entry!r} to PriorityEntry; mapping must have 'ratio' and 'priority' keys") from e
        if isinstance(entry, tuple) and len(entry) == 2:
            return cls(ratio=entry[0], priority=entry[1])
        raise TypeError(f"Cannot convert {entry!r} to PriorityEntry; expected (ratio, priority) pair")


class Allocator:
    """Splits a Money total into shares that add up exactly to the total.

    All strategies floor each share to the currency's minor unit and then hand the
    floored-away remainder back according to `AllocationConfig.remainder_policy`
    (`allocate_equally` always spreads it one unit at a time).
    Computation happens on integer minor units, so no value is created or lost.

    Output order always mirrors input order. Every method is a pure function of its
    arguments and the (immutable) config, so one Allocator can be shared between threads.

    Examples:
        >>> allocator = Allocator()
        >>> allocator.allocate(Money.create("100", "USD"), [1, 1, 1])
        [Money(33.34, USD), Money(33.33, USD), Money(33.33, USD)]
    """

    def __init__(self, config: AllocationConfig | None = None):
        self._config = config if config is not None else AllocationConfig()

    @property
    def config(self) -> AllocationConfig:
        return self._config

    # region Strategies

    def allocate(self, total: Money, ratios: Sequence[DecimalLike]) -> list[Money]:
        """Allocate $total proportionally to $ratios.

        Each share is `floor(total * ratio / sum(ratios))` in minor units; the units
        lost to flooring go to the first share (or, with `RemainderPolicy.LARGEST_REMAINDER`,
        one each to the shares with the largest fractional parts).

        Args:
            total: Amount to split.
            ratios: Non-negative numbers, not all zero.

        Returns:
            One Money per ratio, in the same order, summing exactly to $total.

        Raises:
            EmptyRatiosError: If $ratios is empty.
            NegativeRatioError: If any ratio is negative.
            ZeroTotalRatioError: If all ratios are zero.
            InvalidAmountError: If a ratio is not a finite number.
        """
        return self._allocate(total, ratios, self._config.remainder_policy)

    def _allocate(self, total: Money, ratios: Sequence[DecimalLike], policy: RemainderPolicy) -> list[Money]:
        self._check_total(total)
        if not ratios:
            raise EmptyRatiosError("$ratios cannot be empty")

        values = _as_decimals(ratios, "$ratios")
        for index, value in enumerate(values):
            if value < 0:
                raise NegativeRatioError(f"$ratios[{index}] cannot be negative, but provided value is: {value}")
        weights = _integer_weights(values)

        weight_sum = sum(weights)
        if weight_sum == 0:
            raise ZeroTotalRatioError(f"Sum of $ratios must be greater than zero, but provided ratios are: {list(ratios)}")

        total_units = total.minor_units
        units = [total_units * w // weight_sum for w in weights]
        remainder = total_units - sum(units)

        if remainder:
            if policy is RemainderPolicy.FIRST:
                units[0] += remainder
            else:
                fractions = [total_units * w % weight_sum for w in weights]
                # Largest fractional part first; ties go to the lower index
                ranked = sorted(range(len(units)), key=lambda i: (-fractions[i], i))
                for i in ranked[:remainder]:
                    units[i] += 1

        logger.debug(f"Allocated {total} into {len(units)} share(s); remainder of {remainder} minor unit(s) assigned by {policy.name}")
        return [Money.from_minor_units(u, total.currency) for u in units]

    def allocate_equally(self, total: Money, parts: int) -> list[Money]:
        """Split $total into $parts shares that differ by at most one minor unit.

        Leftover minor units go one each to the first shares, so
        `allocate_equally(100 USD, 3)` is `[33.34, 33.33, 33.33]` and
        `allocate_equally(100 USD, 7)` is four times 14.29 followed by three times 14.28.

        Under the default `RemainderPolicy.FIRST` this differs from `allocate(total, [1] * parts)`
        whenever the remainder is more than one minor unit: `allocate` gives the whole remainder
        to the first share (14.32, then six times 14.28).

        Raises:
            InvalidPartsCountError: If $parts is not a positive int or exceeds `config.max_parts`.
        """
        if isinstance(parts, bool) or not isinstance(parts, int) or parts <= 0:
            raise InvalidPartsCountError(f"$parts must be a positive integer, but provided value is: {parts!r}")
        if parts > self._config.max_parts:
            raise InvalidPartsCountError(f"$parts ({parts}) exceeds the limit of {self._config.max_parts}")

        # Spread the remainder one unit at a time from the front so no share is more than
        # one minor unit away from total / parts
        return self._allocate(total, [1] * parts, RemainderPolicy.LARGEST_REMAINDER)

    def allocate_by_percentages(self, total: Money, percentages: Sequence[DecimalLike]) -> list[Money]:
        """Allocate $total by $percentages (e.g. `[50, 30, 20]`).

        Raises:
            PercentageOutOfRangeError: If a percentage is outside [0, 100].
            PercentagesMustSumTo100Error: If the percentages do not sum to 100 within `config.percentage_tolerance`.
        """
        values = _as_decimals(percentages, "$percentages")

        # Sum is checked before the range of each percentage
        with localcontext(DECIMAL_CONTEXT):
            percentage_sum = sum(values, Decimal(0))
            deviation = abs(percentage_sum - HUNDRED)
        if deviation > self._config.percentage_tolerance:
            raise PercentagesMustSumTo100Error(f"$percentages must sum to 100, but they sum to {percentage_sum}")

        for index, value in enumerate(values):
            if value < 0 or value > HUNDRED:
                raise PercentageOutOfRangeError(f"$percentages[{index}] must be between 0 and 100, but provided value is: {value}")

        return self.allocate(total, values)

    def allocate_fixed(self, total: Money, fixed_amounts: Sequence[Money]) -> list[Money]:
        """Return $fixed_amounts followed by one trailing share with what is left of $total.

        The trailing share is present even when it is zero.

        Raises:
            CurrencyMismatchError: If a fixed amount has another currency than $total.
            FixedAmountsExceedTotalError: If the fixed amounts add up to more than $total.
        """
        self._check_total(total)

        fixed_sum = Money.zero(total.currency)
        for index, amount in enumerate(fixed_amounts):
            if not isinstance(amount, Money):
                raise TypeError(f"$fixed_amounts[{index}] must be Money, but provided value is: {amount!r}")
            if amount.currency != total.currency:
                raise CurrencyMismatchError(f"$fixed_amounts[{index}] is in {amount.currency}, but total is in {total.currency}")
            fixed_sum = fixed_sum + amount

        if fixed_sum > total:
            raise FixedAmountsExceedTotalError(f"Fixed amounts ({fixed_sum}) exceed total ({total})")

        rest = total - fixed_sum
        logger.debug(f"Allocated {len(fixed_amounts)} fixed amount(s) from {total}; rest is {rest}")
        return [*fixed_amounts, rest]

    def allocate_by_priority(self, total: Money, entries: Iterable[PriorityEntry | tuple | Mapping]) -> list[Money]:
        """Allocate $total by ratio, processing entries in ascending priority.

        Entries are stably sorted by priority and passed to `allocate`, so the entry
        with the lowest priority number receives the rounding remainder. Results are
        returned in the original input order.

        Raises:
            Same errors as `allocate`.
        """
        coerced = [PriorityEntry.coerce(entry) for entry in entries]

        # `sorted` is stable: equal priorities keep their input order
        order = sorted(range(len(coerced)), key=lambda i: coerced[i].priority)
        sorted_shares = self.allocate(total, [coerced[i].ratio for i in order])

        shares: list[Money | None] = [None] * len(coerced)
        for position, original_index in enumerate(order):
            shares[original_index] = sorted_shares[position]
        return shares

    # endregion

    def validate_allocation(self, total: Money, shares: Sequence[Money]) -> bool:
        """Check that $shares add up to $total.

        Shares in a currency other than the total's are ignored. An empty list is never valid.

        Returns:
            True if the absolute difference is below `config.validation_tolerance`.
        """
        self._check_total(total)
        if not shares:
            return False

        matching = [share.amount for share in shares if share.currency == total.currency]
        with localcontext(DECIMAL_CONTEXT):
            difference = abs(sum(matching, Decimal(0)) - total.amount)
        is_valid = difference < self._config.validation_tolerance
        if not is_valid:
            logger.debug(f"Allocation of {total} is off by {difference} ({len(matching)} of {len(shares)} share(s) in {total.currency})")
        return is_valid

    @staticmethod
    def _check_total(total: Money) -> None:
        if not isinstance(total, Money):
            raise TypeError(f"$total must be Money, but provided value is: {total!r}")


def _as_decimals(ratios: Sequence[DecimalLike], name: str) -> list[Decimal]:
    values = []
    for index, ratio in enumerate(ratios):
        try:
            value = as_decimal(ratio)
        except (TypeError, ValueError, InvalidOperation) as e:
            raise InvalidAmountError(f"{name}[{index}] must be a number, but provided value is: {ratio!r}") from e
        if not value.is_finite():
            raise InvalidAmountError(f"{name}[{index}] must be finite, but provided value is: {ratio!r}")
        values.append(value)
    return values


def _integer_weights(ratios: list[Decimal]) -> list[int]:
    """Scale decimal ratios by a common power of ten so that all become integers.

    Keeps the proportions exact: `[0.5, 1.25]` -> `[50, 125]`.
    """
    scale = max(fractional_digits(r) for r in ratios)
    return [scaled_integer(r, scale) for r in ratios]
