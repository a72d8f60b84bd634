"""Module-level shortcuts for the default `Allocator`.

Use an `Allocator` instance directly when a non-default `AllocationConfig` is needed.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from money_allocator.allocation.allocator import Allocator, PriorityEntry
from money_allocator.domain.monetary.money import Money
from money_allocator.utils.decimal_tools import DecimalLike

_DEFAULT_ALLOCATOR = Allocator()


def allocate(total: Money, ratios: Sequence[DecimalLike]) -> list[Money]:
    return _DEFAULT_ALLOCATOR.allocate(total, ratios)


def allocate_equally(total: Money, parts: int) -> list[Money]:
    return _DEFAULT_ALLOCATOR.allocate_equally(total, parts)


def allocate_by_percentages(total: Money, percentages: Sequence[DecimalLike]) -> list[Money]:
    return _DEFAULT_ALLOCATOR.allocate_by_percentages(total, percentages)


def allocate_fixed(total: Money, fixed_amounts: Sequence[Money]) -> list[Money]:
    return _DEFAULT_ALLOCATOR.allocate_fixed(total, fixed_amounts)


def allocate_by_priority(total: Money, entries: Iterable[PriorityEntry | tuple | Mapping]) -> list[Money]:
    return _DEFAULT_ALLOCATOR.allocate_by_priority(total, entries)


def validate_allocation(total: Money, shares: Sequence[Money]) -> bool:
    return _DEFAULT_ALLOCATOR.validate_allocation(total, shares)
