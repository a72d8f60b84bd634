from __future__ import annotations

import pytest

from money_allocator.allocation import PriorityEntry, allocate_by_priority
from money_allocator.domain.monetary.errors import EmptyRatiosError, NegativeRatioError, ZeroTotalRatioError
from tests.helpers.helper_money import amounts, decimals, usd


def test_lowest_priority_number_receives_remainder():
    """Test that the entry with the lowest priority number gets the remainder."""
    entries = [PriorityEntry(1, 3), PriorityEntry(1, 1), PriorityEntry(1, 2)]
    shares = allocate_by_priority(usd(100), entries)
    assert amounts(shares) == decimals("33.33", "33.34", "33.33")


def test_output_follows_input_order():
    """Test that shares come back in input order, not priority order."""
    entries = [PriorityEntry(3, 2), PriorityEntry(1, 1)]
    shares = allocate_by_priority(usd(100), entries)
    assert amounts(shares) == decimals("75.00", "25.00")


def test_ties_keep_input_order():
    """Test that equal priorities keep their input order."""
    entries = [PriorityEntry(1, 5), PriorityEntry(1, 5), PriorityEntry(1, 9)]
    shares = allocate_by_priority(usd(1), entries)
    assert amounts(shares) == decimals("0.34", "0.33", "0.33")


def test_accepts_tuples_and_mappings():
    """Test that tuples and mappings are accepted as entries."""
    shares = allocate_by_priority(usd(100), [(1, 2), {"ratio": 1, "priority": 1}])
    assert amounts(shares) == decimals("50.00", "50.00")


@pytest.mark.parametrize(
    "priorities",
    [[1, 2, 3, 4], [4, 3, 2, 1], [2, 2, 1, 1], [0, -5, 7, 0], [10, 10, 10, 10]],
)
def test_length_order_and_conservation_do_not_depend_on_priorities(priorities):
    """Test that priorities never change the share count, their order or the total."""
    ratios = [5, 1, 3, 2]
    total = usd("10.01")
    shares = allocate_by_priority(total, [PriorityEntry(r, p) for r, p in zip(ratios, priorities)])

    assert len(shares) == len(ratios)
    assert sum(shares) == total
    assert shares[0] > shares[3] > shares[1]


def test_empty_entries_fail():
    """Test that no entries raise EmptyRatiosError."""
    with pytest.raises(EmptyRatiosError):
        allocate_by_priority(usd(100), [])


def test_ratio_errors_propagate():
    """Test that ratio validation errors from allocate are raised unchanged."""
    with pytest.raises(NegativeRatioError):
        allocate_by_priority(usd(100), [PriorityEntry(-1, 1), PriorityEntry(2, 2)])
    with pytest.raises(ZeroTotalRatioError):
        allocate_by_priority(usd(100), [PriorityEntry(0, 1), PriorityEntry(0, 2)])


def test_priority_must_be_int():
    """Test that a non-int priority or an unsupported entry raises TypeError."""
    with pytest.raises(TypeError):
        PriorityEntry(1, 1.5)
    with pytest.raises(TypeError):
        PriorityEntry.coerce("1:1")


@pytest.mark.parametrize("entry", [{"ratio": 1}, {"priority": 1}, {}])
def test_mapping_without_both_keys_fails(entry):
    """Test that a mapping missing 'ratio' or 'priority' raises TypeError."""
    with pytest.raises(TypeError, match="must have 'ratio' and 'priority' keys"):
        PriorityEntry.coerce(entry)
    with pytest.raises(TypeError):
        allocate_by_priority(usd(100), [(1, 1), entry])
