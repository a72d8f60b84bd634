from __future__ import annotations

import math
from decimal import Decimal

import pytest

from money_allocator.allocation import allocate
from money_allocator.domain.monetary.currency_registry import EUR
from money_allocator.domain.monetary.money import Money
from money_allocator.utils.report.allocation_report import AllocationReport, allocation_frame
from tests.helpers.helper_money import usd


def test_allocation_frame_has_one_row_per_share():
    """Test the columns and values of the allocation frame."""
    total = usd(100)
    df = allocation_frame(total, allocate(total, [1, 1, 2]), weights=[1, 1, 2])

    assert list(df.columns) == ["amount", "currency", "share_of_total", "weight"]
    assert len(df) == 3
    assert df.index.name == "share"
    assert df.loc[0, "amount"] == Decimal("25.00")
    assert df.loc[2, "share_of_total"] == Decimal("0.5")
    assert df.loc[2, "weight"] == Decimal("2")
    assert set(df["currency"]) == {"USD"}


def test_allocation_frame_without_weights():
    """Test that the weight column is omitted without weights."""
    df = allocation_frame(usd(10), [usd(10)])
    assert "weight" not in df.columns


def test_allocation_frame_marks_foreign_currency_share_as_nan():
    """Test that a share in another currency has no share of total."""
    df = allocation_frame(usd(10), [usd(10), Money.create(5, EUR)])
    assert math.isnan(df.loc[1, "share_of_total"])


def test_allocation_frame_rejects_mismatched_weights():
    """Test that a weight count different from the share count raises ValueError."""
    with pytest.raises(ValueError):
        allocation_frame(usd(10), [usd(10)], weights=[1, 2])


def test_report_lines():
    """Test the text lines of a conserving allocation report."""
    total = usd(100)
    lines = AllocationReport(total, allocate(total, [1, 1, 1])).create_report()

    assert lines[0] == "Total:      100.00 USD"
    assert "Conserved:  yes" in lines
    assert any("33.34 USD" in line and "(33.34%)" in line for line in lines)


def test_report_flags_broken_allocation(caplog):
    """Test that a non-conserving allocation is flagged and logged."""
    total = usd(100)
    lines = AllocationReport(total, [usd("33.33")] * 3).create_report()

    assert "Conserved:  NO" in lines
    assert "Difference: 0.01 USD" in lines
    assert "does not conserve" in caplog.text
