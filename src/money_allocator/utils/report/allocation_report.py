from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Sequence

import pandas as pd

from money_allocator.allocation.functions import validate_allocation
from money_allocator.domain.monetary.money import Money
from money_allocator.utils.decimal_tools import DecimalLike, as_decimal

logger = logging.getLogger(__name__)


def allocation_frame(total: Money, shares: Sequence[Money], weights: Sequence[DecimalLike] | None = None) -> pd.DataFrame:
    """Tabulate an allocation, one row per share.

    Columns:
        - amount (Decimal): share amount
        - currency (str): share currency code
        - share_of_total (Decimal): amount / total, or NaN when the total is zero or currencies differ
        - weight (Decimal): only present when $weights is given

    Raises:
        ValueError: If $weights is given and its length differs from $shares.
    """
    if weights is not None and len(weights) != len(shares):
        raise ValueError(f"$weights has {len(weights)} item(s), but $shares has {len(shares)}")

    rows = []
    for index, share in enumerate(shares):
        same_currency = share.currency == total.currency
        row = {
            "amount": share.amount,
            "currency": share.currency.code,
            "share_of_total": share / total if same_currency and not total.is_zero() else float("nan"),
        }
        if weights is not None:
            row["weight"] = as_decimal(weights[index])
        rows.append(row)

    columns = ["amount", "currency", "share_of_total"] + (["weight"] if weights is not None else [])
    df = pd.DataFrame(rows, columns=columns)
    df.index.name = "share"
    return df


class AllocationReport:
    """
    Usage:
        shares = allocate(total, [1, 1, 1])

        AllocationReport(total, shares).print_report()

        or

        lines = AllocationReport(total, shares).create_report()
        # do what you need with the string lines

    Parameters:
        total: Money
            the amount that was split
        shares: Sequence[Money]
            the result of an allocation, in output order
    """

    def __init__(self, total: Money, shares: Sequence[Money]):
        self.total = total
        self.shares = list(shares)

    def create_report(self) -> List[str]:
        frame = allocation_frame(self.total, self.shares)
        matching = [s for s in self.shares if s.currency == self.total.currency]
        allocated = sum(matching, Money.zero(self.total.currency))
        is_valid = validate_allocation(self.total, self.shares)

        lines = [
            f"Total:      {self.total}",
            f"Shares:     {len(self.shares)}",
            f"Allocated:  {allocated}",
            f"Difference: {self.total - allocated}",
            f"Conserved:  {'yes' if is_valid else 'NO'}",
            "",
        ]
        for index, row in frame.iterrows():
            ratio = row["share_of_total"]
            ratio_text = f"{ratio * 100:.2f}%" if isinstance(ratio, Decimal) else "n/a"
            lines.append(f"  #{index:<4} {row['amount']} {row['currency']}  ({ratio_text})")

        if not is_valid:
            logger.warning(f"Allocation of {self.total} does not conserve the total: {allocated} allocated")
        return lines

    def print_report(self) -> None:
        for line in self.create_report():
            print(line)
