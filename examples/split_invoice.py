"""Split an invoice between cost centers with every allocation strategy.

Run from the repository root after `pip install -e .`:

    python examples/split_invoice.py
"""
import logging

from money_allocator import (
    Allocator,
    AllocationConfig,
    Money,
    PriorityEntry,
    RemainderPolicy,
    allocate,
    allocate_by_percentages,
    allocate_by_priority,
    allocate_equally,
    allocate_fixed,
    attempt,
)
from money_allocator.utils.report.allocation_report import AllocationReport


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    invoice = Money.create("1000.00", "EUR")

    print("By headcount 3:2:2")
    AllocationReport(invoice, allocate(invoice, [3, 2, 2])).print_report()

    print("\nSame split, largest remainder method")
    lrm = Allocator(AllocationConfig(remainder_policy=RemainderPolicy.LARGEST_REMAINDER))
    AllocationReport(invoice, lrm.allocate(invoice, [3, 2, 2])).print_report()

    print("\nEqually among 7 teams")
    AllocationReport(invoice, allocate_equally(invoice, 7)).print_report()

    print("\nBy budget percentages")
    AllocationReport(invoice, allocate_by_percentages(invoice, [45.5, 30, 24.5])).print_report()

    print("\nFixed fees first, rest to operations")
    fees = [Money.create("120.00", "EUR"), Money.create("75.50", "EUR")]
    AllocationReport(invoice, allocate_fixed(invoice, fees)).print_report()

    print("\nBy priority (the HQ cost center absorbs rounding)")
    entries = [PriorityEntry(1, 2), PriorityEntry(1, 1), PriorityEntry(1, 3)]
    AllocationReport(invoice, allocate_by_priority(invoice, entries)).print_report()

    print("\nInvalid request as a result value")
    result = attempt(allocate_by_percentages, invoice, [50, 30, 10])
    print(f"  {result}")


if __name__ == "__main__":
    main()
