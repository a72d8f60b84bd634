from money_allocator.allocation.allocator import Allocator, PriorityEntry
from money_allocator.allocation.functions import (
    allocate,
    allocate_by_percentages,
    allocate_by_priority,
    allocate_equally,
    allocate_fixed,
    validate_allocation,
)

__all__ = [
    "Allocator",
    "PriorityEntry",
    "allocate",
    "allocate_by_percentages",
    "allocate_by_priority",
    "allocate_equally",
    "allocate_fixed",
    "validate_allocation",
]
