__version__ = "0.1.0"

from money_allocator.domain.monetary.currency import Currency
from money_allocator.domain.monetary.money import Money
from money_allocator.domain.monetary.errors import ErrorKind, MonetaryError, AllocationError
from money_allocator.config import AllocationConfig, RemainderPolicy
from money_allocator.allocation import (
    Allocator,
    PriorityEntry,
    allocate,
    allocate_by_percentages,
    allocate_by_priority,
    allocate_equally,
    allocate_fixed,
    validate_allocation,
)
from money_allocator.result import Ok, Err, Result, attempt, combine

__all__ = [
    "Currency",
    "Money",
    "ErrorKind",
    "MonetaryError",
    "AllocationError",
    "AllocationConfig",
    "RemainderPolicy",
    "Allocator",
    "PriorityEntry",
    "allocate",
    "allocate_by_percentages",
    "allocate_by_priority",
    "allocate_equally",
    "allocate_fixed",
    "validate_allocation",
    "Ok",
    "Err",
    "Result",
    "attempt",
    "combine",
]
