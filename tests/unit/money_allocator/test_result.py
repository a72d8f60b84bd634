from __future__ import annotations

import pytest

from money_allocator.allocation import allocate
from money_allocator.domain.monetary.errors import ErrorKind, ZeroTotalRatioError
from money_allocator.result import Err, Ok, attempt, combine
from tests.helpers.helper_money import amounts, decimals, usd


def test_attempt_wraps_success():
    """Test that attempt wraps a return value in Ok."""
    result = attempt(allocate, usd(100), [1, 1])
    assert result.is_ok and not result.is_err
    assert amounts(result.unwrap()) == decimals("50.00", "50.00")


def test_attempt_wraps_validation_failure():
    """Test that attempt turns a validation error into Err."""
    result = attempt(allocate, usd(100), [0, 0, 0])
    assert result.is_err
    assert result.kind is ErrorKind.ZERO_TOTAL_RATIO
    assert "greater than zero" in result.message


def test_attempt_lets_programming_errors_propagate():
    """Test that attempt re-raises errors that are not validation failures."""
    with pytest.raises(TypeError):
        attempt(allocate, 100, [1])


def test_err_unwrap_raises_original_error_class():
    """Test that unwrapping Err raises the matching error class."""
    result = attempt(allocate, usd(100), [0])
    with pytest.raises(ZeroTotalRatioError):
        result.unwrap()


def test_unwrap_or():
    """Test that unwrap_or returns the default only for Err."""
    assert Ok(1).unwrap_or(2) == 1
    assert Err(ErrorKind.EMPTY_RATIOS, "empty").unwrap_or(2) == 2


def test_combine_returns_first_error():
    """Test that combine returns the first Err it meets."""
    first = Err(ErrorKind.NEGATIVE_RATIO, "negative")
    second = Err(ErrorKind.EMPTY_RATIOS, "empty")
    assert combine([Ok(1), first, second]) is first


def test_combine_collects_values():
    """Test that combine gathers all Ok values into one list."""
    assert combine([Ok(1), Ok(2)]) == Ok([1, 2])
    assert combine([]) == Ok([])
