from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "MONEY_ALLOCATOR_"


class RemainderPolicy(Enum):
    """Where the minor units lost to flooring go."""

    # Whole remainder to the first share (index 0)
    FIRST = "first"
    # One minor unit each to the shares with the largest fractional remainders
    LARGEST_REMAINDER = "largest_remainder"


@dataclass(frozen=True)
class AllocationConfig:
    """Settings of an `Allocator`.

    Attributes:
        remainder_policy: How the rounding remainder is assigned.
        validation_tolerance: `validate_allocation` accepts a difference strictly below this value.
        percentage_tolerance: Allowed absolute deviation of a percentage list from 100.
        max_parts: Upper bound for `allocate_equally`.
    """

    remainder_policy: RemainderPolicy = RemainderPolicy.FIRST
    validation_tolerance: Decimal = Decimal("0.01")
    percentage_tolerance: Decimal = Decimal("0.01")
    max_parts: int = 10_000

    def __post_init__(self):
        if not isinstance(self.remainder_policy, RemainderPolicy):
            raise TypeError(f"$remainder_policy must be a RemainderPolicy, but provided value is: {self.remainder_policy!r}")
        if self.validation_tolerance < 0:
            raise ValueError(f"$validation_tolerance cannot be negative, but provided value is: {self.validation_tolerance}")
        if self.percentage_tolerance < 0:
            raise ValueError(f"$percentage_tolerance cannot be negative, but provided value is: {self.percentage_tolerance}")
        if self.max_parts < 1:
            raise ValueError(f"$max_parts must be at least 1, but provided value is: {self.max_parts}")

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> AllocationConfig:
        """Build config from environment variables, after loading an optional `.env` file.

        Recognized variables (all optional):
            MONEY_ALLOCATOR_REMAINDER_POLICY: "first" or "largest_remainder"
            MONEY_ALLOCATOR_VALIDATION_TOLERANCE: decimal, e.g. "0.01"
            MONEY_ALLOCATOR_PERCENTAGE_TOLERANCE: decimal, e.g. "0.01"
            MONEY_ALLOCATOR_MAX_PARTS: integer

        Variables already set in the process environment win over the `.env` file.

        Raises:
            ValueError: If a variable holds a value that cannot be parsed.
        """
        load_dotenv(dotenv_path=env_file, override=False)

        defaults = cls()
        config = cls(
            remainder_policy=_read_policy(defaults.remainder_policy),
            validation_tolerance=_read_decimal("VALIDATION_TOLERANCE", defaults.validation_tolerance),
            percentage_tolerance=_read_decimal("PERCENTAGE_TOLERANCE", defaults.percentage_tolerance),
            max_parts=_read_int("MAX_PARTS", defaults.max_parts),
        )
        logger.debug(f"Loaded {config} from environment")
        return config


def _read_raw(name: str) -> str | None:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _read_policy(default: RemainderPolicy) -> RemainderPolicy:
    raw = _read_raw("REMAINDER_POLICY")
    if raw is None:
        return default
    try:
        return RemainderPolicy(raw.lower())
    except ValueError as e:
        choices = [p.value for p in RemainderPolicy]
        raise ValueError(f"{ENV_PREFIX}REMAINDER_POLICY must be one of {choices}, but provided value is: '{raw}'") from e


def _read_decimal(name: str, default: Decimal) -> Decimal:
    raw = _read_raw(name)
    if raw is None:
        return default
    try:
        value = Decimal(raw)
    except InvalidOperation as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be a decimal number, but provided value is: '{raw}'") from e
    if not value.is_finite():
        raise ValueError(f"{ENV_PREFIX}{name} must be finite, but provided value is: '{raw}'")
    return value


def _read_int(name: str, default: int) -> int:
    raw = _read_raw(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, but provided value is: '{raw}'") from e
