from __future__ import annotations

import os
from decimal import Decimal

import pytest

from money_allocator.config import AllocationConfig, RemainderPolicy

ENV_NAMES = [
    "MONEY_ALLOCATOR_REMAINDER_POLICY",
    "MONEY_ALLOCATOR_VALIDATION_TOLERANCE",
    "MONEY_ALLOCATOR_PERCENTAGE_TOLERANCE",
    "MONEY_ALLOCATOR_MAX_PARTS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    # load_dotenv writes straight into os.environ
    for name in ENV_NAMES:
        os.environ.pop(name, None)


def test_defaults():
    """Test the default configuration values."""
    config = AllocationConfig()
    assert config.remainder_policy is RemainderPolicy.FIRST
    assert config.validation_tolerance == Decimal("0.01")
    assert config.percentage_tolerance == Decimal("0.01")
    assert config.max_parts == 10_000


def test_from_env_without_variables_uses_defaults(clean_env, tmp_path):
    """Test that an empty environment gives the default config."""
    empty_env_file = tmp_path / ".env"
    empty_env_file.write_text("")
    assert AllocationConfig.from_env(empty_env_file) == AllocationConfig()


def test_from_env_reads_dotenv_file(clean_env, tmp_path):
    """Test that settings are read from a .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        "MONEY_ALLOCATOR_REMAINDER_POLICY=largest_remainder\n"
        "MONEY_ALLOCATOR_VALIDATION_TOLERANCE=0.005\n"
        "MONEY_ALLOCATOR_MAX_PARTS=12\n"
    )
    config = AllocationConfig.from_env(env_file)

    assert config.remainder_policy is RemainderPolicy.LARGEST_REMAINDER
    assert config.validation_tolerance == Decimal("0.005")
    assert config.max_parts == 12
    assert config.percentage_tolerance == Decimal("0.01")


def test_process_environment_wins_over_dotenv_file(clean_env, tmp_path):
    """Test that process variables take precedence over the .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text("MONEY_ALLOCATOR_MAX_PARTS=12\n")
    clean_env.setenv("MONEY_ALLOCATOR_MAX_PARTS", "50")

    assert AllocationConfig.from_env(env_file).max_parts == 50


@pytest.mark.parametrize(
    "name, value",
    [
        ("MONEY_ALLOCATOR_REMAINDER_POLICY", "last"),
        ("MONEY_ALLOCATOR_VALIDATION_TOLERANCE", "abc"),
        ("MONEY_ALLOCATOR_PERCENTAGE_TOLERANCE", "Infinity"),
        ("MONEY_ALLOCATOR_MAX_PARTS", "1.5"),
        ("MONEY_ALLOCATOR_MAX_PARTS", "0"),
    ],
)
def test_from_env_rejects_bad_values(clean_env, tmp_path, name, value):
    """Test that malformed variable values raise ValueError."""
    clean_env.setenv(name, value)
    with pytest.raises(ValueError):
        AllocationConfig.from_env(tmp_path / "missing.env")


def test_invalid_config_values():
    """Test that invalid constructor arguments are rejected."""
    with pytest.raises(ValueError):
        AllocationConfig(validation_tolerance=Decimal("-0.01"))
    with pytest.raises(TypeError):
        AllocationConfig(remainder_policy="first")
