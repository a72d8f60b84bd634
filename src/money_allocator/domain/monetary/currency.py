from __future__ import annotations

import logging
import re
from typing import Dict

from bidict import bidict

from money_allocator.domain.monetary.errors import InvalidCurrencyError

logger = logging.getLogger(__name__)

# ISO 4217 alphabetic code: exactly three letters
_CODE_PATTERN = re.compile(r"^[A-Za-z]{3}$")


class Currency:
    """Represents an ISO 4217 currency with code, precision and metadata.

    Attributes:
        code (str): Three-letter upper case currency code (e.g., "USD", "JPY").
        precision (int): Number of minor-unit decimal places (0-8).
        name (str): Full currency name.
        numeric_code (int | None): ISO 4217 numeric code (e.g., 840 for USD), if known.
    """

    # Minor-unit count used for well-formed codes missing from the registry
    DEFAULT_PRECISION = 2
    MAX_PRECISION = 8

    # Class-level registry for predefined currencies
    _registry: Dict[str, "Currency"] = {}
    # Bi-directional mapping between alphabetic and numeric ISO codes
    _numeric_codes: bidict[str, int] = bidict()

    __slots__ = ("_code", "_precision", "_name", "_numeric_code")

    def __init__(self, code: str, precision: int, name: str, numeric_code: int | None = None):
        """Initialize a Currency instance.

        Args:
            code (str): Three-letter currency code (e.g., "USD"); normalized to upper case.
            precision (int): Number of minor-unit decimal places (0-8).
            name (str): Full currency name.
            numeric_code (int | None): ISO 4217 numeric code.

        Raises:
            InvalidCurrencyError: If $code is not exactly three letters.
            ValueError: If other parameters are invalid.
        """
        self._code = self.normalize_code(code)

        if isinstance(precision, bool) or not isinstance(precision, int) or not 0 <= precision <= self.MAX_PRECISION:
            raise ValueError(f"$precision must be an integer between 0 and {self.MAX_PRECISION}, but provided value is: {precision}")

        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        if numeric_code is not None and (isinstance(numeric_code, bool) or not isinstance(numeric_code, int) or not 0 < numeric_code < 1000):
            raise ValueError(f"$numeric_code must be an integer between 1 and 999, but provided value is: {numeric_code}")

        self._precision = precision
        self._name = name.strip()
        self._numeric_code = numeric_code

    @staticmethod
    def normalize_code(code: str) -> str:
        """Validate a currency code and return it in upper case.

        Raises:
            InvalidCurrencyError: If $code is not a string of exactly three letters.
        """
        if not isinstance(code, str):
            raise InvalidCurrencyError(f"$code must be a string, but provided value is: {code!r}")

        normalized = code.strip()
        if not _CODE_PATTERN.match(normalized):
            raise InvalidCurrencyError(f"$code must be exactly 3 letters (ISO 4217), but provided value is: '{code}'")

        return normalized.upper()

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def precision(self) -> int:
        """Get the number of minor-unit decimal places."""
        return self._precision

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def numeric_code(self) -> int | None:
        """Get the ISO 4217 numeric code."""
        return self._numeric_code

    @property
    def is_registered(self) -> bool:
        return self.__class__._registry.get(self._code) is self

    @classmethod
    def register(cls, currency: "Currency", overwrite: bool = False) -> None:
        """Register a currency in the global registry.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to overwrite existing currency.

        Raises:
            ValueError: If currency already exists and overwrite is False.
            TypeError: If currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        cls._registry[currency.code] = currency
        if currency.numeric_code is not None:
            # `forceput` drops a stale pairing on either side when a currency is re-registered
            cls._numeric_codes.forceput(currency.code, currency.numeric_code)

    @classmethod
    def from_str(cls, code: str) -> "Currency":
        """Get currency from registry by code.

        Args:
            code (str): Currency code to look up.

        Returns:
            Currency: The currency instance.

        Raises:
            InvalidCurrencyError: If $code is malformed.
            ValueError: If currency code is not found in registry.
        """
        code = cls.normalize_code(code)
        if code not in cls._registry:
            raise ValueError(f"Currency with code '{code}' not found in registry. Available currencies: {list(cls._registry.keys())}")

        return cls._registry[code]

    @classmethod
    def from_numeric(cls, numeric_code: int) -> "Currency":
        """Get currency from registry by ISO 4217 numeric code (e.g., 392 -> JPY).

        Raises:
            ValueError: If no registered currency has $numeric_code.
        """
        code = cls._numeric_codes.inverse.get(numeric_code)
        if code is None:
            raise ValueError(f"Currency with numeric code {numeric_code} not found in registry")
        return cls._registry[code]

    @classmethod
    def resolve(cls, currency: "Currency | str") -> "Currency":
        """Turn a Currency or a currency code into a Currency.

        Registered codes return the registered instance. Well-formed codes that are
        not registered still resolve, with `DEFAULT_PRECISION` minor units.

        Raises:
            InvalidCurrencyError: If $currency is neither a Currency nor a 3-letter code.
        """
        if isinstance(currency, Currency):
            return currency

        code = cls.normalize_code(currency)
        registered = cls._registry.get(code)
        if registered is not None:
            return registered

        logger.warning(f"Currency code '{code}' is not registered; using {cls.DEFAULT_PRECISION} minor units")
        return cls(code, cls.DEFAULT_PRECISION, code)

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', {self.precision}, '{self.name}')"
