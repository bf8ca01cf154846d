"""Environment-backed configuration for the search client."""

import logging
import os
from typing import Any


class HelperConfig:
    """Reads typed settings from environment variables and hands out the shared logger."""

    def __init__(self, logger: Any = None, environ: dict[str, str] | None = None) -> None:
        self._logger = logger or logging.getLogger("meili_client")
        self._environ = environ if environ is not None else os.environ

    def _get_raw(self, key: str) -> str | None:
        """Return the stripped value of ``key`` (case-insensitive), None when unset or empty."""
        val = self._environ.get(key.upper())
        if val is None or not val.strip():
            return None
        return val.strip()

    def _require(self, key: str, default: Any) -> Any:
        if default is None:
            raise ValueError(f"Environment variable '{key.upper()}' is not set.")
        return default

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (str | None): Fallback value if the variable is not set.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        raw = self._get_raw(key)
        return raw if raw is not None else self._require(key, default)

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric environment variable.

        Raises:
            ValueError: If the variable is not set and no default is provided.
            ValueError: If the value cannot be parsed as a number.
        """
        raw = self._get_raw(key)
        if raw is None:
            return self._require(key, default)
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key.upper()}' is not a valid number: '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        raw = self._get_raw(key)
        if raw is None:
            return self._require(key, default)
        return raw.lower() in ("true", "1", "yes")

    def get_list_val(self, key: str, default: list[str] | None = None, separator: str = ",", element_type: type = str) -> list:
        """Read a list environment variable written as "[elem1,elem2,...]".

        Args:
            key (str): Environment variable name (case-insensitive).
            default (list[str] | None): Fallback value if the variable is not set.
            separator (str): The delimiter between elements.
            element_type (type): The type to which each element is cast.

        Raises:
            ValueError: If the variable is not set and no default is provided, is not bracketed, or holds elements that cannot be cast.
        """
        raw = self._get_raw(key)
        if raw is None:
            return self._require(key, default)
        if not raw.startswith("[") or not raw.endswith("]"):
            raise ValueError(f"Environment variable '{key.upper()}' must be in the format '[elem1{separator}elem2{separator}...]'. Got: '{raw}'")
        elements = [v.strip() for v in raw[1:-1].split(separator) if v.strip()]
        try:
            return [element_type(elem) for elem in elements]
        except ValueError as e:
            raise ValueError(f"Environment variable '{key.upper()}' contains invalid elements: {e}. Type set to {element_type.__name__}. Got: '{raw}'")

    def get_logger(self) -> Any:
        """Return the application logger."""
        return self._logger
