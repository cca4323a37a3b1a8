"""Configuration module for dnsprop.

Loads and validates environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List
from urllib.parse import urlparse

from dnsprop.utils.fleet_catalog import DEFAULT_RESOLVERS
from dnsprop.utils.validation import validate_servers


TRUE_VALUES = ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Resolver Configuration
    resolvers: List[str]
    request_timeout: float
    resolver_concurrency: int
    enable_dnssec: bool

    # Remote resolver service (None = query the fleet directly)
    api_base_url: str | None

    # Operational Configuration
    theme_file: Path
    verbose: bool

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If variables are invalid.

        Returns:
            Config: Validated configuration instance.
        """
        # Resolver Configuration
        resolvers_str = os.getenv("RESOLVERS", "")
        if resolvers_str.strip():
            try:
                resolvers = validate_servers(resolvers_str.split(","))
            except ValueError as e:
                raise ValueError(f"RESOLVERS is invalid: {e}") from e
        else:
            resolvers = list(DEFAULT_RESOLVERS)
        if not resolvers:
            raise ValueError("RESOLVERS must contain at least one server")

        request_timeout = cls._get_float_env("REQUEST_TIMEOUT", "2")
        if not 0 < request_timeout <= 30:
            raise ValueError("REQUEST_TIMEOUT must be between 0 and 30 seconds")

        resolver_concurrency = cls._get_int_env("RESOLVER_CONCURRENCY", "20")
        if not 1 <= resolver_concurrency <= 100:
            raise ValueError("RESOLVER_CONCURRENCY must be between 1 and 100")

        enable_dnssec = os.getenv("ENABLE_DNSSEC", "false").lower() in TRUE_VALUES

        # Remote resolver service
        api_base_url = os.getenv("API_BASE_URL", "").strip() or None
        if api_base_url:
            parsed = urlparse(api_base_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError("API_BASE_URL must be an HTTP or HTTPS URL")

        # Operational Configuration
        theme_file = Path(os.getenv("THEME_FILE", "~/.dnsprop.yaml")).expanduser()
        verbose = os.getenv("VERBOSE", "false").lower() in TRUE_VALUES

        return cls(
            resolvers=resolvers,
            request_timeout=request_timeout,
            resolver_concurrency=resolver_concurrency,
            enable_dnssec=enable_dnssec,
            api_base_url=api_base_url,
            theme_file=theme_file,
            verbose=verbose,
        )

    @staticmethod
    def _get_int_env(key: str, default: str) -> int:
        """Get integer environment variable or raise ValueError.

        Args:
            key: Environment variable name.
            default: Value used when the variable is unset.

        Returns:
            int: Parsed value.

        Raises:
            ValueError: If the value is not an integer.
        """
        value = os.getenv(key, default)
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}") from None

    @staticmethod
    def _get_float_env(key: str, default: str) -> float:
        value = os.getenv(key, default)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{key} must be a number, got {value!r}") from None
