"""Configuration management for the Open PHACTS client.

This module handles loading configuration from environment variables
and .env files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_URL = "https://beta.openphacts.org/1.5"
DEFAULT_TIMEOUT = 30.0


@dataclass
class Config:
    """Client configuration loaded from environment."""

    base_url: str = DEFAULT_BASE_URL

    # Application credentials issued by the platform
    app_id: str | None = None
    app_key: str | None = None

    # Options
    timeout: float = DEFAULT_TIMEOUT
    default_lens: str | None = None
    datasets_file: Path | None = None

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Config:
        """Load configuration from environment variables and optional .env file.

        Args:
            env_file: Optional path to .env file. If None, looks for .env in cwd.

        Returns:
            Config instance with values from environment.

        Raises:
            ValueError: If a numeric setting cannot be parsed.
        """
        if env_file is None:
            env_file = Path(".env")

        if env_file.exists():
            _load_dotenv(env_file)

        raw_timeout = os.environ.get("OPS_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ValueError(f"OPS_TIMEOUT must be a number, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ValueError("OPS_TIMEOUT must be positive")

        datasets_file = os.environ.get("OPS_DATASETS_FILE") or None

        return cls(
            base_url=(os.environ.get("OPS_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            app_id=os.environ.get("OPS_APP_ID") or None,
            app_key=os.environ.get("OPS_APP_KEY") or None,
            timeout=timeout,
            default_lens=os.environ.get("OPS_LENS") or None,
            datasets_file=Path(datasets_file) if datasets_file else None,
        )

    def has_credentials(self) -> bool:
        """Check if both application id and key are configured."""
        return bool(self.app_id and self.app_key)


def _load_dotenv(path: Path) -> None:
    """Parse KEY=VALUE lines from ``path`` into the environment.

    Comments and blank lines are skipped and surrounding quotes stripped.
    Existing environment variables are left untouched.
    """
    try:
        with path.open() as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, _, value = line.partition("=")
                key = key.strip()
                if key.startswith("export "):
                    key = key[len("export ") :].strip()
                value = value.strip()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                    value = value[1:-1]
                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        pass  # An unreadable .env is treated like a missing one
