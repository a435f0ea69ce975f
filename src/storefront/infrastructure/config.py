"""Runtime settings, read from ``STOREFRONT_*`` environment variables.

The CLI binds the same variables through click's ``envvar`` options;
``Settings.from_env`` serves callers that build the handlers without it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "STOREFRONT_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", cls.log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, "
                f"got {log_level!r}"
            )
        log_format = env.get(f"{ENV_PREFIX}LOG_FORMAT", cls.log_format).lower()
        if log_format not in LOG_FORMATS:
            raise ValueError(
                f"{ENV_PREFIX}LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, "
                f"got {log_format!r}"
            )
        return cls(
            data_dir=Path(env.get(f"{ENV_PREFIX}DATA_DIR", str(cls.data_dir))),
            log_level=log_level,
            log_format=log_format,
        )

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"
