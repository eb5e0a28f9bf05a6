"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DATA_DIR_ENV = "ORDERDESK_DATA_DIR"
LOG_LEVEL_ENV = "ORDERDESK_LOG_LEVEL"


def default_data_dir() -> Path:
    """``./data`` under the directory the process was started from."""
    return Path.cwd() / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = field(default_factory=default_data_dir)

    @property
    def customers_file(self) -> Path:
        return self.data_dir / "customers.json"

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        data_dir = env.get(DATA_DIR_ENV)
        if data_dir:
            return Settings(data_dir=Path(data_dir).expanduser())
        return Settings()
