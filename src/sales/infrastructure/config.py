"""Runtime settings.

Values come from the environment, after loading a ``.env`` file at the
project root if one exists.  Settings are read on every call so a
changed environment (or a test's monkeypatch) takes effect immediately.

Environment variables:
- SALES_DATA_DIR: directory holding ``sales.json`` (default ``<project>/data``)
- SALES_LOG_LEVEL: logging level name (default ``WARNING``)
- SALES_CURRENCY: currency code for new sales (default ``USD``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from sales.domain.model.value_objects import DEFAULT_CURRENCY

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str
    currency: str

    @property
    def sales_file(self) -> Path:
        return self.data_dir / "sales.json"


def load_settings() -> Settings:
    load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

    data_dir = os.getenv("SALES_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir) if data_dir else _PROJECT_ROOT / "data",
        log_level=os.getenv("SALES_LOG_LEVEL", "WARNING").upper(),
        currency=os.getenv("SALES_CURRENCY", DEFAULT_CURRENCY).upper(),
    )
