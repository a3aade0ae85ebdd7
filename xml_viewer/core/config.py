# ------------------------------------------------------------
# Module: xml_viewer/core/config.py
# Purpose: Central, typed application settings with optional env overrides.
# ------------------------------------------------------------

"""Typed configuration hub for the XML viewer.

Responsibilities
----------------
- Provide strongly-typed paths, toggles, and view parameters.
- Load a `.env` file (if present) and apply `XMLVIEWER_*` overrides.

Notes
-----
- Import the module-level `settings`; do not re-create Settings().
- Tests patch attributes on `settings` directly (it is not frozen).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load variables from .env file (if present)
load_dotenv()

ENV_PREFIX = "XMLVIEWER_"


def _detect_project_root() -> Path:
    """Locate repo root (directory containing pyproject.toml)."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    # Fallback: 2 levels up from .../xml_viewer/core/config.py → repo root
    return here.parents[2]


class Settings(BaseModel):
    """
    Application configuration with code defaults.

    Notes
    -----
    - Extras are forbidden to surface typos/unknown keys early.
    - Paths are resolved to absolute; directories are created elsewhere.
    """

    model_config = dict(extra="forbid", validate_assignment=True)

    PROJECT_ROOT: Path = Field(default_factory=_detect_project_root)
    DATA_DIR: Path = Field(default_factory=lambda: _detect_project_root() / "data")
    # SQLite file backing the visible-columns key-value store.
    STATE_DB: Path = Field(
        default_factory=lambda: _detect_project_root() / "data" / "state.sqlite"
    )

    # App toggles
    APP_ENV: Literal["dev", "prod"] = "dev"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    ACCESS_LOG: bool = True
    MUTE_ALL_LOGS: bool = False
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    MAX_UPLOAD_MB: int = Field(50, ge=1)

    # View knobs
    PAGE_SIZE: int = Field(10, ge=1, description="Records per page")
    ROW_TAG: str = Field("Table1", min_length=1, description="Repeated row element")
    FLATTEN_CHILDREN: bool = False
    MAX_SESSIONS: int = Field(256, ge=1, description="Live viewer sessions kept")

    # Accept comma-separated string or list for CORS_ORIGINS; normalize to list[str].
    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _coerce_origins(cls, v: str | list[str]):
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # Convert incoming values to Path objects (supports strings like "~/.x").
    @field_validator("DATA_DIR", "STATE_DB", mode="before")
    @classmethod
    def _coerce_path(cls, v: str | Path):
        return v if isinstance(v, Path) else Path(v).expanduser()

    @field_validator("DATA_DIR", "STATE_DB", mode="after")
    @classmethod
    def _abs_path(cls, v: Path):
        return v.resolve()

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from code defaults plus `XMLVIEWER_*` variables.

        Only known fields are read; values are validated by pydantic, so a
        bad override (e.g. PAGE_SIZE=0) fails at startup.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is not None:
                overrides[name] = raw
        return cls(**overrides)


# Eagerly instantiate once at import.
settings = Settings.from_env()
