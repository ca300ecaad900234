"""Alembic migration helpers for the rosterpy schema."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from rosterpy.config.storage import get_database_uri

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[5]
PYPROJECT_PATH: Final[Path] = PROJECT_ROOT / "pyproject.toml"
MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def _alembic_options() -> dict[str, str]:
    """``[tool.alembic]`` of pyproject.toml; empty for an installed package."""

    if not PYPROJECT_PATH.is_file():
        return {}
    with PYPROJECT_PATH.open("rb") as handle:
        document = tomllib.load(handle)
    section = document.get("tool", {}).get("alembic", {})
    return {str(key): str(value) for key, value in section.items()}


def build_config() -> Config:
    """Alembic config whose script location always points at this package."""

    options = _alembic_options()
    config = Config()
    # migrations always ship inside the package
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    for key, value in options.items():
        if key in {"script_location", "prepend_sys_path"}:
            continue
        config.set_main_option(key, value)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Upgrade the database schema to the latest revision."""

    config = build_config()
    if engine is not None:
        with engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")
        return
    config.set_main_option("sqlalchemy.url", database_uri or get_database_uri())
    command.upgrade(config, "head")
