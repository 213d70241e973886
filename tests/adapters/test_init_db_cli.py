"""Tests for the init_db_cli adapter."""

from pathlib import Path
from unittest.mock import MagicMock

from sqlalchemy import create_engine, inspect

from src.adapters import init_db_cli
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter


def test_main_creates_tables(monkeypatch, tmp_path: Path):
    engine = create_engine(f"sqlite:///{tmp_path / 'dashboard.db'}")
    logger = MagicMock()
    monkeypatch.setattr(
        init_db_cli,
        "build_database_adapter",
        lambda: SqlAlchemyDatabaseEngineAdapter(engine),
    )
    monkeypatch.setattr(init_db_cli, "get_app_logger", lambda: logger)

    init_db_cli.main()

    assert set(inspect(engine).get_table_names()) == {
        "clients",
        "investments",
        "payments",
        "sales",
        "expenses",
    }
    logger.info.assert_called_once()
