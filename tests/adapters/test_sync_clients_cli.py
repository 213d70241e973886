"""Tests for the sync_clients_cli adapter."""

import io
from pathlib import Path
from unittest.mock import MagicMock

from src.adapters import sync_clients_cli
from src.application.use_cases.sync_clients import SyncCleanupResult


def _patch(monkeypatch) -> tuple[MagicMock, MagicMock]:
    use_case = MagicMock()
    use_case.cleanup.return_value = SyncCleanupResult(2, 3)
    logger = MagicMock()
    monkeypatch.setattr(
        sync_clients_cli,
        "build_database_adapter",
        lambda: "adapter",
    )
    monkeypatch.setattr(
        sync_clients_cli,
        "build_sync_use_case",
        lambda db_port: use_case,
    )
    monkeypatch.setattr(sync_clients_cli, "get_app_logger", lambda: logger)
    return use_case, logger


def test_main_reads_ids_from_file(monkeypatch, capsys, tmp_path: Path):
    use_case, _ = _patch(monkeypatch)
    ids_file = tmp_path / "active.txt"
    ids_file.write_text("file-1\n\n file-2 \nfile-3\n", encoding="utf-8")

    sync_clients_cli.main([str(ids_file)])

    use_case.cleanup.assert_called_once_with(["file-1", "file-2", "file-3"])
    assert "Deactivated 2 clients" in capsys.readouterr().out


def test_main_reads_ids_from_stdin(monkeypatch, capsys):
    use_case, _ = _patch(monkeypatch)
    monkeypatch.setattr(sync_clients_cli.sys, "stdin", io.StringIO("a\nb\n"))

    sync_clients_cli.main([])

    use_case.cleanup.assert_called_once_with(["a", "b"])


def test_main_logs_missing_file(monkeypatch, tmp_path: Path):
    use_case, logger = _patch(monkeypatch)

    sync_clients_cli.main([str(tmp_path / "missing.txt")])

    logger.error.assert_called_once()
    use_case.cleanup.assert_not_called()
