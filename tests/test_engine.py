#!/usr/bin/env python3
"""
METACFG ENGINE SUITE
--------------------
File-level formatting and editing: dry runs leave files alone, real runs
write atomically with a backup and leave no temporary files behind.
"""

import pytest
from metacfg.core.engine import ConfigEngine

MESSY = (
    "# @doc: HTTP server settings\n"
    "server:\n"
    "\n"
    "    # @doc: Port to listen on\n"
    "    port: 8080\n"
    "    host:localhost\n"
    "- dropped line\n"
)

CANONICAL = (
    "# @doc: HTTP server settings\n"
    "server:\n"
    "  # @doc: Port to listen on\n"
    "  port: 8080\n"
    "  host: localhost\n"
)


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "messy.cfg").write_text(MESSY, encoding="utf-8")
    (tmp_path / "clean.cfg").write_text(CANONICAL, encoding="utf-8")
    return tmp_path


@pytest.fixture
def engine(workspace):
    return ConfigEngine(str(workspace))


def test_dry_run_previews_without_writing(engine, workspace):
    report = engine.format_file("messy.cfg", dry_run=True)
    assert report["success"] is True
    assert report["status"] == "PREVIEW"
    assert report["formatted_content"] == CANONICAL
    assert report["written"] is False
    assert (workspace / "messy.cfg").read_text(encoding="utf-8") == MESSY


def test_format_reports_diagnostics(engine):
    report = engine.format_file("messy.cfg")
    assert any("UNRECOGNIZED_LINE" in d for d in report["diagnostics"])


def test_write_creates_backup_and_no_temp_files(engine, workspace):
    report = engine.format_file("messy.cfg", dry_run=False)
    assert report["status"] == "WRITTEN"
    assert report["written"] is True
    assert (workspace / "messy.cfg").read_text(encoding="utf-8") == CANONICAL

    backup = workspace / report["backup_created"]
    assert backup.read_text(encoding="utf-8") == MESSY
    assert list(workspace.rglob("*.metacfg.tmp")) == []


def test_backups_do_not_overwrite_each_other(engine, workspace):
    engine.format_file("messy.cfg", dry_run=False)
    (workspace / "messy.cfg").write_text(MESSY, encoding="utf-8")
    second = engine.format_file("messy.cfg", dry_run=False)
    assert second["backup_created"] == "messy-1.metacfg.backup"


def test_canonical_file_is_unchanged(engine):
    report = engine.format_file("clean.cfg", dry_run=False)
    assert report["status"] == "UNCHANGED"
    assert report["formatted_content"] is None
    assert report["written"] is False


def test_missing_file(engine):
    report = engine.format_file("nope.cfg")
    assert report["success"] is False
    assert report["status"] == "FILE_NOT_FOUND"


def test_bom_is_ignored(engine, workspace):
    (workspace / "bom.cfg").write_bytes("\ufeffa: 1\n".encode("utf-8"))
    report = engine.format_file("bom.cfg")
    assert report["status"] == "UNCHANGED"


def test_set_value_in_file(engine, workspace):
    report = engine.set_value_in_file("clean.cfg", "server.port", "9090", dry_run=False)
    assert report["success"] is True
    assert report["old_value"] == "8080"
    assert report["status"] == "WRITTEN"
    assert "  port: 9090\n" in (workspace / "clean.cfg").read_text(encoding="utf-8")


def test_set_value_dry_run(engine, workspace):
    report = engine.set_value_in_file("clean.cfg", "server.port", "9090")
    assert report["status"] == "PREVIEW"
    assert "port: 9090" in report["formatted_content"]
    assert (workspace / "clean.cfg").read_text(encoding="utf-8") == CANONICAL


@pytest.mark.parametrize("key_path,status", [
    ("server.nope", "KEY_NOT_FOUND"),
    ("server", "NOT_A_LEAF"),
])
def test_set_value_errors(engine, key_path, status):
    report = engine.set_value_in_file("clean.cfg", key_path, "x")
    assert report["success"] is False
    assert report["status"] == status


@pytest.mark.parametrize("value", ["x\nc: 3", "x\r\nc: 3", "x\r"])
def test_set_value_rejects_line_breaks(engine, workspace, value):
    report = engine.set_value_in_file("clean.cfg", "server.port", value, dry_run=False)
    assert report["success"] is False
    assert report["status"] == "INVALID_VALUE"
    assert (workspace / "clean.cfg").read_text(encoding="utf-8") == CANONICAL
    assert list(workspace.glob("*.metacfg.backup")) == []
