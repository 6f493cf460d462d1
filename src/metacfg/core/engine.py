#!/usr/bin/env python3
"""
METACFG ENGINE - File Orchestrator
----------------------------------
The ConfigEngine runs configuration files through the parse pipeline,
produces canonical exports and applies single-value edits. Writes are
atomic and preceded by a backup; every per-file failure is turned into a
report dict instead of an exception.

Author: MetaCfg Team
Date: 2026-10-19
"""

import os
import time
import shutil
import logging
from pathlib import Path
from typing import Dict, Any

from metacfg.core.store import ConfigStore
from metacfg.parsing.pipeline import ParsePipeline
from metacfg.parsing.exporter import ConfigExporter
from metacfg.parsing.context import ParseContext

logger = logging.getLogger("metacfg.engine")


class ConfigEngine:
    """
    Principal orchestrator for file-level work. All paths are resolved
    against the workspace directory.
    """

    def __init__(self, workspace_path: str = "."):
        self.workspace = Path(workspace_path).resolve()
        self.pipeline = ParsePipeline(collect_diagnostics=True)
        self.exporter = ConfigExporter()

    def load(self, relative_path: str) -> ParseContext:
        """Reads (BOM-aware) and parses one file."""
        full_path = (self.workspace / relative_path).resolve()
        raw_text = full_path.read_text(encoding='utf-8-sig')
        return self.pipeline.run(raw_text)

    def format_file(self, relative_path: str, dry_run: bool = True) -> Dict[str, Any]:
        """
        Re-exports a file in canonical form and writes it back unless dry_run.
        """
        full_path = (self.workspace / relative_path).resolve()
        if not full_path.exists():
            return self._file_error(relative_path, "FILE_NOT_FOUND", f"Path missing: {full_path}")

        try:
            context = self.load(relative_path)
            formatted = self.exporter.export(context.nodes) + "\n"
        except Exception as e:
            logger.error(f"Error processing {relative_path}: {str(e)}")
            return self._file_error(relative_path, "ENGINE_ERROR", str(e))

        is_modified = context.raw_text.strip() != formatted.strip()
        result = {
            "file_path": str(relative_path),
            "success": True,
            "status": self._derive_status(is_modified, dry_run),
            "node_count": len(context.nodes),
            "diagnostics": [str(d) for d in context.diagnostics],
            "original_content": context.raw_text,
            "formatted_content": formatted if is_modified else None,
            "written": False,
            "backup_created": None,
            "timestamp": time.time(),
        }

        if not dry_run and is_modified:
            self._write_with_backup(full_path, formatted, result)
        return result

    def set_value_in_file(self, relative_path: str, key_path: str, value: str,
                          dry_run: bool = True) -> Dict[str, Any]:
        """
        Edits one leaf value, addressed by dotted key path, and re-exports.
        """
        full_path = (self.workspace / relative_path).resolve()
        if not full_path.exists():
            return self._file_error(relative_path, "FILE_NOT_FOUND", f"Path missing: {full_path}")

        try:
            context = self.load(relative_path)
        except Exception as e:
            logger.error(f"Error processing {relative_path}: {str(e)}")
            return self._file_error(relative_path, "ENGINE_ERROR", str(e))

        if "\n" in value or "\r" in value:
            return self._file_error(relative_path, "INVALID_VALUE",
                                    "Values must fit on a single line")

        store = ConfigStore(context.nodes)
        node = store.find(key_path)
        if node is None:
            return self._file_error(relative_path, "KEY_NOT_FOUND", f"No node at '{key_path}'")
        if node.has_children:
            return self._file_error(relative_path, "NOT_A_LEAF", f"'{key_path}' has children")

        node.value = value
        formatted = store.export() + "\n"
        result = {
            "file_path": str(relative_path),
            "success": True,
            "status": self._derive_status(node.is_modified, dry_run),
            "key_path": key_path,
            "old_value": node.original_value,
            "new_value": value,
            "original_content": context.raw_text,
            "formatted_content": formatted,
            "written": False,
            "backup_created": None,
            "timestamp": time.time(),
        }

        if not dry_run and node.is_modified:
            self._write_with_backup(full_path, formatted, result)
        return result

    def _write_with_backup(self, full_path: Path, content: str, result: Dict[str, Any]):
        backup_path = self._create_unique_backup(full_path)
        try:
            shutil.copy2(full_path, backup_path)
            result["backup_created"] = str(backup_path.relative_to(self.workspace))
        except Exception as e:
            result["backup_warning"] = f"Backup failed: {str(e)}"

        try:
            self._atomic_write(full_path, content)
            result["written"] = True
        except IOError as e:
            result["write_error"] = str(e)
            result["success"] = False

    def _derive_status(self, modified: bool, dry: bool) -> str:
        if not modified: return "UNCHANGED"
        if dry: return "PREVIEW"
        return "WRITTEN"

    def _atomic_write(self, target_path: Path, content: str):
        if not os.access(target_path.parent, os.W_OK):
            raise PermissionError(f"No write access to {target_path.parent}")
        temp_file = target_path.with_suffix('.metacfg.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except Exception as e:
            if temp_file.exists(): temp_file.unlink()
            raise IOError(f"Atomic write failed: {str(e)}")

    def _create_unique_backup(self, target_path: Path) -> Path:
        backup_path = target_path.with_suffix('.metacfg.backup')
        counter = 1
        while backup_path.exists():
            backup_path = target_path.with_name(f"{target_path.stem}-{counter}.metacfg.backup")
            counter += 1
        return backup_path

    def _file_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        return {"file_path": str(path), "status": status, "error": error,
                "success": False, "written": False}
