#!/usr/bin/env python3
"""
METACFG CLI - Terminal Front End
--------------------------------
Subcommand routing over the ConfigEngine: tree view, canonical
formatting with side-by-side diffs, diagnostics, single-value edits and
standard YAML rendering.

Author: MetaCfg Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from metacfg.core.engine import ConfigEngine
from metacfg.core.store import ConfigStore
from metacfg.bridge.yaml_bridge import YamlBridge
from metacfg.cli.formatter import ConfigFormatter, console

VERSION = "0.1.0"


class MetaCfgCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="metacfg",
            description="MetaCfg - documented configuration parser & formatter",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ConfigFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"metacfg v{VERSION}")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        show_parser = subparsers.add_parser("show", help="Display the configuration tree")
        show_parser.add_argument("path", help="Path to a configuration file")
        show_parser.add_argument("--docs", action="store_true", help="Include metadata tags")

        fmt_parser = subparsers.add_parser("fmt", help="Re-export in canonical form")
        fmt_parser.add_argument("path", help="Path to a configuration file")
        fmt_parser.add_argument("--diff", action="store_true", help="Display side-by-side comparison")
        fmt_parser.add_argument("--write", action="store_true", help="Write the result back to disk")

        check_parser = subparsers.add_parser("check", help="List lines and comments the parser drops")
        check_parser.add_argument("path", help="Path to a configuration file")

        get_parser = subparsers.add_parser("get", help="Print one value by dotted key path")
        get_parser.add_argument("path", help="Path to a configuration file")
        get_parser.add_argument("key_path", help="Dotted key path, e.g. server.port")

        set_parser = subparsers.add_parser("set", help="Change one value by dotted key path")
        set_parser.add_argument("path", help="Path to a configuration file")
        set_parser.add_argument("key_path", help="Dotted key path, e.g. server.port")
        set_parser.add_argument("value", help="New value")
        set_parser.add_argument("--write", action="store_true", help="Write the result back to disk")

        yaml_parser = subparsers.add_parser("yaml", help="Render as standard YAML")
        yaml_parser.add_argument("path", help="Path to a configuration file")
        yaml_parser.add_argument("--no-meta", action="store_true", help="Omit metadata comments")

    def _engine_for(self, path: str):
        """Returns (engine, relative name) or exits when the file is missing."""
        input_path = Path(path).resolve()
        if not input_path.is_file():
            console.print(f"[bold red]Error:[/bold red] File '{path}' not found.")
            sys.exit(1)
        return ConfigEngine(str(input_path.parent)), input_path.name

    def _cmd_show(self, args: argparse.Namespace) -> int:
        engine, name = self._engine_for(args.path)
        context = engine.load(name)
        self.formatter.display_tree(context.nodes, name, show_docs=args.docs)
        return 0

    def _cmd_fmt(self, args: argparse.Namespace) -> int:
        engine, name = self._engine_for(args.path)
        report = engine.format_file(name, dry_run=not args.write)
        return self._render_report(report, args.diff)

    def _cmd_check(self, args: argparse.Namespace) -> int:
        engine, name = self._engine_for(args.path)
        context = engine.load(name)
        self.formatter.print_diagnostics(context.diagnostics, name)
        return 1 if context.diagnostics else 0

    def _cmd_get(self, args: argparse.Namespace) -> int:
        engine, name = self._engine_for(args.path)
        node = ConfigStore(engine.load(name).nodes).find(args.key_path)
        if node is None:
            console.print(f"[bold red]Error:[/bold red] No node at '{args.key_path}'.")
            return 1
        if node.has_children:
            self.formatter.display_tree(node.children, args.key_path)
        else:
            console.print(node.value, markup=False, highlight=False)
        return 0

    def _cmd_set(self, args: argparse.Namespace) -> int:
        engine, name = self._engine_for(args.path)
        report = engine.set_value_in_file(name, args.key_path, args.value, dry_run=not args.write)
        return self._render_report(report, show_diff=True)

    def _cmd_yaml(self, args: argparse.Namespace) -> int:
        engine, name = self._engine_for(args.path)
        bridge = YamlBridge(include_meta=not args.no_meta)
        self.formatter.display_yaml(bridge.dump(engine.load(name).nodes), name)
        return 0

    def _render_report(self, report: dict, show_diff: bool) -> int:
        if not report.get("success"):
            error = report.get("error") or report.get("write_error")
            console.print(f"[bold red]{report.get('status', 'FAILED')}:[/bold red] {escape(str(error))}")
            return 1

        if show_diff and report.get("formatted_content"):
            self.formatter.display_diff(report["file_path"], report["original_content"],
                                        report["formatted_content"])

        status = report["status"]
        color = "green" if status in ("UNCHANGED", "WRITTEN") else "yellow"
        lines = [f"Status: [{color}]{status}[/{color}]"]
        if report.get("backup_created"):
            lines.append(f"Backup: {report['backup_created']}")
        if report.get("backup_warning"):
            lines.append(f"[yellow]{report['backup_warning']}[/yellow]")
        console.print(Panel("\n".join(lines), title=report["file_path"], border_style="dim"))
        return 0

    def run(self, argv=None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

        handlers = {
            "show": self._cmd_show,
            "fmt": self._cmd_fmt,
            "check": self._cmd_check,
            "get": self._cmd_get,
            "set": self._cmd_set,
            "yaml": self._cmd_yaml,
        }
        handler = handlers.get(args.command)
        if handler is None:
            self.parser.print_help()
            return 0

        try:
            return handler(args)
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(MetaCfgCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
