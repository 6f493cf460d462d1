# src/metacfg/cli/formatter.py
from typing import List
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from metacfg.core.models import ConfigNode, Diagnostic

# Initialize the Rich console for high-quality terminal output
console = Console()


class ConfigFormatter:
    """
    ConfigFormatter: the visual side of the CLI.
    Renders node trees, side-by-side diffs and diagnostic tables.
    """

    def _add_nodes(self, branch: Tree, nodes: List[ConfigNode], show_docs: bool):
        for node in nodes:
            if node.has_children:
                label = f"[bold cyan]{node.key}[/bold cyan]"
            else:
                label = f"[cyan]{node.key}[/cyan]: [white]{escape(node.value or '')}[/white]"
            child = branch.add(label)

            if show_docs:
                for tag, content in node.meta.items():
                    text = content.replace('\n', ' / ')
                    child.add(f"[dim]@{tag}:[/dim] [italic]{escape(text)}[/italic]")

            self._add_nodes(child, node.children, show_docs)

    def display_tree(self, nodes: List[ConfigNode], title: str, show_docs: bool = False):
        tree = Tree(f"[bold white]{escape(title)}[/bold white]")
        self._add_nodes(tree, nodes, show_docs)
        console.print(tree)

    def display_diff(self, file_name: str, old_content: str, new_content: str):
        """
        Renders a side-by-side comparison of the original and exported text.
        """
        old_syntax = Syntax(old_content.strip(), "yaml", theme="ansi_dark", line_numbers=True)
        new_syntax = Syntax(new_content.strip(), "yaml", theme="monokai", line_numbers=True)

        layout_table = Table.grid(expand=True, padding=1)
        layout_table.add_column(ratio=1)
        layout_table.add_column(ratio=1)

        layout_table.add_row(
            Panel(old_syntax, title=f"[bold red]ORIGINAL: {file_name}[/bold red]", border_style="red"),
            Panel(new_syntax, title=f"[bold green]EXPORTED: {file_name}[/bold green]", border_style="green")
        )
        console.print(layout_table)

    def display_yaml(self, text: str, file_name: str):
        console.print(Panel(Syntax(text.rstrip(), "yaml", theme="monokai"),
                            title=f"YAML: {file_name}", border_style="cyan"))

    def print_diagnostics(self, diagnostics: List[Diagnostic], file_name: str):
        if not diagnostics:
            console.print(f"[green]✅ {file_name}: no dropped lines or comments.[/green]")
            return

        table = Table(title=f"Diagnostics: {file_name}", show_header=True, header_style="bold magenta")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Code", style="bold yellow")
        table.add_column("Message")

        for d in diagnostics:
            table.add_row(str(d.line_no), d.code, escape(d.message))

        console.print(table)
