"""
FILE: marc/formatting.py
PURPOSE: Shared formatting utilities for CLI and editor output
EXPORTS:
  - TodoFormatter: Class for formatting todos
  - TagFormatter: Class for formatting tag summaries
DEPENDENCIES:
  - rich (for table formatting)
  - json (for JSON serialization)
  - marc.core.models (TodoRecord, TagSummary)
NOTES:
  - Todos are always passed as (position, record) pairs so numbers shown
    to the user are valid selectors
  - User text is escaped before it reaches rich markup
"""

import json
from typing import Any, Dict, List, Tuple

from rich.markup import escape
from rich.table import Table

from .core.constants import STATUS_DONE_MARK, STATUS_OPEN_MARK
from .core.models import TodoRecord, TagSummary

Numbered = Tuple[int, TodoRecord]


class TodoFormatter:
    """Centralized todo display formatting."""

    @staticmethod
    def create_table(todos: List[Numbered], title: str = "Todos", show_tag: bool = True) -> Table:
        """
        Create Rich table for todos.

        Args:
            todos: (position, record) pairs to display
            title: Table title
            show_tag: Whether to show the tag column
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="cyan", width=4, no_wrap=True)
        table.add_column("", width=1, no_wrap=True)
        table.add_column("Content", style="white")
        if show_tag:
            table.add_column("Tag", style="yellow")

        for position, todo in todos:
            if todo.done:
                status = f"[green]{STATUS_DONE_MARK}[/green]"
                content = f"[dim]{escape(todo.content)}[/dim]"
            else:
                status = f"[yellow]{STATUS_OPEN_MARK}[/yellow]"
                content = escape(todo.content)

            row = [str(position), status, content]
            if show_tag:
                row.append(escape(todo.tag) if todo.tag else "[dim]-[/dim]")
            table.add_row(*row)

        return table

    @staticmethod
    def to_json_dict(position: int, todo: TodoRecord) -> Dict[str, Any]:
        """Convert a numbered todo to a JSON-serializable dict."""
        data = {"position": position}
        data.update(todo.to_dict())
        return data

    @staticmethod
    def to_json_array(todos: List[Numbered]) -> str:
        """Convert numbered todos to a JSON array string."""
        return json.dumps(
            [TodoFormatter.to_json_dict(p, t) for p, t in todos],
            indent=2,
            ensure_ascii=False,
        )

    @staticmethod
    def to_raw_lines(todos: List[Numbered]) -> List[str]:
        """
        Convert todos to plain text lines: "3: [x] content #tag".
        """
        lines = []
        for position, todo in todos:
            marker = "x" if todo.done else " "
            line = f"{position}: [{marker}] {todo.content}"
            if todo.tag:
                line += f" #{todo.tag}"
            lines.append(line)
        return lines


class TagFormatter:
    """Tag summary display formatting."""

    @staticmethod
    def create_table(tags: List[TagSummary], title: str = "Tags") -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Tag", style="yellow")
        table.add_column("Open", style="magenta", justify="right")
        table.add_column("Total", style="blue", justify="right")

        for tag in tags:
            name = escape(tag.name)
            if tag.total == 0:
                name += " [dim](unused)[/dim]"
            table.add_row(name, str(tag.open), str(tag.total))

        return table

    @staticmethod
    def to_json_array(tags: List[TagSummary]) -> str:
        return json.dumps([t.to_dict() for t in tags], indent=2, ensure_ascii=False)

    @staticmethod
    def to_raw_lines(tags: List[TagSummary]) -> List[str]:
        return [f"{t.name} {t.open}/{t.total}" for t in tags]
