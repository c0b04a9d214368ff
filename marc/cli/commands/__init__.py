"""
FILE: marc/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .todos import (
    add,
    log,
    done,
    undone,
    rm,
    show,
    edit,
)
from .tags import (
    tag_command,
)
from .system import (
    version,
    help,
)

__all__ = [
    "add",
    "log",
    "done",
    "undone",
    "rm",
    "show",
    "edit",
    "tag_command",
    "version",
    "help",
]
