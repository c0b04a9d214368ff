"""
FILE: marc/editor/__init__.py
PURPOSE: Interactive line-oriented todo editor
EXPORTS:
  - run_editor(config, console, read_line) -> EditorSession
  - EditorSession
"""

from .main import run_editor
from .session import EditorSession

__all__ = ["run_editor", "EditorSession"]
