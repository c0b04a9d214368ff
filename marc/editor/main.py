"""
FILE: marc/editor/main.py
PURPOSE: Interactive editor loop with prompt-toolkit
EXPORTS:
  - run_editor(config, console, read_line) -> EditorSession
DEPENDENCIES:
  - prompt_toolkit (prompt, history, completion)
  - rich (formatted output)
  - marc.core.repository (load/save)
  - marc.editor.session (EditorSession)
NOTES:
  - Uses prompt_toolkit when stdin and stdout are TTYs, plain input() otherwise
  - Ctrl+C cancels the current line; Ctrl+D, "exit" or "quit" leave and save
  - "abort" leaves without saving
  - The store is written once, on exit, and only if something changed
"""

import logging
import sys
from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console

from ..core import repository
from ..core.config import Config
from .completer import create_completer
from .parser import parse_command
from .session import EditorSession

logger = logging.getLogger(__name__)


def _make_reader(session: EditorSession) -> Callable[[str], str]:
    """Pick prompt_toolkit for real terminals, input() for pipes."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return input

    try:
        prompt_session = PromptSession(
            history=InMemoryHistory(),
            completer=create_completer(session),
            complete_while_typing=True,
        )
    except Exception as e:
        session.console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
        return input

    return prompt_session.prompt


def run_editor(
    config: Config,
    console: Optional[Console] = None,
    read_line: Optional[Callable[[str], str]] = None,
) -> EditorSession:
    """
    Run the editor until the user leaves.

    Args:
        config: Where the store lives
        console: Rich console for output (defaults to a new stdout console)
        read_line: Line reader taking the prompt text (defaults to
            prompt_toolkit or input()); raising EOFError ends the session

    Returns:
        The finished session (dirty/discard tell what happened)

    Raises:
        StoreError: If the store can't be loaded or saved
    """
    console = console or Console()
    store = repository.load(config.store_path)
    session = EditorSession(store, console)
    reader = read_line or _make_reader(session)

    console.print("[bold cyan]marc editor[/bold cyan] - Type 'help' for commands, 'exit' to save and quit")
    console.print()
    session.show()

    while True:
        try:
            line = reader(session.get_prompt())
            if not session.execute(parse_command(line)):
                break
        except KeyboardInterrupt:
            console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            console.print()
            break

    if session.discard:
        if session.dirty:
            console.print("[yellow]Changes discarded[/yellow]")
        return session

    if session.dirty:
        repository.save(config.store_path, session.store)
        logger.debug("Editor session saved to %s", config.store_path)
        console.print(f"[green]✓ Saved {len(session.store.todos)} todo(s)[/green]")
    else:
        console.print("[dim]No changes[/dim]")
    return session
