"""
FILE: marc/editor/completer.py
PURPOSE: Autocomplete for editor commands and tag names
EXPORTS:
  - EditorCompleter (Completer for command/arg completion)
  - create_completer(session) -> EditorCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
NOTES:
  - Suggests command names at the start of the line
  - Suggests todo numbers after commands that take a selector
  - Suggests known tag names after "tag <selector> " and "ls "
  - Case-insensitive matching
"""

from typing import Callable, Iterable, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document


class EditorCompleter(Completer):
    """Context-aware completion for the editor prompt."""

    COMMANDS = [
        "ls", "log", "drop", "rm", "done", "undone", "text", "tag", "untag",
        "help", "clear", "exit", "quit", "abort",
    ]

    SELECTOR_COMMANDS = {"drop", "rm", "done", "undone", "text", "tag", "untag"}

    def __init__(self, get_tags: Callable[[], List[str]], get_count: Callable[[], int]):
        self._get_tags = get_tags
        self._get_count = get_count

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        words = text.split()
        completing_new_word = not text or text.endswith(" ")
        current = "" if completing_new_word else words[-1]
        index = len(words) if completing_new_word else len(words) - 1

        if index == 0:
            candidates = self.COMMANDS
        else:
            command = words[0].lower()
            if index == 1 and command in self.SELECTOR_COMMANDS:
                candidates = [str(n) for n in range(1, self._get_count() + 1)]
            elif (index == 2 and command == "tag") or (index == 1 and command in ("ls", "log")):
                candidates = self._get_tags()
            else:
                candidates = []

        needle = current.lower()
        for candidate in candidates:
            if candidate.lower().startswith(needle):
                yield Completion(candidate, start_position=-len(current))


def create_completer(session) -> EditorCompleter:
    """Build a completer bound to a live editor session."""
    return EditorCompleter(
        get_tags=lambda: [t.name for t in session.tags()],
        get_count=lambda: len(session.store.todos),
    )
