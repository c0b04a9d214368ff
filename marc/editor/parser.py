"""
FILE: marc/editor/parser.py
PURPOSE: Parse editor input into a command and its arguments
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
NOTES:
  - Handles quoted strings: text 2 "new content"
  - Case-insensitive command names
  - Unclosed quotes fall back to whitespace splitting
"""

import shlex
from dataclasses import dataclass, field
from typing import List


@dataclass
class ParseResult:
    """
    Result of parsing an editor line.

    Attributes:
        command: The command name (e.g., "drop", "done", "text")
        args: Positional arguments
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    raw_input: str = ""

    def rest(self, start: int = 0) -> str:
        """Arguments from `start` on, joined back into one string."""
        return " ".join(self.args[start:])


def parse_command(input_str: str) -> ParseResult:
    """
    Parse editor input into command and args.

    Examples:
        >>> parse_command("drop 2")
        ParseResult(command="drop", args=["2"])

        >>> parse_command('text 2 "buy oat milk"')
        ParseResult(command="text", args=["2", "buy oat milk"])
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    return ParseResult(command=tokens[0].lower(), args=tokens[1:], raw_input=input_str)
