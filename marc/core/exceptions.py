"""
FILE: marc/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - MarcError (base exception)
  - StoreError
  - TodoNotFoundError
  - AmbiguousSelectorError
  - TagNotFoundError
  - InvalidInputError
NOTES:
  - All exceptions inherit from MarcError for easy catching
  - Service layer raises these, CLI and editor catch and display
"""


class MarcError(Exception):
    """Base exception for all Marc errors."""
    pass


class StoreError(MarcError):
    """Store file could not be read, parsed or written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Store {path}: {reason}")


class TodoNotFoundError(MarcError):
    """No todo matches the given selector."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Todo '{selector}' not found")


class AmbiguousSelectorError(MarcError):
    """Selector text matches more than one todo."""

    def __init__(self, selector: str, positions):
        self.selector = selector
        self.positions = list(positions)
        matches = ", ".join(str(p) for p in self.positions)
        super().__init__(
            f"Selector '{selector}' matches several todos ({matches}); use a number instead"
        )


class TagNotFoundError(MarcError):
    """Tag with given name doesn't exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag '{name}' not found")


class InvalidInputError(MarcError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)
