"""
FILE: marc/core/models.py
PURPOSE: Domain models for todo records and the store
EXPORTS:
  - TodoRecord (dataclass)
  - Store (dataclass)
  - TagSummary (dataclass)
NOTES:
  - TodoRecord.from_dict() / to_dict() convert to and from the store file
  - to_dict() emits keys in a fixed order so saved files are stable
  - Optional fields use None as default
  - Keys the store file carries but marc does not know are kept in `extra`
  - Timestamps stored as ISO-8601 strings
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class TodoRecord:
    """A note with an optional tag and a completion flag."""

    content: str
    done: bool = False
    tag: Optional[str] = None
    created_at: Optional[str] = None
    completed_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    FIELDS = ("content", "done", "tag", "created_at", "completed_at")

    @classmethod
    def from_dict(cls, data: dict) -> "TodoRecord":
        """Convert a store entry to TodoRecord object."""
        return cls(
            content=data["content"],
            done=data.get("done", False),
            tag=data.get("tag") or None,
            created_at=data.get("created_at"),
            completed_at=data.get("completed_at"),
            extra={k: v for k, v in data.items() if k not in cls.FIELDS},
        )

    def to_dict(self) -> dict:
        """Convert to a store entry; unknown keys from the file follow the known ones."""
        data = {
            "content": self.content,
            "done": self.done,
            "tag": self.tag,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
        }
        data.update(self.extra)
        return data


@dataclass
class Store:
    """Everything persisted in the store file."""

    todos: List[TodoRecord] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def tags_in_use(self) -> List[str]:
        """Distinct tags attached to records, in first-use order."""
        seen = []
        for todo in self.todos:
            if todo.tag and todo.tag not in seen:
                seen.append(todo.tag)
        return seen


@dataclass
class TagSummary:
    """A tag with the number of records carrying it."""

    name: str
    total: int = 0
    open: int = 0
    declared: bool = False

    def to_dict(self) -> dict:
        return asdict(self)
