"""
FILE: marc/core/service.py
PURPOSE: Business logic layer for todo and tag operations
EXPORTS:
  - is_position(value) -> bool
  - split_selectors(values) -> List[str]
  - resolve_selector(todos, selector) -> int
  - add_todos(config, contents, tag) -> List[TodoRecord]
  - list_todos(config, tag, done) -> List[Tuple[int, TodoRecord]]
  - get_todo(config, selector) -> Tuple[int, TodoRecord]
  - complete_todos(config, selectors) -> List[TodoRecord]
  - uncomplete_todos(config, selectors) -> List[TodoRecord]
  - remove_todos(config, selectors) -> List[TodoRecord]
  - remove_done(config) -> List[TodoRecord]
  - update_todo(config, selector, content, tag, clear_tag) -> TodoRecord
  - list_tags(config) -> List[TagSummary]
  - create_tag(config, name) -> str
  - prune_tags(config) -> List[str]
  - Store-level helpers (filter_todos, mark_done, drop, edit_record, ...) used
    by the interactive editor, which persists once on exit
DEPENDENCIES:
  - marc.core.repository (load/save)
  - marc.core.models (Store, TodoRecord, TagSummary)
  - marc.core.exceptions
NOTES:
  - Every config-level function is load -> mutate -> save; an error before
    save leaves the store file untouched
  - Selectors are 1-based positions (as shown by `log`) or content text
  - Positions are always positions in the full, unfiltered list
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from . import repository
from .config import Config
from .models import Store, TodoRecord, TagSummary
from .exceptions import (
    TodoNotFoundError,
    AmbiguousSelectorError,
    TagNotFoundError,
    InvalidInputError,
)

logger = logging.getLogger(__name__)


# --- Validation ---


def _clean_content(content: str) -> str:
    content = (content or "").strip()
    if not content:
        raise InvalidInputError("Todo content cannot be empty")
    return content


def _clean_tag(tag: Optional[str]) -> Optional[str]:
    if tag is None:
        return None
    tag = tag.strip()
    if not tag:
        raise InvalidInputError("Tag name cannot be empty")
    return tag


# --- Selectors ---


def is_position(value: str) -> bool:
    """True for plain ASCII digit strings (int() rejects other Unicode digits)."""
    return value.isascii() and value.isdigit()


def split_selectors(values: Iterable[str]) -> List[str]:
    """
    Expand comma-separated position lists.

    "1,3" becomes ["1", "3"]; text selectors are kept whole so content
    containing commas can still be matched.
    """
    selectors = []
    for value in values:
        parts = [p.strip() for p in value.split(",")]
        if len(parts) > 1 and all(is_position(p) for p in parts if p):
            selectors.extend(p for p in parts if p)
        else:
            selectors.append(value.strip())
    return [s for s in selectors if s]


def resolve_selector(todos: List[TodoRecord], selector: str) -> int:
    """
    Find the index of the todo a selector refers to.

    Resolution order:
        1. A number is a 1-based position in the full list
        2. Content equal to the selector (case-insensitive)
        3. The only todo whose content contains the selector (case-insensitive)

    Returns:
        0-based index into todos

    Raises:
        TodoNotFoundError: Nothing matches
        AmbiguousSelectorError: Several todos contain the selector text
    """
    selector = (selector or "").strip()
    if not selector:
        raise InvalidInputError("Selector cannot be empty")

    if is_position(selector):
        position = int(selector)
        if 1 <= position <= len(todos):
            return position - 1
        raise TodoNotFoundError(selector)

    needle = selector.lower()
    exact = [i for i, t in enumerate(todos) if t.content.lower() == needle]
    if len(exact) == 1:
        return exact[0]

    matches = exact or [i for i, t in enumerate(todos) if needle in t.content.lower()]
    if not matches:
        raise TodoNotFoundError(selector)
    if len(matches) > 1:
        raise AmbiguousSelectorError(selector, [i + 1 for i in matches])
    return matches[0]


def _resolve_all(todos: List[TodoRecord], selectors: Iterable[str]) -> List[int]:
    """Resolve every selector up front; duplicates collapse, order is kept."""
    indexes = []
    for selector in split_selectors(selectors):
        index = resolve_selector(todos, selector)
        if index not in indexes:
            indexes.append(index)
    if not indexes:
        raise InvalidInputError("At least one todo selector is required")
    return indexes


# --- Store-level operations (no I/O) ---


def filter_todos(
    store: Store,
    tag: Optional[str] = None,
    done: Optional[bool] = None,
) -> List[Tuple[int, TodoRecord]]:
    """
    Filter todos, keeping their 1-based positions in the full list.

    Args:
        tag: Keep only todos with exactly this tag (None = any)
        done: True = only done, False = only open, None = both
    """
    results = []
    for position, todo in enumerate(store.todos, 1):
        if tag is not None and todo.tag != tag:
            continue
        if done is not None and todo.done != done:
            continue
        results.append((position, todo))
    return results


def append_todos(store: Store, contents: Iterable[str], tag: Optional[str] = None) -> List[TodoRecord]:
    """Append one todo per content string. Validates everything before appending."""
    tag = _clean_tag(tag)
    cleaned = [_clean_content(c) for c in contents]
    if not cleaned:
        raise InvalidInputError("Nothing to add")

    now = datetime.now().isoformat(timespec="seconds")
    created = [TodoRecord(content=c, tag=tag, created_at=now) for c in cleaned]
    store.todos.extend(created)
    return created


def mark_done(store: Store, selectors: Iterable[str], done: bool = True) -> List[TodoRecord]:
    """Set the completion flag on the selected todos (idempotent)."""
    indexes = _resolve_all(store.todos, selectors)
    now = datetime.now().isoformat(timespec="seconds")
    changed = []
    for index in indexes:
        todo = store.todos[index]
        if todo.done != done:
            todo.done = done
            todo.completed_at = now if done else None
        changed.append(todo)
    return changed


def drop(store: Store, selectors: Iterable[str]) -> List[TodoRecord]:
    """Remove the selected todos. All selectors resolve before anything is removed."""
    indexes = _resolve_all(store.todos, selectors)
    removed = [store.todos[i] for i in indexes]
    keep = set(range(len(store.todos))) - set(indexes)
    store.todos = [t for i, t in enumerate(store.todos) if i in keep]
    return removed


def drop_done(store: Store) -> List[TodoRecord]:
    """Remove every done todo."""
    removed = [t for t in store.todos if t.done]
    store.todos = [t for t in store.todos if not t.done]
    return removed


def edit_record(
    store: Store,
    selector: str,
    content: Optional[str] = None,
    tag: Optional[str] = None,
    clear_tag: bool = False,
) -> TodoRecord:
    """
    Change a todo's content and/or tag.

    Raises:
        InvalidInputError: Nothing to change, empty content, or tag and
            clear_tag given together
    """
    if content is None and tag is None and not clear_tag:
        raise InvalidInputError("Nothing to change: give new content, a tag, or clear the tag")
    if tag is not None and clear_tag:
        raise InvalidInputError("Cannot set and clear the tag at the same time")

    new_content = _clean_content(content) if content is not None else None
    new_tag = _clean_tag(tag)

    todo = store.todos[resolve_selector(store.todos, selector)]
    if new_content is not None:
        todo.content = new_content
    if clear_tag:
        todo.tag = None
    elif new_tag is not None:
        todo.tag = new_tag
    return todo


def summarize_tags(store: Store) -> List[TagSummary]:
    """Tags in use plus declared tags, with record counts, sorted by name."""
    summaries = {}
    for name in store.tags:
        summaries[name] = TagSummary(name=name, declared=True)
    for todo in store.todos:
        if not todo.tag:
            continue
        summary = summaries.setdefault(todo.tag, TagSummary(name=todo.tag))
        summary.total += 1
        if not todo.done:
            summary.open += 1
    return sorted(summaries.values(), key=lambda s: s.name.lower())


# --- Config-level operations (load -> mutate -> save) ---


def _load(config: Config) -> Store:
    return repository.load(config.store_path)


def _save(config: Config, store: Store) -> None:
    repository.save(config.store_path, store)


def add_todos(config: Config, contents: Iterable[str], tag: Optional[str] = None) -> List[TodoRecord]:
    """
    Add one todo per content string.

    Returns:
        The created records

    Raises:
        InvalidInputError: If any content (or the tag) is empty; nothing is added
    """
    store = _load(config)
    created = append_todos(store, contents, tag)
    _save(config, store)
    logger.info("Added %d todo(s)", len(created))
    return created


def list_todos(
    config: Config,
    tag: Optional[str] = None,
    done: Optional[bool] = None,
) -> List[Tuple[int, TodoRecord]]:
    """List todos in insertion order, optionally filtered by tag and completion."""
    return filter_todos(_load(config), tag=_clean_tag(tag), done=done)


def get_todo(config: Config, selector: str) -> Tuple[int, TodoRecord]:
    """Fetch one todo with its 1-based position."""
    store = _load(config)
    index = resolve_selector(store.todos, selector)
    return index + 1, store.todos[index]


def complete_todos(config: Config, selectors: Iterable[str]) -> List[TodoRecord]:
    """Mark the selected todos as done."""
    store = _load(config)
    todos = mark_done(store, selectors, done=True)
    _save(config, store)
    return todos


def uncomplete_todos(config: Config, selectors: Iterable[str]) -> List[TodoRecord]:
    """Mark the selected todos as not done."""
    store = _load(config)
    todos = mark_done(store, selectors, done=False)
    _save(config, store)
    return todos


def remove_todos(config: Config, selectors: Iterable[str]) -> List[TodoRecord]:
    """Delete the selected todos."""
    store = _load(config)
    removed = drop(store, selectors)
    _save(config, store)
    logger.info("Removed %d todo(s)", len(removed))
    return removed


def remove_done(config: Config) -> List[TodoRecord]:
    """
    Delete every done todo.

    A store without done todos is not rewritten.
    """
    store = _load(config)
    removed = drop_done(store)
    if removed:
        _save(config, store)
    logger.info("Removed %d done todo(s)", len(removed))
    return removed


def update_todo(
    config: Config,
    selector: str,
    content: Optional[str] = None,
    tag: Optional[str] = None,
    clear_tag: bool = False,
) -> TodoRecord:
    """Change a todo's content and/or tag."""
    store = _load(config)
    todo = edit_record(store, selector, content=content, tag=tag, clear_tag=clear_tag)
    _save(config, store)
    return todo


def list_tags(config: Config) -> List[TagSummary]:
    """List declared tags and tags in use."""
    return summarize_tags(_load(config))


def create_tag(config: Config, name: str) -> str:
    """Declare a tag so it exists before any todo uses it (idempotent)."""
    name = _clean_tag(name)
    store = _load(config)
    if name not in store.tags:
        store.tags.append(name)
        _save(config, store)
    return name


def delete_tag(config: Config, name: str) -> str:
    """
    Remove a declared tag.

    Raises:
        TagNotFoundError: If the tag isn't declared
        InvalidInputError: If todos still carry it
    """
    name = _clean_tag(name)
    store = _load(config)
    if name not in store.tags:
        raise TagNotFoundError(name)
    in_use = sum(1 for t in store.todos if t.tag == name)
    if in_use:
        raise InvalidInputError(f"Tag '{name}' is used by {in_use} todo(s)")
    store.tags.remove(name)
    _save(config, store)
    return name


def prune_tags(config: Config) -> List[str]:
    """
    Drop declared tags that no todo carries.

    Returns:
        Names of removed tags
    """
    store = _load(config)
    used = set(store.tags_in_use())
    pruned = [name for name in store.tags if name not in used]
    if pruned:
        store.tags = [name for name in store.tags if name in used]
        _save(config, store)
    logger.info("Pruned %d tag(s)", len(pruned))
    return pruned
