"""
FILE: marc/core/repository.py
PURPOSE: Read and write the store file
EXPORTS:
  - load(path) -> Store
  - save(path, store) -> None
  - dumps(store) -> str
DEPENDENCIES:
  - json, os, tempfile (stdlib)
  - marc.core.models (Store, TodoRecord)
  - marc.core.exceptions (StoreError)
NOTES:
  - Missing file loads as an empty store
  - save() replaces the file wholesale via a temp file + os.replace
  - Serialization is deterministic: save(load()) leaves the bytes unchanged
  - Returns domain objects (Store, TodoRecord), never raw dicts
  - Wrongly typed fields raise StoreError instead of being coerced
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from .constants import STORE_VERSION, JSON_INDENT
from .exceptions import StoreError
from .models import Store, TodoRecord

logger = logging.getLogger(__name__)


def load(path: Path) -> Store:
    """
    Load the store from disk.

    Returns:
        Store with todos in insertion order; empty Store if the file doesn't exist

    Raises:
        StoreError: If the file can't be read or isn't a valid store
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No store at %s, starting empty", path)
        return Store()

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise StoreError(path, f"cannot read ({e.strerror or e})") from e

    if not text.strip():
        return Store()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StoreError(path, f"invalid JSON at line {e.lineno}") from e

    store = _from_data(path, data)
    logger.debug("Loaded %d todo(s) and %d declared tag(s) from %s",
                 len(store.todos), len(store.tags), path)
    return store


def _from_data(path: Path, data) -> Store:
    if not isinstance(data, dict):
        raise StoreError(path, "expected a JSON object")

    version = data.get("version", STORE_VERSION)
    if version != STORE_VERSION:
        raise StoreError(path, f"unsupported format version {version}")

    entries = data.get("todos", [])
    if not isinstance(entries, list):
        raise StoreError(path, "'todos' must be a list")

    todos = []
    for i, entry in enumerate(entries, 1):
        if not isinstance(entry, dict):
            raise StoreError(path, f"todo #{i} is not an object")
        content = entry.get("content")
        if not isinstance(content, str) or not content.strip():
            raise StoreError(path, f"todo #{i} has no content")
        if not isinstance(entry.get("done", False), bool):
            raise StoreError(path, f"todo #{i}: 'done' must be true or false")
        for key in ("tag", "created_at", "completed_at"):
            if not isinstance(entry.get(key), (str, type(None))):
                raise StoreError(path, f"todo #{i}: '{key}' must be a string or null")
        todos.append(TodoRecord.from_dict(entry))

    tags = data.get("tags", [])
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise StoreError(path, "'tags' must be a list of strings")

    return Store(todos=todos, tags=list(tags))


def dumps(store: Store) -> str:
    """Serialize a store to the exact text written to disk."""
    data = {
        "version": STORE_VERSION,
        "tags": list(store.tags),
        "todos": [todo.to_dict() for todo in store.todos],
    }
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False) + "\n"


def save(path: Path, store: Store) -> None:
    """
    Overwrite the store file with the given store.

    Writes to a temporary file next to the target and renames it over
    the target, so a failed write never leaves a half-written store.

    Raises:
        StoreError: If the directory or file can't be written
    """
    path = Path(path)
    text = dumps(store)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as e:
        raise StoreError(path, f"cannot write ({e.strerror or e})") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise StoreError(path, f"cannot write ({e.strerror or e})") from e

    logger.debug("Saved %d todo(s) to %s", len(store.todos), path)
