"""
FILE: marc/core/config.py
PURPOSE: Runtime configuration passed explicitly into the service layer
EXPORTS:
  - Config (dataclass)
  - Config.resolve(store_path, verbose) -> Config
NOTES:
  - Store path: --file option, then MARC_FILE, then ~/.marc/todos.json
  - Log level: MARC_LOG_LEVEL wins, otherwise DEBUG when verbose else WARNING
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .constants import DEFAULT_STORE_PATH, ENV_STORE_PATH, ENV_LOG_LEVEL
from .exceptions import InvalidInputError


@dataclass(frozen=True)
class Config:
    """Where the store lives and how loud to be."""

    store_path: Path = DEFAULT_STORE_PATH
    log_level: int = logging.WARNING

    @classmethod
    def resolve(
        cls,
        store_path: Optional[Union[str, Path]] = None,
        verbose: bool = False,
    ) -> "Config":
        """
        Build a Config from CLI values and the environment.

        Args:
            store_path: Explicit store file (None = fall back to env/default)
            verbose: Enable debug logging

        Raises:
            InvalidInputError: If MARC_LOG_LEVEL is not a logging level name
        """
        if store_path is None:
            store_path = os.environ.get(ENV_STORE_PATH) or DEFAULT_STORE_PATH
        path = Path(store_path).expanduser()

        level = logging.DEBUG if verbose else logging.WARNING
        level_name = os.environ.get(ENV_LOG_LEVEL)
        if level_name:
            named = logging.getLevelName(level_name.strip().upper())
            if not isinstance(named, int):
                raise InvalidInputError(
                    f"Invalid {ENV_LOG_LEVEL} '{level_name}'. Use DEBUG, INFO, WARNING or ERROR"
                )
            level = named

        return cls(store_path=path, log_level=level)
