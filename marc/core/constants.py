"""
FILE: marc/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - DEFAULT_STORE_DIR / DEFAULT_STORE_PATH: Default store location
  - ENV_STORE_PATH / ENV_LOG_LEVEL: Environment variable names
  - STORE_VERSION: Current store file format version
NOTES:
  - Single source of truth for file locations and env var names
"""

from pathlib import Path

# Store location
DEFAULT_STORE_DIR = Path.home() / ".marc"
DEFAULT_STORE_PATH = DEFAULT_STORE_DIR / "todos.json"

# Environment variables
ENV_STORE_PATH = "MARC_FILE"
ENV_LOG_LEVEL = "MARC_LOG_LEVEL"

# Store file format
STORE_VERSION = 1
JSON_INDENT = 2

# Display
STATUS_DONE_MARK = "✓"
STATUS_OPEN_MARK = "○"
