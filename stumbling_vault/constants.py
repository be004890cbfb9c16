"""Module-level constants for the Stumbling vault MCP server."""

import os
from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "stumbling.yaml"
CONFIG_PATH_ENV = "STUMBLING_CONFIG"
ROOT_ENV = "STUMBLING_ROOT"
PARSE_FRONTMATTER_ENV = "STUMBLING_PARSE_FRONTMATTER"
LOG_LEVEL_ENV = "STUMBLING_LOG_LEVEL"

# Vault layout
NOTE_SUFFIX = ".md"
HIDDEN_PREFIX = "."
TRASH_DIR_NAME = ".trash"
FRONTMATTER_DELIMITER = "---"
TEMP_FILE_PREFIX = ".stumbling-"
TEMP_FILE_SUFFIX = ".tmp"
TEMP_FILE_MAX_AGE_SECONDS = 3_600

# Search
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_WORKERS = min(32, (os.cpu_count() or 1) + 4)

# Logging
LOG_LEVEL = "INFO"
