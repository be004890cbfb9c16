"""Stumbling Vault MCP Server

Markdown note vault access (read, regex search, metadata search, atomic
write, trash-based delete) via Model Context Protocol.
"""

from stumbling_vault.config import get_vault, load_vault_configuration
from stumbling_vault.data_models import (
    MetadataSearchResult,
    MetadataValue,
    SearchResult,
    VaultMetadata,
)
from stumbling_vault.errors import (
    InvalidPatternError,
    NoteNotFoundError,
    VaultError,
    VaultIOError,
    VaultNotReadyError,
)
from stumbling_vault.server import mcp, run_server

# Import tools to register them with the MCP server
from stumbling_vault import tools  # noqa: F401

__version__ = "0.3.0"
__all__ = [
    "get_vault",
    "load_vault_configuration",
    "MetadataSearchResult",
    "MetadataValue",
    "SearchResult",
    "VaultMetadata",
    "InvalidPatternError",
    "NoteNotFoundError",
    "VaultError",
    "VaultIOError",
    "VaultNotReadyError",
    "mcp",
    "run_server",
]
