"""Search MCP tools.

This module provides MCP tool wrappers for search operations:
- Regex search over note lines
- Regex search over frontmatter fields (dot paths for nested fields)

Both searches scan the whole vault in parallel on every call and skip
anything under a dot-prefixed folder (including .trash and .obsidian).
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import Context
from mcp.server.fastmcp.exceptions import ToolError

from stumbling_vault.config import get_vault
from stumbling_vault.core import search_operations
from stumbling_vault.errors import VaultError
from stumbling_vault.models import SearchMetadataInput, SearchNotesInput
from stumbling_vault.server import mcp


# Line-level regex matches; ordering across files is not stable.
@mcp.tool()
async def search_notes(
    input: SearchNotesInput,
    ctx: Context | None = None,
) -> list[dict[str, Any]]:
    """Search for notes containing the given query.

    Uses parallel processing for fast search across all markdown files.
    Each line of each note is tested against the regex; results stop
    growing once the limit is reached.

    Args:
        input (SearchNotesInput): Validated input containing:
            - query (str): Regular expression
                Examples: "Gagagigo", "^#+ ", "TODO|FIXME"
            - limit (int): Maximum results (default: 20, 0 returns nothing)

    Returns:
        [
            {
                "path": str,         # Vault-relative path, e.g. "daily/2024-01-01.md"
                "line_number": int,  # 1-based
                "line": str          # Full matching line
            }
        ]

    Examples:
        - Use when: Finding where a phrase or pattern occurs
        - Workflow: search_notes() → read_note() for full context
        - Don't use: Searching frontmatter fields → Use search_metadata()

    Error Handling:
        - Invalid regex → "Search failed: Invalid regex pattern: ..."
        - Unreadable files are skipped, never fail the search
    """
    vault = get_vault()
    try:
        results = search_operations.search_notes(vault.path, input.query, input.limit)
    except VaultError as exc:
        raise ToolError(f"Search failed: {exc}") from exc
    return search_operations.as_payloads(results)


# Frontmatter field matches; returns the full value that matched.
@mcp.tool()
async def search_metadata(
    input: SearchMetadataInput,
    ctx: Context | None = None,
) -> list[dict[str, Any]]:
    """Search notes by frontmatter metadata field.

    Supports nested fields with dot notation (e.g., "author.name"). Strings
    are matched directly, numbers and booleans by their text form, and list
    fields match when any element matches. Objects never match directly;
    address their fields with a deeper dot path.

    Args:
        input (SearchMetadataInput): Validated input containing:
            - field (str): Frontmatter field, e.g. "title", "tags", "author.name"
            - pattern (str): Regular expression for the value
            - limit (int): Maximum results (default: 20, 0 returns nothing)

    Returns:
        [
            {
                "path": str,  # Vault-relative path
                "value": Any  # Full value of the field
            }
        ]

    Examples:
        - Use when: "Find notes tagged rust" → field="tags", pattern="^rust$"
        - Use when: "Notes by Ada" → field="author.name", pattern="Ada"

    Error Handling:
        - Invalid regex → "Metadata search failed: Invalid regex pattern: ..."
        - Notes without (or with invalid) frontmatter are skipped
    """
    vault = get_vault()
    try:
        results = search_operations.search_metadata(
            vault.path,
            input.field,
            input.pattern,
            input.limit,
        )
    except VaultError as exc:
        raise ToolError(f"Metadata search failed: {exc}") from exc
    return search_operations.as_payloads(results)
