"""Note management MCP tools.

This module provides MCP tool wrappers for single-note operations:
- Read note content, optionally with frontmatter split out
- Create or overwrite notes atomically
- Delete notes (trash or permanent)

All tools delegate to core operations in stumbling_vault.core.note_operations.
Core failures are re-raised as ``ToolError`` so the client receives a
descriptive error result instead of a protocol fault.
"""
from __future__ import annotations

import logging
from typing import Any, Union

from mcp.server.fastmcp import Context
from mcp.server.fastmcp.exceptions import ToolError

from stumbling_vault.config import get_vault
from stumbling_vault.core import note_operations
from stumbling_vault.core.frontmatter_operations import format_with_frontmatter
from stumbling_vault.core.vault_operations import ensure_vault_ready, resolve_note_path
from stumbling_vault.errors import VaultError
from stumbling_vault.models import DeleteNoteInput, ReadNoteInput, WriteNoteInput
from stumbling_vault.server import mcp

logger = logging.getLogger(__name__)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

# Returns raw text, or {"metadata", "body"} when frontmatter parsing is enabled.
@mcp.tool()
async def read_note(
    input: ReadNoteInput,
    ctx: Context | None = None,
) -> Union[str, dict[str, Any]]:
    """Read a markdown note from the vault.

    Returns the note content, optionally with frontmatter parsed separately
    (controlled by the server's STUMBLING_PARSE_FRONTMATTER setting).

    Args:
        input (ReadNoteInput): Validated input containing:
            - path (str): Note path relative to the vault root
                Examples: "daily/2024-01-01.md", "projects/stumbling.md"

    Returns:
        The raw note text, or when parsing is enabled and the note has valid
        frontmatter:
        {
            "metadata": Any,  # Decoded YAML frontmatter
            "body": str       # Content after the frontmatter block
        }

    Error Handling:
        - ValidationError: Empty, absolute or traversal path
        - Note not found → "Failed to read note: File does not exist: ..."
        - Unreadable / non UTF-8 file → "Failed to read note: Failed to read file: ..."
        - Invalid frontmatter is not an error; the raw text is returned
    """
    vault = get_vault()
    try:
        ensure_vault_ready(vault.path)
        target = resolve_note_path(vault, input.path)
        return note_operations.read_note(target, vault.parse_frontmatter)
    except (VaultError, ValueError) as exc:
        raise ToolError(f"Failed to read note: {exc}") from exc


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================

# Creates or fully replaces a note; the message is also sent as a log notification.
@mcp.tool()
async def write_note(
    input: WriteNoteInput,
    ctx: Context | None = None,
) -> str:
    """Create or overwrite a markdown note.

    Creates parent directories if they don't exist. If metadata is provided,
    it is formatted as a YAML frontmatter block ahead of the content. The
    write is atomic: readers see either the old or the new note, never a
    partial file.

    Args:
        input (WriteNoteInput): Validated input containing:
            - path (str): Note path relative to the vault root
            - content (str): Body content to write
            - metadata (Any, optional): Frontmatter value, or a JSON string encoding one

    Returns:
        "Created {path}" or "Overwrote {path}"

    Examples:
        - Use when: Saving a new note or replacing a note's full content
        - Don't use: Appending a line → read_note() first, then write the whole note

    Error Handling:
        - ValidationError: Empty, absolute or traversal path
        - Directory / temp file / rename failure → "Failed to write note: ..."
    """
    vault = get_vault()
    try:
        ensure_vault_ready(vault.path)
        target = resolve_note_path(vault, input.path)
        content = input.content
        if input.metadata is not None:
            content = format_with_frontmatter(input.metadata, input.content)
        status = note_operations.write_note(target, content)
    except (VaultError, ValueError) as exc:
        raise ToolError(f"Failed to write note: {exc}") from exc

    message = f"{'Overwrote' if status == 'overwrote' else 'Created'} {input.path}"
    logger.info("%s in vault '%s'", message, vault.name)
    if ctx is not None:
        await ctx.info(message)
    return message


# ==============================================================================
# DELETE OPERATIONS
# ==============================================================================

# Soft delete moves the note under .trash/ with an epoch-second prefix.
@mcp.tool()
async def delete_note(
    input: DeleteNoteInput,
    ctx: Context | None = None,
) -> str:
    """Delete a markdown note.

    By default, moves the note to the vault's .trash directory as
    "{epoch_seconds}_{file name}". Set permanent=True to delete it outright.

    Args:
        input (DeleteNoteInput): Validated input containing:
            - path (str): Note path relative to the vault root
            - permanent (bool): Skip the trash (default: False)

    Returns:
        "Moved to trash: .trash/{epoch}_{name}" or "Permanently deleted {path}"

    Error Handling:
        - ValidationError: Empty, absolute or traversal path
        - Note not found → "Failed to delete note: File does not exist: ..."
        - Trash / unlink failure → "Failed to delete note: ..."
    """
    vault = get_vault()
    try:
        target = resolve_note_path(vault, input.path)
        message = note_operations.delete_note(vault.path, target, permanent=input.permanent)
    except (VaultError, ValueError) as exc:
        raise ToolError(f"Failed to delete note: {exc}") from exc

    if ctx is not None:
        await ctx.info(message)
    return message
