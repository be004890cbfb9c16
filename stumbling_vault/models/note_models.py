"""Pydantic input models for note read, write and delete operations."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from .base import BaseNotePathInput


class ReadNoteInput(BaseNotePathInput):
    """Input model for read_note tool.

    Whether frontmatter is split from the body is a server setting
    (``STUMBLING_PARSE_FRONTMATTER``), not a per-call parameter.

    Examples:
        >>> ReadNoteInput(path="daily/2024-01-01.md")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "daily/2024-01-01.md"},
                {"path": "projects/stumbling.md"}
            ]
        }


class WriteNoteInput(BaseNotePathInput):
    """Input model for write_note tool.

    Creates or fully replaces a note. Parent folders are created
    automatically. When ``metadata`` is given it is written as a YAML
    frontmatter block ahead of ``content``.

    Examples:
        >>> WriteNoteInput(path="inbox/idea.md", content="# Idea")
        >>> WriteNoteInput(path="inbox/idea.md", content="# Idea", metadata={"tags": ["draft"]})
    """

    content: str = Field(
        description=(
            "Body content to write to the note. "
            "Can be an empty string."
        )
    )

    metadata: Optional[Any] = Field(
        None,
        description=(
            "Optional YAML frontmatter metadata, e.g. "
            "{\"title\": \"My Note\", \"tags\": [\"rust\"]}. "
            "A JSON string encoding an object is also accepted."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {
                    "path": "inbox/idea.md",
                    "content": "# Idea\n\nWrite it down.",
                    "metadata": None
                },
                {
                    "path": "projects/stumbling.md",
                    "content": "Status notes.",
                    "metadata": {"title": "Stumbling", "tags": ["mcp"]}
                }
            ]
        }


class DeleteNoteInput(BaseNotePathInput):
    """Input model for delete_note tool.

    Moves the note to the vault's ``.trash`` folder unless ``permanent``.

    Examples:
        >>> DeleteNoteInput(path="inbox/idea.md")
        >>> DeleteNoteInput(path="inbox/idea.md", permanent=True)
    """

    permanent: bool = Field(
        False,
        description=(
            "If True, permanently delete. "
            "If False (default), move to the .trash directory."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "inbox/idea.md", "permanent": False},
                {"path": "scratch.md", "permanent": True}
            ]
        }
