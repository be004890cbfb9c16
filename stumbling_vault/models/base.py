"""Base Pydantic model for MCP tool input validation.

Base Models:
- BaseNotePathInput: Common validation for tools addressing a single note
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class BaseNotePathInput(BaseModel):
    """Base model for note operations with common path validation.

    All tools that address a single note by its vault-relative path should
    inherit from this class.
    """

    path: str = Field(
        min_length=1,
        description=(
            "Path to the note relative to the vault root, including the .md extension. "
            "Examples: 'daily/2024-01-01.md', 'projects/stumbling.md'. "
            "Forward slashes for folders, case-sensitive."
        ),
        examples=["daily/2024-01-01.md", "projects/stumbling.md", "README.md"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the note path for safety and format.

        Enforces:
        - Non-empty path
        - No path traversal attempts (.., .)
        - Relative path only (no absolute paths)

        Args:
            v: The path to validate

        Returns:
            The validated path with surrounding whitespace and backslashes normalized

        Raises:
            ValueError: If the path is empty, absolute or contains traversal segments
        """
        cleaned = v.strip().replace("\\", "/")

        if not cleaned:
            raise ValueError(
                "Note path cannot be empty. "
                "Provide a path like 'daily/2024-01-01.md'."
            )

        if cleaned.startswith("/") or (len(cleaned) > 1 and cleaned[1] == ":"):
            raise ValueError(
                "Note path must be relative to the vault root. "
                "Do not start with '/' or a drive letter. "
                f"Invalid path: '{cleaned}'"
            )

        parts = cleaned.split("/")
        if any(part in {".", ".."} for part in parts):
            raise ValueError(
                "Note path cannot contain '.' or '..' segments. "
                f"Invalid path: '{cleaned}'"
            )

        if any(not part for part in parts):
            raise ValueError(
                "Note path cannot contain empty segments. "
                f"Invalid path: '{cleaned}'"
            )

        return cleaned
