"""Pydantic input models for search operations.

This module defines input models for the search tools:
- Regex search over note contents, line by line
- Regex search over a frontmatter field, including nested dot paths
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from stumbling_vault.constants import DEFAULT_SEARCH_LIMIT


class SearchNotesInput(BaseModel):
    """Input model for search_notes tool.

    Regex search across every line of every note. Returns at most
    ``limit`` matching lines.

    Examples:
        >>> SearchNotesInput(query="TODO")
        >>> SearchNotesInput(query=r"#\\s+\\w+", limit=5)
    """

    query: str = Field(
        description=(
            "Search query (supports regex). "
            "Matched anywhere within each line. "
            "Examples: 'Gagagigo', '^# ', 'TODO|FIXME'"
        )
    )

    limit: int = Field(
        DEFAULT_SEARCH_LIMIT,
        ge=0,
        description=f"Maximum number of results to return (default: {DEFAULT_SEARCH_LIMIT})."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "Gagagigo", "limit": 20},
                {"query": "TODO|FIXME", "limit": 5}
            ]
        }


class SearchMetadataInput(BaseModel):
    """Input model for search_metadata tool.

    Regex search against one frontmatter field. Nested fields use dot
    notation; list fields match when any element matches.

    Examples:
        >>> SearchMetadataInput(field="title", pattern="Test")
        >>> SearchMetadataInput(field="author.name", pattern="^Ada", limit=5)
    """

    field: str = Field(
        min_length=1,
        description=(
            "Field to search in frontmatter. "
            "Examples: 'title', 'tags', 'author.name'"
        )
    )

    pattern: str = Field(
        description=(
            "Value pattern to match (supports regex). "
            "Numbers and booleans are matched against their text form."
        )
    )

    limit: int = Field(
        DEFAULT_SEARCH_LIMIT,
        ge=0,
        description=f"Maximum number of results to return (default: {DEFAULT_SEARCH_LIMIT})."
    )

    @field_validator('field')
    @classmethod
    def validate_field(cls, v: str) -> str:
        """Validate the dot path has no empty segments."""
        cleaned = v.strip()
        if not cleaned or any(not part for part in cleaned.split(".")):
            raise ValueError(
                "Field must be a dot-separated path without empty segments. "
                f"Invalid field: '{v}'"
            )
        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"field": "title", "pattern": "Test", "limit": 20},
                {"field": "author.name", "pattern": "^Ada", "limit": 5}
            ]
        }
