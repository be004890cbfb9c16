"""Pydantic input models for MCP tool validation.

Each model represents the input schema for one MCP tool, with field-level
validation and descriptive error messages.

Architecture:
- base: BaseNotePathInput for tools that address a single note
- note_models: Input models for read, write and delete
- search_models: Input models for content and metadata search

Usage:
    from stumbling_vault.models import ReadNoteInput, WriteNoteInput
    from stumbling_vault.models import SearchNotesInput, SearchMetadataInput
"""

from .base import BaseNotePathInput
from .note_models import (
    ReadNoteInput,
    WriteNoteInput,
    DeleteNoteInput,
)
from .search_models import (
    SearchNotesInput,
    SearchMetadataInput,
)

__all__ = [
    # Base models
    "BaseNotePathInput",
    # Note models
    "ReadNoteInput",
    "WriteNoteInput",
    "DeleteNoteInput",
    # Search models
    "SearchNotesInput",
    "SearchMetadataInput",
]
