"""Data models for vault configuration and search results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

# Decoded frontmatter: None | bool | int | float | str | list | dict, nested freely.
MetadataValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized settings describing the configured vault."""

    name: str
    path: Path
    parse_frontmatter: bool = False


@dataclass(frozen=True)
class SearchResult:
    """A single line matched by a content search."""

    path: str
    line_number: int
    line: str

    def as_payload(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line_number": self.line_number,
            "line": self.line,
        }


@dataclass(frozen=True)
class MetadataSearchResult:
    """A note whose frontmatter field matched a metadata search."""

    path: str
    value: MetadataValue

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "value": self.value}
