"""Exception types raised by core vault operations.

Every hard failure derives from :class:`VaultError` so the tool layer can
render it as text. Undecodable frontmatter is never an error; affected
notes are simply treated as having no metadata.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class VaultError(Exception):
    """Base class for failures surfaced by vault operations."""


class VaultNotReadyError(VaultError):
    """The configured vault root is missing or is not a directory."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"Vault root is not accessible at {root}")
        self.root = root


class NoteNotFoundError(VaultError):
    """A read or delete target does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"File does not exist: {path}")
        self.path = path


class InvalidPatternError(VaultError):
    """A search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid regex pattern: {pattern} ({reason})")
        self.pattern = pattern


class VaultIOError(VaultError):
    """A filesystem step failed; ``path`` names the offending location."""

    def __init__(self, message: str, path: Path, cause: Optional[OSError] = None) -> None:
        detail = f"{message}: {path}"
        if cause is not None:
            detail = f"{detail} ({cause.strerror or cause})"
        super().__init__(detail)
        self.path = path
