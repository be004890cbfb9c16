"""Core vault operations: root validation, path handling and tree walking."""

from __future__ import annotations

import logging
import os
import re
import time
from collections.abc import Iterator
from pathlib import Path

from stumbling_vault.constants import (
    HIDDEN_PREFIX,
    NOTE_SUFFIX,
    TEMP_FILE_MAX_AGE_SECONDS,
    TEMP_FILE_PREFIX,
    TEMP_FILE_SUFFIX,
)
from stumbling_vault.data_models import VaultMetadata
from stumbling_vault.errors import VaultNotReadyError

logger = logging.getLogger(__name__)

# Names produced by tempfile.mkstemp(prefix=".stumbling-{name}.", suffix=".tmp").
TEMP_FILE_PATTERN = re.compile(
    "^"
    + re.escape(TEMP_FILE_PREFIX)
    + r".+\.[a-z0-9_]{8}"
    + re.escape(TEMP_FILE_SUFFIX)
    + "$"
)


def ensure_vault_ready(root: Path) -> None:
    """Ensure the vault root is an accessible directory.

    Raises:
        VaultNotReadyError: If ``root`` does not exist or is not a directory.
    """
    if not root.is_dir():
        raise VaultNotReadyError(root)


def resolve_note_path(vault: VaultMetadata, relative_path: str) -> Path:
    """Join a pre-validated relative path onto the vault root.

    The input model already rejects empty, absolute and ``..`` paths; this
    only performs the filesystem-level sandbox check, which catches escapes
    through symlinks.

    Args:
        vault: Vault metadata.
        relative_path: Vault-relative note path including its extension.

    Returns:
        The absolute :class:`Path` of the note inside ``vault``.

    Raises:
        ValueError: If the resolved path escapes the vault root.
    """
    candidate = vault.path / Path(relative_path)
    vault_root = vault.path.resolve(strict=False)
    if not candidate.resolve(strict=False).is_relative_to(vault_root):
        raise ValueError(f"Note path '{relative_path}' escapes the configured vault.")
    return candidate


def relative_display(root: Path, path: Path) -> str:
    """Render ``path`` relative to ``root`` with forward slashes.

    Paths outside ``root`` are returned unchanged.
    """
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    return relative.as_posix()


def _is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def iter_note_files(root: Path) -> Iterator[Path]:
    """Yield every markdown note beneath ``root``.

    Entries whose name starts with ``.`` are skipped along with everything
    under them, which also hides ``.trash``, ``.obsidian`` and in-flight
    temporary files. Unreadable directories are skipped silently.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
        for filename in filenames:
            if _is_hidden(filename) or not filename.endswith(NOTE_SUFFIX):
                continue
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def cleanup_orphaned_temp_files(
    root: Path,
    max_age_seconds: float = TEMP_FILE_MAX_AGE_SECONDS,
) -> int:
    """Remove temporary files left behind by interrupted writes.

    Only files matching the writer's temporary naming scheme and older than
    ``max_age_seconds`` are removed, so writes still in flight are left alone.

    Args:
        root: Vault root directory.
        max_age_seconds: Minimum age before a temporary file counts as orphaned.

    Returns:
        Number of files removed.
    """
    ensure_vault_ready(root)
    cutoff = time.time() - max_age_seconds
    removed = 0

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
        for filename in filenames:
            if not TEMP_FILE_PATTERN.match(filename):
                continue

            path = Path(dirpath) / filename
            try:
                if path.stat().st_mtime > cutoff:
                    continue
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.warning("Could not remove orphaned temp file '%s': %s", path, exc)
                continue

            removed += 1
            logger.info("Removed orphaned temp file '%s'", relative_display(root, path))

    return removed
