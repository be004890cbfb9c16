"""Core business logic for reading, writing and deleting notes."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
import time
from pathlib import Path
from typing import Any, Union

from stumbling_vault.constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX, TRASH_DIR_NAME
from stumbling_vault.core.frontmatter_operations import parse_frontmatter
from stumbling_vault.core.vault_operations import ensure_vault_ready, relative_display
from stumbling_vault.errors import NoteNotFoundError, VaultIOError

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _note_file_mode(path: Path) -> int:
    """Permission bits for a note written to ``path``.

    An existing note keeps its mode; a new one gets the umask default.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except OSError:
        return 0o666 & ~_current_umask()


def _write_temp_sibling(path: Path, content: str, mode: int) -> Path:
    """Write ``content`` to a new hidden temporary file next to ``path``.

    Returns:
        Path of the fully written and fsynced temporary file, carrying
        permission bits ``mode``.

    Raises:
        VaultIOError: If the temporary file cannot be created or written.
    """
    try:
        fd, raw_temp_path = tempfile.mkstemp(
            prefix=f"{TEMP_FILE_PREFIX}{path.name}.",
            suffix=TEMP_FILE_SUFFIX,
            dir=path.parent,
        )
    except OSError as exc:
        raise VaultIOError("Failed to create temp file in", path.parent, exc) from exc

    temp_path = Path(raw_temp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        # mkstemp always creates 0600.
        os.chmod(temp_path, mode)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise VaultIOError("Failed to write temp file", temp_path, exc) from exc

    return temp_path


def _trash_destination(trash_dir: Path, file_name: str) -> Path:
    """Pick a free ``{epoch}_{file_name}`` slot inside ``trash_dir``.

    Repeated deletes of the same name within one second get a counter
    (``{epoch}_{n}_{file_name}``) instead of replacing the earlier entry.
    """
    timestamp = int(time.time())
    destination = trash_dir / f"{timestamp}_{file_name}"
    counter = 1
    while destination.exists():
        destination = trash_dir / f"{timestamp}_{counter}_{file_name}"
        counter += 1
    return destination


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def read_note(path: Path, parse: bool = False) -> Union[str, dict[str, Any]]:
    """Read a note, optionally separating frontmatter from the body.

    Args:
        path: Absolute path of the note.
        parse: When ``True`` return ``{"metadata", "body"}`` for notes with
            decodable frontmatter.

    Returns:
        The raw note text, or a metadata/body mapping. Notes without usable
        frontmatter are always returned as raw text.

    Raises:
        NoteNotFoundError: If the note does not exist.
        VaultIOError: If the note cannot be read or is not UTF-8.
    """
    if not path.is_file():
        raise NoteNotFoundError(path)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VaultIOError("Failed to read file", path) from exc

    if not parse:
        return content

    parsed = parse_frontmatter(content)
    if parsed is None:
        return content

    metadata, body = parsed
    return {"metadata": metadata, "body": body}


def write_note(path: Path, content: str) -> str:
    """Atomically create or overwrite a note.

    Missing parent directories are created. The content is written to a
    hidden sibling temporary file and renamed onto ``path``, so readers see
    either the old or the new content, never a partial file. An existing
    note keeps its permission bits.

    Args:
        path: Absolute path of the note inside the vault.
        content: Full text to store.

    Returns:
        ``"created"`` when ``path`` did not exist just before the write,
        otherwise ``"overwrote"``. Two writers racing on a new path may both
        report ``"created"``.

    Raises:
        VaultIOError: If directory creation, the temp write or the rename fails.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise VaultIOError("Failed to create directory", path.parent, exc) from exc

    existed = path.exists()
    temp_path = _write_temp_sibling(path, content, _note_file_mode(path))

    try:
        os.replace(temp_path, path)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise VaultIOError("Failed to rename temp file to", path, exc) from exc

    status = "overwrote" if existed else "created"
    logger.debug("Wrote %d characters to '%s' (%s)", len(content), path, status)
    return status


def delete_note(root: Path, path: Path, permanent: bool = False) -> str:
    """Delete a note, moving it to the vault trash unless ``permanent``.

    Args:
        root: Vault root directory.
        path: Absolute path of the note.
        permanent: When ``True`` unlink the file instead of trashing it.

    Returns:
        ``"Permanently deleted {path}"`` or ``"Moved to trash: {trash path}"``,
        both vault-relative.

    Raises:
        NoteNotFoundError: If ``path`` does not exist.
        VaultIOError: If the unlink, trash directory creation or move fails.
    """
    ensure_vault_ready(root)
    if not path.exists():
        raise NoteNotFoundError(path)

    display = relative_display(root, path)

    if permanent:
        try:
            path.unlink()
        except OSError as exc:
            raise VaultIOError("Failed to delete file", path, exc) from exc
        logger.info("Permanently deleted '%s'", display)
        return f"Permanently deleted {display}"

    trash_dir = root / TRASH_DIR_NAME
    try:
        trash_dir.mkdir(exist_ok=True)
    except OSError as exc:
        raise VaultIOError("Failed to create trash directory", trash_dir, exc) from exc

    destination = _trash_destination(trash_dir, path.name)
    try:
        os.replace(path, destination)
    except OSError as exc:
        raise VaultIOError("Failed to move file to trash", path, exc) from exc

    trash_display = relative_display(root, destination)
    logger.info("Moved '%s' to trash as '%s'", display, trash_display)
    return f"Moved to trash: {trash_display}"
