"""Concurrent content and frontmatter search across the vault."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

from stumbling_vault.constants import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_WORKERS
from stumbling_vault.core.frontmatter_operations import canonical_text, parse_frontmatter
from stumbling_vault.core.vault_operations import (
    ensure_vault_ready,
    iter_note_files,
    relative_display,
)
from stumbling_vault.data_models import MetadataSearchResult, MetadataValue, SearchResult
from stumbling_vault.errors import InvalidPatternError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class BoundedCollector(Generic[T]):
    """Thread-safe result list that never grows beyond ``limit`` items.

    The capacity check and the append happen under one lock, so concurrent
    producers can never push the size past the cap.
    """

    def __init__(self, limit: int) -> None:
        self.limit = max(limit, 0)
        self._items: list[T] = []
        self._lock = threading.Lock()

    def add(self, item: T) -> bool:
        """Append ``item`` if there is room; return whether it was kept."""
        with self._lock:
            if len(self._items) >= self.limit:
                return False
            self._items.append(item)
            return True

    @property
    def full(self) -> bool:
        with self._lock:
            return len(self._items) >= self.limit

    def results(self) -> list[T]:
        with self._lock:
            return list(self._items)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def _read_note_text(path: Path) -> Optional[str]:
    """Read a note for searching, returning ``None`` if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping file '%s' during search: %s", path, exc)
        return None


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _fan_out(root: Path, scan_file: Callable[[Path], None]) -> int:
    """Run ``scan_file`` over every note in the vault on a bounded pool.

    Returns:
        Number of files dispatched.
    """
    files = list(iter_note_files(root))
    if not files:
        return 0

    workers = min(MAX_SEARCH_WORKERS, len(files))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="vault-search") as pool:
        # list() propagates unexpected worker exceptions instead of dropping them.
        list(pool.map(scan_file, files))

    return len(files)


def resolve_field(metadata: MetadataValue, field: str) -> Any:
    """Resolve a dot-separated ``field`` path inside ``metadata``.

    Returns:
        The value at the path, or a private sentinel when a segment is
        missing or an intermediate value is not a mapping.
    """
    current: Any = metadata
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def value_matches_pattern(value: MetadataValue, regex: re.Pattern[str]) -> bool:
    """Test a resolved metadata value against ``regex``.

    Strings are searched directly, booleans and numbers through their
    canonical text, and lists match when any element does. Mappings and
    nulls never match.
    """
    if isinstance(value, str):
        return regex.search(value) is not None
    if isinstance(value, (bool, int, float)):
        return regex.search(canonical_text(value)) is not None
    if isinstance(value, list):
        return any(value_matches_pattern(item, regex) for item in value)
    return False


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def search_notes(
    root: Path,
    query: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[SearchResult]:
    """Search note lines for a regular expression.

    Args:
        root: Vault root directory.
        query: Regular expression, matched anywhere in a line.
        limit: Maximum number of results; ``0`` returns nothing.

    Returns:
        Up to ``limit`` matches. Lines within a file keep ascending order;
        ordering across files is unspecified.

    Raises:
        InvalidPatternError: If ``query`` is not a valid regex.
        VaultNotReadyError: If ``root`` is not a directory.
    """
    regex = _compile_pattern(query)
    ensure_vault_ready(root)

    collector: BoundedCollector[SearchResult] = BoundedCollector(limit)
    if collector.full:
        return []

    def scan_file(path: Path) -> None:
        text = _read_note_text(path)
        if text is None:
            return

        relative_path = relative_display(root, path)
        for line_number, line in enumerate(_split_lines(text), start=1):
            if regex.search(line) is None:
                continue
            if not collector.add(SearchResult(relative_path, line_number, line)):
                return

    scanned = _fan_out(root, scan_file)
    results = collector.results()
    logger.info(
        "Content search for %r matched %d line(s) across %d file(s)",
        query,
        len(results),
        scanned,
    )
    return results


def search_metadata(
    root: Path,
    field: str,
    pattern: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[MetadataSearchResult]:
    """Search notes whose frontmatter ``field`` matches ``pattern``.

    Args:
        root: Vault root directory.
        field: Dot-separated path into the frontmatter, e.g. ``author.name``.
        pattern: Regular expression tested against the resolved value.
        limit: Maximum number of results; ``0`` returns nothing.

    Returns:
        Up to ``limit`` matches, each carrying the full resolved value.

    Raises:
        InvalidPatternError: If ``pattern`` is not a valid regex.
        VaultNotReadyError: If ``root`` is not a directory.
    """
    regex = _compile_pattern(pattern)
    ensure_vault_ready(root)

    collector: BoundedCollector[MetadataSearchResult] = BoundedCollector(limit)
    if collector.full:
        return []

    def scan_file(path: Path) -> None:
        text = _read_note_text(path)
        if text is None:
            return

        parsed = parse_frontmatter(text)
        if parsed is None:
            return

        value = resolve_field(parsed[0], field)
        if value is _MISSING or not value_matches_pattern(value, regex):
            return

        collector.add(MetadataSearchResult(relative_display(root, path), value))

    scanned = _fan_out(root, scan_file)
    results = collector.results()
    logger.info(
        "Metadata search on '%s' for %r matched %d note(s) across %d file(s)",
        field,
        pattern,
        len(results),
        scanned,
    )
    return results


def as_payloads(results: Iterable[Any]) -> list[dict[str, Any]]:
    """Convert search results into serializable payloads."""
    return [result.as_payload() for result in results]
