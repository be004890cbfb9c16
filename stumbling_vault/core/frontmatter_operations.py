"""YAML frontmatter parsing and formatting."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Optional

import yaml

from stumbling_vault.constants import FRONTMATTER_DELIMITER
from stumbling_vault.data_models import MetadataValue

logger = logging.getLogger(__name__)

_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")
_DOCUMENT_END_MARKER = "\n...\n"


_REPLACED_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class _MetadataLoader(yaml.SafeLoader):
    """SafeLoader with YAML 1.2 style scalar resolution.

    Timestamps stay strings. Only ``true``/``false`` are booleans, and
    sexagesimal (``10:30``) and leading-zero octal (``010``) numbers stay
    strings.
    """


_MetadataLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in _REPLACED_TAGS
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_MetadataLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
_MetadataLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^(?:[-+]?(?:0|[1-9][0-9_]*)|[-+]?0x[0-9a-fA-F_]+)$"),
    list("-+0123456789"),
)
_MetadataLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def canonical_text(value: Any) -> str:
    """Return the canonical text form of a scalar metadata value.

    Booleans render as ``true``/``false`` and ``None`` as ``null``; numbers
    keep the integer-vs-float distinction (``3`` vs ``3.0``).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _normalize(value: Any) -> MetadataValue:
    """Convert decoded YAML into plain JSON-compatible containers."""
    if isinstance(value, Mapping):
        return {
            key if isinstance(key, str) else canonical_text(key): _normalize(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def _split_frontmatter(text: str) -> Optional[tuple[str, str]]:
    """Split ``text`` into ``(header, remainder)`` when it opens with a frontmatter block.

    The opening delimiter must be the very first line and the closing
    delimiter any later line; both must consist solely of ``---``.
    """
    first_break = text.find("\n")
    if first_break == -1 or text[:first_break].rstrip("\r") != FRONTMATTER_DELIMITER:
        return None

    header_start = first_break + 1
    position = header_start
    while True:
        line_end = text.find("\n", position)
        line = text[position:] if line_end == -1 else text[position:line_end]
        if line.rstrip("\r") == FRONTMATTER_DELIMITER:
            remainder = "" if line_end == -1 else text[line_end + 1:]
            return text[header_start:position], remainder
        if line_end == -1:
            return None
        position = line_end + 1


def decode_metadata(header: str) -> tuple[bool, MetadataValue]:
    """Decode YAML header text.

    Returns:
        ``(True, value)`` on success, ``(False, None)`` when the header is not
        valid YAML.
    """
    try:
        return True, _normalize(yaml.load(header, Loader=_MetadataLoader))
    except (yaml.YAMLError, ValueError, RecursionError) as exc:
        logger.debug("Ignoring undecodable frontmatter: %s", exc)
        return False, None


# ==============================================================================
# FRONTMATTER OPERATIONS
# ==============================================================================


def parse_frontmatter(text: str) -> Optional[tuple[MetadataValue, str]]:
    """Extract YAML frontmatter metadata and note body from raw text.

    Args:
        text: Raw markdown text, possibly starting with a frontmatter block.

    Returns:
        ``(metadata, body)`` when a delimited block is present and decodes as
        YAML, where ``body`` is the text after the closing delimiter with
        leading blank lines removed. ``None`` when there is no block or it
        cannot be decoded; the whole text is then the body.
    """
    split = _split_frontmatter(text)
    if split is None:
        return None

    header, remainder = split
    decoded, metadata = decode_metadata(header)
    if not decoded:
        return None

    return metadata, _LEADING_BLANK_LINES.sub("", remainder)


def format_with_frontmatter(metadata: Any, body: str) -> str:
    """Serialize metadata and body into a note with a frontmatter block.

    Callers sometimes pass metadata double-encoded as a JSON string; such a
    string is decoded first and kept as-is if it is not valid JSON.

    Args:
        metadata: Metadata value, or a JSON string encoding one.
        body: Markdown body, written verbatim.

    Returns:
        ``"---\\n{yaml}\\n---\\n\\n{body}"``.

    Raises:
        ValueError: If ``metadata`` cannot be represented as YAML.
    """
    if isinstance(metadata, str):
        try:
            metadata = json.loads(metadata)
        except json.JSONDecodeError:
            pass

    try:
        dumped = yaml.safe_dump(
            metadata,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:
        raise ValueError(f"Metadata cannot be serialized to YAML: {exc}") from exc

    # Bare top-level scalars get an explicit document end marker.
    if dumped.endswith(_DOCUMENT_END_MARKER):
        dumped = dumped[: -len(_DOCUMENT_END_MARKER) + 1]
    if dumped.endswith("\n"):
        dumped = dumped[:-1]

    return f"{FRONTMATTER_DELIMITER}\n{dumped}\n{FRONTMATTER_DELIMITER}\n\n{body}"
