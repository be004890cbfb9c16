"""Configuration loading for the vault root and read behaviour."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from stumbling_vault.constants import (
    CONFIG_PATH,
    CONFIG_PATH_ENV,
    PARSE_FRONTMATTER_ENV,
    ROOT_ENV,
)
from stumbling_vault.data_models import VaultMetadata

logger = logging.getLogger(__name__)


def _env_flag(value: str) -> bool:
    """Interpret an environment toggle; only the exact values ``true`` and ``1`` enable it."""
    return value in {"true", "1"}


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """Read the optional YAML configuration file.

    Returns an empty mapping when the file does not exist.

    Raises:
        ValueError: If the file exists but is not a YAML mapping.
    """
    if not config_path.is_file():
        return {}

    try:
        raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Configuration file {config_path} contains invalid YAML: {exc}") from exc

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")
    return raw_config


def load_vault_configuration(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> VaultMetadata:
    """Load and validate the vault configuration.

    Settings come from the optional YAML file (``stumbling.yaml`` next to the
    package, or the path named by ``STUMBLING_CONFIG``) and are overridden by
    ``STUMBLING_ROOT`` and ``STUMBLING_PARSE_FRONTMATTER``.

    Args:
        config_path: Explicit YAML configuration path.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        The :class:`VaultMetadata` for the configured vault.

    Raises:
        FileNotFoundError: If the configured root does not exist.
        ValueError: If no root is configured or a setting has the wrong type.
    """
    env = os.environ if environ is None else environ

    if config_path is None:
        override = env.get(CONFIG_PATH_ENV)
        config_path = Path(override).expanduser() if override else CONFIG_PATH

    raw_config = _read_config_file(config_path)

    raw_root = env.get(ROOT_ENV) or raw_config.get("root")
    if not isinstance(raw_root, str) or not raw_root.strip():
        raise ValueError(
            f"{ROOT_ENV} environment variable not set and no 'root' in {config_path}"
        )

    root = Path(raw_root.strip()).expanduser()
    if not root.exists():
        raise FileNotFoundError(f"{ROOT_ENV} does not exist: {root}")
    root = root.resolve()

    if PARSE_FRONTMATTER_ENV in env:
        parse_frontmatter = _env_flag(env[PARSE_FRONTMATTER_ENV])
    else:
        parse_frontmatter = raw_config.get("parse_frontmatter", False)
        if not isinstance(parse_frontmatter, bool):
            raise ValueError("'parse_frontmatter' must be true or false")

    name = raw_config.get("name") or root.name
    if not isinstance(name, str):
        raise ValueError("'name' must be a string")

    logger.debug("Loaded vault '%s' at %s (parse_frontmatter=%s)", name, root, parse_frontmatter)
    return VaultMetadata(name=name, path=root, parse_frontmatter=parse_frontmatter)


@lru_cache(maxsize=1)
def get_vault() -> VaultMetadata:
    """Return the vault configuration, loading it on first use."""
    return load_vault_configuration()
