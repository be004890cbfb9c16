"""Shared fixtures: a small vault mirroring a typical notes layout."""

import pytest

from stumbling_vault import VaultMetadata

TEST_NOTE = """---
title: Test Note
tags: [rust, mcp]
---

# Hello World

This is a test note about Gagagigo."""

SIMPLE_NOTE = "# Simple Note\n\nNo frontmatter here."

DAILY_NOTE = "# Daily Note\n\nGagagigo awakens!"


@pytest.fixture
def vault_root(tmp_path):
    """Create a vault with one frontmatter note, one plain note and a daily note."""
    root = tmp_path / "vault"
    root.mkdir()
    (root / "test.md").write_text(TEST_NOTE, encoding="utf-8")
    (root / "simple.md").write_text(SIMPLE_NOTE, encoding="utf-8")
    (root / "daily").mkdir()
    (root / "daily" / "2024-01-01.md").write_text(DAILY_NOTE, encoding="utf-8")
    return root.resolve()


@pytest.fixture
def vault(vault_root):
    return VaultMetadata(name="test", path=vault_root, parse_frontmatter=False)
