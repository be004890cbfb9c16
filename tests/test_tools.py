"""End-to-end tests of the MCP tool functions against a temporary vault."""

import asyncio
import json

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from stumbling_vault import VaultMetadata
from stumbling_vault.models import (
    DeleteNoteInput,
    ReadNoteInput,
    SearchMetadataInput,
    SearchNotesInput,
    WriteNoteInput,
)
from stumbling_vault.tools import note_tools, search_tools


class RecordingContext:
    """Stands in for the FastMCP context; records log notifications."""

    def __init__(self):
        self.messages = []

    async def info(self, message):
        self.messages.append(message)


def _use_vault(monkeypatch, vault):
    monkeypatch.setattr(note_tools, "get_vault", lambda: vault)
    monkeypatch.setattr(search_tools, "get_vault", lambda: vault)


@pytest.fixture
def parsing_vault(vault_root, monkeypatch):
    vault = VaultMetadata(name="test", path=vault_root, parse_frontmatter=True)
    _use_vault(monkeypatch, vault)
    return vault


@pytest.fixture
def raw_vault(vault, monkeypatch):
    _use_vault(monkeypatch, vault)
    return vault


def run(coro):
    return asyncio.run(coro)


class TestNoteTools:
    def test_write_then_read_raw(self, raw_vault):
        ctx = RecordingContext()

        message = run(note_tools.write_note(WriteNoteInput(path="inbox/idea.md", content="# Idea"), ctx))
        assert message == "Created inbox/idea.md"
        assert ctx.messages == ["Created inbox/idea.md"]

        message = run(note_tools.write_note(WriteNoteInput(path="inbox/idea.md", content="# Idea 2"), ctx))
        assert message == "Overwrote inbox/idea.md"

        assert run(note_tools.read_note(ReadNoteInput(path="inbox/idea.md"))) == "# Idea 2"

    def test_write_with_metadata_and_parsed_read(self, parsing_vault):
        metadata = {"title": "Idea", "tags": ["draft"], "priority": 2}
        run(note_tools.write_note(WriteNoteInput(path="idea.md", content="Body", metadata=metadata)))

        result = run(note_tools.read_note(ReadNoteInput(path="idea.md")))

        assert result == {"metadata": metadata, "body": "Body"}

    def test_json_string_metadata_matches_object_metadata(self, raw_vault):
        metadata = {"title": "Idea", "tags": ["draft"]}
        run(note_tools.write_note(WriteNoteInput(path="a.md", content="Body", metadata=metadata)))
        run(note_tools.write_note(WriteNoteInput(path="b.md", content="Body", metadata=json.dumps(metadata))))

        path = raw_vault.path
        assert (path / "a.md").read_text(encoding="utf-8") == (path / "b.md").read_text(encoding="utf-8")

    def test_parsed_read_of_plain_note_is_raw(self, parsing_vault):
        result = run(note_tools.read_note(ReadNoteInput(path="simple.md")))
        assert result == "# Simple Note\n\nNo frontmatter here."

    def test_read_missing_note_reports_text_error(self, raw_vault):
        with pytest.raises(ToolError) as excinfo:
            run(note_tools.read_note(ReadNoteInput(path="missing.md")))
        assert str(excinfo.value).startswith("Failed to read note: File does not exist")

    def test_delete_to_trash(self, raw_vault):
        ctx = RecordingContext()

        message = run(note_tools.delete_note(DeleteNoteInput(path="simple.md"), ctx))

        assert message.startswith("Moved to trash: .trash/")
        assert message.endswith("_simple.md")
        assert ctx.messages == [message]
        assert not (raw_vault.path / "simple.md").exists()

    def test_delete_permanent(self, raw_vault):
        message = run(note_tools.delete_note(DeleteNoteInput(path="daily/2024-01-01.md", permanent=True)))

        assert message == "Permanently deleted daily/2024-01-01.md"

    def test_delete_missing_reports_text_error(self, raw_vault):
        with pytest.raises(ToolError) as excinfo:
            run(note_tools.delete_note(DeleteNoteInput(path="missing.md")))
        assert str(excinfo.value).startswith("Failed to delete note:")

    def test_missing_vault_reports_text_error(self, tmp_path, monkeypatch):
        _use_vault(monkeypatch, VaultMetadata(name="gone", path=tmp_path / "gone"))

        with pytest.raises(ToolError) as excinfo:
            run(note_tools.write_note(WriteNoteInput(path="a.md", content="x")))
        assert "Vault root is not accessible" in str(excinfo.value)


class TestSearchTools:
    def test_search_returns_payloads(self, raw_vault):
        results = run(search_tools.search_notes(SearchNotesInput(query="awakens")))

        assert results == [{"path": "daily/2024-01-01.md", "line_number": 3, "line": "Gagagigo awakens!"}]

    def test_search_invalid_pattern(self, raw_vault):
        with pytest.raises(ToolError) as excinfo:
            run(search_tools.search_notes(SearchNotesInput(query="(")))
        assert str(excinfo.value).startswith("Search failed: Invalid regex pattern")

    def test_search_metadata_returns_payloads(self, raw_vault):
        results = run(search_tools.search_metadata(SearchMetadataInput(field="title", pattern="Test", limit=10)))

        assert results == [{"path": "test.md", "value": "Test Note"}]

    def test_search_metadata_invalid_pattern(self, raw_vault):
        with pytest.raises(ToolError) as excinfo:
            run(search_tools.search_metadata(SearchMetadataInput(field="title", pattern="[")))
        assert str(excinfo.value).startswith("Metadata search failed:")

    def test_written_notes_are_searchable_and_trashed_notes_are_not(self, raw_vault):
        run(note_tools.write_note(WriteNoteInput(path="new.md", content="Gagagigo returns")))
        assert len(run(search_tools.search_notes(SearchNotesInput(query="Gagagigo")))) == 3

        run(note_tools.delete_note(DeleteNoteInput(path="new.md")))
        assert len(run(search_tools.search_notes(SearchNotesInput(query="Gagagigo")))) == 2


def test_tools_are_registered():
    from stumbling_vault.server import mcp

    names = {tool.name for tool in asyncio.run(mcp.list_tools())}
    assert {"read_note", "search_notes", "search_metadata", "write_note", "delete_note"} <= names
