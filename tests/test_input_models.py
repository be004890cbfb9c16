"""Tests for Pydantic input models.

This test suite validates the input validation logic for MCP tools,
ensuring that:
- Valid inputs are accepted and normalized correctly
- Invalid inputs raise ValidationError with descriptive messages
- Defaults match the documented tool behaviour
"""

import pytest
from pydantic import ValidationError

from stumbling_vault.models import (
    BaseNotePathInput,
    DeleteNoteInput,
    ReadNoteInput,
    SearchMetadataInput,
    SearchNotesInput,
    WriteNoteInput,
)


class TestBaseNotePathInput:
    """Test suite for BaseNotePathInput model validation."""

    def test_valid_simple_path(self):
        model = BaseNotePathInput(path="note.md")
        assert model.path == "note.md"

    def test_valid_nested_path(self):
        model = ReadNoteInput(path="daily/2024-01-01.md")
        assert model.path == "daily/2024-01-01.md"

    def test_whitespace_is_stripped(self):
        model = ReadNoteInput(path="  projects/plan.md  ")
        assert model.path == "projects/plan.md"

    def test_backslashes_are_normalized(self):
        model = ReadNoteInput(path="daily\\2024-01-01.md")
        assert model.path == "daily/2024-01-01.md"

    def test_dots_in_name_are_allowed(self):
        model = ReadNoteInput(path="files/my.config.file.md")
        assert model.path == "files/my.config.file.md"

    @pytest.mark.parametrize(
        "bad_path",
        ["", "   ", "/etc/passwd.md", "C:/notes/x.md", "../outside.md", "a/../b.md", "./a.md", "a//b.md"],
    )
    def test_invalid_paths_are_rejected(self, bad_path):
        with pytest.raises(ValidationError):
            ReadNoteInput(path=bad_path)

    def test_traversal_error_message(self):
        with pytest.raises(ValidationError) as excinfo:
            ReadNoteInput(path="../secret.md")
        assert "'.' or '..'" in str(excinfo.value)


class TestNoteModels:
    def test_write_defaults(self):
        model = WriteNoteInput(path="inbox/idea.md", content="")
        assert model.content == ""
        assert model.metadata is None

    def test_write_accepts_object_or_string_metadata(self):
        assert WriteNoteInput(path="a.md", content="x", metadata={"tags": ["a"]}).metadata == {"tags": ["a"]}
        assert WriteNoteInput(path="a.md", content="x", metadata='{"tags": ["a"]}').metadata == '{"tags": ["a"]}'

    def test_write_requires_content(self):
        with pytest.raises(ValidationError):
            WriteNoteInput(path="a.md")

    def test_delete_defaults_to_trash(self):
        assert DeleteNoteInput(path="a.md").permanent is False
        assert DeleteNoteInput(path="a.md", permanent=True).permanent is True


class TestSearchModels:
    def test_search_defaults(self):
        model = SearchNotesInput(query="Gagagigo")
        assert model.limit == 20

    def test_zero_limit_allowed(self):
        assert SearchNotesInput(query="x", limit=0).limit == 0

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            SearchNotesInput(query="x", limit=-1)
        with pytest.raises(ValidationError):
            SearchMetadataInput(field="title", pattern="x", limit=-5)

    def test_empty_patterns_are_accepted(self):
        assert SearchNotesInput(query="").query == ""
        assert SearchMetadataInput(field="title", pattern="").pattern == ""

    def test_metadata_field_path(self):
        model = SearchMetadataInput(field=" author.name ", pattern="Ada")
        assert model.field == "author.name"
        assert model.limit == 20

    @pytest.mark.parametrize("bad_field", ["", ".", "author.", ".name", "a..b"])
    def test_metadata_field_rejects_empty_segments(self, bad_field):
        with pytest.raises(ValidationError):
            SearchMetadataInput(field=bad_field, pattern="x")

    def test_schema_generation(self):
        schema = SearchMetadataInput.model_json_schema()
        assert set(schema["properties"]) == {"field", "pattern", "limit"}
        assert schema["required"] == ["field", "pattern"]
