"""Tests for FileMetadata, Location types and the structural file check."""

import pytest
from pydantic import ValidationError

from tg_files.domain.files import (
    FileMetadata,
    LocalLocation,
    RemoteLocation,
    is_file_like,
    redact_url,
)


class TestIsFileLike:
    def test_dict_with_file_id(self):
        assert is_file_like({"file_id": "f1", "file_path": "x"})

    def test_dict_without_file_id(self):
        assert not is_file_like({"chat_id": 1})

    @pytest.mark.parametrize("value", [None, True, 42, "file_id", ["file_id"]])
    def test_non_mappings(self, value):
        assert not is_file_like(value)


class TestFileMetadata:
    def test_from_mapping(self):
        meta = FileMetadata.from_value(
            {
                "file_id": "f1",
                "file_unique_id": "u1",
                "file_size": 1024,
                "file_path": "photos/file_1.jpg",
            }
        )
        assert meta.file_id == "f1"
        assert meta.file_unique_id == "u1"
        assert meta.file_size == 1024
        assert meta.file_path == "photos/file_1.jpg"

    def test_optional_fields_default_to_none(self):
        meta = FileMetadata.from_value({"file_id": "f1"})
        assert meta.file_path is None
        assert meta.file_size is None

    def test_unknown_fields_ignored(self):
        meta = FileMetadata.from_value({"file_id": "f1", "width": 90, "height": 90})
        assert meta.file_id == "f1"

    def test_from_object_attributes(self):
        class Obj:
            file_id = "f9"
            file_unique_id = "u9"
            file_size = None
            file_path = "/var/lib/bot/f9"

        meta = FileMetadata.from_value(Obj())
        assert meta.file_id == "f9"
        assert meta.file_path == "/var/lib/bot/f9"

    def test_rejects_non_string_file_id(self):
        with pytest.raises(ValidationError):
            FileMetadata.from_value({"file_id": 123})

    def test_is_frozen(self):
        meta = FileMetadata(file_id="f1", file_path="a")
        with pytest.raises(ValidationError):
            meta.file_path = "b"


class TestLocations:
    def test_locations_are_values(self):
        assert LocalLocation("/a") == LocalLocation("/a")
        assert RemoteLocation("https://x/y") != LocalLocation("https://x/y")


class TestRedactUrl:
    def test_masks_token(self):
        url = "https://api.telegram.org/file/bot123:ABC/photos/a.jpg"
        assert redact_url(url) == "https://api.telegram.org/file/bot<token>/photos/a.jpg"

    def test_leaves_paths_alone(self):
        assert redact_url("/var/lib/bot/files/f2.jpg") == "/var/lib/bot/files/f2.jpg"
