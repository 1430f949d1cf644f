"""
Tests for input validation

Tests raw file checks before import:
- File existence
- .3FR extension
"""

from phocus_import.models.import_result import ImportStatus
from phocus_import.validation.raw_validator import RawFileValidator


class TestRawFileValidation:
    """Test raw file path validation"""

    def test_valid_file(self, make_raw):
        """Should accept an existing .3FR"""
        status, reason = RawFileValidator.validate_file(make_raw())

        assert status is None
        assert reason is None

    def test_lowercase_extension(self, make_raw):
        assert RawFileValidator.is_valid(make_raw("IMG_0002.3fr"))

    def test_nonexistent_file(self, tmp_path):
        """Should skip a missing file"""
        status, reason = RawFileValidator.validate_file(tmp_path / "missing.3FR")

        assert status is ImportStatus.SKIPPED_NOT_FOUND
        assert "not found" in reason.lower()

    def test_directory(self, tmp_path):
        folder = tmp_path / "dir.3FR"
        folder.mkdir()

        status, _ = RawFileValidator.validate_file(folder)

        assert status is ImportStatus.SKIPPED_NOT_FOUND

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "IMG_0001.fff"
        path.write_bytes(b"x")

        status, reason = RawFileValidator.validate_file(path)

        assert status is ImportStatus.SKIPPED_WRONG_EXTENSION
        assert "3FR" in reason
        assert RawFileValidator.is_valid(path) is False

    def test_empty_base_name(self, tmp_path):
        """A file named only '.3FR' has no base name to build an ID from"""
        path = tmp_path / ".3FR"
        path.write_bytes(b"x")

        assert RawFileValidator.is_valid(path) is False
