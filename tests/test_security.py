"""
Security Tests

Tests for security utilities and input validation.
"""

import pytest

from src.config.settings import ALLOWED_ATTACHMENT_TYPES
from src.utils.security import (
    SecurityError,
    normalize_object_path,
    sanitize_filename,
    validate_file_size,
    validate_mime_type,
    validate_user_identifier,
)


class TestUserIdentifierValidation:
    """Test caller identifier validation"""

    def test_valid_identifiers(self):
        """OIDC subjects, emails and UUIDs should pass"""
        valid_ids = ["alice", "user_8a2d", "auth0|5f7c1b", "bob@example.com", "3f1e-22aa-9c01", "a.b:c"]
        for user_id in valid_ids:
            assert validate_user_identifier(user_id) == user_id

    def test_strips_whitespace(self):
        assert validate_user_identifier("  alice ") == "alice"

    def test_reject_invalid_characters(self):
        """Invalid characters should be rejected"""
        invalid_ids = ["a b", "alice;DROP TABLE", "<script>", "../admin", "alice\x00", "al/ice"]
        for user_id in invalid_ids:
            with pytest.raises(SecurityError, match="Invalid user identifier"):
                validate_user_identifier(user_id)

    def test_reject_empty(self):
        with pytest.raises(SecurityError, match="cannot be empty"):
            validate_user_identifier("   ")

    def test_reject_non_string(self):
        with pytest.raises(SecurityError, match="must be a string"):
            validate_user_identifier(123)

    def test_reject_too_long(self):
        with pytest.raises(SecurityError, match="Invalid user identifier"):
            validate_user_identifier("a" * 101)


class TestMimeTypeValidation:
    """Test attachment MIME allow-list"""

    def test_allowed_types(self):
        for mime in ALLOWED_ATTACHMENT_TYPES:
            assert validate_mime_type(mime, ALLOWED_ATTACHMENT_TYPES)

    def test_case_and_parameters_ignored(self):
        assert validate_mime_type("Application/PDF", ALLOWED_ATTACHMENT_TYPES)
        assert validate_mime_type("text/plain; charset=utf-8", ALLOWED_ATTACHMENT_TYPES)

    def test_rejected_types(self):
        for mime in ["application/x-msdownload", "text/html", "image/gif", "", None]:
            assert not validate_mime_type(mime, ALLOWED_ATTACHMENT_TYPES)


class TestFileSizeValidation:
    """Test file size validation"""

    def test_valid_sizes(self):
        assert validate_file_size(1, max_size_mb=10)
        assert validate_file_size(5 * 1024 * 1024, max_size_mb=10)
        assert validate_file_size(10 * 1024 * 1024, max_size_mb=10)

    def test_invalid_sizes(self):
        assert not validate_file_size(10 * 1024 * 1024 + 1, max_size_mb=10)
        assert not validate_file_size(0, max_size_mb=10)
        assert not validate_file_size(-1, max_size_mb=10)


class TestObjectPath:
    """Test object storage path normalization"""

    def test_normalizes(self):
        assert normalize_object_path("/objects/uploads/abc") == "/objects/uploads/abc"
        assert normalize_object_path("/objects//uploads/./abc") == "/objects/uploads/abc"

    def test_reject_traversal(self):
        for path in ["/objects/../etc/passwd", "/objects/uploads/../../secret"]:
            with pytest.raises(SecurityError, match="Path traversal"):
                normalize_object_path(path)

    def test_reject_outside_prefix(self):
        for path in ["/uploads/abc", "objects/abc", "/objects", "/objectsX/abc"]:
            with pytest.raises(SecurityError, match="must start with"):
                normalize_object_path(path)

    def test_reject_invalid_characters(self):
        for path in ["/objects\\abc", "/objects/a\x00b"]:
            with pytest.raises(SecurityError, match="Invalid characters"):
                normalize_object_path(path)

    def test_reject_empty(self):
        with pytest.raises(SecurityError, match="cannot be empty"):
            normalize_object_path("")


class TestSanitizeFilename:
    """Test filename sanitization"""

    def test_basename_only(self):
        assert sanitize_filename("../../../etc/passwd") == "passwd"
        assert sanitize_filename("C:\\Users\\me\\report.docx") == "report.docx"

    def test_special_characters(self):
        assert sanitize_filename("image (1).jpg") == "image__1_.jpg"

    def test_hidden_and_empty(self):
        assert sanitize_filename(".env") == "env"
        assert sanitize_filename("") == "unnamed"

    def test_long_name_keeps_extension(self):
        name = sanitize_filename("a" * 300 + ".pdf")
        assert len(name) == 200
        assert name.endswith(".pdf")
