"""
Security Utilities

Input validation for identities, attachment metadata and object paths.
"""

import posixpath
import re
from pathlib import Path
from typing import Iterable, Optional

OBJECT_PATH_PREFIX = "/objects/"


class SecurityError(Exception):
    """Security validation failure"""

    pass


def validate_user_identifier(user_id: str) -> str:
    """
    Validate a caller identifier supplied by the auth proxy.

    Args:
        user_id: User identifier (e.g. an OIDC ``sub`` claim)

    Returns:
        The stripped identifier

    Raises:
        SecurityError: If the identifier is empty or has unsafe characters

    Example:
        >>> validate_user_identifier("user_8a2d")
        'user_8a2d'
        >>> validate_user_identifier("a b")
        SecurityError: Invalid user identifier
    """
    if not isinstance(user_id, str):
        raise SecurityError("User identifier must be a string")

    user_id = user_id.strip()
    if not user_id:
        raise SecurityError("User identifier cannot be empty")

    # OIDC subjects, emails and UUIDs; max 100 chars (column width)
    if not re.match(r"^[A-Za-z0-9_.@:|-]{1,100}$", user_id):
        raise SecurityError(f"Invalid user identifier: '{user_id}'")

    return user_id


def validate_mime_type(mime_type: Optional[str], allowed_types: Iterable[str]) -> bool:
    """
    Check a MIME type against an allow-list (case-insensitive, parameters ignored).

    Example:
        >>> validate_mime_type("application/pdf", ["application/pdf"])
        True
        >>> validate_mime_type("application/x-msdownload", ["application/pdf"])
        False
    """
    if not mime_type:
        return False
    base = mime_type.split(";", 1)[0].strip().lower()
    return base in {t.lower() for t in allowed_types}


def validate_file_size(file_size: int, max_size_mb: int = 10) -> bool:
    """
    File size validation

    Args:
        file_size: File size (bytes)
        max_size_mb: Maximum size (MB)

    Returns:
        True when 0 < file_size <= max

    Example:
        >>> validate_file_size(5_000_000, max_size_mb=10)  # 5MB
        True
        >>> validate_file_size(15_000_000, max_size_mb=10)  # 15MB
        False
    """
    max_size_bytes = max_size_mb * 1024 * 1024
    return 0 < file_size <= max_size_bytes


def normalize_object_path(object_path: str) -> str:
    """
    Normalize an object-storage entity path and block traversal.

    Args:
        object_path: Path returned by the upload flow (``/objects/...``)

    Returns:
        Normalized path

    Raises:
        SecurityError: If the path is outside ``/objects/`` or contains traversal

    Example:
        >>> normalize_object_path("/objects/uploads//abc")
        '/objects/uploads/abc'
        >>> normalize_object_path("/objects/../secret")
        SecurityError: Path traversal detected
    """
    if not object_path or not isinstance(object_path, str):
        raise SecurityError("Object path cannot be empty")

    if "\\" in object_path or "\x00" in object_path:
        raise SecurityError(f"Invalid characters in object path: '{object_path}'")

    if ".." in object_path.split("/"):
        raise SecurityError(f"Path traversal detected in object path: '{object_path}'")

    normalized = posixpath.normpath(object_path)
    if not normalized.startswith(OBJECT_PATH_PREFIX):
        raise SecurityError(f"Object path must start with {OBJECT_PATH_PREFIX}: '{object_path}'")

    return normalized


def sanitize_filename(filename: str) -> str:
    """
    Make a display-safe file name (basename only, [A-Za-z0-9._-]).

    Example:
        >>> sanitize_filename("../../../etc/passwd")
        'passwd'
        >>> sanitize_filename("image (1).jpg")
        'image__1_.jpg'
        >>> sanitize_filename("")
        'unnamed'
    """
    # Basename only; treat backslashes as separators too
    safe_name = Path(filename.replace("\\", "/")).name

    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", safe_name)

    # Leading dots (hidden files / path tricks)
    safe_name = safe_name.lstrip(".")

    if not safe_name:
        safe_name = "unnamed"

    if len(safe_name) > 200:
        ext = Path(safe_name).suffix
        safe_name = safe_name[: 200 - len(ext)] + ext

    return safe_name
