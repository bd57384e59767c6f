"""Path canonicalization shared by token scoping and request construction.

Every path that ends up inside a signed token or a request URL goes
through :func:`canonicalize`, so the two can never disagree.
"""

from __future__ import annotations

import posixpath

UPLOAD_PREFIX = "/file/"
RETRIEVE_PREFIX = "/api/image/"


def canonicalize(path: str | None) -> str:
    """Return ``path`` with forward slashes only and no empty, ``.`` or ``..`` segments.

    The result never starts or ends with a slash, and ``..`` cannot climb
    above the first segment. ``canonicalize(canonicalize(p)) == canonicalize(p)``.
    """
    normalized = (path or "").replace("\\", "/").lstrip("/")
    if not normalized:
        return ""
    return posixpath.normpath("/" + normalized).lstrip("/")


def join_path(base_path: str | None, item_path: str | None) -> str:
    """Join a base path and an item name into one canonical path."""
    segments = (canonicalize(base_path), canonicalize(item_path))
    return "/".join(segment for segment in segments if segment)


def upload_path(base_path: str | None, item_path: str | None) -> str:
    return UPLOAD_PREFIX + join_path(base_path, item_path)


def retrieve_path(base_path: str | None, item_path: str | None) -> str:
    return RETRIEVE_PREFIX + join_path(base_path, item_path)


__all__ = [
    "UPLOAD_PREFIX",
    "RETRIEVE_PREFIX",
    "canonicalize",
    "join_path",
    "upload_path",
    "retrieve_path",
]
