"""Loader module - reads design documents from disk.

Example:
    >>> from design_viewer.loader import DesignRepository
    >>> repo = DesignRepository("./design")
    >>> repo.list_site_ids()
"""

from .lib import (
    SHARED_LAYOUT_NAME,
    SHARED_PREFIX,
    DesignRepository,
    Document,
    DocumentError,
    DocumentStatus,
    load_optional,
    parse_document,
    read_yaml,
)

__all__ = [
    "DesignRepository",
    "Document",
    "DocumentError",
    "DocumentStatus",
    "load_optional",
    "parse_document",
    "read_yaml",
    "SHARED_LAYOUT_NAME",
    "SHARED_PREFIX",
]
