"""Design document loader.

Reads the per-site and per-screen YAML documents of a design tree:

    <root>/sites/<siteId>/site.yaml
    <root>/sites/<siteId>/_shared/app-layout.yaml
    <root>/sites/<siteId>/_shared/app-events.yaml
    <root>/sites/<siteId>/_shared/app-fields.yaml
    <root>/sites/<siteId>/screens/<screenId>/layout.yaml
    <root>/sites/<siteId>/screens/<screenId>/fields.yaml
    <root>/sites/<siteId>/screens/<screenId>/events.yaml

Optional documents never raise: they come back as a Document whose status is
PRESENT, ABSENT or MALFORMED. The screen layout is required and raises
LayoutNotFound when it is missing or malformed.

Every call reads from disk; nothing is cached.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

from design_viewer.core.errors import LayoutNotFound, ScreenNotFound, SiteNotFound
from design_viewer.schema import (
    EventsDocument,
    FieldDefinition,
    LayoutDocument,
    SiteManifest,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SITES_DIR = "sites"
SCREENS_DIR = "screens"
SHARED_DIR = "_shared"
SHARED_PREFIX = f"{SHARED_DIR}/"

SITE_MANIFEST_FILE = "site.yaml"
LAYOUT_FILE = "layout.yaml"
FIELDS_FILE = "fields.yaml"
EVENTS_FILE = "events.yaml"
SHARED_LAYOUT_NAME = "app-layout"
SHARED_EVENTS_FILE = "app-events.yaml"
SHARED_FIELDS_FILE = "app-fields.yaml"

_FIELD_LIST = TypeAdapter(tuple[FieldDefinition, ...])


class DocumentStatus(str, Enum):
    """Outcome of reading an optional document."""

    PRESENT = "present"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class Document(Generic[T]):
    """Result of reading one document.

    Attributes:
        path: File the document was read from.
        status: Whether the document was present, absent or malformed.
        value: Parsed value when present.
        error: Parse or validation message when malformed.
    """

    path: Path
    status: DocumentStatus
    value: T | None = None
    error: str | None = None

    @property
    def present(self) -> bool:
        return self.status == DocumentStatus.PRESENT

    def value_or(self, default: T) -> T:
        """Return the parsed value, or ``default`` when absent or malformed."""
        return self.value if self.present else default


class DocumentError(Exception):
    """A document exists but cannot be parsed or validated."""

    def __init__(self, path: Path, detail: str):
        super().__init__(f"{path}: {detail}")
        self.path = path
        self.detail = detail


def _is_plain_id(identifier: str) -> bool:
    """Whether ``identifier`` names a single directory entry."""
    if not identifier or identifier in (".", ".."):
        return False
    return "/" not in identifier and "\\" not in identifier


def read_yaml(path: Path) -> Any:
    """Parse a YAML file.

    Args:
        path: File to read.

    Returns:
        Parsed data; an empty file yields None.

    Raises:
        DocumentError: If the file is unreadable or not valid YAML.
    """
    try:
        content = path.read_text(encoding="utf-8")
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DocumentError(path, f"invalid YAML: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(path, f"unreadable: {e}") from e


def parse_document(path: Path, parse: Callable[[Any], T], empty: Any) -> T:
    """Read and validate a document.

    Args:
        path: File to read.
        parse: Validator turning raw YAML data into a typed value.
        empty: Raw value substituted for an empty file.

    Returns:
        Validated value.

    Raises:
        DocumentError: On YAML or schema errors.
    """
    data = read_yaml(path)
    if data is None:
        data = empty
    try:
        return parse(data)
    except ValidationError as e:
        raise DocumentError(
            path, f"schema error ({e.error_count()} issues): {e}"
        ) from e


def load_optional(path: Path, parse: Callable[[Any], T], empty: Any) -> Document[T]:
    """Read an optional document without raising.

    Missing files are ABSENT. Unreadable or invalid files are logged as
    warnings and reported as MALFORMED.
    """
    if not path.is_file():
        return Document(path=path, status=DocumentStatus.ABSENT)

    try:
        value = parse_document(path, parse, empty)
    except DocumentError as e:
        logger.warning(f"Failed to parse {path}: {e.detail}")
        return Document(path=path, status=DocumentStatus.MALFORMED, error=e.detail)

    return Document(path=path, status=DocumentStatus.PRESENT, value=value)


def _parse_manifest(data: Any) -> SiteManifest:
    return SiteManifest.model_validate(data)


def _parse_layout(data: Any) -> LayoutDocument:
    return LayoutDocument.model_validate(data)


def _parse_events(data: Any) -> EventsDocument:
    return EventsDocument.model_validate(data)


def _parse_fields(data: Any) -> tuple[FieldDefinition, ...]:
    return _FIELD_LIST.validate_python(data)


class DesignRepository:
    """Read access to a design tree rooted at ``root``.

    Example:
        >>> repo = DesignRepository(Path("./design"))
        >>> repo.list_site_ids()
        ['shop']
        >>> layout = repo.read_layout("shop", "login")
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    @property
    def sites_path(self) -> Path:
        return self.root / SITES_DIR

    # -------------------------------------------------------------------------
    # Sites
    # -------------------------------------------------------------------------

    def list_site_ids(self) -> list[str]:
        """Site directory names, sorted, skipping ``_``-prefixed entries."""
        if not self.sites_path.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.sites_path.iterdir()
            if entry.is_dir() and not entry.name.startswith("_")
        )

    def site_path(self, site_id: str) -> Path:
        """Directory of a site.

        Raises:
            SiteNotFound: If the site does not exist.
        """
        if not _is_plain_id(site_id) or site_id.startswith("_"):
            raise SiteNotFound(site_id)
        path = self.sites_path / site_id
        if not path.is_dir():
            raise SiteNotFound(site_id)
        return path

    def read_manifest(self, site_id: str) -> Document[SiteManifest]:
        """site.yaml of a site."""
        path = self.site_path(site_id) / SITE_MANIFEST_FILE
        return load_optional(path, _parse_manifest, {})

    # -------------------------------------------------------------------------
    # Shared documents
    # -------------------------------------------------------------------------

    def shared_path(self, site_id: str) -> Path:
        return self.site_path(site_id) / SHARED_DIR

    def read_shared_layout(
        self, site_id: str, name: str = SHARED_LAYOUT_NAME
    ) -> Document[LayoutDocument]:
        """A shared layout document such as ``_shared/app-layout.yaml``."""
        path = self.shared_path(site_id) / f"{name}.yaml"
        if not _is_plain_id(name):
            logger.warning(f"Ignoring invalid shared layout name: {name!r}")
            return Document(path=path, status=DocumentStatus.ABSENT)
        return load_optional(path, _parse_layout, {})

    def resolve_extends(self, site_id: str, extends: str) -> Document[LayoutDocument]:
        """Load the shared layout named by a layout's ``extends`` value.

        ``_shared/app-layout`` and ``app-layout`` both name
        ``_shared/app-layout.yaml``.
        """
        name = extends.strip()
        if name.startswith(SHARED_PREFIX):
            name = name[len(SHARED_PREFIX) :]
        if name.endswith(".yaml"):
            name = name[: -len(".yaml")]
        return self.read_shared_layout(site_id, name)

    def read_shared_events(self, site_id: str) -> Document[EventsDocument]:
        """_shared/app-events.yaml of a site."""
        path = self.shared_path(site_id) / SHARED_EVENTS_FILE
        return load_optional(path, _parse_events, {})

    def read_shared_fields(self, site_id: str) -> Document[tuple[FieldDefinition, ...]]:
        """_shared/app-fields.yaml of a site."""
        path = self.shared_path(site_id) / SHARED_FIELDS_FILE
        return load_optional(path, _parse_fields, [])

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def list_screen_ids(self, site_id: str) -> list[str]:
        """Screen directory names of a site, sorted, skipping ``_`` entries."""
        screens = self.site_path(site_id) / SCREENS_DIR
        if not screens.is_dir():
            return []
        return sorted(
            entry.name
            for entry in screens.iterdir()
            if entry.is_dir() and not entry.name.startswith("_")
        )

    def screen_path(self, site_id: str, screen_id: str) -> Path:
        """Directory of a screen.

        Raises:
            SiteNotFound: If the site does not exist.
            ScreenNotFound: If the screen does not exist.
        """
        site = self.site_path(site_id)
        if not _is_plain_id(screen_id) or screen_id.startswith("_"):
            raise ScreenNotFound(site_id, screen_id)
        path = site / SCREENS_DIR / screen_id
        if not path.is_dir():
            raise ScreenNotFound(site_id, screen_id)
        return path

    def load_layout(self, site_id: str, screen_id: str) -> Document[LayoutDocument]:
        """layout.yaml of a screen, as an optional document."""
        path = self.screen_path(site_id, screen_id) / LAYOUT_FILE
        return load_optional(path, _parse_layout, {})

    def read_layout(self, site_id: str, screen_id: str) -> LayoutDocument:
        """layout.yaml of a screen.

        Raises:
            LayoutNotFound: If the layout is missing, unparseable or invalid.
        """
        document = self.load_layout(site_id, screen_id)
        if document.status == DocumentStatus.ABSENT:
            raise LayoutNotFound(site_id, screen_id)
        if document.status == DocumentStatus.MALFORMED:
            raise LayoutNotFound(site_id, screen_id, document.error)
        return document.value

    def read_screen_fields(
        self, site_id: str, screen_id: str
    ) -> Document[tuple[FieldDefinition, ...]]:
        """fields.yaml of a screen."""
        path = self.screen_path(site_id, screen_id) / FIELDS_FILE
        return load_optional(path, _parse_fields, [])

    def read_screen_events(self, site_id: str, screen_id: str) -> Document[EventsDocument]:
        """events.yaml of a screen."""
        path = self.screen_path(site_id, screen_id) / EVENTS_FILE
        return load_optional(path, _parse_events, {})


__all__ = [
    "DocumentStatus",
    "Document",
    "DocumentError",
    "DesignRepository",
    "read_yaml",
    "parse_document",
    "load_optional",
    "SHARED_LAYOUT_NAME",
    "SHARED_PREFIX",
]
