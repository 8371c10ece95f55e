"""Error taxonomy for design resolution.

Every "required resource absent" condition derives from DesignNotFoundError
and carries a 404 status so transport layers can map it without inspecting
the concrete class. Anything else raised during resolution is an internal
error (500).
"""

__all__ = [
    "DesignError",
    "DesignNotFoundError",
    "SiteNotFound",
    "ScreenNotFound",
    "LayoutNotFound",
]


class DesignError(Exception):
    """Base class for design resolution errors.

    Attributes:
        status_code: HTTP-equivalent status for boundary mapping.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DesignNotFoundError(DesignError):
    """A required design resource does not exist."""

    status_code = 404


class SiteNotFound(DesignNotFoundError):
    """The requested site directory does not exist."""

    def __init__(self, site_id: str):
        super().__init__(f"Site not found: {site_id}")
        self.site_id = site_id


class ScreenNotFound(DesignNotFoundError):
    """The requested screen directory does not exist."""

    def __init__(self, site_id: str, screen_id: str):
        super().__init__(f"Screen not found: {site_id}/{screen_id}")
        self.site_id = site_id
        self.screen_id = screen_id


class LayoutNotFound(DesignNotFoundError):
    """The screen layout document is missing or unreadable."""

    def __init__(self, site_id: str, screen_id: str, reason: str | None = None):
        message = f"Layout not found: {site_id}/{screen_id}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.site_id = site_id
        self.screen_id = screen_id
        self.reason = reason
