"""Tests for the error taxonomy."""

import pytest

from .lib import (
    DesignError,
    DesignNotFoundError,
    LayoutNotFound,
    ScreenNotFound,
    SiteNotFound,
)


class TestNotFoundErrors:
    """Tests for not-found errors."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error",
        [
            SiteNotFound("shop"),
            ScreenNotFound("shop", "login"),
            LayoutNotFound("shop", "login"),
        ],
    )
    def test_all_map_to_404(self, error):
        """Every not-found error carries status 404."""
        assert isinstance(error, DesignNotFoundError)
        assert error.status_code == 404

    @pytest.mark.unit
    def test_base_error_is_internal(self):
        """Generic design errors map to 500."""
        assert DesignError("boom").status_code == 500

    @pytest.mark.unit
    def test_messages_name_the_resource(self):
        """Messages identify the missing resource."""
        assert "shop" in str(SiteNotFound("shop"))
        assert "shop/login" in str(ScreenNotFound("shop", "login"))

    @pytest.mark.unit
    def test_layout_reason_is_appended(self):
        """A layout failure reason is included in the message."""
        error = LayoutNotFound("shop", "login", reason="malformed YAML")
        assert error.reason == "malformed YAML"
        assert "(malformed YAML)" in str(error)
