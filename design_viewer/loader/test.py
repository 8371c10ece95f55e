"""Tests for the design document loader."""

import logging

import pytest

from design_viewer.core.errors import LayoutNotFound, ScreenNotFound, SiteNotFound
from design_viewer.loader import DesignRepository, DocumentStatus


class TestSites:
    """Tests for site discovery."""

    @pytest.mark.unit
    def test_lists_sites_sorted(self, repository):
        """Underscore directories are skipped and ids are sorted."""
        assert repository.list_site_ids() == ["blog", "shop"]

    @pytest.mark.unit
    def test_missing_root(self, tmp_path):
        """A root without sites/ has no sites."""
        assert DesignRepository(tmp_path / "nowhere").list_site_ids() == []

    @pytest.mark.unit
    @pytest.mark.parametrize("site_id", ["missing", "_templates", "..", "shop/screens"])
    def test_unknown_site(self, repository, site_id):
        """Unknown, reserved and path-like ids are not sites."""
        with pytest.raises(SiteNotFound):
            repository.site_path(site_id)

    @pytest.mark.unit
    def test_manifest_present(self, repository):
        """site.yaml is parsed into a manifest."""
        document = repository.read_manifest("shop")
        assert document.status == DocumentStatus.PRESENT
        assert document.value.display_name == "Shop"
        assert [v.id for v in document.value.viewports] == ["mobile", "desktop", "tablet"]

    @pytest.mark.unit
    def test_manifest_absent(self, repository):
        """A site without site.yaml yields an absent document."""
        document = repository.read_manifest("blog")
        assert document.status == DocumentStatus.ABSENT
        assert document.value is None

    @pytest.mark.unit
    def test_manifest_malformed(self, repository, write_design, caplog):
        """Broken YAML is logged and reported, never raised."""
        write_design("sites/blog/site.yaml", "name: [unclosed\n")
        with caplog.at_level(logging.WARNING):
            document = repository.read_manifest("blog")
        assert document.status == DocumentStatus.MALFORMED
        assert "invalid YAML" in document.error
        assert "Failed to parse" in caplog.text

    @pytest.mark.unit
    def test_empty_manifest(self, repository, write_design):
        """An empty file is a present, empty manifest."""
        write_design("sites/blog/site.yaml", "")
        document = repository.read_manifest("blog")
        assert document.present
        assert document.value.display_name is None


class TestScreens:
    """Tests for screen discovery and layouts."""

    @pytest.mark.unit
    def test_lists_screens_sorted(self, repository):
        """Every screen directory counts, with or without a layout."""
        assert repository.list_screen_ids("shop") == ["cart", "drafts", "home", "login"]

    @pytest.mark.unit
    def test_site_without_screens(self, repository, design_root):
        """A site without screens/ lists nothing."""
        (design_root / "sites" / "empty").mkdir()
        assert repository.list_screen_ids("empty") == []

    @pytest.mark.unit
    def test_unknown_screen(self, repository):
        """Missing screen directories raise ScreenNotFound."""
        with pytest.raises(ScreenNotFound):
            repository.screen_path("shop", "checkout")

    @pytest.mark.unit
    def test_unknown_site_wins(self, repository):
        """The site is checked before the screen."""
        with pytest.raises(SiteNotFound):
            repository.screen_path("nowhere", "home")

    @pytest.mark.unit
    def test_read_layout(self, repository):
        """layout.yaml is parsed into a LayoutDocument."""
        layout = repository.read_layout("shop", "login")
        assert layout.title == "Sign in"
        assert [a.area_id for a in layout.areas] == ["login-form", "login-actions"]

    @pytest.mark.unit
    def test_missing_layout(self, repository):
        """A screen without layout.yaml raises LayoutNotFound."""
        with pytest.raises(LayoutNotFound):
            repository.read_layout("shop", "drafts")

    @pytest.mark.unit
    def test_malformed_layout(self, repository, write_design):
        """Unparseable layouts surface as LayoutNotFound with a reason."""
        write_design("sites/shop/screens/login/layout.yaml", "areas: [\n")
        with pytest.raises(LayoutNotFound) as exc_info:
            repository.read_layout("shop", "login")
        assert exc_info.value.reason is not None

    @pytest.mark.unit
    def test_unknown_override_key_is_malformed(self, repository, write_design):
        """Override records with unknown keys fail layout validation."""
        write_design(
            "sites/shop/screens/login/layout.yaml",
            {
                "areas": [
                    {
                        "areaId": "login-form",
                        "responsiveBehavior": {"mobile": {"hiddn": True}},
                    }
                ]
            },
        )
        with pytest.raises(LayoutNotFound):
            repository.read_layout("shop", "login")

    @pytest.mark.unit
    def test_optional_screen_documents(self, repository):
        """fields.yaml and events.yaml are optional."""
        assert repository.read_screen_fields("shop", "home").status == DocumentStatus.ABSENT
        fields = repository.read_screen_fields("shop", "login").value
        assert [f.field_id for f in fields] == ["email", "password"]
        events = repository.read_screen_events("shop", "login").value
        assert events.events[0].event_id == "submit-login"

    @pytest.mark.unit
    def test_fields_wrong_shape(self, repository, write_design):
        """A mapping where a list is expected is malformed."""
        write_design("sites/shop/screens/login/fields.yaml", {"email": {}})
        document = repository.read_screen_fields("shop", "login")
        assert document.status == DocumentStatus.MALFORMED
        assert document.value_or(()) == ()

    @pytest.mark.unit
    def test_empty_layout_keys(self, repository, write_design):
        """Keys with nothing under them read as empty collections."""
        write_design(
            "sites/shop/screens/login/layout.yaml",
            "title: Sign in\nareas:\n  - areaId: login-form\nelements:\n",
        )
        layout = repository.read_layout("shop", "login")
        assert [a.area_id for a in layout.areas] == ["login-form"]
        assert layout.elements == ()

    @pytest.mark.unit
    def test_empty_event_keys(self, repository, write_design):
        """Empty ``actions:`` and ``onSuccess:`` keep the events document present."""
        write_design(
            "sites/shop/screens/login/events.yaml",
            "events:\n"
            "  - eventId: submit-login\n"
            "    actions:\n"
            "      - type: navigate\n"
            "        target: home\n"
            "        onSuccess:\n"
            "        onError:\n"
            "  - eventId: noop\n"
            "    actions:\n",
        )
        document = repository.read_screen_events("shop", "login")
        assert document.status == DocumentStatus.PRESENT
        submit, noop = document.value.events
        assert submit.actions[0].on_success == ()
        assert submit.actions[0].on_error == ()
        assert noop.actions == ()

    @pytest.mark.unit
    def test_empty_events_key(self, repository, write_design):
        write_design("sites/shop/screens/login/events.yaml", "events:\n")
        document = repository.read_screen_events("shop", "login")
        assert document.status == DocumentStatus.PRESENT
        assert document.value.events == ()


class TestSharedDocuments:
    """Tests for _shared documents."""

    @pytest.mark.unit
    def test_shared_layout(self, repository):
        """The shared layout is read from _shared/app-layout.yaml."""
        document = repository.read_shared_layout("shop")
        assert document.present
        assert document.value.areas[0].area_id == "root"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "extends", ["_shared/app-layout", "app-layout", "_shared/app-layout.yaml"]
    )
    def test_resolve_extends(self, repository, extends):
        """extends values name files in _shared/."""
        assert repository.resolve_extends("shop", extends).present

    @pytest.mark.unit
    def test_resolve_extends_rejects_paths(self, repository):
        """extends cannot escape the _shared directory."""
        document = repository.resolve_extends("shop", "_shared/../screens/home/layout")
        assert document.status == DocumentStatus.ABSENT

    @pytest.mark.unit
    def test_shared_events_and_fields(self, repository):
        """Shared events and fields are read from their fixed files."""
        events = repository.read_shared_events("shop").value
        assert [e.event_id for e in events.events] == ["go-cart", "go-home", "orphan"]
        fields = repository.read_shared_fields("shop").value
        assert [f.field_id for f in fields] == ["email", "search"]

    @pytest.mark.unit
    def test_shared_documents_absent(self, repository):
        """Sites without _shared/ have absent shared documents."""
        assert not repository.read_shared_layout("blog").present
        assert not repository.read_shared_events("blog").present
        assert not repository.read_shared_fields("blog").present
