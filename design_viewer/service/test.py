"""Tests for DesignService against the sample design tree."""

import logging

import pytest

from design_viewer.core.errors import LayoutNotFound, ScreenNotFound, SiteNotFound
from design_viewer.service import DesignService


class TestSites:
    """Tests for site listing and detail."""

    @pytest.mark.unit
    def test_list_sites(self, service):
        """Sites are sorted and named from their manifest."""
        sites = service.list_sites()
        assert [(s.id, s.name) for s in sites] == [("blog", "blog"), ("shop", "Shop")]

    @pytest.mark.unit
    def test_site_detail(self, service):
        """Viewports come from the manifest; the widest is the default."""
        detail = service.get_site_detail("shop")
        assert detail.name == "Shop"
        assert [v.id for v in detail.viewports] == ["mobile", "desktop", "tablet"]
        assert detail.default_viewport == "desktop"

    @pytest.mark.unit
    def test_site_without_manifest(self, service):
        """Sites without site.yaml are named by id and use the sentinel viewport."""
        detail = service.get_site_detail("blog")
        assert detail.name == "blog"
        assert detail.viewports == ()
        assert detail.default_viewport == "desktop"

    @pytest.mark.unit
    def test_configured_default_viewport(self, design_root):
        """The sentinel viewport is configurable."""
        service = DesignService(design_root, default_viewport="wide")
        assert service.get_site_detail("blog").default_viewport == "wide"

    @pytest.mark.unit
    def test_unknown_site(self, service):
        with pytest.raises(SiteNotFound):
            service.get_site_detail("nope")

    @pytest.mark.unit
    def test_root_from_environment(self, design_root, monkeypatch):
        """The design root defaults to DESIGN_PATH."""
        monkeypatch.setenv("DESIGN_PATH", str(design_root))
        assert DesignService().root == design_root


class TestTransitions:
    """Tests for get_transitions."""

    @pytest.mark.unit
    def test_nodes(self, service):
        """Screen nodes come first, then one node per shared area."""
        graph = service.get_transitions("shop")
        assert [(n.id, n.label) for n in graph.nodes] == [
            ("node-cart", "Cart"),
            ("node-home", "Home"),
            ("node-login", "Sign in"),
            ("node-_shared-header", "Header"),
            ("node-_shared-sidebar", "Sidebar"),
        ]

    @pytest.mark.unit
    def test_edges(self, service):
        """Shared edges come first, then screen edges in screen order."""
        graph = service.get_transitions("shop")
        assert [(e.id, e.source, e.is_shared, e.is_external) for e in graph.edges] == [
            ("edge-go-cart-cart", "node-_shared-header", True, False),
            ("edge-go-home-home", "node-_shared-sidebar", True, False),
            ("edge-open-cart-cart", "node-home", False, False),
            ("edge-open-help-help-center", "node-home", False, True),
            ("edge-submit-login-home", "node-login", False, False),
        ]

    @pytest.mark.unit
    def test_viewport_filter(self, service):
        """The sidebar is hidden on mobile, so its node and edge disappear."""
        graph = service.get_transitions("shop", "mobile")
        assert "node-_shared-sidebar" not in [n.id for n in graph.nodes]
        assert "edge-go-home-home" not in [e.id for e in graph.edges]

    @pytest.mark.unit
    def test_empty_site(self, service):
        """Sites without screens have an empty graph."""
        graph = service.get_transitions("blog")
        assert graph.nodes == ()
        assert graph.edges == ()

    @pytest.mark.unit
    def test_unreadable_layout_skipped(self, service, write_design):
        """A broken layout drops the node but keeps the screen id known."""
        write_design("sites/shop/screens/cart/layout.yaml", "title: [\n")
        graph = service.get_transitions("shop")
        assert "node-cart" not in [n.id for n in graph.nodes]
        edge = next(e for e in graph.edges if e.id == "edge-go-cart-cart")
        assert edge.is_external is False

    @pytest.mark.unit
    def test_empty_branches_keep_edges(self, service, write_design):
        """Empty ``onSuccess:``/``onError:`` keys do not drop the events file."""
        write_design(
            "sites/shop/screens/login/events.yaml",
            "events:\n"
            "  - eventId: back-home\n"
            "    trigger:\n"
            "      element: submit\n"
            "      event: click\n"
            "    actions:\n"
            "      - type: navigate\n"
            "        target: home\n"
            "        onSuccess:\n"
            "        onError:\n",
        )
        graph = service.get_transitions("shop")
        login_edges = [e.id for e in graph.edges if e.source == "node-login"]
        assert login_edges == ["edge-back-home-home"]

    @pytest.mark.unit
    def test_empty_events_key(self, service, write_design):
        write_design("sites/shop/screens/login/events.yaml", "events:\n")
        graph = service.get_transitions("shop")
        assert "node-login" in [n.id for n in graph.nodes]
        assert [e.id for e in graph.edges if e.source == "node-login"] == []

    @pytest.mark.unit
    def test_unknown_site(self, service):
        with pytest.raises(SiteNotFound):
            service.get_transitions("nope")


class TestScreenDetail:
    """Tests for get_screen_detail."""

    @pytest.mark.unit
    def test_inherited_areas(self, service):
        """Shared areas are inherited; the filled slot is not."""
        detail = service.get_screen_detail("shop", "home")
        assert [(a.area_id, a.inherited) for a in detail.areas] == [
            ("root", True),
            ("header", True),
            ("sidebar", True),
            ("main-content", False),
        ]
        slot = detail.areas[3]
        assert slot.children == ("$search-box", "$promo")
        assert slot.layout == "vertical"

    @pytest.mark.unit
    def test_descriptive_attributes_preserved(self, service):
        """Extra attributes survive resolution."""
        detail = service.get_screen_detail("shop", "home")
        header = next(a for a in detail.areas if a.area_id == "header")
        assert header.model_extra["role"] == "banner"

    @pytest.mark.unit
    def test_elements_resolved(self, service):
        """Elements carry their field and triggering events."""
        detail = service.get_screen_detail("shop", "home")
        elements = {e.element_id: e for e in detail.elements}
        assert list(elements) == ["logo", "cart-button", "nav-home", "search-box", "promo"]
        assert elements["search-box"].field.type == "text"
        assert [e.event_id for e in elements["search-box"].events] == ["open-help"]
        assert [e.event_id for e in elements["cart-button"].events] == ["go-cart"]
        assert elements["logo"].events == ()

    @pytest.mark.unit
    def test_events_merged(self, service):
        """Shared events come first, then screen events."""
        detail = service.get_screen_detail("shop", "home")
        assert [e.event_id for e in detail.events] == [
            "go-cart",
            "go-home",
            "orphan",
            "open-cart",
            "open-help",
        ]

    @pytest.mark.unit
    def test_screen_fields_win(self, service):
        """Screen fields replace shared fields with the same id."""
        detail = service.get_screen_detail("shop", "login")
        assert [(f.field_id, f.label) for f in detail.fields] == [
            ("email", "Work email"),
            ("search", "Search"),
            ("password", "Password"),
        ]
        email = next(e for e in detail.elements if e.element_id == "email")
        assert email.field.label == "Work email"

    @pytest.mark.unit
    def test_without_extends(self, service):
        """Screens without extends only have their own areas."""
        detail = service.get_screen_detail("shop", "login")
        assert [a.area_id for a in detail.areas] == ["login-form", "login-actions"]
        assert detail.extends is None
        assert [v.id for v in detail.viewports] == ["mobile", "desktop", "tablet"]

    @pytest.mark.unit
    def test_empty_layout_keys(self, service, write_design):
        """A layout with bare ``areas:`` and ``elements:`` still resolves."""
        write_design("sites/shop/screens/plain/layout.yaml", "title: Plain\nareas:\nelements:\n")
        detail = service.get_screen_detail("shop", "plain")
        assert detail.title == "Plain"
        assert detail.areas == ()
        assert detail.elements == ()

    @pytest.mark.unit
    def test_screen_area_overrides_shared(self, service):
        """The cart header shadows the shared header."""
        detail = service.get_screen_detail("shop", "cart")
        header = next(a for a in detail.areas if a.area_id == "header")
        assert header.name == "Checkout Header"
        assert header.inherited is False

    @pytest.mark.unit
    def test_missing_extends_target(self, service, write_design, caplog):
        """A missing shared layout is logged and ignored."""
        write_design(
            "sites/shop/screens/orphan/layout.yaml",
            {"title": "Orphan", "extends": "_shared/missing", "areas": [{"areaId": "a"}]},
        )
        with caplog.at_level(logging.WARNING):
            detail = service.get_screen_detail("shop", "orphan")
        assert [a.area_id for a in detail.areas] == ["a"]
        assert "_shared/missing" in caplog.text

    @pytest.mark.unit
    def test_malformed_optional_document(self, service, write_design):
        """A broken events.yaml is treated as absent."""
        write_design("sites/shop/screens/home/events.yaml", "events: [\n")
        detail = service.get_screen_detail("shop", "home")
        assert "open-cart" not in [e.event_id for e in detail.events]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "site_id,screen_id,error",
        [
            ("nope", "home", SiteNotFound),
            ("shop", "checkout", ScreenNotFound),
            ("shop", "drafts", LayoutNotFound),
            ("shop", "_archive", ScreenNotFound),
        ],
    )
    def test_not_found(self, service, site_id, screen_id, error):
        """Each missing level raises its own not-found error."""
        with pytest.raises(error):
            service.get_screen_detail(site_id, screen_id)


class TestScreenLayout:
    """Tests for get_screen_layout."""

    @pytest.mark.unit
    def test_default_viewport_grid(self, service):
        """Without a viewport the site default is used."""
        scene = service.get_screen_layout("shop", "home")
        assert scene.viewport_id == "desktop"
        assert scene.mode == "grid"
        assert scene.grid.row_heights == (64, 96)
        assert (scene.width, scene.height) == (410, 260)

    @pytest.mark.unit
    def test_mobile(self, service):
        """Mobile drops the sidebar and switches to a single column."""
        scene = service.get_screen_layout("shop", "home", "mobile")
        assert scene.grid.cols == 1
        assert "sidebar" not in [box.area_id for box in scene.iter_areas()]

    @pytest.mark.unit
    def test_fallback(self, service):
        """Screens without a root are stacked."""
        scene = service.get_screen_layout("shop", "login")
        assert scene.mode == "fallback"
        assert (scene.width, scene.height) == (800, 264)

    @pytest.mark.unit
    def test_slot_children_laid_out(self, service):
        """Injected children appear inside the slot."""
        scene = service.get_screen_layout("shop", "cart")
        boxes = {box.area_id: box for box in scene.iter_areas()}
        slot = boxes["main-content"]
        assert [child.area_id for child in slot.children] == ["summary", "items"]
        assert slot.height == 100
        assert boxes["summary"].width == 120

    @pytest.mark.unit
    def test_idempotent(self, service):
        """Laying out the same screen twice gives equal results."""
        first = service.get_screen_layout("shop", "home", "tablet")
        assert service.get_screen_layout("shop", "home", "tablet") == first


class TestValidateScreen:
    """Tests for validate_screen."""

    @pytest.mark.unit
    def test_sample_screens_valid(self, service):
        for screen_id in ("cart", "home", "login"):
            assert service.validate_screen("shop", screen_id) == []

    @pytest.mark.unit
    def test_reports_issues(self, service, write_design):
        """Dangling refs are reported instead of raised."""
        write_design(
            "sites/shop/screens/login/layout.yaml",
            {"areas": [{"areaId": "form", "children": ["@ghost"]}]},
        )
        [issue] = service.validate_screen("shop", "login")
        assert issue.issue_type == "unresolved_child"
