"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Kroki availability detection for ``@pytest.mark.kroki`` tests
- A complete sample design tree written to ``tmp_path``
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import httpx
import pytest
import yaml
from dotenv import load_dotenv

from design_viewer.config import get_kroki_url

if TYPE_CHECKING:
    from design_viewer.loader import DesignRepository
    from design_viewer.render import RenderClient
    from design_viewer.service import DesignService

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Configuration Constants
# =============================================================================

KROKI_URL = get_kroki_url()


def _is_kroki_healthy(url: str = KROKI_URL, timeout: float = 2.0) -> bool:
    """Check if Kroki service is responding."""
    try:
        response = httpx.get(f"{url}/health", timeout=timeout)
        return response.status_code == 200
    except httpx.HTTPError:
        return False


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Auto-skip tests marked with kroki when the service is unavailable."""
    if not any("kroki" in item.keywords for item in items):
        return

    kroki_available = _is_kroki_healthy()
    skip_kroki = pytest.mark.skip(reason="Kroki service not available")

    for item in items:
        if "kroki" in item.keywords and not kroki_available:
            item.add_marker(skip_kroki)


# =============================================================================
# Sample Design Tree
# =============================================================================

# Site "shop":
#   - three viewports, desktop (minWidth 1024) is the default
#   - shared grid layout root/header/sidebar/main-content, sidebar hidden on mobile
#   - shared events: cart button (header), home link (sidebar), one orphan
#   - screens: cart, drafts (no layout), home, login (no extends), _archive (ignored)
# Site "blog": no manifest, no screens.
# "_templates" is never listed as a site.
SAMPLE_DESIGN: dict[str, Any] = {
    "sites/shop/site.yaml": {
        "site": {"name": "Shop"},
        "viewports": [
            {"id": "mobile", "name": "Mobile", "maxWidth": 767},
            {"id": "desktop", "name": "Desktop", "minWidth": 1024},
            {"id": "tablet", "name": "Tablet", "minWidth": 768, "maxWidth": 1023},
        ],
    },
    "sites/shop/_shared/app-layout.yaml": {
        "areas": [
            {
                "areaId": "root",
                "name": "App Root",
                "layout": "grid",
                "gridAreas": [
                    ["header", "header"],
                    ["sidebar", "main-content"],
                ],
                "responsiveBehavior": {
                    "mobile": {"gridAreas": [["header"], ["main-content"]]},
                },
            },
            {
                "areaId": "header",
                "name": "Header",
                "role": "banner",
                "layout": "horizontal",
                "children": ["$logo", "$cart-button"],
            },
            {
                "areaId": "sidebar",
                "name": "Sidebar",
                "layout": "vertical",
                "children": ["$nav-home"],
                "responsiveBehavior": {"mobile": {"hidden": True}},
            },
            {
                "areaId": "main-content",
                "name": "Main Content",
                "layout": "vertical",
            },
        ],
        "elements": [
            {"elementId": "logo", "label": "Logo", "layoutHint": "leftAligned"},
            {"elementId": "cart-button", "label": "Cart", "layoutHint": "rightAligned"},
            {"elementId": "nav-home", "label": "Home"},
        ],
    },
    "sites/shop/_shared/app-events.yaml": {
        "events": [
            {
                "eventId": "go-cart",
                "name": "Open cart",
                "trigger": {"element": "cart-button", "event": "click"},
                "actions": [{"type": "navigate", "target": "cart"}],
            },
            {
                "eventId": "go-home",
                "name": "Go home",
                "trigger": {"element": "nav-home", "event": "click"},
                "actions": [{"type": "navigate", "target": "home"}],
            },
            {
                "eventId": "orphan",
                "trigger": {"element": "nowhere", "event": "click"},
                "actions": [{"type": "navigate", "target": "home"}],
            },
        ]
    },
    "sites/shop/_shared/app-fields.yaml": [
        {"fieldId": "email", "name": "email", "type": "email", "label": "Email"},
        {"fieldId": "search", "name": "search", "type": "text", "label": "Search"},
    ],
    "sites/shop/screens/home/layout.yaml": {
        "screenId": "home",
        "title": "Home",
        "description": "Landing page",
        "extends": "_shared/app-layout",
        "mainContent": {"children": ["$search-box", "$promo"]},
        "elements": [
            {"elementId": "search-box", "fieldRef": "search"},
            {"elementId": "promo", "label": "Promo banner"},
        ],
    },
    "sites/shop/screens/home/events.yaml": {
        "events": [
            {
                "eventId": "open-cart",
                "name": "Promo to cart",
                "trigger": {"element": "promo", "event": "click"},
                "actions": [{"type": "navigate", "target": "cart"}],
            },
            {
                "eventId": "open-help",
                "trigger": {"element": "search", "event": "submit"},
                "actions": [{"type": "navigate", "target": "help-center"}],
            },
        ]
    },
    "sites/shop/screens/login/layout.yaml": {
        "screenId": "login",
        "title": "Sign in",
        "description": "User sign-in",
        "areas": [
            {
                "areaId": "login-form",
                "name": "Login Form",
                "layout": "vertical",
                "children": ["$email", "$password", "@login-actions"],
            },
            {
                "areaId": "login-actions",
                "layout": "horizontal",
                "children": ["$cancel", "$submit"],
            },
        ],
        "elements": [
            {"elementId": "email", "fieldRef": "email"},
            {"elementId": "password", "fieldRef": "password"},
            {"elementId": "submit", "label": "Sign in", "layoutHint": "rightAligned"},
            {"elementId": "cancel", "label": "Cancel"},
        ],
    },
    "sites/shop/screens/login/fields.yaml": [
        {"fieldId": "email", "name": "email", "type": "email", "label": "Work email"},
        {
            "fieldId": "password",
            "name": "password",
            "type": "password",
            "label": "Password",
        },
    ],
    "sites/shop/screens/login/events.yaml": {
        "events": [
            {
                "eventId": "submit-login",
                "name": "Sign in",
                "trigger": {"element": "submit", "event": "click"},
                "actions": [
                    {
                        "type": "apiCall",
                        "interfaceRef": "auth.login",
                        "onSuccess": [{"type": "navigate", "target": "home"}],
                        "onError": [{"type": "showError"}],
                    }
                ],
            }
        ]
    },
    "sites/shop/screens/cart/layout.yaml": {
        "screenId": "cart",
        "title": "Cart",
        "extends": "_shared/app-layout",
        "areas": [
            {
                "areaId": "header",
                "name": "Checkout Header",
                "layout": "horizontal",
                "children": ["$logo"],
            },
            {
                "areaId": "summary",
                "name": "Summary",
                "sizeHint": "narrow",
                "children": ["$total"],
            },
            {"areaId": "items", "name": "Items", "sizeHint": "fill"},
        ],
        "mainContent": {"layout": "horizontal", "children": ["@summary", "@items"]},
        "elements": [{"elementId": "total", "label": "Total"}],
    },
    "sites/shop/screens/drafts/notes.txt": "work in progress\n",
    "sites/shop/screens/_archive/layout.yaml": {"title": "Archived"},
    "sites/blog/screens/.keep": "",
    "sites/_templates/site.yaml": {"name": "Templates"},
}


def write_document(root: Path, relative: str, content: Any) -> Path:
    """Write one document below ``root``.

    Strings are written verbatim; anything else is dumped as YAML.
    """
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        path.write_text(content, encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def design_root(tmp_path: Path) -> Path:
    """Write the sample design tree and return its root.

    Returns:
        Root directory containing ``sites/``.
    """
    root = tmp_path / "design"
    for relative, content in SAMPLE_DESIGN.items():
        write_document(root, relative, content)
    return root


@pytest.fixture
def write_design(design_root: Path) -> Callable[[str, Any], Path]:
    """Return a writer that adds or replaces documents in the sample tree."""

    def _write(relative: str, content: Any) -> Path:
        return write_document(design_root, relative, content)

    return _write


@pytest.fixture
def repository(design_root: Path) -> DesignRepository:
    """DesignRepository over the sample tree."""
    from design_viewer.loader import DesignRepository

    return DesignRepository(design_root)


@pytest.fixture
def service(design_root: Path) -> DesignService:
    """DesignService over the sample tree."""
    from design_viewer.service import DesignService

    return DesignService(design_root)


@pytest.fixture(scope="function")
def kroki_client() -> RenderClient:
    """Create a RenderClient connected to Kroki.

    Returns:
        Configured RenderClient instance.
    """
    from design_viewer.render import RenderClient

    client = RenderClient(base_url=KROKI_URL)
    if not client.is_available():
        pytest.skip("Kroki service not responding")
    return client


@pytest.fixture
def transition_graph():
    """A small hand-built transition graph.

    home -> cart, a shared header -> cart, and an external help link.
    """
    from design_viewer.schema import TransitionEdge, TransitionGraph, TransitionNode

    return TransitionGraph(
        nodes=(
            TransitionNode(id="node-home", screen_id="home", label="Home", description="Landing"),
            TransitionNode(id="node-cart", screen_id="cart", label="Cart"),
            TransitionNode(
                id="node-_shared-header",
                screen_id="_shared/header",
                label="Header",
                description="Shared component: Header",
            ),
        ),
        edges=(
            TransitionEdge(
                id="edge-go-cart-cart",
                source="node-_shared-header",
                target="node-cart",
                label="Open cart",
                event_id="go-cart",
                is_shared=True,
            ),
            TransitionEdge(
                id="edge-promo-cart",
                source="node-home",
                target="node-cart",
                label="Promo",
                event_id="promo",
            ),
            TransitionEdge(
                id="edge-help-help-center",
                source="node-home",
                target="node-help-center",
                label="help",
                event_id="help",
                is_external=True,
            ),
        ),
    )
