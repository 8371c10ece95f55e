"""Design service: the logical request surface.

Every call re-reads the design documents; nothing is cached between requests.

Example:
    >>> service = DesignService("./design")
    >>> [site.id for site in service.list_sites()]
    ['shop']
    >>> graph = service.get_transitions("shop")
    >>> scene = service.get_screen_layout("shop", "home", "mobile")
"""

import logging
from pathlib import Path

from design_viewer.config import EnvVar, get_design_path, get_environment
from design_viewer.geometry import build_scene
from design_viewer.inherit import ScreenSources, resolve_screen
from design_viewer.loader import DesignRepository
from design_viewer.schema import (
    Scene,
    ScreenDetail,
    Site,
    SiteDetail,
    TransitionGraph,
    Viewport,
)
from design_viewer.transitions import ScreenEntry, build_transition_graph
from design_viewer.validation import ValidationIssue, validate_screen_detail
from design_viewer.viewport import default_viewport_id

logger = logging.getLogger(__name__)


class DesignService:
    """Read-only access to resolved designs.

    Args:
        root: Design root holding ``sites/``. Defaults to DESIGN_PATH.
        default_viewport: Viewport used when a site declares none.
            Defaults to DEFAULT_VIEWPORT.
    """

    def __init__(
        self,
        root: Path | str | None = None,
        default_viewport: str | None = None,
    ):
        self.repository = DesignRepository(get_design_path(root))
        self.default_viewport = get_environment(
            EnvVar.DEFAULT_VIEWPORT, override=default_viewport
        )

    @property
    def root(self) -> Path:
        return self.repository.root

    # -------------------------------------------------------------------------
    # Sites
    # -------------------------------------------------------------------------

    def list_sites(self) -> list[Site]:
        """All sites, sorted by id, named from their manifest when present."""
        sites = []
        for site_id in self.repository.list_site_ids():
            manifest = self.repository.read_manifest(site_id)
            name = manifest.value.display_name if manifest.present else None
            sites.append(Site(id=site_id, name=name or site_id))
        return sites

    def _viewports(self, site_id: str) -> tuple[Viewport, ...]:
        manifest = self.repository.read_manifest(site_id)
        return manifest.value.viewports if manifest.present else ()

    def get_site_detail(self, site_id: str) -> SiteDetail:
        """A site with its viewports.

        Raises:
            SiteNotFound: If the site does not exist.
        """
        manifest = self.repository.read_manifest(site_id)
        name = manifest.value.display_name if manifest.present else None
        viewports = manifest.value.viewports if manifest.present else ()
        return SiteDetail(
            id=site_id,
            name=name or site_id,
            viewports=viewports,
            default_viewport=default_viewport_id(viewports, self.default_viewport),
        )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def get_transitions(self, site_id: str, viewport_id: str | None = None) -> TransitionGraph:
        """Navigation graph of a site.

        Args:
            site_id: Site to inspect.
            viewport_id: Optional viewport; shared areas hidden there are
                left out.

        Raises:
            SiteNotFound: If the site does not exist.
        """
        repo = self.repository
        repo.site_path(site_id)

        screens = []
        for screen_id in repo.list_screen_ids(site_id):
            layout = repo.load_layout(site_id, screen_id)
            events = repo.read_screen_events(site_id, screen_id)
            screens.append(
                ScreenEntry(
                    screen_id=screen_id,
                    layout=layout.value if layout.present else None,
                    events=events.value.events if events.present else (),
                )
            )

        shared_layout = repo.read_shared_layout(site_id)
        shared_events = repo.read_shared_events(site_id)

        graph = build_transition_graph(
            screens,
            shared_layout=shared_layout.value if shared_layout.present else None,
            shared_events=shared_events.value.events if shared_events.present else (),
            viewport_id=viewport_id,
        )
        logger.debug(
            f"Built transitions for {site_id}: "
            f"{len(graph.nodes)} nodes, {len(graph.edges)} edges"
        )
        return graph

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def get_screen_detail(self, site_id: str, screen_id: str) -> ScreenDetail:
        """Fully resolved screen.

        Raises:
            SiteNotFound: If the site does not exist.
            ScreenNotFound: If the screen does not exist.
            LayoutNotFound: If layout.yaml is missing or invalid.
        """
        repo = self.repository
        repo.screen_path(site_id, screen_id)

        viewports = self._viewports(site_id)
        layout = repo.read_layout(site_id, screen_id)

        shared_layout = None
        if layout.extends:
            document = repo.resolve_extends(site_id, layout.extends)
            if document.present:
                shared_layout = document.value
            else:
                logger.warning(
                    f"{site_id}/{screen_id} extends {layout.extends!r}, "
                    f"which is {document.status.value}"
                )

        fields = repo.read_screen_fields(site_id, screen_id)
        events = repo.read_screen_events(site_id, screen_id)
        shared_fields = repo.read_shared_fields(site_id)
        shared_events = repo.read_shared_events(site_id)

        return resolve_screen(
            ScreenSources(
                screen_id=screen_id,
                layout=layout,
                shared_layout=shared_layout,
                fields=fields.value_or(()),
                shared_fields=shared_fields.value_or(()),
                events=events.value.events if events.present else (),
                shared_events=shared_events.value.events if shared_events.present else (),
                viewports=viewports,
            )
        )

    def get_screen_layout(
        self, site_id: str, screen_id: str, viewport_id: str | None = None
    ) -> Scene:
        """Geometry of a screen at a viewport.

        Args:
            site_id: Site of the screen.
            screen_id: Screen to lay out.
            viewport_id: Viewport to apply; defaults to the site default.

        Raises:
            SiteNotFound, ScreenNotFound, LayoutNotFound: As get_screen_detail.
        """
        detail = self.get_screen_detail(site_id, screen_id)
        if viewport_id is None:
            viewport_id = default_viewport_id(detail.viewports, self.default_viewport)
        return build_scene(detail, viewport_id)

    def validate_screen(self, site_id: str, screen_id: str) -> list[ValidationIssue]:
        """Structural issues of a resolved screen.

        Raises:
            SiteNotFound, ScreenNotFound, LayoutNotFound: As get_screen_detail.
        """
        return validate_screen_detail(self.get_screen_detail(site_id, screen_id))


__all__ = ["DesignService"]
