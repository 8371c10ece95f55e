"""Preview transitions tool for MCP server.

Renders a site's transition graph to an image via the Kroki service.

Supported formats vary by provider:
- plantuml: png, svg, pdf, jpeg
- d2: svg only (Kroki limitation)
"""

import base64
import logging
from functools import lru_cache
from typing import Any

from design_viewer.config import EnvVar, get_environment
from design_viewer.providers import get_provider_formats
from design_viewer.render import OutputFormat, RenderClient, RenderConfig, RenderError
from design_viewer.service import DesignService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_render_client() -> RenderClient:
    """Get cached RenderClient instance."""
    return RenderClient()


def _validate_format_for_provider(output_format: str, provider: str) -> None:
    """Validate output format against provider's supported formats.

    Raises:
        ValueError: If format not supported by the provider.
    """
    supported = get_provider_formats(provider)
    if output_format.lower() not in supported:
        raise ValueError(
            f"Format '{output_format}' not supported by provider '{provider}'. "
            f"Supported: {sorted(supported)}"
        )


def preview_transitions(
    site_id: str,
    viewport_id: str | None = None,
    provider: str | None = None,
    output_format: str = "svg",
    service: DesignService | None = None,
    client: RenderClient | None = None,
) -> dict[str, Any]:
    """Render a site's transition graph to an image.

    Args:
        site_id: Site to render.
        viewport_id: Optional viewport filter for shared components.
        provider: "d2" or "plantuml". Defaults to MCP_PREVIEW_PROVIDER.
        output_format: Output format. Default: "svg" (universal support)

    Returns:
        Dictionary containing:
        - image_data: Base64-encoded image data
        - format: Image format used
        - provider: Rendering provider used
        - size_bytes: Image size in bytes
        - dsl_code: Diagram source that was rendered

    Raises:
        SiteNotFound: If the site does not exist.
        ValueError: If the provider or format is unsupported.
        RuntimeError: If Kroki service is unavailable or rendering fails.
    """
    provider = get_environment(EnvVar.MCP_PREVIEW_PROVIDER, override=provider)
    try:
        _validate_format_for_provider(output_format, provider)
    except KeyError as e:
        raise ValueError(str(e.args[0])) from e
    fmt = OutputFormat(output_format.lower())

    graph = (service or DesignService()).get_transitions(site_id, viewport_id)

    client = client or _get_render_client()
    if not client.is_available():
        raise RuntimeError(f"Kroki service is not available at {client.base_url}")

    try:
        logger.info(f"Rendering {site_id}: provider={provider}, format={fmt.value}")
        result = client.render_transitions(graph, provider, RenderConfig(output_format=fmt))
    except RenderError as e:
        logger.error(f"Rendering failed: {e}")
        raise RuntimeError(f"Rendering failed: {e}") from e

    return {
        "image_data": base64.b64encode(result.image_bytes).decode("ascii"),
        "format": fmt.value,
        "provider": provider,
        "size_bytes": result.size_bytes,
        "dsl_code": result.dsl_code,
    }


__all__ = ["preview_transitions"]
