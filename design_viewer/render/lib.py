"""Kroki rendering client.

Renders transition diagrams (D2 or PlantUML source produced by the
providers) to images through a Kroki HTTP service.
"""

import base64
import logging
import zlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import httpx

from design_viewer.config import get_kroki_url
from design_viewer.providers import get_provider
from design_viewer.schema import TransitionGraph

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Supported output formats for rendering."""

    PNG = "png"
    SVG = "svg"
    PDF = "pdf"
    JPEG = "jpeg"


class D2Theme(Enum):
    """D2 diagram themes.

    See: https://d2lang.com/tour/themes/
    """

    DEFAULT = 0
    NEUTRAL_GRAY = 1
    COOL_CLASSICS = 4
    COLORBLIND_CLEAR = 8
    TERMINAL = 300
    TERMINAL_GRAYSCALE = 301
    ORIGAMI = 302


class PlantUMLTheme(Enum):
    """PlantUML themes.

    See: https://plantuml.com/theme
    """

    DEFAULT = ""
    BLUEGRAY = "bluegray"
    CERULEAN = "cerulean"
    MATERIA = "materia"
    PLAIN = "plain"
    SKETCHY = "sketchy"
    TOY = "toy"


@dataclass
class RenderConfig:
    """Configuration for diagram rendering.

    Attributes:
        output_format: Image output format. D2 only renders to SVG.
        theme: Theme for the diagram (D2Theme or PlantUMLTheme).
        scale: Scale factor for the output.
        sketch: Hand-drawn style (D2 only).
    """

    output_format: OutputFormat = OutputFormat.SVG
    theme: D2Theme | PlantUMLTheme | None = None
    scale: float = 1.0
    sketch: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0.1 <= self.scale <= 5.0:
            raise ValueError(f"Scale must be between 0.1 and 5.0, got {self.scale}")


@dataclass
class RenderOutput:
    """Result of diagram rendering.

    Attributes:
        image_bytes: Raw image data.
        format: Output format used.
        diagram_type: Source diagram type (d2, plantuml).
        dsl_code: The diagram source that was rendered.
        metadata: Additional rendering metadata.
    """

    image_bytes: bytes
    format: OutputFormat
    diagram_type: str
    dsl_code: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def size_bytes(self) -> int:
        """Size of image in bytes."""
        return len(self.image_bytes)

    def save(self, path: Path | str) -> None:
        """Save image to file."""
        Path(path).write_bytes(self.image_bytes)


class RenderError(Exception):
    """Error during rendering."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class RenderClient:
    """HTTP client for Kroki diagram rendering.

    Example:
        >>> client = RenderClient()
        >>> if client.is_available():
        ...     result = client.render_transitions(graph, "d2")
        ...     result.save("transitions.svg")

    Attributes:
        base_url: Kroki service URL.
        timeout: Request timeout in seconds.
    """

    # Diagram type to Kroki endpoint mapping
    _DIAGRAM_ENDPOINTS = {
        "d2": "d2",
        "plantuml": "plantuml",
        "puml": "plantuml",
    }

    def __init__(self, base_url: str | None = None, timeout: float = 30.0):
        """Initialize render client.

        Args:
            base_url: Kroki service URL. Defaults to KROKI_URL, or a local
                instance on KROKI_PORT.
            timeout: Request timeout in seconds.
        """
        self.base_url = get_kroki_url(base_url).rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RenderClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def is_available(self) -> bool:
        """Check if Kroki service is reachable."""
        try:
            response = self._client.get(f"{self.base_url}/health", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def render(
        self,
        dsl_code: str,
        diagram_type: str,
        config: RenderConfig | None = None,
    ) -> RenderOutput:
        """Render DSL code to an image.

        Args:
            dsl_code: DSL source code (D2 or PlantUML).
            diagram_type: Type of diagram ("d2", "plantuml").
            config: Rendering configuration.

        Raises:
            RenderError: If rendering fails.
        """
        config = config or RenderConfig()
        endpoint = self._DIAGRAM_ENDPOINTS.get(diagram_type.lower())
        if not endpoint:
            raise RenderError(f"Unsupported diagram type: {diagram_type}")

        source = self._inject_options(dsl_code, endpoint, config)
        url = (
            f"{self.base_url}/{endpoint}/{config.output_format.value}/"
            f"{self._encode_diagram(source)}"
        )
        logger.debug(f"Rendering {endpoint} diagram as {config.output_format.value}")

        try:
            response = self._client.get(url)
        except httpx.TimeoutException as e:
            raise RenderError(f"Kroki request timed out: {e}") from e
        except httpx.RequestError as e:
            raise RenderError(f"Kroki request failed: {e}") from e

        if response.status_code != 200:
            raise RenderError(
                f"Kroki returned {response.status_code}",
                status_code=response.status_code,
                response_body=response.text[:500],
            )

        return RenderOutput(
            image_bytes=response.content,
            format=config.output_format,
            diagram_type=endpoint,
            dsl_code=source,
            metadata={
                "url": url,
                "scale": config.scale,
                "theme": config.theme.value if config.theme else None,
            },
        )

    def render_transitions(
        self,
        graph: TransitionGraph,
        provider: str = "d2",
        config: RenderConfig | None = None,
    ) -> RenderOutput:
        """Transpile a transition graph with a provider and render it.

        Raises:
            KeyError: If the provider is unknown.
            RenderError: If the provider cannot produce the requested
                format, or rendering fails.
        """
        dsl_provider = get_provider(provider)
        config = config or RenderConfig()
        if config.output_format.value not in dsl_provider.supported_formats:
            raise RenderError(
                f"{provider} cannot render {config.output_format.value}; "
                f"supported: {', '.join(sorted(dsl_provider.supported_formats))}"
            )
        return self.render(dsl_provider.transpile(graph), provider, config)

    def _encode_diagram(self, dsl_code: str) -> str:
        """Encode diagram for Kroki URL (zlib + URL-safe base64)."""
        compressed = zlib.compress(dsl_code.encode("utf-8"), level=9)
        return base64.urlsafe_b64encode(compressed).decode("ascii")

    def _inject_options(self, dsl_code: str, endpoint: str, config: RenderConfig) -> str:
        if endpoint == "d2":
            return self._inject_d2_options(dsl_code, config)
        return self._inject_plantuml_options(dsl_code, config)

    def _inject_d2_options(self, dsl_code: str, config: RenderConfig) -> str:
        """D2 options are passed as comments at the top of the file."""
        options: list[str] = []
        if isinstance(config.theme, D2Theme):
            options.append(f"# d2-config: --theme {config.theme.value}")
        if config.sketch:
            options.append("# d2-config: --sketch")
        if config.scale != 1.0:
            options.append(f"# d2-config: --scale {config.scale}")

        if options:
            return "\n".join(options) + "\n\n" + dsl_code
        return dsl_code

    def _inject_plantuml_options(self, dsl_code: str, config: RenderConfig) -> str:
        """PlantUML options go right after the @start directive."""
        injections: list[str] = []
        if isinstance(config.theme, PlantUMLTheme) and config.theme.value:
            injections.append(f"!theme {config.theme.value}")
        if config.scale != 1.0:
            injections.append(f"scale {config.scale}")

        if not injections:
            return dsl_code

        result: list[str] = []
        injected = False
        for line in dsl_code.split("\n"):
            result.append(line)
            if not injected and line.strip().startswith("@start"):
                result.extend(injections)
                injected = True
        return "\n".join(result)


__all__ = [
    "D2Theme",
    "OutputFormat",
    "PlantUMLTheme",
    "RenderClient",
    "RenderConfig",
    "RenderError",
    "RenderOutput",
]
