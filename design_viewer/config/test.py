"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_design_path,
    get_environment,
    get_environment_info,
    get_kroki_url,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("MCP_PORT", raising=False)
        assert get_environment(EnvVar.MCP_PORT) == 18080

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("MCP_PORT", "9999")
        assert get_environment(EnvVar.MCP_PORT, override=5000) == 5000

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("KROKI_PORT", "12345")
        result = get_environment(EnvVar.KROKI_PORT)
        assert result == 12345
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables convert to Path objects."""
        monkeypatch.setenv("DESIGN_PATH", str(tmp_path))
        result = get_environment(EnvVar.DESIGN_PATH)
        assert result == tmp_path
        assert isinstance(result, Path)

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("KROKI_PORT", "not-a-number")
        assert get_environment(EnvVar.KROKI_PORT) == 18000

    @pytest.mark.unit
    def test_default_viewport(self, monkeypatch):
        """Default viewport sentinel is desktop."""
        monkeypatch.delenv("DEFAULT_VIEWPORT", raising=False)
        assert get_environment(EnvVar.DEFAULT_VIEWPORT) == "desktop"


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.DESIGN_PATH)
        assert isinstance(info, EnvConfig)
        assert info.name == "DESIGN_PATH"
        assert info.var_type is Path
        assert info.category == "design"


class TestConvenienceFunctions:
    """Tests for convenience helpers."""

    @pytest.mark.unit
    def test_design_path_override(self, tmp_path):
        """Explicit override wins for the design root."""
        assert get_design_path(str(tmp_path)) == tmp_path

    @pytest.mark.unit
    def test_design_path_from_env(self, monkeypatch, tmp_path):
        """DESIGN_PATH is used when no override is given."""
        monkeypatch.setenv("DESIGN_PATH", str(tmp_path))
        assert get_design_path() == tmp_path

    @pytest.mark.unit
    def test_kroki_url_from_port(self, monkeypatch):
        """Kroki URL is derived from the port when unset."""
        monkeypatch.delenv("KROKI_URL", raising=False)
        monkeypatch.setenv("KROKI_PORT", "18001")
        assert get_kroki_url() == "http://localhost:18001"

    @pytest.mark.unit
    def test_kroki_url_explicit(self, monkeypatch):
        """KROKI_URL wins over the port."""
        monkeypatch.setenv("KROKI_URL", "http://kroki:8000")
        assert get_kroki_url() == "http://kroki:8000"


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_all_variables(self):
        """No category returns every variable."""
        assert set(list_environment_variables()) == set(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Category filter only returns matching variables."""
        design_vars = list_environment_variables("design")
        assert EnvVar.DESIGN_PATH in design_vars
        assert EnvVar.MCP_PORT not in design_vars
