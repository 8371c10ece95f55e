"""Tests for the command-line interface."""

import json

import pytest

from .lib import main


@pytest.fixture
def run(design_root, capsys):
    """Run the CLI against the sample tree; return (exit code, stdout)."""

    def _run(*argv: str) -> tuple[int, str]:
        code = main(["--root", str(design_root), *argv])
        return code, capsys.readouterr().out

    return _run


class TestDesignCommands:
    """Tests for the design inspection commands."""

    @pytest.mark.unit
    def test_sites(self, run):
        code, out = run("sites")
        assert code == 0
        assert out.splitlines() == ["blog\tblog", "shop\tShop"]

    @pytest.mark.unit
    def test_site_json(self, run):
        code, out = run("site", "shop")
        assert code == 0
        assert json.loads(out)["defaultViewport"] == "desktop"

    @pytest.mark.unit
    def test_transitions_tree(self, run):
        code, out = run("transitions", "shop")
        assert code == 0
        assert out.splitlines()[0] == "Cart (node-cart)"
        assert "└── open-help -> help-center [external]" in out

    @pytest.mark.unit
    @pytest.mark.parametrize("fmt,marker", [("d2", "direction: right"), ("plantuml", "@startuml")])
    def test_transitions_dsl(self, run, fmt, marker):
        code, out = run("transitions", "shop", "--format", fmt)
        assert code == 0
        assert out.startswith(marker)

    @pytest.mark.unit
    def test_transitions_json_viewport(self, run):
        code, out = run("transitions", "shop", "--viewport", "mobile", "--format", "json")
        assert code == 0
        assert "node-_shared-sidebar" not in [n["id"] for n in json.loads(out)["nodes"]]

    @pytest.mark.unit
    def test_screen(self, run):
        code, out = run("screen", "shop", "login")
        assert code == 0
        assert json.loads(out)["title"] == "Sign in"

    @pytest.mark.unit
    def test_layout_tree(self, run):
        code, out = run("layout", "shop", "home")
        assert code == 0
        assert out.splitlines()[0] == "Home [grid, desktop, 410x260]"

    @pytest.mark.unit
    def test_layout_json(self, run):
        code, out = run("layout", "shop", "login", "--viewport", "mobile", "--format", "json")
        assert code == 0
        scene = json.loads(out)
        assert (scene["mode"], scene["viewportId"]) == ("fallback", "mobile")

    @pytest.mark.unit
    def test_validate_ok(self, run):
        code, out = run("validate", "shop", "home")
        assert code == 0
        assert out.strip() == "shop/home: OK"

    @pytest.mark.unit
    def test_validate_issues(self, run, write_design):
        write_design(
            "sites/shop/screens/home/layout.yaml",
            {"areas": [{"areaId": "a", "children": ["@ghost"]}]},
        )
        code, out = run("validate", "shop", "home")
        assert code == 1
        assert out.strip() == "a: Child reference '@ghost' does not resolve [unresolved_child]"


class TestExitCodes:
    """Tests for error exit codes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "argv",
        [
            ("site", "nope"),
            ("screen", "shop", "nope"),
            ("layout", "shop", "drafts"),
            ("transitions", "nope"),
        ],
    )
    def test_not_found(self, run, argv):
        code, out = run(*argv)
        assert code == 2
        assert out == ""

    @pytest.mark.unit
    def test_no_arguments(self, capsys):
        assert main([]) == 1
        assert "Usage" in capsys.readouterr().out

    @pytest.mark.unit
    def test_help(self, capsys):
        assert main(["--help"]) == 0

    @pytest.mark.unit
    def test_bad_arguments(self, run):
        """argparse rejects unknown formats."""
        with pytest.raises(SystemExit) as exc_info:
            run("layout", "shop", "home", "--format", "d2")
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_mcp_usage(self, capsys):
        assert main(["mcp"]) == 1
        assert "serve" in capsys.readouterr().out
