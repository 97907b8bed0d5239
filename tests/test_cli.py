"""Tests for waypost.cli — argument parsing, app resolution, commands."""

import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

from waypost.app import App
from waypost.cli import main
from waypost.cli._resolve import resolve_app

APP_SOURCE = textwrap.dedent(
    """
    from waypost import App, AppConfig

    app = App(AppConfig(port=3333))

    @app.route("GET", "/users")
    def list_users(request, params, response):
        response.end("[]")

    @app.route("GET", "/users/:userId/groups/:groupId")
    def get_group(request, params, response):
        response.end("{}")

    def create_app():
        return app

    not_an_app = 42
    """
)


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Write a throwaway app module and make it importable."""
    name = f"cli_app_{tmp_path.name.replace('-', '_')}"
    (tmp_path / f"{name}.py").write_text(APP_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield name
    sys.modules.pop(name, None)


class TestResolveApp:
    def test_module_and_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_app(f"{app_module}:app"), App)

    def test_attribute_defaults_to_app(self, app_module: str) -> None:
        assert isinstance(resolve_app(app_module), App)

    def test_factory(self, app_module: str) -> None:
        assert resolve_app(f"{app_module}:create_app") is resolve_app(f"{app_module}:app")

    def test_not_an_app(self, app_module: str) -> None:
        with pytest.raises(TypeError, match="not a waypost.App"):
            resolve_app(f"{app_module}:not_an_app")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("no_such_module_for_waypost:app")


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "waypost" in capsys.readouterr().out

    def test_routes_in_dispatch_order(
        self, app_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", app_module])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["METHOD", "PATH", "PARAMS", "HANDLER"]
        assert lines[2].split() == ["GET", "/users", "-", "list_users"]
        assert lines[3].split() == [
            "GET",
            "/users/:userId/groups/:groupId",
            "userId,",
            "groupId",
            "get_group",
        ]

    def test_routes_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "no_such_module_for_waypost:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_run_uses_config_and_flags(
        self, app_module: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple[object, str, int, str]] = []

        def fake_run_server(app: object, host: str, port: int, *, log_level: str) -> None:
            calls.append((app, host, port, log_level))

        monkeypatch.setattr("waypost.server.run.run_server", fake_run_server)

        main(["run", app_module, "--host", "0.0.0.0", "--log-level", "debug"])

        app, host, port, log_level = calls[0]
        assert isinstance(app, App)
        assert (host, port, log_level) == ("0.0.0.0", 3333, "debug")
