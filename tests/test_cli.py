"""CLI commands through Typer's CliRunner, with httpx mocked by respx."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from respx import MockRouter
from typer.testing import CliRunner

from cli.main import app
from tests.factories import BASE_URL as API, page_payload, record_payload

runner = CliRunner()


@pytest.fixture
def favorites_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "favorites.json"
    monkeypatch.setenv("POKEDEX_D2_API_BASE_URL", API)
    monkeypatch.setenv("POKEDEX_D2_FAVORITES_PATH", str(path))
    monkeypatch.setenv("POKEDEX_D2_HTTP_MAX_RETRIES", "1")
    return path


def _mock_two_records(respx_mock: MockRouter) -> None:
    respx_mock.get(f"{API}/pokemon").mock(
        return_value=httpx.Response(200, json=page_payload([(1, "bulbasaur"), (4, "charmander")]))
    )
    respx_mock.get(f"{API}/pokemon/1").mock(
        return_value=httpx.Response(200, json=record_payload(1, "bulbasaur", ("grass", "poison")))
    )
    respx_mock.get(f"{API}/pokemon/4").mock(
        return_value=httpx.Response(200, json=record_payload(4, "charmander", ("fire",)))
    )


def test_list_renders_filtered_records(favorites_path: Path, respx_mock: MockRouter) -> None:
    _mock_two_records(respx_mock)

    result = runner.invoke(app, ["list", "--count", "2", "--tag", "fire"])

    assert result.exit_code == 0, result.output
    assert "Charmander" in result.output
    assert "Bulbasaur" not in result.output
    assert "fire, grass, poison" in result.output


def test_list_exports_json(favorites_path: Path, respx_mock: MockRouter, tmp_path: Path) -> None:
    _mock_two_records(respx_mock)
    out = tmp_path / "export" / "records.json"

    result = runner.invoke(app, ["list", "-n", "2", "--search", "BULB", "--json", str(out)])

    assert result.exit_code == 0, result.output
    exported = json.loads(out.read_text(encoding="utf-8"))
    assert [item["name"] for item in exported] == ["bulbasaur"]


def test_list_favorites_only(favorites_path: Path, respx_mock: MockRouter) -> None:
    _mock_two_records(respx_mock)
    runner.invoke(app, ["favorites", "add", "4"])

    result = runner.invoke(app, ["list", "-n", "2", "--favorites-only"])

    assert result.exit_code == 0, result.output
    assert "Charmander" in result.output
    assert "Bulbasaur" not in result.output


def test_show_not_found_exits_with_error(favorites_path: Path, respx_mock: MockRouter) -> None:
    respx_mock.get(f"{API}/pokemon/missingno").mock(return_value=httpx.Response(404))

    result = runner.invoke(app, ["show", "missingno"])

    assert result.exit_code == 1
    assert "resource not found" in result.output


def test_show_spanish_error(favorites_path: Path, respx_mock: MockRouter) -> None:
    respx_mock.get(f"{API}/pokemon/missingno").mock(return_value=httpx.Response(404))

    result = runner.invoke(app, ["--spanish", "show", "missingno"])

    assert result.exit_code == 1
    assert "recurso no encontrado" in result.output


def test_show_renders_detail(favorites_path: Path, respx_mock: MockRouter) -> None:
    respx_mock.get(f"{API}/pokemon/25").mock(
        return_value=httpx.Response(200, json=record_payload(25, "pikachu", ("electric",)))
    )

    result = runner.invoke(app, ["show", "25"])

    assert result.exit_code == 0, result.output
    assert "#025 Pikachu" in result.output
    assert "Overgrow" in result.output


def test_tags_lists_remote_tags(favorites_path: Path, respx_mock: MockRouter) -> None:
    respx_mock.get(f"{API}/type").mock(
        return_value=httpx.Response(
            200,
            json={"count": 2, "results": [{"name": "water", "url": ""}, {"name": "fire", "url": ""}]},
        )
    )

    result = runner.invoke(app, ["tags"])

    assert result.exit_code == 0, result.output
    assert result.output.split() == ["fire", "water"]


def test_favorites_commands(favorites_path: Path) -> None:
    assert "No favorites yet" in runner.invoke(app, ["favorites", "list"]).output

    runner.invoke(app, ["favorites", "add", "25"])
    runner.invoke(app, ["favorites", "toggle", "1"])
    assert runner.invoke(app, ["favorites", "list"]).output.split() == ["25", "1"]

    runner.invoke(app, ["favorites", "remove", "25"])
    assert json.loads(favorites_path.read_text(encoding="utf-8")) == {"pokemon-favorites": [1]}

    runner.invoke(app, ["favorites", "clear"])
    assert "No favorites yet" in runner.invoke(app, ["favorites", "list"]).output


def test_doctor_reports_connectivity(favorites_path: Path, respx_mock: MockRouter) -> None:
    respx_mock.get(f"{API}/pokemon").mock(return_value=httpx.Response(200, json=page_payload([])))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "HTTP 200" in result.output
    assert "FAIL" not in result.output
