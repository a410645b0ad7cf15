"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("tree_sitter_java")

from fastapi.testclient import TestClient  # noqa: E402

from easydoc.config import ConfigError  # noqa: E402
from easydoc.orchestrator import GenerateOutcome  # noqa: E402
from easydoc.service import create_app  # noqa: E402


class _StubOrchestrator:
    def __init__(self) -> None:
        self.generate_calls: list[dict[str, object]] = []
        self.remove_calls: list[dict[str, object]] = []

    def run_generate(
        self,
        path: str,
        *,
        use_ai: bool = False,
        overwrite: bool = True,
        symbol: str | None = None,
        dry_run: bool = False,
    ) -> list[GenerateOutcome]:
        self.generate_calls.append(
            {"path": path, "use_ai": use_ai, "overwrite": overwrite, "symbol": symbol, "dry_run": dry_run}
        )
        if path.endswith("missing"):
            raise FileNotFoundError(f"{path} does not exist")
        if path.endswith("broken"):
            raise ConfigError("bad yaml")
        return [GenerateOutcome(path=Path(path) / "A.java", diff="diff", symbols_written=2, dry_run=dry_run)]

    def run_remove(
        self, path: str, *, symbol: str | None = None, dry_run: bool = False
    ) -> list[GenerateOutcome]:
        self.remove_calls.append({"path": path, "symbol": symbol, "dry_run": dry_run})
        return []


@pytest.fixture
def orchestrator() -> _StubOrchestrator:
    return _StubOrchestrator()


@pytest.fixture
def client(orchestrator: _StubOrchestrator) -> TestClient:
    return TestClient(create_app(lambda: orchestrator))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_merge_endpoint_reconciles_against_signature(client: TestClient) -> None:
    response = client.post(
        "/merge",
        json={
            "existing": "/**\n * Hand written.\n * @param old gone\n * @return value\n */",
            "generated": "/**\n * Generated\n * @param id id\n * @return int\n */",
            "parameters": ["id"],
            "has_return": False,
        },
    )

    assert response.status_code == 200
    assert response.json()["comment"] == "/**\n * Hand written.\n * @param id id\n */"


def test_merge_endpoint_without_existing_returns_generated(client: TestClient) -> None:
    response = client.post("/merge", json={"generated": "/** Fresh. */"})

    assert response.json() == {"comment": "/** Fresh. */"}


def test_generate_endpoint_reports_outcomes(client: TestClient, orchestrator: _StubOrchestrator) -> None:
    response = client.post("/generate", json={"path": "/repo", "use_ai": True, "dry_run": True})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["files"] == [
        {"path": str(Path("/repo") / "A.java"), "diff": "diff", "symbols_written": 2, "dry_run": True}
    ]
    assert orchestrator.generate_calls[0]["use_ai"] is True
    assert orchestrator.generate_calls[0]["overwrite"] is True


def test_remove_endpoint_reports_unchanged(client: TestClient, orchestrator: _StubOrchestrator) -> None:
    response = client.post("/remove", json={"path": "/repo", "symbol": "add"})

    assert response.json() == {"status": "unchanged", "files": []}
    assert orchestrator.remove_calls == [{"path": "/repo", "symbol": "add", "dry_run": False}]


def test_errors_map_to_status_codes(client: TestClient) -> None:
    assert client.post("/generate", json={"path": "/missing"}).status_code == 404
    assert client.post("/generate", json={"path": "/broken"}).status_code == 400
