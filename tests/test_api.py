import pytest
from fastapi.testclient import TestClient

from main import app
from core.dataset_store import dataset_store


@pytest.fixture
def client():
    dataset_store.clear()
    return TestClient(app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_dataset_is_seeded(client):
    first = client.get("/api/dataset", params={"seed": 3}).json()
    second = client.get("/api/dataset", params={"seed": 3}).json()
    assert len(first["rows"]) == 25
    assert first["rows"] == second["rows"]
    assert first["metric_keys"][0] == "pe"
    assert first["feature_names"][-1] == "1 Year Return"


def test_dataset_size_limits(client):
    assert len(client.get("/api/dataset", params={"size": 10}).json()["rows"]) == 10
    assert client.get("/api/dataset", params={"size": 100000}).status_code == 400
    assert client.get("/api/dataset", params={"size": 1}).status_code == 422


def test_pca_on_all_metrics(client):
    response = client.post("/api/pca", json={"seed": 1})
    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert body["method"] == "svd"
    assert len(body["transformed"]) == 25
    assert all(len(row) == 2 for row in body["transformed"])
    assert len(body["components"]) == 2 and len(body["components"][0]) == 8
    assert body["explained_variance_pct"][0] >= body["explained_variance_pct"][1]
    assert body["total_explained_pct"] == pytest.approx(sum(body["explained_variance"]) * 100, abs=0.1)


def test_pca_selected_metrics_in_canonical_order(client):
    body = client.post("/api/pca", json={"metrics": ["roe", "pe", "eps"], "seed": 1}).json()
    assert body["metrics"] == ["pe", "eps", "roe"]
    assert len(body["components"][0]) == 3


def test_pca_power_method(client):
    body = client.post("/api/pca", json={"seed": 2, "method": "power", "n_components": 3}).json()
    assert body["method"] == "power"
    assert len(body["explained_variance"]) == 3


def test_pca_degrades_gracefully(client):
    # one metric cannot give two components
    body = client.post("/api/pca", json={"metrics": ["pe"], "n_components": 2}).json()
    assert body["available"] is False
    assert body["explained_variance"] == [0.0, 0.0]
    assert body["transformed"] == []
    assert body["reason"]


def test_pca_strict_mode_reports_invalid_input(client):
    response = client.post(
        "/api/pca", json={"metrics": ["pe"], "n_components": 2, "graceful": False}
    )
    assert response.status_code == 422


def test_pca_rejects_unknown_metric(client):
    response = client.post("/api/pca", json={"metrics": ["pe", "ebitda"]})
    assert response.status_code == 400


def test_projection(client):
    response = client.post(
        "/api/projection", json={"metrics": ["roe", "pe"], "angle": 0.3, "seed": 1}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["metrics"] == ["roe", "pe"]
    assert len(body["projected"]) == 25
    assert body["optimal_variance"] >= body["variance"]


def test_projection_needs_two_metrics(client):
    response = client.post("/api/projection", json={"metrics": ["pe", "pb", "roe"]})
    assert response.status_code == 400


@pytest.mark.parametrize("seed", [-1, 2 ** 32, 2 ** 33])
def test_out_of_range_seed_is_rejected(client, seed):
    assert client.get("/api/dataset", params={"seed": seed}).status_code == 422
    assert client.post("/api/pca", json={"seed": seed}).status_code == 422
    assert client.post(
        "/api/projection", json={"metrics": ["pe", "roe"], "seed": seed}
    ).status_code == 422


def test_largest_seed_is_accepted(client):
    assert client.get("/api/dataset", params={"seed": 2 ** 32 - 1}).status_code == 200
