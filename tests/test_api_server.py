import pytest
from fastapi.testclient import TestClient

import api_server
from ingredient_safety import ExternalDatum, IngredientClassifier


@pytest.fixture
def client():
    api_server.set_classifier(IngredientClassifier())
    yield TestClient(api_server.app)
    api_server.set_classifier(None)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_raw_text(client):
    response = client.post("/analyze", json={"ingredients": "Water, Paraben;\nUnobtainium"})
    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body["ingredients"]] == [
        "Water",
        "Paraben",
        "Unobtainium",
    ]
    paraben = body["ingredients"][1]
    assert paraben["ewgScore"] == 7
    assert paraben["safetyLevel"] == "High Concern"
    assert paraben["restrictions"] == "Restricted in EU"
    assert body["summary"]["total"] == 3
    assert body["summary"]["highestConcern"]["name"] == "Paraben"


def test_analyze_list_of_names(client):
    response = client.post(
        "/analyze", json={"ingredients": ["Vitamin E", "  ", "Titanium Dioxide"]}
    )
    assert response.status_code == 200
    names = [item["name"] for item in response.json()["ingredients"]]
    assert names == ["Vitamin E", "Titanium Dioxide"]


def test_analyze_input_without_ingredients_is_an_empty_batch(client):
    response = client.post("/analyze", json={"ingredients": " ;, x"})
    assert response.status_code == 200
    body = response.json()
    assert body["ingredients"] == []
    assert body["summary"]["total"] == 0
    assert body["summary"]["highestConcern"] is None


def test_analyze_uses_injected_enrichment(stub_source):
    source = stub_source({"water": ExternalDatum(function="Solvent")}, failing={"parfum"})
    api_server.set_classifier(IngredientClassifier(enrichment_source=source))
    try:
        response = TestClient(api_server.app).post(
            "/analyze", json={"ingredients": "water, parfum"}
        )
    finally:
        api_server.set_classifier(None)
    assert response.status_code == 200
    water, parfum = response.json()["ingredients"]
    assert water["function"] == "Solvent"
    assert parfum["function"] == "Fragrance"
