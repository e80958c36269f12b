from typing import Dict, List, Optional

import pytest

from ingredient_safety import EnrichmentSource, ExternalDatum, IngredientClassifier


class StubEnrichmentSource(EnrichmentSource):
    """Returns canned data per normalized name and records every call."""

    def __init__(self, data: Optional[Dict[str, ExternalDatum]] = None, failing=()):
        self.data = data or {}
        self.failing = set(failing)
        self.calls: List[str] = []

    def fetch(self, name):
        self.calls.append(name)
        if name in self.failing:
            raise RuntimeError(f"lookup exploded for {name}")
        return self.data.get(name)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")

    def json(self):
        if self.json_error:
            raise self.json_error
        return self.payload


class FakeSession:
    """Stands in for requests.Session; replays one response per call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests: List[Dict] = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append(
            {"url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def offline_classifier():
    return IngredientClassifier()


@pytest.fixture
def listing_html():
    return """
    <div class="results">
      <div class="product-listing">
        <div class="product-score">Score: 3</div>
        <ul class="product-concerns">
          <li>Allergies/immunotoxicity</li>
          <li> Irritation (skin, eyes, or lungs) </li>
        </ul>
        <div class="product-details">
          <span class="function">Fragrance ingredient</span>
          <span class="common-use">Perfuming</span>
        </div>
      </div>
      <div class="product-listing">
        <div class="product-score">9</div>
      </div>
    </div>
    """


@pytest.fixture
def stub_source():
    return StubEnrichmentSource


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession
