import json
import logging

import requests

from ingredient_safety import EWGSearchClient, ExternalDatum, NullEnrichmentSource

ENDPOINT = "https://example.test/functions/v1/ewg-search"


def test_parse_listing_reads_first_listing(listing_html):
    datum = EWGSearchClient.parse_listing(listing_html)
    assert datum == ExternalDatum(
        score=3,
        concerns="Allergies/immunotoxicity, Irritation (skin, eyes, or lungs)",
        function="Fragrance ingredient",
        common_use="Perfuming",
    )


def test_parse_listing_without_listing_block():
    assert EWGSearchClient.parse_listing("<div>No results</div>") is None


def test_parse_listing_with_sparse_listing():
    datum = EWGSearchClient.parse_listing(
        '<div class="product-listing"><div class="product-score">n/a</div></div>'
    )
    assert datum == ExternalDatum()


def test_fetch_sends_query_and_credentials(fake_session, fake_response, listing_html):
    session = fake_session(fake_response({"html": listing_html}))
    client = EWGSearchClient(ENDPOINT, token="secret", session=session, timeout=2.5)

    datum = client.fetch("Linalool")

    assert datum.score == 3
    (request,) = session.requests
    assert request["url"] == ENDPOINT
    assert request["params"] == {"ingredient": "Linalool"}
    assert request["headers"] == {"Authorization": "Bearer secret"}
    assert request["timeout"] == 2.5


def test_fetch_without_token_sends_no_auth_header(fake_session, fake_response, listing_html):
    session = fake_session(fake_response({"html": listing_html}))
    EWGSearchClient(ENDPOINT, session=session).fetch("linalool")
    assert session.requests[0]["headers"] == {}


def test_successful_lookups_are_memoised(fake_session, fake_response, listing_html):
    session = fake_session(fake_response({"html": listing_html}))
    client = EWGSearchClient(ENDPOINT, session=session)
    first = client.fetch("linalool")
    second = client.fetch(" Linalool ")
    assert first is second
    assert len(session.requests) == 1


def test_missing_listing_is_cached_as_no_datum(fake_session, fake_response):
    session = fake_session(fake_response({"html": "<p>nothing</p>"}))
    client = EWGSearchClient(ENDPOINT, session=session)
    assert client.fetch("unobtainium") is None
    assert client.fetch("unobtainium") is None
    assert len(session.requests) == 1


def test_error_envelope_returns_none(fake_session, fake_response, caplog):
    session = fake_session(fake_response({"error": "quota exceeded"}))
    client = EWGSearchClient(ENDPOINT, session=session)
    with caplog.at_level(logging.WARNING):
        assert client.fetch("paraben") is None
    assert "quota exceeded" in caplog.text


def test_http_error_returns_none_and_is_not_cached(fake_session, fake_response):
    session = fake_session(fake_response({"html": "<p/>"}, status_code=503))
    client = EWGSearchClient(ENDPOINT, session=session)
    assert client.fetch("paraben") is None
    assert client.fetch("paraben") is None
    assert len(session.requests) == 2


def test_network_failure_returns_none(fake_session, caplog):
    session = fake_session(error=requests.ConnectionError("connection refused"))
    client = EWGSearchClient(ENDPOINT, session=session)
    with caplog.at_level(logging.WARNING):
        assert client.fetch("paraben") is None
    assert "EWG lookup failed for paraben" in caplog.text


def test_malformed_json_returns_none(fake_session, fake_response):
    bad = fake_response(json_error=json.JSONDecodeError("Expecting value", "", 0))
    client = EWGSearchClient(ENDPOINT, session=fake_session(bad))
    assert client.fetch("paraben") is None


def test_envelope_without_html_returns_none(fake_session, fake_response):
    client = EWGSearchClient(ENDPOINT, session=fake_session(fake_response({})))
    assert client.fetch("paraben") is None


def test_unexpected_payload_returns_none(fake_session, fake_response):
    client = EWGSearchClient(ENDPOINT, session=fake_session(fake_response(["html"])))
    assert client.fetch("paraben") is None


def test_null_source_never_supplies_data():
    assert NullEnrichmentSource().fetch("paraben") is None


def test_non_text_html_returns_none(fake_session, fake_response, caplog):
    client = EWGSearchClient(ENDPOINT, session=fake_session(fake_response({"html": 123})))
    with caplog.at_level(logging.WARNING):
        assert client.fetch("paraben") is None
    assert "non-text html" in caplog.text


def test_cache_evicts_least_recently_used(fake_session, fake_response):
    session = fake_session(fake_response({"html": "<p>nothing</p>"}))
    client = EWGSearchClient(ENDPOINT, session=session, cache_size=3)
    for i in range(5000):
        client.fetch(f"name {i}")
    assert len(client._cache) == 3
    assert list(client._cache) == ["name 4997", "name 4998", "name 4999"]

    client.fetch("name 4997")
    client.fetch("fresh name")
    assert list(client._cache) == ["name 4999", "name 4997", "fresh name"]
    assert len(session.requests) == 5001


def test_zero_cache_size_disables_memoisation(fake_session, fake_response, listing_html):
    session = fake_session(fake_response({"html": listing_html}))
    client = EWGSearchClient(ENDPOINT, session=session, cache_size=0)
    client.fetch("linalool")
    client.fetch("linalool")
    assert len(session.requests) == 2
    assert len(client._cache) == 0
