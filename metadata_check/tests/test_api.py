"""
HTTP contract tests for the validation endpoint.

Validation outcomes, valid or not, are HTTP 200. Only transport-level
problems produce error statuses.
"""

import json

import pytest
from fastapi.testclient import TestClient

from metadata_check.app.main import app, pretty_json
from metadata_check.tests.fixtures.documents import (
    as_text,
    valid_document,
    valid_prompt_entry,
)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("METADATA_CHECK_MAX_DOCUMENT_SIZE_KB", "4")
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "metadata-check"}


def test_valid_document_returns_empty_violation_list(client):
    response = client.post(
        "/validate",
        json={"document": as_text(valid_document()), "expected_count": "2"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "violation_count": 0,
        "violations": [],
        "grouped": {},
    }


def test_invalid_document_returns_flat_and_grouped_violations(client):
    document = valid_document(
        uuid="abc",
        prompts=[valid_prompt_entry(hfi_id="xyz")],
    )

    response = client.post(
        "/validate",
        json={"document": as_text(document), "expected_count": "2"},
    )

    assert response.status_code == 200
    body = response.json()

    assert body["valid"] is False
    assert body["violation_count"] == 2
    assert [(v["field"], v.get("index")) for v in body["violations"]] == [
        ("prompts", None),
        ("hfi_id", 0),
    ]
    assert "index" not in body["violations"][0]
    assert list(body["grouped"]) == ["general", "prompts[0]"]


def test_malformed_json_is_a_validation_outcome(client):
    response = client.post(
        "/validate",
        json={"document": "{not json", "expected_count": "1"},
    )

    assert response.status_code == 200
    assert response.json()["violations"] == [
        {"rule_id": "JSON-PARSE", "field": "json", "message": "Invalid JSON format"}
    ]


def test_oversized_document_rejected(client):
    document = valid_document(programming_language="x" * 8192)

    response = client.post(
        "/validate",
        json={"document": as_text(document), "expected_count": "2"},
    )

    assert response.status_code == 413


def test_unknown_request_fields_rejected(client):
    response = client.post(
        "/validate",
        json={"document": "{}", "expected_count": "1", "strict": True},
    )

    assert response.status_code == 422


def test_lone_surrogate_document_is_a_validation_outcome(client):
    response = client.post(
        "/validate",
        content='{"document": "\\ud800", "expected_count": "1"}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert [v["rule_id"] for v in response.json()["violations"]] == [
        "JSON-PARSE"
    ]


def test_lone_surrogate_inside_document_string_is_validated(client):
    document = as_text(valid_document()).replace(
        '"programming_language": "python"',
        '"programming_language": "\\ud800"',
    )
    body = '{"document": %s, "expected_count": "2"}' % json.dumps(document)

    response = client.post(
        "/validate",
        content=body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json()["valid"] is True


def test_pretty_json_rejects_non_finite_numbers():
    with pytest.raises(ValueError):
        pretty_json({"value": float("nan")})
