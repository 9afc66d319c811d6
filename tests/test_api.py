"""Validate the HTTP surface: /init, /submit, /health and encoding failures."""

import pytest
from fastapi.testclient import TestClient

from galxe_canvas.api import app as app_module
from galxe_canvas.api.app import CORRELATION_HEADER, build_app, encode_envelope
from galxe_canvas.core.exceptions import EncodingError
from galxe_canvas.core.models import CanvasResponse, Component
from galxe_canvas.services.submission_service import SubmissionService
from tests.sample_data import ADDRESS


def components_of(response):
    return response.json()["canvas"]["content"]["components"]


@pytest.fixture
def client(settings, fake_client):
    service = SubmissionService(settings, client_factory=lambda: fake_client)
    return TestClient(build_app(settings, service))


class TestInit:
    @pytest.mark.parametrize("method", ["get", "post"])
    def test_initial_form(self, client, method):
        response = getattr(client, method)("/init")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        components = components_of(response)
        assert components[0] == {
            "type": "text",
            "text": "*Check address Galxe nft balance*",
            "style": "header",
        }
        assert components[-1]["action"] == {"type": "submit"}


class TestSubmit:
    def test_campaign_submission(self, client):
        response = client.post(
            "/submit",
            json={"input_values": {"address": ADDRESS, "campaignId": "GCcamp1"}},
        )

        assert response.status_code == 200
        components = components_of(response)
        assert components[0] == {"type": "text", "text": "Campaign ID: GCcamp1", "style": "header"}
        assert components[-1] == {
            "type": "button",
            "id": "query-again",
            "label": "Query Again",
            "style": "primary",
            "action": {"type": "submit"},
        }

    def test_space_submission(self, client):
        response = client.post("/submit", json={"input_values": {"address": ADDRESS, "spaceId": "42"}})

        assert response.status_code == 200
        assert len(components_of(response)) == 5 * 4 + 1

    def test_validation_error_is_rendered_with_success_status(self, client, fake_client):
        response = client.post("/submit", json={"input_values": {"address": "", "spaceId": "42"}})

        assert response.status_code == 200
        components = components_of(response)
        assert components[0]["text"] == "Error: User address is required"
        assert components[-1]["action"] == {"type": "init"}
        assert fake_client.space_calls == []

    def test_undecodable_body_is_rendered(self, client):
        response = client.post(
            "/submit", content=b"not json", headers={"content-type": "application/json"}
        )

        assert response.status_code == 200
        assert components_of(response)[0]["text"].startswith("Error: Invalid request body")

    def test_error_status_is_configurable(self, settings, fake_client):
        settings = settings.model_copy(update={"submit_error_status": 400})
        service = SubmissionService(settings, client_factory=lambda: fake_client)
        client = TestClient(build_app(settings, service))

        response = client.post("/submit", json={"input_values": {"address": ADDRESS}})

        assert response.status_code == 400
        assert components_of(response)[0]["text"] == "Error: Space id or campaign id is required"

    def test_remote_failure_is_rendered(self, client, fake_client):
        fake_client.failing_spaces = {42}

        response = client.post("/submit", json={"input_values": {"address": ADDRESS, "spaceId": 42}})

        assert response.status_code == 200
        assert components_of(response)[0]["text"] == "Error: space: space 42 not found"

    def test_correlation_id_is_echoed(self, client):
        response = client.post(
            "/submit",
            json={"input_values": {"address": ADDRESS, "campaignId": "GCcamp1"}},
            headers={CORRELATION_HEADER: "abc12345"},
        )

        assert response.headers[CORRELATION_HEADER] == "abc12345"

    def test_encoding_failure_returns_bare_500(self, client, monkeypatch):
        def failing_encode(envelope):
            raise EncodingError("Failed to marshal response")

        monkeypatch.setattr(app_module, "encode_envelope", failing_encode)

        response = client.post(
            "/submit", json={"input_values": {"address": ADDRESS, "campaignId": "GCcamp1"}}
        )

        assert response.status_code == 500
        assert response.text == "Failed to marshal response"
        assert response.headers["content-type"].startswith("text/plain")


def test_encode_envelope_wraps_serialization_errors():
    broken = CanvasResponse.from_components([Component.model_construct(type=object())])

    with pytest.raises(EncodingError):
        encode_envelope(broken)


def test_cors_allows_widget_origin(client):
    response = client.get("/init", headers={"Origin": "https://app.intercom.com"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_health(client, settings):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["endpoint"] == settings.graphql_endpoint
