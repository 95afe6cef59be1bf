"""
Integration tests for the chat gateway HTTP API.

Tests:
- Chat forwarding and error bodies
- Model listing with and without a user
- Cache refresh
- User key status
- Health
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from chat_gateway.api import router, set_dependencies
from chat_gateway.catalog import STATIC_MODELS
from chat_gateway.core.errors import CredentialResolutionError, UpstreamError
from chat_gateway.core.gateway import ChatGateway
from chat_gateway.core.registry import ModelRegistry

from helpers import FakeResolver, FakeUpstream, FlakySource, RecordingLogger, make_descriptor


@pytest.fixture
def upstream(events):
    return FakeUpstream(events)


@pytest.fixture
def resolver(events):
    return FakeResolver(events)


@pytest.fixture
def registry(clock):
    return ModelRegistry(clock=clock)


@pytest.fixture
def client(events, upstream, resolver, registry):
    """Test client over an app wired with fakes."""
    gateway = ChatGateway(
        upstream=upstream,
        message_logger=RecordingLogger(events),
        credential_resolver=resolver,
        registry=registry,
    )
    set_dependencies(gateway, registry, resolver)

    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


class TestChatEndpoint:
    """Test POST /chat."""

    def test_successful_chat(self, client, chat_body, upstream):
        response = client.post("/chat", json=chat_body)

        assert response.status_code == 200
        assert response.json() == {"message": "hello"}
        assert len(upstream.calls) == 1

    def test_missing_field_is_400(self, client, chat_body):
        del chat_body["chatId"]

        response = client.post("/chat", json=chat_body)

        assert response.status_code == 400
        assert response.json() == {"error": "Error, missing information"}

    def test_invalid_json_is_400(self, client, upstream):
        response = client.post(
            "/chat",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Error, missing information"}
        assert upstream.calls == []

    def test_upstream_failure_body(self, client, chat_body, upstream):
        upstream.error = UpstreamError("boom", status_code=500)

        response = client.post("/chat", json=chat_body)

        assert response.status_code == 502
        assert "error" in response.json()


class TestModelsEndpoint:
    """Test GET /models and POST /models/refresh."""

    def test_models_without_user(self, client):
        response = client.get("/models")

        assert response.status_code == 200
        models = response.json()["models"]
        assert [m["id"] for m in models] == [m.id for m in STATIC_MODELS]
        assert all(m["accessible"] is True for m in models)
        assert "providerId" in models[0]

    def test_models_with_user_key(self, client, resolver):
        """A user's own key unlocks the models of that provider once."""
        resolver.keys[("u1", "openrouter")] = "sk-user"

        response = client.get("/models", params={"userId": "u1"})

        ids = [m["id"] for m in response.json()["models"]]
        assert len(ids) == len(set(ids))
        assert set(ids) == {m.id for m in STATIC_MODELS}

    def test_models_survive_key_lookup_failure(self, client, resolver):
        resolver.error = CredentialResolutionError("vault down")

        response = client.get("/models", params={"userId": "u1"})

        assert response.status_code == 200
        assert len(response.json()["models"]) == len(STATIC_MODELS)

    def test_refresh(self, events, resolver, clock):
        source = FlakySource([make_descriptor("openrouter:a")])
        registry = ModelRegistry(source=source, clock=clock)
        gateway = ChatGateway(
            upstream=FakeUpstream(events),
            message_logger=RecordingLogger(events),
            credential_resolver=resolver,
            registry=registry,
        )
        set_dependencies(gateway, registry, resolver)
        app = FastAPI()
        app.include_router(router)
        client = TestClient(app)

        client.get("/models")
        source.models.append(make_descriptor("openrouter:b"))
        response = client.post("/models/refresh")

        data = response.json()
        assert response.status_code == 200
        assert set(data) == {"models", "refreshed"}
        assert data["refreshed"] is True
        assert [m["id"] for m in data["models"]] == ["openrouter:a", "openrouter:b"]
        assert source.calls == 2


class TestUserKeyStatus:
    """Test GET /user-key-status."""

    def test_user_with_key(self, client, resolver):
        resolver.keys[("u1", "openrouter")] = "sk-user"

        response = client.get("/user-key-status", params={"userId": "u1"})

        assert response.status_code == 200
        assert response.json() == {"openrouter": True}

    def test_user_without_key(self, client):
        response = client.get("/user-key-status", params={"userId": "u2"})
        assert response.json() == {"openrouter": False}

    def test_no_user(self, client):
        response = client.get("/user-key-status")
        assert response.json() == {"openrouter": False}


class TestHealth:
    """Test the application health endpoint."""

    def test_health(self):
        from chat_gateway.main import app

        with TestClient(app) as client:
            response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "chat-gateway"
        assert data["models_cached"] is True
