"""Shared fixtures: fake providers, a temporary SQLite retrieval store and the API client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_chat_service,
    get_identity_client,
    get_retrieval_service,
    get_speech_service,
)
from domain.auth.types import AuthenticatedPrincipal
from services.chat_service import ChatService
from services.retrieval_service import RetrievalService
from services.speech_service import SpeechService
from storage.retrieval_store import SQLRetrievalStore
from core.exceptions import AuthError

USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"


class FakeEmbeddingClient:
    """Embedding client returning canned vectors, recording every call."""

    provider = "mistral"
    not_configured_code = "mistral_not_configured"

    def __init__(self, vectors=None, default=None, configured=True):
        self.vectors = vectors or {}
        self.default = default
        self.is_configured = configured
        self.calls = []

    async def embed(self, text):
        self.calls.append(text)
        return self.vectors.get(text, self.default)

    async def close(self):
        pass


class FakeIdentityClient:
    """Identity provider knowing a fixed set of tokens."""

    def __init__(self, users):
        self.users = users
        self.get_user = AsyncMock(side_effect=self._lookup)

    async def _lookup(self, token):
        if token not in self.users:
            raise AuthError("Invalid or expired token")
        return self.users[token]


@pytest.fixture
def store(tmp_path) -> SQLRetrievalStore:
    return SQLRetrievalStore(db_url=f"sqlite:///{tmp_path / 'retrieval.db'}", dimensions=3)


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    return FakeEmbeddingClient(default=[1.0, 0.0, 0.0])


@pytest.fixture
def retrieval_service(store, embedding_client) -> RetrievalService:
    return RetrievalService(store=store, embedding_client=embedding_client, top_k=3)


@pytest.fixture
def llm_client() -> MagicMock:
    client = MagicMock()
    client.complete = AsyncMock(return_value="You have the right to be informed of the reasons for your arrest.")
    return client


@pytest.fixture
def chat_service(retrieval_service, llm_client) -> ChatService:
    return ChatService(retrieval_service=retrieval_service, llm_client=llm_client, llm_provider="openai")


@pytest.fixture
def speech_service() -> SpeechService:
    service = SpeechService(api_key="test-key")
    service._client = MagicMock()
    service._client.audio.transcriptions.create = AsyncMock(return_value=MagicMock(text="hello"))
    service._client.audio.speech.create = AsyncMock(return_value=MagicMock(content=b"ID3audio"))
    return service


@pytest.fixture
def user() -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(id="user-1", email="user@example.org", role="authenticated")


@pytest.fixture
def admin() -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(
        id="admin-1",
        email="admin@example.org",
        role="authenticated",
        app_metadata={"role": "admin"},
    )


@pytest.fixture
def identity_client(user, admin) -> FakeIdentityClient:
    return FakeIdentityClient({USER_TOKEN: user, ADMIN_TOKEN: admin})


@pytest.fixture
def client(identity_client, chat_service, retrieval_service, speech_service):
    """TestClient with shared clients replaced by fakes (lifespan is not run)."""
    from main import app

    app.dependency_overrides[get_identity_client] = lambda: identity_client
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_retrieval_service] = lambda: retrieval_service
    app.dependency_overrides[get_speech_service] = lambda: speech_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(token: str = USER_TOKEN) -> dict:
    return {"Authorization": f"Bearer {token}"}
