"""Tests for retrieval (fail-open) and document ingestion (strict)."""

from unittest.mock import AsyncMock

import pytest

from services.retrieval_service import RetrievalService
from storage.retrieval_store import SQLRetrievalStore
from core.exceptions import ConfigurationError, EmbeddingError, StorageError
from conftest import FakeEmbeddingClient


async def test_ingest_then_retrieve(retrieval_service, store):
    await retrieval_service.ingest_document(
        "No one shall be subjected to arbitrary arrest.",
        {"id": "udhr-9", "title": "UDHR Article 9"},
    )

    passages = await retrieval_service.retrieve("What are my rights if detained?")

    assert len(passages) == 1
    assert passages[0].title == "UDHR Article 9"
    assert await retrieval_service.retrieve_context("detained") == (
        "[UDHR Article 9]: No one shall be subjected to arbitrary arrest."
    )


async def test_ingest_same_id_twice_keeps_one_record(retrieval_service, store):
    await retrieval_service.ingest_document("first", {"id": "X"})
    await retrieval_service.ingest_document("second", {"id": "X"})

    assert await store.count() == 1
    assert (await store.get("X"))["content"] == "second"


async def test_retrieve_empty_store(retrieval_service):
    assert await retrieval_service.retrieve("anything") == []
    assert await retrieval_service.retrieve_context("anything") is None


async def test_retrieve_empty_query_skips_embedding(retrieval_service, embedding_client):
    assert await retrieval_service.retrieve("   ") == []
    assert embedding_client.calls == []


async def test_retrieve_embedding_not_configured(store):
    service = RetrievalService(store=store, embedding_client=FakeEmbeddingClient(configured=False))
    assert await service.retrieve("question") == []


async def test_retrieve_embedding_failure(store):
    service = RetrievalService(store=store, embedding_client=FakeEmbeddingClient(default=None))
    assert await service.retrieve("question") == []


async def test_retrieve_store_not_configured(embedding_client):
    service = RetrievalService(store=SQLRetrievalStore(db_url="", dimensions=3), embedding_client=embedding_client)
    assert await service.retrieve("question") == []
    assert embedding_client.calls == []


@pytest.mark.parametrize("error", [StorageError("connection refused"), RuntimeError("boom")])
async def test_retrieve_store_failure_is_fail_open(store, embedding_client, error):
    store.query = AsyncMock(side_effect=error)
    service = RetrievalService(store=store, embedding_client=embedding_client)
    assert await service.retrieve("question") == []


async def test_retrieve_logs_degraded_retrieval_as_warning(store, embedding_client, caplog):
    store.query = AsyncMock(side_effect=StorageError("connection refused"))
    service = RetrievalService(store=store, embedding_client=embedding_client)

    with caplog.at_level("WARNING", logger="services.retrieval_service"):
        await service.retrieve("question")

    assert any(record.levelname == "WARNING" for record in caplog.records)


async def test_ingest_embedding_not_configured(store):
    service = RetrievalService(store=store, embedding_client=FakeEmbeddingClient(configured=False))
    with pytest.raises(ConfigurationError) as exc_info:
        await service.ingest_document("text", {"id": "doc"})
    assert exc_info.value.error_code == "mistral_not_configured"


async def test_ingest_store_not_configured(embedding_client):
    service = RetrievalService(store=SQLRetrievalStore(db_url="", dimensions=3), embedding_client=embedding_client)
    with pytest.raises(ConfigurationError) as exc_info:
        await service.ingest_document("text", {"id": "doc"})
    assert exc_info.value.error_code == "database_not_configured"
    assert embedding_client.calls == []


async def test_ingest_embedding_failure(store):
    service = RetrievalService(store=store, embedding_client=FakeEmbeddingClient(default=None))
    with pytest.raises(EmbeddingError):
        await service.ingest_document("text", {"id": "doc"})
    assert await store.count() == 0
