"""
Retrieval document store using PostgreSQL + pgvector (SQLite for local dev and tests)
"""

import asyncio
import json
import logging
import threading
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional

from pgvector.sqlalchemy import Vector
from sqlalchemy import create_engine, Column, String, Text, DateTime, JSON, select, func, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from domain.rag.retrieval.similarity import cosine_distances
from storage.base import BaseRetrievalStore
from core.config import settings
from core.exceptions import ConfigurationError, StorageError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class RetrievalDocumentModel(Base):
    __tablename__ = "legal_documents"

    doc_id = Column(String, primary_key=True)  # metadata["id"]
    content = Column(Text, nullable=False)
    doc_metadata = Column(
        "metadata",
        JSON(none_as_null=True).with_variant(postgresql.JSONB(none_as_null=True), "postgresql"),
        nullable=False,
        default=dict,
    )
    # Dimensionality is enforced by the store, not the column type
    embedding = Column(
        JSON(none_as_null=True).with_variant(Vector(), "postgresql"),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


documents_table = RetrievalDocumentModel.__table__


# Equal distances: most recently updated first, then doc_id
PG_QUERY_SQL = text(
    """
    SELECT content, metadata AS doc_metadata, embedding <=> CAST(:embedding AS vector) AS distance
    FROM legal_documents
    WHERE embedding IS NOT NULL
    ORDER BY distance ASC, updated_at DESC, doc_id ASC
    LIMIT :limit
    """
)


class SQLRetrievalStore(BaseRetrievalStore):
    """
    Retrieval store backed by SQLAlchemy.

    The backend follows the scheme of the database URL:
    - "postgresql://...": pgvector; nearest-neighbour ordering runs in SQL (`<=>`)
    - "sqlite://...": embeddings stored as JSON, cosine distance computed with numpy

    The engine (and its bounded connection pool) is created on first use, at most
    once per store. Blocking database calls run in a worker thread.
    """

    def __init__(
        self,
        db_url: Optional[str] = None,
        dimensions: Optional[int] = None,
        pool_size: Optional[int] = None,
        pool_timeout: Optional[float] = None,
        connect_timeout: Optional[int] = None,
        statement_timeout_ms: Optional[int] = None,
    ):
        self.db_url = db_url if db_url is not None else settings.database_url
        self.dimensions = dimensions or settings.embedding_dimensions
        self.pool_size = pool_size or settings.db_pool_size
        self.pool_timeout = pool_timeout or settings.db_pool_timeout
        self.connect_timeout = connect_timeout or settings.db_connect_timeout
        self.statement_timeout_ms = statement_timeout_ms or settings.db_statement_timeout_ms

        self._engine: Optional[Engine] = None
        self._engine_lock = threading.Lock()
        self.SessionLocal: Optional[sessionmaker] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.db_url)

    def check_configured(self) -> None:
        self._get_db_url()

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def _get_db_url(self) -> str:
        if not self.db_url:
            raise settings.missing_error("database_url", "database_not_configured")
        # Hosted Postgres providers still hand out the legacy scheme
        if self.db_url.startswith("postgres://"):
            return "postgresql://" + self.db_url[len("postgres://"):]
        return self.db_url

    def _create_engine(self) -> Engine:
        db_url = self._get_db_url()
        url = make_url(db_url)

        if url.get_backend_name() == "postgresql":
            logger.info("Connecting to PostgreSQL retrieval store")
            engine = create_engine(
                db_url,
                pool_pre_ping=True,             # Verify connections before using
                pool_size=self.pool_size,       # Connection pool size
                max_overflow=0,                 # Saturated pool queues instead of growing
                pool_timeout=self.pool_timeout,
                connect_args={
                    "connect_timeout": self.connect_timeout,
                    "options": f"-c statement_timeout={self.statement_timeout_ms}",
                },
            )
            with engine.begin() as conn:
                conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        elif url.get_backend_name() == "sqlite":
            logger.info(f"Opening SQLite retrieval store: {url.database or ':memory:'}")
            kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if url.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool  # One shared in-memory database
            engine = create_engine(db_url, **kwargs)
        else:
            raise StorageError(f"Unsupported retrieval store backend: {url.get_backend_name()}")

        # Create tables if they don't exist
        Base.metadata.create_all(engine)
        self.SessionLocal = sessionmaker(bind=engine)
        return engine

    def _get_engine(self) -> Engine:
        """Get or create the engine"""
        if self._engine is None:
            with self._engine_lock:
                if self._engine is None:
                    self._engine = self._create_engine()
        return self._engine

    def _check_dimensions(self, embedding: List[float], what: str) -> None:
        if len(embedding) != self.dimensions:
            raise StorageError(
                f"{what} has {len(embedding)} dimensions, store expects {self.dimensions}"
            )

    # ------------------------------------------------------------------
    # Sync implementations (run in a worker thread)
    # ------------------------------------------------------------------

    def _upsert_sync(self, doc_id: str, content: str, metadata: Dict[str, Any], embedding: List[float]) -> None:
        engine = self._get_engine()
        insert = postgresql.insert if engine.dialect.name == "postgresql" else sqlite.insert

        now = _utcnow()
        stmt = insert(documents_table).values(
            doc_id=doc_id,
            content=content,
            metadata=metadata,
            embedding=[float(x) for x in embedding],
            created_at=now,
            updated_at=now,
        )
        # Single statement: content, metadata and embedding are replaced together
        stmt = stmt.on_conflict_do_update(
            index_elements=[documents_table.c.doc_id],
            set_={
                "content": stmt.excluded["content"],
                "metadata": stmt.excluded["metadata"],
                "embedding": stmt.excluded["embedding"],
                "updated_at": stmt.excluded["updated_at"],
            },
        )
        with self.SessionLocal.begin() as session:
            session.execute(stmt)

    def _query_sync(self, query_embedding: List[float], limit: int) -> List[Dict[str, Any]]:
        engine = self._get_engine()
        if engine.dialect.name == "postgresql":
            with self.SessionLocal() as session:
                rows = session.execute(
                    PG_QUERY_SQL,
                    {"embedding": json.dumps([float(x) for x in query_embedding]), "limit": limit},
                ).all()
            return [
                {"content": row.content, "metadata": row.doc_metadata or {}, "distance": float(row.distance)}
                for row in rows
            ]

        with self.SessionLocal() as session:
            rows = session.execute(
                select(
                    documents_table.c.doc_id,
                    documents_table.c.content,
                    documents_table.c["metadata"].label("doc_metadata"),
                    documents_table.c.embedding,
                    documents_table.c.updated_at,
                ).where(documents_table.c.embedding.isnot(None))
            ).all()

        rows = [row for row in rows if row.embedding]
        if not rows:
            return []

        distances = cosine_distances(query_embedding, [row.embedding for row in rows])
        ranked = list(zip(rows, distances))
        # Stable sorts, last key applied first
        ranked.sort(key=lambda pair: pair[0].doc_id)
        ranked.sort(key=lambda pair: pair[0].updated_at, reverse=True)
        ranked.sort(key=lambda pair: pair[1])

        return [
            {"content": row.content, "metadata": row.doc_metadata or {}, "distance": distance}
            for row, distance in ranked[:limit]
        ]

    def _get_sync(self, doc_id: str) -> Optional[Dict[str, Any]]:
        self._get_engine()
        with self.SessionLocal() as session:
            doc = session.get(RetrievalDocumentModel, doc_id)
            if not doc:
                return None
            return {
                "id": doc.doc_id,
                "content": doc.content,
                "metadata": doc.doc_metadata or {},
                "embedding": [float(x) for x in doc.embedding] if doc.embedding is not None else None,
                "created_at": doc.created_at.isoformat() if doc.created_at else None,
                "updated_at": doc.updated_at.isoformat() if doc.updated_at else None,
            }

    def _count_sync(self) -> int:
        self._get_engine()
        with self.SessionLocal() as session:
            return session.execute(select(func.count()).select_from(documents_table)).scalar_one()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def upsert(
        self,
        content: str,
        metadata: Dict[str, Any],
        embedding: List[float]
    ) -> None:
        doc_id = metadata.get("id")
        if not isinstance(doc_id, str) or not doc_id:
            raise StorageError("metadata.id is required to store a document")
        self._check_dimensions(embedding, "Document embedding")

        try:
            await asyncio.to_thread(self._upsert_sync, doc_id, content, dict(metadata), embedding)
            logger.info(f"Upserted document {doc_id}")
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Error upserting document {doc_id}: {e}")
            raise StorageError(f"Failed to store document: {e}")

    async def query(
        self,
        query_embedding: List[float],
        limit: int = 3
    ) -> List[Dict[str, Any]]:
        self._check_dimensions(query_embedding, "Query embedding")
        if limit <= 0:
            return []

        try:
            return await asyncio.to_thread(self._query_sync, query_embedding, limit)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Error querying retrieval store: {e}")
            raise StorageError(f"Failed to query documents: {e}")

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await asyncio.to_thread(self._get_sync, doc_id)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Error getting document {doc_id}: {e}")
            raise StorageError(f"Failed to get document: {e}")

    async def count(self) -> int:
        try:
            return await asyncio.to_thread(self._count_sync)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Error counting documents: {e}")
            raise StorageError(f"Failed to count documents: {e}")

    async def close(self) -> None:
        """Dispose of the connection pool"""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self.SessionLocal = None
