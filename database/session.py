# database/session.py

import logging
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.ext.asyncio import (async_sessionmaker, create_async_engine)
from sqlalchemy.orm import declarative_base

from config import settings

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

from contextlib import asynccontextmanager


# ============= Models =============

logger = logging.getLogger(settings.LOGGER_NAME)

# Setup SQLAlchemy async engine and session maker
async_engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True  # Check connection health before using
)
AsyncSessionLocal = async_sessionmaker(async_engine, expire_on_commit=False)
Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

# --- SQLAlchemy Models ---

class DocumentEntity(Base):
    __tablename__ = "documents"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    searchable_text = Column(Text, nullable=True)
    meta = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

class SectionEmbeddingEntity(Base):
    __tablename__ = "document_embeddings"
    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"),
                         nullable=False, index=True)
    section = Column(String, nullable=False)  # Content prefix, display only
    section_text = Column(Text, nullable=False)
    embedding = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


async def init_db() -> None:
    """Create all tables on the configured engine"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ============= Dependencies =============

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for FastAPI dependency injection"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

# ============= Session Factory =============

@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a new database session with proper cleanup.

    Used by batch jobs where request-scoped sessions are unavailable.
    Ensures proper rollback on errors and explicit closure.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
