# infrastructure/repositories.py
"""Database repository implementations"""
import logging
from typing import List, Optional, Dict, Any
from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.interfaces import IDocumentRepository, ISectionRepository
from core.domain import Document, PersistenceError, Section, SectionCandidate
from database.session import DocumentEntity, SectionEmbeddingEntity
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)

class SQLDocumentRepository(IDocumentRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_domain(self, db_doc: Optional[DocumentEntity]) -> Optional[Document]:
        """Converts an SQLAlchemy entity to a domain model."""
        if db_doc is None:
            return None

        # Prevent accidental mutation of DB entity metadata
        md = dict(db_doc.meta or {})

        return Document(
            id=db_doc.id, # type: ignore
            title=db_doc.title, # type: ignore
            content=db_doc.content, # type: ignore
            searchable_text=db_doc.searchable_text, # type: ignore
            metadata=md
        )

    async def create(self, title: str, content: str) -> Document:
        db_doc = DocumentEntity(title=title, content=content, meta={})
        try:
            self.session.add(db_doc)
            await self.session.commit()
            await self.session.refresh(db_doc)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to create document: {e}") from e
        logger.info(f"Created document {db_doc.id} in database")

        result = self._to_domain(db_doc)
        assert result is not None, "Created document should never be None"
        return result

    async def get_by_id(self, document_id: int) -> Optional[Document]:
        try:
            db_doc = await self.session.get(DocumentEntity, document_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to load document {document_id}: {e}") from e
        return self._to_domain(db_doc)

    async def list_all(self) -> List[Document]:
        """List all documents"""
        try:
            result = await self.session.execute(
                select(DocumentEntity).order_by(DocumentEntity.id.asc())
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to list documents: {e}") from e
        docs = [self._to_domain(doc) for doc in result.scalars().all()]
        return [d for d in docs if d is not None]

    async def update_index_metadata(
        self, document_id: int, searchable_text: str, metadata: Dict[str, Any]
    ) -> bool:
        """Persist searchable text and merged metadata on the ORM entity and commit."""
        try:
            db_doc = await self.session.get(DocumentEntity, document_id)
            if not db_doc:
                return False
            db_doc.searchable_text = searchable_text
            # Reassign so the JSON column is flagged dirty
            db_doc.meta = {**(db_doc.meta or {}), **metadata}
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(
                f"Failed to update index metadata for document {document_id}: {e}"
            ) from e
        return True

class SQLSectionRepository(ISectionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(section: Section) -> SectionEmbeddingEntity:
        return SectionEmbeddingEntity(
            document_id=section.document_id,
            section=section.section,
            section_text=section.section_text,
            embedding=list(section.embedding),
        )

    @staticmethod
    def _to_domain(row: SectionEmbeddingEntity) -> Section:
        return Section(
            id=row.id, # type: ignore
            document_id=row.document_id, # type: ignore
            section=row.section, # type: ignore
            section_text=row.section_text, # type: ignore
            embedding=list(row.embedding or []),
        )

    async def add(self, section: Section) -> Section:
        row = self._to_entity(section)
        try:
            self.session.add(row)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(
                f"Failed to insert section for document {section.document_id}: {e}"
            ) from e
        return self._to_domain(row)

    async def replace_for_document(self, document_id: int, sections: List[Section]) -> List[Section]:
        """Delete old rows and insert new ones in a single commit."""
        rows = [self._to_entity(s) for s in sections]
        try:
            await self.session.execute(
                delete(SectionEmbeddingEntity).where(
                    SectionEmbeddingEntity.document_id == document_id
                )
            )
            self.session.add_all(rows)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(
                f"Failed to replace sections for document {document_id}: {e}"
            ) from e
        return [self._to_domain(r) for r in rows]

    async def delete_by_document(self, document_id: int) -> int:
        try:
            result = await self.session.execute(
                delete(SectionEmbeddingEntity).where(
                    SectionEmbeddingEntity.document_id == document_id
                )
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(
                f"Failed to delete sections for document {document_id}: {e}"
            ) from e
        return result.rowcount or 0

    async def list_with_documents(self) -> List[SectionCandidate]:
        """
        Load every section row joined with its document title.
        Ordered by row id so equal scores keep insertion order.
        """
        try:
            result = await self.session.execute(
                select(SectionEmbeddingEntity, DocumentEntity.title)
                .join(DocumentEntity, DocumentEntity.id == SectionEmbeddingEntity.document_id)
                .order_by(SectionEmbeddingEntity.id.asc())
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to load section vectors: {e}") from e

        return [
            SectionCandidate(section=self._to_domain(row), document_title=title)
            for row, title in result.all()
        ]

    async def count(self) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(SectionEmbeddingEntity)
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to count sections: {e}") from e
        return int(result.scalar_one())

    async def count_for_document(self, document_id: int) -> int:
        try:
            result = await self.session.execute(
                select(func.count())
                .select_from(SectionEmbeddingEntity)
                .where(SectionEmbeddingEntity.document_id == document_id)
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(
                f"Failed to count sections for document {document_id}: {e}"
            ) from e
        return int(result.scalar_one())
