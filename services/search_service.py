# services/search_service.py
import logging
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional

from config import settings
from core.interfaces import (
    ISearchService, IVectorizer, ISectionSplitter, IDocumentRepository, ISectionRepository
)
from core.domain import (
    DocumentNotFoundError, InvalidLimitError, PersistenceError, ReindexReport,
    SearchEngineError, SearchFailedError, Section, SectionSearchResult
)
from infrastructure.key_locks import KeyedLock
from infrastructure.ranker import SimilarityRanker

logger = logging.getLogger(settings.LOGGER_NAME)


def validate_limit(limit: Optional[int]) -> int:
    """Resolve the result limit: None means the default, anything else must be a positive int."""
    if limit is None:
        return settings.DEFAULT_SEARCH_RESULTS
    # bool is an int subclass but never a meaningful limit
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidLimitError(f"limit must be a positive integer, got {limit!r}")
    if limit <= 0:
        raise InvalidLimitError(f"limit must be a positive integer, got {limit}")
    return limit


class SearchService(ISearchService):
    """
    Section indexing and similarity search over one store session.

    A service instance shares a single database session between its
    repositories, so it must not be used from concurrent tasks. Writers to
    the same document across instances are serialized through `locks`,
    which is created once per process and passed in.
    """

    def __init__(
        self,
        vectorizer: IVectorizer,
        splitter: ISectionSplitter,
        document_repo: IDocumentRepository,
        section_repo: ISectionRepository,
        locks: KeyedLock,
        ranker: Optional[SimilarityRanker] = None,
        replace_existing: bool = settings.REPLACE_SECTIONS_ON_INDEX,
        section_id_length: int = settings.SECTION_ID_LENGTH,
    ):
        self.vectorizer = vectorizer
        self.splitter = splitter
        self.document_repo = document_repo
        self.section_repo = section_repo
        self.locks = locks
        self.ranker = ranker or SimilarityRanker(vectorizer.dimensions)
        self.replace_existing = replace_existing
        self.section_id_length = section_id_length

    def embed(self, text: str) -> List[float]:
        return self.vectorizer.embed(text)

    # ---------- Indexing ----------

    async def index_document(self, document_id: int) -> int:
        async with self.locks.acquire(document_id):
            return await self._index_document_locked(document_id)

    async def _index_document_locked(self, document_id: int) -> int:
        document = await self.document_repo.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        texts = self.splitter.split(document.content)
        logger.info(f"[INDEX] Document {document_id}: embedding {len(texts)} sections")

        sections = [
            Section(
                document_id=document_id,
                section=text[: self.section_id_length],
                section_text=text,
                embedding=self.vectorizer.embed(text),
            )
            for text in texts
        ]

        if self.replace_existing:
            await self.section_repo.replace_for_document(document_id, sections)
        else:
            # A failure here leaves the rows already written in place
            for section in sections:
                await self.section_repo.add(section)

        updated = await self.document_repo.update_index_metadata(
            document_id,
            searchable_text=document.content,
            metadata={
                "indexed_at": datetime.now(timezone.utc).isoformat(),
                "section_count": len(texts),
            },
        )
        if not updated:
            # Deleted between load and metadata write; drop the rows just stored
            await self.section_repo.delete_by_document(document_id)
            raise DocumentNotFoundError(document_id)
        logger.info(f"[INDEX] Document {document_id}: indexed {len(sections)} sections")
        return len(sections)

    async def reindex_all(self) -> ReindexReport:
        documents = await self.document_repo.list_all()
        report = ReindexReport(total=len(documents))
        logger.info(f"[REINDEX] Starting full reindex of {len(documents)} documents")

        for document in documents:
            try:
                await self.index_document(document.id)
                report.indexed.append(document.id)
            except SearchEngineError as e:
                logger.error(f"[REINDEX] Document {document.id} failed: {e}")
                report.failed[document.id] = str(e)

        if report.failed:
            logger.warning(
                f"[REINDEX] Finished with {len(report.failed)} failures: "
                f"{sorted(report.failed)}"
            )
        else:
            logger.info(f"[REINDEX] Finished: {len(report.indexed)} documents indexed")
        return report

    # ---------- Search ----------

    async def search(self, query: str, limit: Optional[int] = None) -> List[SectionSearchResult]:
        limit = validate_limit(limit)
        query_vector = self.vectorizer.embed(query)

        try:
            candidates = await self.section_repo.list_with_documents()
            results = self.ranker.rank(query_vector, candidates, limit)
        except (PersistenceError, ValueError) as e:
            logger.error(f"Search failed: {e}")
            raise SearchFailedError(f"Search failed: {e}") from e

        logger.debug(
            f"[SEARCH] query_len={len(query)} candidates={len(candidates)} hits={len(results)}"
        )
        return results

    async def get_status(self) -> Dict[str, Any]:
        documents = await self.document_repo.list_all()
        section_count = await self.section_repo.count()
        return {
            "documents": len(documents),
            "sections": section_count,
            "ready_for_queries": section_count > 0,
        }
