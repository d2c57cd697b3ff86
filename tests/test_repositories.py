"""
Test suite for SQL repositories against an in-memory SQLite database.

System role: Verification of document and section persistence
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from core.domain import PersistenceError, Section
from infrastructure.repositories import SQLDocumentRepository, SQLSectionRepository


def _section(document_id: int, text: str) -> Section:
    return Section(document_id=document_id, section=text[:10], section_text=text,
                   embedding=[0.0] * 99 + [1.0])


class TestSQLDocumentRepository:
    @pytest.mark.asyncio
    async def test_create_and_get_by_id(self, document_repo: SQLDocumentRepository) -> None:
        created = await document_repo.create("Pool manual", "Body text")
        loaded = await document_repo.get_by_id(created.id)

        assert loaded is not None
        assert loaded.title == "Pool manual"
        assert loaded.content == "Body text"
        assert loaded.searchable_text is None
        assert loaded.metadata == {}

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, document_repo: SQLDocumentRepository) -> None:
        assert await document_repo.get_by_id(999) is None

    @pytest.mark.asyncio
    async def test_list_all_in_id_order(self, document_repo: SQLDocumentRepository) -> None:
        first = await document_repo.create("one", "1")
        second = await document_repo.create("two", "2")
        assert [d.id for d in await document_repo.list_all()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_update_index_metadata_merges_keys(self, document_repo: SQLDocumentRepository) -> None:
        doc = await document_repo.create("t", "content")
        await document_repo.update_index_metadata(doc.id, "content", {"owner": "ops"})
        await document_repo.update_index_metadata(doc.id, "content", {"section_count": 3})

        loaded = await document_repo.get_by_id(doc.id)
        assert loaded.searchable_text == "content"
        assert loaded.metadata == {"owner": "ops", "section_count": 3}

    @pytest.mark.asyncio
    async def test_update_index_metadata_missing_document(self, document_repo: SQLDocumentRepository) -> None:
        assert await document_repo.update_index_metadata(42, "", {}) is False

    @pytest.mark.asyncio
    async def test_read_failure_is_wrapped(self, document_repo: SQLDocumentRepository) -> None:
        document_repo.session.get = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("db down"))
        )
        with pytest.raises(PersistenceError):
            await document_repo.get_by_id(1)

    @pytest.mark.asyncio
    async def test_read_failure_rolls_back_session(self, document_repo: SQLDocumentRepository) -> None:
        document_repo.session.get = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("db down"))
        )
        document_repo.session.rollback = AsyncMock()

        with pytest.raises(PersistenceError):
            await document_repo.get_by_id(1)

        document_repo.session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_failure_rolls_back_session(self, document_repo: SQLDocumentRepository) -> None:
        document_repo.session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("db down"))
        )
        document_repo.session.rollback = AsyncMock()

        with pytest.raises(PersistenceError):
            await document_repo.list_all()

        document_repo.session.rollback.assert_awaited_once()


class TestSQLSectionRepository:
    @pytest.mark.asyncio
    async def test_add_appends_rows(self, document_repo, section_repo: SQLSectionRepository) -> None:
        doc = await document_repo.create("t", "c")
        stored = await section_repo.add(_section(doc.id, "alpha"))
        await section_repo.add(_section(doc.id, "alpha"))

        assert stored.id is not None
        assert await section_repo.count_for_document(doc.id) == 2

    @pytest.mark.asyncio
    async def test_replace_for_document_swaps_rows(self, document_repo, section_repo: SQLSectionRepository) -> None:
        doc = await document_repo.create("t", "c")
        other = await document_repo.create("o", "c")
        await section_repo.add(_section(doc.id, "old"))
        await section_repo.add(_section(other.id, "untouched"))

        await section_repo.replace_for_document(doc.id, [_section(doc.id, "new 1"), _section(doc.id, "new 2")])

        texts = [c.section.section_text for c in await section_repo.list_with_documents()]
        assert texts == ["untouched", "new 1", "new 2"]

    @pytest.mark.asyncio
    async def test_delete_by_document(self, document_repo, section_repo: SQLSectionRepository) -> None:
        doc = await document_repo.create("t", "c")
        await section_repo.add(_section(doc.id, "a"))
        await section_repo.add(_section(doc.id, "b"))

        assert await section_repo.delete_by_document(doc.id) == 2
        assert await section_repo.count() == 0

    @pytest.mark.asyncio
    async def test_list_with_documents_joins_title_and_keeps_vector(self, document_repo, section_repo) -> None:
        doc = await document_repo.create("Handbook", "c")
        await section_repo.add(_section(doc.id, "entry"))

        [candidate] = await section_repo.list_with_documents()
        assert candidate.document_title == "Handbook"
        assert candidate.section.document_id == doc.id
        assert candidate.section.embedding == [0.0] * 99 + [1.0]

    @pytest.mark.asyncio
    async def test_write_failure_is_wrapped(self, document_repo, section_repo: SQLSectionRepository) -> None:
        doc = await document_repo.create("t", "c")
        section_repo.session.commit = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        with pytest.raises(PersistenceError):
            await section_repo.add(_section(doc.id, "x"))
