# reindex.py
"""Rebuild every section embedding, e.g. after changing the vectorizer.

Usage: python reindex.py
"""
import asyncio
import logging
import sys

from config import settings
from core.domain import ReindexReport
from database.session import async_engine, get_session, init_db
from infrastructure.key_locks import KeyedLock
from services.factory import build_search_service
from services.logger_config import setup_logging

logger = logging.getLogger(settings.LOGGER_NAME)


async def run_reindex() -> ReindexReport:
    await init_db()
    try:
        async with get_session() as session:
            service = build_search_service(session, KeyedLock())
            return await service.reindex_all()
    finally:
        await async_engine.dispose()


def main() -> int:
    setup_logging()
    report = asyncio.run(run_reindex())
    print(f"Reindexed {len(report.indexed)}/{report.total} documents")
    for document_id, error in sorted(report.failed.items()):
        print(f"  failed {document_id}: {error}")
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
