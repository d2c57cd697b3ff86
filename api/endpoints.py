# api/endpoints.py
"""
API endpoints for the document section search engine.

Engine errors (missing document, invalid limit, store failures) are raised
by the service and turned into JSON error bodies by api.errors, so a failed
search never looks like an empty result list.
"""
from typing import List

from fastapi import APIRouter, Depends

from config import settings
from core.interfaces import IDocumentRepository, ISearchService
from services.factory import get_document_repository, get_search_service
from api.schemas import (
    CreateDocumentRequest,
    DocumentItem,
    DocumentsListResponse,
    EmbedRequest,
    EmbedResponse,
    IndexResponse,
    ReindexResponse,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    StatusResponse,
)
from core.domain import Document
from utils.common import make_snippet

router = APIRouter()


def _to_item(document: Document) -> DocumentItem:
    return DocumentItem(
        id=document.id,
        title=document.title,
        content_snippet=make_snippet(document.content, settings.SNIPPET_LENGTH),
        metadata=document.metadata,
    )


# ---------- Embedding ----------
@router.post("/embed", response_model=EmbedResponse)
async def embed_text(
    body: EmbedRequest,
    search_service: ISearchService = Depends(get_search_service),
) -> EmbedResponse:
    vector = search_service.embed(body.text)
    return EmbedResponse(dimensions=len(vector), vector=vector)


# ---------- Documents ----------
@router.post("/documents", response_model=DocumentItem, status_code=201)
async def create_document(
    body: CreateDocumentRequest,
    document_repo: IDocumentRepository = Depends(get_document_repository),
    search_service: ISearchService = Depends(get_search_service),
) -> DocumentItem:
    document = await document_repo.create(body.title, body.content)
    if body.index:
        await search_service.index_document(document.id)
        document = await document_repo.get_by_id(document.id) or document
    return _to_item(document)


@router.get("/documents", response_model=DocumentsListResponse)
async def list_documents(
    document_repo: IDocumentRepository = Depends(get_document_repository),
) -> DocumentsListResponse:
    documents = await document_repo.list_all()
    return DocumentsListResponse(documents=[_to_item(d) for d in documents])


@router.post("/documents/{document_id}/index", response_model=IndexResponse)
async def index_document(
    document_id: int,
    search_service: ISearchService = Depends(get_search_service),
) -> IndexResponse:
    section_count = await search_service.index_document(document_id)
    return IndexResponse(status="success", document_id=document_id, section_count=section_count)


# ---------- Search ----------
@router.post("/search", response_model=SearchResponse)
async def search_endpoint(
    body: SearchRequest,
    search_service: ISearchService = Depends(get_search_service),
) -> SearchResponse:
    limit = body.limit
    if limit is not None:
        limit = min(limit, settings.MAX_SEARCH_RESULTS)

    results = await search_service.search(body.query, limit)

    items: List[SearchResultItem] = [
        SearchResultItem(
            document_id=r.document_id,
            document_title=r.document_title,
            section_text=r.section_text,
            similarity=r.similarity,
        )
        for r in results
    ]
    return SearchResponse(
        status="success",
        query=body.query,
        results=items,
        total_results=len(items),
    )


# ---------- Maintenance ----------
@router.post("/reindex", response_model=ReindexResponse)
async def reindex_all(
    search_service: ISearchService = Depends(get_search_service),
) -> ReindexResponse:
    report = await search_service.reindex_all()
    return ReindexResponse(
        status="success" if report.succeeded else "partial",
        total=report.total,
        indexed=report.indexed,
        failed=report.failed,
    )


@router.get("/status", response_model=StatusResponse)
async def get_status(
    search_service: ISearchService = Depends(get_search_service),
) -> StatusResponse:
    status = await search_service.get_status()
    return StatusResponse(**status)
