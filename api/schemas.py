from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from core.domain import ErrorCode

class EmbedRequest(BaseModel):
    text: str

class EmbedResponse(BaseModel):
    dimensions: int
    vector: List[float]

class CreateDocumentRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str
    index: bool = True

class DocumentItem(BaseModel):
    id: int
    title: str
    content_snippet: str
    metadata: Dict[str, Any] = {}

class DocumentsListResponse(BaseModel):
    documents: List[DocumentItem]

class IndexResponse(BaseModel):
    status: str
    document_id: int
    section_count: int

class SearchRequest(BaseModel):
    query: str
    limit: Optional[int] = Field(default=None, ge=1, strict=True)

class SearchResultItem(BaseModel):
    document_id: int
    document_title: str
    section_text: str
    similarity: float

class SearchResponse(BaseModel):
    status: str
    query: str
    results: List[SearchResultItem]
    total_results: int

class ReindexResponse(BaseModel):
    status: str
    total: int
    indexed: List[int]
    failed: Dict[int, str]

class StatusResponse(BaseModel):
    documents: int = 0
    sections: int = 0
    ready_for_queries: bool = False

class ErrorResponse(BaseModel):
    status: str = "error"
    error_code: ErrorCode
    detail: str
