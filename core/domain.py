# core/domain.py
"""Domain models, enums and errors shared across the application."""
from enum import Enum

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

# ============= Enums =============

class ErrorCode(str, Enum):
    """Error codes for user-facing error messages."""
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    INVALID_LIMIT = "INVALID_LIMIT"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    SEARCH_FAILED = "SEARCH_FAILED"


# ============= Errors =============

class SearchEngineError(Exception):
    """Base error carrying a specific error code"""

    error_code: ErrorCode = ErrorCode.SEARCH_FAILED

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        super().__init__(message)

    def __str__(self):
        # Format used for logging and reindex reports
        return f"[{self.error_code.value}] {self.message}"


class DocumentNotFoundError(SearchEngineError):
    """Raised when indexing targets a document id the store does not know."""
    error_code = ErrorCode.DOCUMENT_NOT_FOUND

    def __init__(self, document_id: int):
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found")


class InvalidLimitError(SearchEngineError, ValueError):
    error_code = ErrorCode.INVALID_LIMIT


class PersistenceError(SearchEngineError):
    """Raised when the store rejects a read or write."""
    error_code = ErrorCode.PERSISTENCE_FAILED


class SearchFailedError(SearchEngineError):
    error_code = ErrorCode.SEARCH_FAILED


# ============= Domain Models =============

@dataclass
class Document:
    """Domain model for documents"""
    id: int
    title: str
    content: str
    searchable_text: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

@dataclass
class Section:
    """A paragraph-level slice of a document together with its embedding"""
    document_id: int
    section: str  # Short display identifier, not unique
    section_text: str
    embedding: List[float]
    id: Optional[int] = None

@dataclass
class SectionCandidate:
    """Stored section joined with its owning document title (ranking input)"""
    section: Section
    document_title: str

@dataclass
class SectionSearchResult:
    """Domain model for search results"""
    document_id: int
    document_title: str
    section_text: str
    similarity: float

@dataclass
class ReindexReport:
    """Outcome of a full reindex run"""
    total: int = 0
    indexed: List[int] = field(default_factory=list)
    failed: Dict[int, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failed
