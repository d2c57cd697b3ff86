# core/interfaces.py
"""Core interfaces for the document search engine"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional

from core.domain import (
    Document, ReindexReport, Section, SectionCandidate, SectionSearchResult
)

# ============= Vectorizer Interface =============
class IVectorizer(ABC):
    """
    Strategy for turning text into a fixed-size vector.

    Implementations must be deterministic and must never raise on odd input
    (empty, punctuation-only, unicode). Swap for a learned model without
    touching indexing or ranking.
    """

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Length of every vector produced by embed()"""
        pass

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Embed a single text"""
        pass

# ============= Section Splitter Interface =============
class ISectionSplitter(ABC):
    """Splits a document body into ordered, non-empty sections."""

    @abstractmethod
    def split(self, content: str) -> List[str]:
        pass

# ============= Repository Interfaces =============
class IDocumentRepository(ABC):
    """
    Interface for document persistence.

    The engine only reads documents and writes their searchable text and
    index metadata; creation belongs to document management.
    Implementations: SQLDocumentRepository.
    """

    @abstractmethod
    async def create(self, title: str, content: str) -> Document:
        """Create a document record"""
        pass

    @abstractmethod
    async def get_by_id(self, document_id: int) -> Optional[Document]:
        """Get document by ID, None when absent"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Document]:
        """List all documents in id order"""
        pass

    @abstractmethod
    async def update_index_metadata(
        self, document_id: int, searchable_text: str, metadata: Dict[str, Any]
    ) -> bool:
        """Persist searchable text and merge `metadata` into the stored map."""
        raise NotImplementedError

class ISectionRepository(ABC):
    """Interface for section + vector rows"""

    @abstractmethod
    async def add(self, section: Section) -> Section:
        """Append one section row (committed immediately)"""
        pass

    @abstractmethod
    async def replace_for_document(self, document_id: int, sections: List[Section]) -> List[Section]:
        """Atomically swap every stored row of a document for `sections`."""
        pass

    @abstractmethod
    async def delete_by_document(self, document_id: int) -> int:
        """Delete all rows for a document, returning how many were removed"""
        pass

    @abstractmethod
    async def list_with_documents(self) -> List[SectionCandidate]:
        """All rows joined with their document title, in storage order"""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def count_for_document(self, document_id: int) -> int:
        pass

# ============= Service Layer Interfaces =============
class ISearchService(ABC):
    """High-level indexing and search operations"""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Vectorize text (pure, no I/O)"""
        pass

    @abstractmethod
    async def index_document(self, document_id: int) -> int:
        """(Re)embed a document's sections; returns the section count."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: Optional[int] = None) -> List[SectionSearchResult]:
        """Rank stored sections against the query"""
        pass

    @abstractmethod
    async def reindex_all(self) -> ReindexReport:
        """Index every known document, tolerating per-document failures"""
        pass

    @abstractmethod
    async def get_status(self) -> Dict[str, Any]:
        """Get system status"""
        pass
