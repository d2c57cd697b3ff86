# infrastructure/ranker.py

"""Cosine-similarity ranking of stored section vectors."""
import logging
from typing import List, Sequence

import numpy as np

from core.domain import SectionCandidate, SectionSearchResult
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)


class SimilarityRanker:
    """
    Exhaustive (brute-force) ranker over unit-normalized vectors.

    Both query and stored vectors are unit length or all-zero, so the dot
    product is the cosine similarity, and anything against a zero vector
    scores 0. Sorting is stable: equal scores keep candidate order.
    """

    def __init__(self, dimensions: int = settings.EMBEDDING_DIMENSIONS):
        self.dimensions = dimensions

    def _matrix(self, candidates: Sequence[SectionCandidate]) -> np.ndarray:
        """Stack candidate vectors; rows of the wrong width become zero rows."""
        matrix = np.zeros((len(candidates), self.dimensions), dtype=np.float64)
        stale = 0
        for i, c in enumerate(candidates):
            vec = c.section.embedding
            if len(vec) != self.dimensions:
                stale += 1
                continue
            matrix[i] = vec
        if stale:
            logger.warning(
                f"[RANK] {stale} stored vectors do not have {self.dimensions} components; "
                f"scored as 0. Run a full reindex."
            )
        return matrix

    def scores(self, query_vector: Sequence[float],
               candidates: Sequence[SectionCandidate]) -> np.ndarray:
        if not candidates:
            return np.zeros(0, dtype=np.float64)
        q = np.asarray(query_vector, dtype=np.float64)
        if q.shape != (self.dimensions,):
            raise ValueError(
                f"Query vector has shape {q.shape}, expected ({self.dimensions},)"
            )
        # Float error can push a self-match a hair past 1.0
        return np.clip(self._matrix(candidates) @ q, -1.0, 1.0)

    def rank(
        self,
        query_vector: Sequence[float],
        candidates: Sequence[SectionCandidate],
        limit: int,
    ) -> List[SectionSearchResult]:
        """Return the `limit` best candidates, highest similarity first."""
        if not candidates or limit <= 0:
            return []

        scores = self.scores(query_vector, candidates)
        order = np.argsort(-scores, kind="stable")[:limit]

        return [
            SectionSearchResult(
                document_id=candidates[i].section.document_id,
                document_title=candidates[i].document_title,
                section_text=candidates[i].section.section_text,
                similarity=float(scores[i]),
            )
            for i in order
        ]
