# infrastructure/embedding_services.py
"""Hashed bag-of-words embedding with L2 normalization for consistent similarity scoring"""
import logging
import re
import numpy as np
from typing import List

from core.interfaces import IVectorizer
from config import settings

logger = logging.getLogger(settings.LOGGER_NAME)

_NON_WORD_RE = re.compile(r"\W+", re.ASCII)

HASH_MULTIPLIER = 31
_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def token_hash(token: str) -> int:
    """
    Rolling polynomial hash (h = h*31 + code), wrapped to a signed 32-bit
    integer after every step. Tokens are ASCII, so code points equal char codes.
    """
    h = 0
    for ch in token:
        h = (h * HASH_MULTIPLIER + ord(ch)) & _INT32_MASK
    return h - (1 << 32) if h & _INT32_SIGN else h


def tokenize(text: str) -> List[str]:
    """Lower-case and split on runs of non-word characters, dropping empties."""
    return [t for t in _NON_WORD_RE.split(text.lower()) if t]


class HashingVectorizer(IVectorizer):
    """
    Feature-hashing vectorizer: every token increments one bucket, chosen by
    abs(token_hash) mod dimensions. Word order is ignored.

    Output is L2-normalized, so cosine similarity between two outputs is their
    dot product. Text without any word token maps to the all-zero vector,
    which is returned unnormalized.
    """

    def __init__(self, dimensions: int = settings.EMBEDDING_DIMENSIONS):
        if dimensions <= 0:
            raise ValueError("dimensions must be positive")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _l2_normalize(self, arr: np.ndarray) -> np.ndarray:
        """Scale to unit length; the zero vector is returned as-is."""
        norm = np.linalg.norm(arr)
        if norm == 0:
            return arr
        return arr / norm

    def embed(self, text: str) -> List[float]:
        counts = np.zeros(self._dimensions, dtype=np.float64)
        for token in tokenize(text or ""):
            counts[abs(token_hash(token)) % self._dimensions] += 1.0
        return self._l2_normalize(counts).tolist()
