# infrastructure/document_processors.py
"""Paragraph-level section splitting for document bodies"""
import re
from typing import List

from core.interfaces import ISectionSplitter

# A blank line: a newline, optional horizontal/vertical whitespace, another newline
_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def _normalize_newlines(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")


def split_sections(content: str) -> List[str]:
    """Split on blank-line boundaries, trim each piece, drop empty pieces."""
    if not content:
        return []
    parts = _BLANK_LINE_RE.split(_normalize_newlines(content))
    return [p.strip() for p in parts if p.strip()]


class ParagraphSectionSplitter(ISectionSplitter):
    """Default splitter: one section per blank-line separated paragraph."""

    def split(self, content: str) -> List[str]:
        return split_sections(content)
