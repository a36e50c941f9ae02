"""PDF text extraction.

Only the first page of a report is read. Text comes back one span at a time,
in content order, so a lab row laid out in columns (name, value, unit) gives
one fragment per column.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import fitz  # PyMuPDF


class ExtractionError(Exception):
    """The uploaded file could not be read as a PDF."""


@dataclass(frozen=True)
class ExtractedFragment:
    text: str
    page_index: int
    x: float = 0.0
    y: float = 0.0


def _page_spans(page) -> Iterable[dict]:
    for block in page.get_text("dict").get("blocks", []):
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                yield span


def extract_fragments(path: str, page_index: int = 0) -> List[ExtractedFragment]:
    fragments: List[ExtractedFragment] = []
    try:
        with fitz.open(path, filetype="pdf") as doc:
            if doc.needs_pass:
                raise ExtractionError("PDF is encrypted")
            if doc.page_count <= page_index:
                raise ExtractionError(f"PDF has no page {page_index}")
            for span in _page_spans(doc[page_index]):
                text = span.get("text") or ""
                if not text:
                    continue
                x, y = span.get("origin") or (0.0, 0.0)
                fragments.append(ExtractedFragment(text=text, page_index=page_index, x=float(x), y=float(y)))
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"{type(e).__name__}: {e}") from e
    return fragments


def assemble_keywords(fragments: Iterable[ExtractedFragment]) -> str:
    words: List[str] = []
    for fragment in fragments:
        word = fragment.text.strip()
        if word:
            words.append(word)
    return ", ".join(words)
