import math
import re
from typing import List

from .extractor import check_length
from .schema import SummaryResult

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
SUMMARY_FRACTION = 0.3
MIN_SENTENCES = 2


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def summarize(text: str, model=None) -> SummaryResult:
    """
    Extractive "summary": the leading 30% of sentences (at least two, never
    more than exist). `model` is accepted for API symmetry and ignored.
    """
    check_length(text)
    sentences = split_sentences(text)
    keep = min(max(MIN_SENTENCES, math.floor(len(sentences) * SUMMARY_FRACTION)), len(sentences))
    summary = ". ".join(sentences[:keep]) + "." if keep else ""

    original_words = len(text.split())
    summary_words = len(summary.split())
    ratio = (1 - summary_words / original_words) * 100 if original_words else 0.0

    return SummaryResult(
        summary=summary,
        original_length=len(text),
        summary_length=len(summary),
        original_words=original_words,
        summary_words=summary_words,
        compression_ratio=f"{ratio:.1f}%",
    )
