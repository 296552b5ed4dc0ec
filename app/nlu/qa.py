import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from .extractor import check_length
from .rules import STAGE_RE
from .schema import QAResult

NO_ANSWER = "Unable to find answer in the provided text."
CONTEXT_BEFORE = 50
CONTEXT_AFTER = 100
FALLBACK_CONTEXT = 150


@dataclass(frozen=True)
class AnswerRoute:
    keywords: Tuple[str, ...]   # substrings of the lowercased question
    pattern: Pattern[str]
    confidence: float


# Every route is tried; a later hit replaces an earlier one.
ROUTES: Tuple[AnswerRoute, ...] = (
    AnswerRoute(("size", "large"), re.compile(r"\d+\.?\d*\s*(cm|mm)", re.I), 0.92),
    AnswerRoute(("receptor", "er", "her2"), re.compile(r"(ER|PR|HER2)[\s-](positive|negative|\+|-)", re.I), 0.89),
    AnswerRoute(("stage",), re.compile(STAGE_RE, re.I), 0.87),
    AnswerRoute(
        ("treatment", "therapy"),
        re.compile(r"(chemotherapy|radiation therapy|mastectomy|lumpectomy)", re.I),
        0.85,
    ),
)


def _context(text: str, start: int) -> str:
    return text[max(0, start - CONTEXT_BEFORE):min(len(text), start + CONTEXT_AFTER)].strip()


def answer(text: str, question: str, model: Optional[str] = None) -> QAResult:
    check_length(text)
    q = question.lower()

    found = NO_ANSWER
    confidence = 0.0
    context = ""
    for route in ROUTES:
        if not any(k in q for k in route.keywords):
            continue
        m = route.pattern.search(text)
        if m:
            found = m.group(0)
            confidence = route.confidence
            context = _context(text, m.start())

    return QAResult(
        question=question,
        answer=found,
        confidence=round(confidence, 4),
        context=context or text[:FALLBACK_CONTEXT] + "...",
        model=model,
    )
