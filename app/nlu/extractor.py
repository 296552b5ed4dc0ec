import random
from typing import Callable, List, Optional, Sequence

from app.config import MAX_TEXT_CHARS
from .errors import TextTooLongError
from .rules import RULES, ExtractionRule, model_bonus
from .schema import EntityMatch, NERResult

RandomSource = Callable[[], float]

BASE_CONFIDENCE = 0.75
JITTER = 0.20
MAX_CONFIDENCE = 0.99


def check_length(text: str, limit: int = MAX_TEXT_CHARS) -> None:
    # regexes run over the whole input; cap it before scanning
    if len(text) > limit:
        raise TextTooLongError(len(text), limit)


def draw_confidence(rng: RandomSource, bonus: float) -> float:
    confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + rng() * JITTER + bonus)
    return round(confidence, 4)


def extract(
    text: str,
    model,
    threshold: float = 0.5,
    rng: Optional[RandomSource] = None,
    rules: Sequence[ExtractionRule] = RULES,
) -> List[EntityMatch]:
    """
    Scan `text` with every rule, in table order, and keep matches whose
    simulated confidence reaches `threshold`.

    Entities come out grouped by rule, then left to right; nothing is
    deduplicated. `rng` returns floats in [0, 1) and defaults to random.random,
    so repeated calls on the same text can differ near the threshold.
    """
    if not text:
        return []
    check_length(text)
    rng = rng or random.random
    bonus = model_bonus(model)

    ents: List[EntityMatch] = []
    for rule in rules:
        for m in rule.pattern.finditer(text):
            confidence = draw_confidence(rng, bonus)
            if confidence >= threshold:
                ents.append(EntityMatch(
                    text=m.group(0),
                    type=rule.type,
                    confidence=confidence,
                    start=m.start(),
                    end=m.end(),
                ))
    return ents


def summarize_entities(ents: List[EntityMatch]) -> dict:
    """Count, mean confidence and distinct types (first-seen order)."""
    avg = sum(e.confidence for e in ents) / len(ents) if ents else 0.0
    types = list(dict.fromkeys(e.type for e in ents))
    return {
        "entities": ents,
        "entity_count": len(ents),
        "avg_confidence": round(avg, 4),
        "entity_types": types,
    }


def ner(
    text: str,
    model,
    threshold: float = 0.5,
    rng: Optional[RandomSource] = None,
) -> NERResult:
    return NERResult(**summarize_entities(extract(text, model, threshold, rng=rng)))
