from typing import List, Optional

from .extractor import RandomSource, extract, summarize_entities
from .rules import MODEL_ORDER
from .schema import ComparisonResult, ModelRun, Recommendation

COMPARISON_THRESHOLD = 0.5


def _score(run: ModelRun) -> float:
    return run.entity_count * run.avg_confidence


def compare(text: str, rng: Optional[RandomSource] = None) -> ComparisonResult:
    runs: List[ModelRun] = [
        ModelRun(model=model, **summarize_entities(extract(text, model, COMPARISON_THRESHOLD, rng=rng)))
        for model in MODEL_ORDER
    ]

    best = runs[0]
    for run in runs[1:]:
        # strict: ties keep the earlier variant
        if _score(run) > _score(best):
            best = run

    return ComparisonResult(
        models=runs,
        recommendation=Recommendation(
            model=best.model,
            reason=(
                f"Highest performance with {best.entity_count} entities extracted "
                f"at {best.avg_confidence * 100:.1f}% average confidence"
            ),
        ),
    )
