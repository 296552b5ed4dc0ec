from typing import Any, Dict, List, Sequence

from app.nlu.schema import Category, EntityMatch

REQUIRED_TYPES = (
    Category.TUMOR_SIZE.value,
    Category.TUMOR_TYPE.value,
    Category.RECEPTOR_STATUS.value,
    Category.STAGE.value,
)


def completeness_score(entities: Sequence[EntityMatch]) -> Dict[str, Any]:
    """How many of the core pathology fields the extraction covered."""
    present = {e.type for e in entities}
    matched = [t for t in REQUIRED_TYPES if t in present]
    return {
        "score": len(matched) / len(REQUIRED_TYPES) * 100,
        "matched": len(matched),
        "total": len(REQUIRED_TYPES),
        "missing": [t for t in REQUIRED_TYPES if t not in present],
    }


def generate_insights(entities: Sequence[EntityMatch]) -> List[str]:
    types = {e.type for e in entities}
    avg = sum(e.confidence for e in entities) / len(entities) if entities else 0.0
    out: List[str] = []

    if Category.TUMOR_SIZE.value in types and Category.TUMOR_TYPE.value in types:
        out.append("Complete tumor characterization detected")

    if Category.RECEPTOR_STATUS.value in types:
        receptors = sum(1 for e in entities if e.type == Category.RECEPTOR_STATUS.value)
        if receptors >= 3:
            out.append("Comprehensive receptor panel identified")
        else:
            out.append("Partial receptor status information")

    if Category.STAGE.value in types or Category.TNM_STAGE.value in types:
        out.append("Cancer staging information present")
    else:
        out.append("No staging information detected")

    if Category.TREATMENT.value in types or Category.MEDICATION.value in types:
        out.append("Treatment plan documented")

    if avg > 0.85:
        out.append("High confidence extraction (>85%)")
    elif avg > 0.70:
        out.append("Moderate confidence extraction (70-85%)")
    else:
        out.append("Low confidence extraction (<70%)")

    return out
