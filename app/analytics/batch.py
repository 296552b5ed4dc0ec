from typing import Any, Dict, List, Optional, Sequence

from app.nlu.errors import AnalysisError
from app.nlu.extractor import RandomSource, ner
from app.observability.logs import log_event
from app.observability.metrics import record_batch_document


def run_batch(
    documents: Sequence[Dict[str, str]],
    model,
    threshold: float = 0.5,
    rng: Optional[RandomSource] = None,
) -> List[Dict[str, Any]]:
    """
    NER over each {name, text} document independently. A document that fails
    validation becomes a {success: false, error} item; the rest still run.
    """
    results: List[Dict[str, Any]] = []
    for i, doc in enumerate(documents):
        name = doc.get("name") or f"document-{i + 1}"
        try:
            res = ner(doc.get("text") or "", model, threshold, rng=rng)
        except AnalysisError as e:
            record_batch_document("failed")
            log_event("batch_document_failed", index=i, error=str(e))
            results.append({"filename": name, "success": False, "error": str(e)})
            continue
        record_batch_document("succeeded")
        results.append({
            "filename": name,
            "success": True,
            "entityCount": res.entity_count,
            "avgConfidence": res.avg_confidence,
            "entities": [e.model_dump(by_alias=True) for e in res.entities],
        })
    return results
