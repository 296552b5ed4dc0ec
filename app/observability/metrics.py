from time import perf_counter
from typing import Iterable, Optional

from prometheus_client import Counter, Histogram

# ---- METRICS (names are Prometheus-safe; units are in names) ----

ANALYSIS_REQUESTS = Counter(
    "analysis_requests_total",
    "Total /api/analyze requests by analysis type and outcome",
    labelnames=("type", "outcome"),
)

ENTITIES_EXTRACTED = Counter(
    "entities_extracted_total",
    "Entities returned to callers, by clinical category",
    labelnames=("category",),
)

REQUEST_LATENCY_MS = Histogram(
    "request_latency_ms",
    "End-to-end latency of analysis requests in milliseconds",
    # regex work is fast; most requests land well under 100ms
    buckets=(1, 2, 5, 10, 25, 50, 100, 250, 500, 1000)
)

ERRORS_TOTAL = Counter(
    "errors_total",
    "Count of errors by type",
    labelnames=("type",),
)

BATCH_DOCUMENTS = Counter(
    "batch_documents_total",
    "Documents processed through /api/batch",
    labelnames=("outcome",),
)

# ---- HELPERS ----

def timer_start() -> float:
    return perf_counter()

def timer_observe_ms(start: float) -> float:
    elapsed_ms = (perf_counter() - start) * 1000.0
    REQUEST_LATENCY_MS.observe(elapsed_ms)
    return elapsed_ms

def record_request(analysis_type: Optional[str], outcome: str) -> None:
    ANALYSIS_REQUESTS.labels(type=analysis_type or "unknown", outcome=outcome).inc()

def record_entities(categories: Iterable[str]) -> None:
    for c in categories:
        ENTITIES_EXTRACTED.labels(category=c).inc()

def record_error(err_type: str) -> None:
    ERRORS_TOTAL.labels(type=err_type).inc()

def record_batch_document(outcome: str) -> None:
    BATCH_DOCUMENTS.labels(outcome=outcome).inc()
