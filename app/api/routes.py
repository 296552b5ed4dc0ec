from __future__ import annotations

from typing import Any, Dict, Literal, Optional
import uuid

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from app.config import DEFAULT_MODEL, DEFAULT_THRESHOLD, MAX_BATCH_DOCUMENTS
from app.nlu.compare import compare
from app.nlu.errors import (
    AnalysisError, BatchTooLargeError, InvalidAnalysisType, MissingFieldError,
    TextTooLongError, UnknownModelError,
)
from app.nlu.extractor import ner
from app.nlu.qa import answer
from app.nlu.rules import MODEL_BONUS
from app.nlu.summarizer import summarize
from app.analytics.batch import run_batch
from app.analytics.export import batch_summary_rows, to_csv
from app.analytics.insights import completeness_score, generate_insights
from app.analytics.samples import EXAMPLE_TEXTS
from app.observability.metrics import (
    timer_start, timer_observe_ms, record_request, record_entities, record_error
)
from app.observability.logs import log_event

router = APIRouter(tags=["api"])

ANALYSIS_TYPES = ("ner", "summarization", "qa", "comparison")


class AnalyzeIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Any = None  # anything but the four names is an invalid type, not a bad body
    text: Optional[str] = None
    model: Optional[str] = None
    question: Optional[str] = None
    confidence_threshold: Optional[float] = Field(default=None, alias="confidenceThreshold")


class DocumentIn(BaseModel):
    name: Optional[str] = None
    text: str = ""


class BatchIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    documents: list[DocumentIn] = Field(default_factory=list)
    model: Optional[str] = None
    confidence_threshold: Optional[float] = Field(default=None, alias="confidenceThreshold")


class InsightsIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    model: Optional[str] = None
    confidence_threshold: Optional[float] = Field(default=None, alias="confidenceThreshold")


def _ok(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def _fail(e: AnalysisError) -> JSONResponse:
    status = 413 if isinstance(e, TextTooLongError) else 400
    return JSONResponse(status_code=status, content={"success": False, "error": str(e)})


def _known_type(value: Any) -> bool:
    return isinstance(value, str) and value in ANALYSIS_TYPES


def _resolve_model(name: Optional[str]) -> str:
    if not name:
        return DEFAULT_MODEL
    if name not in MODEL_BONUS:
        raise UnknownModelError(name)
    return name


def _threshold(value: Optional[float]) -> float:
    # out-of-range thresholds are passed through untouched
    return DEFAULT_THRESHOLD if value is None else value


def _require_text(text: Optional[str]) -> str:
    if text is None:
        raise MissingFieldError("text")
    return text


def _dispatch(payload: AnalyzeIn) -> Dict[str, Any]:
    """Route one request to the engine; returns the camelCase result dict."""
    if not _known_type(payload.type):
        raise InvalidAnalysisType(payload.type)
    text = _require_text(payload.text)

    if payload.type == "ner":
        res = ner(text, _resolve_model(payload.model), _threshold(payload.confidence_threshold))
        record_entities(e.type for e in res.entities)
    elif payload.type == "summarization":
        res = summarize(text, _resolve_model(payload.model))
    elif payload.type == "qa":
        if payload.question is None:
            raise MissingFieldError("question")
        res = answer(text, payload.question, _resolve_model(payload.model))
    else:
        res = compare(text)
    return res.model_dump(by_alias=True)


@router.post("/analyze")
def analyze(payload: AnalyzeIn):
    t0 = timer_start()
    request_id = str(uuid.uuid4())  # define before try so except can log it
    analysis_type = payload.type if _known_type(payload.type) else "invalid"

    try:
        # do not log raw clinical text
        log_event(
            "analysis_request",
            request_id=request_id,
            type=analysis_type,
            model=payload.model,
            text_chars=len(payload.text or ""),
        )

        data = _dispatch(payload)

        elapsed_ms = timer_observe_ms(t0)
        record_request(analysis_type, "ok")
        log_event(
            "analysis_response",
            request_id=request_id,
            type=analysis_type,
            elapsed_ms=round(elapsed_ms, 2),
            entity_count=data.get("entityCount"),
        )
        return _ok(data)

    except AnalysisError as e:
        timer_observe_ms(t0)
        record_request(analysis_type, "rejected")
        log_event(
            "analysis_rejected",
            request_id=request_id,
            type=analysis_type,
            error_type=type(e).__name__,
            error=str(e),
        )
        return _fail(e)

    except Exception as e:
        timer_observe_ms(t0)
        record_error(type(e).__name__)
        log_event(
            "analysis_error",
            request_id=request_id,
            type=analysis_type,
            error_type=type(e).__name__,
        )
        raise


@router.post("/batch")
def batch(payload: BatchIn, format: Literal["json", "csv"] = Query("json")):
    t0 = timer_start()
    request_id = str(uuid.uuid4())

    try:
        if len(payload.documents) > MAX_BATCH_DOCUMENTS:
            raise BatchTooLargeError(len(payload.documents), MAX_BATCH_DOCUMENTS)
        model = _resolve_model(payload.model)

        log_event("batch_request", request_id=request_id, documents=len(payload.documents), model=model)
        results = run_batch(
            [d.model_dump() for d in payload.documents],
            model,
            _threshold(payload.confidence_threshold),
        )
        succeeded = sum(1 for r in results if r["success"])

        elapsed_ms = timer_observe_ms(t0)
        record_request("batch", "ok")
        log_event(
            "batch_response",
            request_id=request_id,
            succeeded=succeeded,
            failed=len(results) - succeeded,
            elapsed_ms=round(elapsed_ms, 2),
        )

    except AnalysisError as e:
        timer_observe_ms(t0)
        record_request("batch", "rejected")
        log_event(
            "analysis_rejected",
            request_id=request_id,
            type="batch",
            error_type=type(e).__name__,
            error=str(e),
        )
        return _fail(e)

    except Exception as e:
        timer_observe_ms(t0)
        record_error(type(e).__name__)
        log_event("analysis_error", request_id=request_id, type="batch", error_type=type(e).__name__)
        raise

    if format == "csv":
        return Response(
            content=to_csv(batch_summary_rows(results)),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="batch-summary.csv"'},
        )
    return _ok({
        "total": len(results),
        "succeeded": succeeded,
        "failed": len(results) - succeeded,
        "results": results,
    })


@router.post("/insights")
def insights(payload: InsightsIn):
    t0 = timer_start()
    request_id = str(uuid.uuid4())

    try:
        log_event("analysis_request", request_id=request_id, type="insights", text_chars=len(payload.text or ""))
        text = _require_text(payload.text)
        res = ner(text, _resolve_model(payload.model), _threshold(payload.confidence_threshold))
        record_entities(e.type for e in res.entities)
        data = {
            "ner": res.model_dump(by_alias=True),
            "completeness": completeness_score(res.entities),
            "insights": generate_insights(res.entities),
        }

        elapsed_ms = timer_observe_ms(t0)
        record_request("insights", "ok")
        log_event(
            "analysis_response",
            request_id=request_id,
            type="insights",
            elapsed_ms=round(elapsed_ms, 2),
            entity_count=res.entity_count,
        )
        return _ok(data)

    except AnalysisError as e:
        timer_observe_ms(t0)
        record_request("insights", "rejected")
        log_event(
            "analysis_rejected",
            request_id=request_id,
            type="insights",
            error_type=type(e).__name__,
            error=str(e),
        )
        return _fail(e)

    except Exception as e:
        timer_observe_ms(t0)
        record_error(type(e).__name__)
        log_event("analysis_error", request_id=request_id, type="insights", error_type=type(e).__name__)
        raise


@router.get("/examples")
def examples():
    return _ok(EXAMPLE_TEXTS)


@router.get("/models")
def models():
    return _ok([{"model": name, "confidenceBonus": bonus} for name, bonus in MODEL_BONUS.items()])
