"""
Clinical NLP Analysis API.

Run locally:
  uvicorn app.main:app --reload
  python -m app.main
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.api.routes import router as api_router
from app.config import CORS_ORIGINS, HOST, PORT
from app.observability.logs import log_event
from app.observability.metrics import record_error

app = FastAPI(
    title="Clinical NLP Analysis",
    version="0.1.0",
    description="Pattern-based entity extraction, summarization and QA over clinical text.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    # keep the {success, error} envelope instead of FastAPI's 422 detail list
    record_error("RequestValidationError")
    log_event("analysis_rejected", path=request.url.path, error="invalid_request_body")
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    data = generate_latest()  # default registry
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=HOST, port=PORT)
