"""FastAPI service exposing the SEO health check and its collaborators."""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from seohealth import AnalysisPipeline, AuditRequest, InvalidURLError, load_settings
from seohealth.agents.fetcher import FALLBACK_NOTE
from seohealth.utils.urls import validate_url

app = FastAPI(title="SEO Health Check")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


class UrlPayload(BaseModel):
    """Body accepted by the collaborator endpoints: an absolute http(s) URL."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def _validate(cls, value: Any) -> str:
        if not value or not str(value).strip():
            raise ValueError("URL is required")
        return validate_url(str(value))


@lru_cache(maxsize=1)
def get_pipeline() -> AnalysisPipeline:
    """Shared pipeline built from file and environment settings."""

    return AnalysisPipeline(load_settings())


@app.exception_handler(RequestValidationError)
async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [str(error.get("msg", "")).removeprefix("Value error, ") for error in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid request"})


@app.exception_handler(InvalidURLError)
async def _invalid_url(request: Request, exc: InvalidURLError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.post("/api/analyze")
def analyze(payload: AuditRequest, pipeline: AnalysisPipeline = Depends(get_pipeline)) -> Dict[str, Any]:
    """Run the full analysis and return score, issues and stats."""

    return pipeline.analyze_request(payload).to_dict()


@app.post("/api/fetch-content")
def fetch_content(payload: UrlPayload, pipeline: AnalysisPipeline = Depends(get_pipeline)) -> Dict[str, Any]:
    page = pipeline.fetcher.run(payload.url)
    body: Dict[str, Any] = {"html": page.html, "status": page.status_code}
    if page.fallback:
        body["_note"] = page.note or FALLBACK_NOTE
    return body


@app.post("/api/check-link")
async def check_link(payload: UrlPayload, pipeline: AnalysisPipeline = Depends(get_pipeline)) -> Dict[str, Any]:
    (outcome,) = await pipeline.link_checker.arun([payload.url])
    body: Dict[str, Any] = {"ok": outcome.ok, "status": outcome.status, "statusText": outcome.status_text}
    if outcome.error:
        body["error"] = outcome.error
    return body


@app.post("/api/pagespeed")
async def pagespeed(payload: UrlPayload, pipeline: AnalysisPipeline = Depends(get_pipeline)) -> Dict[str, Any]:
    """Proxy PageSpeed Insights; failures yield the unavailable sentinel, not an error."""

    return await pipeline.performance.fetch_payload(payload.url)


@app.get("/api/health")
async def health() -> Dict[str, str]:
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
