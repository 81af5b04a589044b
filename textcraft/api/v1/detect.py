from __future__ import annotations

import time

from fastapi import APIRouter, Depends, HTTPException, status

from textcraft.core.config import Settings, get_settings
from textcraft.core.errors import TextTooShortError
from textcraft.core.rate_limit import rate_limited
from textcraft.schemas.common import TextRequest
from textcraft.schemas.compare import CompareRequest, CompareResponse
from textcraft.schemas.detect import DetectResponse
from textcraft.schemas.insights import InsightsResponse
from textcraft.services.comparator import compare_texts
from textcraft.services.detector import detect_text
from textcraft.services.insights import insights_for_request

router = APIRouter(dependencies=[Depends(rate_limited("detect", "detect_rate_limit"))])


def _ensure_within_limit(settings: Settings, *texts: str) -> None:
    if any(len(text.strip()) > settings.humanizer_max_chars for text in texts):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Text too long (maximum {settings.humanizer_max_chars} characters)",
        )


@router.post("/detect", response_model=DetectResponse)
async def detect_content(body: TextRequest, settings: Settings = Depends(get_settings)):
    _ensure_within_limit(settings, body.text)
    start = time.perf_counter()
    try:
        result = detect_text(body.text, min_words=settings.detect_min_words)
    except TextTooShortError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    return DetectResponse(**result.to_dict(), latency_ms=round((time.perf_counter() - start) * 1000, 3))


@router.post("/insights", response_model=InsightsResponse)
async def sentence_insights(body: TextRequest, settings: Settings = Depends(get_settings)):
    if not body.text.strip():
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Text is required")
    _ensure_within_limit(settings, body.text)
    report = insights_for_request(body.text, settings.insights_min_words)
    return InsightsResponse(**report.to_dict())


@router.post("/compare", response_model=CompareResponse)
async def compare_content(body: CompareRequest, settings: Settings = Depends(get_settings)):
    _ensure_within_limit(settings, body.original, body.rewritten)
    try:
        result = compare_texts(body.original, body.rewritten, min_words=settings.detect_min_words)
    except TextTooShortError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return CompareResponse(**result.to_dict())
