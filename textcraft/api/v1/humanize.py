from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import ORJSONResponse

from textcraft.api.deps import get_humanizer, get_sentence_rewriter
from textcraft.core.rate_limit import rate_limited
from textcraft.schemas.humanize import (
    AttemptOut,
    HumanizeRequest,
    HumanizeResponse,
    SentenceRewriteRequest,
    SentenceRewriteResponse,
)
from textcraft.services.humanizer import STATUS_ERROR, Humanizer, OrchestrationResult
from textcraft.services.sentence_rewriter import SentenceRewriter

router = APIRouter(dependencies=[Depends(rate_limited("humanize", "humanize_rate_limit"))])


def _to_response(result: OrchestrationResult) -> HumanizeResponse:
    payload = result.to_dict()
    payload["attempts"] = [
        AttemptOut(
            attempt_number=attempt.attempt_number,
            temperature=attempt.temperature,
            ai_probability=attempt.candidate_detection.ai_probability,
            valid=attempt.valid,
            reason=attempt.reason,
        )
        for attempt in result.attempts
    ]
    return HumanizeResponse(humanize_id=uuid.uuid4().hex, **payload)


@router.post("/humanize", response_model=HumanizeResponse)
async def humanize_content(body: HumanizeRequest, humanizer: Humanizer = Depends(get_humanizer)):
    result = await humanizer.run(body.text, body.mode)
    response = _to_response(result)
    if result.status == STATUS_ERROR:
        return ORJSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=response.model_dump(mode="json"))
    return response


@router.post("/rewrite-sentence", response_model=SentenceRewriteResponse)
async def rewrite_sentence(
    body: SentenceRewriteRequest,
    rewriter: SentenceRewriter = Depends(get_sentence_rewriter),
):
    rewritten = await rewriter.rewrite(body.sentence, body.hint, body.mode)
    if rewritten is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Sentence rewrite failed")
    return SentenceRewriteResponse(original=body.sentence.strip(), rewritten=rewritten)
