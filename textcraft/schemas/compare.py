from typing import Literal

from pydantic import BaseModel

from textcraft.schemas.detect import DetectionOut


class CompareRequest(BaseModel):
    original: str
    rewritten: str


class CompareResponse(BaseModel):
    before: DetectionOut
    after: DetectionOut
    improvement_score: int
    humanization_score: int
    confidence: Literal["low", "medium", "high"]
    summary: str


class ComparisonOut(BaseModel):
    ai_probability_change: int
    sentence_variance_improved: bool
    uniformity_reduced: bool
    humanization_score: int
    verdict_change: str
    summary: str
