from typing import Literal

from pydantic import BaseModel, Field

from textcraft.schemas.compare import ComparisonOut
from textcraft.schemas.detect import DetectionOut
from textcraft.schemas.insights import InsightsResponse


class HumanizeRequest(BaseModel):
    text: str
    mode: str = Field(default="human", max_length=32)


class AttemptOut(BaseModel):
    attempt_number: int
    temperature: float
    ai_probability: int
    valid: bool
    reason: str | None = None


class InsightScore(BaseModel):
    before_score: int
    after_score: int
    improvement: int


class HumanizeResponse(BaseModel):
    humanize_id: str
    status: Literal["success", "partial", "error"]
    mode: str
    input: str
    output: str
    retries_used: int
    forced_rewrite: bool
    fallback: Literal["forced", "rule_based"] | None = None
    validated: bool
    detection_before: DetectionOut | None = None
    detection_after: DetectionOut | None = None
    insights_before: InsightsResponse | None = None
    insights_after: InsightsResponse | None = None
    comparison: ComparisonOut | None = None
    insight_score: InsightScore | None = None
    attempts: list[AttemptOut] = Field(default_factory=list)
    message: str | None = None
    latency_ms: float


class SentenceRewriteRequest(BaseModel):
    sentence: str = Field(min_length=1, max_length=1000)
    hint: str | None = Field(default=None, max_length=500)
    mode: str = Field(default="human", max_length=32)


class SentenceRewriteResponse(BaseModel):
    original: str
    rewritten: str
