from typing import Literal

from pydantic import BaseModel


class SignalsOut(BaseModel):
    vocabulary_richness: float
    sentence_length_variance: float
    repeated_word_clusters: int
    burstiness: Literal["human-like", "flat"]
    uniform_sentences: bool


class DetectionOut(BaseModel):
    verdict: Literal["human", "mixed", "likely-ai"]
    ai_probability: int
    confidence: Literal["low", "medium", "high"]
    signals: SignalsOut
    explanation: str
    word_count: int
    sentence_count: int


class DetectResponse(DetectionOut):
    latency_ms: float
