from pydantic import BaseModel, Field


class InsightOut(BaseModel):
    index: int
    text: str
    flags: list[str] = Field(default_factory=list)
    hint: str = ""


class InsightsResponse(BaseModel):
    sentences: list[InsightOut]
    overall_suggestions: list[str]
