from pydantic import BaseModel


class ErrorResponse(BaseModel):
    detail: str
    trace_id: str


class HealthResponse(BaseModel):
    status: str = "ok"


class TextRequest(BaseModel):
    text: str
