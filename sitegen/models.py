# sitegen/models.py
from pydantic import BaseModel, Field
from typing import Any, Literal, Optional

GENERATION_ERROR = "GENERATION_ERROR"
RAW_RESPONSE_LIMIT = 1000


class CodeBundle(BaseModel):
    html: str
    css: str
    js: str


# Request fields stay optional so the endpoints can answer 400 themselves.
class GenerateRequest(BaseModel):
    prompt: Optional[str] = None


class FollowupRequest(BaseModel):
    prompt: Optional[str] = None
    code: Optional[Any] = None


class RetryRequest(BaseModel):
    originalPrompt: Optional[str] = None
    badJson: Optional[str] = None


class GenerationErrorPayload(BaseModel):
    error: str
    errorType: Literal["GENERATION_ERROR"] = GENERATION_ERROR
    rawResponse: str = Field(default="", max_length=RAW_RESPONSE_LIMIT)


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    model: str
