"""Translation and detection request/response schemas."""

from pydantic import BaseModel, ConfigDict


class TranslateRequest(BaseModel):
    """GET /translate query, already validated and sanitized."""

    model_config = ConfigDict(frozen=True)

    message: str
    source: str
    target: str


class DetectRequest(BaseModel):
    """GET /detectLanguage query, already validated and sanitized."""

    model_config = ConfigDict(frozen=True)

    message: str


class TranslateResponse(BaseModel):
    """GET /translate response body."""

    original_message: str
    source_language: str
    target_language: str
    translated_message: str
    supported_languages: dict[str, str]


class DetectLanguageResponse(BaseModel):
    """GET /detectLanguage response body."""

    original_message: str
    detected_language_code: str
    detected_language_name: str
    confidence: str
    supported_languages: dict[str, str]


class ErrorResponse(BaseModel):
    error: str


class GreetingResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
