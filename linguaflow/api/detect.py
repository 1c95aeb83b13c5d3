"""Language detection endpoint."""

from fastapi import APIRouter, Depends

from linguaflow.api.deps import (
    enforce_rate_limit,
    get_language_service,
    parse_detect_request,
)
from linguaflow.schemas.language import (
    DetectLanguageResponse,
    DetectRequest,
    ErrorResponse,
)
from linguaflow.services.language.service import LanguageService

router = APIRouter(tags=["detection"])


@router.get(
    "/detectLanguage",
    response_model=DetectLanguageResponse,
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def detect_language(
    body: DetectRequest = Depends(parse_detect_request),
    service: LanguageService = Depends(get_language_service),
) -> DetectLanguageResponse:
    """Identify the language of ``message`` as an ISO 639-1 code."""
    return await service.detect_language(body)
