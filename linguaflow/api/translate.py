"""Translation endpoint."""

from fastapi import APIRouter, Depends

from linguaflow.api.deps import (
    enforce_rate_limit,
    get_language_service,
    parse_translate_request,
)
from linguaflow.schemas.language import (
    ErrorResponse,
    TranslateRequest,
    TranslateResponse,
)
from linguaflow.services.language.service import LanguageService

router = APIRouter(tags=["translation"])


@router.get(
    "/translate",
    response_model=TranslateResponse,
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def translate(
    body: TranslateRequest = Depends(parse_translate_request),
    service: LanguageService = Depends(get_language_service),
) -> TranslateResponse:
    """Translate ``message`` from ``source`` (or auto-detect) into ``target``."""
    return await service.translate(body)
