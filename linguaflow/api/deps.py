"""Shared FastAPI dependencies: settings, rate limiting, request parsing,
service injection.

The LLM provider and the rate limiter are created once during the FastAPI
lifespan and stored on app.state. All downstream code retrieves them via
Depends(), never by direct import. Query parameters are parsed into typed
request models here, so route bodies only ever see validated input.
"""

from fastapi import Depends, Request

from linguaflow.core.config import Settings
from linguaflow.core.security import client_address
from linguaflow.schemas.language import DetectRequest, TranslateRequest
from linguaflow.services.language.registry import resolve_source, resolve_target
from linguaflow.services.language.service import LanguageService
from linguaflow.services.llm.base import LLMProvider
from linguaflow.services.rate_limit import RateLimiter
from linguaflow.services.validation import clean_message


# ---------------------------------------------------------------------------
# Singletons: retrieved from app.state (set during lifespan)
# ---------------------------------------------------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_provider(request: Request) -> LLMProvider:
    """Return the singleton LLM provider from app state."""
    return request.app.state.llm_provider


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

async def enforce_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> None:
    """Count this request against the caller's window; raises on overflow."""
    await limiter.check(client_address(request, settings.trust_forwarded_for))


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------

def parse_translate_request(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TranslateRequest:
    """Build a TranslateRequest from the query string.

    Order: message validation, sanitization, then language checks.
    An unknown or absent source falls back to auto-detection; an unknown
    target is rejected.
    """
    params = request.query_params
    message = clean_message(params.getlist("message"), settings.translate_max_length)
    return TranslateRequest(
        message=message,
        source=resolve_source(params.get("source")),
        target=resolve_target(params.get("target"), settings.default_target_language),
    )


def parse_detect_request(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> DetectRequest:
    message = clean_message(
        request.query_params.getlist("message"), settings.detect_max_length
    )
    return DetectRequest(message=message)


# ---------------------------------------------------------------------------
# Service constructors: wired via Depends()
# ---------------------------------------------------------------------------

def get_language_service(
    llm: LLMProvider = Depends(get_llm_provider),
) -> LanguageService:
    """Return a LanguageService bound to the app's LLM provider."""
    return LanguageService(llm=llm)
