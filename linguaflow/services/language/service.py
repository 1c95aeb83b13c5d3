"""Translation and language detection backed by an LLMProvider.

Inputs arrive already validated (see linguaflow.api.deps); this layer
builds prompts, calls the provider and shapes the response payloads.
"""

import re

import structlog

from linguaflow.schemas.language import (
    DetectLanguageResponse,
    DetectRequest,
    TranslateRequest,
    TranslateResponse,
)
from linguaflow.services.language.prompts import (
    build_detection_prompts,
    build_translation_prompts,
)
from linguaflow.services.language.registry import (
    LANGUAGES,
    describe_language,
    supported_languages,
)
from linguaflow.services.llm.base import LLMProvider

logger = structlog.get_logger(__name__)

TRANSLATE_MAX_TOKENS = 1000
TRANSLATE_TEMPERATURE = 0.3
DETECT_MAX_TOKENS = 10
DETECT_TEMPERATURE = 0.1

DETECTION_CONFIDENCE = "high"
UNDETERMINED_CODE = "und"

TRANSLATE_FAILED_MESSAGE = "Translation processing failed."
DETECT_FAILED_MESSAGE = "Language detection failed."

_BARE_CODE = re.compile(r"([a-z]{2})(?:[-_][a-z0-9]+)?")
_CODE_TOKEN = re.compile(r"\b[a-z]{2}\b")


def normalize_language_code(raw: str) -> str:
    """Reduce a model reply like ``"EN."`` or ``"pt-BR"`` to a bare code.

    The whole reply is the code when it is one. Otherwise, for replies with
    a preamble such as ``"It is en"``, the last registered two-letter token
    wins, then the last two-letter token of any kind.
    """
    text = raw.strip().lower().rstrip(".!?,;:'\"` ")
    match = _BARE_CODE.fullmatch(text)
    if match is not None:
        return match.group(1)

    tokens = _CODE_TOKEN.findall(text)
    registered = [token for token in tokens if token in LANGUAGES]
    if registered:
        return registered[-1]
    if tokens:
        return tokens[-1]
    return UNDETERMINED_CODE


class LanguageService:
    """Translation and detection calls."""

    def __init__(self, llm: LLMProvider) -> None:
        self._llm = llm

    async def translate(self, request: TranslateRequest) -> TranslateResponse:
        system_prompt, user_prompt = build_translation_prompts(
            request.message, request.source, request.target
        )
        response = await self._llm.generate(
            user_prompt,
            system_prompt,
            max_tokens=TRANSLATE_MAX_TOKENS,
            temperature=TRANSLATE_TEMPERATURE,
            failure_message=TRANSLATE_FAILED_MESSAGE,
        )
        logger.info(
            "translation_completed",
            source=request.source,
            target=request.target,
            message_len=len(request.message),
            output_tokens=response.output_tokens,
        )
        return TranslateResponse(
            original_message=request.message,
            source_language=request.source,
            target_language=request.target,
            translated_message=response.text.strip(),
            supported_languages=supported_languages(),
        )

    async def detect_language(self, request: DetectRequest) -> DetectLanguageResponse:
        system_prompt, user_prompt = build_detection_prompts(request.message)
        response = await self._llm.generate(
            user_prompt,
            system_prompt,
            max_tokens=DETECT_MAX_TOKENS,
            temperature=DETECT_TEMPERATURE,
            failure_message=DETECT_FAILED_MESSAGE,
        )
        code = normalize_language_code(response.text)
        logger.info("language_detected", code=code, raw=response.text[:20])
        return DetectLanguageResponse(
            original_message=request.message,
            detected_language_code=code,
            detected_language_name=describe_language(code),
            confidence=DETECTION_CONFIDENCE,
            supported_languages=supported_languages(),
        )
