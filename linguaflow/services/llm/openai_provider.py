"""OpenAI LLM provider implementation.

Uses the chat completions API via the official async SDK.
SDK retries are disabled: a failed call surfaces immediately and the
end user decides whether to retry. Every call is bounded by a timeout
and failures are logged in full before being redacted.
"""

import asyncio

import structlog
from openai import AsyncOpenAI, AuthenticationError

from linguaflow.core.exceptions import ExternalServiceError
from linguaflow.core.security import AUTH_ERROR_MESSAGE, redact_error_message
from linguaflow.services.llm.base import LLMProvider, LLMResponse

logger = structlog.get_logger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions (gpt-4o-mini by default)."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self._model = model
        self._timeout_seconds = timeout_seconds
        logger.info("openai_provider_initialized", model=model)

    async def generate(
        self,
        prompt: str,
        system_prompt: str,
        max_tokens: int = 1000,
        temperature: float = 0.3,
        failure_message: str = "Processing failed.",
    ) -> LLMResponse:
        """Generate a complete response using OpenAI."""
        try:
            response = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self._model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": prompt},
                    ],
                    max_tokens=max_tokens,
                    temperature=temperature,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "openai_generate_timeout",
                model=self._model,
                prompt_len=len(prompt),
                timeout_seconds=self._timeout_seconds,
            )
            raise ExternalServiceError(failure_message) from e
        except AuthenticationError as e:
            logger.exception("openai_generate_auth_failed", error=str(e), model=self._model)
            raise ExternalServiceError(AUTH_ERROR_MESSAGE) from e
        except Exception as e:
            message = str(e)
            logger.exception(
                "openai_generate_failed",
                error=message,
                error_type=type(e).__name__,
                model=self._model,
                prompt_len=len(prompt),
            )
            raise ExternalServiceError(
                redact_error_message(message, failure_message)
            ) from e

        if not response.choices:
            logger.error("openai_empty_response", model=self._model)
            raise ExternalServiceError(failure_message)

        text = response.choices[0].message.content or ""
        usage = response.usage
        result = LLMResponse(
            text=text,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
        logger.debug(
            "openai_generate_ok",
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            prompt_len=len(prompt),
        )
        return result
