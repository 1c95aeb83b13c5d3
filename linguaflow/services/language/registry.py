"""Supported languages: ISO 639-1 code → native display name.

The mapping is built once at import and exposed read-only.
"""

from types import MappingProxyType
from typing import Mapping

from linguaflow.core.exceptions import UnsupportedLanguageError

AUTO_DETECT = "auto-detect"
UNKNOWN_LANGUAGE = "Unknown language"

LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "ko": "한국어",
        "en": "English",
        "ja": "日本語",
        "zh": "中文",
        "es": "Español",
        "fr": "Français",
        "de": "Deutsch",
        "ru": "Русский",
        "pt": "Português",
        "it": "Italiano",
    }
)


def get_language_name(code: str | None) -> str | None:
    """Display name for ``code``, or None when it is not registered."""
    if not code:
        return None
    return LANGUAGES.get(code.strip().lower())


def describe_language(code: str | None) -> str:
    return get_language_name(code) or UNKNOWN_LANGUAGE


def supported_languages() -> dict[str, str]:
    return dict(LANGUAGES)


def resolve_source(code: str | None) -> str:
    """Registered source code, or the auto-detect sentinel for anything else."""
    if get_language_name(code) is None:
        return AUTO_DETECT
    return code.strip().lower()  # type: ignore[union-attr]


def resolve_target(code: str | None, default: str) -> str:
    """Registered target code (``default`` when absent).

    Raises:
        UnsupportedLanguageError: ``code`` is given but not registered.
    """
    if code is None or not code.strip():
        code = default
    if get_language_name(code) is None:
        raise UnsupportedLanguageError(
            f"Unsupported target language '{code}'. "
            f"Supported languages: {', '.join(LANGUAGES)}"
        )
    return code.strip().lower()
