"""Unit tests for the language registry and prompt builders."""

from __future__ import annotations

import pytest

from linguaflow.core.exceptions import UnsupportedLanguageError
from linguaflow.services.language.prompts import (
    DETECTION_SYSTEM_PROMPT,
    build_detection_prompts,
    build_translation_prompts,
)
from linguaflow.services.language.registry import (
    AUTO_DETECT,
    LANGUAGES,
    UNKNOWN_LANGUAGE,
    describe_language,
    get_language_name,
    resolve_source,
    resolve_target,
    supported_languages,
)


class TestRegistry:
    def test_expected_codes(self) -> None:
        assert set(LANGUAGES) == {"ko", "en", "ja", "zh", "es", "fr", "de", "ru", "pt", "it"}

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            LANGUAGES["xx"] = "Nope"  # type: ignore[index]

    def test_lookup(self) -> None:
        assert get_language_name("ko") == "한국어"
        assert get_language_name("EN") == "English"
        assert get_language_name("xx") is None
        assert get_language_name(None) is None

    def test_describe_falls_back(self) -> None:
        assert describe_language("ja") == "日本語"
        assert describe_language("tl") == UNKNOWN_LANGUAGE

    def test_supported_languages_is_a_copy(self) -> None:
        langs = supported_languages()
        langs["xx"] = "changed"
        assert "xx" not in LANGUAGES


class TestResolve:
    def test_source_known(self) -> None:
        assert resolve_source("en") == "en"

    @pytest.mark.parametrize("code", [None, "", "xx"])
    def test_source_unknown_or_absent_is_auto(self, code: str | None) -> None:
        assert resolve_source(code) == AUTO_DETECT

    def test_target_default(self) -> None:
        assert resolve_target(None, default="ko") == "ko"
        assert resolve_target("", default="ko") == "ko"

    def test_target_known(self) -> None:
        assert resolve_target("FR", default="ko") == "fr"

    def test_target_unknown_lists_supported(self) -> None:
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            resolve_target("xx", default="ko")
        assert exc_info.value.status_code == 400
        assert "xx" in exc_info.value.message
        for code in LANGUAGES:
            assert code in exc_info.value.message


class TestPrompts:
    def test_translation_with_source(self) -> None:
        system, user = build_translation_prompts("Hello", "en", "ko")
        assert "professional translator" in system
        assert "from English (en)" in system
        assert "한국어 (ko)" in system
        assert "nuance" in system
        assert '"Hello"' in user

    def test_translation_auto_detect(self) -> None:
        system, user = build_translation_prompts("Hola", AUTO_DETECT, "en")
        assert "Detect the language" in system
        assert "English (en)" in system
        assert "Hola" in user

    def test_detection_is_fixed_instruction(self) -> None:
        system, user = build_detection_prompts("Guten Tag")
        assert system == DETECTION_SYSTEM_PROMPT
        assert "ISO 639-1" in system
        assert user == "Guten Tag"
