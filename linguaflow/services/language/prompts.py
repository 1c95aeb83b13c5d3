"""Instruction builders for the translation and detection calls.

Builders return ``(system_prompt, user_prompt)``. The text is only ever
sent as message content to the model.
"""

from linguaflow.services.language.registry import AUTO_DETECT, LANGUAGES

TRANSLATOR_PERSONA = "You are a professional translator."

DETECTION_SYSTEM_PROMPT = (
    "You are a language identification expert. "
    "Identify the language of the text the user sends. "
    "Reply with only its two-letter ISO 639-1 code in lowercase, "
    "with no punctuation or explanation."
)


def _language_label(code: str) -> str:
    name = LANGUAGES.get(code)
    return f"{name} ({code})" if name else code


def build_translation_prompts(text: str, source: str, target: str) -> tuple[str, str]:
    target_label = _language_label(target)
    if source == AUTO_DETECT:
        direction = (
            f"Detect the language of the given text and translate it into natural {target_label}."
        )
    else:
        direction = (
            f"Translate the given text from {_language_label(source)} "
            f"into natural {target_label}."
        )
    system_prompt = (
        f"{TRANSLATOR_PERSONA} {direction} "
        "Preserve the meaning and nuance of the original as closely as possible "
        f"while following the grammar of {target_label}. "
        "Reply with the translation only."
    )
    user_prompt = f'Translate the following text into {target_label}: "{text}"'
    return system_prompt, user_prompt


def build_detection_prompts(text: str) -> tuple[str, str]:
    return DETECTION_SYSTEM_PROMPT, text
