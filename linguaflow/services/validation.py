"""Input validation and sanitization for free-text query parameters.

Both endpoints run the raw ``message`` values through
``validate_message`` and then ``sanitize`` before anything else sees them.
"""

import re
from typing import Sequence

from linguaflow.core.exceptions import InvalidInputError, MissingInputError

_TAG_PATTERN = re.compile(r"<[^>]*>")
# Script and style bodies go with their tags.
_EMBEDDED_CODE_PATTERN = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)


def sanitize(text: str) -> str:
    """Strip angle-bracket tags, then surrounding whitespace."""
    text = _EMBEDDED_CODE_PATTERN.sub("", text)
    return _TAG_PATTERN.sub("", text).strip()


def validate_message(values: Sequence[str], max_length: int) -> str:
    """Validate the raw values of the ``message`` query parameter.

    Args:
        values: Every value supplied for the parameter, in request order.
        max_length: Maximum accepted length before sanitization.

    Returns:
        The single raw message string.

    Raises:
        MissingInputError: Parameter absent or empty.
        InvalidInputError: Parameter repeated (not a single text value)
            or longer than ``max_length``.
    """
    if not values or not values[0]:
        raise MissingInputError()

    requirement = f"The message must be a single string of at most {max_length} characters."
    if len(values) > 1 or not isinstance(values[0], str):
        raise InvalidInputError(requirement)

    message = values[0]
    if len(message) > max_length:
        raise InvalidInputError(requirement)
    return message


def clean_message(values: Sequence[str], max_length: int) -> str:
    """Validate then sanitize; an empty result is rejected."""
    sanitized = sanitize(validate_message(values, max_length))
    if not sanitized:
        raise InvalidInputError("The message is not valid after removing markup.")
    return sanitized
