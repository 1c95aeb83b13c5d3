"""Security headers, client identification and error-message redaction."""

from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
        "style-src 'self' 'unsafe-inline';"
    ),
}

AUTH_ERROR_MESSAGE = "An authentication error occurred."

# Lowercased fragments that mark an upstream error as credential-related.
_SENSITIVE_MARKERS = ("api key", "api_key", "apikey", "authentication", "unauthorized")


def apply_security_headers(response: Response) -> Response:
    """Set the fixed security header set on a response, whatever its status."""
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response


def is_sensitive_error(error_text: str) -> bool:
    text = error_text.lower()
    return any(marker in text for marker in _SENSITIVE_MARKERS)


def redact_error_message(error_text: str, fallback: str) -> str:
    """Map raw upstream error text to a message that is safe to return.

    Credential-related errors get a fixed authentication message, everything
    else gets ``fallback``. The raw text is never returned.
    """
    if is_sensitive_error(error_text):
        return AUTH_ERROR_MESSAGE
    return fallback


def client_address(request: Request, trust_forwarded_for: bool = False) -> str:
    """Network address used as the rate-limit key."""
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client is None:
        return "unknown"
    return request.client.host
