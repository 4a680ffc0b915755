"""
HTTP status to APIError mapping shared by the model clients.
"""

from infocanvas.utils.exceptions import APIError

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait before making more requests."


def api_error_for_status(service: str, status: int, model: str, detail: str = "") -> APIError:
    """
    Build the APIError for a failed call to service.

    Args:
        service: Display name, e.g. "Gemini" or "OpenRouter"
        status: HTTP status code (0 when unknown)
        model: Model id the request was for
        detail: Response body or SDK message, kept on the error
    """
    if status in (401, 403):
        message = f"Authentication failed. Please check your {service} API key."
    elif status == 404:
        message = f"Model not found or endpoint unavailable: {model}"
    elif status == 429:
        message = RATE_LIMIT_MESSAGE
    elif status >= 500:
        message = f"{service} service error: {status}"
    else:
        message = f"{service} request failed with status {status}: {detail}"
    return APIError(message, status_code=status, response=detail)
