"""
OpenRouter image model client.

Sends the request as an OpenAI-style chat completion with image_url parts
(data URLs) and reads images back from choices[].message.images. The HTTP call
is blocking, so it runs in a worker thread.
"""

import asyncio
import base64
import binascii
import json
import time
from typing import Any

import requests

from infocanvas.core.composer import GenerationRequest
from infocanvas.core.config import Config
from infocanvas.core.parts import Candidate, ImagePart, ModelResponse, Part, TextPart
from infocanvas.core.providers.errors import api_error_for_status
from infocanvas.logging_config import get_logger
from infocanvas.utils.exceptions import APIError, NetworkError, RequestTimeoutError

logger = get_logger(__name__)

SERVICE_NAME = "OpenRouter"

_LOG_STRING_LIMIT = 200
# Free text is logged in full; only payload-like strings are shortened
_LOG_TEXT_KEYS = frozenset({"text", "content", "message"})


def _redact_for_log(value: Any, key: str | None = None) -> Any:
    """Copy of a JSON payload with base64 blobs replaced by a size marker."""
    if isinstance(value, dict):
        return {k: _redact_for_log(v, k) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact_for_log(v) for v in value]
    if isinstance(value, str) and len(value) >= _LOG_STRING_LIMIT and key not in _LOG_TEXT_KEYS:
        kind = "data URL" if value.startswith("data:") else "string"
        return f"<{kind}, {len(value)} chars>"
    return value


def _log_json(label: str, value: Any) -> None:
    redacted = json.dumps(_redact_for_log(value), indent=2)
    logger.info("%s (image data truncated): %s", label, redacted)


def create_image_data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def _decode_image_url(url: str) -> ImagePart | None:
    """Decode a data URL or bare base64 string; None when it is not valid base64."""
    mime_type = "image/png"
    payload = url
    if url.startswith("data:"):
        header, _, payload = url.partition(",")
        mime_type = header[5:].split(";", 1)[0] or mime_type
    try:
        return ImagePart(data=base64.b64decode(payload, validate=True), mime_type=mime_type)
    except (binascii.Error, ValueError) as e:
        logger.debug("Skipping undecodable image in API response: %s", e)
        return None


def _content_item(part: Part) -> dict[str, Any]:
    if isinstance(part, ImagePart):
        return {
            "type": "image_url",
            "image_url": {"url": create_image_data_url(part.data, part.mime_type)},
        }
    return {"type": "text", "text": part.text}


def _choice_to_candidate(choice: dict[str, Any]) -> Candidate:
    message = choice.get("message") or {}
    parts: list[Part] = []
    text = message.get("content")
    if isinstance(text, str) and text:
        parts.append(TextPart(text))
    for image in message.get("images") or []:
        url = (image.get("image_url") or {}).get("url", "")
        image_part = _decode_image_url(url) if url else None
        if image_part is not None:
            parts.append(image_part)
    return Candidate(parts=tuple(parts))


class OpenRouterClient:
    """Model client for the OpenRouter chat/completions API."""

    def _build_payload(self, request: GenerationRequest, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "modalities": ["image", "text"],
            "messages": [
                {"role": "user", "content": [_content_item(p) for p in request.parts]}
            ],
            "image_config": {"aspect_ratio": request.aspect_ratio},
        }

    def _parse_response(self, result: dict[str, Any], model: str) -> ModelResponse:
        try:
            candidates = tuple(_choice_to_candidate(c) for c in result.get("choices", []))
        except (AttributeError, KeyError, TypeError) as e:
            raise APIError(
                f"Failed to read API response: {e}", response=str(result)
            ) from e
        return ModelResponse(candidates=candidates, model_used=model)

    def _post(
        self,
        url: str,
        api_key: str,
        payload: dict[str, Any],
        timeout: int,
        model: str,
        debug: bool,
    ) -> ModelResponse:
        """POST the payload; non-200 answers become APIError."""
        if debug:
            _log_json("API request payload", payload)
        started = time.time()
        response = requests.post(
            url,
            headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
            json=payload,
            timeout=timeout,
        )
        logger.debug(
            "OpenRouter response status=%s time=%.2fs",
            response.status_code,
            time.time() - started,
        )
        if response.status_code != 200:
            raise api_error_for_status(SERVICE_NAME, response.status_code, model, response.text)
        try:
            result = response.json()
        except ValueError as e:
            raise APIError(
                f"Failed to parse API response as JSON: {e}", response=response.text
            ) from e
        if debug:
            _log_json("API response", result)
        return self._parse_response(result, model)

    def _generate_blocking(
        self,
        request: GenerationRequest,
        config: Config,
        api_key: str,
    ) -> ModelResponse:
        model = config.model_for("openrouter")
        timeout = config.generation_timeout
        url = f"{config.openrouter_base_url}/chat/completions"
        logger.debug("OpenRouter request url=%s model=%s timeout=%s", url, model, timeout)
        payload = self._build_payload(request, model)
        try:
            return self._post(url, api_key, payload, timeout, model, config.debug_api)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(
                f"Request timed out after {timeout} seconds. "
                "The generation may be taking longer than expected.",
                original_error=e,
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(
                "Failed to connect to OpenRouter. Please check your internet connection.",
                original_error=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(
                f"Network error during OpenRouter request: {e}", original_error=e
            ) from e

    async def generate(
        self,
        request: GenerationRequest,
        config: Config,
        *,
        api_key: str,
    ) -> ModelResponse:
        return await asyncio.to_thread(self._generate_blocking, request, config, api_key)
