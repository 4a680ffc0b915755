"""
Gemini image model client.

Talks to the Gemini API through the google-genai SDK's async client. Request
parts map one-to-one onto SDK parts; the aspect ratio and size hint go into
the image config.
"""

import asyncio
import base64
import binascii
import time
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from infocanvas.core.composer import GenerationRequest
from infocanvas.core.config import Config
from infocanvas.core.parts import Candidate, ImagePart, ModelResponse, Part, TextPart
from infocanvas.core.providers.errors import api_error_for_status
from infocanvas.logging_config import get_logger
from infocanvas.utils.exceptions import APIError, NetworkError, RequestTimeoutError

logger = get_logger(__name__)

SERVICE_NAME = "Gemini"


def _to_sdk_part(part: Part) -> types.Part:
    if isinstance(part, ImagePart):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)


def _from_sdk_part(part: Any) -> Part | None:
    """Convert an SDK response part; returns None for parts we do not use."""
    if getattr(part, "thought", False):
        # interim "thinking" output, not the final answer
        return None
    inline = getattr(part, "inline_data", None)
    if inline is not None and inline.data:
        data = inline.data
        if isinstance(data, str):
            try:
                data = base64.b64decode(data, validate=True)
            except (binascii.Error, ValueError) as e:
                logger.debug("Skipping undecodable inline image: %s", e)
                return None
        return ImagePart(data=data, mime_type=inline.mime_type or "image/png")
    text = getattr(part, "text", None)
    if text:
        return TextPart(text)
    return None


def parse_response(response: Any, model: str) -> ModelResponse:
    """Turn an SDK GenerateContentResponse into a ModelResponse."""
    candidates: list[Candidate] = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        parts = [_from_sdk_part(p) for p in (getattr(content, "parts", None) or [])]
        candidates.append(Candidate(parts=tuple(p for p in parts if p is not None)))
    return ModelResponse(candidates=tuple(candidates), model_used=model)


def _api_error(e: genai_errors.APIError, model: str) -> APIError:
    return api_error_for_status(SERVICE_NAME, e.code or 0, model, e.message or str(e))


class GeminiClient:
    """Model client for the Gemini API."""

    def _build_config(self, request: GenerationRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=["TEXT", "IMAGE"],
            image_config=types.ImageConfig(
                aspect_ratio=request.aspect_ratio,
                image_size=request.image_size,
            ),
        )

    async def generate(
        self,
        request: GenerationRequest,
        config: Config,
        *,
        api_key: str,
    ) -> ModelResponse:
        model = config.model_for("gemini")
        timeout = config.generation_timeout
        contents = [types.Content(role="user", parts=[_to_sdk_part(p) for p in request.parts])]
        logger.debug(
            "Gemini request model=%s parts=%s aspect_ratio=%s timeout=%s",
            model,
            list(request.parts) if config.debug_api else len(request.parts),
            request.aspect_ratio,
            timeout,
        )

        client = genai.Client(api_key=api_key)
        start_time = time.time()
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=model,
                    contents=contents,
                    config=self._build_config(request),
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"Request timed out after {timeout} seconds. "
                "The generation may be taking longer than expected.",
                original_error=e,
            ) from e
        except genai_errors.APIError as e:
            raise _api_error(e, model) from e
        except httpx.ConnectError as e:
            raise NetworkError(
                "Failed to connect to the Gemini API. Please check your internet connection.",
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Network error during Gemini request: {e}", original_error=e
            ) from e

        result = parse_response(response, model)
        logger.debug(
            "Gemini response candidates=%d time=%.2fs",
            len(result.candidates),
            time.time() - start_time,
        )
        if config.debug_api:
            logger.info("Gemini response parts: %s", [c.parts for c in result.candidates])
        return result
