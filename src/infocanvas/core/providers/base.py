"""
Model client protocol.

Defines the interface every image model client implements. The session treats
a client call as one opaque asynchronous operation: retries and timeouts are
the client's business.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from infocanvas.core.config import Config

if TYPE_CHECKING:
    from infocanvas.core.composer import GenerationRequest
    from infocanvas.core.parts import ModelResponse


class ModelClient(Protocol):
    """Protocol for image model clients."""

    async def generate(
        self,
        request: GenerationRequest,
        config: Config,
        *,
        api_key: str,
    ) -> ModelResponse:
        """Send a composed request and return the model's candidates.

        May raise APIError, NetworkError or RequestTimeoutError.
        """
        ...
