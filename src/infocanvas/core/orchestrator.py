"""
Generation orchestration: the single-flight state machine.

    Idle --invoke--> Busy --(success | failure)--> Idle

At most one generation is in flight per session. A second invoke while busy is
rejected, not queued. Success prepends a new artifact to history and selects
it. Failure leaves history untouched. Either way the session is idle again
before invoke returns or raises.
"""

import time

from infocanvas.core.composer import GenerationRequest
from infocanvas.core.config import Config
from infocanvas.core.history import GeneratedArtifact, new_artifact_id, summarize_prompt
from infocanvas.core.providers import get_registry
from infocanvas.core.providers.base import ModelClient
from infocanvas.core.session import Session
from infocanvas.logging_config import get_logger, log_prompts, truncate_for_log
from infocanvas.utils.exceptions import (
    ConfigurationError,
    GenerationInProgressError,
    NoImageInResponseError,
    TransportError,
)

logger = get_logger(__name__)


class GenerationOrchestrator:
    """Runs model calls for a Session, one at a time."""

    def __init__(
        self,
        session: Session,
        config: Config,
        client: ModelClient | None = None,
    ) -> None:
        self.session = session
        self.config = config
        self._client = client

    @property
    def busy(self) -> bool:
        return self.session.busy

    def _resolve_client(self) -> ModelClient:
        if self._client is not None:
            return self._client
        impl = get_registry().get(self.config.provider)
        if impl is None:
            raise ConfigurationError(f"Unknown provider: {self.config.provider!r}.")
        return impl

    def ensure_ready(self) -> tuple[str, ModelClient]:
        """
        Check that a generation may start now; returns the API key and client.

        Raises:
            ConfigurationError: If no API key is available
            GenerationInProgressError: If a generation is already in flight
        """
        api_key = self.config.api_key_for()
        if not api_key:
            raise ConfigurationError(
                "API key is not available. Please contact your administrator."
            )
        if self.session.busy:
            raise GenerationInProgressError("A generation is already in progress.")
        return api_key, self._resolve_client()

    async def invoke(self, request: GenerationRequest) -> GeneratedArtifact:
        """
        Send request to the model client and commit the first returned image.

        Returns:
            The committed artifact (now first in history and selected)

        Raises:
            ConfigurationError: If no API key is available; nothing is sent
            GenerationInProgressError: If a generation is already in flight
            NoImageInResponseError: If the response holds no inline image
            TransportError: If the client call fails (APIError, NetworkError,
                RequestTimeoutError, or any other client failure wrapped)
        """
        api_key, client = self.ensure_ready()

        self.session.busy = True
        start_time = time.time()
        logger.info(
            "Generating provider=%s parts=%d aspect_ratio=%s region=%s",
            self.config.provider,
            len(request.parts),
            request.aspect_ratio,
            request.region is not None,
        )
        if log_prompts():
            logger.info("Instruction: %s", truncate_for_log(request.instruction))
        try:
            try:
                response = await client.generate(
                    request, self.config, api_key=api_key
                )
            except TransportError as e:
                logger.warning("Generation failed: %s", e)
                raise
            except Exception as e:
                logger.warning("Generation failed: %s", e)
                raise TransportError(f"Failed to generate image. {e}", original_error=e) from e

            image = response.first_image_part()
            if image is None:
                logger.warning("No image found in response text=%r", response.text()[:200])
                raise NoImageInResponseError(
                    "The model generated a response but no image was found. "
                    "Try a different prompt.",
                    response=response.text(),
                )

            artifact = GeneratedArtifact(
                id=new_artifact_id(),
                payload=image.data,
                mime_type=image.mime_type,
                prompt_summary=summarize_prompt(request.instruction),
                ratio=request.aspect_ratio,
            )
            self.session.commit(artifact)
            logger.info("Generated in %.1fs id=%s", time.time() - start_time, artifact.id)
            return artifact
        finally:
            self.session.busy = False
