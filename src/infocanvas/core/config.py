"""
Configuration management for infocanvas.

This module supplies the model credentials, model selection and request
defaults. It is the credential collaborator of the generation session: an
absent API key makes the session refuse to start a generation.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from infocanvas.core.viewport import ASPECT_RATIOS, DEFAULT_ASPECT_RATIO
from infocanvas.logging_config import get_logger
from infocanvas.utils.exceptions import ConfigurationError

logger = get_logger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_PROVIDER = "gemini"
DEFAULT_GEMINI_MODEL = "gemini-3-pro-image-preview"
DEFAULT_OPENROUTER_MODEL = "google/gemini-3-pro-image-preview"
DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_IMAGE_SIZE = "1K"

# Provider ids; core.providers registers a client for each of these
KNOWN_PROVIDERS = ("gemini", "openrouter")
IMAGE_SIZES = ("1K", "2K", "4K")


@dataclass
class Config:
    """Configuration for an infocanvas session."""

    # API keys are excluded from repr to avoid leaking secrets
    gemini_api_key: str = field(default="", repr=False)
    openrouter_api_key: str = field(default="", repr=False)
    openrouter_base_url: str = DEFAULT_OPENROUTER_BASE_URL

    provider: str = DEFAULT_PROVIDER
    # Empty means "provider default" (see model_for)
    image_model: str = ""
    image_size: str = DEFAULT_IMAGE_SIZE
    default_aspect_ratio: str = DEFAULT_ASPECT_RATIO

    generation_timeout: int = 180  # seconds, enforced by the model clients

    # Debug: log request/response with image data truncated
    debug_api: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create a Config instance from environment variables.

        Environment variables:
            GEMINI_API_KEY: API key for the gemini provider
            OPENROUTER_API_KEY: API key for the openrouter provider
            INFOCANVAS_PROVIDER: gemini (default) or openrouter
            INFOCANVAS_IMAGE_MODEL: Optional model id override
            INFOCANVAS_IMAGE_SIZE: 1K (default), 2K or 4K
            INFOCANVAS_ASPECT_RATIO: Initial aspect ratio (default 9:16)
            INFOCANVAS_TIMEOUT: Generation timeout in seconds (default 180)
            INFOCANVAS_DEBUG_API: 1/true/yes to log truncated payloads

        Returns:
            Config instance populated from environment
        """

        def _int_env(name: str, default: int) -> int:
            val = os.getenv(name)
            if val is None or val == "":
                return default
            try:
                return int(val)
            except ValueError as e:
                raise ConfigurationError(f"{name} must be an integer, got {val!r}.") from e

        debug_api = os.getenv("INFOCANVAS_DEBUG_API", "").strip().lower() in ("1", "true", "yes")

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openrouter_base_url=os.getenv(
                "OPENROUTER_BASE_URL", DEFAULT_OPENROUTER_BASE_URL
            ),
            provider=os.getenv("INFOCANVAS_PROVIDER", DEFAULT_PROVIDER).strip().lower(),
            image_model=os.getenv("INFOCANVAS_IMAGE_MODEL", ""),
            image_size=os.getenv("INFOCANVAS_IMAGE_SIZE", DEFAULT_IMAGE_SIZE),
            default_aspect_ratio=os.getenv("INFOCANVAS_ASPECT_RATIO", DEFAULT_ASPECT_RATIO),
            generation_timeout=_int_env("INFOCANVAS_TIMEOUT", 180),
            debug_api=debug_api,
        )

    def validate(self) -> None:
        """
        Validate the configuration.

        A missing API key is not a validation error here: the session reports
        it when a generation is requested.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        logger.debug("Validating config provider=%s", self.provider)

        if self.provider not in KNOWN_PROVIDERS:
            raise ConfigurationError(
                f"Unknown provider: {self.provider!r}. "
                f"Must be one of: {', '.join(KNOWN_PROVIDERS)}."
            )
        if self.default_aspect_ratio not in ASPECT_RATIOS:
            raise ConfigurationError(
                f"Unsupported aspect ratio: {self.default_aspect_ratio!r}. "
                f"Must be one of: {', '.join(ASPECT_RATIOS)}."
            )
        if self.image_size not in IMAGE_SIZES:
            raise ConfigurationError(
                f"Unsupported image size: {self.image_size!r}. "
                f"Must be one of: {', '.join(IMAGE_SIZES)}."
            )
        if self.generation_timeout <= 0:
            raise ConfigurationError(
                f"generation_timeout must be positive, got {self.generation_timeout}."
            )

    def api_key_for(self, provider: str | None = None) -> str:
        """
        Return the API key for a provider (default: the configured one).

        Returns:
            The key, or "" when none is configured
        """
        provider = provider or self.provider
        if provider == "gemini":
            return self.gemini_api_key.strip()
        if provider == "openrouter":
            return self.openrouter_api_key.strip()
        return ""

    def set_api_key(self, api_key: str, provider: str | None = None) -> None:
        """
        Set the API key for a provider (default: the configured one).

        Raises:
            ConfigurationError: If the key is empty or the provider unknown
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("API key cannot be empty")
        provider = provider or self.provider
        if provider == "gemini":
            self.gemini_api_key = api_key.strip()
        elif provider == "openrouter":
            self.openrouter_api_key = api_key.strip()
        else:
            raise ConfigurationError(f"Unknown provider: {provider!r}.")

    def model_for(self, provider: str | None = None) -> str:
        """Return the image model id to use with a provider."""
        if self.image_model:
            return self.image_model
        provider = provider or self.provider
        if provider == "openrouter":
            return DEFAULT_OPENROUTER_MODEL
        return DEFAULT_GEMINI_MODEL


# Global configuration instance
_global_config: Config | None = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        The global Config instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config.from_env()
    return _global_config


def set_config(config: Config) -> None:
    """
    Set the global configuration instance.

    Args:
        config: The Config instance to use globally
    """
    global _global_config
    _global_config = config
