"""
Registry for model clients.

Maps provider ids (e.g. "gemini", "openrouter") to client implementations.
"""

from infocanvas.core.providers.base import ModelClient


class ProviderRegistry:
    """Registry mapping provider id to ModelClient implementation."""

    def __init__(self) -> None:
        self._impls: dict[str, ModelClient] = {}

    def register(self, provider_id: str, impl: ModelClient) -> None:
        """Register a client. Registering the same id again replaces it."""
        self._impls[provider_id] = impl

    def get(self, provider_id: str) -> ModelClient | None:
        """Return the client registered for provider_id, or None if unknown."""
        return self._impls.get(provider_id)

    def provider_ids(self) -> list[str]:
        return list(self._impls.keys())


_registry: ProviderRegistry | None = None


def get_registry() -> ProviderRegistry:
    """Return the global provider registry. Creates it on first call."""
    global _registry
    if _registry is None:
        _registry = ProviderRegistry()
    return _registry
