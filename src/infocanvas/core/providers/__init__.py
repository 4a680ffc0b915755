"""
Model clients: protocol, registry, and built-in implementations.

Built-in clients are registered lazily on first get_registry() call so that
importing the package does not import the provider SDKs.
"""

from infocanvas.core.config import KNOWN_PROVIDERS as KNOWN_PROVIDERS
from infocanvas.core.providers.base import ModelClient as ModelClient
from infocanvas.core.providers.registry import ProviderRegistry
from infocanvas.core.providers.registry import get_registry as _get_registry_impl

PROVIDER_GEMINI, PROVIDER_OPENROUTER = KNOWN_PROVIDERS

_builtins_registered = False


def _register_builtins(reg: ProviderRegistry) -> None:
    """Register built-in clients. Called once when the registry is first used."""
    global _builtins_registered
    if _builtins_registered:
        return
    from infocanvas.core.providers.gemini import GeminiClient
    from infocanvas.core.providers.openrouter import OpenRouterClient

    reg.register(PROVIDER_GEMINI, GeminiClient())
    reg.register(PROVIDER_OPENROUTER, OpenRouterClient())
    _builtins_registered = True


def get_registry() -> ProviderRegistry:
    """Return the global provider registry and ensure built-ins are registered."""
    reg = _get_registry_impl()
    _register_builtins(reg)
    return reg
