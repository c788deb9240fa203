"""Localization providers."""

from typing import Dict, Optional, Type

from ..errors import UnknownProviderError
from .base import LocalizationProvider, LocalizationProviderArgs
from .file_share import FileShareProvider

PROVIDERS: Dict[str, Type[LocalizationProvider]] = {
    FileShareProvider.name: FileShareProvider,
}


def get_localization_provider(name: str, args: LocalizationProviderArgs) -> Optional[LocalizationProvider]:
    """
    Create the provider registered under ``name``.

    Args:
        name: Provider name; empty means no provider
        args: Task context for the provider

    Returns:
        Provider instance, or None when no provider was requested

    Raises:
        UnknownProviderError: If no provider is registered under the name
    """
    if not name:
        return None
    provider_class = PROVIDERS.get(name)
    if provider_class is None:
        raise UnknownProviderError(name)
    return provider_class(args)


__all__ = [
    "LocalizationProvider",
    "LocalizationProviderArgs",
    "FileShareProvider",
    "PROVIDERS",
    "get_localization_provider",
]
