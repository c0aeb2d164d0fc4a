"""Package registry lookups."""

from .packagist import RegistryLookupCache, DEFAULT_REGISTRY_URL

__all__ = ["RegistryLookupCache", "DEFAULT_REGISTRY_URL"]
