"""Site-specific rule overrides."""

from .base import Site, SiteRegistry
from .youtube import YouTube


def build_default_registry() -> SiteRegistry:
    """Registry with the built-in site overrides."""
    registry = SiteRegistry()
    registry.register_site(YouTube())
    return registry


# Process-wide registry used when no registry is passed explicitly
default_registry = build_default_registry()

__all__ = ["Site", "SiteRegistry", "YouTube", "build_default_registry", "default_registry"]
