"""Concrete tools and the catalogs grouping them."""

from .catalog import CATALOGS, build_ai_registry, build_products_registry, build_registry

__all__ = [
    "CATALOGS",
    "build_ai_registry",
    "build_products_registry",
    "build_registry",
]
