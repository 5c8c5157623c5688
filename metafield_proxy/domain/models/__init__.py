"""
Domain models for the Metafield Translation Proxy.
"""

from metafield_proxy.domain.models.metafield import (
    ContentDigest,
    MetafieldCoordinate,
    OriginalMetafield,
    ResourceId,
)
from metafield_proxy.domain.models.translation import TranslationResult, TranslationSource

__all__ = [
    "ContentDigest",
    "MetafieldCoordinate",
    "OriginalMetafield",
    "ResourceId",
    "TranslationResult",
    "TranslationSource",
]
