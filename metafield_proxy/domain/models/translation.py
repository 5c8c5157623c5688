from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TranslationSource(str, Enum):
    """Where the value of a translation result came from."""
    EXISTING_TRANSLATION = "existing_translation"
    SHOPIFY_AUTO_TRANSLATION = "shopify_auto_translation"
    GOOGLE_TRANSLATE_REGISTERED_GRAPHQL = "google_translate_registered_graphql"
    GOOGLE_TRANSLATE_REGISTERED_REST = "google_translate_registered_rest"
    GOOGLE_TRANSLATE_ONLY = "google_translate_only"
    MUTATION_CREATED = "mutation_created"
    ORIGINAL_FALLBACK = "original_fallback"


@dataclass
class TranslationResult:
    """Outcome of resolving a metafield translation."""

    value: str
    locale: str
    is_translated: bool
    source: TranslationSource
    message: Optional[str] = None
