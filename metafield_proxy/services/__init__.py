"""
Services package for the Metafield Translation Proxy.

Services orchestrate application workflows, coordinating between domain
models and the upstream adaptors.
"""

from metafield_proxy.services.translation_service import MetafieldTranslationService

__all__ = ["MetafieldTranslationService"]
