"""
Metafield Translation Proxy - resolves translated product metafields.

This package proxies metafield reads to the Shopify Admin API and, when a
translation is missing, tries platform auto-translation, machine translation
and translation registration in turn.
"""

__version__ = "0.1.0"
