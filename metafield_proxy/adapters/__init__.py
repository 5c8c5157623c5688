"""
Adaptors for the Metafield Translation Proxy.

This package contains the Shopify Admin API client, the translation
registration and auto-translation adaptors, and the machine translation
adaptor.
"""
