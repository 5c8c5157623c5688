"""
Domain package for the Metafield Translation Proxy.

This package contains domain models and request schemas. The domain layer
is independent of the upstream platform and the HTTP framework.
"""
