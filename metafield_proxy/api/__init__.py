"""
API package for the Metafield Translation Proxy.
"""
