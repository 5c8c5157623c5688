"""
Infrastructure package for the Metafield Translation Proxy.
"""
