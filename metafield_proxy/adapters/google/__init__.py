from metafield_proxy.adapters.google.translator import GoogleTranslator

__all__ = ["GoogleTranslator"]
