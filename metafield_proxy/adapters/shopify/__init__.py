from metafield_proxy.adapters.shopify.auto_translate import AutoTranslationTrigger
from metafield_proxy.adapters.shopify.client import ShopifyClient
from metafield_proxy.adapters.shopify.registration import TranslationRegistrar

__all__ = ["AutoTranslationTrigger", "ShopifyClient", "TranslationRegistrar"]
