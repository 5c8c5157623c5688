from fastapi import Depends

from metafield_proxy.adapters.google.translator import GoogleTranslator
from metafield_proxy.adapters.shopify.auto_translate import AutoTranslationTrigger
from metafield_proxy.adapters.shopify.client import ShopifyClient
from metafield_proxy.adapters.shopify.registration import TranslationRegistrar
from metafield_proxy.core.config import Settings, get_settings
from metafield_proxy.core.logging import get_logger
from metafield_proxy.services.translation_service import MetafieldTranslationService

logger = get_logger(__name__)


def get_shopify_client(settings: Settings = Depends(get_settings)) -> ShopifyClient:
    """
    Dependency for providing the Shopify Admin API client.

    Returns:
        ShopifyClient: Client bound to the configured shop
    """
    return ShopifyClient(settings)


def get_translation_service(
    settings: Settings = Depends(get_settings),
    client: ShopifyClient = Depends(get_shopify_client),
) -> MetafieldTranslationService:
    """
    Dependency for providing the metafield translation service.

    The machine translator is wired in only when machine translation is
    enabled and an API key is configured.

    Returns:
        MetafieldTranslationService: Service for the current request
    """
    translator = GoogleTranslator(settings) if settings.machine_translation_active else None
    if translator is None:
        logger.debug("Machine translation disabled; original values will be registered")

    return MetafieldTranslationService(
        settings=settings,
        client=client,
        registrar=TranslationRegistrar(client),
        auto_trigger=AutoTranslationTrigger(client),
        translator=translator,
    )
