from typing import Any, Callable, Dict, List, Optional, Tuple

from metafield_proxy.adapters.shopify.client import ShopifyClient
from metafield_proxy.core.logging import get_logger
from metafield_proxy.domain.models.metafield import ResourceId
from metafield_proxy.infrastructure.error.fallback import FallbackChain, describe_outcomes

logger = get_logger(__name__)

EndpointBuilder = Callable[[ResourceId, str], Tuple[str, Dict[str, Any]]]


def _product_auto_translate(resource_id: ResourceId, locale: str) -> Tuple[str, Dict[str, Any]]:
    path = f"{resource_id.resource_type.lower()}s/{resource_id.numeric_id}/translations/auto.json"
    return path, {"locale": locale}


def _translations_auto_translate(resource_id: ResourceId, locale: str) -> Tuple[str, Dict[str, Any]]:
    return "translations/auto_translate.json", {
        "resource_id": resource_id.numeric_id,
        "resource_type": resource_id.resource_type,
        "locale": locale,
    }


def _translations_auto(resource_id: ResourceId, locale: str) -> Tuple[str, Dict[str, Any]]:
    return "translations/auto.json", {
        "translation": {
            "resource_id": resource_id.numeric_id,
            "resource_type": resource_id.resource_type,
            "locale": locale,
        }
    }


# Endpoint shapes probed in order; the first accepted one wins.
AUTO_TRANSLATE_ENDPOINTS: List[Tuple[str, EndpointBuilder]] = [
    ("product_auto_translate", _product_auto_translate),
    ("translations_auto_translate", _translations_auto_translate),
    ("translations_auto", _translations_auto),
]


class AutoTranslationTrigger:
    """Asks Shopify to generate a translation of a resource on its own."""

    def __init__(
        self,
        client: ShopifyClient,
        endpoints: Optional[List[Tuple[str, EndpointBuilder]]] = None
    ):
        self.client = client
        self.endpoints = endpoints if endpoints is not None else AUTO_TRANSLATE_ENDPOINTS

    async def trigger(self, resource_id: ResourceId, locale: str) -> Optional[Dict[str, Any]]:
        """
        Probe the auto-translation endpoints until one acknowledges.

        Returns:
            Optional[Dict[str, Any]]: Acknowledgement with the accepting
            endpoint name and response body, or None if every endpoint failed
        """
        chain: FallbackChain[Dict[str, Any]] = FallbackChain(
            f"auto_translate:{resource_id}:{locale}", logger
        )
        for name, builder in self.endpoints:
            chain.add_strategy(name, self._probe(builder, resource_id, locale))

        success = await chain.first_success()
        if success is not None:
            return {"endpoint": success.name, "response": success.value}

        logger.info(f"Auto-translation unavailable for {resource_id} ({describe_outcomes(chain.outcomes)})")
        return None

    def _probe(self, builder: EndpointBuilder, resource_id: ResourceId, locale: str):
        async def run() -> Dict[str, Any]:
            path, payload = builder(resource_id, locale)
            response = await self.client.post_rest(path, payload)
            return response or {"accepted": True}
        return run
