from typing import Any, Dict, Optional

from metafield_proxy.adapters.shopify.client import ShopifyClient
from metafield_proxy.core.logging import get_logger
from metafield_proxy.domain.models.metafield import (
    ContentDigest,
    MetafieldCoordinate,
    ResourceId,
)

logger = get_logger(__name__)

TRANSLATIONS_REGISTER_MUTATION = """
mutation RegisterTranslation($resourceId: ID!, $translations: [TranslationInput!]!) {
  translationsRegister(resourceId: $resourceId, translations: $translations) {
    translations {
      key
      value
      locale
    }
    userErrors {
      field
      message
    }
  }
}
"""


class TranslationRegistrar:
    """
    Persists a translated metafield value upstream.

    Both transports report failure by returning None; they never raise.
    """

    def __init__(self, client: ShopifyClient):
        self.client = client

    async def lookup_digest(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate
    ) -> Optional[ContentDigest]:
        """Digest of the untranslated content behind the dotted metafield key."""
        for content in await self.client.fetch_translatable_content(resource_id):
            if content.get("key") == coordinate.translation_key:
                return ContentDigest.from_content(content)
        return None

    async def register_via_graphql(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate,
        locale: str,
        value: str
    ) -> Optional[Dict[str, Any]]:
        """
        Register a translation with the ``translationsRegister`` mutation.

        Returns:
            Optional[Dict[str, Any]]: The registered translation, or None if no
            digest exists, the call fails, or Shopify reports user errors
        """
        key = coordinate.translation_key
        try:
            digest = await self.lookup_digest(resource_id, coordinate)
            if digest is None:
                logger.warning(f"No translatable content digest for {key} on {resource_id}")
                return None

            data = await self.client.query(
                TRANSLATIONS_REGISTER_MUTATION,
                {
                    "resourceId": resource_id.gid,
                    "translations": [{
                        "locale": locale,
                        "key": key,
                        "value": value,
                        "translatableContentDigest": digest.digest,
                    }],
                }
            )
        except Exception as e:
            logger.warning(f"GraphQL translation registration for {key} failed: {str(e)}")
            return None

        payload = data.get("translationsRegister") or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            logger.warning(
                f"GraphQL translation registration for {key} rejected: "
                f"{'; '.join(str(e.get('message')) for e in user_errors)}"
            )
            return None

        translations = payload.get("translations") or []
        logger.info(f"Registered {locale} translation for {key} on {resource_id} via GraphQL")
        return translations[0] if translations else {"key": key, "locale": locale, "value": value}

    async def register_via_rest(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate,
        locale: str,
        value: str
    ) -> Optional[Dict[str, Any]]:
        """
        Register a translation through the REST ``translations.json`` endpoint.

        Returns:
            Optional[Dict[str, Any]]: Upstream response body, or None on failure
        """
        key = coordinate.translation_key
        payload = {
            "translation": {
                "locale": locale,
                "key": key,
                "value": value,
                "resource_id": resource_id.numeric_id,
                "resource_type": resource_id.resource_type,
            }
        }
        try:
            response = await self.client.post_rest("translations.json", payload)
        except Exception as e:
            logger.warning(f"REST translation registration for {key} failed: {str(e)}")
            return None

        logger.info(f"Registered {locale} translation for {key} on {resource_id} via REST")
        return response or payload["translation"]
