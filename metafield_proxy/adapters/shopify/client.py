from typing import Any, Dict, List, Optional

import httpx

from metafield_proxy.core.config import Settings
from metafield_proxy.core.exceptions import UpstreamError
from metafield_proxy.core.logging import get_logger
from metafield_proxy.domain.models.metafield import (
    MetafieldCoordinate,
    OriginalMetafield,
    ResourceId,
)

logger = get_logger(__name__)

TRANSLATIONS_QUERY = """
query GetTranslations($resourceId: ID!, $locale: String!) {
  translatableResource(resourceId: $resourceId) {
    resourceId
    translations(locale: $locale) {
      key
      value
      locale
      outdated
    }
  }
}
"""

METAFIELD_QUERY = """
query GetMetafield($id: ID!, $namespace: String!, $key: String!) {
  product(id: $id) {
    id
    metafield(namespace: $namespace, key: $key) {
      value
      type
    }
  }
}
"""

TRANSLATABLE_CONTENT_QUERY = """
query GetTranslatableContent($resourceId: ID!) {
  translatableResource(resourceId: $resourceId) {
    resourceId
    translatableContent {
      key
      value
      digest
      locale
    }
  }
}
"""


class ShopifyClient:
    """
    Client for the Shopify Admin API.

    Every call is a single attempt over a fresh connection; transport and
    request-level failures surface as UpstreamError.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the client.

        Args:
            settings: Application settings with shop name, token and API version
            transport: Optional httpx transport, used to stub the upstream in tests
        """
        self.base_url = settings.shopify_admin_url
        self.timeout = settings.DEFAULT_TIMEOUT
        self.headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": settings.SHOPIFY_ADMIN_TOKEN,
        }
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, headers=self.headers, transport=self._transport)

    async def _post(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling {url}: {str(e)}")
            raise UpstreamError(f"Request to Shopify failed: {str(e)}", original_exception=e)

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Shopify returned a non-JSON response (status {response.status_code})",
                original_exception=e
            )

    async def execute_raw(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Forward a GraphQL payload and return the upstream body verbatim.

        Args:
            payload: GraphQL request body ({query, variables})

        Returns:
            Dict[str, Any]: Parsed upstream response, including any ``errors``

        Raises:
            UpstreamError: If the transport call fails or the body is not JSON
        """
        response = await self._post(f"{self.base_url}/graphql.json", payload)
        return self._json(response)

    async def query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL document and return its ``data`` object.

        Raises:
            UpstreamError: On transport failure, non-2xx status, or a
                request-level ``errors`` member in the body
        """
        payload: Dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        response = await self._post(f"{self.base_url}/graphql.json", payload)
        if response.is_error:
            raise UpstreamError(
                f"Shopify GraphQL request failed with status {response.status_code}",
                context={"status_code": response.status_code}
            )

        body = self._json(response)
        if not isinstance(body, dict):
            raise UpstreamError(
                f"Shopify GraphQL response is not a JSON object (got {type(body).__name__})",
                context={"status_code": response.status_code}
            )
        if body.get("errors"):
            raise UpstreamError(
                f"Shopify GraphQL request returned errors: {_error_messages(body['errors'])}",
                context={"errors": body["errors"]}
            )
        return body.get("data") or {}

    async def post_rest(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST to a REST Admin API endpoint.

        Args:
            path: Endpoint path relative to the versioned Admin API root
            payload: JSON body

        Raises:
            UpstreamError: On transport failure or non-2xx status
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        response = await self._post(url, payload)
        if response.is_error:
            raise UpstreamError(
                f"Shopify REST request to {path} failed with status {response.status_code}",
                context={"status_code": response.status_code, "body": response.text[:500]}
            )
        if not response.content:
            return {}
        return self._json(response)

    async def fetch_translations(self, resource_id: ResourceId, locale: str) -> List[Dict[str, Any]]:
        """Translations stored for a resource in one locale."""
        data = await self.query(
            TRANSLATIONS_QUERY,
            {"resourceId": resource_id.gid, "locale": locale}
        )
        resource = data.get("translatableResource") or {}
        return resource.get("translations") or []

    async def find_translation(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate,
        locale: str
    ) -> Optional[Dict[str, Any]]:
        """The stored translation of one metafield, if present."""
        for translation in await self.fetch_translations(resource_id, locale):
            if translation.get("key") == coordinate.translation_key:
                return translation
        return None

    async def fetch_metafield(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate
    ) -> Optional[OriginalMetafield]:
        """Untranslated metafield value, or None when the product or field is absent."""
        data = await self.query(
            METAFIELD_QUERY,
            {"id": resource_id.gid, "namespace": coordinate.namespace, "key": coordinate.key}
        )
        product = data.get("product") or {}
        metafield = product.get("metafield")
        if not metafield or metafield.get("value") is None:
            return None
        return OriginalMetafield(value=metafield["value"], type=metafield.get("type"))

    async def fetch_translatable_content(self, resource_id: ResourceId) -> List[Dict[str, Any]]:
        """All translatable content of a resource, with digests."""
        data = await self.query(TRANSLATABLE_CONTENT_QUERY, {"resourceId": resource_id.gid})
        resource = data.get("translatableResource") or {}
        return resource.get("translatableContent") or []


def _error_messages(errors: Any) -> str:
    if isinstance(errors, list):
        return "; ".join(
            e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
        )
    return str(errors)
