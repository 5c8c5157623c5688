"""
Pytest configuration and shared fixtures for the metafield proxy tests.
"""
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from metafield_proxy.core.config import Settings
from metafield_proxy.domain.models.metafield import MetafieldCoordinate, ResourceId

SHOP = "test-shop.myshopify.com"
ADMIN_URL = f"https://{SHOP}/admin/api/2025-07"


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        SHOPIFY_SHOP_NAME=SHOP,
        SHOPIFY_ADMIN_TOKEN="shpat_test",
        SHOPIFY_API_VERSION="2025-07",
        CORS_ALLOWED_ORIGIN="https://storefront.example.com",
        GOOGLE_TRANSLATE_API_KEY="google-test-key",
        MACHINE_TRANSLATION_ENABLED=True,
        SOURCE_LOCALE="en",
        DEFAULT_TARGET_LOCALE="de",
        AUTO_TRANSLATE_SETTLE_SECONDS=5.0,
        ENABLE_STRUCTURED_LOGGING=False,
    )


@pytest.fixture
def resource_id():
    return ResourceId.parse("gid://shopify/Product/111")


@pytest.fixture
def coordinate():
    return MetafieldCoordinate("custom", "desc")


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def json_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def make_transport():
    """Build a recording transport from a request handler."""
    return RecordingTransport
