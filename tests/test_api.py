"""
Tests for the FastAPI routes in api/routes.
"""
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from metafield_proxy.api.dependencies import get_translation_service
from metafield_proxy.core.config import get_settings
from metafield_proxy.core.exceptions import NotFoundError, UpstreamError
from metafield_proxy.domain.models import OriginalMetafield, TranslationResult, TranslationSource
from metafield_proxy.main import create_application
from metafield_proxy.services.translation_service import MetafieldTranslationService

PRODUCT_ID = "gid://shopify/Product/111"


@pytest.fixture
def service():
    mock = MagicMock(spec=MetafieldTranslationService)
    mock.proxy_query = AsyncMock()
    mock.get_original_metafield = AsyncMock(
        return_value=OriginalMetafield("Red shoes", "single_line_text_field")
    )
    mock.get_or_create_metafield_translation = AsyncMock(return_value=TranslationResult(
        value="Rote Schuhe",
        locale="de",
        is_translated=True,
        source=TranslationSource.GOOGLE_TRANSLATE_REGISTERED_REST,
        message="Translated with Google Translate and saved to Shopify (rest)",
    ))
    return mock


@pytest.fixture
def test_client(settings, service):
    app = create_application(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_translation_service] = lambda: service

    with TestClient(app) as client:
        yield client


class TestHealthEndpoint:

    def test_health_check_returns_ok(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["machine_translation"] is True

    def test_startup_warns_about_missing_shopify_settings(self, settings, caplog):
        incomplete = settings.model_copy(update={"SHOPIFY_SHOP_NAME": "", "SHOPIFY_ADMIN_TOKEN": ""})

        with caplog.at_level(logging.WARNING, logger="metafield_proxy.main"):
            with TestClient(create_application(incomplete)):
                pass

        assert "SHOPIFY_SHOP_NAME, SHOPIFY_ADMIN_TOKEN" in caplog.text

    def test_correlation_id_is_echoed(self, test_client):
        response = test_client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"


class TestCors:

    def test_preflight_allows_configured_origin(self, test_client):
        response = test_client.options(
            "/api/get-translated-metafield",
            headers={
                "Origin": "https://storefront.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://storefront.example.com"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_other_origin_not_allowed(self, test_client):
        response = test_client.post(
            "/api/get-original-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc"},
            headers={"Origin": "https://evil.example.com"},
        )

        assert "access-control-allow-origin" not in response.headers


class TestGetMetafield:

    def test_passes_upstream_response_through(self, test_client, service):
        upstream = {"data": {"product": None}, "extensions": {"cost": {"requestedQueryCost": 1}}}
        service.proxy_query.return_value = upstream

        response = test_client.post("/api/get-metafield", json={"query": "{ product(id: \"x\") { id } }"})

        assert response.status_code == 200
        assert response.json() == upstream
        service.proxy_query.assert_awaited_once_with({"query": "{ product(id: \"x\") { id } }"})

    def test_transport_failure_returns_500(self, test_client, service):
        service.proxy_query.side_effect = UpstreamError("Request to Shopify failed: connection refused")

        response = test_client.post("/api/get-metafield", json={"query": "{ shop { name } }"})

        assert response.status_code == 500
        assert response.json() == {"error": "Request to Shopify failed: connection refused"}

    def test_missing_query_returns_400(self, test_client):
        response = test_client.post("/api/get-metafield", json={})

        assert response.status_code == 400
        assert "query" in response.json()["error"]


class TestGetTranslatedMetafield:

    def test_returns_translation(self, test_client, service):
        response = test_client.post(
            "/api/get-translated-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc", "locale": "de"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "value": "Rote Schuhe",
            "locale": "de",
            "isTranslated": True,
            "source": "google_translate_registered_rest",
            "requestedLocale": "de",
            "metafieldKey": "metafields.custom.desc",
            "message": "Translated with Google Translate and saved to Shopify (rest)",
        }
        resource_id, namespace, key, locale = service.get_or_create_metafield_translation.await_args.args
        assert resource_id.gid == PRODUCT_ID
        assert (namespace, key, locale) == ("custom", "desc", "de")

    def test_locale_defaults_to_de(self, test_client, service):
        response = test_client.post(
            "/api/get-translated-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 200
        assert response.json()["requestedLocale"] == "de"
        assert service.get_or_create_metafield_translation.await_args.args[3] == "de"

    def test_missing_parameters_return_400(self, test_client, service):
        response = test_client.post("/api/get-translated-metafield", json={"productId": "x"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert "namespace" in error
        assert "key" in error
        service.get_or_create_metafield_translation.assert_not_called()

    def test_blank_parameters_return_400(self, test_client, service):
        response = test_client.post(
            "/api/get-translated-metafield",
            json={"productId": PRODUCT_ID, "namespace": "   ", "key": "\t"},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert "namespace" in error
        assert "key" in error
        service.get_or_create_metafield_translation.assert_not_called()

    def test_invalid_product_id_returns_400(self, test_client, service):
        response = test_client.post(
            "/api/get-translated-metafield",
            json={"productId": "x", "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 400
        assert "Invalid resource id" in response.json()["error"]
        service.get_or_create_metafield_translation.assert_not_called()

    def test_not_found_is_wrapped_as_500(self, test_client, service):
        service.get_or_create_metafield_translation.side_effect = NotFoundError("Metafield not found")

        response = test_client.post(
            "/api/get-translated-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to get translated metafield: Metafield not found"}

    def test_upstream_failure_is_wrapped_as_500(self, test_client, service):
        service.get_or_create_metafield_translation.side_effect = UpstreamError("Request to Shopify failed")

        response = test_client.post(
            "/api/get-translated-metafield",
            json={"productId": 111, "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to get translated metafield:")

    def test_malformed_body_returns_400(self, test_client):
        response = test_client.post(
            "/api/get-translated-metafield",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestGetOriginalMetafield:

    def test_returns_original_value(self, test_client):
        response = test_client.post(
            "/api/get-original-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "originalValue": "Red shoes",
            "type": "single_line_text_field",
            "metafieldKey": "metafields.custom.desc",
        }

    def test_absent_metafield_returns_404(self, test_client, service):
        service.get_original_metafield.side_effect = NotFoundError("Metafield not found")

        response = test_client.post(
            "/api/get-original-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Metafield not found"}

    def test_missing_parameters_return_400(self, test_client):
        response = test_client.post("/api/get-original-metafield", json={"namespace": "custom"})

        assert response.status_code == 400
        assert "productId" in response.json()["error"]

    def test_transport_failure_returns_500(self, test_client, service):
        service.get_original_metafield.side_effect = UpstreamError("Request to Shopify failed: timeout")

        response = test_client.post(
            "/api/get-original-metafield",
            json={"productId": PRODUCT_ID, "namespace": "custom", "key": "desc"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Request to Shopify failed: timeout"}
