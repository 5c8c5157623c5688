from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from metafield_proxy.api.dependencies import get_translation_service
from metafield_proxy.core.config import Settings, get_settings
from metafield_proxy.core.exceptions import (
    MissingParametersError,
    NotFoundError,
    UpstreamError,
    ValidationException,
)
from metafield_proxy.core.logging import get_logger
from metafield_proxy.domain.models.metafield import MetafieldCoordinate, ResourceId
from metafield_proxy.domain.schemas.requests import (
    MetafieldQueryRequest,
    OriginalMetafieldRequest,
    RequestBody,
    TranslatedMetafieldRequest,
)
from metafield_proxy.services.translation_service import MetafieldTranslationService

metafield_router = APIRouter()
logger = get_logger(__name__)


def _require(body: RequestBody) -> None:
    missing = body.missing_fields()
    if missing:
        raise MissingParametersError(missing)


def _resource_id(value: Any) -> ResourceId:
    try:
        return ResourceId.parse(value)
    except ValueError as e:
        raise ValidationException(str(e), field="productId")


@metafield_router.post("/get-metafield", summary="Forward a GraphQL query to Shopify")
async def get_metafield(
    request: MetafieldQueryRequest,
    service: MetafieldTranslationService = Depends(get_translation_service),
) -> Dict[str, Any]:
    """Returns the upstream response verbatim."""
    _require(request)
    return await service.proxy_query(request.model_dump(include={"query", "variables"}, exclude_none=True))


@metafield_router.post("/get-translated-metafield", summary="Get or create a metafield translation")
async def get_translated_metafield(
    request: TranslatedMetafieldRequest,
    service: MetafieldTranslationService = Depends(get_translation_service),
    settings: Settings = Depends(get_settings),
):
    """Gets a metafield in the requested locale, creating a translation if needed."""
    _require(request)
    resource_id = _resource_id(request.productId)
    locale = request.locale or settings.DEFAULT_TARGET_LOCALE
    metafield_key = MetafieldCoordinate(request.namespace, request.key).translation_key

    try:
        result = await service.get_or_create_metafield_translation(
            resource_id, request.namespace, request.key, locale
        )
    except (NotFoundError, UpstreamError) as e:
        logger.error(f"Failed to resolve {locale} translation of {metafield_key}: {e.detail}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Failed to get translated metafield: {e.detail}"}
        )

    return {
        "success": True,
        "value": result.value,
        "locale": result.locale,
        "isTranslated": result.is_translated,
        "source": result.source.value,
        "requestedLocale": locale,
        "metafieldKey": metafield_key,
        "message": result.message,
    }


@metafield_router.post("/get-original-metafield", summary="Get the untranslated metafield value")
async def get_original_metafield(
    request: OriginalMetafieldRequest,
    service: MetafieldTranslationService = Depends(get_translation_service),
):
    """Gets the metafield value in the shop's source language."""
    _require(request)
    resource_id = _resource_id(request.productId)
    original = await service.get_original_metafield(resource_id, request.namespace, request.key)

    return {
        "success": True,
        "originalValue": original.value,
        "type": original.type,
        "metafieldKey": MetafieldCoordinate(request.namespace, request.key).translation_key,
    }
