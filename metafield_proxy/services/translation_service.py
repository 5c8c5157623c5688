import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

from metafield_proxy.adapters.interfaces.translator import MachineTranslator
from metafield_proxy.adapters.shopify.auto_translate import AutoTranslationTrigger
from metafield_proxy.adapters.shopify.client import ShopifyClient
from metafield_proxy.adapters.shopify.registration import TranslationRegistrar
from metafield_proxy.core.config import Settings
from metafield_proxy.core.exceptions import NotFoundError
from metafield_proxy.core.logging import get_logger
from metafield_proxy.domain.models.metafield import (
    MetafieldCoordinate,
    OriginalMetafield,
    ResourceId,
)
from metafield_proxy.domain.models.translation import TranslationResult, TranslationSource
from metafield_proxy.infrastructure.error.fallback import FallbackChain, describe_outcomes

logger = get_logger(__name__)

REGISTRATION_SOURCES = {
    "graphql": TranslationSource.GOOGLE_TRANSLATE_REGISTERED_GRAPHQL,
    "rest": TranslationSource.GOOGLE_TRANSLATE_REGISTERED_REST,
}


class MetafieldTranslationService:
    """Resolves metafield translations, creating them upstream when missing."""

    def __init__(
        self,
        settings: Settings,
        client: ShopifyClient,
        registrar: TranslationRegistrar,
        auto_trigger: AutoTranslationTrigger,
        translator: Optional[MachineTranslator] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Initialize with collaborators.

        Args:
            settings: Application settings (locales, settle delay)
            client: Shopify Admin API client
            registrar: Translation registration adaptor
            auto_trigger: Shopify auto-translation trigger
            translator: Machine translator; None selects the variant that
                registers the original value instead
            sleep: Coroutine used for the settle delay
        """
        self.settings = settings
        self.client = client
        self.registrar = registrar
        self.auto_trigger = auto_trigger
        self.translator = translator
        self.sleep = sleep

    async def proxy_query(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Forward a raw GraphQL payload to Shopify."""
        return await self.client.execute_raw(payload)

    async def get_original_metafield(
        self,
        resource_id: ResourceId,
        namespace: str,
        key: str
    ) -> OriginalMetafield:
        """
        Gets the untranslated metafield value.

        Raises:
            NotFoundError: If the metafield has no value
            UpstreamError: If the query fails
        """
        coordinate = MetafieldCoordinate(namespace, key)
        original = await self.client.fetch_metafield(resource_id, coordinate)
        if original is None:
            logger.warning(f"Metafield {coordinate.translation_key} not found on {resource_id}")
            raise NotFoundError("Metafield not found", context={"metafield_key": coordinate.translation_key})
        return original

    async def get_or_create_metafield_translation(
        self,
        resource_id: ResourceId,
        namespace: str,
        key: str,
        target_locale: str
    ) -> TranslationResult:
        """
        Returns the metafield value in the target locale, creating a
        translation if none exists.

        Only a missing original value or a failing required query raises;
        every later step degrades to the next strategy.
        """
        coordinate = MetafieldCoordinate(namespace, key)
        dotted_key = coordinate.translation_key
        logger.info(f"Resolving {target_locale} translation of {dotted_key} on {resource_id}")

        existing = await self.client.find_translation(resource_id, coordinate, target_locale)
        if existing is not None:
            logger.debug(f"Existing {target_locale} translation found for {dotted_key}")
            return TranslationResult(
                value=existing.get("value") or "",
                locale=target_locale,
                is_translated=True,
                source=TranslationSource.EXISTING_TRANSLATION,
                message="Existing translation found",
            )

        original = await self.get_original_metafield(resource_id, namespace, key)

        auto_translated = await self._try_auto_translation(resource_id, coordinate, target_locale)
        if auto_translated is not None:
            return auto_translated

        if self.translator is None:
            return await self._register_original(resource_id, coordinate, target_locale, original.value)

        translated = await self._machine_translate(original.value, target_locale)
        if translated is None:
            # An untranslated value must not be stored as the target locale.
            return TranslationResult(
                value=original.value,
                locale=self.settings.SOURCE_LOCALE,
                is_translated=False,
                source=TranslationSource.ORIGINAL_FALLBACK,
                message=(
                    f"Machine translation to {target_locale} failed; "
                    f"the original value is returned and nothing was saved to Shopify."
                ),
            )
        return await self._register_translated(resource_id, coordinate, target_locale, translated)

    async def _try_auto_translation(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate,
        target_locale: str
    ) -> Optional[TranslationResult]:
        ack = await self.auto_trigger.trigger(resource_id, target_locale)
        if ack is None:
            return None

        # Single recheck after a fixed wait; not a poll loop.
        await self.sleep(self.settings.AUTO_TRANSLATE_SETTLE_SECONDS)

        try:
            translation = await self.client.find_translation(resource_id, coordinate, target_locale)
        except Exception as e:
            logger.warning(f"Recheck after auto-translation failed: {str(e)}")
            return None

        if translation is None:
            logger.info(f"Auto-translation of {coordinate.translation_key} not available after recheck")
            return None

        return TranslationResult(
            value=translation.get("value") or "",
            locale=target_locale,
            is_translated=True,
            source=TranslationSource.SHOPIFY_AUTO_TRANSLATION,
            message="Translation created by Shopify auto-translation",
        )

    async def _machine_translate(self, value: str, target_locale: str) -> Optional[str]:
        try:
            return await self.translator.translate(value, self.settings.SOURCE_LOCALE, target_locale)
        except Exception as e:
            logger.warning(f"Machine translation to {target_locale} failed: {str(e)}")
            return None

    async def _register_translated(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate,
        target_locale: str,
        translated: str
    ) -> TranslationResult:
        chain: FallbackChain[Dict[str, Any]] = FallbackChain(
            f"register:{coordinate.translation_key}:{target_locale}", logger
        )
        chain.add_strategy(
            "graphql",
            lambda: self.registrar.register_via_graphql(resource_id, coordinate, target_locale, translated)
        )
        chain.add_strategy(
            "rest",
            lambda: self.registrar.register_via_rest(resource_id, coordinate, target_locale, translated)
        )

        success = await chain.first_success()
        if success is not None:
            return TranslationResult(
                value=translated,
                locale=target_locale,
                is_translated=True,
                source=REGISTRATION_SOURCES[success.name],
                message=f"Translated with Google Translate and saved to Shopify ({success.name})",
            )

        logger.warning(
            f"Could not save {target_locale} translation of {coordinate.translation_key} "
            f"({describe_outcomes(chain.outcomes)})"
        )
        return TranslationResult(
            value=translated,
            locale=target_locale,
            is_translated=True,
            source=TranslationSource.GOOGLE_TRANSLATE_ONLY,
            message="Translated with Google Translate, but the translation could not be saved to Shopify",
        )

    async def _register_original(
        self,
        resource_id: ResourceId,
        coordinate: MetafieldCoordinate,
        target_locale: str,
        original_value: str
    ) -> TranslationResult:
        registered = await self.registrar.register_via_graphql(
            resource_id, coordinate, target_locale, original_value
        )
        if registered is not None:
            return TranslationResult(
                value=original_value,
                locale=target_locale,
                is_translated=False,
                source=TranslationSource.MUTATION_CREATED,
                message=(
                    f"A {target_locale} translation entry was created with the original value. "
                    f"Edit it in Shopify admin to provide the translated text."
                ),
            )

        return TranslationResult(
            value=original_value,
            locale=self.settings.SOURCE_LOCALE,
            is_translated=False,
            source=TranslationSource.ORIGINAL_FALLBACK,
            message=(
                f"No {target_locale} translation exists and none could be created. "
                f"Create it manually in Shopify admin; the original value is returned."
            ),
        )
