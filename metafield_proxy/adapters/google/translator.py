import html
from typing import Optional

import httpx

from metafield_proxy.adapters.interfaces.translator import MachineTranslator
from metafield_proxy.core.config import Settings
from metafield_proxy.core.exceptions import TranslationError
from metafield_proxy.core.logging import get_logger

logger = get_logger(__name__)


class GoogleTranslator(MachineTranslator):
    """Machine translation through the Google Cloud Translation v2 REST API."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        if not settings.GOOGLE_TRANSLATE_API_KEY:
            raise ValueError("Google Translate API key is required")

        self.api_key = settings.GOOGLE_TRANSLATE_API_KEY
        self.url = settings.GOOGLE_TRANSLATE_URL
        self.timeout = settings.DEFAULT_TIMEOUT
        self._transport = transport

    async def translate_text(self, text: str, source_locale: str, target_locale: str) -> str:
        payload = {
            "q": text,
            "source": _language(source_locale),
            "target": _language(target_locale),
            "format": "text",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, params={"key": self.api_key}, json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Google Translate: {str(e)}")
            raise TranslationError(f"Google Translate request failed: {str(e)}", original_exception=e)
        except ValueError as e:
            raise TranslationError("Google Translate returned a non-JSON response", original_exception=e)

        try:
            translated = body["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError("Google Translate response has no translation", original_exception=e)

        logger.debug(f"Translated {len(text)} characters from {source_locale} to {target_locale}")
        return html.unescape(translated)


def _language(locale: str) -> str:
    """Google expects language codes; region subtags other than zh are dropped."""
    language = locale.replace("_", "-")
    if language.lower().startswith("zh"):
        return language
    return language.split("-")[0]
