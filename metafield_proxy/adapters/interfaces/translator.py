from abc import ABC, abstractmethod
from typing import List, Tuple

# Separates translatable text from trailing technical data in a value.
SEGMENT_SEPARATOR = "~~"


def split_composite(value: str) -> Tuple[str, List[str]]:
    """Split a value into its translatable head and opaque trailing segments."""
    head, *tail = value.split(SEGMENT_SEPARATOR)
    return head, tail


def join_composite(head: str, tail: List[str]) -> str:
    """Reattach opaque segments to a translated head."""
    return SEGMENT_SEPARATOR.join([head, *tail])


class MachineTranslator(ABC):
    """
    Abstract base interface for machine translation adaptors.

    Implementations translate only the text before the first separator and
    reattach the remaining segments verbatim.
    """

    async def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        """
        Translate a possibly composite value.

        Args:
            text: Value to translate
            source_locale: Locale of the value
            target_locale: Locale to translate into

        Returns:
            str: Translated value with trailing segments untouched

        Raises:
            TranslationError: If the translation API call fails
        """
        head, tail = split_composite(text)
        if not head.strip():
            return text

        translated = await self.translate_text(head, source_locale, target_locale)
        return join_composite(translated, tail)

    @abstractmethod
    async def translate_text(self, text: str, source_locale: str, target_locale: str) -> str:
        """Translate plain text with no separator handling."""
        pass
