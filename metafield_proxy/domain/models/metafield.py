import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

GID_PATTERN = re.compile(r"^gid://shopify/(?P<type>[A-Za-z]+)/(?P<id>\d+)$")
DEFAULT_RESOURCE_TYPE = "Product"


@dataclass(frozen=True)
class ResourceId:
    """Global id of a commerce resource, e.g. ``gid://shopify/Product/111``."""

    gid: str
    resource_type: str
    numeric_id: int

    @classmethod
    def parse(cls, value: Any) -> "ResourceId":
        """
        Parse a global id, or promote a bare numeric id to a Product gid.

        Raises:
            ValueError: If the value is neither shape.
        """
        text = str(value).strip()
        if text.isdigit():
            return cls(
                gid=f"gid://shopify/{DEFAULT_RESOURCE_TYPE}/{text}",
                resource_type=DEFAULT_RESOURCE_TYPE,
                numeric_id=int(text),
            )

        match = GID_PATTERN.match(text)
        if not match:
            raise ValueError(f"Invalid resource id: {text!r}")

        return cls(gid=text, resource_type=match.group("type"), numeric_id=int(match.group("id")))

    def __str__(self) -> str:
        return self.gid


@dataclass(frozen=True)
class MetafieldCoordinate:
    """Namespace and key addressing one metafield on a resource."""

    namespace: str
    key: str

    @property
    def translation_key(self) -> str:
        """Dotted key used by the translation subsystem."""
        return f"metafields.{self.namespace}.{self.key}"


@dataclass
class OriginalMetafield:
    """Untranslated metafield value as stored upstream."""

    value: str
    type: Optional[str] = None


@dataclass
class ContentDigest:
    """Integrity token for the current untranslated content of one field."""

    key: str
    digest: str
    value: Optional[str] = None
    locale: Optional[str] = None

    @classmethod
    def from_content(cls, content: Dict[str, Any]) -> Optional["ContentDigest"]:
        if not content.get("digest"):
            return None
        return cls(
            key=content.get("key", ""),
            digest=content["digest"],
            value=content.get("value"),
            locale=content.get("locale"),
        )
