from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


class RequestBody(BaseModel):
    """Base for request bodies whose required fields are checked by the route."""

    model_config = ConfigDict(extra="allow")

    required_fields: ClassVar[Tuple[str, ...]] = ()

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent, empty or blank."""
        return [
            name for name in self.required_fields
            if getattr(self, name) is None or str(getattr(self, name)).strip() == ""
        ]


class MetafieldQueryRequest(RequestBody):
    """Raw GraphQL pass-through body."""
    query: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None

    required_fields: ClassVar[Tuple[str, ...]] = ("query",)


class OriginalMetafieldRequest(RequestBody):
    """Body addressing one metafield on a product."""
    productId: Optional[Union[str, int]] = None
    namespace: Optional[str] = None
    key: Optional[str] = None

    required_fields: ClassVar[Tuple[str, ...]] = ("productId", "namespace", "key")


class TranslatedMetafieldRequest(OriginalMetafieldRequest):
    """Body addressing one metafield plus the requested locale."""
    locale: Optional[str] = None
