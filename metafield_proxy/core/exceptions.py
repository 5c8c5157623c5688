from fastapi import status
from typing import Any, Dict, Iterable, Optional


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class. Responses carry
    the message under a single ``error`` member.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the response body."""
        return {"error": self.detail}


class ValidationException(APIException):
    """Exception raised when request data is missing or malformed."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            context=merged_context
        )


class MissingParametersError(ValidationException):
    """Exception raised when required body fields are absent."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            detail=f"Missing required parameters: {', '.join(self.missing)}",
            code="missing_parameters",
            context={"missing": self.missing}
        )


class NotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        detail: str = "Resource not found",
        code: str = "not_found_error",
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            context=context
        )


class UpstreamError(APIException):
    """Exception raised when a call to the commerce platform fails."""

    def __init__(
        self,
        detail: str = "Upstream request failed",
        code: str = "upstream_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception

        if original_exception and self.context is not None:
            self.context["original_error"] = str(original_exception)


class TranslationError(APIException):
    """Exception raised when the machine translation API call fails."""

    def __init__(
        self,
        detail: str = "Machine translation failed",
        code: str = "translation_error",
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            code=code
        )
        self.original_exception = original_exception
