from typing import Any, Mapping, Optional


class SmartPantryError(Exception):
    """Base for errors the API layer renders as ``{success: false, error: ...}``.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, upstream body)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(SmartPantryError):
    """Input is invalid or a precondition for a service call is not met (400)."""

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(SmartPantryError):
    """A profile, meal plan or recipe does not exist (404)."""

    http_status = 404
    default_message = "Not found"


class ExternalServiceError(SmartPantryError):
    """A recipe provider answered with a non-2xx status or an unparseable body.

    ``status_code`` is the upstream status, None when the request never got
    a response (DNS, timeout, refused connection).
    """

    http_status = 502
    default_message = "External service error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details, code)
        self.provider = provider
        self.status_code = status_code

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.provider:
            payload["provider"] = self.provider
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload
