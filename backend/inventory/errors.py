"""Error family shared by services, the store adapter and the HTTP layer."""

from typing import Any


class InventoryError(Exception):
    """Base error. Carries everything the HTTP error envelope needs."""

    status_code: int = 500
    default_code: str = "SERVER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        field: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.field = field
        self.details = details

    def to_error_body(self) -> dict:
        body: dict[str, Any] = {"code": self.code}
        if self.field:
            body["field"] = self.field
        if self.details:
            body["details"] = self.details
        return body

    def to_response(self) -> dict:
        return {"success": False, "message": self.message, "error": self.to_error_body()}


class ValidationError(InventoryError):
    """Shape, range or pattern violation. Nothing has been written."""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class ConflictError(InventoryError):
    """Uniqueness or date-overlap violation."""

    status_code = 409
    default_code = "CONFLICT"


class NotFoundError(InventoryError):
    status_code = 404
    default_code = "NOT_FOUND"


class BatchFailure(InventoryError):
    """Every item of a non-empty batch failed."""

    status_code = 400
    default_code = "ALL_FAILED"


class StoreError(InventoryError):
    """The entity store rejected or could not perform an operation."""

    status_code = 500
    default_code = "STORE_ERROR"
