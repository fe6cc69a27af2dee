from typing import Optional

from shared.utils.app_status_code import AppStatusCode


class InventoryError(Exception):
    """Base class for errors reported to the caller as a JsonOutResult."""

    http_status = 400
    status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(InventoryError):
    http_status = 400
    status_code = AppStatusCode.INVALID_INPUT


class NotFoundError(InventoryError):
    http_status = 404
    status_code = AppStatusCode.DATA_NOT_FOUND


class ConflictError(InventoryError):
    http_status = 409
    status_code = AppStatusCode.REFERENCE_CONFLICT


class InsufficientStockError(ConflictError):
    status_code = AppStatusCode.INSUFFICIENT_STOCK

    def __init__(self, available: int, requested: int):
        super().__init__(
            f"Insufficient stock: {available} available, {requested} requested",
            field="quantity",
        )
        self.available = available
        self.requested = requested


class InternalError(InventoryError):
    http_status = 500
    status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
