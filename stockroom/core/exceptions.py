"""
Custom Application Exceptions
"""
from typing import Dict, List, Optional


class StockroomException(Exception):
    """Base exception for the Stockroom application"""
    status_code = 500
    code = "SERVER_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class ValidationError(StockroomException):
    """Raised when data validation fails"""
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field_errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.field_errors = field_errors


class UnauthorizedError(StockroomException):
    """Raised for a missing, invalid or expired credential"""
    status_code = 401
    code = "UNAUTHORIZED"


class InsufficientPermissionsError(StockroomException):
    """Raised when user lacks required permissions"""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(StockroomException):
    """Raised when a referenced record does not exist"""
    status_code = 404
    code = "NOT_FOUND"


class BusinessLogicError(StockroomException):
    """Raised when business rules are violated"""
    status_code = 400
    code = "CONFLICT"


class CategoryInUseError(BusinessLogicError):
    code = "CATEGORY_IN_USE"


class EmailInUseError(BusinessLogicError):
    code = "EMAIL_IN_USE"


class InsufficientStockError(BusinessLogicError):
    """Raised when an outbound movement exceeds the quantity on hand"""
    code = "INSUFFICIENT_STOCK"

    def __init__(self, available: float, requested: float):
        super().__init__(f"Insufficient stock. Available: {available:g}, Requested: {requested:g}")
        self.available = available
        self.requested = requested
