"""
Custom exceptions for the application.
Following domain-driven design principles with specific exception types.
"""


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationException):
    """Raised when validation fails (bad input, monetary caps exceeded)"""
    default_message = "Validation failed"


class NotFoundError(BaseApplicationException):
    """Raised when a referenced room/user/record is absent"""
    default_message = "Resource not found"

    def __init__(self, resource_type=None, resource_id=None, **kwargs):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if resource_type and 'message' not in kwargs:
            kwargs['message'] = f"{resource_type} not found"
        super().__init__(**kwargs)


class UnauthorizedError(BaseApplicationException):
    """Raised when there is no session or the user lacks the required role/permission"""
    default_message = "Unauthorized"
