class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, code: str = "app_error", details: dict = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when a grid edit request is invalid for the target cell."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, code="scheduler_error", details=details)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            code="not_found",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )

class ConfigurationError(AppError):
    """Raised when engine configuration cannot be honoured."""
    def __init__(self, message: str):
        super().__init__(message, code="configuration_error")
