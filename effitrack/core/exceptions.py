from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            message=f"{entity} {entity_id} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"entity": entity, "id": str(entity_id)}
        )

class DuplicateEmailError(AppException):
    def __init__(self, email: str):
        super().__init__(
            message=f"An employee with email {email} already exists",
            status_code=409,
            error_code="DUPLICATE_EMAIL",
            details={"email": email}
        )

class ProjectAssignmentError(AppException):
    """Project row was saved but its assignments were not."""
    def __init__(self, project_id: str, reason: str):
        super().__init__(
            message=f"Project created but employees could not be assigned: {reason}",
            status_code=409,
            error_code="PROJECT_ASSIGNMENT_FAILED",
            details={"project_id": project_id}
        )

class ConfigurationError(AppException):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=500,
            error_code="CONFIGURATION_ERROR"
        )

class MailDeliveryError(AppException):
    def __init__(self, message: str, recipient: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=502,
            error_code="MAIL_DELIVERY_FAILED",
            details={"recipient": recipient}
        )

class AIError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=503,
            error_code="AI_SERVICE_UNAVAILABLE",
            details=details
        )
