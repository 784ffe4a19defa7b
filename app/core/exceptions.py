# =====================================================
# FILE: app/core/exceptions.py
# Typed domain errors raised by the service layer
# =====================================================

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code: int = 400
    code: str = "app_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class ContractNotFoundError(NotFoundError):
    code = "contract_not_found"

    def __init__(self, contract_id: str):
        super().__init__("Contract not found", {"contract_id": contract_id})


class UserNotFoundError(NotFoundError):
    code = "user_not_found"

    def __init__(self, user_id: str):
        super().__init__("User not found", {"user_id": user_id})


class TemplateNotFoundError(NotFoundError):
    code = "template_not_found"

    def __init__(self, template_id: str):
        super().__init__("Template not found", {"template_id": template_id})


class NotificationNotFoundError(NotFoundError):
    code = "notification_not_found"

    def __init__(self, notification_id: str):
        super().__init__("Notification not found", {"notification_id": notification_id})


class AuthenticationError(AppError):
    status_code = 401
    code = "not_authenticated"


class PermissionDeniedError(AppError):
    status_code = 403
    code = "permission_denied"


class ValidationError(AppError):
    status_code = 422
    code = "validation_error"


class ContractValidationError(ValidationError):
    code = "contract_invalid"


class TemplateValidationError(ValidationError):
    code = "template_invalid"


class DuplicateEmailError(AppError):
    status_code = 409
    code = "duplicate_email"

    def __init__(self, email: str):
        super().__init__("A user with this email already exists", {"email": email})


class WorkflowError(AppError):
    """Base class for contract status transition failures"""
    status_code = 409
    code = "workflow_error"


class IllegalTransitionError(WorkflowError):
    """No transition exists from the current status to the requested one"""
    code = "illegal_transition"

    def __init__(self, current_status: str, requested: str):
        super().__init__(
            f"Cannot move contract from '{current_status}' to '{requested}'",
            {"current_status": current_status, "requested": requested}
        )
        self.current_status = current_status
        self.requested = requested


class TransitionNotPermittedError(PermissionDeniedError):
    """The transition exists but the acting user may not perform it"""
    code = "transition_not_permitted"

    def __init__(self, current_status: str, requested: str, role: str):
        super().__init__(
            f"Role '{role}' may not move contract from '{current_status}' to '{requested}'",
            {"current_status": current_status, "requested": requested, "role": role}
        )
        self.current_status = current_status
        self.requested = requested
        self.role = role
