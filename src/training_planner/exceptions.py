"""
Custom exceptions for the Training Planner.

This module defines a hierarchy of exceptions that provide clear error
handling throughout the application. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Workout errors
    WORKOUT_VALIDATION_ERROR = "WORKOUT_VALIDATION_ERROR"
    TRAINING_TYPE_NOT_FOUND = "TRAINING_TYPE_NOT_FOUND"
    DUPLICATE_POSITION = "DUPLICATE_POSITION"
    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    WORKOUT_IN_USE = "WORKOUT_IN_USE"

    # Goal errors
    GOAL_NOT_FOUND = "GOAL_NOT_FOUND"

    # Onboarding errors
    ONBOARDING_VALIDATION_ERROR = "ONBOARDING_VALIDATION_ERROR"
    ONBOARDING_SUBMISSION_FAILED = "ONBOARDING_SUBMISSION_FAILED"
    ONBOARDING_SUBMISSION_IN_PROGRESS = "ONBOARDING_SUBMISSION_IN_PROGRESS"
    ONBOARDING_ALREADY_COMPLETED = "ONBOARDING_ALREADY_COMPLETED"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class TrainingPlannerError(Exception):
    """
    Base exception for all Training Planner errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(TrainingPlannerError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class OnboardingValidationError(ValidationError):
    """Raised when an onboarding workout draft fails local validation.

    The per-field messages travel in ``errors`` so the caller can render
    all of them at once.
    """

    def __init__(self, errors: Any) -> None:
        self.errors = errors
        super().__init__(
            message="Workout data is invalid",
            details={"fields": errors.to_dict()},
        )
        self.code = ErrorCode.ONBOARDING_VALIDATION_ERROR


class GoalValidationError(ValidationError):
    """Raised when the goal form has invalid fields."""

    def __init__(self, errors: Any) -> None:
        self.errors = errors
        super().__init__("Goal data is invalid", details={"fields": errors.to_dict()})


# ============================================================================
# Authentication Errors (401/403)
# ============================================================================

class AuthenticationError(TrainingPlannerError):
    """Raised when the request carries no valid credentials."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            message=message,
            code=ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class ForbiddenError(TrainingPlannerError):
    """Raised when the caller is authenticated but lacks privileges."""

    def __init__(self, message: str = "Insufficient privileges") -> None:
        super().__init__(
            message=message,
            code=ErrorCode.FORBIDDEN,
            status_code=403,
        )


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(TrainingPlannerError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


class TrainingTypeNotFoundError(NotFoundError):
    """Raised when a workout references an unknown training type."""

    def __init__(self, code: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="Training type",
            resource_id=code,
            details=details,
        )
        self.code = ErrorCode.TRAINING_TYPE_NOT_FOUND


class WorkoutNotFoundError(NotFoundError):
    """Raised when a workout does not exist or belongs to someone else."""

    def __init__(self, workout_id: str) -> None:
        super().__init__(resource_type="Workout", resource_id=workout_id)
        self.code = ErrorCode.WORKOUT_NOT_FOUND


class GoalNotFoundError(TrainingPlannerError):
    """Raised when deleting a goal that does not exist."""

    def __init__(self, user_id: Optional[str] = None) -> None:
        super().__init__(
            message="No goal found to delete",
            code=ErrorCode.GOAL_NOT_FOUND,
            status_code=404,
            details={"user_id": user_id} if user_id else None,
        )


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class ConflictError(TrainingPlannerError):
    """Raised when there's a resource conflict."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            status_code=409,
            details=details,
        )


class DuplicatePositionError(ConflictError):
    """Raised when a workout already occupies the same day and position."""

    def __init__(self, planned_date: str, position: int) -> None:
        super().__init__(
            message=f"A workout already exists on {planned_date} at position {position}",
            details={"planned_date": planned_date, "position": position},
        )
        self.code = ErrorCode.DUPLICATE_POSITION


class InvalidStatusTransitionError(ConflictError):
    """Raised when a lifecycle action does not apply to the workout's status."""

    def __init__(self, message: str, current_status: str) -> None:
        super().__init__(message=message, details={"current_status": current_status})
        self.code = ErrorCode.INVALID_STATUS_TRANSITION


class WorkoutInUseError(ConflictError):
    """Raised when deleting a workout that other records still reference."""

    def __init__(self, workout_id: str) -> None:
        super().__init__(
            message="Workout is still referenced by other records and cannot be deleted",
            details={"workout_id": workout_id},
        )
        self.code = ErrorCode.WORKOUT_IN_USE


class SubmissionInProgressError(ConflictError):
    """Raised when the onboarding batch is submitted again while in flight."""

    def __init__(self) -> None:
        super().__init__(message="Workouts are already being saved")
        self.code = ErrorCode.ONBOARDING_SUBMISSION_IN_PROGRESS


class OnboardingCompletedError(ConflictError):
    """Raised when a step is submitted after onboarding finished."""

    def __init__(self) -> None:
        super().__init__(message="Onboarding is already completed")
        self.code = ErrorCode.ONBOARDING_ALREADY_COMPLETED


# ============================================================================
# Client-side API Errors
# ============================================================================

class ApiClientError(TrainingPlannerError):
    """Raised by the HTTP clients when the API call fails.

    ``status_code`` is the HTTP status of the response, or ``None`` when the
    request never got one (network failure, timeout).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message=message)
        self.status_code = status_code
        self.api_code = code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_server_error(self) -> bool:
        return self.status_code is not None and self.status_code >= 500


class WorkoutSubmissionError(TrainingPlannerError):
    """Raised when the onboarding batch could not be saved.

    Carries the first failure in step order: the 1-based step index and the
    HTTP status code when one was received.
    """

    def __init__(
        self,
        message: str,
        step: Optional[int] = None,
        http_status: Optional[int] = None,
    ) -> None:
        self.step = step
        self.http_status = http_status
        details: Dict[str, Any] = {}
        if step is not None:
            details["step"] = step
        if http_status is not None:
            details["http_status"] = http_status
        super().__init__(
            message=message,
            code=ErrorCode.ONBOARDING_SUBMISSION_FAILED,
            status_code=502,
            details=details,
        )


# ============================================================================
# Database Errors
# ============================================================================

class DatabaseError(TrainingPlannerError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=error_details,
        )
