# morpheus_provisioner/domain/core/exceptions.py
from typing import Any, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class ResolutionError(DomainException):
    """Base exception for a resolution stage that could not pick one candidate."""
    def __init__(self, stage: str, token: str, message: str):
        super().__init__(message)
        self.stage = stage
        self.token = token


class NotFoundError(ResolutionError):
    """Raised when no candidate matches a token."""
    def __init__(self, stage: str, token: str, hint: Optional[str] = None):
        message = f"Found 0 {stage} candidates for '{token}'"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(stage, token, message)
        self.hint = hint


class AmbiguityError(ResolutionError):
    """Raised when more than one candidate matches a token."""
    def __init__(self, stage: str, token: str, count: int, hint: Optional[str] = None):
        message = f"Found {count} {stage} candidates for '{token}'"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(stage, token, message)
        self.count = count
        self.hint = hint


class ProvisioningTimeoutError(DomainException):
    """Raised when an instance does not reach a target status in time."""
    def __init__(self, instance_id: str, last_status: Optional[str], timeout_seconds: float):
        super().__init__(
            f"Instance {instance_id} did not leave status '{last_status}' "
            f"within {timeout_seconds} seconds"
        )
        self.instance_id = instance_id
        self.last_status = last_status
        self.timeout_seconds = timeout_seconds


class UnexpectedStatusError(DomainException):
    """Raised when an instance reports a status that is neither pending nor a target."""
    def __init__(self, instance_id: str, status: Optional[str]):
        super().__init__(f"Instance {instance_id} reported unexpected status '{status}'")
        self.instance_id = instance_id
        self.status = status
