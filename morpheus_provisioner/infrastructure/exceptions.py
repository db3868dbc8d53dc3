from typing import Optional, Any


class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details


class TransportError(InfrastructureError):
    """Raised when a catalog call fails in transit or returns a non-2xx status other than 404."""
    def __init__(self, message: str, method: str, url: str,
                 status_code: Optional[int] = None,
                 response_body: Optional[str] = None,
                 details: Optional[Any] = None):
        super().__init__(message, details)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class ResourceNotFoundError(TransportError):
    """Raised when the catalog answers 404."""
    pass


class ResponseDecodeError(TransportError):
    """Raised when a catalog response is not the JSON shape expected."""
    pass


class AuthenticationError(TransportError):
    """Raised when the password grant does not yield an access token."""
    pass
