"""
Error taxonomy for backend calls.

Every failure surfaced to the state containers is a DRF ``APIException``
subclass carrying one normalised message. HTTP statuses returned by the
backend are mapped onto the matching DRF exception so callers can branch on
type (validation, not found, unauthenticated) without parsing messages.
"""

from rest_framework import status
from rest_framework.exceptions import (APIException, NotAuthenticated,
                                       NotFound, PermissionDenied,
                                       ValidationError)


class BackendError(APIException):
    """Backend rejected the request with a status that has no closer match."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Backend request failed."
    default_code = "backend_error"

    def __init__(self, detail=None, code=None, status_code=None):
        super().__init__(detail, code)
        if status_code is not None:
            self.status_code = status_code


class BackendUnavailable(APIException):
    """Network or transport failure: no response was received."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Backend service is unreachable."
    default_code = "backend_unavailable"


STATUS_EXCEPTIONS = {
    status.HTTP_400_BAD_REQUEST: ValidationError,
    status.HTTP_401_UNAUTHORIZED: NotAuthenticated,
    status.HTTP_403_FORBIDDEN: PermissionDenied,
    status.HTTP_404_NOT_FOUND: NotFound,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ValidationError,
}


def exception_for_status(status_code, message):
    """Build the exception matching an HTTP error status."""
    exception_class = STATUS_EXCEPTIONS.get(status_code)
    if exception_class is None:
        return BackendError(detail=message, status_code=status_code)
    return exception_class(detail=message)


def get_error_message(exc):
    """
    Flatten an exception into the single message string shown to users.

    DRF keeps ``detail`` as a string, a list or a field -> errors mapping
    depending on where the error was raised; all of them collapse to text.
    """
    detail = getattr(exc, "detail", None)
    if detail is None:
        return str(exc)
    return _flatten_detail(detail)


def _flatten_detail(detail):
    if isinstance(detail, dict):
        return "; ".join(
            f"{field}: {_flatten_detail(errors)}" for field, errors in detail.items()
        )
    if isinstance(detail, (list, tuple)):
        return " ".join(_flatten_detail(item) for item in detail)
    return str(detail)
