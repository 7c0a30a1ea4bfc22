"""
Service exception handler mixin.

Provides unified exception handling for service calls made by state
containers and forms, with structured logging and translation of every
failure into a DRF exception carrying a single user-facing message.
"""

import logging

import requests
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError

from ..exceptions import BackendUnavailable
from ..utils.currency_utils import CurrencyConversionError

logger = logging.getLogger(__name__)


class ServiceExceptionHandlerMixin:
    """
    Mixin for handling service layer exceptions in client state holders.

    Features:
    - Unified exception handling for all service calls
    - Structured logging with the current user's context
    - Translation of Django, currency and transport errors to DRF exceptions

    Usage:
        page = self.handle_service_call(
            self.transaction_service.query, query
        )
    """

    def _get_log_user(self):
        session = getattr(self, "session", None)
        user = getattr(session, "user", None) if session else None
        if isinstance(user, dict):
            return user.get("username")
        return None

    def handle_service_call(self, service_call, *args, **kwargs):
        """
        Execute service call with exception handling and logging.

        Args:
            service_call: Service method to execute
            *args: Positional arguments for service call
            **kwargs: Keyword arguments for service call

        Returns:
            Any: Result from service call

        Raises:
            DRFValidationError: For rejected input (client or backend side)
            APIException: For backend errors and unexpected failures
        """
        service_name = getattr(service_call, "__self__", self).__class__.__name__
        method_name = getattr(service_call, "__name__", str(service_call))
        username = self._get_log_user()

        logger.debug(
            "Service call execution initiated",
            extra={
                "service_name": service_name,
                "method_name": method_name,
                "username": username,
                "args_count": len(args),
                "kwargs_keys": list(kwargs.keys()),
                "action": "service_call_start",
                "component": "ServiceExceptionHandlerMixin",
            },
        )

        try:
            result = service_call(*args, **kwargs)

            logger.debug(
                "Service call completed successfully",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "result_type": type(result).__name__,
                    "action": "service_call_success",
                    "component": "ServiceExceptionHandlerMixin",
                },
            )

            return result

        except DRFValidationError as e:
            logger.warning(
                "Service validation error (DRF)",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "error_type": "DRFValidationError",
                    "error_detail": e.detail,
                    "action": "service_validation_error_drf",
                    "component": "ServiceExceptionHandlerMixin",
                    "severity": "medium",
                },
            )
            raise

        except DjangoValidationError as e:
            error_messages = e.messages if hasattr(e, "messages") else [str(e)]

            logger.warning(
                "Service validation error (Django)",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "error_type": "DjangoValidationError",
                    "error_messages": error_messages,
                    "action": "service_validation_error_django",
                    "component": "ServiceExceptionHandlerMixin",
                    "severity": "medium",
                },
            )

            raise DRFValidationError(error_messages)

        except CurrencyConversionError as e:
            logger.warning(
                "Currency conversion rejected",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "from_currency": e.from_currency,
                    "to_currency": e.to_currency,
                    "error_message": e.message,
                    "action": "service_currency_conversion_error",
                    "component": "ServiceExceptionHandlerMixin",
                    "severity": "medium",
                },
            )

            raise DRFValidationError(e.message)

        except APIException as e:
            logger.error(
                "Service API exception",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "error_type": type(e).__name__,
                    "error_detail": e.detail,
                    "status_code": e.status_code,
                    "action": "service_api_exception",
                    "component": "ServiceExceptionHandlerMixin",
                    "severity": "high",
                },
            )
            raise

        except requests.RequestException as e:
            logger.error(
                "Service transport failure",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "action": "service_transport_error",
                    "component": "ServiceExceptionHandlerMixin",
                    "severity": "high",
                },
            )

            raise BackendUnavailable(str(e) or None) from e

        except Exception as e:
            logger.error(
                "Service operation failed unexpectedly",
                extra={
                    "service_name": service_name,
                    "method_name": method_name,
                    "username": username,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                    "action": "service_unexpected_error",
                    "component": "ServiceExceptionHandlerMixin",
                    "severity": "critical",
                },
                exc_info=True,
            )

            raise APIException(detail="Service operation failed", code="service_error") from e
