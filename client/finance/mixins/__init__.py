# finance/mixins/__init__.py
from .service_exception_handler import ServiceExceptionHandlerMixin

__all__ = [
    "ServiceExceptionHandlerMixin",
]
