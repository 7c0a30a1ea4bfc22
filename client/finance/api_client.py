"""
Authenticated HTTP client for the finance backend REST API.

All services talk to the backend through ``ApiClient``. It attaches the
bearer token from session storage, encodes request bodies with DRF's JSON
encoder and turns every failure into one of the exceptions from
``finance.exceptions`` with a single normalised message.
"""

import json
import logging

import requests
from django.conf import settings
from rest_framework.utils.encoders import JSONEncoder

from .exceptions import BackendUnavailable, exception_for_status

logger = logging.getLogger(__name__)


def extract_error_message(response):
    """
    Pick the user-facing message out of an error response.

    Preference order: ``message``, ``error`` and ``detail`` keys of a JSON
    object, then a plain-text body, then a generic status message.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = response.text

    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            if payload.get(key):
                return str(payload[key])
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()

    return f"Request failed with status code {response.status_code}"


class ApiClient:
    """
    Thin wrapper over ``requests.Session`` bound to the backend base URL.

    The token is read from storage on every request, so a login or logout
    through the session holder is picked up without rebuilding the client.
    No retries are performed and no timeout is applied unless configured.
    """

    def __init__(self, storage, base_url=None, timeout=None, session=None):
        self.storage = storage
        self.base_url = (base_url or settings.FINANCE_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.FINANCE_API_TIMEOUT
        self.session = session or requests.Session()

    def build_url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def build_headers(self):
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        token = self.storage.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method, path, params=None, data=None):
        """
        Send one request and return the decoded response body.

        Returns:
            Decoded JSON, raw text for non-JSON bodies, or None when the
            response has no body.

        Raises:
            BackendUnavailable: transport failure (no response)
            ValidationError / NotAuthenticated / PermissionDenied / NotFound /
            BackendError: backend answered with an error status
        """
        url = self.build_url(path)
        body = json.dumps(data, cls=JSONEncoder) if data is not None else None

        logger.debug(
            "Sending backend request",
            extra={
                "method": method,
                "url": url,
                "params": params,
                "has_body": body is not None,
                "action": "api_request_start",
                "component": "ApiClient",
            },
        )

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=body,
                headers=self.build_headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "Backend request failed without response",
                extra={
                    "method": method,
                    "url": url,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "action": "api_request_transport_error",
                    "component": "ApiClient",
                    "severity": "high",
                },
            )
            raise BackendUnavailable(str(e) or None) from e

        if response.status_code >= 400:
            message = extract_error_message(response)
            logger.warning(
                "Backend rejected request",
                extra={
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                    "error_message": message,
                    "action": "api_request_rejected",
                    "component": "ApiClient",
                    "severity": "medium",
                },
            )
            raise exception_for_status(response.status_code, message)

        logger.debug(
            "Backend request completed",
            extra={
                "method": method,
                "url": url,
                "status_code": response.status_code,
                "action": "api_request_success",
                "component": "ApiClient",
            },
        )
        return self._decode(response)

    def _decode(self, response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, data=None, params=None):
        return self.request("POST", path, params=params, data=data)

    def put(self, path, data=None):
        return self.request("PUT", path, data=data)

    def delete(self, path):
        return self.request("DELETE", path)
