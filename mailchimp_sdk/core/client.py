"""
Core HTTP client for the Mailchimp Marketing API.

Handles authentication, request/response and error handling.
"""

import base64
import http.client
import json
import logging
import os
import urllib.error
import urllib.request
from typing import Any, Protocol

from mailchimp_sdk.core.types import ErrorResponse

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_HOST = "api.mailchimp.com"
API_VERSION = "3.0"
DEFAULT_TIMEOUT = 60

# Any username is accepted, only the key matters
AUTH_USERNAME = "anystring"

RESPONSE_STATUS_SUCCESS = 2  # 200, 201, 204 etc.


class MailchimpError(Exception):
    """Base error class for library errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging or JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(MailchimpError):
    """API key or region missing."""


class EncodingError(MailchimpError):
    """Request body could not be serialized to JSON."""


class TransportError(MailchimpError):
    """Network level failure (DNS, connection refused, timeout)."""


class DecodeError(MailchimpError):
    """A successful response body could not be decoded."""


class HealthCheckError(MailchimpError):
    """The ping endpoint answered with an unexpected health status."""


class ValidationError(MailchimpError):
    """Validation error for local input/data issues (not API errors)."""

    def __init__(self, message: str, invalid_fields: list[str] | None = None):
        self.invalid_fields = list(invalid_fields or [])
        super().__init__(message, {"invalid_fields": self.invalid_fields} if self.invalid_fields else None)


class BatchSizeError(ValidationError):
    """Too many members for a single bulk subscribe request."""


class APIError(MailchimpError):
    """Non-2xx response from the API."""

    def __init__(
        self,
        message: str,
        status: int = 0,
        detail: str = "",
        title: str = "",
        type: str = "",
        instance: str = "",
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status = status
        self.detail = detail
        self.title = title
        self.type = type
        self.instance = instance

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging or JSON output."""
        result = super().to_dict()
        if self.status:
            result["status"] = self.status
        if self.detail:
            result["detail"] = self.detail
        return result


def authorization(api_key: str) -> str:
    """Build the Basic authorization header value for an API key."""
    credentials = f"{AUTH_USERNAME}:{api_key}".encode("utf-8")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


def region_from_key(api_key: str | None) -> str | None:
    """Extract the data-center suffix from an API key (e.g. ``abc-us6`` -> ``us6``)."""
    if not api_key or "-" not in api_key:
        return None
    return api_key.rsplit("-", 1)[1] or None


class Provider(Protocol):
    """The four HTTP verbs the SDK layer relies on."""

    def get(self, path: str) -> bytes: ...

    def post(self, path: str, body: Any) -> bytes: ...

    def patch(self, path: str, body: Any) -> bytes: ...

    def delete(self, path: str) -> bytes: ...


class APIClient:
    """
    Low-level HTTP client for the Mailchimp Marketing API.

    Handles:
    - Basic authentication via API key
    - HTTP methods (GET, POST, PATCH, DELETE)
    - Classification of responses by status family

    Responses are returned as raw bytes; decoding is left to the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        region: str | None = None,
        host: str = DEFAULT_HOST,
    ):
        """
        Initialize the API client.

        Args:
            api_key: Mailchimp API key (or MAILCHIMP_API_KEY env var)
            region: Data-center code such as ``us6`` (or MAILCHIMP_REGION env
                var, or the suffix of the API key)
            host: API host name

        """
        self.api_key = api_key or os.environ.get("MAILCHIMP_API_KEY")
        self.region = region or os.environ.get("MAILCHIMP_REGION") or region_from_key(self.api_key)
        self.host = host

    def _ensure_api_key(self) -> str:
        """Ensure API key is configured."""
        if not self.api_key:
            raise ConfigurationError("MAILCHIMP_API_KEY environment variable not set")
        return self.api_key

    def _ensure_region(self) -> str:
        """Ensure the data-center region is configured."""
        if not self.region:
            raise ConfigurationError("Region required. Set MAILCHIMP_REGION env var or pass region")
        return self.region

    @property
    def base_url(self) -> str:
        """Versioned base URL for the configured region."""
        return f"https://{self._ensure_region()}.{self.host}/{API_VERSION}"

    def _build_url(self, path: str) -> str:
        """Build full URL from path."""
        return f"{self.base_url}{path}"

    def _encode(self, data: Any) -> bytes:
        try:
            return json.dumps(data).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Could not encode request body: {e}") from e

    def _make_request(self, method: str, path: str, data: Any = None, has_body: bool = False) -> bytes:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: API path (e.g., /lists/{id})
            data: Request body for POST/PATCH
            has_body: Whether ``data`` must be serialized and sent

        Returns:
            Raw response body

        Raises:
            EncodingError: If the body cannot be serialized
            TransportError: On connection failures
            APIError: On non-2xx responses

        """
        body = self._encode(data) if has_body else None
        headers = {
            "Authorization": authorization(self._ensure_api_key()),
            "Accept": "application/json",
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        url = self._build_url(path)
        logger.debug("%s %s", method, path)

        try:
            req = urllib.request.Request(url, data=body, headers=headers, method=method)
            with urllib.request.urlopen(req, timeout=DEFAULT_TIMEOUT) as response:
                status = response.status
                response_data = response.read()

        except urllib.error.HTTPError as e:
            status = e.code
            response_data = e.read()

        except urllib.error.URLError as e:
            raise TransportError(f"Connection error: {e.reason}") from e

        except TimeoutError as e:
            raise TransportError(f"Request timed out after {DEFAULT_TIMEOUT} seconds") from e

        except OSError as e:
            raise TransportError(f"Connection error: {e}") from e

        except http.client.HTTPException as e:
            raise TransportError(f"Connection error: {e!r}") from e

        logger.debug("%s %s -> %d", method, path, status)

        if status // 100 != RESPONSE_STATUS_SUCCESS:
            raise _error_from_response(status, response_data)
        return response_data

    # =========================================================================
    # HTTP Methods
    # =========================================================================

    def get(self, path: str) -> bytes:
        """Make a GET request."""
        return self._make_request("GET", path)

    def post(self, path: str, body: Any) -> bytes:
        """Make a POST request."""
        return self._make_request("POST", path, body, has_body=True)

    def patch(self, path: str, body: Any) -> bytes:
        """Make a PATCH request."""
        return self._make_request("PATCH", path, body, has_body=True)

    def delete(self, path: str) -> bytes:
        """Make a DELETE request."""
        return self._make_request("DELETE", path)


def _error_from_response(http_status: int, raw: bytes) -> APIError:
    """Map a non-2xx response body onto an APIError."""
    try:
        error_data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return APIError("could not parse error response", status=http_status)
    if not isinstance(error_data, dict):
        return APIError("could not parse error response", status=http_status)

    problem = ErrorResponse.from_dict(error_data)
    status = problem.status or http_status
    return APIError(
        f"request was not successful '{problem.detail}', status: {status}",
        status=status,
        detail=problem.detail,
        title=problem.title,
        type=problem.type,
        instance=problem.instance,
        details=error_data,
    )
