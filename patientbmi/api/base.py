"""
Base HTTP client for the PatientBMI remote service.

Wraps a requests.Session with base URL handling, timeouts, error
mapping and request logging. There is no retry or caching layer:
a failed call surfaces to the caller.
"""

import logging
from typing import Any, TypeVar
from urllib.parse import urljoin

import requests
from pydantic import BaseModel, ValidationError

from patientbmi.core.exceptions import ApiConnectionError, ApiError, ApiResponseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseAPIClient:
    """
    Minimal JSON-over-HTTP client.

    Usable as a context manager; the underlying session is closed on exit.
    """

    SOURCE_NAME = "api"

    def __init__(
        self,
        base_url: str,
        timeout: tuple[float, float] | float,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
        log_bodies: bool = False,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: Service root, ending with "/"
            timeout: (connect, read) seconds, or one value for both
            headers: Extra headers sent with every request
            session: Session to use (created if not provided)
            log_bodies: Log request/response bodies at DEBUG level
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.log_bodies = log_bodies
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if headers:
            self.session.headers.update(headers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _url(self, endpoint: str) -> str:
        return urljoin(self.base_url, endpoint.lstrip("/"))

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL
            params: Query parameters (None values are dropped)
            json: Request body

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            ApiConnectionError: If the service cannot be reached
            ApiError: On a non-2xx status
            ApiResponseError: If a 2xx body is not valid JSON
        """
        url = self._url(endpoint)
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"{method} {url} params={params or {}}")
        if self.log_bodies and json is not None:
            logger.debug(f"Request body: {json}")

        try:
            response = self.session.request(
                method,
                url,
                params=params or None,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{self.SOURCE_NAME}: {method} {endpoint} failed: {e}")
            raise ApiConnectionError(str(e), endpoint=endpoint) from e

        logger.debug(f"{method} {endpoint} -> {response.status_code}")
        if self.log_bodies:
            logger.debug(f"Response body: {response.text}")

        if not response.ok:
            logger.error(
                f"{self.SOURCE_NAME}: {method} {endpoint} returned "
                f"{response.status_code}: {response.text}"
            )
            raise ApiError(
                f"{method} {endpoint} failed with status {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
                body=response.text,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(
                f"{method} {endpoint} returned invalid JSON",
                endpoint=endpoint,
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, body: dict[str, Any]) -> Any:
        return self._request("POST", endpoint, json=body)

    @staticmethod
    def _parse(model: type[ModelT], data: Any, endpoint: str) -> ModelT:
        """Validate a decoded body against a response model."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiResponseError(
                f"Unexpected response from {endpoint}: {e.error_count()} invalid field(s)",
                endpoint=endpoint,
                body=str(data),
            ) from e

    def health_check(self) -> bool:
        """Check service connectivity."""
        raise NotImplementedError
