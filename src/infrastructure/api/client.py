# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP client for the SchoolDesk REST backend.

Every domain service talks to the backend through one ApiClient. The client
prefixes paths with the configured base URL, sends JSON, attaches the bearer
token from the session, and turns transport failures and non-2xx responses
into ApiError subclasses. Requests are never retried.

Example:
    >>> async with ApiClient(settings.backend_api, session) as api:
    ...     years = await api.get("/schools/s-1/academic-years")
"""

import logging
from typing import Any

import httpx

from src.core.config.settings import BackendAPISettings
from src.infrastructure.session.store import Session

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base exception for backend API failures.

    Attributes:
        message: Human-readable description.
        status_code: HTTP status, or None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiConnectionError(ApiError):
    """Raised when the backend could not be reached."""


class ApiResponseError(ApiError):
    """Raised on a non-2xx status or a 2xx body that is not JSON.

    Attributes:
        detail: Free-text error detail extracted from the response body.
    """

    def __init__(self, message: str, status_code: int, detail: str) -> None:
        super().__init__(message, status_code=status_code)
        self.detail = detail


class ApiAuthError(ApiResponseError):
    """Raised on 401/403: missing, expired or insufficient credentials."""


class ApiNotFoundError(ApiResponseError):
    """Raised on 404."""


class ApiClient:
    """Async JSON client for the backend.

    Attributes:
        session: Session providing the bearer token.

    Example:
        client = ApiClient(get_settings().backend_api, session)
        school = await client.post("/super-admin/schools", json={...})
        await client.close()
    """

    def __init__(
        self,
        settings: BackendAPISettings,
        session: Session,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            settings: Backend URL and timeout.
            session: Session the bearer token is read from on every request.
            transport: Optional httpx transport (tests mount fakes here).
        """
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=settings.normalized_base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self.session.token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _handle_response(self, response: httpx.Response, operation: str) -> httpx.Response:
        """Raise the matching ApiError for non-2xx responses."""
        if response.is_success:
            return response

        error_detail = response.reason_phrase or "Unknown error"
        try:
            error_data = response.json()
            if isinstance(error_data, dict):
                error_detail = str(
                    error_data.get("message") or error_data.get("detail") or error_data
                )
            else:
                error_detail = str(error_data)
        except ValueError:
            if response.text:
                error_detail = response.text

        message = f"{operation} failed ({response.status_code}): {error_detail}"

        if response.status_code in (401, 403):
            raise ApiAuthError(message, response.status_code, error_detail)
        if response.status_code == 404:
            raise ApiNotFoundError(message, response.status_code, error_detail)
        raise ApiResponseError(message, response.status_code, error_detail)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        operation = f"{method} {path}"
        request_headers = self._auth_headers()
        if headers:
            request_headers.update(headers)
        if params:
            params = {key: value for key, value in params.items() if value not in (None, "")}

        logger.debug("API request: %s", operation)

        try:
            response = await self._client.request(
                method,
                path,
                params=params or None,
                json=json,
                files=files,
                data=data,
                headers=request_headers,
            )
        except httpx.RequestError as e:
            logger.error("Connection error on %s: %s", operation, e)
            raise ApiConnectionError(f"{operation} failed: backend not reachable ({e})") from e

        return self._handle_response(response, operation)

    @staticmethod
    def _decode(response: httpx.Response, operation: str) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("Non-JSON body on %s (%s)", operation, response.status_code)
            raise ApiResponseError(
                f"{operation} returned invalid JSON",
                response.status_code,
                response.text[:200],
            ) from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a JSON resource."""
        return self._decode(await self._send("GET", path, params=params), f"GET {path}")

    async def post(
        self,
        path: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded response."""
        response = await self._send("POST", path, json=json, headers=headers)
        return self._decode(response, f"POST {path}")

    async def put(self, path: str, json: Any = None) -> Any:
        """PUT a JSON body and return the decoded response."""
        return self._decode(await self._send("PUT", path, json=json), f"PUT {path}")

    async def delete(self, path: str) -> Any:
        """DELETE a resource; returns the decoded body, usually None."""
        return self._decode(await self._send("DELETE", path), f"DELETE {path}")

    async def upload(
        self,
        path: str,
        file_name: str,
        content: bytes,
        fields: dict[str, str] | None = None,
        content_type: str = "text/csv",
    ) -> Any:
        """POST a multipart upload with a single ``file`` part.

        Args:
            path: Endpoint path.
            file_name: File name reported to the backend.
            content: File bytes.
            fields: Extra form fields sent alongside the file.
            content_type: MIME type of the file part.

        Returns:
            Decoded JSON response.
        """
        files = {"file": (file_name, content, content_type)}
        response = await self._send("POST", path, files=files, data=fields)
        return self._decode(response, f"POST {path}")

    async def download(self, path: str) -> bytes:
        """GET a binary resource (templates, exports)."""
        response = await self._send("GET", path)
        return response.content
