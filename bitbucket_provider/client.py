"""HTTP client for the Bitbucket REST API."""

import logging
from typing import Any

import httpx

from .errors import ConfigurationError, RemoteError
from .settings import BitbucketSettings, get_settings

logger = logging.getLogger(__name__)


class BitbucketClient:
    """Thin synchronous wrapper around httpx.Client.

    Paths are relative to ``base_url`` (e.g. ``"1.0/groups/acme"``). Every
    call either returns a 2xx response or raises RemoteError; transport
    failures are raised as RemoteError with no status code.

    Example:
        >>> with BitbucketClient("https://api.bitbucket.org/", "me", "secret") as client:
        ...     response = client.get("1.0/groups/acme")
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. "https://api.bitbucket.org/"
            username: Username for basic auth (optional)
            password: App password for basic auth (optional)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        if not base_url:
            raise ConfigurationError("Bitbucket base URL must not be empty")
        if (username is None) != (password is None):
            raise ConfigurationError(
                "Bitbucket username and password must be set together"
            )

        auth = httpx.BasicAuth(username, password) if username is not None else None
        self._http = httpx.Client(
            base_url=base_url,
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: BitbucketSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "BitbucketClient":
        """Build a client from provider settings (global settings by default)."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.base_url,
            username=settings.username,
            password=settings.password,
            timeout=settings.timeout,
            transport=transport,
        )

    def get(self, path: str) -> httpx.Response:
        return self._request("GET", path)

    def post_form(self, path: str, data: dict[str, str]) -> httpx.Response:
        """POST a form-encoded (non-JSON) body."""
        return self._request("POST", path, data=data)

    def put(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        """PUT a JSON body."""
        return self._request("PUT", path, json=payload)

    def delete(self, path: str) -> httpx.Response:
        return self._request("DELETE", path)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "BitbucketClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug(f"{method} {path}")
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(
                f"{method} {path} failed: {e}", method=method, path=path
            ) from e

        if not 200 <= response.status_code < 300:
            raise RemoteError(
                f"API Error: {response.status_code} {path} {_error_message(response)}",
                status_code=response.status_code,
                method=method,
                path=path,
            )

        return response


def _error_message(response: httpx.Response) -> str:
    """Extract the human readable message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text.strip()
