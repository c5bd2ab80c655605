import httpx
from pydantic import BaseModel, Field
import datetime
from typing import Any
from structlog import get_logger

from .exceptions import ApiError, ResourceNotFound, TowerConnectionError

log = get_logger()


class HttpResponse(BaseModel):
    """
    Response of a single API call; ``body`` is the raw JSON text.
    """

    url: str
    status_code: int
    body: str
    retrieved_at: datetime.datetime = Field(default_factory=datetime.datetime.now)


class Api:
    """
    Blocking HTTP transport for the Tower/AWX REST API.

    Paths are joined onto ``base_url``: relative paths (``"hosts/1/"``)
    land under the API root, server-absolute paths (``"/api/v2/hosts/1/"``,
    as found in ``url`` and ``related`` fields) replace its path.
    """

    def __init__(
        self,
        base_url: str,
        *,
        username: str | None = None,
        password: str | None = None,
        verify_ssl: bool = True,
        timeout: float = 30.0,
        retries: int = 0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. ``https://tower.example.com/api/v2/``.
            username: Basic auth user, if any.
            password: Basic auth password.
            verify_ssl: Whether to verify TLS certificates.
            timeout: Seconds before a request is abandoned.
            retries: Connection retries made by the underlying transport.
            transport: Replacement httpx transport (used by tests).
        """
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = httpx.URL(base_url)
        auth = (username, password or "") if username else None
        if transport is None:
            transport = httpx.HTTPTransport(retries=retries, verify=verify_ssl)
        self.client = httpx.Client(
            auth=auth,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __repr__(self) -> str:
        return f"Api({self.base_url})"

    def __enter__(self) -> "Api":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def url_for(self, path: str | httpx.URL) -> httpx.URL:
        return self.base_url.join(str(path))

    def get(self, path: str, params: dict | None = None) -> HttpResponse:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: dict | str | bytes | None = None) -> HttpResponse:
        if body is None:
            return self._request("POST", path)
        elif isinstance(body, (str, bytes)):
            return self._request(
                "POST",
                path,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        return self._request("POST", path, json=body)

    def _request(self, method: str, path: str, **kwargs: Any) -> HttpResponse:
        url = self.url_for(path)
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            log.error("request failed", method=method, url=str(url), exception=str(e))
            raise TowerConnectionError(f"{method} {url} failed: {e}") from e

        log.debug(
            "request", method=method, url=str(url), status_code=response.status_code
        )
        if response.status_code == 404:
            raise ResourceNotFound(
                f"{method} {url} not found", response.status_code, response.text
            )
        if response.is_error:
            raise ApiError(
                f"{method} {url} returned {response.status_code}",
                response.status_code,
                response.text,
            )

        return HttpResponse(
            url=str(url),
            status_code=response.status_code,
            body=response.text,
        )
