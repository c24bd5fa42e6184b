"""Transports that send assembled requests.

A connector receives a fully assembled Request and returns a Response, or
raises TransportError. Timeouts, retries and connection management are the
connector's business; the invoker only guarantees that the response is
closed once the result has been extracted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Optional, Protocol

import httpx
import requests
from requests.structures import CaseInsensitiveDict

from currly.config import Settings
from currly.error import TransportError

if TYPE_CHECKING:
    from currly.request import Request

logger = logging.getLogger(__name__)


class Response(Protocol):
    """Protocol for responses returned by connectors.

    httpx.Response satisfies this protocol as is."""

    @property
    def status_code(self) -> int: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    def read(self) -> bytes:
        """Read and return the whole response body."""
        ...

    def close(self) -> None:
        """Release the resources held by the response."""
        ...


class Connector(Protocol):
    """Protocol for connectors."""

    def send(self, request: Request) -> Response:
        """Send the request and return the response.

        Raises:
            TransportError: if the request could not be sent or the response
                could not be received.
        """
        ...


class HttpxConnector:
    """Connector sending requests with an httpx.Client.

    Headers declared on the request replace the client's default headers of
    the same name; other default headers (User-Agent, Accept, ...) are kept.
    """

    __slots__ = ("client",)

    def __init__(self, client: Optional[httpx.Client] = None):
        self.client = client if client is not None else httpx.Client()

    def send(self, request: Request) -> httpx.Response:
        try:
            req = self.client.build_request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
            response = self.client.send(req, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(
                f"{request.method} {request.url} failed: {e}"
            ) from e

        logger.debug(
            "%s %s: %d %s",
            request.method,
            request.url,
            response.status_code,
            response.reason_phrase,
        )
        return response

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class RequestsResponse:
    """Adapts a streamed requests.Response to the Response protocol."""

    __slots__ = ("response",)

    def __init__(self, response: requests.Response):
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self.response.headers

    def read(self) -> bytes:
        try:
            return self.response.content
        except requests.RequestException as e:
            raise TransportError(f"failed to read response body: {e}") from e

    def close(self) -> None:
        self.response.close()


class RequestsConnector:
    """Connector sending requests with a requests.Session.

    requests does not support repeated header fields, so multiple values of
    the same header are joined with a comma.
    """

    __slots__ = ("session", "verify", "timeout")

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        verify: bool = True,
        timeout: Optional[float] = None,
    ):
        self.session = session if session is not None else requests.Session()
        self.verify = verify
        self.timeout = timeout

    def send(self, request: Request) -> RequestsResponse:
        headers: CaseInsensitiveDict = CaseInsensitiveDict()
        for name in request.headers.keys():
            headers[name] = ", ".join(request.headers.get_list(name))

        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=headers,
                data=request.body,
                stream=True,
                verify=self.verify,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(
                f"{request.method} {request.url} failed: {e}"
            ) from e

        logger.debug(
            "%s %s: %d %s",
            request.method,
            request.url,
            response.status_code,
            response.reason,
        )
        return RequestsResponse(response)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def client_connector(client: httpx.Client) -> HttpxConnector:
    """Returns a connector sending requests with the given client."""
    return HttpxConnector(client)


def default_connector(settings: Optional[Settings] = None) -> HttpxConnector:
    """Returns a connector over a new httpx.Client configured from the
    settings, or from the environment if no settings are given."""
    if settings is None:
        settings = Settings()

    if not settings.verify:
        logger.warning(
            "TLS certificate verification is disabled (%s)",
            settings.name_of("verify"),
        )

    headers = {}
    if settings.user_agent:
        headers["User-Agent"] = settings.user_agent

    client = httpx.Client(
        verify=settings.verify,
        timeout=settings.timeout,
        headers=headers,
    )
    logger.debug("initializing default connector with %r", settings)
    return HttpxConnector(client)
