from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import httpx

from currly.error import AssemblyError
from currly.template import Credentials, Snapshot
from currly.variable import Variable

logger = logging.getLogger(__name__)


@dataclass
class Request:
    """A framework-agnostic representation of an assembled HTTP request,
    handed to connectors."""

    method: str
    url: str
    headers: httpx.Headers
    body: Optional[bytes] = None


def url_string(
    scheme: str,
    host: str,
    port: int,
    path: Iterable[Variable],
    query: Iterable[Variable],
) -> str:
    """Assemble scheme://host[:port][/path][?query].

    Variables that render to an empty string are omitted, so unbound
    parameters never produce empty segments or dangling separators. A port of
    0 is not rendered.
    """
    url = f"{scheme}://{host}"
    if port > 0:
        url += f":{port}"

    segments = [s for s in (v.render() for v in path) if s]
    if segments:
        url += "/" + "/".join(segments)

    pairs = [s for s in (v.render() for v in query) if s]
    if pairs:
        url += "?" + "&".join(pairs)

    return url


def basic_auth(credentials: Credentials) -> str:
    token = f"{credentials.username}:{credentials.password}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def assemble(snapshot: Snapshot) -> Request:
    """Create the request described by a snapshot whose arguments have been
    applied.

    Raises:
        AssemblyError: if the body is not bytes.
    """
    if snapshot.body is not None and not isinstance(snapshot.body, bytes):
        raise AssemblyError(
            f"request body must be bytes, not {type(snapshot.body).__name__}"
        )

    headers = httpx.Headers(snapshot.headers)
    if snapshot.credentials is not None and not snapshot.credentials.empty:
        headers["Authorization"] = basic_auth(snapshot.credentials)

    request = Request(
        method=snapshot.method,
        url=url_string(
            snapshot.scheme,
            snapshot.host,
            snapshot.port,
            snapshot.path,
            snapshot.query,
        ),
        headers=headers,
        body=snapshot.body,
    )
    logger.debug("assembled %s request for %s", request.method, request.url)
    return request
