"""Staged construction of request templates.

Each stage only exposes the steps that are valid at that point, so a request
cannot be declared out of order:

    builder(connector)          DefineMethod
        .get()                  DefineScheme
        .https()                DefineHost
        .host("example.com")    DefinePort
        .port(8443)             BuildRequest
        .path_segment("users")  BuildRequest
        .path_param("id")       BuildRequest
        .build()                Invoker

Every step returns a new stage wrapping a new Template; holding on to an
intermediate stage and continuing from it several times produces independent
templates.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping, Optional

import httpx

from currly.connector import Connector, default_connector
from currly.error import BuildError
from currly.extractor import ResultExtractor
from currly.invoker import Invoker
from currly.template import Credentials, HeaderValues, Template
from currly.variable import PathParam, PathSegment, QueryParam, QuerySegment

logger = logging.getLogger(__name__)

MAX_PORT = 65535


class _Stage:
    __slots__ = ("_template",)

    _template: Template

    def __init__(self, template: Template):
        self._template = template

    @property
    def template(self) -> Template:
        """The template declared so far."""
        return self._template

    def __repr__(self):
        return f"{type(self).__name__}({self._template!r})"


class DefineMethod(_Stage):
    __slots__ = ()

    def method(self, method: str) -> DefineScheme:
        template = replace(self._template, method=method.upper())
        if not method:
            template = template.with_error(BuildError("missing request method"))
        return DefineScheme(template)

    def get(self) -> DefineScheme:
        return self.method("GET")

    def post(self) -> DefineScheme:
        return self.method("POST")

    def put(self) -> DefineScheme:
        return self.method("PUT")

    def patch(self) -> DefineScheme:
        return self.method("PATCH")

    def delete(self) -> DefineScheme:
        return self.method("DELETE")

    def head(self) -> DefineScheme:
        return self.method("HEAD")

    def options(self) -> DefineScheme:
        return self.method("OPTIONS")


class DefineScheme(_Stage):
    __slots__ = ()

    def http(self) -> DefineHost:
        return DefineHost(replace(self._template, scheme="http"))

    def https(self) -> DefineHost:
        return DefineHost(replace(self._template, scheme="https"))


class DefineHost(_Stage):
    __slots__ = ()

    def host(self, host: str) -> DefinePort:
        template = replace(self._template, host=host)
        if not host:
            template = template.with_error(BuildError("missing host"))
        return DefinePort(template)

    def localhost(self) -> DefinePort:
        return self.host("localhost")


class BuildRequest(_Stage):
    """Final stage: path, query, headers, credentials and the result
    extractor can be declared in any order, any number of times."""

    __slots__ = ()

    def path_segment(self, name: str) -> BuildRequest:
        """Append a fixed path segment. It is rendered verbatim."""
        return BuildRequest(self._template.append_path(PathSegment(name)))

    def path_param(self, name: str) -> BuildRequest:
        """Append a path parameter, bound per call with path_arg."""
        return BuildRequest(self._template.append_path(PathParam(name)))

    def query_segment(self, name: str, value: str) -> BuildRequest:
        """Append a fixed name=value pair to the query string."""
        return BuildRequest(self._template.append_query(QuerySegment(name, value)))

    def query_param(self, name: str) -> BuildRequest:
        """Append a query parameter, bound per call with query_arg. It is
        left out of the URL when no value is bound."""
        return BuildRequest(self._template.append_query(QueryParam(name)))

    def header(self, headers: Mapping[str, HeaderValues]) -> BuildRequest:
        """Declare request headers. Values can be a string or a list of
        strings; a header declared again replaces the earlier values."""
        try:
            template = self._template.merge_headers(headers)
            httpx.Headers(
                [(name, value) for name, values in template.headers for value in values]
            )
        except (AttributeError, TypeError, UnicodeEncodeError) as e:
            template = self._template.with_error(
                BuildError(f"invalid headers {headers!r}: {e}")
            )
        return BuildRequest(template)

    def credentials(self, username: str, password: str) -> BuildRequest:
        """Declare credentials for HTTP basic authentication."""
        return BuildRequest(
            replace(self._template, credentials=Credentials(username, password))
        )

    def result_extractor(self, extractor: ResultExtractor) -> BuildRequest:
        """Declare how responses are decoded (see currly.extractor)."""
        return BuildRequest(replace(self._template, extractor=extractor))

    def build(self) -> Invoker:
        """Freeze the template into an invoker.

        An invoker that created its own connector closes it in close().

        Raises:
            BuildError: if an invalid declaration was made along the way.
        """
        template = self._template
        if template.error is not None:
            raise template.error.with_traceback(None)
        owns_connector = template.connector is None
        if owns_connector:
            template = replace(template, connector=default_connector())

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "built %s template for %s://%s (%d path and %d query variables)",
                template.method,
                template.scheme,
                template.host,
                len(template.path),
                len(template.query),
            )
        return Invoker(template, owns_connector=owns_connector)


class DefinePort(BuildRequest):
    __slots__ = ()

    def port(self, port: int) -> BuildRequest:
        """Set the port. 0 leaves it out of the URL."""
        template = replace(self._template, port=port)
        if not 0 <= port <= MAX_PORT:
            template = template.with_error(
                BuildError(f"port out of range: {port} (expected 0..{MAX_PORT})")
            )
        return BuildRequest(template)


def builder(connector: Optional[Connector] = None) -> DefineMethod:
    """Start declaring a request template.

    Args:
        connector: Connector that invocations send requests through. When
            omitted, build() creates one with default_connector().
    """
    return DefineMethod(Template(connector=connector))
