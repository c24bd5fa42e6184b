"""Reusable HTTP request templates.

Declare the shape of a family of requests once, then invoke it any number of
times with per-call arguments:

    import currly
    from currly import path_arg

    get_user = (
        currly.builder()
        .get()
        .https()
        .host("api.example.com")
        .path_segment("users")
        .path_param("id")
        .build()
    )

    status, user, err = get_user(path_arg("id", "42"))
"""

from currly.arguments import (
    Argument,
    body_arg,
    json_body_arg,
    path_arg,
    query_arg,
)
from currly.builder import (
    BuildRequest,
    DefineHost,
    DefineMethod,
    DefinePort,
    DefineScheme,
    builder,
)
from currly.config import Settings
from currly.connector import (
    Connector,
    HttpxConnector,
    RequestsConnector,
    Response,
    client_connector,
    default_connector,
)
from currly.error import (
    AssemblyError,
    BindingError,
    BuildError,
    CurrlyError,
    DecodingError,
    EncodingError,
    TransportError,
)
from currly.extractor import ResultExtractor, json_string, plain_string, raw_bytes
from currly.invoker import Invoker, Result
from currly.request import Request
from currly.template import Template

__all__ = [
    "Argument",
    "AssemblyError",
    "BindingError",
    "BuildError",
    "BuildRequest",
    "Connector",
    "CurrlyError",
    "DecodingError",
    "DefineHost",
    "DefineMethod",
    "DefinePort",
    "DefineScheme",
    "EncodingError",
    "HttpxConnector",
    "Invoker",
    "Request",
    "RequestsConnector",
    "Response",
    "Result",
    "ResultExtractor",
    "Settings",
    "Template",
    "TransportError",
    "body_arg",
    "builder",
    "client_connector",
    "default_connector",
    "json_body_arg",
    "json_string",
    "path_arg",
    "plain_string",
    "query_arg",
    "raw_bytes",
]
