from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

from currly.arguments import Argument, apply_all
from currly.error import CurrlyError, DecodingError, TransportError
from currly.extractor import DEFAULT_EXTRACTOR
from currly.request import assemble
from currly.template import Template

logger = logging.getLogger(__name__)


class Result(NamedTuple):
    """Outcome of an invocation.

    status is 0 when no response was received. When the response could not
    be decoded, error is a DecodingError and status still holds the response
    status code.
    """

    status: int
    value: Any
    error: Optional[CurrlyError]

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Returns the decoded value, or raises the error."""
        if self.error is not None:
            raise self.error
        return self.value


class Invoker:
    """Callable sending requests of a frozen template.

    Invokers are created by the builder. Each call works on its own snapshot
    of the template, so one invoker can be called concurrently from several
    threads with different arguments.
    """

    __slots__ = ("_template", "_owns_connector")

    def __init__(self, template: Template, owns_connector: bool = False):
        self._template = template
        self._owns_connector = owns_connector

    @property
    def template(self) -> Template:
        return self._template

    def __call__(self, *arguments: Argument) -> Result:
        """Bind the arguments, send the request and decode the response.

        Failures are reported in the result rather than raised: binding and
        encoding errors before anything is sent, transport errors before the
        response is decoded, and decoding errors along with the status code.
        """
        snapshot = self._template.snapshot()
        extractor = snapshot.extractor or DEFAULT_EXTRACTOR

        error = apply_all(snapshot, arguments)
        if error is not None:
            return Result(0, None, error)

        try:
            request = assemble(snapshot)
        except CurrlyError as e:
            return Result(0, None, e)

        connector = self._template.connector
        assert connector is not None
        try:
            response = connector.send(request)
        except CurrlyError as e:
            return Result(0, None, e)
        except Exception as e:
            logger.debug("%s %s failed: %s", request.method, request.url, e)
            error = TransportError(f"{request.method} {request.url} failed: {e}")
            error.__cause__ = e
            return Result(0, None, error)

        try:
            status = response.status_code
            try:
                value = extractor(response)
            except Exception as e:
                error = DecodingError(
                    f"failed to decode response of {request.method} {request.url} ({status}): {e}",
                    status,
                )
                error.__cause__ = e
                return Result(status, None, error)
        finally:
            response.close()

        return Result(status, value, None)

    def close(self):
        """Close the connector if the invoker created it. Connectors passed
        to the builder are left open."""
        if not self._owns_connector:
            return
        close = getattr(self._template.connector, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return f"Invoker({self._template.method} {self._template.scheme}://{self._template.host})"
