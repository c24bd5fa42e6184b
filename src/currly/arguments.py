"""Per-call arguments of an invoker.

Arguments are applied, in order, to the snapshot of the template that a
single invocation owns. They never modify the template itself, so the same
argument values can be passed to any number of invocations.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from typing import Any, Callable, List, Optional, Protocol, Union

from currly.error import BindingError, CurrlyError, EncodingError
from currly.template import Snapshot
from currly.variable import Variable

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class Argument(Protocol):
    """Protocol for invocation arguments."""

    def apply_to(self, snapshot: Snapshot) -> None:
        """Apply the argument to the snapshot.

        Raises:
            CurrlyError: if the argument cannot be applied; the invocation is
                aborted before any request is sent.
        """
        ...


def _bind(variables: List[Variable], name: str, value: str, kind: str):
    for v in variables:
        if v.name == name and v.bind(value):
            return
    raise BindingError(name, value, kind)


class PathArgument:
    __slots__ = ("name", "value")

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def apply_to(self, snapshot: Snapshot) -> None:
        _bind(snapshot.path, self.name, self.value, "path")

    def __repr__(self):
        return f"path_arg({self.name!r}, {self.value!r})"


class QueryArgument:
    __slots__ = ("name", "value")

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def apply_to(self, snapshot: Snapshot) -> None:
        _bind(snapshot.query, self.name, self.value, "query")

    def __repr__(self):
        return f"query_arg({self.name!r}, {self.value!r})"


class BodyArgument:
    __slots__ = ("payload", "content_type")

    def __init__(self, payload: bytes, content_type: Optional[str] = None):
        self.payload = payload
        self.content_type = content_type

    def apply_to(self, snapshot: Snapshot) -> None:
        if self.content_type is not None:
            snapshot.headers["Content-Type"] = self.content_type
        snapshot.body = self.payload


class JSONBodyArgument:
    """Sets the request body to the JSON encoding of a payload.

    The payload is copied when the argument is created and encoded at most
    once, on first use. The encoded bytes, or the encoding error, are kept
    for every later use of the argument, including concurrent ones.
    """

    __slots__ = (
        "_payload",
        "_default",
        "_lock",
        "_done",
        "_encoded",
        "_failure",
        "_cause",
    )

    def __init__(self, payload: Any, default: Optional[Callable[[Any], Any]] = None):
        self._default = default
        self._lock = threading.Lock()
        self._done = False
        self._encoded: Optional[bytes] = None
        self._failure: Optional[str] = None
        self._cause: Optional[BaseException] = None
        try:
            self._payload = copy.deepcopy(payload)
        except Exception as e:
            self._payload = None
            self._failure = f"failed to copy JSON body: {e}"
            self._cause = e
            self._done = True

    def encode(self) -> bytes:
        """Returns the encoded payload.

        Raises:
            EncodingError: if the payload is not JSON serializable.
        """
        with self._lock:
            if not self._done:
                try:
                    self._encoded = json.dumps(
                        self._payload,
                        separators=(",", ":"),
                        ensure_ascii=False,
                        default=self._default,
                    ).encode("utf-8")
                    logger.debug("encoded JSON body (%d bytes)", len(self._encoded))
                except (TypeError, ValueError, RecursionError) as e:
                    self._failure = f"failed to encode JSON body: {e}"
                    self._cause = e
                self._payload = None
                self._done = True

        if self._failure is not None:
            raise EncodingError(self._failure) from self._cause
        assert self._encoded is not None
        return self._encoded

    def apply_to(self, snapshot: Snapshot) -> None:
        body = self.encode()
        snapshot.headers["Content-Type"] = JSON_CONTENT_TYPE
        snapshot.body = body


def path_arg(name: str, value: str) -> PathArgument:
    """Bind a value to the first path parameter with the given name."""
    return PathArgument(name, value)


def query_arg(name: str, value: str) -> QueryArgument:
    """Bind a value to the first query parameter with the given name."""
    return QueryArgument(name, value)


def body_arg(
    payload: Union[bytes, str], content_type: Optional[str] = None
) -> BodyArgument:
    """Set the request body. Text payloads are encoded as UTF-8.

    Raises:
        TypeError: if the payload is neither bytes nor str.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    elif isinstance(payload, (bytearray, memoryview)):
        payload = bytes(payload)
    elif not isinstance(payload, bytes):
        raise TypeError(f"body must be bytes or str, not {type(payload).__name__}")
    return BodyArgument(payload, content_type)


def json_body_arg(
    payload: Any, *, default: Optional[Callable[[Any], Any]] = None
) -> JSONBodyArgument:
    """Set the request body to the JSON encoding of the payload, and the
    Content-Type header to application/json.

    Args:
        payload: JSON-serializable value. It is copied immediately, changes
            made to it afterwards are not sent.

        default: Function converting objects that the json module cannot
            serialize, as in json.dumps.
    """
    return JSONBodyArgument(payload, default)


def apply_all(snapshot: Snapshot, arguments) -> Optional[CurrlyError]:
    """Apply arguments in order, stopping at the first failure which is
    returned instead of raised."""
    for arg in arguments:
        try:
            arg.apply_to(snapshot)
        except CurrlyError as e:
            logger.debug("argument %r failed: %s", arg, e)
            return e
    return None
