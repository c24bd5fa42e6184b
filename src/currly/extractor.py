"""Strategies that turn a response into the value returned by an invoker.

Any callable accepting a Response can be used as a result extractor; the
functions in this module cover the common cases. json_string is used when a
template does not declare an extractor.
"""

import json
from typing import Any, Protocol

from currly.connector import Response


class ResultExtractor(Protocol):
    """Protocol for result extractors."""

    def __call__(self, response: Response) -> Any:
        """Decode the response. Exceptions raised here are reported as
        decoding errors alongside the response status code."""
        ...


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON value: {name}")


def indent(text: str, prefix: str = "  ") -> str:
    """Re-indent a valid JSON document without re-encoding its values.

    Strings and numbers are copied as written; only whitespace between
    tokens changes. Empty arrays and objects stay on one line.
    """
    out = []
    depth = 0
    pending = False  # an array or object was opened and is not known to be empty
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c in " \t\r\n":
            i += 1
            continue

        if pending and c not in "]}":
            pending = False
            depth += 1
            out.append("\n" + prefix * depth)

        if c == '"':
            j = i + 1
            while text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i : j + 1])
            i = j + 1
            continue

        if c in "[{":
            out.append(c)
            pending = True
        elif c in "]}":
            if pending:
                pending = False
            else:
                depth -= 1
                out.append("\n" + prefix * depth)
            out.append(c)
        elif c == ",":
            out.append(",\n" + prefix * depth)
        elif c == ":":
            out.append(": ")
        else:
            out.append(c)
        i += 1

    return "".join(out)


def json_string(response: Response) -> str:
    """Read the whole body and return it as JSON text indented by two
    spaces.

    Raises:
        ValueError: if the body is not valid JSON (NaN and Infinity are
            rejected).
    """
    body = response.read()
    text = body.decode(json.detect_encoding(body))
    json.loads(text, parse_constant=_reject_constant)
    return indent(text)


def plain_string(response: Response) -> str:
    """Read the whole body and return it as text."""
    return response.read().decode("utf-8")


def raw_bytes(response: Response) -> bytes:
    """Read the whole body and return it unmodified."""
    return response.read()


DEFAULT_EXTRACTOR: ResultExtractor = json_string
