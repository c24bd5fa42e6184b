from typing import Optional


class CurrlyError(Exception):
    """Base class for currly exceptions."""


class BuildError(CurrlyError, ValueError):
    """A request template was declared with an invalid shape. Raised when the
    template is built, not when the offending step is called."""


class BindingError(CurrlyError, LookupError):
    """An argument named a path or query parameter that the template does not
    declare (or that cannot be bound)."""

    name: str
    value: str
    kind: str

    def __init__(self, name: str, value: str, kind: str):
        super().__init__(
            f"failed to bind value '{value}' to URL {kind} parameter '{name}'"
        )
        self.name = name
        self.value = value
        self.kind = kind


class EncodingError(CurrlyError, ValueError):
    """A request body could not be serialized."""


class AssemblyError(CurrlyError, ValueError):
    """The request could not be assembled from the bound template."""


class TransportError(CurrlyError, ConnectionError):
    """The connector failed to send the request or receive the response."""


class DecodingError(CurrlyError, ValueError):
    """The result extractor failed to interpret the response body.

    The status code of the response is still known and reported alongside
    the error."""

    status: Optional[int]

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
