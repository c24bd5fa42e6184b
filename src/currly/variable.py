"""Named slots of a URL path or query string.

A template declares its path and query as ordered lists of variables. Static
variables (segments) render as constants and can never be bound. Parameters
render as an empty string until a value is bound to them, and empty renders
are left out of the assembled URL.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from urllib.parse import quote, quote_plus

# Reserved characters left unescaped in path parameter values.
_PATH_SAFE = "$&+=:@"


class Variable(ABC):
    """A named slot in a path or query list."""

    __slots__ = ("name",)

    name: str

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def bind(self, value: str) -> bool:
        """Attempt to bind a value to the variable. Returns False if the
        variable cannot be bound."""

    @abstractmethod
    def render(self) -> str:
        """Render the variable as it appears in the URL, or an empty string
        if it should be omitted."""

    @abstractmethod
    def copy(self) -> Variable:
        """Returns a variable that can be bound independently of this one."""

    def _key(self) -> tuple:
        return (type(self), self.name)

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return self.render()


class PathSegment(Variable):
    """A fixed path segment."""

    __slots__ = ()

    def bind(self, value: str) -> bool:
        return False

    def render(self) -> str:
        return self.name

    def copy(self) -> PathSegment:
        return self

    def __repr__(self):
        return f"PathSegment({self.name!r})"


class PathParam(Variable):
    """A path segment whose value is bound per call."""

    __slots__ = ("value",)

    value: str

    def __init__(self, name: str, value: str = ""):
        super().__init__(name)
        self.value = value

    def bind(self, value: str) -> bool:
        self.value = value
        return True

    def render(self) -> str:
        if not self.value:
            return ""
        return quote(self.value, safe=_PATH_SAFE)

    def copy(self) -> PathParam:
        return PathParam(self.name, self.value)

    def _key(self) -> tuple:
        return (type(self), self.name, self.value)

    # Bound values change, so parameters cannot be dictionary keys.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return f"PathParam({self.name!r}, {self.value!r})"


class QuerySegment(Variable):
    """A fixed name=value pair of the query string. It is always rendered,
    even when the value is empty."""

    __slots__ = ("value",)

    value: str

    def __init__(self, name: str, value: str):
        super().__init__(name)
        self.value = value

    def bind(self, value: str) -> bool:
        return False

    def render(self) -> str:
        return quote_plus(self.name, safe="") + "=" + quote_plus(self.value, safe="")

    def copy(self) -> QuerySegment:
        return self

    def _key(self) -> tuple:
        return (type(self), self.name, self.value)

    def __repr__(self):
        return f"QuerySegment({self.name!r}, {self.value!r})"


class QueryParam(Variable):
    """A query string parameter whose value is bound per call."""

    __slots__ = ("value",)

    value: str

    def __init__(self, name: str, value: str = ""):
        super().__init__(name)
        self.value = value

    def bind(self, value: str) -> bool:
        self.value = value
        return True

    def render(self) -> str:
        if not self.value:
            return ""
        return quote_plus(self.name, safe="") + "=" + quote_plus(self.value, safe="")

    def copy(self) -> QueryParam:
        return QueryParam(self.name, self.value)

    def _key(self) -> tuple:
        return (type(self), self.name, self.value)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return f"QueryParam({self.name!r}, {self.value!r})"
