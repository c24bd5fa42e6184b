from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import (
    TYPE_CHECKING,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)

import httpx
from typing_extensions import TypeAlias

from currly.error import BuildError
from currly.variable import Variable

if TYPE_CHECKING:
    from currly.connector import Connector
    from currly.extractor import ResultExtractor

HeaderValues: TypeAlias = Union[str, Iterable[str]]

HeaderPairs: TypeAlias = Tuple[Tuple[str, Tuple[str, ...]], ...]


class Credentials(NamedTuple):
    """Username and password used for HTTP basic authentication."""

    username: str
    password: str

    @property
    def empty(self) -> bool:
        return not self.username and not self.password


@dataclass(frozen=True)
class Template:
    """The declared shape of a family of requests.

    Templates are immutable: every builder step produces a new Template with
    one field set or appended, and invocations bind their arguments on a
    Snapshot instead of the template itself.
    """

    connector: Optional[Connector] = field(default=None, compare=False)
    method: str = ""
    scheme: str = ""
    host: str = ""
    port: int = 0
    path: Tuple[Variable, ...] = ()
    query: Tuple[Variable, ...] = ()
    headers: HeaderPairs = ()
    credentials: Optional[Credentials] = None
    body: Optional[bytes] = None
    extractor: Optional[ResultExtractor] = None
    error: Optional[BuildError] = None

    def with_error(self, error: BuildError) -> Template:
        # The first recorded error wins.
        if self.error is not None:
            return self
        return replace(self, error=error)

    def append_path(self, variable: Variable) -> Template:
        return replace(self, path=self.path + (variable,))

    def append_query(self, variable: Variable) -> Template:
        return replace(self, query=self.query + (variable,))

    def merge_headers(self, headers: Mapping[str, HeaderValues]) -> Template:
        declared = {name.lower(): (name, values) for name, values in self.headers}
        for name, values in headers.items():
            if isinstance(values, (str, bytes)):
                values = (values,)
            declared[name.lower()] = (name, tuple(values))
        return replace(self, headers=tuple(declared.values()))

    def snapshot(self) -> Snapshot:
        """Returns a mutable copy of the template that owns its own
        variables and headers."""
        return Snapshot(
            method=self.method,
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=[v.copy() for v in self.path],
            query=[v.copy() for v in self.query],
            headers=httpx.Headers(
                [(name, value) for name, values in self.headers for value in values]
            ),
            credentials=self.credentials,
            body=self.body,
            extractor=self.extractor,
        )


@dataclass
class Snapshot:
    """The per-invocation copy of a Template that arguments are applied to.

    A snapshot is owned by a single call and discarded when it returns.
    """

    method: str
    scheme: str
    host: str
    port: int
    path: List[Variable]
    query: List[Variable]
    headers: httpx.Headers
    credentials: Optional[Credentials]
    body: Optional[bytes]
    extractor: Optional[ResultExtractor]
