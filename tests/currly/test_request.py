import httpx
import pytest

from currly.error import AssemblyError
from currly.request import assemble, basic_auth, url_string
from currly.template import Credentials, Template
from currly.variable import PathParam, PathSegment, QueryParam, QuerySegment


def bound(variable, value):
    variable.bind(value)
    return variable


def test_url_without_path_or_query():
    assert url_string("https", "localhost", 0, [], []) == "https://localhost"


def test_url_port():
    assert url_string("http", "localhost", 17500, [], []) == "http://localhost:17500"
    assert url_string("http", "localhost", 0, [], []) == "http://localhost"


def test_url_omits_unbound_path_params():
    path = [PathSegment("api"), PathParam("id")]
    assert url_string("https", "h", 0, path, []) == "https://h/api"

    path = [PathSegment("a"), PathParam("x"), PathSegment("b")]
    assert url_string("https", "h", 0, path, []) == "https://h/a/b"

    path = [PathParam("x"), PathParam("y")]
    assert url_string("https", "h", 0, path, []) == "https://h"


def test_url_bound_path_params():
    path = [PathSegment("users"), bound(PathParam("id"), "42"), PathSegment("posts")]
    assert url_string("https", "h", 0, path, []) == "https://h/users/42/posts"


def test_url_query():
    query = [
        QuerySegment("format", "json"),
        QueryParam("page"),
        bound(QueryParam("q"), "a b&c"),
    ]
    assert url_string("https", "h", 8443, [PathSegment("search")], query) == (
        "https://h:8443/search?format=json&q=a+b%26c"
    )


def test_url_omits_unbound_query_params():
    query = [QueryParam("a"), QueryParam("b")]
    assert url_string("https", "h", 0, [PathSegment("x")], query) == "https://h/x"


def test_basic_auth():
    assert basic_auth(Credentials("user", "pass")) == "Basic dXNlcjpwYXNz"


class TestAssemble:
    def template(self, **kwargs):
        return Template(method="POST", scheme="https", host="example.com", **kwargs)

    def test_request(self):
        s = self.template(
            path=(PathSegment("posts"),),
            headers=(("Accept", ("application/json", "text/plain")),),
            body=b"{}",
        ).snapshot()
        request = assemble(s)
        assert request.method == "POST"
        assert request.url == "https://example.com/posts"
        assert request.headers.get_list("accept") == ["application/json", "text/plain"]
        assert request.body == b"{}"
        assert "authorization" not in request.headers

    def test_headers_are_copied(self):
        s = self.template(headers=(("X-A", ("1",)),)).snapshot()
        request = assemble(s)
        request.headers["X-A"] = "2"
        assert s.headers["x-a"] == "1"

    def test_credentials(self):
        s = self.template(
            headers=(("Authorization", ("Bearer x",)),),
            credentials=Credentials("user", "pass"),
        ).snapshot()
        assert assemble(s).headers.get_list("authorization") == ["Basic dXNlcjpwYXNz"]

    def test_empty_credentials_are_ignored(self):
        s = self.template(credentials=Credentials("", "")).snapshot()
        assert "authorization" not in assemble(s).headers

    def test_invalid_body(self):
        s = self.template().snapshot()
        s.body = "text"  # type: ignore[assignment]
        with pytest.raises(AssemblyError, match="must be bytes, not str"):
            assemble(s)

    def test_headers_type(self):
        assert isinstance(assemble(self.template().snapshot()).headers, httpx.Headers)
