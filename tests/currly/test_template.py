import unittest

from currly.template import Credentials, Template
from currly.variable import PathParam, PathSegment, QueryParam


class TestTemplate(unittest.TestCase):
    def setUp(self):
        self.template = Template(
            method="GET",
            scheme="https",
            host="example.com",
            path=(PathSegment("users"), PathParam("id")),
            query=(QueryParam("q"),),
            headers=(("Accept", ("application/json",)),),
        )

    def test_snapshot_variables_are_independent(self):
        snapshot = self.template.snapshot()
        snapshot.path[1].bind("42")
        snapshot.query[0].bind("x")

        self.assertEqual(self.template.path[1].value, "")
        self.assertEqual(self.template.query[0].value, "")
        self.assertEqual(self.template.snapshot().path[1].value, "")

    def test_snapshot_headers_are_independent(self):
        snapshot = self.template.snapshot()
        snapshot.headers["Accept"] = "text/plain"
        snapshot.headers["X-Extra"] = "1"

        self.assertEqual(
            self.template.snapshot().headers.get_list("accept"), ["application/json"]
        )
        self.assertNotIn("x-extra", self.template.snapshot().headers)

    def test_append_does_not_modify_template(self):
        t = self.template.append_path(PathSegment("posts"))
        self.assertEqual(len(self.template.path), 2)
        self.assertEqual(len(t.path), 3)

    def test_merge_headers_replaces_same_key(self):
        t = self.template.merge_headers({"accept": ["a", "b"], "X-One": "1"})
        self.assertEqual(t.headers, (("accept", ("a", "b")), ("X-One", ("1",))))
        self.assertEqual(self.template.headers, (("Accept", ("application/json",)),))

    def test_equality(self):
        other = Template(
            connector=object(),
            method="GET",
            scheme="https",
            host="example.com",
            path=(PathSegment("users"), PathParam("id")),
            query=(QueryParam("q"),),
            headers=(("Accept", ("application/json",)),),
        )
        self.assertEqual(self.template, other)
        self.assertNotEqual(self.template, self.template.append_path(PathParam("x")))

    def test_first_error_wins(self):
        from currly.error import BuildError

        first = BuildError("first")
        t = self.template.with_error(first).with_error(BuildError("second"))
        self.assertIs(t.error, first)


def test_empty_credentials_are_not_absent():
    assert Credentials("", "").empty
    assert not Credentials("user", "").empty
    assert Template(credentials=Credentials("", "")).credentials is not None
