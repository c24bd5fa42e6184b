import pytest

from currly.error import (
    AssemblyError,
    BindingError,
    BuildError,
    CurrlyError,
    DecodingError,
    EncodingError,
    TransportError,
)


@pytest.mark.parametrize(
    "error,builtin",
    [
        (BuildError("x"), ValueError),
        (BindingError("id", "1", "path"), LookupError),
        (EncodingError("x"), ValueError),
        (AssemblyError("x"), ValueError),
        (TransportError("x"), ConnectionError),
        (DecodingError("x", 200), ValueError),
    ],
)
def test_error_hierarchy(error, builtin):
    assert isinstance(error, CurrlyError)
    assert isinstance(error, builtin)


def test_decoding_error_status():
    assert DecodingError("bad body", 502).status == 502
    assert DecodingError("bad body").status is None
