"""Helpers for testing code that uses currly templates."""

from .connector import RecordingConnector, StaticResponse
from .server import EchoServer

__all__ = [
    "EchoServer",
    "RecordingConnector",
    "StaticResponse",
]
