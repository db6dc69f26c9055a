"""Structured results handed to the chat transport for rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResponseKind(Enum):
    ERROR = "error"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Response:
    kind: ResponseKind
    title: str
    body: str

    @classmethod
    def error(cls, title: str, body: str) -> Response:
        return cls(ResponseKind.ERROR, title, body)

    @classmethod
    def success(cls, title: str, body: str) -> Response:
        return cls(ResponseKind.SUCCESS, title, body)

    @classmethod
    def warning(cls, title: str, body: str) -> Response:
        return cls(ResponseKind.WARNING, title, body)


__all__ = ["Response", "ResponseKind"]
