"""Errors raised by the expiring cache."""

from __future__ import annotations

from typing import Any


class NotExistsError(KeyError):
    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"obj not exists: {self.key!r}"
