"""Authenticated session value passed to the client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    base_url: str
    access_token: str

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
