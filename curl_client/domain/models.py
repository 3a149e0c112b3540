"""Request/response state owned by a CurlClient. Overwritten on every request."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorState:
    """Engine error from the last transfer. code 0 means no error."""

    code: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0


@dataclass
class RequestState:
    """What was configured and sent for the current request."""

    url: str | None = None
    method: str | None = None
    body: Any = None
    # Configured headers keyed by name; values are full "Name: value" lines.
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, Any] = field(default_factory=dict)
    # Outgoing header lines as the engine sent them.
    sent_headers: list[str] = field(default_factory=list)


@dataclass
class ResponseState:
    """What came back from the last transfer."""

    content: bytes | None = None
    text: str | None = None
    status_code: int = 0
    headers: list[str] = field(default_factory=list)
    info: dict[str, Any] = field(default_factory=dict)
