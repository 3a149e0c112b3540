"""Transfer engine port: contract for the native engine behind CurlClient.

The client only arranges options and copies results out; the engine owns the
actual transfer. Infrastructure (curl_cffi / libcurl) implements this port.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


class CurlClientError(Exception):
    """Base for curl_client failures that are raised rather than recorded."""


class TransferEngineUnavailableError(CurlClientError):
    """Raised at construction when the native engine cannot be loaded or initialised."""


@dataclass(frozen=True)
class TransferOutcome:
    """Result of one perform() call, copied out of the engine.

    body is None when the transfer failed (error_code != 0).
    header_out is the raw outgoing request header block as sent.
    """

    body: bytes | None
    error_code: int
    error_message: str
    status_code: int
    info: dict[str, Any] = field(default_factory=dict)
    header_out: str = ""


@runtime_checkable
class TransferEngine(Protocol):
    """Port: one native transfer handle, configured by options."""

    def setopt(self, option: Any, value: Any) -> None:
        """Set an option. No validation; None unsets a previously set option."""
        ...

    def perform(self) -> TransferOutcome:
        """Run one blocking transfer. Transport failures are returned, never raised."""
        ...

    def close(self) -> None:
        """Release the native handle. Must be safe to call more than once."""
        ...
