from __future__ import annotations

from typing import Any

import pytest

from curl_client.client import CurlClient
from curl_client.config.settings import CurlSettings
from curl_client.constants import TransferOption
from curl_client.ports.transfer_engine import TransferOutcome


class FakeTransferEngine:
    """Implements TransferEngine for tests: records options, replays scripted transfers."""

    def __init__(
        self,
        *,
        outcome: TransferOutcome | None = None,
        header_lines: list[bytes] | None = None,
    ) -> None:
        self.options: dict[Any, Any] = {}
        self.setopt_calls: list[tuple[Any, Any]] = []
        self.performed: list[dict[Any, Any]] = []
        self.header_returns: list[int] = []
        self.close_calls = 0
        self.outcome = outcome or TransferOutcome(
            body=b"ok",
            error_code=0,
            error_message="",
            status_code=200,
            info={"http_code": 200, "content_type": "text/plain"},
            header_out="GET / HTTP/1.1\r\nHost: example.com\r\nAccept: */*\r\n\r\n",
        )
        self.header_lines = header_lines if header_lines is not None else [
            b"HTTP/1.1 200 OK\r\n",
            b"Content-Type: text/plain\r\n",
            b"\r\n",
        ]

    def setopt(self, option: Any, value: Any) -> None:
        self.setopt_calls.append((option, value))
        self.options.pop(option, None)
        if value is not None:
            self.options[option] = value

    def perform(self) -> TransferOutcome:
        self.performed.append(dict(self.options))
        callback = self.options.get(TransferOption.HEADERFUNCTION)
        if callback is not None:
            for line in self.header_lines:
                self.header_returns.append(callback(line))
        return self.outcome

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture()
def settings() -> CurlSettings:
    return CurlSettings(_env_file=None)


@pytest.fixture()
def fake_engine() -> FakeTransferEngine:
    return FakeTransferEngine()


@pytest.fixture()
def client(settings: CurlSettings, fake_engine: FakeTransferEngine):
    c = CurlClient(settings=settings, engine=fake_engine)
    yield c
    c.close()
