"""Line consumers registered with the transfer engine while a request runs."""
from __future__ import annotations

from curl_client.constants import CONTINUE_LINE, CRLF, DEBUG_INFO_TYPE


class ResponseHeaderCollector:
    """Header callback: collects response header lines in arrival order.

    libcurl calls this once per header line. Blank lines and the interim
    ``HTTP/1.1 100 Continue`` status line are dropped.

    Postcondition: the return value is the byte length of the raw, untrimmed
    line. Any other count is treated by libcurl as a write error and aborts
    the transfer.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def reset(self) -> None:
        self.lines = []

    def __call__(self, raw: bytes) -> int:
        line = raw.decode("latin-1").strip(CRLF)
        if line and line.lower() != CONTINUE_LINE:
            self.lines.append(line)
        return len(raw)


class OutgoingHeaderCapture:
    """Debug callback keeping the last outgoing request header block.

    Redirects produce one block per hop; only the latest is kept so the
    captured headers describe the request that produced the final response.
    """

    def __init__(self) -> None:
        self.block = ""

    def reset(self) -> None:
        self.block = ""

    def __call__(self, info_type: int, data: bytes) -> None:
        if info_type == DEBUG_INFO_TYPE.HEADER_OUT:
            self.block = data.decode("latin-1")


def split_header_block(block: str) -> list[str]:
    """Split a raw header block on CRLF, discarding empty entries."""
    return [line for line in block.split(CRLF) if line]
