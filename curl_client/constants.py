"""Constants shared across modules: method tokens, transfer options, debug info types."""
from __future__ import annotations

from enum import Enum


class HTTP_METHOD:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


class TransferOption(str, Enum):
    """Engine-neutral option names. Values match libcurl's CURLOPT_* suffixes."""

    URL = "URL"
    HTTPGET = "HTTPGET"
    POST = "POST"
    CUSTOMREQUEST = "CUSTOMREQUEST"
    POSTFIELDS = "POSTFIELDS"
    HTTPHEADER = "HTTPHEADER"
    COOKIE = "COOKIE"
    USERAGENT = "USERAGENT"
    TIMEOUT_MS = "TIMEOUT_MS"
    CONNECTTIMEOUT_MS = "CONNECTTIMEOUT_MS"
    FOLLOWLOCATION = "FOLLOWLOCATION"
    MAXREDIRS = "MAXREDIRS"
    AUTOREFERER = "AUTOREFERER"
    SSL_VERIFYPEER = "SSL_VERIFYPEER"
    SSL_VERIFYHOST = "SSL_VERIFYHOST"
    HEADERFUNCTION = "HEADERFUNCTION"
    # Not a libcurl option: asks the engine to keep the outgoing header block.
    HEADER_OUT = "HEADER_OUT"


# curl_infotype values passed to a debug callback.
class DEBUG_INFO_TYPE:
    TEXT = 0
    HEADER_IN = 1
    HEADER_OUT = 2
    DATA_IN = 3
    DATA_OUT = 4


CONTINUE_LINE = "http/1.1 100 continue"
CRLF = "\r\n"
