"""Concrete TransferEngine implementation over libcurl via curl_cffi."""
from __future__ import annotations

from io import BytesIO
from typing import Any

from curl_cffi.const import CurlInfo, CurlOpt
from curl_cffi.curl import Curl, CurlError
from loguru import logger

from curl_client.constants import TransferOption
from curl_client.domain.header_lines import OutgoingHeaderCapture
from curl_client.ports.transfer_engine import TransferOutcome

# Metadata keys reported in response_info, mapped to CurlInfo member names.
INFO_FIELDS: tuple[tuple[str, str], ...] = (
    ("url", "EFFECTIVE_URL"),
    ("content_type", "CONTENT_TYPE"),
    ("http_code", "RESPONSE_CODE"),
    ("header_size", "HEADER_SIZE"),
    ("request_size", "REQUEST_SIZE"),
    ("filetime", "FILETIME"),
    ("ssl_verify_result", "SSL_VERIFYRESULT"),
    ("redirect_count", "REDIRECT_COUNT"),
    ("total_time", "TOTAL_TIME"),
    ("namelookup_time", "NAMELOOKUP_TIME"),
    ("connect_time", "CONNECT_TIME"),
    ("pretransfer_time", "PRETRANSFER_TIME"),
    ("size_upload", "SIZE_UPLOAD_T"),
    ("size_download", "SIZE_DOWNLOAD_T"),
    ("speed_download", "SPEED_DOWNLOAD_T"),
    ("speed_upload", "SPEED_UPLOAD_T"),
    ("download_content_length", "CONTENT_LENGTH_DOWNLOAD_T"),
    ("upload_content_length", "CONTENT_LENGTH_UPLOAD_T"),
    ("starttransfer_time", "STARTTRANSFER_TIME"),
    ("redirect_time", "REDIRECT_TIME"),
    ("redirect_url", "REDIRECT_URL"),
    ("primary_ip", "PRIMARY_IP"),
    ("primary_port", "PRIMARY_PORT"),
    ("local_ip", "LOCAL_IP"),
    ("local_port", "LOCAL_PORT"),
    ("http_version", "HTTP_VERSION"),
    ("scheme", "SCHEME"),
)


def _native_option(option: Any) -> Any:
    if isinstance(option, TransferOption):
        return CurlOpt[option.value]
    return option


class CurlTransferEngine:
    """TransferEngine backed by one curl_cffi easy handle.

    curl_cffi drops its references to callbacks, write buffers, header lists
    and request bodies after every perform. Options are therefore recorded
    here and replayed onto a freshly reset handle before each transfer; the
    recorded map is the full configuration of the next request.
    """

    def __init__(self, curl: Curl | None = None) -> None:
        self._curl: Curl | None = curl if curl is not None else Curl()
        self._options: dict[Any, Any] = {}
        self._buffer = BytesIO()
        self._header_out = OutgoingHeaderCapture()
        self._capture_header_out = False

    @property
    def closed(self) -> bool:
        return self._curl is None

    def setopt(self, option: Any, value: Any) -> None:
        if option == TransferOption.HEADER_OUT:
            self._capture_header_out = bool(value)
            return
        native = _native_option(option)
        # Re-insert so replay order follows the order options were last set.
        self._options.pop(native, None)
        if value is not None:
            self._options[native] = value

    def _apply(self, option: Any, value: Any) -> None:
        if option == CurlOpt.HTTPHEADER:
            value = [h.encode("latin-1") if isinstance(h, str) else h for h in value]
        elif option == CurlOpt.POSTFIELDS:
            body = value.encode("utf-8") if isinstance(value, str) else value
            self._curl.setopt(CurlOpt.POSTFIELDS, body)
            self._curl.setopt(CurlOpt.POSTFIELDSIZE, len(body))
            return
        elif isinstance(value, bool):
            value = int(value)
        self._curl.setopt(option, value)

    def _prepare(self) -> None:
        self._curl.reset()
        self._buffer = BytesIO()
        self._header_out.reset()
        for option, value in self._options.items():
            self._apply(option, value)
        self._curl.setopt(CurlOpt.WRITEDATA, self._buffer)
        if self._capture_header_out:
            self._curl.setopt(CurlOpt.VERBOSE, 1)
            self._curl.setopt(CurlOpt.DEBUGFUNCTION, self._header_out)

    def _info(self) -> dict[str, Any]:
        info: dict[str, Any] = {}
        for key, name in INFO_FIELDS:
            member = getattr(CurlInfo, name, None)
            if member is None:
                continue
            try:
                value = self._curl.getinfo(member)
            except (CurlError, KeyError, RuntimeError) as exc:
                logger.debug("curl info {} unavailable: {}", name, exc)
                continue
            if isinstance(value, bytes):
                value = value.decode("latin-1")
            info[key] = value
        return info

    def perform(self) -> TransferOutcome:
        if self._curl is None:
            raise RuntimeError("transfer engine is closed")
        self._prepare()

        error_code = 0
        error_message = ""
        try:
            self._curl.perform()
        except CurlError as exc:
            error_code = int(exc.code) if exc.code else -1
            error_message = str(exc)

        status_code = int(self._curl.getinfo(CurlInfo.RESPONSE_CODE) or 0)
        return TransferOutcome(
            body=self._buffer.getvalue() if error_code == 0 else None,
            error_code=error_code,
            error_message=error_message,
            status_code=status_code,
            info=self._info(),
            header_out=self._header_out.block,
        )

    def close(self) -> None:
        if self._curl is not None:
            self._curl.close()
            self._curl = None
