"""CurlClient: object-style wrapper around one native curl handle.

    client = CurlClient()
    client.get("https://example.com")
    client.get(["https://example.com/search", {"keywords": "grass"}])
    client.post("https://example.com/login/", {"username": "admin", "password": "123456"})
    client.put("https://api.example.com/user/", {"name": "Grass"})

    client.error_code, client.error_message
    client.request_url, client.request_header, client.request_body, client.request_cookie
    client.response, client.response_info, client.response_header, client.response_code

Each call blocks until libcurl finishes. Transport failures are not raised:
check ``error_code`` (0 = success) after every request.
"""
from __future__ import annotations

import re
from typing import Any

from loguru import logger

from curl_client.config.settings import CurlSettings
from curl_client.constants import HTTP_METHOD, TransferOption
from curl_client.core import SERVICE_NAME
from curl_client.domain.encoding import (
    build_cookie_string,
    build_url,
    format_header_line,
    prepare_data,
)
from curl_client.domain.header_lines import ResponseHeaderCollector, split_header_block
from curl_client.domain.models import ErrorState, RequestState, ResponseState
from curl_client.infrastructure.curl.factory import create_transfer_engine
from curl_client.ports.transfer_engine import TransferEngine, TransferOutcome

_CHARSET_RE = re.compile(r"charset=[\"']?([\w.:-]+)", re.IGNORECASE)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class CurlClient:
    """Wraps one transfer engine handle; state reflects the latest request.

    Not safe to share between threads: headers, cookies and response fields
    live on the instance. Use one client per sequence of requests.
    """

    def __init__(
        self,
        verify_ssl: bool | None = None,
        *,
        settings: CurlSettings | None = None,
        engine: TransferEngine | None = None,
    ) -> None:
        self._settings = settings or CurlSettings()
        self.verify_ssl = self._settings.verify_ssl if verify_ssl is None else verify_ssl
        self._engine: TransferEngine | None = None
        self._header_collector = ResponseHeaderCollector()

        self.error = ErrorState()
        self.request_state = RequestState()
        self.response_state = ResponseState()

        self.init(engine)

    @classmethod
    def instance(cls, *args: Any, **kwargs: Any) -> "CurlClient":
        return cls(*args, **kwargs)

    def init(self, engine: TransferEngine | None = None) -> "CurlClient":
        """Acquire the engine handle and apply the baseline configuration."""
        self._engine = engine if engine is not None else create_transfer_engine(self._settings)
        settings = self._settings

        self.set_opt(TransferOption.HEADER_OUT, True)
        self.set_opt(TransferOption.TIMEOUT_MS, int(settings.timeout_seconds * 1000))
        if settings.connect_timeout_seconds > 0:
            self.set_opt(TransferOption.CONNECTTIMEOUT_MS, int(settings.connect_timeout_seconds * 1000))
        self.set_opt(TransferOption.AUTOREFERER, settings.auto_referer)
        self.set_opt(TransferOption.FOLLOWLOCATION, settings.follow_location)
        self.set_opt(TransferOption.MAXREDIRS, settings.max_redirects)
        if settings.user_agent:
            self.set_opt(TransferOption.USERAGENT, settings.user_agent)
        if not self.verify_ssl:
            logger.warning("TLS certificate and hostname verification is disabled for this client")
            self.set_opt(TransferOption.SSL_VERIFYPEER, False)
            self.set_opt(TransferOption.SSL_VERIFYHOST, 0)
        self.set_opt(TransferOption.HEADERFUNCTION, self._header_collector)

        _log("engine_acquired", verify_ssl=self.verify_ssl, timeout_seconds=settings.timeout_seconds)
        return self

    # -- result fields -------------------------------------------------

    @property
    def error_code(self) -> int:
        return self.error.code

    @property
    def error_message(self) -> str:
        return self.error.message

    @property
    def request_url(self) -> str | None:
        return self.request_state.url

    @property
    def request_header(self) -> list[str]:
        return self.request_state.sent_headers

    @property
    def request_body(self) -> Any:
        return self.request_state.body

    @property
    def request_cookie(self) -> dict[str, Any]:
        return self.request_state.cookies

    @property
    def headers(self) -> dict[str, str]:
        return self.request_state.headers

    @property
    def response(self) -> str | None:
        return self.response_state.text

    @property
    def response_content(self) -> bytes | None:
        return self.response_state.content

    @property
    def response_info(self) -> dict[str, Any]:
        return self.response_state.info

    @property
    def response_header(self) -> list[str]:
        return self.response_state.headers

    @property
    def response_code(self) -> int:
        return self.response_state.status_code

    # -- requests ------------------------------------------------------

    def get(self, url: str | list | tuple) -> "CurlClient":
        return self.request(url, HTTP_METHOD.GET)

    def post(self, url: str | list | tuple, data: Any = None) -> "CurlClient":
        return self.request(url, HTTP_METHOD.POST, data)

    def put(self, url: str | list | tuple, data: Any = None) -> "CurlClient":
        return self.request(url, HTTP_METHOD.PUT, data)

    def patch(self, url: str | list | tuple, data: Any = None) -> "CurlClient":
        return self.request(url, HTTP_METHOD.PATCH, data)

    def delete(self, url: str | list | tuple, data: Any = None) -> "CurlClient":
        return self.request(url, HTTP_METHOD.DELETE, data)

    def options(self, url: str | list | tuple, data: Any = None) -> "CurlClient":
        return self.request(url, HTTP_METHOD.OPTIONS, data)

    def request(self, url: str | list | tuple, method: str = HTTP_METHOD.GET, data: Any = None) -> "CurlClient":
        method = method.upper()
        if method == HTTP_METHOD.GET:
            self.set_opt(TransferOption.CUSTOMREQUEST, None)
            self.set_opt(TransferOption.POST, None)
            self.set_opt(TransferOption.POSTFIELDS, None)
            self.set_opt(TransferOption.HTTPGET, True)
        elif method == HTTP_METHOD.POST:
            self.set_opt(TransferOption.CUSTOMREQUEST, None)
            self.set_opt(TransferOption.HTTPGET, None)
            self.set_opt(TransferOption.POST, True)
            self.set_opt(TransferOption.POSTFIELDS, prepare_data(data))
        else:
            self.set_opt(TransferOption.HTTPGET, None)
            self.set_opt(TransferOption.POST, None)
            self.set_opt(TransferOption.CUSTOMREQUEST, method)
            self.set_opt(TransferOption.POSTFIELDS, prepare_data(data))

        self.request_state.url = build_url(url)
        self.request_state.method = method
        self.request_state.body = data
        self.set_opt(TransferOption.URL, self.request_state.url)
        return self.exec()

    def exec(self) -> "CurlClient":
        """Run one blocking transfer and copy the results onto the instance."""
        engine = self._require_engine()
        self._header_collector.reset()
        _log("request_started", method=self.request_state.method, url=self.request_state.url)

        outcome = engine.perform()

        self.error = ErrorState(code=outcome.error_code, message=outcome.error_message)
        self.response_state = ResponseState(
            content=outcome.body,
            text=self._decode(outcome),
            status_code=outcome.status_code,
            headers=self._header_collector.lines,
            info=dict(outcome.info),
        )
        self.request_state.sent_headers = split_header_block(outcome.header_out)

        if self.error.ok:
            _log(
                "request_completed",
                method=self.request_state.method,
                url=self.request_state.url,
                status_code=outcome.status_code,
            )
        else:
            logger.bind(
                service_name=SERVICE_NAME,
                event="request_failed",
                method=self.request_state.method,
                url=self.request_state.url,
                error_code=outcome.error_code,
            ).warning(outcome.error_message)
        return self

    def _decode(self, outcome: TransferOutcome) -> str | None:
        if outcome.body is None:
            return None
        encoding = self._settings.default_encoding
        match = _CHARSET_RE.search(str(outcome.info.get("content_type") or ""))
        if match:
            encoding = match.group(1)
        try:
            return outcome.body.decode(encoding, errors="replace")
        except LookupError:
            return outcome.body.decode(self._settings.default_encoding, errors="replace")

    # -- configuration -------------------------------------------------

    def set_opt(self, option: Any, value: Any) -> "CurlClient":
        self._require_engine().setopt(option, value)
        return self

    def set_header(self, key: str, value: Any) -> "CurlClient":
        self.request_state.headers[key] = format_header_line(key, value)
        self.set_opt(TransferOption.HTTPHEADER, list(self.request_state.headers.values()))
        return self

    def set_cookie(self, key: str, value: Any) -> "CurlClient":
        self.request_state.cookies[key] = value
        self.set_opt(TransferOption.COOKIE, build_cookie_string(self.request_state.cookies))
        return self

    # -- lifecycle -----------------------------------------------------

    def _require_engine(self) -> TransferEngine:
        if self._engine is None:
            raise RuntimeError("CurlClient is closed")
        return self._engine

    @property
    def closed(self) -> bool:
        return self._engine is None

    def close(self) -> "CurlClient":
        if self._engine is not None:
            engine, self._engine = self._engine, None
            engine.close()
            _log("engine_released")
        return self

    def __enter__(self) -> "CurlClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def __del__(self) -> None:
        # Construction may have failed before the engine attribute existed.
        if getattr(self, "_engine", None) is not None:
            self.close()
