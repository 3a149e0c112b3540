"""URL, form body, cookie and header encoding helpers.

Form encoding follows the conventions web backends expect from a
form-urlencoded payload: nested mappings and sequences flatten to
bracketed keys (``user[name]=a``, ``tags[0]=x``), ``None`` values are left
out, booleans are sent as ``1`` / ``0`` and spaces become ``+``.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union
from urllib.parse import quote_plus

Params = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def _scalar(value: Any) -> str | bytes:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (str, bytes)):
        return value
    return str(value)


def _pairs(params: Params) -> Iterable[tuple[Any, Any]]:
    if isinstance(params, Mapping):
        return params.items()
    return params


def _flatten(key: str, value: Any) -> Iterable[tuple[str, str | bytes]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _flatten(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for index, sub_value in enumerate(value):
            yield from _flatten(f"{key}[{index}]", sub_value)
    else:
        yield key, _scalar(value)


def build_query(params: Params, separator: str = "&") -> str:
    """Form-encode params, keeping insertion order."""
    parts = []
    for key, value in _pairs(params):
        for flat_key, flat_value in _flatten(str(key), value):
            parts.append(f"{quote_plus(flat_key)}={quote_plus(flat_value)}")
    return separator.join(parts)


def build_url(url: str | list | tuple) -> str:
    """Resolve a request URL.

    ``url`` is either a plain string, returned unchanged, or a sequence whose
    first element is the base URL and whose remaining entries are query
    parameters (mappings or ``(key, value)`` pairs), e.g.
    ``["https://example.com/search", {"keywords": "grass"}]``.

    The parameters are joined with ``&`` when the base URL already contains a
    ``?`` anywhere, otherwise with ``?``.
    """
    if isinstance(url, str):
        return url
    if not isinstance(url, (list, tuple)) or not url:
        raise ValueError("url must be a string or a non-empty [base_url, params...] sequence")

    base, *entries = url
    if not isinstance(base, str):
        raise TypeError(f"base url must be a string, got {type(base).__name__}")

    params: list[tuple[Any, Any]] = []
    for entry in entries:
        if isinstance(entry, Mapping):
            params.extend(entry.items())
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            params.append((entry[0], entry[1]))
        else:
            raise TypeError(f"query parameter entries must be mappings or (key, value) pairs, got {entry!r}")

    query = build_query(params)
    if not query:
        return base
    # Substring check: a "?" inside an encoded value still counts as a query string.
    return base + ("&" if "?" in base else "?") + query


def prepare_data(data: Any) -> str | bytes:
    """Encode a request body: mappings and pair lists are form-encoded, str/bytes pass through."""
    if data is None:
        return ""
    if isinstance(data, (str, bytes)):
        return data
    if isinstance(data, (Mapping, list, tuple)):
        return build_query(data)
    raise TypeError(f"request body must be str, bytes or a mapping, got {type(data).__name__}")


def build_cookie_string(cookies: Mapping[str, Any]) -> str:
    return build_query(cookies, separator="; ")


def format_header_line(key: str, value: Any) -> str:
    return f"{key}: {value}"
