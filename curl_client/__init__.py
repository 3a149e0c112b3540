"""curl_client - object-style HTTP requests over libcurl."""

from .client import CurlClient
from .config.settings import CurlSettings
from .constants import HTTP_METHOD, TransferOption
from .ports.transfer_engine import (
    CurlClientError,
    TransferEngine,
    TransferEngineUnavailableError,
    TransferOutcome,
)

__version__ = "0.1.0"

__all__ = [
    "CurlClient",
    "CurlSettings",
    "HTTP_METHOD",
    "TransferOption",
    "CurlClientError",
    "TransferEngine",
    "TransferEngineUnavailableError",
    "TransferOutcome",
    "__version__",
]
