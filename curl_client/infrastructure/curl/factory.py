"""Transfer engine factory: builds a TransferEngine from settings."""
from __future__ import annotations

from curl_client.config.settings import CurlSettings
from curl_client.ports.transfer_engine import TransferEngine, TransferEngineUnavailableError


def create_transfer_engine(settings: CurlSettings) -> TransferEngine:
    """Acquire one native handle. Raises TransferEngineUnavailableError if libcurl can't be loaded."""
    try:
        from curl_client.infrastructure.curl.curl_engine import CurlTransferEngine
    except ImportError as exc:
        raise TransferEngineUnavailableError(f"curl_cffi / libcurl is not available: {exc}") from exc

    try:
        return CurlTransferEngine()
    except Exception as exc:
        raise TransferEngineUnavailableError(f"failed to initialise curl handle: {exc}") from exc
