# === NAVMAP v1 ===
# {
#   "module": "DicomDictionary.net",
#   "purpose": "Fetch part06.xml over HTTPX with Tenacity retries",
#   "sections": [
#     {"id": "helpers", "name": "Client construction helpers", "anchor": "HELP", "kind": "helpers"},
#     {"id": "retry", "name": "Retry policy", "anchor": "RETRY", "kind": "helpers"},
#     {"id": "api", "name": "Public API", "anchor": "API", "kind": "api"}
#   ]
# }
# === /NAVMAP ===

"""Single synchronous retrieval of the PS3.6 DocBook source.

Transport errors, timeouts and 429/5xx responses are retried by a Tenacity
policy with exponential backoff plus uniform jitter:

    delay(n) = backoff_factor * 2 ** (n - 1) + uniform(0, backoff_jitter)

Client errors fail on the first attempt.
"""

from __future__ import annotations

import logging
import ssl
import time
from typing import Callable, Optional

import certifi
import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from .errors import RetrievalError
from .settings import DownloadConfiguration

__all__ = ["build_http_client", "build_retry_policy", "fetch_document"]

LOGGER = logging.getLogger(__name__)

_RETRYABLE_STATUS = {429, 500, 502, 503, 504}

# --- Client construction helpers ----------------------------------------------


def _build_ssl_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.load_verify_locations(certifi.where())
    return context


def _timeout_for(config: DownloadConfiguration) -> httpx.Timeout:
    return httpx.Timeout(config.timeout_sec, connect=config.connect_timeout_sec)


def build_http_client(config: Optional[DownloadConfiguration] = None) -> httpx.Client:
    """Return a client configured with timeouts, polite headers, and certifi roots."""

    cfg = config or DownloadConfiguration()
    return httpx.Client(
        timeout=_timeout_for(cfg),
        headers=cfg.polite_headers,
        verify=_build_ssl_context(),
        follow_redirects=True,
    )


# --- Retry policy --------------------------------------------------------------


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, RetrievalError) and exc.retryable


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    delay = retry_state.next_action.sleep if retry_state.next_action is not None else 0.0
    LOGGER.warning(
        "retrying part06 download",
        extra={
            "stage": "download",
            "attempt": retry_state.attempt_number,
            "delay": delay,
            "error": str(error),
        },
    )


def build_retry_policy(
    config: Optional[DownloadConfiguration] = None,
    *,
    sleep: Optional[Callable[[float], None]] = None,
) -> Retrying:
    """Create the Tenacity policy used for part06.xml downloads.

    Only :class:`RetrievalError` instances flagged ``retryable`` trigger another
    attempt; the last error is re-raised unchanged once ``max_retries`` is spent.

    Args:
        config: Download settings providing ``max_retries``, ``backoff_factor``
            and ``backoff_jitter``.
        sleep: Sleep function, overridable for deterministic tests.

    Example:
        >>> policy = build_retry_policy(DownloadConfiguration(max_retries=2))
        >>> policy(lambda: "ok")
        'ok'
    """

    cfg = config or DownloadConfiguration()
    return Retrying(
        retry=retry_if_exception(_is_retryable),
        wait=wait_exponential(multiplier=cfg.backoff_factor)
        + wait_random(0, cfg.backoff_jitter),
        stop=stop_after_attempt(cfg.max_retries + 1),
        sleep=sleep or time.sleep,
        before_sleep=_log_retry,
        reraise=True,
    )


def _get(client: httpx.Client, url: str) -> bytes:
    try:
        response = client.get(url)
    except httpx.TimeoutException as exc:
        raise RetrievalError(f"Timed out fetching {url}: {exc}", retryable=True) from exc
    except httpx.TransportError as exc:
        raise RetrievalError(f"Connection error fetching {url}: {exc}", retryable=True) from exc

    if response.status_code >= 400:
        raise RetrievalError(
            f"HTTP {response.status_code} fetching {url}",
            status_code=response.status_code,
            retryable=response.status_code in _RETRYABLE_STATUS,
        )
    return response.content


# --- Public API ----------------------------------------------------------------


def fetch_document(
    config: Optional[DownloadConfiguration] = None,
    *,
    client: Optional[httpx.Client] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> bytes:
    """Download part06.xml and return its raw bytes.

    Args:
        config: Download settings; defaults to :class:`DownloadConfiguration`.
        client: Optional pre-built client (tests inject ``httpx.MockTransport``).
            Clients passed in are left open.
        sleep: Optional sleep override for the retry schedule.

    Raises:
        RetrievalError: If the download fails after all retries.
    """

    cfg = config or DownloadConfiguration()
    owned = client is None
    http = client if client is not None else build_http_client(cfg)
    policy = build_retry_policy(cfg, sleep=sleep)

    try:
        content = policy(_get, http, cfg.url)
    finally:
        if owned:
            http.close()

    LOGGER.info(
        "downloaded part06",
        extra={"stage": "download", "url": cfg.url, "bytes": len(content)},
    )
    return content
