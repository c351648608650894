"""Multiplexed REST transport with endpoint rotation and failover."""

from __future__ import annotations

import logging
import platform
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

import requests

from . import __version__
from .auth import AuthProvider
from .cancellation import CancellationToken
from .codec import JSON_CONTENT_TYPE
from .errors import (
    AggregateTransportError,
    AuthenticationError,
    CancelledError,
    ConfigurationError,
    TransportError,
)

logger = logging.getLogger(__name__)

STANDARD_BASE_URLS = [
    "https://api-1.verifalia.com/v2.5",
    "https://api-2.verifalia.com/v2.5",
    "https://api-3.verifalia.com/v2.5",
]

CERTIFICATE_BASE_URLS = [
    "https://api-cca-1.verifalia.com/v2.5",
    "https://api-cca-2.verifalia.com/v2.5",
    "https://api-cca-3.verifalia.com/v2.5",
]

# How often a cancellable dispatch checks its token
_CANCEL_CHECK_INTERVAL = 0.05
_MAX_DISPATCH_WORKERS = 8


def default_user_agent() -> str:
    return f"envelope-client/{__version__} python/{platform.python_version()}"


@dataclass(frozen=True)
class InvocationRequest:
    method: str
    resource: str  # relative to the base URL, e.g. "email-validations/abc"
    params: Optional[Mapping[str, str]] = None
    body: Optional[bytes] = None  # buffered so that failover attempts resend it whole
    headers: Optional[Mapping[str, str]] = None
    token: Optional[CancellationToken] = None


class MultiplexedTransport:
    """Sends each request to the next base URL, failing over on connection errors.

    Every invocation makes at most one attempt per configured base URL. The
    rotation cursor is shared by all invocations on this instance, so
    consecutive calls spread across the endpoints. A 401/403 ends the
    invocation at once; any other response is handed back untouched.
    """

    def __init__(
        self,
        auth: AuthProvider,
        base_urls: Sequence[str],
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_urls:
            raise ConfigurationError("At least one base URL is required")

        self._base_urls: Tuple[str, ...] = tuple(url.rstrip("/") for url in base_urls)
        self._auth = auth
        self._user_agent = user_agent or default_user_agent()

        config = auth.build_transport_config()
        self._timeout = config.timeout
        self._session = session or requests.Session()
        if config.cert:
            self._session.cert = config.cert

        self._cursor = 0
        self._cursor_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def base_urls(self) -> Tuple[str, ...]:
        return self._base_urls

    def _next_base_url(self) -> str:
        with self._cursor_lock:
            idx = self._cursor
            self._cursor += 1
        return self._base_urls[idx % len(self._base_urls)]

    def _prepare(self, url: str, request: InvocationRequest) -> requests.PreparedRequest:
        headers = {
            "User-Agent": self._user_agent,
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
        }
        if request.headers:
            headers.update(request.headers)

        raw = requests.Request(
            method=request.method,
            url=url,
            params=dict(request.params) if request.params else None,
            data=request.body,
            headers=headers,
        )
        return self._session.prepare_request(raw)

    def invoke(self, request: InvocationRequest) -> requests.Response:
        errors: List[Tuple[str, Exception]] = []
        token = request.token

        for attempt in range(1, len(self._base_urls) + 1):
            if token is not None:
                token.raise_if_cancelled()

            url = f"{self._next_base_url()}/{request.resource.lstrip('/')}"
            try:
                prepared = self._prepare(url, request)
                url = prepared.url
                self._auth.sign(prepared)
                logger.debug("%s %s (attempt %d)", request.method, url, attempt)
                response = self._dispatch(prepared, token)
            except CancelledError:
                raise
            except ConfigurationError as e:
                logger.warning("%s %s can't be signed: %s", request.method, url, e)
                errors.append((url, e))
                continue
            except (requests.RequestException, OSError) as e:
                logger.warning("%s %s failed: %s", request.method, url, e)
                error = TransportError(str(e), url=url)
                error.__cause__ = e
                errors.append((url, error))
                continue

            if response.status_code in (401, 403):
                self._auth.handle_unauthorized()
                response.close()
                raise AuthenticationError(response.status_code)

            return response

        raise AggregateTransportError(errors)

    def _dispatch(
        self, prepared: requests.PreparedRequest, token: Optional[CancellationToken]
    ) -> requests.Response:
        if token is None:
            return self._session.send(prepared, timeout=self._timeout)

        future = self._get_executor().submit(
            self._session.send, prepared, timeout=self._timeout
        )
        while True:
            try:
                return future.result(timeout=_CANCEL_CHECK_INTERVAL)
            except FutureTimeout:
                if token.cancelled:
                    future.add_done_callback(_close_abandoned)
                    raise CancelledError("The request has been cancelled")

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=_MAX_DISPATCH_WORKERS,
                    thread_name_prefix="envelope-dispatch",
                )
            return self._executor

    def close(self) -> None:
        self._session.close()
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=False)
                self._executor = None

    def __enter__(self) -> "MultiplexedTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _close_abandoned(future: Future) -> None:
    # Response of a request whose caller already gave up on it
    if not future.cancelled() and future.exception() is None:
        future.result().close()
