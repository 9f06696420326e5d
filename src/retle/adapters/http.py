"""Adapter turning an ``httpx`` request into a retryable operation."""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, Iterable, Optional, Tuple

import httpx

from retle.domain.exceptions import RequestFailedError, RetryableStatusError

RATE_LIMITED_STATUS = 429


class HttpOperation:
    """Callable satisfying ``RetryFunc`` for a single HTTP request.

    Each call sends the request once. Rate limiting, server errors and
    transport failures ask for another attempt; any other 4xx/5xx ends the
    loop with :class:`RequestFailedError`. The last response is kept on
    :attr:`response`.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        method: str,
        url: str,
        *,
        retry_statuses: Optional[Iterable[int]] = None,
        logger: Optional[logging.Logger] = None,
        **request_kwargs: Any,
    ) -> None:
        self._http = http_client
        self._method = method.upper()
        self._url = url
        self._request_kwargs = request_kwargs
        self._retry_statuses: Optional[FrozenSet[int]] = (
            None if retry_statuses is None else frozenset(retry_statuses)
        )
        self.logger = logger or logging.getLogger(__name__)
        self.response: Optional[httpx.Response] = None
        self.attempts = 0

    def __call__(self) -> Tuple[bool, Optional[BaseException]]:
        self.attempts += 1
        try:
            response = self._http.request(
                self._method, self._url, **self._request_kwargs
            )
        except httpx.TransportError as exc:
            self.logger.warning(
                "Transport error on %s %s: %s", self._method, self._url, exc
            )
            return True, exc

        self.response = response
        return self._map_response(response)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _map_response(
        self, response: httpx.Response
    ) -> Tuple[bool, Optional[BaseException]]:
        status = response.status_code
        context = {"status_code": status, "method": self._method, "url": self._url}

        if self._is_retryable(status):
            self.logger.debug("Retryable status %d from %s", status, self._url)
            return True, RetryableStatusError(context=context)
        if status >= 400:
            return False, RequestFailedError(context=context)
        return False, None

    def _is_retryable(self, status: int) -> bool:
        if self._retry_statuses is not None:
            return status in self._retry_statuses
        return status == RATE_LIMITED_STATUS or 500 <= status <= 599
