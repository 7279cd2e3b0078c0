"""Default file-content retrieval collaborator backed by requests."""

from __future__ import annotations

from typing import Callable

import requests
from requests.exceptions import HTTPError, RequestException

from exhibit_indexer.config.policies import FetchPolicy
from exhibit_indexer.utils.logging import get_logger

FileFetcher = Callable[[str], str]


class FetchError(Exception):
    """Raised when a full-text file cannot be retrieved."""

    def __init__(self, message: str, *, url: str, retryable: bool = True) -> None:
        super().__init__(message)
        self.url = url
        self.retryable = retryable


class RequestsFileFetcher:
    """Fetch textual file content over HTTP.

    No retries are attempted; failures surface as :class:`FetchError` and the
    caller decides whether to skip, abort, or retry.
    """

    def __init__(
        self,
        *,
        policy: FetchPolicy | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._policy = policy or FetchPolicy()
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", self._policy.user_agent)
        self._logger = get_logger(component="file_fetcher", user_agent=self._policy.user_agent)

    def __call__(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=self._policy.request_timeout_seconds)
            response.raise_for_status()
        except HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            retryable = status is None or status >= 500 or status == 429
            self._logger.warning("File fetch rejected", url=url, status_code=status)
            raise FetchError(str(exc), url=url, retryable=retryable) from exc
        except RequestException as exc:
            self._logger.warning("File fetch failed", url=url, error=str(exc))
            raise FetchError(str(exc), url=url) from exc
        if self._policy.encoding:
            response.encoding = self._policy.encoding
        self._logger.debug("Fetched file", url=url, bytes=len(response.content))
        return response.text


__all__ = ["FetchError", "FileFetcher", "RequestsFileFetcher"]
