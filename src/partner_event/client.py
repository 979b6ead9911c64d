"""HTTP client for the partner availability API.

Fetches the partner payload and submits computed results. Kept apart from
the planner so that the planner stays free of I/O.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://candidate.hubteam.com/candidateTest/v2"
DEFAULT_TIMEOUT_S = 30.0


class ApiError(Exception):
    """Raised when the API answers with something that is not usable."""


class SubmitResult(NamedTuple):
    status_code: int
    text: str


_transient = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.TransportError)),
    reraise=True,
)

# A POST is only re-sent when the connection was never established.
_connect_failure = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
    reraise=True,
)


class PartnerApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_key: str = "",
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not user_key:
            raise ValueError("A user key is required.")
        self.base_url = base_url.rstrip("/")
        self.user_key = user_key
        self._client = httpx.Client(
            timeout=timeout_s,
            headers={"Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PartnerApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    @_transient
    def fetch_partners(self) -> dict[str, Any]:
        """GET the partner payload."""
        url = self._url("partners")
        log.info("Fetching partners from %s", url)
        resp = self._client.get(url, params={"userKey": self.user_key})
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as exc:
            raise ApiError(f"Partner payload from {url} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ApiError(f"Partner payload from {url} is not a JSON object.")
        log.info("Fetched %d partners", len(data.get("partners") or []))
        return data

    @_connect_failure
    def submit_results(self, payload: dict[str, object]) -> SubmitResult:
        """POST the computed results; non-2xx answers raise ``httpx.HTTPStatusError``."""
        url = self._url("results")
        log.info("Submitting results to %s", url)
        resp = self._client.post(url, params={"userKey": self.user_key}, json=payload)
        resp.raise_for_status()
        log.info("Submission accepted with status %s", resp.status_code)
        return SubmitResult(status_code=resp.status_code, text=resp.text)
