from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpConfig:
    max_retries: int = 10
    retry_delay_sec: float = 0.1
    timeout_sec: Optional[float] = None
    user_agent: str = "codeplex-discussions/1.0"


class HttpClient:
    """
    Thin HTTP client wrapper:
    - Fixed retry budget (max_retries + 1 attempts in total)
    - Fixed delay between attempts, no backoff and no jitter
    - Returns None instead of raising once the budget is spent

    Every requests exception (connection errors, timeouts, non-2xx statuses)
    counts as transient.
    """

    def __init__(self, config: HttpConfig, session: Optional[requests.Session] = None):
        self._cfg = config
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self._cfg.user_agent})

    def get_text(self, url: str) -> Optional[str]:
        """
        GET an URL and return response body as text.

        Returns:
            The body of the first successful attempt, or None when every
            attempt failed. Exhaustion is logged once, with the last error.
        """
        last_exc: Exception | None = None
        for _ in range(self._cfg.max_retries + 1):
            try:
                resp = self._session.get(url, timeout=self._cfg.timeout_sec)
                resp.raise_for_status()
                # CodePlex serves UTF-8 but often omits the charset, which requests
                # would otherwise decode as ISO-8859-1.
                resp.encoding = "utf-8"
                return resp.text
            except requests.RequestException as e:
                last_exc = e
                time.sleep(self._cfg.retry_delay_sec)

        logger.error("Could not get HTML data for %s. Skipping. Last exception: %s", url, last_exc)
        return None

    def close(self) -> None:
        self._session.close()
