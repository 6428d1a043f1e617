"""
HTTP transport for the Play Store crawler.

:class:`StoreClient` wraps a ``requests.Session`` and mirrors the small
surface the crawl loops need: the last status code, the decoded body, a
configurable host / header set / encoding, and the ability to be thrown
away for a fresh instance when the upstream starts refusing us.
"""

import random

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from playstore_crawler.config import (
    HOST,
    REQUEST_TIMEOUT,
    RESPONSE_ENCODING,
    TRANSPORT_RETRIES,
    USER_AGENTS,
)
from playstore_crawler.utils.log import log


def build_session(verify_ssl: bool = True) -> requests.Session:
    """Return a ``requests.Session`` with connection retries, keep-alive
    and a randomised User-Agent.

    HTTP error statuses are handed back to the caller untouched; the
    crawl loops own the status-level retry policy.
    """
    session = requests.Session()
    retry = Retry(
        total=TRANSPORT_RETRIES,
        backoff_factor=0.5,
        status_forcelist=[],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session


class StoreClient:
    """Blocking HTTP client that records the outcome of its last request.

    ``get`` / ``post`` never raise for network problems: a
    ``requests.RequestException`` is logged and reported as
    ``status_code = None`` with an empty body.
    """

    def __init__(
        self,
        host: str = HOST,
        verify_ssl: bool = True,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.host = host
        self.timeout = timeout
        self.session = session if session is not None else build_session(verify_ssl)
        self.encoding = RESPONSE_ENCODING
        self.detect_charset = True
        self.status_code: int | None = None

    @property
    def headers(self):
        return self.session.headers

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def configure(
        self,
        accept_language: str | None = None,
        host: str | None = None,
        encoding: str = RESPONSE_ENCODING,
        detect_charset: bool = True,
    ) -> None:
        """Set the language header, host and body encoding for the next requests."""
        if accept_language:
            self.session.headers["Accept-Language"] = accept_language
        if host:
            self.host = host
        self.encoding = encoding
        self.detect_charset = detect_charset

    def get(self, url: str) -> str:
        return self._request("GET", url)

    def post(self, url: str, data: str) -> str:
        return self._request(
            "POST", url, data=data.encode("utf-8"),
            headers={"Content-Type": "application/x-www-form-urlencoded;charset=utf-8"},
        )

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, url: str, **kwargs) -> str:
        headers = {"Host": self.host}
        headers.update(kwargs.pop("headers", {}))
        try:
            resp = self.session.request(
                method, url, headers=headers, timeout=self.timeout,
                allow_redirects=True, **kwargs,
            )
        except requests.RequestException as exc:
            log.warning("[HTTP] %s %s failed – %s", method, url, exc)
            self.status_code = None
            return ""

        self.status_code = resp.status_code
        log.debug("  ← HTTP %s  %d bytes  %s", resp.status_code, len(resp.content), url)
        return self._decode(resp)

    def _decode(self, resp: requests.Response) -> str:
        """Decode *resp* with its declared charset, else the configured
        encoding, else (when enabled) the detected one."""
        if "charset=" in resp.headers.get("Content-Type", "").lower():
            return resp.text
        try:
            return resp.content.decode(self.encoding)
        except (UnicodeDecodeError, LookupError):
            if not self.detect_charset:
                raise
        resp.encoding = resp.apparent_encoding or self.encoding
        return resp.text
