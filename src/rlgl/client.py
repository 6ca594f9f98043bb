"""HTTP access to the rlgl server.

Proxy settings belong to the client instance, so every request made through
one `RlglClient` goes through the same proxy (or none).
"""
import base64
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


def basic_auth_header(credentials: str) -> str:
    """`user:pass` -> `Basic <base64>`"""
    return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")


class RlglClient:
    def __init__(
        self,
        proxy_url: str = "",
        proxy_auth: str = "",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.proxy_url = proxy_url
        self.proxy_auth = proxy_auth
        self.transport = transport

    def proxy(self) -> Optional[httpx.Proxy]:
        if not self.proxy_url:
            return None
        headers = {}
        if self.proxy_auth:
            headers["Proxy-Authorization"] = basic_auth_header(self.proxy_auth)
        return httpx.Proxy(self.proxy_url, headers=headers)

    def _http(self) -> httpx.Client:
        # No client-side timeout: calls block until the server answers.
        return httpx.Client(proxy=self.proxy(), transport=self.transport, timeout=None)

    def request(
        self,
        method: str,
        url: str,
        token: Optional[str] = None,
        content: Optional[bytes] = None,
        files: Optional[Dict[str, Any]] = None,
        content_type: Optional[str] = None,
    ) -> httpx.Response:
        headers = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        if content_type:
            headers["Content-Type"] = content_type

        logger.debug("%s %s", method, url)
        with self._http() as http:
            resp = http.request(method, url, headers=headers, content=content, files=files)

        logger.debug("%s %s -> %s (%d bytes)", method, url, resp.status_code, len(resp.content))
        if resp.is_error:
            logger.warning("%s %s returned HTTP %s", method, url, resp.status_code)
        return resp

    def get(self, url: str, token: Optional[str] = None) -> httpx.Response:
        return self.request("GET", url, token=token)
