from __future__ import annotations
import logging
from typing import Optional

import httpx

from . import codec
from .hosts import MAX_ATTEMPTS, host
from .models import Credentials, RequestDescriptor
from .outcomes import DispatchOutcome, HttpError, ParseError, Success, TransportExhausted
from .types import Permission

logger = logging.getLogger(__name__)

API_PREFIX = "/1/indexes"


class Dispatcher:
    """Send a request to the service, rotating hosts on transport failure.

    Only network-level failures are retried. A 200 is decoded, any other
    status comes back as ``HttpError`` straight away.
    """

    def __init__(
        self,
        credentials: Credentials,
        http_client: Optional[httpx.Client] = None,
        connect_timeout: float = 2.0,
        read_timeout: float = 30.0,
    ):
        self._credentials = credentials
        self._owns_client = http_client is None
        self._client = httpx.Client() if http_client is None else http_client
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def close(self):
        if self._owns_client:
            self._client.close()

    def url(self, permission: Permission, path: str, attempt: int) -> str:
        base = f"https://{host(self._credentials.application_id, permission, attempt)}{API_PREFIX}"
        path = path.lstrip("/")
        return f"{base}/{path}" if path else base

    def timeout(self, attempt: int) -> httpx.Timeout:
        # both bounds grow linearly so later fallbacks tolerate slower networks
        scale = attempt + 1
        return httpx.Timeout(self._read_timeout * scale, connect=self._connect_timeout * scale)

    def headers(self, permission: Permission, with_body: bool) -> dict:
        headers = {
            "X-Algolia-API-Key": self._credentials.key_for(permission),
            "X-Algolia-Application-Id": self._credentials.application_id,
        }
        if with_body:
            headers["Content-Type"] = "application/json; charset=utf-8"
        return headers

    def dispatch(self, permission: Permission, method: str, path: str, body: bytes = b"") -> DispatchOutcome:
        return self.send(RequestDescriptor(permission=permission, method=method.upper(), path=path, body=body))

    def send(self, request: RequestDescriptor) -> DispatchOutcome:
        headers = self.headers(request.permission, bool(request.body))
        for attempt in range(MAX_ATTEMPTS):
            url = self.url(request.permission, request.path, attempt)
            logger.debug("%s %s (attempt %d)", request.method, url, attempt)
            try:
                response = self._client.request(
                    request.method,
                    url,
                    headers=headers,
                    content=request.body or None,
                    timeout=self.timeout(attempt),
                )
            except httpx.TransportError as e:
                logger.warning("Transport failure on %s (attempt %d/%d): %s", url, attempt + 1, MAX_ATTEMPTS, e)
                continue
            except httpx.DecodingError as e:
                # body arrived but its content-encoding is broken
                logger.error("Undecodable response body from %s: %s", url, e)
                return ParseError(message=str(e))
            return self._classify(response)
        logger.error("All %d hosts failed for %s %s", MAX_ATTEMPTS, request.method, request.path)
        return TransportExhausted(attempts=MAX_ATTEMPTS)

    @staticmethod
    def _classify(response: httpx.Response) -> DispatchOutcome:
        if response.status_code != 200:
            return HttpError(status=response.status_code, body=response.text)
        try:
            return Success(body=codec.decode(response.content))
        except ValueError as e:
            logger.error("Malformed JSON in 200 response from %s: %s", response.request.url, e)
            return ParseError(status=response.status_code, body=response.text, message=str(e))
