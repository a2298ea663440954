"""HTTP GET collaborator for the Linked Data API.

Every call is one request with a bounded wait and no retries. Failures
(non-2xx status, network error, timeout, unreadable body) come back as an
unsuccessful ``ApiResponse`` rather than an exception; callers that prefer
exceptions use ``ApiResponse.unwrap()``.
"""

from __future__ import annotations

import http.client
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from openphacts.config import Config
from openphacts.errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "openphacts-python/6.1 (+https://www.openphacts.org)"

# Characters encodeURIComponent leaves alone
_SAFE = "-_.!~*'()"


@dataclass
class ApiResponse:
    """Outcome of one API call.

    Attributes:
        success: True when the service answered 2xx with a readable body.
        status: HTTP status code, or None when no response arrived.
        result: The ``result`` member of the response body on success.
        url: Requested URL without credentials.
        error: Human-readable failure description.
    """

    success: bool
    status: Optional[int]
    result: object = None
    url: str = ""
    error: Optional[str] = None

    def unwrap(self) -> object:
        """Return ``result`` or raise ``TransportError`` for a failed call."""
        if not self.success:
            raise TransportError(self.url, self.status, self.error)
        return self.result

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "status": self.status,
            "url": self.url,
            "error": self.error,
            "result": self.result,
        }


def encode_params(params: Mapping[str, object]) -> str:
    """Encode query parameters as ``key=value`` pairs joined by ``&``.

    None values are dropped; booleans are sent as ``true``/``false``.
    """
    parts = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append(f"{quote(str(key), safe=_SAFE)}={quote(str(value), safe=_SAFE)}")
    return "&".join(parts)


class Transport:
    """Issue GET requests against the configured API base URL."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def url_for(self, path: str, params: Mapping[str, object] | None = None) -> str:
        """Build the request URL without credentials."""
        query: dict[str, object] = {"_format": "json"}
        query.update(params or {})
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}?{encode_params(query)}"

    def get(self, path: str, params: Mapping[str, object] | None = None) -> ApiResponse:
        """GET ``path`` with ``params`` and return the decoded ``result``."""
        public_url = self.url_for(path, params)
        credentials = encode_params({"app_id": self.config.app_id, "app_key": self.config.app_key})
        url = f"{public_url}&{credentials}" if credentials else public_url

        request = Request(
            url,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )
        logger.debug("GET %s", public_url)
        try:
            with urlopen(request, timeout=self.config.timeout) as response:
                status = int(response.status)
                raw = response.read()
        except HTTPError as e:
            logger.warning("GET %s returned HTTP %s", public_url, e.code)
            return ApiResponse(False, e.code, url=public_url, error=str(e.reason))
        except (URLError, TimeoutError) as e:
            reason = getattr(e, "reason", e)
            logger.warning("GET %s failed: %s", public_url, reason)
            return ApiResponse(False, None, url=public_url, error=str(reason))
        except (http.client.HTTPException, OSError) as e:
            logger.warning("GET %s failed: %r", public_url, e)
            return ApiResponse(False, None, url=public_url, error=f"Connection failed: {e!r}")

        if not 200 <= status < 300:
            logger.warning("GET %s returned HTTP %s", public_url, status)
            return ApiResponse(False, status, url=public_url, error=f"HTTP {status}")

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("GET %s returned an unreadable body: %s", public_url, e)
            return ApiResponse(False, status, url=public_url, error=f"Unreadable body: {e}")

        if not isinstance(payload, dict) or "result" not in payload:
            logger.warning("GET %s returned no result member", public_url)
            return ApiResponse(False, status, url=public_url, error="Response has no result")

        return ApiResponse(True, status, result=payload["result"], url=public_url)
