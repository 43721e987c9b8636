"""
CheckIP Adapter

Architectural Intent:
- Implements PublicIpPort against a plain-text IP-echo service
  (https://checkip.amazonaws.com by default)
- Uses stdlib urllib for the HTTP layer (no external dependencies)

Design Decisions:
- The blocking request runs in the default executor with a socket timeout
- Any transport failure or non-200 status becomes a NetworkError; the body
  is returned untouched and validated by the IP Resolver
"""

import asyncio
import logging
import urllib.error
import urllib.request
from http import HTTPStatus

from jumphost.domain.errors import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_CHECKIP_URL = "https://checkip.amazonaws.com"


class CheckIpAdapter:
    """Public IP discovery via an HTTP echo endpoint."""

    def __init__(self, url: str = DEFAULT_CHECKIP_URL, timeout_seconds: float = 10) -> None:
        self._url = url
        self._timeout = timeout_seconds

    @property
    def url(self) -> str:
        return self._url

    def _get(self) -> str:
        request = urllib.request.Request(self._url, method="GET")
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as resp:
                if resp.status != HTTPStatus.OK:
                    raise NetworkError(f"received error code: {resp.status}")
                return resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            raise NetworkError(f"received error code: {e.code}") from e
        except urllib.error.URLError as e:
            raise NetworkError(f"failed to reach {self._url}: {e.reason}") from e
        except UnicodeDecodeError as e:
            raise NetworkError(f"unreadable response from {self._url}") from e
        except OSError as e:
            raise NetworkError(f"failed to reach {self._url}: {e}") from e

    async def fetch_public_ip(self) -> str:
        logger.debug("GET %s", self._url)
        return await asyncio.get_running_loop().run_in_executor(None, self._get)
