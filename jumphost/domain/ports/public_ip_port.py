"""
Public IP Port

Architectural Intent:
- Abstracts the external IP-echo service used for self-discovery
- Returns the raw response body; validation belongs to the IP Resolver
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PublicIpPort(Protocol):
    """Port for discovering the caller's public egress IP."""

    async def fetch_public_ip(self) -> str:
        """Return the echo service's response body.

        Raises:
            NetworkError: on transport failure or a non-200 response
        """
        ...
