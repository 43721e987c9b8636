"""
IP Resolver

Architectural Intent:
- Decides which single address the jumphost should allow
- Two mutually exclusive sources: an explicit address or self-discovery

Domain Logic:
- Explicit addresses are validated locally, with no network call
- Discovered addresses are trimmed and re-validated; a bad echo response is
  a NetworkError, never silently ignored
"""

import logging
from typing import Optional

from jumphost.domain.errors import NetworkError, ValidationError
from jumphost.domain.ports.public_ip_port import PublicIpPort
from jumphost.domain.value_objects.ip_address import IpAddress

logger = logging.getLogger(__name__)


def check_ip_source(set_ip: Optional[str], set_self_ip: bool) -> None:
    """Raise ValidationError unless exactly one IP source is selected."""
    if bool(set_ip) == bool(set_self_ip):
        raise ValidationError("ambiguous or missing IP source: use exactly one of --set-ip or --set-self-ip")


def validate_ip(ip: str) -> IpAddress:
    try:
        return IpAddress(ip)
    except ValueError as e:
        raise ValidationError(f"invalid IP address: {ip}") from e


class IpResolver:
    def __init__(self, public_ip_port: PublicIpPort):
        self.public_ip_port = public_ip_port

    async def resolve(self, set_ip: Optional[str] = None, set_self_ip: bool = False) -> IpAddress:
        check_ip_source(set_ip, set_self_ip)

        if set_ip:
            return validate_ip(set_ip)

        return await self.discover()

    async def discover(self) -> IpAddress:
        body = await self.public_ip_port.fetch_public_ip()
        # The echo service appends a trailing newline
        candidate = body.strip()
        try:
            ip = IpAddress(candidate)
        except ValueError as e:
            raise NetworkError(f"received an invalid ip: {candidate!r}") from e

        logger.info("discovered public ip %s", ip)
        return ip
