"""
IP Address Value Object

Architectural Intent:
- Immutable, validated IPv4 or IPv6 address
- Single source of truth for the canonical text form and single-host CIDR

Design Decisions:
- Parsing goes through the stdlib ipaddress module so "010.0.0.1"-style
  ambiguities and malformed literals are rejected the same way everywhere
- The single-host prefix is /32 for IPv4 and /128 for IPv6
"""

import ipaddress
from dataclasses import dataclass
from typing import Union

_Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class IpAddress:
    """
    Value Object representing an address to allow through the jumphost firewall.
    """
    value: str

    def __post_init__(self) -> None:
        try:
            parsed = ipaddress.ip_address(self.value)
        except ValueError as e:
            raise ValueError(f"invalid IP address: {self.value}") from e
        # EC2 has no notion of an interface zone ("fe80::1%eth0")
        if parsed.version == 6 and parsed.scope_id:
            raise ValueError(f"invalid IP address: {self.value}")
        # Store the canonical representation
        object.__setattr__(self, "value", str(parsed))

    @property
    def _parsed(self) -> _Address:
        return ipaddress.ip_address(self.value)

    @property
    def version(self) -> int:
        return self._parsed.version

    @property
    def is_ipv6(self) -> bool:
        return self.version == 6

    @property
    def cidr(self) -> str:
        prefix = 128 if self.is_ipv6 else 32
        return f"{self.value}/{prefix}"

    def __str__(self) -> str:
        return self.value
