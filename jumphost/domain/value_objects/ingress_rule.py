"""
Ingress Rule Intent

Architectural Intent:
- Describes the one rule the reconciler manages: TCP/22 from a single host
- Built fresh for every reconciliation attempt and never persisted
"""

from dataclasses import dataclass, field

from jumphost.domain.value_objects.ip_address import IpAddress
from jumphost.domain.value_objects.tag import Tag

SSH_PORT = 22


@dataclass(frozen=True)
class IngressRuleIntent:
    group_id: str
    source: IpAddress
    protocol: str = "tcp"
    port: int = SSH_PORT
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.group_id:
            raise ValueError("Security group id cannot be empty")
        if not (1 <= self.port <= 65535):
            raise ValueError(f"Port must be 1-65535, got {self.port}")

    @property
    def cidr(self) -> str:
        return self.source.cidr

    def __str__(self) -> str:
        return f"{self.protocol}/{self.port} from {self.cidr} on {self.group_id}"
