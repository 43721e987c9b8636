"""
Update DTOs

Architectural Intent:
- Data Transfer Objects for the `update` use case boundary
- Input validation at the application boundary
"""

from dataclasses import dataclass
from typing import Optional

from jumphost.domain.errors import ConfigurationError
from jumphost.domain.services.ip_resolver import check_ip_source
from jumphost.domain.services.ingress_reconciler import ReconcileOutcome
from jumphost.domain.value_objects.session import JumphostSession


@dataclass(frozen=True)
class UpdateJumphostRequest:
    subnet_id: str
    set_ip: Optional[str] = None
    set_self_ip: bool = False

    def __post_init__(self) -> None:
        if not self.subnet_id:
            raise ConfigurationError("subnet_id cannot be empty")
        check_ip_source(self.set_ip, self.set_self_ip)

    @classmethod
    def for_session(
        cls,
        session: JumphostSession,
        set_ip: Optional[str] = None,
        set_self_ip: bool = False,
    ) -> "UpdateJumphostRequest":
        """Build the request for the subnet the session was created for."""
        return cls(subnet_id=session.subnet_id, set_ip=set_ip, set_self_ip=set_self_ip)


@dataclass(frozen=True)
class UpdateJumphostResponse:
    vpc_id: str
    group_id: str
    cidr: str
    outcome: ReconcileOutcome

    @property
    def changed(self) -> bool:
        return self.outcome is ReconcileOutcome.AUTHORIZED

    @property
    def message(self) -> str:
        if self.changed:
            return f"Allowed SSH from {self.cidr} on {self.group_id}"
        return f"SSH from {self.cidr} already allowed on {self.group_id}"
