"""
Ingress Reconciler

Architectural Intent:
- Ensures the jumphost security group allows SSH from one address
- Idempotent: a rule that already exists counts as success

Domain Logic:
- The provider's duplicate-permission error is the only failure absorbed
- Every other CloudApiError propagates unchanged; nothing is rolled back
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from jumphost.domain.errors import DuplicatePermissionError
from jumphost.domain.ports.ingress_authorizer_port import IngressAuthorizerPort
from jumphost.domain.value_objects.ingress_rule import IngressRuleIntent
from jumphost.domain.value_objects.ip_address import IpAddress
from jumphost.domain.value_objects.tag import Tag

logger = logging.getLogger(__name__)


class ReconcileOutcome(Enum):
    AUTHORIZED = auto()
    ALREADY_PRESENT = auto()


@dataclass(frozen=True)
class ReconcileResult:
    intent: IngressRuleIntent
    outcome: ReconcileOutcome
    rule_id: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.outcome is ReconcileOutcome.AUTHORIZED


class IngressReconciler:
    def __init__(self, ingress_port: IngressAuthorizerPort):
        self.ingress_port = ingress_port

    async def reconcile(
        self, group_id: str, ip: IpAddress, tags: Iterable[Tag] = ()
    ) -> ReconcileResult:
        intent = IngressRuleIntent(group_id=group_id, source=ip, tags=tuple(tags))

        try:
            rule_id = await self.ingress_port.authorize_ingress(intent)
        except DuplicatePermissionError:
            logger.info("security group rule already exists for IP %s, skipping creation", ip)
            return ReconcileResult(intent=intent, outcome=ReconcileOutcome.ALREADY_PRESENT)

        logger.info("authorized security group ingress for IP address %s on %s", ip, group_id)
        return ReconcileResult(intent=intent, outcome=ReconcileOutcome.AUTHORIZED, rule_id=rule_id)
