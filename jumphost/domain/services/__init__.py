"""
Domain Services

Architectural Intent:
- One service per stage of the `update` pipeline
- Services depend only on ports, never on concrete adapters
"""

from jumphost.domain.services.tag_filters import build_tag_filters
from jumphost.domain.services.network_resolver import NetworkResolver
from jumphost.domain.services.security_group_locator import MatchPolicy, SecurityGroupLocator
from jumphost.domain.services.ip_resolver import IpResolver
from jumphost.domain.services.ingress_reconciler import (
    IngressReconciler,
    ReconcileOutcome,
    ReconcileResult,
)

__all__ = [
    "build_tag_filters",
    "NetworkResolver",
    "MatchPolicy",
    "SecurityGroupLocator",
    "IpResolver",
    "IngressReconciler",
    "ReconcileOutcome",
    "ReconcileResult",
]
