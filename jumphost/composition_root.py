"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the jumphost tool
- Single place where adapters, domain services and the use case are wired
- The CLI obtains everything through create_container()

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- One adapter instance backs all three EC2 ports; services still only see
  the narrow port they need
- Callers may pass their own EC2 adapter (tests use InMemoryEC2Adapter)
"""

from dataclasses import dataclass
from typing import Any, Optional

from jumphost.application.use_cases.update_jumphost import UpdateJumphost
from jumphost.domain.services.ingress_reconciler import IngressReconciler
from jumphost.domain.services.ip_resolver import IpResolver
from jumphost.domain.services.network_resolver import NetworkResolver
from jumphost.domain.services.security_group_locator import MatchPolicy, SecurityGroupLocator
from jumphost.domain.value_objects.session import JumphostSession
from jumphost.domain.value_objects.tag import default_tags
from jumphost.infrastructure.adapters.checkip_adapter import CheckIpAdapter
from jumphost.infrastructure.adapters.ec2_adapter import EC2Adapter
from jumphost.infrastructure.config import JumphostConfig


@dataclass
class JumphostContainer:
    """DI container holding all wired dependencies."""

    config: JumphostConfig
    session: JumphostSession
    ec2_adapter: Any
    checkip_adapter: CheckIpAdapter
    network_resolver: NetworkResolver
    sg_locator: SecurityGroupLocator
    ip_resolver: IpResolver
    reconciler: IngressReconciler
    update_jumphost: UpdateJumphost


def create_ec2_adapter(config: JumphostConfig) -> EC2Adapter:
    return EC2Adapter(
        region=config.aws.region,
        profile=config.aws.profile,
        max_attempts=config.aws.max_attempts,
        connect_timeout=config.aws.connect_timeout,
        read_timeout=config.aws.read_timeout,
    )


def create_container(
    config: Optional[JumphostConfig] = None,
    *,
    subnet_id: str,
    ec2_adapter: Any = None,
) -> JumphostContainer:
    """Create and wire all dependencies for one command invocation."""
    config = config or JumphostConfig()
    ec2_adapter = ec2_adapter or create_ec2_adapter(config)
    checkip_adapter = CheckIpAdapter(
        url=config.ip_echo.url,
        timeout_seconds=config.ip_echo.timeout_seconds,
    )

    session = JumphostSession(
        ec2=ec2_adapter,
        subnet_id=subnet_id,
        tags=default_tags(
            config.jumphost.resource_name,
            config.jumphost.cluster_infra_id or None,
        ),
        resource_name=config.jumphost.resource_name,
    )

    network_resolver = NetworkResolver(session.ec2)
    sg_locator = SecurityGroupLocator(
        session.ec2,
        resource_name=session.resource_name,
        match_policy=MatchPolicy(config.jumphost.match_policy),
    )
    ip_resolver = IpResolver(checkip_adapter)
    reconciler = IngressReconciler(session.ec2)

    update_jumphost = UpdateJumphost(
        network_resolver,
        sg_locator,
        ip_resolver,
        reconciler,
        tags=session.tags,
        discovery_tags=session.discovery_tags,
        deadline_seconds=config.deadline_seconds,
    )

    return JumphostContainer(
        config=config,
        session=session,
        ec2_adapter=ec2_adapter,
        checkip_adapter=checkip_adapter,
        network_resolver=network_resolver,
        sg_locator=sg_locator,
        ip_resolver=ip_resolver,
        reconciler=reconciler,
        update_jumphost=update_jumphost,
    )
