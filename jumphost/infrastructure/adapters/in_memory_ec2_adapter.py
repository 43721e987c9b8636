"""
In-Memory EC2 Adapter

Architectural Intent:
- Implements the same three EC2 ports as EC2Adapter against an in-memory
  registry, so the pipeline can be exercised end to end with zero cloud
  credentials
- Behaves like EC2 where the pipeline depends on it: exact-id subnet lookup,
  conjunctive filters, and InvalidPermission.Duplicate on a repeated rule

Design Decisions:
- The registry stores raw dicts in the shape of boto3 responses, and the
  same translation helpers as EC2Adapter turn them into value objects
- Rules are keyed by (group, protocol, port, cidr); tags do not take part in
  duplicate detection, as in EC2
"""

import logging
import uuid
from typing import Optional

from jumphost.domain.errors import CloudApiError, DuplicatePermissionError
from jumphost.domain.value_objects.cloud_resources import SecurityGroup, Subnet
from jumphost.domain.value_objects.filter import Filter
from jumphost.domain.value_objects.ingress_rule import IngressRuleIntent
from jumphost.domain.value_objects.tag import Tag
from jumphost.infrastructure.adapters.ec2_adapter import (
    DUPLICATE_PERMISSION_CODE,
    ip_permission_for,
    security_group_from_aws,
    subnet_from_aws,
)

logger = logging.getLogger(__name__)

_RuleKey = tuple[str, str, int, str]


def _make_id(prefix: str) -> str:
    """Return a plausible EC2 resource ID."""
    return f"{prefix}-" + uuid.uuid4().hex[:17]


def _group_matches(group: dict, flt: Filter) -> bool:
    if flt.name == "group-name":
        return flt.matches(group["GroupName"])
    if flt.name == "group-id":
        return flt.matches(group["GroupId"])
    if flt.name == "vpc-id":
        return flt.matches(group["VpcId"])
    if flt.name.startswith("tag:"):
        key = flt.name[len("tag:"):]
        tags = {t["Key"]: t["Value"] for t in group.get("Tags", [])}
        return key in tags and flt.matches(tags[key])
    raise CloudApiError(
        f"The filter '{flt.name}' is invalid",
        code="InvalidParameterValue",
        operation="DescribeSecurityGroups",
    )


class InMemoryEC2Adapter:
    """Simulated EC2 backend for subnets, security groups and ingress rules."""

    def __init__(self) -> None:
        self._subnets: dict[str, dict] = {}
        self._groups: dict[str, dict] = {}
        self._rules: dict[_RuleKey, dict] = {}
        self.calls: list[str] = []

    # ------------------------------------------------------------------
    # Registry setup
    # ------------------------------------------------------------------

    def add_subnet(self, vpc_id: str, subnet_id: Optional[str] = None) -> str:
        subnet_id = subnet_id or _make_id("subnet")
        self._subnets[subnet_id] = {"SubnetId": subnet_id, "VpcId": vpc_id}
        return subnet_id

    def add_security_group(
        self,
        vpc_id: str,
        group_name: str,
        tags: tuple[Tag, ...] = (),
        group_id: Optional[str] = None,
    ) -> str:
        group_id = group_id or _make_id("sg")
        self._groups[group_id] = {
            "GroupId": group_id,
            "GroupName": group_name,
            "VpcId": vpc_id,
            "Tags": [t.to_aws() for t in tags],
            "IpPermissions": [],
        }
        return group_id

    def rules_for(self, group_id: str) -> list[dict]:
        return [r for (gid, *_), r in self._rules.items() if gid == group_id]

    # ------------------------------------------------------------------
    # Port implementations
    # ------------------------------------------------------------------

    async def describe_subnets(self, subnet_ids: list[str]) -> list[Subnet]:
        self.calls.append("DescribeSubnets")
        return [subnet_from_aws(self._subnets[s]) for s in subnet_ids if s in self._subnets]

    async def describe_security_groups(self, filters: list[Filter]) -> list[SecurityGroup]:
        self.calls.append("DescribeSecurityGroups")
        return [
            security_group_from_aws(g)
            for g in self._groups.values()
            if all(_group_matches(g, f) for f in filters)
        ]

    async def authorize_ingress(self, intent: IngressRuleIntent) -> Optional[str]:
        self.calls.append("AuthorizeSecurityGroupIngress")
        group = self._groups.get(intent.group_id)
        if group is None:
            raise CloudApiError(
                f"The security group '{intent.group_id}' does not exist",
                code="InvalidGroup.NotFound",
                operation="AuthorizeSecurityGroupIngress",
            )

        key = (intent.group_id, intent.protocol, intent.port, intent.cidr)
        if key in self._rules:
            raise DuplicatePermissionError(
                f"the specified rule \"peer: {intent.cidr}, {intent.protocol.upper()}, "
                f"from port: {intent.port}, to port: {intent.port}, ALLOW\" already exists",
                code=DUPLICATE_PERMISSION_CODE,
                operation="AuthorizeSecurityGroupIngress",
            )

        rule_id = _make_id("sgr")
        permission = ip_permission_for(intent)
        group["IpPermissions"].append(permission)
        self._rules[key] = {
            "SecurityGroupRuleId": rule_id,
            "GroupId": intent.group_id,
            "CidrIp": intent.cidr,
            "IpProtocol": intent.protocol,
            "FromPort": intent.port,
            "ToPort": intent.port,
            "Tags": [t.to_aws() for t in intent.tags],
        }
        logger.info("simulated ingress rule %s added: %s", rule_id, intent)
        return rule_id
