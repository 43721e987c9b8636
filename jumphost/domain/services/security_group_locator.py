"""
Security Group Locator

Architectural Intent:
- Finds the jumphost's security group inside a VPC
- Matches on the resource name convention, the discovery tags and the VPC id

Design Decisions:
- MatchPolicy.FIRST keeps the historical behavior of taking the first of
  several matches (with a warning); MatchPolicy.STRICT refuses to guess
"""

import logging
from enum import Enum
from typing import Iterable

from jumphost.domain.errors import AmbiguousMatchError, NotFoundError
from jumphost.domain.ports.security_group_lookup_port import SecurityGroupLookupPort
from jumphost.domain.services.tag_filters import build_tag_filters
from jumphost.domain.value_objects.cloud_resources import SecurityGroup
from jumphost.domain.value_objects.filter import Filter
from jumphost.domain.value_objects.tag import JUMPHOST_RESOURCE_NAME, Tag

logger = logging.getLogger(__name__)


class MatchPolicy(Enum):
    FIRST = "first"
    STRICT = "strict"


class SecurityGroupLocator:
    def __init__(
        self,
        sg_port: SecurityGroupLookupPort,
        resource_name: str = JUMPHOST_RESOURCE_NAME,
        match_policy: MatchPolicy = MatchPolicy.FIRST,
    ):
        self.sg_port = sg_port
        self.resource_name = resource_name
        self.match_policy = match_policy

    def filters_for(self, vpc_id: str, tags: Iterable[Tag]) -> list[Filter]:
        return build_tag_filters(
            tags,
            Filter.of("group-name", self.resource_name),
            Filter.of("vpc-id", vpc_id),
        )

    async def locate(self, vpc_id: str, tags: Iterable[Tag]) -> SecurityGroup:
        logger.info("searching for security groups associated with vpc id: %s", vpc_id)
        groups = await self.sg_port.describe_security_groups(self.filters_for(vpc_id, tags))

        if not groups:
            raise NotFoundError(
                f"unable to find security group matching name {self.resource_name} in {vpc_id}"
            )

        if len(groups) > 1:
            ids = ", ".join(g.group_id for g in groups)
            if self.match_policy is MatchPolicy.STRICT:
                raise AmbiguousMatchError(
                    f"found {len(groups)} security groups matching name "
                    f"{self.resource_name} in {vpc_id}: {ids}"
                )
            logger.warning(
                "found %d security groups matching %s in %s (%s); using %s",
                len(groups),
                self.resource_name,
                vpc_id,
                ids,
                groups[0].group_id,
            )

        return groups[0]
