"""
Network Resolver

Architectural Intent:
- Maps the user-supplied subnet id to the VPC that owns it
- The VPC id is always derived here, never taken from user input
"""

import logging

from jumphost.domain.errors import ConfigurationError, NotFoundError
from jumphost.domain.ports.subnet_lookup_port import SubnetLookupPort

logger = logging.getLogger(__name__)


class NetworkResolver:
    def __init__(self, subnet_port: SubnetLookupPort):
        self.subnet_port = subnet_port

    async def resolve(self, subnet_id: str) -> str:
        """Return the VPC id of subnet_id.

        Raises:
            ConfigurationError: subnet_id is empty (no provider call is made)
            NotFoundError: no subnet matches
        """
        if not subnet_id:
            raise ConfigurationError("could not determine VPC; subnet id must not be empty")

        logger.info("searching for subnets by id: %s", subnet_id)
        subnets = await self.subnet_port.describe_subnets([subnet_id])
        if not subnets:
            raise NotFoundError(f"found 0 subnets matching {subnet_id}")

        vpc_id = subnets[0].vpc_id
        logger.debug("subnet %s belongs to %s", subnet_id, vpc_id)
        return vpc_id
