"""
Subnet Lookup Port

Architectural Intent:
- The slice of the cloud compute capability the Network Resolver needs
- Implemented by EC2Adapter and InMemoryEC2Adapter
"""

from typing import Protocol, runtime_checkable

from jumphost.domain.value_objects.cloud_resources import Subnet


@runtime_checkable
class SubnetLookupPort(Protocol):
    """Port for looking up subnets by id."""

    async def describe_subnets(self, subnet_ids: list[str]) -> list[Subnet]:
        """Return the subnets whose ids exactly match the given ids."""
        ...
