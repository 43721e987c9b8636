"""
Security Group Lookup Port

Architectural Intent:
- The slice of the cloud compute capability the Security Group Locator needs
- Filters are conjunctive; an empty result is not an error at this layer
"""

from typing import Protocol, runtime_checkable

from jumphost.domain.value_objects.cloud_resources import SecurityGroup
from jumphost.domain.value_objects.filter import Filter


@runtime_checkable
class SecurityGroupLookupPort(Protocol):
    """Port for querying security groups."""

    async def describe_security_groups(self, filters: list[Filter]) -> list[SecurityGroup]:
        """Return every security group matching all filters."""
        ...
