"""
Domain Value Objects

Architectural Intent:
- Immutable values passed between pipeline stages
"""

from jumphost.domain.value_objects.tag import Tag, JUMPHOST_RESOURCE_NAME, default_tags
from jumphost.domain.value_objects.filter import Filter
from jumphost.domain.value_objects.ip_address import IpAddress
from jumphost.domain.value_objects.cloud_resources import Subnet, SecurityGroup
from jumphost.domain.value_objects.ingress_rule import IngressRuleIntent, SSH_PORT
from jumphost.domain.value_objects.session import JumphostSession

__all__ = [
    "Tag",
    "JUMPHOST_RESOURCE_NAME",
    "default_tags",
    "Filter",
    "IpAddress",
    "Subnet",
    "SecurityGroup",
    "IngressRuleIntent",
    "SSH_PORT",
    "JumphostSession",
]
