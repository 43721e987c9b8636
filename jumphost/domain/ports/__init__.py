"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- One narrow port per pipeline stage so tests can substitute minimal fakes
- Follows Hexagonal Architecture principles
"""

from jumphost.domain.ports.subnet_lookup_port import SubnetLookupPort
from jumphost.domain.ports.security_group_lookup_port import SecurityGroupLookupPort
from jumphost.domain.ports.ingress_authorizer_port import IngressAuthorizerPort
from jumphost.domain.ports.public_ip_port import PublicIpPort

__all__ = [
    "SubnetLookupPort",
    "SecurityGroupLookupPort",
    "IngressAuthorizerPort",
    "PublicIpPort",
]
