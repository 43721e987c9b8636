"""
Cloud Resource Value Objects

Architectural Intent:
- Minimal, provider-neutral views of the EC2 resources the pipeline reads
- Adapters translate SDK response dicts into these; the domain never sees
  raw provider payloads
"""

from dataclasses import dataclass, field

from jumphost.domain.value_objects.tag import Tag


@dataclass(frozen=True)
class Subnet:
    subnet_id: str
    vpc_id: str


@dataclass(frozen=True)
class SecurityGroup:
    group_id: str
    group_name: str = ""
    vpc_id: str = ""
    tags: tuple[Tag, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.group_id
