"""
Tag Value Object

Architectural Intent:
- Immutable key/value pair stamped on resources this tool creates
- The same tags (or a subset) are used to find those resources again
"""

from dataclasses import dataclass
from typing import Optional

JUMPHOST_RESOURCE_NAME = "red-hat-sre-jumphost"


@dataclass(frozen=True)
class Tag:
    """
    Value Object representing a provider resource tag.
    """
    key: str
    value: str

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Tag key cannot be empty")

    def __str__(self) -> str:
        return f"{self.key}={self.value}"

    def to_aws(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value}


def default_tags(
    resource_name: str = JUMPHOST_RESOURCE_NAME,
    cluster_infra_id: Optional[str] = None,
) -> tuple[Tag, ...]:
    """Tags applied to every jumphost resource.

    When the cluster infra ID is known, the ownership tag lets the cluster
    uninstaller remove orphaned jumphost resources.
    """
    tags = [
        Tag("red-hat-managed", "true"),
        Tag("Name", resource_name),
    ]
    if cluster_infra_id:
        tags.insert(0, Tag(f"kubernetes.io/cluster/{cluster_infra_id}", "owned"))
    return tuple(tags)
