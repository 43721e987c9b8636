"""
Jumphost Session

Architectural Intent:
- Per-invocation configuration shared by every pipeline stage
- Built once by the composition root and never mutated afterwards

Domain Logic:
- Resources are created with `tags` and found again with `discovery_tags`;
  discovery tags must be a subset of the creation tags, otherwise a
  resource created by this tool could not be rediscovered by it
"""

from dataclasses import dataclass
from typing import Any, Optional

from jumphost.domain.errors import ConfigurationError
from jumphost.domain.value_objects.tag import JUMPHOST_RESOURCE_NAME, Tag


@dataclass(frozen=True)
class JumphostSession:
    ec2: Any
    subnet_id: str
    tags: tuple[Tag, ...]
    discovery_tags: Optional[tuple[Tag, ...]] = None
    resource_name: str = JUMPHOST_RESOURCE_NAME

    def __post_init__(self) -> None:
        if self.discovery_tags is None:
            object.__setattr__(self, "discovery_tags", self.tags)
        missing = set(self.discovery_tags) - set(self.tags)
        if missing:
            raise ConfigurationError(
                "discovery tags must be a subset of creation tags; "
                f"not created with: {', '.join(sorted(str(t) for t in missing))}"
            )
