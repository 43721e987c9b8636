"""
Filter Value Object

Architectural Intent:
- Provider-neutral query predicate: a name and the values it may take
- A list of filters is conjunctive (every filter must match)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Filter:
    """
    Value Object representing a single discovery predicate.
    """
    name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Filter name cannot be empty")
        if not self.values:
            raise ValueError(f"Filter {self.name!r} needs at least one value")

    @staticmethod
    def of(name: str, *values: str) -> "Filter":
        return Filter(name=name, values=tuple(values))

    def matches(self, value: str) -> bool:
        return value in self.values

    def to_aws(self) -> dict:
        return {"Name": self.name, "Values": list(self.values)}
