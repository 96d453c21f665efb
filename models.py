"""
Data models shared by the providers and the report.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class ActivityItem:
    """
    One reportable unit of work (a commit, a reviewed PR or a touched ticket).
    """
    title: str
    source: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.title, str):
            raise TypeError("title must be a string")
        if not isinstance(self.source, str) or not self.source:
            raise ValueError("source must be a non-empty string")
        # freeze the metadata too; a plain dict would still be mutable
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def as_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "source": self.source, "metadata": dict(self.metadata)}

    def __str__(self):
        return f"{self.title} | {self.source}"


@dataclass(frozen=True)
class AtlassianInstance:
    """
    Connection details for one Atlassian cloud site.
    """
    domain: str
    email: str
    api_token: str = field(repr=False)

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}.atlassian.net"
