"""
Activity providers and the default registry used by the CLI.
"""
import os
from typing import List, Mapping, Optional

from config import discover_atlassian_instances
from ingest.base import ActivityProvider
from ingest.github import GitHubProvider
from ingest.jira import JiraProvider


def default_providers(env: Optional[Mapping[str, str]] = None) -> List[ActivityProvider]:
    """Providers in report order. Jira instances are discovered from env (os.environ by default)."""
    env = os.environ if env is None else env
    return [
        JiraProvider(discover_atlassian_instances(env)),
        GitHubProvider(),
    ]


__all__ = ["ActivityProvider", "GitHubProvider", "JiraProvider", "default_providers"]
