"""
Jira activity provider.
Queries every configured Atlassian instance in parallel for the tickets the
current user touched on a given day.
"""

import asyncio
from typing import Any, List, Optional, Sequence

import requests
from requests.auth import HTTPBasicAuth

from config import http_timeout, required_instance_vars
from errors import ConfigurationError, ResponseValidationError
from ingest.base import ActivityProvider
from log import get_logger
from models import ActivityItem, AtlassianInstance
from normalize.dates import next_day, require_valid_date
from normalize.schemas import JiraIssue, parse_jira_search
from normalize.util import JIRA_SOURCE, issue_to_item

logger = get_logger(__name__)

SEARCH_PATH = "/rest/api/3/search/jql"
MAX_RESULTS = 100


def build_jql(date_str: str) -> str:
    """JQL matching tickets the current user worked on during date_str.

    Assigned tickets whose status changed that day or that the user commented on,
    tickets the user reported that day, and watched tickets updated that day.
    """
    end = next_day(date_str)
    return (
        f'(assignee = currentUser() AND (status changed DURING ("{date_str}") OR commenter = currentUser())) '
        f'OR (reporter = currentUser() AND created >= "{date_str}" AND created < "{end}") '
        f'OR (watcher = currentUser() AND updated >= "{date_str}" AND updated < "{end}")'
    )


class JiraClient:
    """Search client for a single Atlassian instance."""

    def __init__(self, instance: AtlassianInstance, timeout: Optional[float] = None):
        self.instance = instance
        self.timeout = http_timeout() if timeout is None else timeout
        self.url = f"{instance.base_url}{SEARCH_PATH}"
        self.headers = {"Accept": "application/json"}
        self.auth = HTTPBasicAuth(instance.email, instance.api_token)

    def search_issues(self, jql: str) -> List[JiraIssue]:
        """Run a JQL search and return the validated issues.

        Returns an empty list when the server answers with a non-success status.
        Raises requests.RequestException on transport errors and
        ResponseValidationError when the body has an unexpected shape.
        """
        params = {"jql": jql, "fields": "summary,status,project", "maxResults": MAX_RESULTS}
        resp = requests.get(self.url, headers=self.headers, params=params, auth=self.auth, timeout=self.timeout)
        if not resp.ok:
            logger.error(f"Error fetching from {self.instance.domain}: HTTP {resp.status_code} {resp.reason}\n{resp.text}")
            return []
        try:
            data = resp.json()
        except ValueError as exc:
            raise ResponseValidationError("Jira search", f"malformed JSON ({exc})") from exc
        return parse_jira_search(data).issues


class JiraProvider(ActivityProvider):
    """Tickets from all configured Jira instances, flattened in configuration order."""

    def __init__(
        self,
        instances: Sequence[AtlassianInstance],
        timeout: Optional[float] = None,
        dedupe: bool = True,
        source: str = JIRA_SOURCE,
    ):
        self.instances = list(instances)
        self.timeout = timeout
        self.dedupe = dedupe
        self.name = source

    async def _fetch_instance(self, instance: AtlassianInstance, jql: str) -> List[JiraIssue]:
        client = JiraClient(instance, timeout=self.timeout)
        return await asyncio.to_thread(client.search_issues, jql)

    def _issues_or_empty(self, instance: AtlassianInstance, outcome: Any) -> List[JiraIssue]:
        if not isinstance(outcome, BaseException):
            return outcome
        if isinstance(outcome, ResponseValidationError):
            logger.error(f"Skipping Jira instance {instance.domain}: {outcome}")
        elif isinstance(outcome, Exception):
            logger.warning(f"Error fetching from {instance.domain}: {outcome}")
        else:
            raise outcome
        return []

    async def fetch_activity(self, date_str: str) -> List[ActivityItem]:
        require_valid_date(date_str)
        if not self.instances:
            raise ConfigurationError(
                f"At least one Atlassian instance must be configured with {required_instance_vars()} in .env"
            )
        jql = build_jql(date_str)
        outcomes = await asyncio.gather(
            *(self._fetch_instance(inst, jql) for inst in self.instances),
            return_exceptions=True,
        )
        seen = set()
        items: List[ActivityItem] = []
        for instance, outcome in zip(self.instances, outcomes):
            issues = self._issues_or_empty(instance, outcome)
            logger.debug(f"Jira {instance.domain}: {len(issues)} issues on {date_str}")
            for issue in issues:
                if self.dedupe:
                    ident = (instance.domain, issue.key)
                    if ident in seen:
                        continue
                    seen.add(ident)
                items.append(issue_to_item(issue, self.name))
        return items
