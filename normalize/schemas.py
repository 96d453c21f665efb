"""
Pydantic models describing the responses of the external backends.
Every raw response is parsed through one of these before any field is read.
"""
import json
from typing import Any, List

from pydantic import BaseModel, TypeAdapter, ValidationError

from errors import ResponseValidationError


class _Lenient(BaseModel):
    # backends send many more fields than we read
    model_config = {"extra": "ignore"}


class GitHubCommitDetails(_Lenient):
    message: str


class GitHubCommit(_Lenient):
    commit: GitHubCommitDetails


class GitHubPR(_Lenient):
    title: str


class JiraStatus(_Lenient):
    name: str


class JiraProject(_Lenient):
    name: str
    key: str


class JiraIssueFields(_Lenient):
    summary: str
    status: JiraStatus
    project: JiraProject


class JiraIssue(_Lenient):
    key: str
    fields: JiraIssueFields


class JiraSearchResponse(_Lenient):
    issues: List[JiraIssue]


_commits_adapter = TypeAdapter(List[GitHubCommit])
_prs_adapter = TypeAdapter(List[GitHubPR])
_jira_search_adapter = TypeAdapter(JiraSearchResponse)


def _load_json(raw: str, what: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ResponseValidationError(what, f"malformed JSON ({exc})") from exc


def _validate(adapter: TypeAdapter, data: Any, what: str):
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise ResponseValidationError(what, str(exc)) from exc


def parse_github_commits(raw: str) -> List[GitHubCommit]:
    """Parse `gh search commits --json commit` output."""
    return _validate(_commits_adapter, _load_json(raw, "GitHub commits"), "GitHub commits")


def parse_github_prs(raw: str) -> List[GitHubPR]:
    """Parse `gh search prs --json title` output."""
    return _validate(_prs_adapter, _load_json(raw, "GitHub pull requests"), "GitHub pull requests")


def parse_jira_search(data: Any) -> JiraSearchResponse:
    """Validate an already decoded Jira search body."""
    return _validate(_jira_search_adapter, data, "Jira search")
