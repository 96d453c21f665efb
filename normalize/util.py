"""
Normalization helpers.
Turn validated backend records (normalize.schemas) into ActivityItem objects.
"""
from models import ActivityItem
from normalize.schemas import GitHubCommit, GitHubPR, JiraIssue

GITHUB_SOURCE = "GitHub"
JIRA_SOURCE = "Jira"


def first_line(text: str) -> str:
    """Text before the first newline (the whole text if there is none)."""
    return text.split("\n", 1)[0]


def commit_to_item(commit: GitHubCommit, source: str = GITHUB_SOURCE) -> ActivityItem:
    return ActivityItem(title=first_line(commit.commit.message), source=source, metadata={"type": "commit"})


def pr_review_to_item(pr: GitHubPR, source: str = GITHUB_SOURCE) -> ActivityItem:
    return ActivityItem(title=pr.title, source=source, metadata={"type": "pr-review"})


def issue_to_item(issue: JiraIssue, source: str = JIRA_SOURCE) -> ActivityItem:
    """Build an item titled "KEY: summary" carrying key, status and project name as metadata."""
    fields = issue.fields
    return ActivityItem(
        title=f"{issue.key}: {fields.summary}",
        source=source,
        metadata={"key": issue.key, "status": fields.status.name, "project": fields.project.name},
    )
