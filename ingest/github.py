"""
GitHub activity provider.
Uses the gh CLI (already authenticated by the user) to find the day's commits
and the pull requests the user reviewed.
"""
import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence

from config import gh_bin as default_gh_bin, gh_timeout
from errors import GhCommandError, ResponseValidationError
from ingest.base import ActivityProvider
from log import get_logger
from models import ActivityItem
from normalize.dates import require_valid_date
from normalize.schemas import parse_github_commits, parse_github_prs
from normalize.util import GITHUB_SOURCE, commit_to_item, pr_review_to_item

logger = get_logger(__name__)

SEARCH_LIMIT = 100

GhRunner = Callable[[Sequence[str]], Awaitable[str]]


async def run_gh(args: Sequence[str], gh_bin: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """Run `gh <args>` and return its stdout. Raises GhCommandError on any failure."""
    cmd = [gh_bin or default_gh_bin(), *args]
    timeout = gh_timeout() if timeout is None else timeout
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise GhCommandError(cmd, stderr=str(exc)) from exc
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise GhCommandError(cmd, stderr=f"timed out after {timeout}s") from None
    if proc.returncode != 0:
        raise GhCommandError(cmd, proc.returncode, stderr.decode("utf-8", errors="replace").strip())
    return stdout.decode("utf-8", errors="replace")


def commits_query(date_str: str) -> List[str]:
    return ["search", "commits", "--author=@me", f"--author-date={date_str}", "--json", "commit", "--limit", str(SEARCH_LIMIT)]


def reviewed_prs_query(date_str: str) -> List[str]:
    return ["search", "prs", "--reviewed-by=@me", f"--updated={date_str}", "--json", "title", "--limit", str(SEARCH_LIMIT)]


class GitHubProvider(ActivityProvider):
    """Commits authored and pull requests reviewed by the current gh user."""

    def __init__(self, runner: Optional[GhRunner] = None, source: str = GITHUB_SOURCE):
        self.runner = runner or run_gh
        self.name = source

    async def _run(self, args: Sequence[str]) -> str:
        out = await self.runner(args)
        # gh prints nothing at all for some empty searches
        return out if out.strip() else "[]"

    async def fetch_commits(self, date_str: str) -> List[ActivityItem]:
        commits = parse_github_commits(await self._run(commits_query(date_str)))
        return [commit_to_item(c, self.name) for c in commits]

    async def fetch_reviews(self, date_str: str) -> List[ActivityItem]:
        prs = parse_github_prs(await self._run(reviewed_prs_query(date_str)))
        return [pr_review_to_item(pr, self.name) for pr in prs]

    async def _collect(self, what: str, fetch: Awaitable[List[ActivityItem]]) -> List[ActivityItem]:
        try:
            return await fetch
        except ResponseValidationError as exc:
            logger.error(f"Skipping GitHub {what}: {exc}")
        except GhCommandError as exc:
            logger.warning(f"Skipping GitHub {what}: {exc}")
        return []

    async def fetch_activity(self, date_str: str) -> List[ActivityItem]:
        require_valid_date(date_str)
        commits, reviews = await asyncio.gather(
            self._collect("commits", self.fetch_commits(date_str)),
            self._collect("pull request reviews", self.fetch_reviews(date_str)),
        )
        logger.debug(f"GitHub: {len(commits)} commits, {len(reviews)} reviews on {date_str}")
        return commits + reviews
