"""
Aggregation of activity across providers: run them all, merge and sort.
"""
import asyncio
import locale
from typing import Iterable, List, Sequence

from ingest.base import ActivityProvider
from log import get_logger
from models import ActivityItem
from normalize.dates import require_valid_date

logger = get_logger(__name__)


def _collation_key(title: str) -> str:
    # strxfrm rejects embedded NUL characters
    return locale.strxfrm(title.replace("\x00", ""))


def sort_items(items: Iterable[ActivityItem]) -> List[ActivityItem]:
    """Sort by title using the current LC_COLLATE locale. Ties keep their input order."""
    return sorted(items, key=lambda item: _collation_key(item.title))


async def _run_provider(provider: ActivityProvider, date_str: str) -> List[ActivityItem]:
    try:
        return await provider.fetch_activity(date_str)
    except Exception as exc:
        logger.error(f"Error fetching {provider.name} activity: {exc}")
        return []


async def collect_activity(providers: Sequence[ActivityProvider], date_str: str) -> List[ActivityItem]:
    """Fetch from every provider concurrently and return all items sorted by title.

    A provider that fails is logged and contributes nothing; the others are unaffected.
    """
    require_valid_date(date_str)
    results = await asyncio.gather(*(_run_provider(p, date_str) for p in providers))
    combined: List[ActivityItem] = []
    for items in results:
        combined.extend(items)
    return sort_items(combined)
