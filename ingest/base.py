"""
Provider interface: every backend that can report activity for a date implements it.
"""
from abc import ABC, abstractmethod
from typing import List

from models import ActivityItem


class ActivityProvider(ABC):
    """
    A source of ActivityItems for one backend system.
    The report never depends on a concrete provider, only on this interface.
    """

    name: str = ""

    @abstractmethod
    async def fetch_activity(self, date_str: str) -> List[ActivityItem]:
        """
        Fetch the activity for one calendar day.

        Args:
            date_str (str): Day to report, YYYY-MM-DD.

        Returns:
            List[ActivityItem]: Items found, possibly empty.
        """
