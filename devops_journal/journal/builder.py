"""
Builder turning fetched records into a structured journal entry.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Sequence

from ..core.logging import get_logger
from .categorizer import categorize_work_items
from .schemas import JournalEntry, Meeting, Mood, PullRequest


# Fixed English names so entries do not depend on the process locale
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class JournalEntryBuilder:
    """
    Assembles a day's journal entry from work items, pull requests and meetings.

    Accomplishments are seeded from in-progress items and next steps from open
    items; the caller fills in the rest.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[Any] = None
    ) -> None:
        """
        Initialize the builder.

        Args:
            clock: Returns the current instant; read once per build
            logger: Log sink (defaults to the module logger)
        """
        self.clock = clock
        self.logger = logger or get_logger(__name__)

    def today(self) -> date:
        """Current UTC calendar date."""
        now = self.clock()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()

    def build(
        self,
        work_items: Sequence[Any] = (),
        pull_requests: Sequence[Any] = (),
        meetings: Sequence[Any] = (),
        entry_date: Optional[date] = None
    ) -> JournalEntry:
        """
        Build a journal entry.

        Args:
            work_items: Work items or raw work-tracking query records
            pull_requests: Pull requests or raw pull request records
            meetings: Meetings or raw calendar event records
            entry_date: Date of the entry (defaults to today in UTC)

        Returns:
            New journal entry with mood ``productive`` and empty notes
        """
        if entry_date is None:
            entry_date = self.today()

        categorized = categorize_work_items(work_items)

        if categorized.unrecognized:
            self.logger.warning(
                "Skipping work items with unrecognized states: "
                + ", ".join(f"#{item.id} ({item.state})" for item in categorized.unrecognized)
            )

        accomplishments = [
            f"Continued work on {item.work_item_type}: {item.title} (ID: {item.id})"
            for item in categorized.in_progress
        ]
        next_steps = [
            f"Start/continue {item.work_item_type}: {item.title} (ID: {item.id})"
            for item in categorized.open
        ]

        return JournalEntry(
            date=entry_date,
            day_of_week=WEEKDAY_NAMES[entry_date.weekday()],
            work_items=categorized,
            pull_requests=[PullRequest.model_validate(pr) for pr in pull_requests],
            meetings=[Meeting.model_validate(meeting) for meeting in meetings],
            accomplishments=accomplishments,
            challenges=[],
            next_steps=next_steps,
            mood=Mood.PRODUCTIVE,
            notes=""
        )
