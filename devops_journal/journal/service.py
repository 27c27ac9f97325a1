"""
Journal integrator coordinating data fetching, entry generation and storage.

This module provides the main service that fetches work items, calendar
events and pull requests, turns them into a journal entry and saves it.
"""

import asyncio
from collections import Counter
from datetime import date, datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from ..core.logging import get_logger
from ..settings import AppSettings
from .builder import JournalEntryBuilder, utc_now
from .enhancer import InsightEnhancer
from .schemas import JournalEntry, JournalInsights, Mood, WeeklyStats
from .store import EntryStore


RECENT_ENTRY_COUNT = 7


def calculate_streak_days(entry_dates: Sequence[date], today: date) -> int:
    """
    Count consecutive days ending today that have an entry.

    ``entry_dates`` must be sorted most recent first; the run stops at the
    first date that is not exactly ``position`` days before today.
    """
    streak = 0
    for position, entry_date in enumerate(entry_dates):
        if (today - entry_date).days != position:
            break
        streak += 1
    return streak


class JournalIntegrator:
    """
    Main service orchestrating journal generation.

    Fetches work items, calendar events and pull requests concurrently,
    builds and enhances the day's entry, and persists it.
    """

    def __init__(
        self,
        settings: AppSettings,
        sources: Optional[Any] = None,
        store: Optional[EntryStore] = None,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[Any] = None,
        use_sample: bool = False
    ) -> None:
        """
        Initialize the journal integrator.

        Args:
            settings: Application settings
            sources: Object providing ``fetch_work_items``, ``fetch_calendar_events``
                and ``fetch_pull_requests`` coroutines (defaults to SourceAdapter)
            store: Entry store (defaults to one on ``settings.journal.directory``)
            clock: Returns the current instant
            logger: Log sink shared by all components
            use_sample: Use sample data instead of the MCP servers
        """
        self.settings = settings
        self.logger = logger or get_logger(__name__)

        if sources is None:
            from ..sources.adapter import SourceAdapter
            sources = SourceAdapter(settings, use_sample=use_sample)
        self.sources = sources

        self.store = store or EntryStore(
            settings.journal.directory,
            file_prefix=settings.journal.file_prefix,
            export_html=settings.journal.export_html,
            logger=self.logger
        )
        self.builder = JournalEntryBuilder(clock=clock, logger=self.logger)
        self.enhancer = InsightEnhancer(settings.journal.follow_up_steps, logger=self.logger)

        self.logger.info("Initialized journal integrator")

    async def _safe_fetch(self, label: str, fetch: Callable[[], Awaitable[List[Any]]]) -> List[Any]:
        """Run a fetch, degrading any failure to an empty list."""
        try:
            records = await fetch()
        except Exception as e:
            self.logger.error(f"❌ Error fetching {label}: {e}")
            return []
        return list(records)

    async def fetch_all(self, entry_date: date):
        """Fetch work items, calendar events and pull requests concurrently."""
        work_items, meetings, pull_requests = await asyncio.gather(
            self._safe_fetch("work items", self.sources.fetch_work_items),
            self._safe_fetch("calendar events", lambda: self.sources.fetch_calendar_events(entry_date)),
            self._safe_fetch("pull requests", self.sources.fetch_pull_requests)
        )

        self.logger.info(f"📊 Fetched {len(work_items)} work items from Azure DevOps")
        self.logger.info(f"📅 Fetched {len(meetings)} calendar events")
        self.logger.info(f"🔀 Fetched {len(pull_requests)} pull requests")
        return work_items, meetings, pull_requests

    def _save(self, entry: JournalEntry) -> Path:
        if self.store.exists(entry.date):
            self.logger.info(f"Replacing existing journal entry for {entry.date}")
        return self.store.save_entry(entry)

    async def generate_comprehensive_journal(self, entry_date: Optional[date] = None) -> Path:
        """
        Generate, enhance and save the journal entry for a day.

        Args:
            entry_date: Date of the entry (defaults to today in UTC)

        Returns:
            Path of the saved Markdown file
        """
        self.logger.info("🚀 Starting comprehensive journal generation...")

        if entry_date is None:
            entry_date = self.builder.today()

        work_items, meetings, pull_requests = await self.fetch_all(entry_date)

        entry = self.builder.build(work_items, pull_requests, meetings, entry_date=entry_date)
        enhanced = self.enhancer.enhance(entry, work_items, meetings, pull_requests)

        file_path = self._save(enhanced)
        self.logger.info("✅ Comprehensive journal generated successfully!")
        return file_path

    async def generate_basic_journal(self, entry_date: Optional[date] = None) -> Path:
        """
        Generate and save an entry from work items only, without enhancement.

        Args:
            entry_date: Date of the entry (defaults to today in UTC)

        Returns:
            Path of the saved Markdown file
        """
        self.logger.info("🗓️  Generating daily journal entry...")

        work_items = await self._safe_fetch("work items", self.sources.fetch_work_items)
        entry = self.builder.build(work_items, entry_date=entry_date)

        return self._save(entry)

    def get_journal_insights(self, today: Optional[date] = None) -> JournalInsights:
        """
        Get journal statistics.

        Args:
            today: Reference date for the streak (defaults to today in UTC)

        Returns:
            Entry count, recent dates, streak and weekly averages
        """
        if today is None:
            today = self.builder.today()

        entry_dates = self.store.list_entries()
        recent = entry_dates[:RECENT_ENTRY_COUNT]

        return JournalInsights(
            total_entries=len(entry_dates),
            recent_entries=recent,
            streak_days=calculate_streak_days(entry_dates, today),
            weekly_stats=self._weekly_stats(recent)
        )

    def _weekly_stats(self, entry_dates: Sequence[date]) -> WeeklyStats:
        """Average the structured entries among the given dates."""
        entries = [self.store.load_entry(entry_date) for entry_date in entry_dates]
        structured = [entry for entry in entries if entry is not None and entry.mood != Mood.UNKNOWN]

        if not structured:
            return WeeklyStats()

        moods = Counter(entry.mood for entry in structured)
        return WeeklyStats(
            avg_work_items=sum(entry.work_items.categorized_count for entry in structured) / len(structured),
            avg_meetings=sum(len(entry.meetings) for entry in structured) / len(structured),
            common_mood=moods.most_common(1)[0][0]
        )
