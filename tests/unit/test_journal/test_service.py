"""
Tests for the journal integrator.
"""

import asyncio
from datetime import date, timedelta

import pytest

from devops_journal.core.exceptions import DevOpsIntegrationError
from devops_journal.journal.schemas import JournalEntry, Mood
from devops_journal.journal.service import JournalIntegrator, calculate_streak_days
from devops_journal.journal.store import EntryStore


class FakeSources:
    """In-memory data sources recording how they were called."""

    def __init__(self, work_items=(), meetings=(), pull_requests=(), fail=()):
        self.work_items = list(work_items)
        self.meetings = list(meetings)
        self.pull_requests = list(pull_requests)
        self.fail = set(fail)
        self.calendar_days = []
        self.started = 0
        self.max_in_flight = 0
        self._in_flight = 0

    async def _fetch(self, name, records):
        self.started += 1
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        await asyncio.sleep(0)
        self._in_flight -= 1
        if name in self.fail:
            raise DevOpsIntegrationError(f"{name} unavailable")
        return records

    async def fetch_work_items(self):
        return await self._fetch("work_items", self.work_items)

    async def fetch_calendar_events(self, day):
        self.calendar_days.append(day)
        return await self._fetch("meetings", self.meetings)

    async def fetch_pull_requests(self):
        return await self._fetch("pull_requests", self.pull_requests)


@pytest.fixture
def fake_sources(work_item_records, meeting_records, pull_request_records):
    return FakeSources(work_item_records, meeting_records, pull_request_records)


@pytest.fixture
def integrator(test_settings, fake_sources, fixed_now, silent_logger):
    return JournalIntegrator(test_settings, sources=fake_sources, clock=lambda: fixed_now, logger=silent_logger)


class TestCalculateStreakDays:
    """Test the streak walk."""

    def test_breaks_at_gap(self, today):
        """Test the run stops at the first missing day."""
        dates = [today, today - timedelta(days=1), today - timedelta(days=3)]
        assert calculate_streak_days(dates, today) == 2

    def test_unbroken_run(self, today):
        dates = [today - timedelta(days=i) for i in range(5)]
        assert calculate_streak_days(dates, today) == 5

    def test_no_entry_today(self, today):
        """Test a run must start today."""
        assert calculate_streak_days([today - timedelta(days=1)], today) == 0

    def test_empty(self, today):
        assert calculate_streak_days([], today) == 0


class TestGenerateComprehensiveJournal:
    """Test the full generation pipeline."""

    def test_writes_enhanced_entry(self, integrator, fake_sources):
        """Test generation saves an enhanced entry for today."""
        path = asyncio.run(integrator.generate_comprehensive_journal())

        assert path.name == "journal-2025-01-15.md"
        assert fake_sources.calendar_days == [date(2025, 1, 15)]

        entry = integrator.store.load_entry(date(2025, 1, 15))
        assert "Participated in architecture review meeting" in entry.accomplishments
        assert "Created/reviewed 1 pull request(s)" in entry.accomplishments
        assert entry.notes.startswith("Productivity Overview: 1/4 work items active, 2 meetings scheduled")
        assert entry.mood == Mood.PRODUCTIVE

        markdown = path.read_text(encoding="utf-8")
        assert "- **PR #12345**: Fix compliance validation - Active" in markdown
        assert "- 2:00 PM: Architecture Review" in markdown

    def test_explicit_date(self, integrator, fake_sources):
        """Test an explicit date is used for the calendar and the file."""
        path = asyncio.run(integrator.generate_comprehensive_journal(date(2025, 1, 10)))

        assert path.name == "journal-2025-01-10.md"
        assert fake_sources.calendar_days == [date(2025, 1, 10)]
        assert integrator.store.load_entry(date(2025, 1, 10)).day_of_week == "Friday"

    def test_fetches_run_concurrently(self, integrator, fake_sources):
        """Test all three fetches are in flight together."""
        asyncio.run(integrator.generate_comprehensive_journal())

        assert fake_sources.started == 3
        assert fake_sources.max_in_flight == 3

    def test_fetch_failure_degrades_to_empty(self, test_settings, work_item_records, meeting_records,
                                             fixed_now, silent_logger):
        """Test a failing source is logged and treated as empty."""
        sources = FakeSources(work_item_records, meeting_records, fail={"pull_requests"})
        integrator = JournalIntegrator(test_settings, sources=sources, clock=lambda: fixed_now, logger=silent_logger)

        path = asyncio.run(integrator.generate_comprehensive_journal())

        assert path.exists()
        assert "_No active pull requests_" in path.read_text(encoding="utf-8")
        silent_logger.error.assert_called_once()
        assert "pull requests" in silent_logger.error.call_args[0][0]

    def test_all_sources_failing(self, test_settings, fixed_now, silent_logger):
        """Test a run with every source down still writes an entry."""
        sources = FakeSources(fail={"work_items", "meetings", "pull_requests"})
        integrator = JournalIntegrator(test_settings, sources=sources, clock=lambda: fixed_now, logger=silent_logger)

        path = asyncio.run(integrator.generate_comprehensive_journal())

        entry = integrator.store.load_entry(date(2025, 1, 15))
        assert path.exists()
        assert entry.mood == Mood.RELAXED
        assert silent_logger.error.call_count == 3

    def test_regenerating_replaces(self, integrator):
        """Test a second run for the same day replaces the entry."""
        asyncio.run(integrator.generate_comprehensive_journal())
        asyncio.run(integrator.generate_comprehensive_journal())

        assert integrator.store.list_entries() == [date(2025, 1, 15)]


class TestGenerateBasicJournal:
    """Test work-item-only generation."""

    def test_basic_entry(self, integrator, fake_sources):
        """Test the basic entry skips meetings, pull requests and enhancement."""
        path = asyncio.run(integrator.generate_basic_journal())

        entry = integrator.store.load_entry(date(2025, 1, 15))
        assert path.name == "journal-2025-01-15.md"
        assert fake_sources.calendar_days == []
        assert entry.meetings == []
        assert entry.pull_requests == []
        assert entry.notes == ""
        assert entry.accomplishments == ["Continued work on Feature: Build pipeline (ID: 1)"]


class TestJournalInsights:
    """Test journal statistics."""

    def test_empty_journal(self, integrator):
        insights = integrator.get_journal_insights()

        assert insights.total_entries == 0
        assert insights.recent_entries == []
        assert insights.streak_days == 0
        assert insights.weekly_stats.avg_work_items == 0.0
        assert insights.weekly_stats.common_mood == Mood.PRODUCTIVE

    def test_counts_and_streak(self, test_settings, fake_sources, fixed_now, silent_logger, today):
        """Test totals, recent dates and the streak."""
        store = EntryStore(test_settings.journal.directory, logger=silent_logger)
        for offset in (0, 1, 2, 4, 5, 6, 7, 8, 9):
            day = today - timedelta(days=offset)
            store.save_entry(JournalEntry(date=day, day_of_week="Monday", mood=Mood.BUSY))

        integrator = JournalIntegrator(
            test_settings, sources=fake_sources, store=store, clock=lambda: fixed_now, logger=silent_logger
        )
        insights = integrator.get_journal_insights()

        assert insights.total_entries == 9
        assert len(insights.recent_entries) == 7
        assert insights.recent_entries[0] == today
        assert insights.streak_days == 3
        assert insights.weekly_stats.common_mood == Mood.BUSY

    def test_weekly_stats_from_generated_entries(self, integrator):
        """Test averages come from the structured entries."""
        asyncio.run(integrator.generate_comprehensive_journal())
        asyncio.run(integrator.generate_comprehensive_journal(date(2025, 1, 14)))

        stats = integrator.get_journal_insights().weekly_stats

        assert stats.avg_work_items == 3.0
        assert stats.avg_meetings == 2.0
        assert stats.common_mood == Mood.PRODUCTIVE

    def test_weekly_stats_skip_degraded_entries(self, integrator, today):
        """Test Markdown-only entries count toward totals but not averages."""
        asyncio.run(integrator.generate_comprehensive_journal())
        (integrator.store.journal_dir / "journal-2025-01-14.md").write_text("# Old entry", encoding="utf-8")

        insights = integrator.get_journal_insights()

        assert insights.total_entries == 2
        assert insights.streak_days == 2
        assert insights.weekly_stats.avg_work_items == 3.0
