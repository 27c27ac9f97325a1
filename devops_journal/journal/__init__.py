"""Journal building, rendering and storage module."""

from .builder import JournalEntryBuilder
from .categorizer import categorize_work_items, classify_state
from .enhancer import InsightEnhancer, calculate_mood
from .schemas import JournalEntry, WorkItem, Mood
from .service import JournalIntegrator, calculate_streak_days
from .store import EntryStore
from .templates import MarkdownFormatter, HTMLFormatter

__all__ = [
    "JournalEntryBuilder",
    "categorize_work_items",
    "classify_state",
    "InsightEnhancer",
    "calculate_mood",
    "JournalEntry",
    "WorkItem",
    "Mood",
    "JournalIntegrator",
    "calculate_streak_days",
    "EntryStore",
    "MarkdownFormatter",
    "HTMLFormatter"
]
