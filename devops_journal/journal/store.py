"""
File-based journal storage.

Each day gets a rendered Markdown file plus a JSON sidecar holding the
structured entry, so entries load back exactly as they were saved.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import StorageError
from ..core.logging import get_logger
from .builder import WEEKDAY_NAMES
from .schemas import JournalEntry, Mood
from .templates import HTMLFormatter, MarkdownFormatter


class EntryStore:
    """
    Directory of journal files keyed by date.

    ``{prefix}{YYYY-MM-DD}.md`` is the rendered entry, ``.json`` the
    structured sidecar and ``.html`` the optional HTML copy.
    """

    def __init__(
        self,
        journal_dir: Union[Path, str],
        file_prefix: str = "journal-",
        export_html: bool = False,
        logger: Optional[Any] = None
    ) -> None:
        self.journal_dir = Path(journal_dir).expanduser()
        self.file_prefix = file_prefix
        self.export_html = export_html
        self.logger = logger or get_logger(__name__)
        self.journal_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_date(self, entry_date: date, suffix: str = ".md") -> Path:
        """Get the file path for a given date."""
        return self.journal_dir / f"{self.file_prefix}{entry_date.isoformat()}{suffix}"

    def save_entry(self, entry: JournalEntry, generated_at: Optional[datetime] = None) -> Path:
        """
        Render and write an entry, replacing any entry for the same date.

        Args:
            entry: Entry to persist
            generated_at: Footer timestamp for the rendered Markdown

        Returns:
            Path of the Markdown file

        Raises:
            StorageError: If a file cannot be written
        """
        markdown = MarkdownFormatter.render(entry, generated_at)
        markdown_path = self._path_for_date(entry.date)

        try:
            self.journal_dir.mkdir(parents=True, exist_ok=True)
            markdown_path.write_text(markdown, encoding="utf-8")
            self._path_for_date(entry.date, ".json").write_text(
                entry.model_dump_json(indent=2),
                encoding="utf-8"
            )

            if self.export_html:
                html_path = self._path_for_date(entry.date, ".html")
                html_path.write_text(HTMLFormatter.format_journal(markdown, entry), encoding="utf-8")
                self.logger.debug(f"HTML copy written: {html_path}")
        except OSError as e:
            raise StorageError(f"Failed to save journal entry for {entry.date}: {e}", markdown_path) from e

        self.logger.info(f"Journal entry saved: {markdown_path}")
        return markdown_path

    def load_entry(self, entry_date: date) -> Optional[JournalEntry]:
        """
        Load the entry for a date.

        Returns the structured entry when its sidecar is readable, a degraded
        entry carrying the raw Markdown in ``notes`` when only the Markdown
        exists, and None when there is no entry for the date.
        """
        markdown_path = self._path_for_date(entry_date)
        sidecar_path = self._path_for_date(entry_date, ".json")

        if sidecar_path.exists():
            try:
                return JournalEntry.model_validate_json(sidecar_path.read_text(encoding="utf-8"))
            except PydanticValidationError as e:
                self.logger.warning(f"Corrupt journal sidecar at {sidecar_path}, falling back to Markdown: {e}")

        if not markdown_path.exists():
            return None

        return JournalEntry(
            date=entry_date,
            day_of_week=WEEKDAY_NAMES[entry_date.weekday()],
            mood=Mood.UNKNOWN,
            notes=markdown_path.read_text(encoding="utf-8")
        )

    def list_entries(self) -> List[date]:
        """List dates with a Markdown entry, most recent first."""
        dates = []
        for path in self.journal_dir.glob(f"{self.file_prefix}*.md"):
            stem = path.stem[len(self.file_prefix):]
            try:
                parsed = date.fromisoformat(stem)
            except ValueError:
                continue
            # Only YYYY-MM-DD names can be loaded back
            if parsed.isoformat() == stem:
                dates.append(parsed)
        return sorted(dates, reverse=True)

    def exists(self, entry_date: date) -> bool:
        """Check if a journal entry exists for a date."""
        return self._path_for_date(entry_date).exists()
