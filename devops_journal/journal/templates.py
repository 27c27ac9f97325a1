"""
Journal templates and formatters.

This module renders journal entries as Markdown documents with a fixed
section layout, and wraps rendered Markdown in a standalone HTML page.
"""

from datetime import datetime, timezone
from html import escape
from string import Template
from typing import Iterable, List, Optional
import re

from .schemas import JournalEntry, WorkItem


# Placeholders shown for empty sections
NO_IN_PROGRESS = "_No items in progress_"
NO_OPEN = "_No open items_"
NO_PENDING = "_No pending items_"
NO_PULL_REQUESTS = "_No active pull requests_"
NO_MEETINGS = "_No meetings tracked_"
NO_ACCOMPLISHMENTS = "_Add your accomplishments here_"
NO_CHALLENGES = "_Add any challenges you faced_"
NO_NEXT_STEPS = "_Add your planned next steps_"
NO_NOTES = "_Add any additional notes or thoughts here_"


DAILY_MARKDOWN_TEMPLATE = Template("""# Daily Journal - $date ($day_of_week)

## 📋 Work Items Status

### 🔄 In Progress
$in_progress

### 📂 Open Items
$open_items

### ⏸️ Pending Items
$pending

## 🔀 Pull Requests
$pull_requests

## 📅 Meetings & Events
$meetings

## ✅ Accomplishments
$accomplishments

## 🚧 Challenges
$challenges

## 🎯 Next Steps
$next_steps

## 😊 Mood: $mood

## 📝 Notes
$notes

---
_Generated on ${generated_at}_
""")


class MarkdownFormatter:
    """Formatter for Markdown output."""

    @staticmethod
    def format_work_item(item: WorkItem) -> str:
        """Format one work item bullet, with its tags on an indented line."""
        line = f"- **{item.work_item_type} #{item.id}**: {item.title}"
        if item.tags:
            line += f"\n  _Tags: {item.tags}_"
        return line

    @staticmethod
    def format_list(lines: Iterable[str], placeholder: str) -> str:
        """Join pre-formatted lines, or return the placeholder when there are none."""
        lines = list(lines)
        if not lines:
            return placeholder
        return "\n".join(lines)

    @classmethod
    def format_bullets(cls, items: Iterable[str], placeholder: str) -> str:
        """Format plain strings as a bullet list."""
        return cls.format_list((f"- {item}" for item in items), placeholder)

    @classmethod
    def format_work_items(cls, items: List[WorkItem], placeholder: str) -> str:
        """Format a work item bucket."""
        return cls.format_list((cls.format_work_item(item) for item in items), placeholder)

    @classmethod
    def render(cls, entry: JournalEntry, generated_at: Optional[datetime] = None) -> str:
        """
        Render a journal entry as Markdown.

        Args:
            entry: Entry to render
            generated_at: Footer timestamp (defaults to now, UTC)

        Returns:
            Markdown document
        """
        if generated_at is None:
            generated_at = datetime.now(timezone.utc)

        meetings = (
            f"- {meeting.start_time}: {meeting.title}" if meeting.start_time else f"- {meeting.title}"
            for meeting in entry.meetings
        )

        return DAILY_MARKDOWN_TEMPLATE.substitute(
            date=entry.date.isoformat(),
            day_of_week=entry.day_of_week,
            in_progress=cls.format_work_items(entry.work_items.in_progress, NO_IN_PROGRESS),
            open_items=cls.format_work_items(entry.work_items.open, NO_OPEN),
            pending=cls.format_work_items(entry.work_items.pending, NO_PENDING),
            pull_requests=cls.format_list(
                (f"- **PR #{pr.id}**: {pr.title} - {pr.status}" for pr in entry.pull_requests),
                NO_PULL_REQUESTS
            ),
            meetings=cls.format_list(meetings, NO_MEETINGS),
            accomplishments=cls.format_bullets(entry.accomplishments, NO_ACCOMPLISHMENTS),
            challenges=cls.format_bullets(entry.challenges, NO_CHALLENGES),
            next_steps=cls.format_bullets(entry.next_steps, NO_NEXT_STEPS),
            mood=entry.mood.value,
            notes=entry.notes or NO_NOTES,
            generated_at=generated_at.isoformat()
        )


class HTMLFormatter:
    """Formatter for HTML output."""

    @staticmethod
    def format_journal(content: str, entry: JournalEntry) -> str:
        """Format a rendered Markdown journal as a complete HTML page."""
        html_content = HTMLFormatter._markdown_to_html(content)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Daily Journal - {entry.date.isoformat()} ({escape(entry.day_of_week)})</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6;
            color: #333;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
        }}
        h1, h2, h3 {{ color: #2c3e50; }}
        .tags {{ color: #666; font-size: 0.9em; }}
        hr {{ border: none; border-top: 1px solid #ddd; }}
    </style>
</head>
<body>
{html_content}
</body>
</html>
"""

    @staticmethod
    def _inline(text: str) -> str:
        """Escape text and convert bold and italic markers."""
        html = escape(text)
        html = re.sub(r'\*\*(.+?)\*\*', r'<strong>\1</strong>', html)
        html = re.sub(r'(?<!\w)_(.+?)_(?!\w)', r'<em>\1</em>', html)
        return html

    @staticmethod
    def _markdown_to_html(markdown: str) -> str:
        """Convert the subset of Markdown produced by MarkdownFormatter."""
        result_lines = []
        in_list = False

        for line in markdown.split('\n'):
            stripped = line.strip()

            # Indented continuation lines (tags) belong to the previous list item
            if in_list and line.startswith('  ') and stripped:
                result_lines[-1] = result_lines[-1].replace(
                    '</li>', f'<br><span class="tags">{HTMLFormatter._inline(stripped)}</span></li>'
                )
                continue

            if stripped.startswith('- '):
                if not in_list:
                    result_lines.append('<ul>')
                    in_list = True
                result_lines.append(f'<li>{HTMLFormatter._inline(stripped[2:])}</li>')
                continue

            if in_list:
                result_lines.append('</ul>')
                in_list = False

            heading = re.match(r'^(#{1,6}) (.*)$', stripped)
            if heading:
                level = len(heading.group(1))
                result_lines.append(f'<h{level}>{HTMLFormatter._inline(heading.group(2))}</h{level}>')
            elif stripped == '---':
                result_lines.append('<hr>')
            elif stripped:
                result_lines.append(f'<p>{HTMLFormatter._inline(stripped)}</p>')

        if in_list:
            result_lines.append('</ul>')

        return '\n'.join(result_lines)
