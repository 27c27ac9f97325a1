"""
Contextual insights layered on top of a built journal entry.
"""

from typing import Any, List, Optional, Sequence

from ..core.logging import get_logger
from ..settings import DEFAULT_FOLLOW_UP_STEPS
from .schemas import JournalEntry, Meeting, Mood, PullRequest, WorkItem


# Raw state labels counted as active in the productivity overview (case-sensitive)
ACTIVE_STATES = ("In Progress", "Active")

REVIEW_MEETING_TYPE = "review"


def calculate_mood(workload: int, meeting_count: int) -> Mood:
    """
    Classify a day by workload and meeting density.

    Args:
        workload: Number of fetched work items
        meeting_count: Number of meetings

    Returns:
        First matching mood, from relaxed to overwhelmed
    """
    if workload < 3 and meeting_count < 4:
        return Mood.RELAXED
    if workload < 5 and meeting_count < 6:
        return Mood.PRODUCTIVE
    if workload < 8:
        return Mood.BUSY
    return Mood.OVERWHELMED


class InsightEnhancer:
    """
    Adds contextual accomplishments, follow-up steps, a productivity overview
    and a computed mood to a journal entry.

    Enhancing never mutates its input. It is not idempotent: enhancing an
    already enhanced entry appends the follow-up steps a second time.
    """

    def __init__(
        self,
        follow_up_steps: Optional[Sequence[str]] = None,
        logger: Optional[Any] = None
    ) -> None:
        self.follow_up_steps = list(DEFAULT_FOLLOW_UP_STEPS if follow_up_steps is None else follow_up_steps)
        self.logger = logger or get_logger(__name__)

    def enhance(
        self,
        entry: JournalEntry,
        work_items: Sequence[Any] = (),
        meetings: Sequence[Any] = (),
        pull_requests: Sequence[Any] = ()
    ) -> JournalEntry:
        """
        Produce an enhanced copy of an entry.

        Args:
            entry: Entry produced by the builder
            work_items: The same work items the entry was built from
            meetings: The same meetings the entry was built from
            pull_requests: The same pull requests the entry was built from

        Returns:
            New journal entry
        """
        items = [WorkItem.coerce(item) for item in work_items]
        meeting_list = [Meeting.model_validate(meeting) for meeting in meetings]
        pr_list = [PullRequest.model_validate(pr) for pr in pull_requests]

        contextual: List[str] = []
        if any(meeting.meeting_type == REVIEW_MEETING_TYPE for meeting in meeting_list):
            contextual.append("Participated in architecture review meeting")
        if pr_list:
            contextual.append(f"Created/reviewed {len(pr_list)} pull request(s)")

        active = sum(1 for item in items if item.state in ACTIVE_STATES)
        overview = (
            f"Productivity Overview: {active}/{len(items)} work items active, "
            f"{len(meeting_list)} meetings scheduled"
        )

        mood = calculate_mood(len(items), len(meeting_list))
        self.logger.debug(f"Enhanced entry {entry.date}: mood={mood.value}, {len(contextual)} contextual accomplishments")

        return entry.model_copy(update={
            "accomplishments": [*entry.accomplishments, *contextual],
            "next_steps": [*entry.next_steps, *self.follow_up_steps],
            "notes": f"{overview}\n\n{entry.notes}",
            "mood": mood,
        }, deep=True)
