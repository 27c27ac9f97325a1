"""
Schemas for journal entries and the records they are built from.
"""

from datetime import date as date_type, datetime
from typing import List, Optional, Dict, Any
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, ConfigDict

from ..core.exceptions import ValidationError


# Field names of an Azure DevOps work item fields bag
TITLE_FIELD = "System.Title"
STATE_FIELD = "System.State"
TYPE_FIELD = "System.WorkItemType"
TAGS_FIELD = "System.Tags"
CHANGED_DATE_FIELD = "System.ChangedDate"


class WorkItemState(str, Enum):
    """Recognized work item state buckets."""
    IN_PROGRESS = "in_progress"
    OPEN = "open"
    PENDING = "pending"
    UNRECOGNIZED = "unrecognized"


class Mood(str, Enum):
    """Heuristic workload classification of a day."""
    RELAXED = "relaxed"
    PRODUCTIVE = "productive"
    BUSY = "busy"
    OVERWHELMED = "overwhelmed"
    UNKNOWN = "unknown"


class WorkItem(BaseModel):
    """Azure DevOps work item reduced to the fields a journal needs."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int = Field(description="Work item ID")
    title: str = Field(description="Work item title")
    state: str = Field(description="Free-text state label as reported by Azure DevOps")
    work_item_type: str = Field(
        validation_alias=AliasChoices("work_item_type", "workItemType", "type"),
        description="Work item type (Task, Bug, Feature...)"
    )
    tags: Optional[str] = Field(default=None, description="Semicolon separated tags")
    changed_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("changed_date", "changedDate"),
        description="Last change timestamp"
    )

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "WorkItem":
        """
        Build a work item from a work-tracking query result.

        Args:
            record: Mapping with an ``id`` and a ``fields`` bag keyed by
                ``System.*`` field names

        Returns:
            Parsed work item

        Raises:
            ValidationError: If the fields bag or a required field is missing
        """
        fields = record.get("fields")
        if not isinstance(fields, dict):
            raise ValidationError(
                f"Work item {record.get('id')} has no fields bag",
                field_name="fields",
                invalid_value=fields
            )

        for required in (TITLE_FIELD, STATE_FIELD, TYPE_FIELD):
            if fields.get(required) is None:
                raise ValidationError(
                    f"Work item {record.get('id')} is missing {required}",
                    field_name=required
                )

        return cls(
            id=record["id"],
            title=fields[TITLE_FIELD],
            state=fields[STATE_FIELD],
            work_item_type=fields[TYPE_FIELD],
            tags=fields.get(TAGS_FIELD) or None,
            changed_date=fields.get(CHANGED_DATE_FIELD)
        )

    @classmethod
    def coerce(cls, item: Any) -> "WorkItem":
        """Accept either a parsed work item or a raw query record."""
        if isinstance(item, cls):
            return item
        if isinstance(item, dict) and "fields" in item:
            return cls.from_record(item)
        return cls.model_validate(item)


class PullRequest(BaseModel):
    """Pull request summary."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(description="Pull request ID")
    title: str = Field(description="Pull request title")
    status: str = Field(default="Active", description="Pull request status")
    reviewers: List[str] = Field(default_factory=list, description="Reviewer names")
    created_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("created_date", "createdDate"),
        description="Creation timestamp"
    )
    repository: Optional[str] = Field(default=None, description="Repository name")


class Meeting(BaseModel):
    """Calendar event."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(description="Event title")
    start_time: str = Field(
        default="",
        validation_alias=AliasChoices("start_time", "startTime", "time"),
        description="Start time as displayed"
    )
    end_time: str = Field(
        default="",
        validation_alias=AliasChoices("end_time", "endTime"),
        description="End time as displayed"
    )
    attendee_count: int = Field(
        default=0,
        validation_alias=AliasChoices("attendee_count", "attendeeCount", "attendees"),
        description="Number of attendees"
    )
    meeting_type: str = Field(
        default="meeting",
        validation_alias=AliasChoices("meeting_type", "type"),
        description="Event type (meeting, review, focus...)"
    )


class CategorizedWorkItems(BaseModel):
    """Work items partitioned by state."""

    in_progress: List[WorkItem] = Field(default_factory=list)
    open: List[WorkItem] = Field(default_factory=list)
    pending: List[WorkItem] = Field(default_factory=list)
    unrecognized: List[WorkItem] = Field(
        default_factory=list,
        description="Items whose state matched no bucket; never rendered"
    )

    @property
    def categorized_count(self) -> int:
        """Number of items in the three recognized buckets."""
        return len(self.in_progress) + len(self.open) + len(self.pending)


class JournalEntry(BaseModel):
    """One day's journal record."""

    date: date_type = Field(description="Calendar date of the entry")
    day_of_week: str = Field(description="English weekday name")
    work_items: CategorizedWorkItems = Field(default_factory=CategorizedWorkItems)
    pull_requests: List[PullRequest] = Field(default_factory=list)
    meetings: List[Meeting] = Field(default_factory=list)
    accomplishments: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    mood: Mood = Field(default=Mood.PRODUCTIVE)
    notes: str = Field(default="")


class WeeklyStats(BaseModel):
    """Averages over the most recent structured entries."""

    avg_work_items: float = Field(default=0.0)
    avg_meetings: float = Field(default=0.0)
    common_mood: Mood = Field(default=Mood.PRODUCTIVE)


class JournalInsights(BaseModel):
    """Statistics about the stored journal."""

    total_entries: int = Field(description="Number of stored entries")
    recent_entries: List[date_type] = Field(default_factory=list, description="Up to 7 most recent dates")
    streak_days: int = Field(default=0, description="Consecutive days ending today with an entry")
    weekly_stats: WeeklyStats = Field(default_factory=WeeklyStats)
