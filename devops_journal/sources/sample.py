"""
Built-in demo data used when no Azure DevOps MCP server is configured.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, List

from ..journal.schemas import Meeting, PullRequest, WorkItem


class SampleDataSource:
    """Returns a fixed set of work items, calendar events and pull requests."""

    def __init__(self, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)) -> None:
        self.clock = clock

    async def fetch_work_items(self) -> List[WorkItem]:
        now = self.clock()
        records = [
            {
                "id": 2523677,
                "fields": {
                    "System.Title": "[ACS][EUDB] Workstream 1: Comply with EU Data Boundary requirements "
                                    "for EUII/CC processing and storage only within EUDB by 06/30/22",
                    "System.State": "In Progress",
                    "System.WorkItemType": "Feature",
                    "System.Tags": "Consumer:IC3-ACS; CY21H2; CY22H2; dcrreview; EUDB; EUDB-IC3; IC3-ACS; "
                                   "IC3-EUDB-W1; IC3Horizontal; IC3horizontalapproved; Producer:IC3-ACS; "
                                   "Semester:Cu; Spool2HCY2023-Dependencies",
                    "System.ChangedDate": now.isoformat(),
                },
            },
            {
                "id": 2572902,
                "fields": {
                    "System.Title": "[ACS] Data tagging for SMBA and ACS auth (identified during bot implementation)",
                    "System.State": "Pending",
                    "System.WorkItemType": "Exception",
                    "System.Tags": "IC3 ACS",
                    "System.ChangedDate": (now - timedelta(days=1)).isoformat(),
                },
            },
            {
                "id": 2627349,
                "fields": {
                    "System.Title": "[ACS][EUDB] Workstream 2: Re-design & provision EUPI pipelines/storage "
                                    "by 6/30/22 to route processing and storage of EUPI in the EU by 12/31/22",
                    "System.State": "Open",
                    "System.WorkItemType": "Feature",
                    "System.Tags": "Consumer:IC3-ACS; CY22H2; IC3Horizontal; IC3horizontalapproved; PartnerAsk; "
                                   "Producer:IC3-ACS; Semester:Cu; Spool2HCY2023-Dependencies",
                },
            },
            {
                "id": 2627393,
                "fields": {
                    "System.Title": "[ACS][EUDB] Workstream 3: For EUDB tenants, Process and Store Support data "
                                    "in EU by Dec 31, 2022",
                    "System.State": "Open",
                    "System.WorkItemType": "Feature",
                    "System.Tags": "IC3Horizontal; PartnerAsk; Producer:IC3-ACS; Semester:Cu; Semester:Ni",
                },
            },
        ]
        return [WorkItem.from_record(record) for record in records]

    async def fetch_calendar_events(self, day: date) -> List[Meeting]:
        return [
            Meeting(title="Daily Standup - ACS Team", start_time="09:00 AM", end_time="09:30 AM",
                    attendee_count=5, meeting_type="meeting"),
            Meeting(title="EUDB Architecture Review", start_time="2:00 PM", end_time="3:00 PM",
                    attendee_count=12, meeting_type="review"),
            Meeting(title="Focus Time - Code Review", start_time="10:00 AM", end_time="11:30 AM",
                    attendee_count=1, meeting_type="focus"),
        ]

    async def fetch_pull_requests(self) -> List[PullRequest]:
        return [
            PullRequest(
                id=12345,
                title="Fix EUDB compliance validation logic",
                status="Active",
                reviewers=["john.doe", "jane.smith"],
                created_date=self.clock(),
                repository="acs-backend"
            )
        ]
