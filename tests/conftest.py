"""
Pytest configuration and fixtures for DevOps Journal tests.
"""

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Generator, List
from unittest.mock import MagicMock
import tempfile
import pytest

from devops_journal.settings import AppSettings, JournalSettings, LoggingSettings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def silent_logger() -> MagicMock:
    """Log sink that records calls instead of printing."""
    return MagicMock()


@pytest.fixture
def fixed_now() -> datetime:
    """A Wednesday afternoon in UTC."""
    return datetime(2025, 1, 15, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def today(fixed_now: datetime) -> date:
    return fixed_now.date()


@pytest.fixture
def test_settings(temp_dir: Path) -> AppSettings:
    """Create test settings writing journals into a temporary directory."""
    return AppSettings(
        name="TestDevOpsJournal",
        version="0.1.0-test",
        debug=True,
        journal=JournalSettings(directory=temp_dir / "journal-entries"),
        logging=LoggingSettings(file=None)
    )


def make_record(item_id: int, state: str, title: str = "Item", item_type: str = "Task",
                tags: str = None) -> Dict[str, Any]:
    """Build a raw work-tracking query record."""
    fields = {
        "System.Title": title,
        "System.State": state,
        "System.WorkItemType": item_type,
    }
    if tags is not None:
        fields["System.Tags"] = tags
    return {"id": item_id, "fields": fields}


@pytest.fixture
def record_factory():
    """Factory for raw work-tracking query records."""
    return make_record


@pytest.fixture
def work_item_records() -> List[Dict[str, Any]]:
    """One work item per bucket plus one with an unrecognized state."""
    return [
        make_record(1, "In Progress", "Build pipeline", "Feature", tags="EUDB; ACS"),
        make_record(2, "Open", "Write docs"),
        make_record(3, "Pending", "Wait on legal", "Exception"),
        make_record(4, "Closed", "Old bug", "Bug"),
    ]


@pytest.fixture
def meeting_records() -> List[Dict[str, Any]]:
    return [
        {"title": "Daily Standup", "startTime": "09:00 AM", "endTime": "09:30 AM", "attendees": 5, "type": "meeting"},
        {"title": "Architecture Review", "startTime": "2:00 PM", "endTime": "3:00 PM", "attendees": 12, "type": "review"},
    ]


@pytest.fixture
def pull_request_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": 12345,
            "title": "Fix compliance validation",
            "status": "Active",
            "reviewers": ["john.doe"],
            "createdDate": "2025-01-15T10:00:00+00:00",
            "repository": "acs-backend",
        }
    ]


@pytest.fixture
def sample_env_file(temp_dir: Path) -> Path:
    """Create a sample .env file for testing."""
    env_file = temp_dir / ".env"
    env_content = """
AZURE_DEVOPS_ORG_URL=https://dev.azure.com/test-org
AZURE_DEVOPS_PROJECTS=Alpha,Beta
JOURNAL_EXPORT_HTML=true
LOG_LEVEL=DEBUG
"""
    env_file.write_text(env_content.strip())
    return env_file


@pytest.fixture
def sample_yaml_config(temp_dir: Path) -> Path:
    """Create a sample YAML config file for testing."""
    yaml_file = temp_dir / "settings.yaml"
    yaml_content = """
name: "TestDevOpsJournal"
version: "0.1.0-test"
debug: true

devops:
  org_url: "https://dev.azure.com/yaml-org"
  projects: ["SCC"]
  top: 25

integrations:
  enable_teams_integration: false

journal:
  directory: "yaml-journals"
  follow_up_steps: ["Plan tomorrow"]

logging:
  level: "WARNING"
"""
    yaml_file.write_text(yaml_content.strip())
    return yaml_file
