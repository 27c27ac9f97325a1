"""
Work item categorization by state.
"""

from typing import Any, Dict, Iterable

from .schemas import CategorizedWorkItems, WorkItem, WorkItemState


# Lower-cased Azure DevOps state labels and the bucket each one lands in
STATE_BUCKETS: Dict[str, WorkItemState] = {
    "in progress": WorkItemState.IN_PROGRESS,
    "active": WorkItemState.IN_PROGRESS,
    "pending": WorkItemState.PENDING,
    "open": WorkItemState.OPEN,
    "new": WorkItemState.OPEN,
}


def classify_state(state: str) -> WorkItemState:
    """Map a free-text state label to its bucket (case-insensitive exact match)."""
    return STATE_BUCKETS.get(state.lower(), WorkItemState.UNRECOGNIZED)


def categorize_work_items(items: Iterable[Any]) -> CategorizedWorkItems:
    """
    Partition work items into in-progress, open and pending buckets.

    Input order is kept within each bucket. Items with a state outside the
    recognized labels go to ``unrecognized`` instead of any bucket.

    Args:
        items: Work items or raw work-tracking query records

    Returns:
        Categorized work items
    """
    categorized = CategorizedWorkItems()
    buckets = {
        WorkItemState.IN_PROGRESS: categorized.in_progress,
        WorkItemState.OPEN: categorized.open,
        WorkItemState.PENDING: categorized.pending,
        WorkItemState.UNRECOGNIZED: categorized.unrecognized,
    }

    for item in items:
        work_item = WorkItem.coerce(item)
        buckets[classify_state(work_item.state)].append(work_item)

    return categorized
