"""Task/subtask grouping of time entries and invoice description text."""

from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List, Tuple

from backend.app.services.currency import minutes_to_hours

GENERAL_TASK_NAME = "General Work"
GENERAL_SUBTASK_NAME = "General work"


def resolve_task_name(entry) -> str:
    if entry.task is not None and entry.task.name:
        return entry.task.name
    if entry.task_description:
        return entry.task_description
    return GENERAL_TASK_NAME


def total_hours(entries) -> Decimal:
    return sum((minutes_to_hours(e.duration_minutes) for e in entries), Decimal("0"))


def group_by_task(entries) -> Dict[str, list]:
    """Group entries by resolved task name, keeping first-seen order."""
    groups: Dict[str, list] = OrderedDict()
    for entry in entries:
        groups.setdefault(resolve_task_name(entry), []).append(entry)
    return groups


def subtask_breakdown(entries) -> Tuple[List[Tuple[str, Decimal]], Decimal | None]:
    """Split entries of one task into per-subtask hours plus the no-subtask remainder.

    The remainder is ``None`` when every entry names a subtask.
    """
    subtasks: Dict[str, Decimal] = OrderedDict()
    remainder = None
    for entry in entries:
        hours = minutes_to_hours(entry.duration_minutes)
        if entry.subtask:
            subtasks[entry.subtask] = subtasks.get(entry.subtask, Decimal("0")) + hours
        else:
            remainder = (remainder or Decimal("0")) + hours
    return list(subtasks.items()), remainder


def _hours(value: Decimal) -> str:
    return f"{value:.2f}"


def hourly_task_description(task_name: str, entries) -> str:
    return f"{task_name}\nTotal: {_hours(total_hours(entries))} hours"


def hourly_subtask_description(task_name: str, entries) -> str:
    subtasks, remainder = subtask_breakdown(entries)
    lines = [task_name]
    if subtasks:
        lines.append("Subtasks:")
        for name, hours in subtasks:
            lines.append(f"  • {name}: {_hours(hours)} hours")
    if remainder is not None:
        if subtasks:
            lines.append(f"  • {GENERAL_SUBTASK_NAME}: {_hours(remainder)} hours")
        else:
            lines.append(f"{GENERAL_SUBTASK_NAME}: {_hours(remainder)} hours")
    lines.append(f"Total: {_hours(total_hours(entries))} hours")
    return "\n".join(lines)


def monthly_description(entries, detail_level: str, period_label: str) -> str:
    """Single-line-item description for a flat monthly fee with an hours breakdown."""
    parts = [f"Monthly Service - {period_label}", "", "Tasks completed:"]
    for task_name, task_entries in group_by_task(entries).items():
        task_hours = _hours(total_hours(task_entries))
        if detail_level == "subtask":
            parts.append("")
            parts.append(f"  {task_name}: {task_hours} hours")
            subtasks, remainder = subtask_breakdown(task_entries)
            for name, hours in subtasks:
                parts.append(f"    - {name}: {_hours(hours)} hours")
            if remainder is not None:
                parts.append(f"    - {GENERAL_SUBTASK_NAME}: {_hours(remainder)} hours")
        else:
            parts.append(f"  • {task_name}: {task_hours} hours")
    parts.append("")
    parts.append(f"Total hours logged: {_hours(total_hours(entries))}")
    return "\n".join(parts)
