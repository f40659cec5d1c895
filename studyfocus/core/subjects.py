from __future__ import annotations

from typing import Iterable, Protocol

from studyfocus.core.timer import DEFAULT_SUBJECT


class SubjectTask(Protocol):
    subject: str
    completed: bool


def available_subjects(tasks: Iterable[SubjectTask]) -> list[str]:
    """Default label first, then each open task subject once, in first-seen order."""
    subjects = [DEFAULT_SUBJECT]
    for task in tasks:
        if task.completed:
            continue
        label = task.subject.strip()
        if label and label not in subjects:
            subjects.append(label)
    return subjects
