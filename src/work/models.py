"""Value types for tracked work: shifts, tasks, and task classifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class TaskClassification(IntEnum):
    """Category of a task. Stored as its integer value."""

    CHORE = 0
    TOIL = 1
    BREAK = 2


def coerce_classification(value: int) -> TaskClassification | int:
    """Return the matching TaskClassification, or the raw int if unknown."""
    try:
        return TaskClassification(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class Shift:
    """A bounded work session."""

    id: int
    start: datetime
    end: datetime

    @property
    def is_open(self) -> bool:
        # An end equal to start marks a shift that has not been closed yet.
        return self.end == self.start


@dataclass(frozen=True)
class Task:
    """A unit of work inside a shift, matched to it by time overlap."""

    id: int
    description: str
    classification: TaskClassification | int
    start: datetime
    end: datetime

    @property
    def is_open(self) -> bool:
        return self.end == self.start
