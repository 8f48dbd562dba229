"""Tasks processed by minions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskState(str, Enum):
    """Lifecycle states of a task."""

    UNKNOWN = "unknown"
    QUEUED = "queued"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"

    def __str__(self) -> str:
        return self.value


@dataclass
class Task:
    """A task to be processed by a minion."""

    command: str
    environment: str
    dry_run: bool = False
    time_received: int = 0
    time_processed: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    result: str = ""
    state: TaskState = TaskState.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        """Return the task as a JSON-ready mapping."""
        return {
            "dryRun": self.dry_run,
            "environment": self.environment,
            "command": self.command,
            "timeReceived": self.time_received,
            "timeProcessed": self.time_processed,
            "id": str(self.id),
            "result": self.result,
            "state": TaskState(self.state).value,
        }


def new_task(command: str, environment: str) -> Task:
    """Create a new task with a random id in the unknown state."""
    return Task(command=command, environment=environment)