"""Result dataclasses shared by the create, resize and compaction steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class StepStatus(Enum):
    PENDING = 'pending'
    RUNNING = 'running'
    COMPLETED = 'completed'
    HALTED = 'halted'


@dataclass
class StepResult:
    status: StepStatus = StepStatus.PENDING
    paths: list[str] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.COMPLETED

    @property
    def halted(self) -> bool:
        return self.status is StepStatus.HALTED

    def halt(self, error: Exception) -> 'StepResult':
        self.status = StepStatus.HALTED
        self.error = error
        return self

    def complete(self) -> 'StepResult':
        self.status = StepStatus.COMPLETED
        return self
