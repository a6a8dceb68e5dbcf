"""Project-specific exception types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .actions import PlannedAction


class VMDiskError(RuntimeError):
    """Base error for domain-level vmdisk failures."""


class ConfigError(VMDiskError):
    """Raised when a config file holds values of the wrong shape."""


class PlanningError(VMDiskError):
    """Raised when a disk plan cannot be produced or rendered."""


class UnknownActionError(PlanningError):
    """Raised for an action kind that has no command or driver operation."""


class DiskExecutionError(VMDiskError):
    """Raised when qemu-img or a file operation fails for one disk.

    The message is the operator-facing text. ``target`` is the disk path
    being worked on, ``action`` the planned action that failed (when the
    failure came from a plan) and ``cause`` the driver's own error.
    """

    def __init__(
        self,
        message: str,
        *,
        target: str = '',
        action: PlannedAction | None = None,
        cause: Exception | None = None,
    ):
        self.target = target
        self.action = action
        self.cause = cause
        super().__init__(message)
