"""Execute a disk plan through a driver, stopping at the first failure."""

from __future__ import annotations

from typing import Callable, Sequence

from loguru import logger

from .actions import ActionKind, PlannedAction
from .commands import build_command
from .driver import Driver
from .errors import DiskExecutionError
from .results import StepResult, StepStatus

log = logger


def _executor(
    action: PlannedAction, driver: Driver
) -> Callable[[], None]:
    # Rendered before execution; build errors propagate unwrapped.
    if action.kind is ActionKind.COPY:
        disk = action.disk
        return lambda: driver.copy(disk.source_path, disk.target_path)
    command = build_command(action)
    return lambda: driver.qemu_img(command)


def create_disks(plan: Sequence[PlannedAction], driver: Driver) -> StepResult:
    """Run each planned action in order and collect the target paths.

    A target path is recorded before its action runs, so a halted result
    lists every disk that was attempted, the failing one included. Disks that
    were already created are left in place.
    """
    result = StepResult(status=StepStatus.RUNNING)
    for action in plan:
        disk = action.disk
        execute = _executor(action, driver)
        log.info(
            'Creating/Copy disk with path {} and size {}',
            disk.target_path,
            disk.size or '(from source)',
        )
        result.paths.append(disk.target_path)
        try:
            execute()
        except Exception as ex:
            err = DiskExecutionError(
                f'error creating hard drive: {ex}',
                target=disk.target_path,
                action=action,
                cause=ex,
            )
            log.error('{} ({})', err, action.describe())
            return result.halt(err)
    return result.complete()
