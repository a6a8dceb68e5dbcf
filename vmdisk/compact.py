"""Re-encode provisioned disks to reclaim space, optionally compressing them."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from .commands import build_convert_command
from .driver import Driver
from .errors import DiskExecutionError
from .planner import DiskPolicy
from .results import StepResult, StepStatus

log = logger

TEMP_SUFFIX = '.convert'


def should_compact(policy: DiskPolicy) -> bool:
    return policy.disk_compression or not policy.skip_compaction


def compact_disks(
    paths: Sequence[str], policy: DiskPolicy, driver: Driver
) -> StepResult:
    """Convert each disk into a temporary file and move it back in place."""
    result = StepResult(status=StepStatus.RUNNING)
    if not should_compact(policy):
        log.debug('Skipping disk compaction')
        return result.complete()

    for path in paths:
        tmp_path = path + TEMP_SUFFIX
        command = build_convert_command(
            policy.format,
            policy.qemu_img_args.convert,
            path,
            tmp_path,
            compress=policy.disk_compression,
        )
        log.info('Converting hard drive {} ...', path)
        try:
            driver.qemu_img(command)
            driver.move(tmp_path, path)
        except Exception as ex:
            err = DiskExecutionError(
                f'Error converting hard drive: {ex}', target=path, cause=ex
            )
            log.error('{}', err)
            return result.halt(err)
        result.paths.append(path)
    return result.complete()
