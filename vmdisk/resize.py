"""Grow provisioned disks to the configured size."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from .commands import build_resize_command
from .driver import Driver
from .errors import DiskExecutionError
from .planner import DiskPolicy
from .results import StepResult, StepStatus

log = logger


def should_resize(policy: DiskPolicy) -> bool:
    return policy.disk_image and not policy.skip_resize_disk


def resize_disks(
    paths: Sequence[str], policy: DiskPolicy, driver: Driver
) -> StepResult:
    result = StepResult(status=StepStatus.RUNNING)
    if not should_resize(policy):
        log.debug(
            'Skipping disk resize (disk_image={}, skip_resize_disk={})',
            policy.disk_image,
            policy.skip_resize_disk,
        )
        return result.complete()

    args = policy.qemu_img_args.resize
    for path in paths:
        command = build_resize_command(
            policy.format, args, path, policy.disk_size
        )
        log.info('Resizing hard drive {} ...', path)
        try:
            driver.qemu_img(command)
        except Exception as ex:
            # Capitalised, unlike the create step; external tooling matches this text.
            err = DiskExecutionError(
                f'Error creating hard drive: {ex}', target=path, cause=ex
            )
            log.error('{}', err)
            return result.halt(err)
        result.paths.append(path)
    return result.complete()
