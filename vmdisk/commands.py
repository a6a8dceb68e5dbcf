"""Builders for qemu-img argument lists.

Every builder is a pure function returning a fresh list. User supplied extra
arguments always follow the fixed head tokens and precede the path and size
tokens; qemu-img parses options positionally so that order is significant.
"""

from __future__ import annotations

from typing import Sequence

from .actions import ActionKind, PlannedAction
from .errors import UnknownActionError


def build_create_command(
    fmt: str, extra: Sequence[str], target: str, size: str
) -> list[str]:
    return ['create', '-f', fmt, *extra, target, size]


def build_convert_command(
    fmt: str,
    extra: Sequence[str],
    source: str,
    target: str,
    *,
    compress: bool = False,
) -> list[str]:
    head = ['convert', '-c', '-O', fmt] if compress else ['convert', '-O', fmt]
    return [*head, *extra, source, target]


def build_backing_command(
    fmt: str, extra: Sequence[str], source: str, target: str
) -> list[str]:
    # No size token: the new image inherits the size of its backing file.
    return ['create', '-f', fmt, *extra, '-b', source, target]


def build_resize_command(
    fmt: str, extra: Sequence[str], target: str, size: str
) -> list[str]:
    return ['resize', '-f', fmt, *extra, target, size]


def build_command(action: PlannedAction) -> list[str]:
    """Render the qemu-img invocation for a planned action.

    COPY actions never reach qemu-img and are rejected here; the provisioner
    hands them to the driver's copy operation instead.
    """
    disk = action.disk
    args = action.args
    if action.kind is ActionKind.CREATE:
        return build_create_command(
            disk.format, args.create, disk.target_path, disk.size
        )
    if action.kind is ActionKind.CONVERT:
        return build_convert_command(
            disk.format, args.convert, disk.source_path, disk.target_path
        )
    if action.kind is ActionKind.BACKING:
        return build_backing_command(
            disk.format, args.create, disk.source_path, disk.target_path
        )
    raise UnknownActionError(
        f'No qemu-img command for action kind {action.kind!r}'
    )
