"""Decide which disk action applies to each source and additional disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath

from loguru import logger

from .actions import ActionKind, DiskSpec, PlannedAction, QemuImgArgs
from .util import join_path

log = logger


@dataclass(frozen=True)
class DiskPolicy:
    """Everything the planner, resizer and compactor read from configuration."""

    vm_name: str
    format: str = 'qcow2'
    disk_size: str = ''
    output_dir: str = ''
    disk_image: bool = False
    use_backing_file: bool = False
    skip_resize_disk: bool = False
    disk_compression: bool = False
    skip_compaction: bool = True
    many_disks: bool = False
    disks_order: tuple[str, ...] = ()
    additional_disk_size: tuple[str, ...] = ()
    qemu_img_args: QemuImgArgs = field(default_factory=QemuImgArgs)


def source_extension(path: str) -> str:
    """Return the extension after the last dot of the file name, without the dot."""
    name = PurePath(path).name
    if '.' not in name:
        return ''
    return name.rsplit('.', 1)[1]


def target_path(policy: DiskPolicy, index: int) -> str:
    return join_path(policy.output_dir, f'{policy.vm_name}-{index}')


def source_paths(source_path: str, policy: DiskPolicy) -> list[str]:
    """Expand the configured source into the ordered list of source disks.

    With ``many_disks`` the source path is a directory holding every entry of
    ``disks_order``; otherwise it is the single source disk itself.
    """
    if policy.many_disks:
        return [join_path(source_path, name) for name in policy.disks_order]
    return [source_path]


def choose_action(source: str, policy: DiskPolicy) -> ActionKind:
    if not policy.disk_image:
        return ActionKind.CREATE
    if policy.use_backing_file:
        return ActionKind.BACKING
    ext = source_extension(source)
    if ext and ext == policy.format and not policy.qemu_img_args.convert:
        log.info(
            'File extension already matches desired output format. '
            'Skipping qemu-img convert step for {}',
            source,
        )
        return ActionKind.COPY
    return ActionKind.CONVERT


def plan_disks(source_path: str, policy: DiskPolicy) -> list[PlannedAction]:
    """Plan every disk of a run: source disks first, then additional disks.

    Target names are numbered over the combined sequence, so a copied source
    disk still consumes its index even though it never runs qemu-img.
    """
    actions: list[PlannedAction] = []
    for source in source_paths(source_path, policy):
        kind = choose_action(source, policy)
        if kind is ActionKind.CREATE:
            disk = DiskSpec(
                target_path=target_path(policy, len(actions)),
                format=policy.format,
                size=policy.disk_size,
            )
        else:
            disk = DiskSpec(
                target_path=target_path(policy, len(actions)),
                format=policy.format,
                source_path=source,
            )
        actions.append(PlannedAction(disk, kind, policy.qemu_img_args))

    for size in policy.additional_disk_size:
        disk = DiskSpec(
            target_path=target_path(policy, len(actions)),
            format=policy.format,
            size=size,
        )
        actions.append(
            PlannedAction(disk, ActionKind.CREATE, policy.qemu_img_args)
        )
    log.debug('Planned {} disk action(s) for {}', len(actions), policy.vm_name)
    return actions
