"""Disk descriptions, action kinds and planned actions for one provisioning run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ActionKind(Enum):
    """How a single target disk is produced."""

    CREATE = 'create'
    CONVERT = 'convert'
    BACKING = 'backing'
    COPY = 'copy'


@dataclass(frozen=True)
class DiskSpec:
    target_path: str
    format: str
    size: str = ''
    source_path: str = ''


@dataclass(frozen=True)
class QemuImgArgs:
    """User supplied extra qemu-img arguments, one list per subcommand.

    Backing-file creation goes through ``qemu-img create`` and therefore uses
    the ``create`` list.
    """

    create: tuple[str, ...] = ()
    convert: tuple[str, ...] = ()
    resize: tuple[str, ...] = ()

    @classmethod
    def coerce(cls, data: 'QemuImgArgs | dict | None') -> 'QemuImgArgs':
        if data is None:
            return cls()
        if isinstance(data, cls):
            return data
        return cls(
            create=tuple(str(x) for x in data.get('create', ()) or ()),
            convert=tuple(str(x) for x in data.get('convert', ()) or ()),
            resize=tuple(str(x) for x in data.get('resize', ()) or ()),
        )


@dataclass(frozen=True)
class PlannedAction:
    disk: DiskSpec
    kind: ActionKind
    args: QemuImgArgs = field(default_factory=QemuImgArgs)

    def describe(self) -> str:
        if self.kind is ActionKind.CREATE:
            return f'{self.kind.value} {self.disk.target_path} ({self.disk.size})'
        return f'{self.kind.value} {self.disk.source_path} -> {self.disk.target_path}'
