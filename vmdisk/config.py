"""Dataclass config for disk builds, with TOML load/save."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .actions import QemuImgArgs
from .errors import ConfigError
from .planner import DiskPolicy
from .util import expand

DEFAULT_CONFIG_NAME = '.vmdisk.toml'


@dataclass
class DiskConfig:
    format: str = 'qcow2'
    disk_size: str = '40960M'
    disk_image: bool = False
    use_backing_file: bool = False
    skip_resize_disk: bool = False
    disk_compression: bool = False
    skip_compaction: bool = True
    additional_disk_size: list[str] = field(default_factory=list)


@dataclass
class SourceConfig:
    path: str = ''
    many_disks: bool = False
    disks_order: list[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    vm_name: str = 'packer-vm'
    output_dir: str = 'output'


@dataclass
class QemuImgArgsConfig:
    create: list[str] = field(default_factory=list)
    convert: list[str] = field(default_factory=list)
    resize: list[str] = field(default_factory=list)


@dataclass
class DriverConfig:
    qemu_img_path: str = 'qemu-img'
    sudo: bool = False


@dataclass
class VMDiskConfig:
    disk: DiskConfig = field(default_factory=DiskConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    qemu_img_args: QemuImgArgsConfig = field(default_factory=QemuImgArgsConfig)
    driver: DriverConfig = field(default_factory=DriverConfig)
    verbosity: int = 1

    def expanded_paths(self) -> 'VMDiskConfig':
        self.source.path = expand(self.source.path) if self.source.path else ''
        self.output.output_dir = (
            expand(self.output.output_dir) if self.output.output_dir else ''
        )
        return self

    def to_policy(self) -> DiskPolicy:
        return DiskPolicy(
            vm_name=self.output.vm_name,
            format=self.disk.format,
            disk_size=self.disk.disk_size,
            output_dir=self.output.output_dir,
            disk_image=self.disk.disk_image,
            use_backing_file=self.disk.use_backing_file,
            skip_resize_disk=self.disk.skip_resize_disk,
            disk_compression=self.disk.disk_compression,
            skip_compaction=self.disk.skip_compaction,
            many_disks=self.source.many_disks,
            disks_order=tuple(self.source.disks_order),
            additional_disk_size=tuple(self.disk.additional_disk_size),
            qemu_img_args=QemuImgArgs.coerce(asdict(self.qemu_img_args)),
        )


SECTIONS = ('disk', 'source', 'output', 'qemu_img_args', 'driver')


def _toml_escape(s: str) -> str:
    return s.replace('\\', '\\\\').replace('"', '\\"')


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, list):
        return '[' + ', '.join(_toml_value(str(item)) for item in value) + ']'
    return f'"{_toml_escape(str(value))}"'


def dump_toml(cfg: VMDiskConfig) -> str:
    """Render ``cfg`` as TOML; ``verbosity`` is written only when not 1."""
    data = asdict(cfg)
    lines: list[str] = []
    if cfg.verbosity != 1:
        lines += [f'verbosity = {cfg.verbosity}', '']
    for section in SECTIONS:
        lines.append(f'[{section}]')
        lines += [f'{k} = {_toml_value(v)}' for k, v in data[section].items()]
        lines.append('')
    return '\n'.join(lines).rstrip() + '\n'


def _check_value(section: str, key: str, default: object, value: object) -> object:
    if isinstance(default, list):
        if not isinstance(value, list):
            raise ConfigError(f'{section}.{key} must be a list, got {value!r}')
        return [str(item) for item in value]
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(f'{section}.{key} must be true/false, got {value!r}')
        return value
    return str(value)


def from_dict(raw: dict) -> VMDiskConfig:
    cfg = VMDiskConfig()
    for section in SECTIONS:
        body = raw.get(section, None)
        if not isinstance(body, dict):
            continue
        obj = getattr(cfg, section)
        for k, v in body.items():
            if hasattr(obj, k):
                setattr(obj, k, _check_value(section, k, getattr(obj, k), v))
    if 'verbosity' in raw:
        cfg.verbosity = int(raw['verbosity'])
    return cfg


def load(path: Path) -> VMDiskConfig:
    raw = tomllib.loads(path.read_text(encoding='utf-8'))
    return from_dict(raw)


def save(path: Path, cfg: VMDiskConfig) -> None:
    path.write_text(dump_toml(cfg), encoding='utf-8')
