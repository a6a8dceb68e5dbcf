from __future__ import annotations

import sys
from pathlib import Path

import scriptconfig as scfg
from loguru import logger

from ..config import DEFAULT_CONFIG_NAME, VMDiskConfig, load
from ..driver import QemuImgDriver

log = logger


class _BaseCommand(scfg.DataConfig):
    """Base options shared by all commands."""

    config = scfg.Value(
        None, help=f'Path to config TOML (default: {DEFAULT_CONFIG_NAME}).'
    )
    verbose = scfg.Value(
        0,
        short_alias=['v'],
        isflag='counter',
        help='Increase verbosity (-v, -vv).',
    )


def _cfg_path(p: str | None) -> Path:
    return Path(p or DEFAULT_CONFIG_NAME).resolve()


def _load_cfg_with_path(config_path: str | None) -> tuple[VMDiskConfig, Path]:
    path = _cfg_path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f'Config not found: {path}. '
            f'Run: vmdisk config init --config {path}'
        )
    cfg = load(path).expanded_paths()
    return cfg, path


def _load_cfg(config_path: str | None) -> VMDiskConfig:
    cfg, _ = _load_cfg_with_path(config_path)
    return cfg


def _make_driver(cfg: VMDiskConfig, *, dry_run: bool = False) -> QemuImgDriver:
    return QemuImgDriver(
        qemu_img_path=cfg.driver.qemu_img_path,
        sudo=bool(cfg.driver.sudo),
        dry_run=dry_run,
    )


def _report_halt(error: Exception) -> int:
    print(f'ERROR: {error}', file=sys.stderr)
    return 2


__all__ = [name for name in globals() if not name.startswith('__')]
