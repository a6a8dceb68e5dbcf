"""Top-level modal CLI wiring and logging setup."""

from __future__ import annotations

import os
import sys

import scriptconfig as scfg
from loguru import logger

from ._common import _cfg_path, _load_cfg, log
from .config import ConfigModalCLI
from .disk import BuildCLI, CreateCLI, PlanCLI, ResizeCLI
from .host import DoctorCLI


class VMDiskModalCLI(scfg.ModalCLI):
    """Plan and create the qemu-img disks of a VM image build."""

    config = ConfigModalCLI
    plan = PlanCLI
    create = CreateCLI
    resize = ResizeCLI
    build = BuildCLI
    doctor = DoctorCLI


def _setup_logging(args_verbose: int, cfg_verbosity: int) -> None:
    logger.remove()
    effective_verbosity = args_verbose if args_verbose > 0 else cfg_verbosity
    level = 'WARNING'
    if effective_verbosity == 1:
        level = 'INFO'
    elif effective_verbosity >= 2:
        level = 'DEBUG'
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(
        sys.stderr,
        level=level,
        colorize=colorize,
        format='<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>',
    )
    log.debug(
        'Logging configured at {} (effective_verbosity={}, colorize={})',
        level,
        effective_verbosity,
        colorize,
    )


def _count_verbose(argv: list[str]) -> int:
    count = 0
    for item in argv:
        if item == '--verbose':
            count += 1
        elif item.startswith('-') and not item.startswith('--'):
            short = item[1:]
            if short and set(short) <= {'v'}:
                count += len(short)
    return count


def _normalize_argv(argv: list[str]) -> list[str]:
    """Accept hyphenated spellings of option names."""
    out = []
    for item in argv:
        if item == '--dry-run':
            item = '--dry_run'
        out.append(item)
    return out


def main(argv: list[str] | None = None) -> None:
    verbosity = 1
    config_value = None
    if argv is None:
        argv = sys.argv[1:]
    argv = _normalize_argv(argv)
    if '--config' in argv:
        try:
            config_value = argv[argv.index('--config') + 1]
        except IndexError:
            pass
    try:
        if config_value is not None or _cfg_path(None).exists():
            verbosity = _load_cfg(config_value).verbosity
    except Exception:
        verbosity = 1

    _setup_logging(_count_verbose(argv), verbosity)

    try:
        rc = VMDiskModalCLI.main(argv=argv, _noexit=True)
    except Exception as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        log.error('Unhandled vmdisk error: {}', ex)
        sys.exit(2)

    if any(flag in argv for flag in ('-h', '--help')):
        sys.exit(0)
    if isinstance(rc, int):
        sys.exit(rc)
    sys.exit(0)
