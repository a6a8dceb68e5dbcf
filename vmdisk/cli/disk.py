"""Disk planning, creation, resize, and full-build commands."""

from __future__ import annotations

import scriptconfig as scfg

from ..actions import ActionKind
from ..commands import build_command
from ..pipeline import run_pipeline
from ..planner import plan_disks
from ..util import shell_join
from ._common import _BaseCommand, _load_cfg, _make_driver, _report_halt, log


class _DiskCommand(_BaseCommand):
    source = scfg.Value(
        '',
        help='Source disk (or source directory with many_disks); overrides source.path.',
    )


def _source_for(args, cfg) -> str:
    return str(args.source or '').strip() or cfg.source.path


class PlanCLI(_DiskCommand):
    """Print the planned disk actions and the qemu-img commands they run."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        policy = cfg.to_policy()
        plan = plan_disks(_source_for(args, cfg), policy)
        if not plan:
            print('No disks to create.')
            return 0
        driver = _make_driver(cfg, dry_run=True)
        for idx, action in enumerate(plan):
            disk = action.disk
            if action.kind is ActionKind.COPY:
                cmd = driver.copy_argv(disk.source_path, disk.target_path)
            else:
                cmd = driver.qemu_img_argv(build_command(action))
            print(f'{idx}. [{action.kind.value}] {shell_join(cmd)}')
        return 0


class CreateCLI(_DiskCommand):
    """Create the planned disks without resizing or compacting them."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        state = run_pipeline(
            cfg.to_policy(),
            _source_for(args, cfg),
            _make_driver(cfg, dry_run=args.dry_run),
            steps=('create',),
            dry_run=args.dry_run,
        )
        if state.halted:
            return _report_halt(state.error)
        for path in state.disk_paths:
            print(path)
        return 0


class ResizeCLI(_DiskCommand):
    """Resize existing disks to disk.disk_size."""

    paths = scfg.Value(
        [],
        nargs='*',
        help='Disk paths to resize (default: the planned target paths).',
    )
    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        policy = cfg.to_policy()
        paths = [str(p) for p in (args.paths or [])]
        if not paths:
            plan = plan_disks(_source_for(args, cfg), policy)
            paths = [action.disk.target_path for action in plan]
        log.debug('Resizing {} disk(s)', len(paths))
        state = run_pipeline(
            policy,
            _source_for(args, cfg),
            _make_driver(cfg, dry_run=args.dry_run),
            steps=('resize',),
            disk_paths=paths,
            dry_run=args.dry_run,
        )
        if state.halted:
            return _report_halt(state.error)
        return 0


class BuildCLI(_DiskCommand):
    """Create, resize, and compact all disks of the build."""

    dry_run = scfg.Value(
        False, isflag=True, help='Print actions without running.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg = _load_cfg(args.config)
        state = run_pipeline(
            cfg.to_policy(),
            _source_for(args, cfg),
            _make_driver(cfg, dry_run=args.dry_run),
            dry_run=args.dry_run,
        )
        if state.halted:
            return _report_halt(state.error)
        for path in state.disk_paths:
            print(path)
        return 0
