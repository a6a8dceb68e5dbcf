"""Run the disk steps of an image build over an explicit, typed state."""

from __future__ import annotations

from dataclasses import dataclass, field

import ubelt as ub
from loguru import logger

from .compact import compact_disks
from .driver import Driver
from .planner import DiskPolicy, plan_disks
from .provision import create_disks
from .resize import resize_disks
from .results import StepResult

log = logger

STEP_NAMES = ('create', 'resize', 'compact')


@dataclass
class PipelineState:
    disk_paths: list[str] = field(default_factory=list)
    error: Exception | None = None
    results: dict[str, StepResult] = field(default_factory=dict)

    @property
    def halted(self) -> bool:
        return self.error is not None


def prepare_output_dir(policy: DiskPolicy, *, dry_run: bool = False) -> None:
    if not policy.output_dir:
        return
    if dry_run:
        log.info('DRYRUN: mkdir -p {}', policy.output_dir)
        return
    ub.Path(policy.output_dir).ensuredir()


def run_pipeline(
    policy: DiskPolicy,
    source_path: str,
    driver: Driver,
    *,
    steps: tuple[str, ...] = STEP_NAMES,
    disk_paths: list[str] | None = None,
    dry_run: bool = False,
) -> PipelineState:
    """Create, resize and compact the disks for one build.

    Each step sees only the disk paths published by the create step. The
    first halted step records its error on the state and later steps are not
    run. When the create step is left out, ``disk_paths`` stands in for its
    output.
    """
    unknown = set(steps) - set(STEP_NAMES)
    if unknown:
        raise ValueError(f'Unknown pipeline steps: {sorted(unknown)}')
    state = PipelineState(disk_paths=list(disk_paths or []))
    prepare_output_dir(policy, dry_run=dry_run)

    if 'create' in steps:
        plan = plan_disks(source_path, policy)
        res = create_disks(plan, driver)
        state.results['create'] = res
        # Published once; later steps only read it.
        state.disk_paths = list(res.paths)
        if res.halted:
            state.error = res.error
            return state

    if 'resize' in steps:
        res = resize_disks(tuple(state.disk_paths), policy, driver)
        state.results['resize'] = res
        if res.halted:
            state.error = res.error
            return state

    if 'compact' in steps:
        res = compact_disks(tuple(state.disk_paths), policy, driver)
        state.results['compact'] = res
        if res.halted:
            state.error = res.error
            return state

    log.debug('Disk pipeline finished: {}', state.disk_paths)
    return state
