"""Tests for the create, resize and compact pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from vmdisk.pipeline import prepare_output_dir, run_pipeline
from vmdisk.planner import DiskPolicy


def test_pipeline_resizes_created_disks(driver, tmp_path: Path) -> None:
    out = tmp_path / 'output'
    policy = DiskPolicy(
        vm_name='target',
        format='qcow2',
        disk_size='10G',
        output_dir=str(out),
        disk_image=True,
        use_backing_file=True,
        additional_disk_size=('2G',),
    )
    state = run_pipeline(policy, 'base.qcow2', driver)
    assert not state.halted
    assert out.is_dir()
    assert state.disk_paths == [str(out / 'target-0'), str(out / 'target-1')]
    assert [name for name, _ in driver.calls] == ['qemu_img'] * 4
    assert driver.calls[2][1] == [
        'resize', '-f', 'qcow2', str(out / 'target-0'), '10G',
    ]
    assert driver.calls[3][1] == [
        'resize', '-f', 'qcow2', str(out / 'target-1'), '10G',
    ]


def test_create_failure_stops_pipeline(make_driver) -> None:
    policy = DiskPolicy(
        vm_name='target',
        disk_image=True,
        use_backing_file=True,
        disk_size='10G',
        additional_disk_size=('2G', '3G'),
    )
    driver = make_driver(fail_on=1)
    state = run_pipeline(policy, 'base.qcow2', driver)
    assert state.halted
    assert state.disk_paths == ['target-0', 'target-1']
    assert 'resize' not in state.results
    assert str(state.error).startswith('error creating hard drive:')
    assert len(driver.calls) == 2


def test_resize_only_uses_given_paths(driver) -> None:
    policy = DiskPolicy(vm_name='target', disk_image=True, disk_size='5G')
    state = run_pipeline(
        policy, '', driver, steps=('resize',), disk_paths=['a.qcow2']
    )
    assert state.results['resize'].ok
    assert driver.qemu_img_calls == ['resize', '-f', 'qcow2', 'a.qcow2', '5G']


def test_unknown_step() -> None:
    policy = DiskPolicy(vm_name='target')
    with pytest.raises(ValueError):
        run_pipeline(policy, '', None, steps=('shrink',))


def test_prepare_output_dir_dry_run(tmp_path: Path) -> None:
    out = tmp_path / 'out'
    policy = DiskPolicy(vm_name='target', output_dir=str(out))
    prepare_output_dir(policy, dry_run=True)
    assert not out.exists()
    prepare_output_dir(policy)
    assert out.is_dir()


def _compressing_policy() -> DiskPolicy:
    return DiskPolicy(
        vm_name='target',
        disk_image=True,
        use_backing_file=True,
        disk_size='10G',
        disk_compression=True,
    )


def test_resize_failure_stops_before_compaction(make_driver) -> None:
    driver = make_driver(fail_on=1)
    state = run_pipeline(_compressing_policy(), 'base.qcow2', driver)
    assert state.halted
    assert str(state.error).startswith('Error creating hard drive:')
    assert state.error.target == 'target-0'
    assert list(state.results) == ['create', 'resize']
    assert 'compact' not in state.results
    assert [name for name, _ in driver.calls] == ['qemu_img', 'qemu_img']
    assert driver.move_calls == []
    assert state.disk_paths == ['target-0']


def test_compaction_failure_recorded_on_state(make_driver) -> None:
    driver = make_driver(fail_on=3)
    state = run_pipeline(_compressing_policy(), 'base.qcow2', driver)
    assert state.halted
    assert str(state.error) == 'Error converting hard drive: move failed'
    assert state.results['resize'].ok
    assert state.results['compact'].halted
    assert [name for name, _ in driver.calls] == [
        'qemu_img', 'qemu_img', 'qemu_img', 'move',
    ]
    assert state.disk_paths == ['target-0']
