"""Tests for the resize pass."""

from __future__ import annotations

import pytest

from vmdisk.actions import QemuImgArgs
from vmdisk.planner import DiskPolicy
from vmdisk.resize import resize_disks

PATHS = ['output/target-0', 'output/target-1', 'output/target-2']


@pytest.mark.parametrize(
    'disk_image,skip_resize_disk',
    [(False, False), (False, True), (True, True)],
)
def test_resize_skips(driver, disk_image, skip_resize_disk) -> None:
    policy = DiskPolicy(
        vm_name='target',
        disk_size='1234M',
        disk_image=disk_image,
        skip_resize_disk=skip_resize_disk,
    )
    result = resize_disks(PATHS, policy, driver)
    assert result.ok
    assert result.error is None
    assert driver.calls == []


def test_resize_runs_in_order_with_extra_args(driver) -> None:
    policy = DiskPolicy(
        vm_name='target',
        format='qcow2',
        disk_size='1234M',
        disk_image=True,
        qemu_img_args=QemuImgArgs(resize=('-foo', '-bar')),
    )
    result = resize_disks(PATHS, policy, driver)
    assert result.ok
    assert driver.qemu_img_calls == [
        'resize', '-f', 'qcow2', '-foo', '-bar', 'output/target-0', '1234M',
        'resize', '-f', 'qcow2', '-foo', '-bar', 'output/target-1', '1234M',
        'resize', '-f', 'qcow2', '-foo', '-bar', 'output/target-2', '1234M',
    ]


def test_resize_no_paths(driver) -> None:
    policy = DiskPolicy(vm_name='target', disk_image=True, disk_size='1G')
    assert resize_disks([], policy, driver).ok
    assert driver.calls == []


def test_resize_halts_on_first_failure(make_driver) -> None:
    policy = DiskPolicy(vm_name='target', disk_image=True, disk_size='1G')
    driver = make_driver(fail_on=1)
    result = resize_disks(PATHS, policy, driver)
    assert result.halted
    assert len(driver.calls) == 2
    assert str(result.error) == 'Error creating hard drive: qemu_img failed'
    assert result.error.target == 'output/target-1'
