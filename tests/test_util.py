"""Tests for subprocess and path helpers."""

from __future__ import annotations

import pytest

from vmdisk.util import CmdError, CmdResult, join_path, run_cmd


class _Proc:
    def __init__(self, returncode: int, stdout: str = '', stderr: str = ''):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def test_run_cmd_returns_output(monkeypatch) -> None:
    monkeypatch.setattr(
        'vmdisk.util.subprocess.run', lambda cmd, **kw: _Proc(0, 'image: x\n')
    )
    res = run_cmd(['qemu-img', 'info', 'x'])
    assert res == CmdResult(0, 'image: x\n', '')


def test_run_cmd_failure_message(monkeypatch) -> None:
    monkeypatch.setattr(
        'vmdisk.util.subprocess.run',
        lambda cmd, **kw: _Proc(1, '', "Could not open 'a b.qcow2'\n"),
    )
    with pytest.raises(CmdError) as info:
        run_cmd(['qemu-img', 'resize', 'a b.qcow2', '1G'])
    assert str(info.value) == (
        "qemu-img resize 'a b.qcow2' 1G exited with code 1: "
        "Could not open 'a b.qcow2'"
    )
    assert info.value.result.code == 1
    assert run_cmd(['false'], check=False).code == 1


def test_run_cmd_failure_without_output(monkeypatch) -> None:
    monkeypatch.setattr('vmdisk.util.subprocess.run', lambda cmd, **kw: _Proc(3))
    with pytest.raises(CmdError, match=r'^cp -f -- a b exited with code 3$'):
        run_cmd(['cp', '-f', '--', 'a', 'b'])


@pytest.mark.parametrize('euid,expected', [(1000, ['sudo', '-n', 'mv']), (0, ['mv'])])
def test_run_cmd_sudo_prefix(monkeypatch, euid, expected) -> None:
    calls = []
    monkeypatch.setattr('vmdisk.util.os.geteuid', lambda: euid)
    monkeypatch.setattr(
        'vmdisk.util.subprocess.run',
        lambda cmd, **kw: (calls.append(cmd) or _Proc(0)),
    )
    run_cmd(['mv', 'a', 'b'], sudo=True)
    assert calls[0][: len(expected)] == expected


def test_join_path() -> None:
    assert join_path('', 'target-0') == 'target-0'
    assert join_path('output', 'target-0') == 'output/target-0'
