"""Subprocess execution and path helpers used by the local driver."""

from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

log = logger


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str


class CmdError(RuntimeError):
    """A command exited non-zero; the message ends with its stderr."""

    def __init__(self, cmd: Sequence[str], result: CmdResult):
        self.cmd = list(cmd)
        self.result = result
        msg = f'{shell_join(self.cmd)} exited with code {result.code}'
        detail = result.stderr.strip() or result.stdout.strip()
        super().__init__(f'{msg}: {detail}' if detail else msg)


def shell_join(cmd: Sequence[str]) -> str:
    return ' '.join(shlex.quote(c) for c in cmd)


def run_cmd(
    cmd: Sequence[str], *, sudo: bool = False, check: bool = True
) -> CmdResult:
    argv = list(cmd)
    if sudo and os.geteuid() != 0:
        # -n: never prompt, fail instead.
        argv = ['sudo', '-n', *argv]
    log.opt(depth=1).debug('RUN: {}', shell_join(argv))
    p = subprocess.run(argv, capture_output=True, text=True)
    res = CmdResult(p.returncode, p.stdout or '', p.stderr or '')
    if p.returncode != 0:
        log.opt(depth=1).log(
            'ERROR' if check else 'DEBUG',
            'Command failed code={} cmd={} stderr={}',
            p.returncode,
            shell_join(argv),
            res.stderr.strip(),
        )
        if check:
            raise CmdError(argv, res)
    return res


def which(cmd: str) -> Optional[str]:
    from shutil import which as _which

    return _which(cmd)


def expand(path: str) -> str:
    return os.path.expandvars(os.path.expanduser(path))


def join_path(directory: str, name: str) -> str:
    """Join like ``filepath.Join``: an empty directory leaves ``name`` bare."""
    if not directory:
        return name
    return str(Path(directory) / name)
