"""Host tool checks for the commands the local driver shells out to."""

from __future__ import annotations

from .util import which

REQUIRED_CMDS = ['qemu-img', 'cp', 'mv']
OPTIONAL_CMDS = ['sudo']


def check_commands(qemu_img_path: str = 'qemu-img') -> tuple[list[str], list[str]]:
    required = [qemu_img_path if c == 'qemu-img' else c for c in REQUIRED_CMDS]
    missing = [c for c in required if which(c) is None]
    missing_opt = [c for c in OPTIONAL_CMDS if which(c) is None]
    return missing, missing_opt
