"""Driver abstraction over qemu-img and the file operations disk steps need."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from loguru import logger

from .util import run_cmd, shell_join

log = logger


class Driver(ABC):
    """Capabilities the disk steps consume. Each call raises on failure."""

    @abstractmethod
    def qemu_img(self, args: Sequence[str]) -> None:
        """Run one qemu-img invocation with the given arguments."""

    @abstractmethod
    def copy(self, source: str, target: str) -> None:
        """Copy ``source`` byte for byte to ``target``."""

    @abstractmethod
    def move(self, source: str, target: str) -> None:
        """Rename ``source`` over ``target``."""


class QemuImgDriver(Driver):
    """Run qemu-img and coreutils on the local host."""

    def __init__(
        self,
        *,
        qemu_img_path: str = 'qemu-img',
        sudo: bool = False,
        dry_run: bool = False,
    ):
        self.qemu_img_path = qemu_img_path
        self.sudo = sudo
        self.dry_run = dry_run

    def _run(self, cmd: list[str]) -> None:
        if self.dry_run:
            log.info('DRYRUN: {}', shell_join(cmd))
            return
        run_cmd(cmd, sudo=self.sudo, check=True)

    def qemu_img_argv(self, args: Sequence[str]) -> list[str]:
        return [self.qemu_img_path, *args]

    def copy_argv(self, source: str, target: str) -> list[str]:
        return ['cp', '-f', '--', source, target]

    def move_argv(self, source: str, target: str) -> list[str]:
        return ['mv', '-f', '--', source, target]

    def qemu_img(self, args: Sequence[str]) -> None:
        self._run(self.qemu_img_argv(args))

    def copy(self, source: str, target: str) -> None:
        self._run(self.copy_argv(source, target))

    def move(self, source: str, target: str) -> None:
        self._run(self.move_argv(source, target))
