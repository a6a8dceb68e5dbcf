from __future__ import annotations

import pytest

from vmdisk.driver import Driver


class DriverMock(Driver):
    """Records driver calls verbatim, flattened in call order.

    ``fail_on`` is the 0-based index of the call (qemu-img, copy or move) that
    raises instead of succeeding.
    """

    def __init__(self, fail_on: int | None = None):
        self.fail_on = fail_on
        self.calls: list[tuple[str, list[str]]] = []
        self.qemu_img_calls: list[str] = []
        self.copy_calls: list[str] = []
        self.move_calls: list[str] = []

    def _record(self, name: str, args: list[str]) -> None:
        index = len(self.calls)
        self.calls.append((name, args))
        if self.fail_on is not None and index == self.fail_on:
            raise RuntimeError(f'{name} failed')

    def qemu_img(self, args) -> None:
        args = list(args)
        self.qemu_img_calls.extend(args)
        self._record('qemu_img', args)

    def copy(self, source: str, target: str) -> None:
        self.copy_calls.extend([source, target])
        self._record('copy', [source, target])

    def move(self, source: str, target: str) -> None:
        self.move_calls.extend([source, target])
        self._record('move', [source, target])


@pytest.fixture
def driver() -> DriverMock:
    return DriverMock()


@pytest.fixture
def make_driver():
    return DriverMock
