from __future__ import annotations

from ..host import check_commands
from ._common import _BaseCommand, _cfg_path, _load_cfg


class DoctorCLI(_BaseCommand):
    """Check that qemu-img and the file tools the driver uses are installed."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        qemu_img_path = 'qemu-img'
        if args.config is not None or _cfg_path(None).exists():
            qemu_img_path = _load_cfg(args.config).driver.qemu_img_path
        missing, missing_opt = check_commands(qemu_img_path)
        if missing:
            print('❌ Missing required commands:', ', '.join(missing))
            print('💡 On Debian/Ubuntu install the qemu-utils package.')
            return 2
        if missing_opt:
            print('➖ Missing optional commands:', ', '.join(missing_opt))
        print('✅ Required host commands are present.')
        return 0
