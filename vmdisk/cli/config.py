"""Config file commands."""

from __future__ import annotations

import sys

import scriptconfig as scfg

from ..config import VMDiskConfig, dump_toml, save
from ._common import _BaseCommand, _cfg_path, _load_cfg_with_path


class InitCLI(_BaseCommand):
    """Write a config file with default disk settings."""

    vm_name = scfg.Value('', help='VM name used for target disk names.')
    force = scfg.Value(
        False, isflag=True, help='Overwrite an existing config file.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        path = _cfg_path(args.config)
        if path.exists() and not args.force:
            print(f'Config already exists: {path}', file=sys.stderr)
            print('Use --force to overwrite it.', file=sys.stderr)
            return 2
        cfg = VMDiskConfig()
        vm_name = str(args.vm_name or '').strip()
        if vm_name:
            cfg.output.vm_name = vm_name
        path.parent.mkdir(parents=True, exist_ok=True)
        save(path, cfg)
        print(f'Wrote config: {path}')
        return 0


class ConfigShowCLI(_BaseCommand):
    """Show the resolved config with paths expanded."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        cfg, path = _load_cfg_with_path(args.config)
        print(f'# Config: {path}')
        print(dump_toml(cfg), end='')
        return 0


class ConfigModalCLI(scfg.ModalCLI):
    """Create and inspect vmdisk config files."""

    init = InitCLI
    show = ConfigShowCLI
