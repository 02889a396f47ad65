# -*- coding: utf-8 -*-

import os.path
from collections.abc import Iterable

import regex as re
import yaml

##########
# Config #
##########

class Config:
    """Manages YAML configuration files; sections from files loaded later are
    merged into (and override) sections of the same name loaded earlier
    """
    config_dir: str
    files:      list[str]
    profile:    dict

    def __init__(self, files: Iterable[str] | str, config_dir: str):
        if isinstance(files, str):
            files = files.split(',')
        self.config_dir = config_dir
        self.files      = []
        self.profile    = {}
        for file in files:
            self.load(file)

    def load(self, file: str) -> None:
        """Load an additional config file (relative to `config_dir`, unless an
        absolute path is given); loading the same file twice is a no-op
        """
        path = os.path.join(self.config_dir, file)
        if path in self.files:
            return
        with open(path) as f:
            cfg = yaml.safe_load(f) or {}
        for section, value in cfg.items():
            if isinstance(value, dict) and isinstance(self.profile.get(section), dict):
                self.profile[section] |= value
            else:
                self.profile[section] = value
        self.files.append(path)

    def config(self, section: str) -> dict | None:
        """Return the specified section of the merged config (or `None`)
        """
        return self.profile.get(section)

##############
# parse_argv #
##############

def typecast(value: str) -> str | int | float | bool | None:
    """Convert a command line string to int, float, bool, or None, as
    appropriate (otherwise returned as is)
    """
    if re.fullmatch(r'-?\d+', value):
        return int(value)
    if re.fullmatch(r'-?\d+\.\d*', value):
        return float(value)
    if value.lower() in ('true', 't', 'yes', 'y'):
        return True
    if value.lower() in ('false', 'f', 'no', 'n'):
        return False
    if value.lower() in ('null', 'none'):
        return None
    return value

def parse_argv(argv: list[str]) -> tuple[list, dict]:
    """Takes a list of arguments (typically a slice of sys.argv), and converts
    them into a positional argument list and a dict of `key=value` arguments
    """
    args = []
    kwargs = {}
    for arg in argv:
        if '=' in arg:
            (key, value) = arg.split('=', 1)
            kwargs[key] = typecast(value)
        else:
            args.append(typecast(arg))
    return args, kwargs
