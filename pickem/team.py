#!/usr/bin/env python
# -*- coding: utf-8 -*-

import sys
from typing import NamedTuple

import regex as re

from .utils import parse_argv
from .core import cfg, ConfigError

#################
# Team metadata #
#################

TEAMS_KEY = 'teams'

TEAMS = cfg.config(TEAMS_KEY)
if not TEAMS:
    raise ConfigError(f"'{TEAMS_KEY}' not found in config file")

class TeamInfo(NamedTuple):
    """Static metadata for a currently active team; `full_name` is the canonical
    team identity used everywhere downstream of normalization
    """
    code:      str
    name:      str
    full_name: str
    conf:      str
    div:       str

def alias_key(value: str) -> str:
    """Lookup key for alias matching (case and whitespace insensitive)
    """
    return re.sub(r'\s+', ' ', value.strip()).casefold()

# mapping from alias key (see above) to team code
TEAM_ALIAS = {}
TEAM_INFO  = {}
for code, info in TEAMS.items():
    for field in ('name', 'full_name', 'conf', 'div'):
        if not info.get(field):
            raise ConfigError(f"'{field}' not found for team '{code}'")
    TEAM_INFO[code] = TeamInfo(code, info['name'], info['full_name'], info['conf'], info['div'])
    names = [code, info['name'], info['full_name']] + (info.get('aliases') or [])
    for name in names:
        key = alias_key(str(name))
        if TEAM_ALIAS.get(key, code) != code:
            raise ConfigError(f"Alias '{name}' specified for both '{TEAM_ALIAS[key]}' and '{code}'")
        TEAM_ALIAS[key] = code

#################
# Normalization #
#################

def team_code(raw: str) -> str | None:
    """Return the team code for a raw team string, or `None` if not recognized
    """
    if not isinstance(raw, str):
        return None
    return TEAM_ALIAS.get(alias_key(raw))

def normalize_team_name(raw: str) -> str:
    """Map a raw team string (from pick data or game results) to the canonical
    full team name.  Unrecognized names are returned as is (trimmed), so that
    they surface downstream as "team not found" rather than being dropped.
    """
    code = team_code(raw)
    if code is None:
        return raw.strip() if isinstance(raw, str) else raw
    return TEAM_INFO[code].full_name

def is_known_team(raw: str) -> bool:
    return team_code(raw) is not None

def get_team_info(raw: str) -> TeamInfo | None:
    code = team_code(raw)
    return TEAM_INFO[code] if code else None

########
# Main #
########

def normalize(*names: str) -> int:
    """Print canonical name for each of the specified raw names
    """
    unknown = 0
    for name in names:
        canonical = normalize_team_name(str(name))
        if not is_known_team(canonical):
            unknown += 1
            canonical += " (not found)"
        print(f"{name}\t{canonical}")
    return 1 if unknown else 0

def list_teams() -> int:
    for info in TEAM_INFO.values():
        print(f"{info.code}\t{info.full_name}\t{info.conf} {info.div}")
    return 0

def main() -> int:
    """Built-in driver to invoke various utility functions for the module

    Usage: team.py <util_func> [<args> ...]

    Functions/usage:
      - normalize <name> [<name> ...]
      - list_teams
    """
    if len(sys.argv) < 2:
        print(f"Utility function not specified", file=sys.stderr)
        return -1
    elif sys.argv[1] not in ('normalize', 'list_teams'):
        print(f"Unknown utility function '{sys.argv[1]}'", file=sys.stderr)
        return -1

    util_func = globals()[sys.argv[1]]
    # team names are passed through uncast (e.g. "NO" is not a boolean)
    if util_func is normalize:
        return normalize(*sys.argv[2:])
    args, kwargs = parse_argv(sys.argv[2:])

    return util_func(*args, **kwargs)

if __name__ == '__main__':
    sys.exit(main())
