# -*- coding: utf-8 -*-

from typing import NamedTuple
from enum import Enum

from .core import ConfigError

############
# PoolType #
############

class PoolType(Enum):
    SURVIVOR   = 'survivor'
    CONFIDENCE = 'confidence'

#########
# Rules #
#########

class SurvivorRules(NamedTuple):
    """Elimination rules for survivor pools (house rules vary, so these are
    configurable per pool)
    """
    duplicate_team_eliminates: bool = True  # each team usable once per season
    tie_survives:              bool = True
    no_pick_eliminates:        bool = True  # no grace period

class ConfidenceRules(NamedTuple):
    """Scoring rules for confidence pools
    """
    tie_credit: bool = True  # all picks in a tied game get their points

PoolRules = SurvivorRules | ConfidenceRules

RULES_CLASS = {PoolType.SURVIVOR:   SurvivorRules,
               PoolType.CONFIDENCE: ConfidenceRules}

def rules_from_config(pool_type: PoolType | str, params: dict | None) -> PoolRules:
    """Build rules for the specified pool type from a config file `rules` entry;
    unspecified rules take the class defaults.
    """
    try:
        pool_type = PoolType(pool_type)
    except ValueError:
        raise ConfigError(f"Unknown pool type '{pool_type}'") from None
    rules_class = RULES_CLASS[pool_type]
    params = params or {}
    for key, value in params.items():
        if key not in rules_class._fields:
            raise ConfigError(f"Unknown rule '{key}' for {pool_type.value} pool")
        if not isinstance(value, bool):
            raise ConfigError(f"Rule '{key}' must be true or false (got '{value}')")
    return rules_class(**params)
