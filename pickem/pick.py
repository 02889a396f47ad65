# -*- coding: utf-8 -*-

from typing import NamedTuple

from .core import log, DataError
from .team import normalize_team_name
from .game import Week, valid_week

########
# Pick #
########

class Pick(NamedTuple):
    """One participant's selection for one week (survivor) or one game within a
    week (confidence).  A `team` of `None` represents a placeholder or malformed
    record, which is distinct from no record at all.
    """
    participant_id: str
    week:           Week
    team:           str | None         # canonical team name
    confidence:     int | None = None  # confidence pools only
    game_id:        str | None = None

    @property
    def is_valid(self) -> bool:
        return isinstance(self.team, str) and bool(self.team.strip())

def to_confidence(value) -> int | None:
    """Coerce a loosely-typed confidence value; anything that is not a positive
    integer is treated as missing
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        conf = int(value)
    except (TypeError, ValueError):
        return None
    if conf != value and str(conf) != str(value).strip():
        return None
    return conf if conf > 0 else None

def make_pick(participant_id: str, week: Week, team: str | None,
              confidence=None, game_id: str | None = None) -> Pick:
    """Build a `Pick` from external values.  Team name is normalized, and blank
    team or bad confidence values become `None` (to be dealt with by the pool
    logic); only a bad `week` is considered an error here.

    :raises DataError: if `week` is not a valid week number
    """
    if not valid_week(week):
        raise DataError(f"Bad week value '{week}' for participant '{participant_id}'")
    if isinstance(team, str) and team.strip():
        team = normalize_team_name(team)
    else:
        if team is not None:
            log.debug(f"Blank team for participant '{participant_id}', week {week}")
        team = None
    return Pick(str(participant_id), week, team, to_confidence(confidence),
                str(game_id) if game_id is not None else None)

def parse_pick_history(participant_id: str, history: str, start_week: Week = 1) -> list[Pick]:
    """Convert a comma-joined pick history string (one team per week, starting
    at `start_week`) into a list of survivor picks.  Entries are trimmed, and
    blank entries are returned as placeholder picks (`team` of `None`).
    """
    if not history or not history.strip():
        return []
    picks = []
    for idx, entry in enumerate(history.split(',')):
        picks.append(make_pick(participant_id, start_week + idx, entry))
    return picks
